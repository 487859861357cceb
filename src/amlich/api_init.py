"""Registry and default cache bootstrap (import side-effect)."""
from .api import get_engine, set_default_cache, set_registry
from .bootstrap import build_registry
from .cache import LunarDateCache
from .engines.specs import DEFAULT_ENGINE

set_registry(build_registry())
set_default_cache(LunarDateCache(get_engine(DEFAULT_ENGINE)))
