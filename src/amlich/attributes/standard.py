from __future__ import annotations
from typing import Any, Dict

from ..reference.solar import SOLAR_TERM_NAMES
from ..rules.vegetarian import is_vegetarian_lunar_day
from .registry import register_attribute

CAN = ("Giáp", "Ất", "Bính", "Đinh", "Mậu", "Kỷ", "Canh", "Tân", "Nhâm", "Quý")
CHI = ("Tý", "Sửu", "Dần", "Mão", "Thìn", "Tỵ", "Ngọ", "Mùi", "Thân", "Dậu", "Tuất", "Hợi")

def vegetarian(info, engine) -> Dict[str, Any]:
    return {"vegetarian": is_vegetarian_lunar_day(info.lunar.day)}

def weekday(info, engine) -> Dict[str, Any]:
    # 0=Mon..6=Sun, same as date.weekday()
    return {"weekday": info.jdn % 7}

def can_chi(info, engine) -> Dict[str, Any]:
    y = info.lunar.year
    return {"can_chi_year": f"{CAN[(y + 6) % 10]} {CHI[(y + 8) % 12]}"}

def solar_term(info, engine) -> Dict[str, Any]:
    d = info.civil_date
    idx = engine.solar_term(d.day, d.month, d.year)
    return {"solar_term": idx, "solar_term_name": SOLAR_TERM_NAMES[idx]}

register_attribute("vegetarian", vegetarian)
register_attribute("weekday", weekday)
register_attribute("can_chi", can_chi)
register_attribute("solar_term", solar_term)
