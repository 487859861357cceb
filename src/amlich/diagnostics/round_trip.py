from __future__ import annotations

import argparse
import random
from datetime import date, timedelta
from typing import List

import amlich


def parse_date(s: str) -> date:
    y, m, d = s.split("-")
    return date(int(y), int(m), int(d))


def random_date(start: date, end: date) -> date:
    span = (end - start).days
    return start + timedelta(days=random.randint(0, span))


def parse_engines(s: str) -> List[str]:
    return [x.strip() for x in s.split(",") if x.strip()]


def roundtrip_test(engine: str, N: int, start: date, end: date, seed: int, *, max_failures: int) -> int:
    """solar -> lunar -> solar on N random dates; returns the failure count."""
    random.seed(seed)
    eng = amlich.get_engine(engine)
    failures = 0

    for _ in range(N):
        d0 = random_date(start, end)
        t = eng.from_solar(d0.day, d0.month, d0.year)
        back = eng.to_solar(t.day, t.month, t.year, t.is_leap_month)
        if back != d0:
            failures += 1
            print("\nFAIL")
            print("engine:", engine)
            print("d0:", d0)
            print("lunar:", t)
            print("back:", back)
            print("day_info(debug=True):", amlich.day_info(d0, engine=engine, debug=True))
            if failures >= max_failures:
                return failures

    return failures


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Random round-trip tests: solar -> lunar -> solar.")
    p.add_argument("--engines", type=str, default="vietnam,china", help="Comma-separated engine list.")
    p.add_argument("--N", type=int, default=2000, help="Trials per engine.")
    p.add_argument("--start", type=str, default="1801-01-01", help="Start date YYYY-MM-DD.")
    p.add_argument("--end", type=str, default="2199-10-31", help="End date YYYY-MM-DD.")
    p.add_argument("--seed", type=int, default=123, help="RNG seed.")
    p.add_argument("--max-failures", type=int, default=5, help="Stop after this many failures per engine.")
    args = p.parse_args(argv)

    start, end = parse_date(args.start), parse_date(args.end)
    total = 0
    for engine in parse_engines(args.engines):
        n = roundtrip_test(engine, args.N, start, end, args.seed, max_failures=args.max_failures)
        print(f"{engine}: {n} failures / {args.N}")
        total += n
    return 1 if total else 0


if __name__ == "__main__":
    raise SystemExit(main())
