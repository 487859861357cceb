from __future__ import annotations

from datetime import date
import argparse
from typing import List, Tuple

import amlich


DEFAULT_ENGINES: List[Tuple[str, str]] = [
    ("Vietnam", "vietnam"),
    ("China", "china"),
]


def mmdd(d: date) -> str:
    return f"{d.month:02d}-{d.day:02d}"


def parse_engines(arg: str) -> List[Tuple[str, str]]:
    """
    Parse engine list from CLI.
    Example:
      --engines "Vietnam=vietnam,China=china"
    If you pass just engines, names will be capitalized engines:
      --engines "vietnam,china"
    """
    items = [x.strip() for x in arg.split(",") if x.strip()]
    out: List[Tuple[str, str]] = []
    for it in items:
        if "=" in it:
            name, eng = it.split("=", 1)
            out.append((name.strip(), eng.strip()))
        else:
            out.append((it.capitalize(), it))
    return out


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Print the lunar New Year (Tet) date table for several engines.")
    p.add_argument("--from-year", type=int, default=2000)
    p.add_argument("--to-year", type=int, default=2030)
    p.add_argument(
        "--engines",
        type=str,
        default="",
        help='Comma list like "Vietnam=vietnam,China=china" (default: both).',
    )
    p.add_argument("--dates", choices=("mmdd", "iso"), default="mmdd",
                   help="Display format in table columns (default: mmdd).")
    args = p.parse_args(argv)

    engines = parse_engines(args.engines) if args.engines else DEFAULT_ENGINES

    def fmt(d: date) -> str:
        return mmdd(d) if args.dates == "mmdd" else d.isoformat()

    Y0, Y1 = args.from_year, args.to_year
    if Y1 < Y0:
        raise SystemExit("--to-year must be >= --from-year")

    headers = ["Year"] + [name for name, _ in engines] + ["Leap"]
    colw = [5] + [max(10, len(h)) for h in headers[1:]]
    line = "  ".join(h.ljust(w) for h, w in zip(headers, colw))
    print(line)
    print("-" * len(line))

    disagreements: list[tuple[int, list[date]]] = []
    for Y in range(Y0, Y1 + 1):
        row = [str(Y).ljust(colw[0])]
        days = []
        for (_, eng), w in zip(engines, colw[1:]):
            d = amlich.new_year_day(Y, engine=eng)
            days.append(d)
            row.append(fmt(d).ljust(w))
        leap = amlich.leap_month(Y, engine=engines[0][1])
        row.append("" if leap is None else str(leap))
        print("  ".join(row))
        if len(set(days)) > 1:
            disagreements.append((Y, days))

    print("\nYears where the engines disagree:")
    if not disagreements:
        print("(none)")
        return 0
    for Y, days in disagreements:
        print(f"{Y}  " + "  ".join(f"{name}={d.isoformat()}" for (name, _), d in zip(engines, days)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
