from __future__ import annotations

from datetime import timedelta
import argparse

import amlich
from amlich.cache import LunarDateCache


WEEKDAYS = ("Mo", "Tu", "We", "Th", "Fr", "Sa", "Su")


def dow_header(first_weekday: int = 0) -> str:
    names = [WEEKDAYS[(first_weekday + i) % 7] for i in range(7)]
    return "     ".join(names)


def cell(top: str, bot: str, w: int = 6) -> tuple[str, str]:
    return (top[:w].ljust(w), bot[:w].ljust(w))


def print_grid(title: str, weeks: list[list[tuple[str, str]]], first_weekday: int = 0) -> None:
    header = dow_header(first_weekday)
    print(title)
    print(header)
    print("-" * len(header))
    for wk in weeks:
        print(" ".join(c[0] for c in wk))
        print(" ".join(c[1] for c in wk))
    print()


def gregorian_month_calendar(engine: str, gy: int, gm: int, *, first_weekday: int = 0) -> None:
    """Solar month with lunar "d/m" labels; '*' marks vegetarian days, '?' unconvertible ones."""
    cache = LunarDateCache(amlich.get_engine(engine))
    weeks = []
    for wk in amlich.month_grid(gy, gm, cache=cache, first_weekday=first_weekday):
        row = []
        for c in wk:
            if not c.in_month:
                row.append(cell("", ""))
                continue
            top = f"{c.date.day:2d}" + ("*" if c.vegetarian else "")
            if c.lunar is None:
                bot = "?"
            else:
                bot = c.label + ("L" if c.lunar.is_leap_month else "")
            row.append(cell(top, bot))
        weeks.append(row)
    print_grid(f"{engine} solar month  {gy}-{gm:02d}", weeks, first_weekday)


def lunar_month_calendar(engine: str, Y: int, M: int, is_leap: bool) -> None:
    d0, d1 = amlich.month_bounds(M, Y, is_leap_month=is_leap, engine=engine)

    weeks: list[list[tuple[str, str]]] = []
    wk: list[tuple[str, str]] = []
    for _ in range(d0.weekday()):  # Monday=0
        wk.append(cell("", ""))
    d = d0
    lunar_day = 1
    while d <= d1:
        mark = "*" if amlich.is_vegetarian_lunar_day(lunar_day) else ""
        wk.append(cell(f"{lunar_day:2d}{mark}", f"{d.month:02d}-{d.day:02d}"))
        if len(wk) == 7:
            weeks.append(wk)
            wk = []
        d += timedelta(days=1)
        lunar_day += 1
    if wk:
        while len(wk) < 7:
            wk.append(cell("", ""))
        weeks.append(wk)

    leap_tag = "L" if is_leap else ""
    print_grid(f"{engine} lunar month  Y={Y}  M={M}{leap_tag}   ({d0} .. {d1})", weeks)


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print a solar-month calendar with lunar labels and/or a lunar-month calendar."
    )
    p.add_argument("--engine", default="vietnam", help="vietnam|china (default: vietnam)")
    p.add_argument("--greg", nargs=2, type=int, metavar=("GY", "GM"),
                   help="Solar month to print: GY GM (e.g. 2025 10)")
    p.add_argument("--lunar", nargs=2, type=int, metavar=("Y", "M"),
                   help="Lunar month to print: Y M (e.g. 2025 6)")
    p.add_argument("--leap", action="store_true", help="Print the leap instance of the lunar month.")
    p.add_argument("--first-weekday", type=int, default=0, help="0=Monday .. 6=Sunday")
    args = p.parse_args(argv)

    if not args.lunar and not args.greg:
        gregorian_month_calendar(args.engine, gy=2025, gm=10, first_weekday=args.first_weekday)
        return 0

    if args.greg:
        gy, gm = args.greg
        gregorian_month_calendar(args.engine, gy=gy, gm=gm, first_weekday=args.first_weekday)

    if args.lunar:
        Y, M = args.lunar
        lunar_month_calendar(args.engine, Y=Y, M=M, is_leap=args.leap)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
