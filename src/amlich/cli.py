from __future__ import annotations

import argparse
import csv
import importlib
import inspect
import logging
import re
import sys
from datetime import date

from .core.errors import AmlichError
from .core.time import parse_date_key


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

logger = logging.getLogger(__name__)


def _parse_ymd(s: str) -> date:
    d, m, y = parse_date_key(s)
    return date(y, m, d)


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def cmd_day(argv: list[str]) -> int:
    import amlich
    from .attributes.registry import available_attributes

    p = argparse.ArgumentParser(prog="amlich day", description="Solar -> lunar day label")
    p.add_argument("date", help="YYYY-MM-DD")
    p.add_argument("--engine", default="vietnam")
    p.add_argument("--debug", action="store_true")
    p.add_argument("--attr", action="append", default=[], choices=available_attributes(), help="attribute name (repeatable)")
    args = p.parse_args(argv)

    info = amlich.day_info(_parse_ymd(args.date), engine=args.engine, attributes=tuple(args.attr), debug=args.debug)
    t = info.lunar
    leap_tag = " (leap)" if t.is_leap_month else ""
    veg = " vegetarian" if amlich.is_vegetarian_lunar_day(t.day) else ""
    print(f"{info.civil_date.isoformat()}  ->  {t.day}/{t.month}{leap_tag}/{t.year}{veg}")
    for k, v in (info.attributes or {}).items():
        print(f"  {k}: {v}")
    if info.debug:
        for k, v in info.debug.items():
            print(f"  [{k}] {v}")
    return 0


def cmd_to_solar(argv: list[str]) -> int:
    import amlich

    p = argparse.ArgumentParser(prog="amlich to-solar", description="Lunar -> solar date")
    p.add_argument("year", type=int)
    p.add_argument("month", type=int)
    p.add_argument("day", type=int)
    p.add_argument("--leap", action="store_true", help="the leap instance of the month")
    p.add_argument("--engine", default="vietnam")
    args = p.parse_args(argv)

    d = amlich.get_engine(args.engine).to_solar(args.day, args.month, args.year, args.leap)
    print(d.isoformat())
    return 0


def cmd_vegetarian(argv: list[str]) -> int:
    import amlich

    p = argparse.ArgumentParser(prog="amlich vegetarian", description="List vegetarian days (lunar 1st and 15th)")
    p.add_argument("year", type=int)
    p.add_argument("month", type=int, nargs="?", help="solar month; whole year if omitted")
    p.add_argument("--tz", type=int, default=7, help="UTC offset in hours (default: 7)")
    args = p.parse_args(argv)

    months = [args.month] if args.month else range(1, 13)
    for m in months:
        for d in amlich.vegetarian_days(args.year, m, args.tz):
            t = amlich.convert_solar_to_lunar(d.day, d.month, d.year, args.tz)
            leap_tag = "L" if t.is_leap_month else ""
            print(f"{d.isoformat()}  {t.label}{leap_tag}")
    return 0


def cmd_audit_csv(argv: list[str]) -> int:
    from .rules.vegetarian import audit_registrations

    p = argparse.ArgumentParser(
        prog="amlich audit-csv",
        description="Report registrations flagged vegetarian on dates that are not vegetarian days.",
    )
    p.add_argument("path", help="CSV with columns id, employee_code, registration_date, is_vegetarian")
    p.add_argument("--tz", type=int, default=7, help="UTC offset in hours (default: 7)")
    args = p.parse_args(argv)

    with open(args.path, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    logger.debug("read %d rows from %s", len(rows), args.path)

    report = audit_registrations(rows, args.tz)
    for finding in report.invalid:
        rec = finding.record
        print(f"{rec.get('id', '')}\t{rec.get('employee_code', '')}\t{rec.get('registration_date', '')}\t{finding.reason}")
    print(f"checked {report.checked} vegetarian registrations: {len(report.valid)} valid, {len(report.invalid)} invalid")
    return 1 if report.invalid else 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # Shorthand: `amlich YYYY-MM-DD ...`
    if argv and _DATE_RE.match(argv[0]):
        argv = ["day"] + list(argv)

    p = argparse.ArgumentParser(prog="amlich", description="Vietnamese lunar calendar toolkit CLI.")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("day", help="Solar -> lunar day label", add_help=False)
    sub.add_parser("to-solar", help="Lunar -> solar date", add_help=False)
    sub.add_parser("month", help="Print a solar month grid with lunar labels", add_help=False)
    sub.add_parser("new-years", help="Print the Tet date table", add_help=False)
    sub.add_parser("vegetarian", help="List vegetarian days of a year or month", add_help=False)
    sub.add_parser("audit-csv", help="Audit vegetarian flags in a registrations CSV", add_help=False)

    p_diag = sub.add_parser("diag", help="Diagnostics tools (no ephemeris required)")
    p_diag.add_argument("tool", choices=["leap-months", "round-trip"], help="Which diagnostic to run")

    p_ephem = sub.add_parser("ephem", help="Ephemeris-based diagnostics")
    p_ephem.add_argument("tool", choices=["new-moons"], help="Which ephemeris diagnostic to run")

    args, rest = p.parse_known_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.cmd == "day":
            return cmd_day(rest)

        if args.cmd == "to-solar":
            return cmd_to_solar(rest)

        if args.cmd == "month":
            greg = rest[:2]
            return _run_module_main("amlich.diagnostics.pretty_month", ["--greg", *greg, *rest[2:]])

        if args.cmd == "new-years":
            return _run_module_main("amlich.diagnostics.new_years_table", rest)

        if args.cmd == "vegetarian":
            return cmd_vegetarian(rest)

        if args.cmd == "audit-csv":
            return cmd_audit_csv(rest)

        if args.cmd == "diag":
            tool_map = {
                "leap-months": "amlich.diagnostics.leap_months",
                "round-trip": "amlich.diagnostics.round_trip",
            }
            return _run_module_main(tool_map[args.tool], rest)

        if args.cmd == "ephem":
            tool_map = {
                "new-moons": "amlich.diagnostics.ephem.new_moons",
            }
            return _run_module_main(tool_map[args.tool], rest)
    except AmlichError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
