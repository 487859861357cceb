#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List, Optional

import amlich
from amlich.core.time import from_jdn
from amlich.diagnostics import need_matplotlib, need_numpy
from amlich.ephemeris.new_moons import SkyfieldNewMoons, local_day
from amlich.reference import astro_args as aa
from amlich.reference import lunar


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(
        description="Compare closed-form new moons with a skyfield/JPL ephemeris, per engine time zone."
    )
    p.add_argument("--start-year", type=int, default=1900)
    p.add_argument("--end-year", type=int, default=2100)
    p.add_argument("--engines", default="vietnam,china", help="Comma list of engines.")
    p.add_argument("--kernel", default="de421.bsp", help="JPL kernel loaded by skyfield.")
    p.add_argument("--out-png", default="", help="If set, plot the time error (minutes) to this file.")
    args = p.parse_args(argv)

    if args.end_year < args.start_year:
        raise SystemExit("--end-year must be >= --start-year")
    engines = [e.strip() for e in args.engines.split(",") if e.strip()]

    print(f"Loading {args.kernel}...")
    sky = SkyfieldNewMoons.load(args.kernel)
    truth = sky.between(args.start_year, args.end_year)
    print(f"{len(truth)} new moons in {args.start_year}..{args.end_year}")

    errors_min = []
    mismatches = {e: 0 for e in engines}
    for jd_true in truth:
        k = aa.nearest_lunation_index(jd_true)
        errors_min.append((lunar.new_moon_jd(k) - jd_true) * 1440.0)
        for name in engines:
            eng = amlich.get_engine(name)
            ours = eng.new_moon_day(k)
            ref = local_day(jd_true, eng.tz_offset_hours)
            if ours != ref:
                mismatches[name] += 1
                print(f"{name:8s} k={k:5d}  closed-form {from_jdn(ours)}  ephemeris {from_jdn(ref)}")

    worst = max((abs(e) for e in errors_min), default=0.0)
    print(f"\nmax |error| = {worst:.2f} min")
    for name, n in mismatches.items():
        print(f"{name:8s} civil-day mismatches: {n}")

    if args.out_png:
        np = need_numpy()
        plt = need_matplotlib()
        years = 2000 + (np.array(truth) - aa.J2000) / 365.25
        fig, ax = plt.subplots(figsize=(12, 3.6))
        ax.plot(years, np.array(errors_min), ".", ms=2, color="0.15")
        ax.axhline(0.0, color="0.6", lw=0.8)
        ax.set_xlabel("Gregorian year")
        ax.set_ylabel("closed-form - ephemeris (min)")
        ax.set_title("New moon time error")
        fig.tight_layout()
        fig.savefig(args.out_png, dpi=200)
        print(f"Saved: {args.out_png}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
