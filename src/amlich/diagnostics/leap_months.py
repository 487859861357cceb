#!/usr/bin/env python3
from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import amlich
from amlich.diagnostics import need_matplotlib, need_numpy


@dataclass(frozen=True)
class Style:
    label: str
    engine: str
    marker: str
    size: float
    hollow: bool
    color: str = "0.15"
    lw: float = 1.2
    alpha: float = 0.95


DEFAULT_STYLES: Dict[str, Style] = {
    "vietnam": Style("Vietnam (UTC+7)", "vietnam", marker="o", size=22, hollow=False),
    "china": Style("China (UTC+8)", "china", marker="o", size=95, hollow=True),
}


def parse_engines(s: str) -> List[str]:
    out = [x.strip() for x in s.split(",") if x.strip()]
    if not (1 <= len(out) <= 3):
        raise SystemExit("--engines must contain 1 to 3 comma-separated engines")
    return out


def leap_points(engine: str, start_year: int, end_year: int) -> List[Tuple[int, int]]:
    """(lunar year, leap month number) for every leap year in range."""
    out = []
    for Y in range(start_year, end_year + 1):
        m = amlich.leap_month(Y, engine=engine)
        if m is not None:
            out.append((Y, m))
    return out


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Leap-month barcode diagram across engines.")
    p.add_argument("--start-year", type=int, default=1960)
    p.add_argument("--end-year", type=int, default=2030)
    p.add_argument("--out", default="leapmonth_barcode.png")
    p.add_argument("--title", default="Leap month pattern")
    p.add_argument("--engines", default="vietnam,china",
                   help="Comma list of 1-3 engines to plot (default: vietnam,china).")
    p.add_argument("--year-step", type=int, default=5, help="Label every k years (default: 5).")
    p.add_argument("--cell-edge", default="0.88", help="Cell border color (matplotlib gray string).")
    p.add_argument("--cell-lw", type=float, default=0.6, help="Cell border line width.")
    args = p.parse_args(argv)

    np = need_numpy()
    plt = need_matplotlib()
    from matplotlib.colors import ListedColormap

    start_year, end_year = args.start_year, args.end_year
    if end_year < start_year:
        raise SystemExit("--end-year must be >= --start-year")

    styles: List[Style] = []
    for e in parse_engines(args.engines):
        if e not in DEFAULT_STYLES:
            raise SystemExit(f"Unknown engine '{e}'. Known: {sorted(DEFAULT_STYLES.keys())}")
        styles.append(DEFAULT_STYLES[e])

    fig, ax = plt.subplots(figsize=(16, 3.6))

    x_edges = np.arange(start_year - 0.5, end_year + 1.5, 1.0)
    y_edges = np.arange(0.5, 13.5, 1.0)
    Z = np.zeros((12, end_year - start_year + 1), dtype=float)
    ax.pcolormesh(
        x_edges,
        y_edges,
        Z,
        shading="flat",
        cmap=ListedColormap(["white"]),
        vmin=0, vmax=1,
        edgecolors=args.cell_edge,
        linewidth=float(args.cell_lw),
        antialiased=True,
        zorder=0,
    )
    ax.set_xlim(start_year - 0.5, end_year + 0.5)
    ax.set_ylim(0.5, 12.5)
    ax.grid(False)
    ax.tick_params(axis="both", which="both", length=0)

    xt = list(range(start_year, end_year + 1, max(1, int(args.year_step))))
    ax.set_xticks(xt)
    ax.set_xticklabels([str(y) for y in xt])
    ax.set_xlabel("Lunar year")
    ax.set_yticks(list(range(1, 13)))
    ax.set_ylabel("Leap month")

    for st in styles:
        pts = leap_points(st.engine, start_year, end_year)
        x = np.array([y for y, _ in pts], dtype=int)
        m = np.array([mm for _, mm in pts], dtype=int)
        if st.hollow:
            ax.scatter(x, m, s=st.size, marker=st.marker, facecolors="none", edgecolors=st.color,
                       linewidths=st.lw, alpha=st.alpha, label=st.label, zorder=5)
        else:
            ax.scatter(x, m, s=st.size, marker=st.marker, c=st.color, linewidths=0.0,
                       alpha=st.alpha, label=st.label, zorder=5)

    ax.set_title(args.title)
    ax.legend(loc="center left", bbox_to_anchor=(1.01, 0.5), frameon=False)
    fig.tight_layout()
    fig.savefig(args.out, dpi=250)
    print(f"Saved: {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
