"""
Plotting and export of a constructed dial: SVG drawing of the plate and CSV
tables of every curve in plate (u, v) coordinates.
"""
import logging
import os
from typing import List

import numpy as np
import pandas as pd
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from sundials.dial import Dial
from sundials.timebase import day_to_date_string, minutes_to_clock_string

logger = logging.getLogger(__name__)


def _uv(dial: Dial, points: List[np.ndarray]) -> np.ndarray:
    return np.array([dial.plate.project_uv(P) for P in points])


def _is_degenerate(points: List[np.ndarray]) -> bool:
    return all(np.array_equal(p, points[0]) for p in points)


def curves_to_frame(dial: Dial) -> pd.DataFrame:
    """One row per curve point: kind, label, index, u, v and 3-D x, y, z."""
    rows = []

    def add(kind: str, label: str, points: List[np.ndarray]):
        for i, P in enumerate(points):
            u, v = dial.plate.project_uv(P)
            rows.append({"kind": kind, "label": label, "index": i, "u": u, "v": v,
                         "x": P[0], "y": P[1], "z": P[2]})

    for minutes, curve in dial.hour_curves.items():
        add("hour", minutes_to_clock_string(minutes), curve)
    for dl in dial.date_curves:
        add("date", dl["label"], dl["points"])
    for minutes, (foot, end) in dial.style_lines.items():
        add("style", minutes_to_clock_string(minutes), [foot, end])

    return pd.DataFrame(rows, columns=["kind", "label", "index", "u", "v", "x", "y", "z"])


def plot_and_export(dial: Dial, outdir: str, prefix: str = "sundial") -> str:
    """Write <prefix>.svg and <prefix>_curves.csv to outdir; returns the SVG path."""
    os.makedirs(outdir, exist_ok=True)
    options = dial.options
    extent = options.radius

    fig, ax = plt.subplots(figsize=(8.5, 8.5))
    ax.axhline(0, linewidth=0.5, color="grey")
    ax.axvline(0, linewidth=0.5, color="grey")

    for minutes, curve in dial.hour_curves.items():
        if _is_degenerate(curve):
            continue
        UV = _uv(dial, curve)
        ax.plot(UV[:, 0], UV[:, 1], linewidth=1)
        ax.text(UV[0, 0], UV[0, 1], minutes_to_clock_string(minutes), fontsize=7, ha='left', va='bottom')

    for dl in dial.date_curves:
        if _is_degenerate(dl["points"]):
            continue
        UV = _uv(dial, dl["points"])
        ax.plot(UV[:, 0], UV[:, 1], linewidth=0.8, linestyle="--")
        idx = np.argmax(UV[:, 0])
        ax.text(UV[idx, 0], UV[idx, 1], f"{dl['label']} ({day_to_date_string(dl['day'])})",
                fontsize=7, ha='left', va='bottom')

    for foot, end in dial.style_lines.values():
        UV = _uv(dial, [foot, end])
        ax.plot(UV[:, 0], UV[:, 1], linewidth=0.6, linestyle=":", color="black")

    if dial.equinox_noon is not None:
        u, v = dial.plate.project_uv(dial.equinox_noon)
        ax.plot([u], [v], marker='x', markersize=4)

    # style foot
    ax.plot([0], [0], marker='o', markersize=3)

    ax.set_xlim(-extent, extent)
    ax.set_ylim(-extent, extent)
    ax.set_aspect('equal', adjustable='box')
    ax.set_xlabel("u (right along plate)")
    ax.set_ylabel("v (up along plate)")
    ax.set_title(
        f"Sundial ({options.time_system.value})  |  lat {options.latitude}°, lon {options.longitude}°, "
        f"slant {options.slant}°, facing {options.rotation}°"
    )
    ax.grid(True)

    svg_path = os.path.join(outdir, f"{prefix}.svg")
    fig.savefig(svg_path, format="svg", bbox_inches="tight")
    plt.close(fig)
    logger.info("wrote %s", svg_path)

    csv_path = os.path.join(outdir, f"{prefix}_curves.csv")
    curves_to_frame(dial).to_csv(csv_path, index=False)
    logger.info("wrote %s", csv_path)

    return svg_path
