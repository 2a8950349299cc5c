"""Preview plots for layout runs. These are wireframes, not the production renderer."""

from __future__ import annotations

import itertools
import logging
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402
from matplotlib.patches import Rectangle  # noqa: E402

from resobox.engine.core import LayoutFrame  # noqa: E402

log = logging.getLogger(__name__)

POSITIVE_COLOR = "#24ff66"
NEGATIVE_COLOR = "#303238"
LABEL_COLOR = "#808080"


def plot_layout(frame: LayoutFrame, out_path: str | Path) -> None:
    """Draw the frame's boxes as a 2D or 3D wireframe and save as PNG.

    Parameters
    ----------
    frame : LayoutFrame
        Output of :func:`resobox.engine.core.compose_frame`.
    out_path : str | Path
        Destination file path (e.g. ``plots/layout.png``).
    """
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    if frame.projection == "3d":
        fig = plt.figure(figsize=(7, 7))
        ax = fig.add_subplot(projection="3d")
        _draw_cubes(ax, frame)
    else:
        fig, ax = plt.subplots(figsize=(7, 7))
        _draw_squares(ax, frame)

    ax.set_title(f"{frame.instrument or '?'}  {frame.timestamp}  ({len(frame)} boxes)")
    fig.tight_layout()
    fig.savefig(out_path, dpi=100)
    plt.close(fig)

    log.info("Saved layout plot → %s", out_path)


def _draw_squares(ax, frame: LayoutFrame) -> None:
    extent = frame.nodes[0].node.size if frame.nodes else 1.0
    for item in frame.nodes:
        node = item.node
        x, y = node.position
        color = POSITIVE_COLOR if node.is_positive else NEGATIVE_COLOR
        ax.add_patch(
            Rectangle((x, y), node.size, node.size, facecolor=color, edgecolor="black", linewidth=1)
        )
        if item.high_label:
            ax.text(x + node.size, y, item.high_label, fontsize=6, color=LABEL_COLOR,
                    ha="left", va="bottom")
        if item.low_label:
            ax.text(x + node.size, y + node.size, item.low_label, fontsize=6, color=LABEL_COLOR,
                    ha="left", va="top")

    ax.set_xlim(0, extent * 1.25)
    ax.set_ylim(extent, 0)  # screen space: y grows downwards
    ax.set_aspect("equal")
    ax.set_facecolor("black")


def _draw_cubes(ax, frame: LayoutFrame) -> None:
    for item in frame.nodes:
        node = item.node
        cx, cy, cz = node.position
        h = node.size / 2
        color = POSITIVE_COLOR if node.is_positive else NEGATIVE_COLOR
        corners = list(itertools.product((-h, h), repeat=3))
        for a, b in itertools.combinations(corners, 2):
            # Cube edges join corners that differ along exactly one axis.
            if sum(p != q for p, q in zip(a, b)) != 1:
                continue
            # Matplotlib's 3D axes are z-up; the layout is y-up.
            ax.plot(
                [cx + a[0], cx + b[0]],
                [cz + a[2], cz + b[2]],
                [cy + a[1], cy + b[1]],
                color=color,
                linewidth=0.8,
            )
    ax.set_xlabel("x")
    ax.set_ylabel("z")
    ax.set_zlabel("y")


def plot_line_series(df: pd.DataFrame, out_path: str | Path) -> None:
    """Plot the normalised high/low polylines and save as PNG.

    Parameters
    ----------
    df : pd.DataFrame
        Output of :func:`resobox.layout.line_chart.line_series`.
    out_path : str | Path
        Destination file path (e.g. ``plots/line.png``).
    """
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(10, 4))
    ax.plot(df["x"], df["high_y"], linewidth=1.5, color="#7eb8da", label="high")
    ax.plot(df["x"], df["low_y"], linewidth=1.5, color="#9b8dc4", label="low")
    ax.set_ylim(1, 0)
    ax.legend(loc="upper right")
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(out_path, dpi=100)
    plt.close(fig)

    log.info("Saved line plot → %s", out_path)
