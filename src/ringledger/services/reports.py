"""Chart geometry and rendering for pie and goal-ring views."""

from __future__ import annotations

import colorsys
import io
import math
from dataclasses import dataclass
from typing import Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402

from .aggregates import PieDatum  # noqa: E402

_HUE_STEP = 57
_START_ANGLE = -math.pi / 2


@dataclass(frozen=True, slots=True)
class PieSlice:
    label: str
    value: float
    fraction: float
    start_angle: float
    end_angle: float
    color: str


@dataclass(frozen=True, slots=True)
class RingGeometry:
    radius: float
    circumference: float
    dash_offset: float
    degrees: float


def slice_color(index: int) -> str:
    """CSS color for the ``index``-th slice; stable for a given order."""

    return f"hsl({(index * _HUE_STEP) % 360} 70% 55%)"


def _slice_rgb(index: int) -> tuple[float, float, float]:
    hue = ((index * _HUE_STEP) % 360) / 360
    return colorsys.hls_to_rgb(hue, 0.55, 0.70)


def pie_slices(data: Sequence[PieDatum]) -> list[PieSlice]:
    """Lay slices clockwise from 12 o'clock in dataset order."""

    slices: list[PieSlice] = []
    angle = _START_ANGLE
    for index, datum in enumerate(data):
        sweep = datum.share * 2 * math.pi
        slices.append(
            PieSlice(
                label=datum.label,
                value=datum.value,
                fraction=datum.share,
                start_angle=angle,
                end_angle=angle + sweep,
                color=slice_color(index),
            )
        )
        angle += sweep
    return slices


def ring_geometry(progress: float, *, size: float = 160, stroke: float = 14) -> RingGeometry:
    """Stroke-dash parameters for a circular progress ring."""

    clamped = max(0.0, min(1.0, progress))
    radius = (size - stroke) / 2
    circumference = 2 * math.pi * radius
    return RingGeometry(
        radius=radius,
        circumference=circumference,
        dash_offset=circumference * (1 - clamped),
        degrees=round(clamped * 100) * 3.6,
    )


def build_pie_chart(data: Sequence[PieDatum], *, title: str = "By category") -> Figure:
    """Create a donut chart with a legend of amounts and percentages."""

    fig, ax = plt.subplots(figsize=(8, 6))
    values = [max(0, datum.value) for datum in data]
    total = sum(values)

    if total > 0:
        wedges, _ = ax.pie(
            values,
            labels=None,
            colors=[_slice_rgb(i) for i in range(len(values))],
            startangle=90,
            counterclock=False,
            wedgeprops=dict(width=0.45, edgecolor="white", linewidth=1.5),
        )
        ax.text(0, 0.08, "Total", ha="center", va="center", fontsize=11, color="#666")
        ax.text(
            0, -0.08, f"{total:,.0f}",
            ha="center", va="center", fontsize=18, fontweight="bold", color="#1F2937",
        )
        ax.legend(
            wedges,
            [f"{d.label}: {d.value:,.0f} ({d.share * 100:.1f}%)" for d in data],
            loc="center left",
            bbox_to_anchor=(1.02, 0.5),
            fontsize=9,
        )
        ax.axis("equal")
    else:
        ax.text(0.5, 0.5, "No data", ha="center", va="center", fontsize=14, color="#666")
        ax.axis("off")

    ax.set_title(title, fontsize=14, fontweight="bold")
    fig.tight_layout()
    return fig


def render_png(fig: Figure) -> bytes:
    """Serialize a figure to PNG bytes and release it."""

    buffer = io.BytesIO()
    try:
        fig.savefig(buffer, format="png", bbox_inches="tight", dpi=120)
    finally:
        plt.close(fig)
    return buffer.getvalue()


__all__ = [
    "PieSlice",
    "RingGeometry",
    "build_pie_chart",
    "pie_slices",
    "render_png",
    "ring_geometry",
    "slice_color",
]
