"""Chart helpers for the calendar view."""

from __future__ import annotations

from io import BytesIO
from typing import Mapping

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.figure import Figure

SUMMARY_LABELS = ("Done", "Missed", "Pending")
SUMMARY_COLORS = ("#22c55e", "#ef4444", "#a78bfa")


def build_summary_chart(counts: Mapping[str, int]) -> Figure:
    """Pie chart of done/missed/pending day states across all habits in view."""

    sizes = [int(counts.get(label.lower(), 0) or 0) for label in SUMMARY_LABELS]
    fig, ax = plt.subplots(figsize=(4, 4))

    if sum(sizes) == 0:
        ax.text(0.5, 0.5, "No habits yet", ha="center", va="center", fontsize=12, color="#999")
        ax.axis("off")
        return fig

    wedges, _texts, _autotexts = ax.pie(
        sizes,
        labels=None,
        colors=SUMMARY_COLORS,
        autopct=lambda pct: f"{pct:.0f}%" if pct > 4 else "",
        startangle=90,
        wedgeprops=dict(edgecolor="white", linewidth=1.5),
    )
    ax.legend(
        wedges,
        [f"{label} ({size})" for label, size in zip(SUMMARY_LABELS, sizes)],
        loc="lower center",
        bbox_to_anchor=(0.5, -0.12),
        ncol=3,
        frameon=False,
        fontsize=9,
    )
    ax.axis("equal")
    return fig


def summary_chart_png(counts: Mapping[str, int]) -> bytes:
    """Render the summary chart and return PNG bytes."""

    fig = build_summary_chart(counts)
    buffer = BytesIO()
    try:
        fig.savefig(buffer, format="png", bbox_inches="tight", dpi=100)
    finally:
        plt.close(fig)
    return buffer.getvalue()


__all__ = ["build_summary_chart", "summary_chart_png"]
