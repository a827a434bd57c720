"""Bar chart of a payoff table: bars, point markers and a PnL label per spot."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from matplotlib.figure import Figure

from ..analytics.summary import StrategySummary
from ..data.schema import PNL_COL, PROFITABLE_COL, SPOT_COL

# (loss, profit)
FILL_COLORS = ("#FFCCCC", "powderblue")
STROKE_COLORS = ("#CD1076", "darkslateblue")
CAPTION_COLOR = "#C4C4C4"
DEFAULT_DPI = 140


def _ensure_dir(output_dir) -> Path:
    """Create output directory if missing and return Path."""
    path = Path(output_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def _label(value: float) -> str:
    # Cents kept, trailing zeros dropped; + 0.0 turns -0.0 into 0.0
    return f"{value + 0.0:.2f}".rstrip("0").rstrip(".")


def render(
    table: pd.DataFrame,
    title: str,
    subtitle: str,
    axis_labels: Dict[str, str],
    caption: str,
    label_nudge: float = -0.8,
) -> Figure:
    """
    Draw the payoff table; loss and profit rows get distinct fill and stroke colors.

    The figure is returned open. Callers save and close it.
    """
    spots = table[SPOT_COL].to_numpy(dtype=float)
    pnl = table[PNL_COL].to_numpy(dtype=float)
    profitable = table[PROFITABLE_COL].to_numpy(dtype=bool)

    fills = np.where(profitable, FILL_COLORS[1], FILL_COLORS[0])
    strokes = np.where(profitable, STROKE_COLORS[1], STROKE_COLORS[0])

    width = max(8.0, min(0.35 * len(table), 24.0))
    fig, ax = plt.subplots(figsize=(width, 6))
    ax.bar(spots, pnl, width=0.9, color=list(fills))
    ax.scatter(spots, pnl, c=list(strokes), s=30, zorder=3)
    for x, y, color in zip(spots, pnl, strokes):
        ax.text(x, y + label_nudge, _label(y), ha="center", va="center", fontsize=7, color=color)

    ax.axhline(0, color="black", linewidth=0.8)
    ax.set_title(subtitle, fontsize=10)
    ax.set_xlabel(axis_labels.get("x", ""))
    ax.set_ylabel(axis_labels.get("y", ""))
    ax.grid(alpha=0.2)
    fig.suptitle(title)
    fig.text(0.99, 0.01, caption, ha="right", va="bottom", fontsize=8, color=CAPTION_COLOR)
    fig.tight_layout()
    return fig


@dataclass
class PayoffChart:
    figure: Figure
    table: pd.DataFrame
    summary: Optional[StrategySummary] = None

    def save(self, file_path, dpi: int = DEFAULT_DPI) -> Path:
        path = Path(file_path)
        _ensure_dir(path.parent)
        self.figure.savefig(path, dpi=dpi)
        return path

    def close(self) -> None:
        plt.close(self.figure)
