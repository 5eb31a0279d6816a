"""Pie chart geometry.

Turns a label -> amount mapping into ordered slices (angles in radians) for
any 2D drawing surface. Slices start at 12 o'clock (-pi/2) and run clockwise
in the mapping's iteration order; the last slice closes the circle exactly.
Nothing here draws: a zero total yields a layout with ``no_data`` set and the
caller renders its own placeholder.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

START_ANGLE = -math.pi / 2
FULL_CIRCLE = 2 * math.pi
RADIUS_MARGIN = 20
DEFAULT_SLICE_COLOR = "#999"

CATEGORY_COLORS: Dict[str, str] = {
    "Food & Dining": "#EF4444",
    "Transportation": "#3B82F6",
    "Shopping": "#8B5CF6",
    "Bills & Utilities": "#F59E0B",
    "Healthcare": "#EC4899",
    "Entertainment": "#10B981",
    "Travel": "#06B6D4",
    "Education": "#6366F1",
    "Others": "#6B7280",
}

INCOME_EXPENSE_COLORS: Dict[str, str] = {
    "Income": "#10B981",
    "Expenses": "#EF4444",
}


@dataclass(frozen=True)
class PieSlice:
    label: str
    value: float
    start_angle: float
    end_angle: float
    color: str

    @property
    def sweep(self) -> float:
        return self.end_angle - self.start_angle


@dataclass(frozen=True)
class PieLayout:
    center_x: float
    center_y: float
    radius: float
    total: float
    slices: List[PieSlice] = field(default_factory=list)

    @property
    def no_data(self) -> bool:
        return not self.slices


def layout_pie(
    data: Mapping[str, float],
    width: float,
    height: float,
    colors: Optional[Mapping[str, str]] = None,
) -> PieLayout:
    if any(amount < 0 for amount in data.values()):
        raise ValueError("pie chart amounts must be non-negative")
    colors = CATEGORY_COLORS if colors is None else colors
    total = sum(data.values(), 0.0)
    center_x, center_y = width / 2, height / 2
    radius = max(min(width, height) / 2 - RADIUS_MARGIN, 0)
    if not math.isfinite(total) or total <= 0:
        return PieLayout(center_x, center_y, radius, total)

    slices: List[PieSlice] = []
    items = list(data.items())
    current = START_ANGLE
    for index, (label, amount) in enumerate(items):
        if index == len(items) - 1:
            end = START_ANGLE + FULL_CIRCLE
        else:
            end = current + amount / total * FULL_CIRCLE
        slices.append(
            PieSlice(
                label=label,
                value=amount,
                start_angle=current,
                end_angle=end,
                color=colors.get(label, DEFAULT_SLICE_COLOR),
            )
        )
        current = end
    return PieLayout(center_x, center_y, radius, total, slices)
