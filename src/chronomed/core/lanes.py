"""Greedy lane packing for fixed-width cards along the time axis."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from .errors import InvalidInputError
from .types import LaneItem

__all__ = ["assign", "footprint", "row_count"]

log = logging.getLogger(__name__)


def _validate(items: Sequence[LaneItem], min_gap: float) -> None:
    if not math.isfinite(min_gap) or min_gap < 0:
        raise InvalidInputError(f"min_gap must be a finite non-negative number, got {min_gap}")
    for item in items:
        if not math.isfinite(item.position):
            raise InvalidInputError(f"Lane item position {item.position} is not finite")
        if not math.isfinite(item.half_width) or item.half_width < 0:
            raise InvalidInputError(f"Lane item half width {item.half_width} is invalid")


def footprint(item: LaneItem, min_gap: float = 0.0) -> tuple[float, float]:
    """Pixel interval ``item`` occupies, widened by ``min_gap`` on both sides."""

    return item.left - min_gap, item.right + min_gap


def assign(items: Sequence[LaneItem], min_gap: float = 0.0) -> list[int]:
    """Return a 0-based row index for every item, in input order.

    Items are visited left to right by position (stable for ties) and each
    goes to the lowest row whose occupied extent ends at least ``min_gap``
    before the item's left edge. Visiting by position is what makes the
    first-fit choice optimal for interval graphs, so the sort happens here
    rather than being left to the caller.
    """

    min_gap = float(min_gap)
    _validate(items, min_gap)
    if not items:
        return []

    order = sorted(range(len(items)), key=lambda i: items[i].position)
    right_edges: list[float] = []
    rows = [0] * len(items)
    for idx in order:
        item = items[idx]
        left = item.left
        row = 0
        while row < len(right_edges) and left < right_edges[row] + min_gap:
            row += 1
        if row == len(right_edges):
            right_edges.append(item.right)
        else:
            right_edges[row] = item.right
        rows[idx] = row

    log.debug("Packed %d items into %d rows (gap=%.1f)", len(items), len(right_edges), min_gap)
    return rows


def row_count(rows: Sequence[int]) -> int:
    """Number of rows used; zero when nothing was placed."""

    if not rows:
        return 0
    return max(rows) + 1
