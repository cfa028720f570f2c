"""Flatten a computed layout into a table."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import pandas as pd

if TYPE_CHECKING:
    from chronomed.layout.types import TimelineLayout

__all__ = ["LAYOUT_COLUMNS", "layout_table", "export_layout_csv"]

log = logging.getLogger(__name__)

LAYOUT_COLUMNS = ["track", "label", "x", "width", "row", "y", "color"]


def layout_table(layout: TimelineLayout) -> pd.DataFrame:
    """One row per placed item, in track order."""

    rows: list[dict] = []
    for tick in layout.axis:
        rows.append(
            {
                "track": "axis",
                "label": tick.label,
                "x": tick.x,
                "width": 0.0,
                "row": 0,
                "y": 0.0,
                "color": None,
            }
        )

    if layout.encounters is not None:
        for card in layout.encounters.cards:
            rows.append(
                {
                    "track": "encounter",
                    "label": card.title,
                    "x": card.x,
                    "width": card.width,
                    "row": card.row,
                    "y": card.top,
                    "color": None,
                }
            )

    if layout.medications is not None:
        for bar in layout.medications.bars:
            rows.append(
                {
                    "track": "medication",
                    "label": bar.name,
                    "x": bar.x,
                    "width": bar.width,
                    "row": bar.row,
                    "y": bar.row * layout.medications.row_height,
                    "color": bar.colors.dot,
                }
            )

    for chart in layout.labs:
        for point in chart.points:
            rows.append(
                {
                    "track": f"lab:{chart.biomarker}",
                    "label": f"{point.value:g} {chart.unit}".strip(),
                    "x": point.x,
                    "width": 0.0,
                    "row": 0,
                    "y": point.y,
                    "color": point.color,
                }
            )

    if layout.risk is not None:
        for marker in layout.risk.markers:
            rows.append(
                {
                    "track": "risk",
                    "label": f"{marker.score:g}",
                    "x": marker.x,
                    "width": 0.0,
                    "row": 0,
                    "y": marker.y,
                    "color": marker.color,
                }
            )

    if layout.events is not None:
        for card in layout.events.cards:
            rows.append(
                {
                    "track": "event",
                    "label": "; ".join(card.titles),
                    "x": card.x,
                    "width": card.width,
                    "row": card.row,
                    "y": card.top,
                    "color": None,
                }
            )

    if layout.pathways is not None:
        for step in layout.pathways.steps:
            rows.append(
                {
                    "track": "pathway",
                    "label": step.title,
                    "x": step.x,
                    "width": step.width,
                    "row": 0,
                    "y": 0.0,
                    "color": step.color,
                }
            )

    return pd.DataFrame(rows, columns=LAYOUT_COLUMNS)


def export_layout_csv(layout: TimelineLayout, path: Path | str) -> Path:
    path = Path(path)
    table = layout_table(layout)
    table.to_csv(path, index=False)
    log.info("Wrote %d layout rows to %s", len(table), path)
    return path
