# ChronoMed
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Headless Matplotlib rendering of a computed timeline layout.

Drawing happens in layout pixel space: one axes spans the whole figure,
x runs left to right in scale pixels and y runs downward through the
stacked tracks. No GUI backend is involved.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from matplotlib import patches as mpatches
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from chronomed.core.errors import InvalidInputError
from chronomed.layout.theme import PALETTE
from chronomed.layout.types import TimelineLayout

if TYPE_CHECKING:
    from matplotlib.axes import Axes

log = logging.getLogger(__name__)

__all__ = ["AXIS_HEIGHT", "build_figure", "export_figure"]

AXIS_HEIGHT = 32.0
_MAX_PIXELS = 8000


def _truncate(text: str, limit: int) -> str:
    if limit <= 0 or len(text) <= limit:
        return text
    return f"{text[: limit - 1]}…"


def build_figure(layout: TimelineLayout, dpi: float = 100.0) -> Figure:
    """Return a Matplotlib figure drawing every track of ``layout``."""

    if layout.is_empty:
        raise InvalidInputError("Cannot render an empty timeline layout")

    width = max(layout.width, 1.0)
    if layout.pathways is not None:
        width = max(width, layout.pathways.width)
    height = AXIS_HEIGHT + max(layout.height, 1.0)
    fig = Figure(figsize=(width / dpi, height / dpi), dpi=dpi)
    FigureCanvasAgg(fig)
    ax = fig.add_axes((0.0, 0.0, 1.0, 1.0))
    ax.set_xlim(0.0, width)
    ax.set_ylim(height, 0.0)
    ax.set_axis_off()

    _draw_axis(ax, layout, height)
    y = AXIS_HEIGHT
    y = _draw_encounters(ax, layout, y)
    y = _draw_medications(ax, layout, y)
    y = _draw_labs(ax, layout, y)
    y = _draw_risk(ax, layout, y)
    y = _draw_events(ax, layout, y)
    _draw_pathways(ax, layout, y)
    return fig


def _draw_axis(ax: Axes, layout: TimelineLayout, height: float) -> None:
    for tick in layout.axis:
        ax.vlines(
            tick.x,
            AXIS_HEIGHT,
            height,
            colors=PALETTE["grid_line"],
            linewidth=1.5,
            linestyles=(0, (6, 4)),
            zorder=0,
        )
        ax.plot([tick.x], [AXIS_HEIGHT], marker="o", markersize=4, color=PALETTE["grid_dot"])
        ax.text(
            tick.x,
            AXIS_HEIGHT / 2,
            tick.label,
            ha="center",
            va="center",
            fontsize=7,
            color=PALETTE["axis_text"],
        )


def _draw_encounters(ax: Axes, layout: TimelineLayout, top: float) -> float:
    track = layout.encounters
    if track is None or not track.cards:
        return top
    for card in track.cards:
        y0 = top + card.top
        ax.add_patch(
            mpatches.FancyBboxPatch(
                (card.left, y0),
                card.width,
                card.height,
                boxstyle="round,pad=0,rounding_size=8",
                facecolor=PALETTE["encounter_card"],
                edgecolor=PALETTE["encounter_edge"],
                linewidth=1.0,
                zorder=2,
            )
        )
        ax.text(card.left + 8, y0 + 14, card.kind.upper(), fontsize=6, va="center", zorder=3)
        title = _truncate(card.title, 36)
        ax.text(card.left + 8, y0 + 32, title, fontsize=8, fontweight="bold", va="center", zorder=3)
        summary = _truncate(card.description, 44)
        ax.text(card.left + 8, y0 + 50, summary, fontsize=6, va="center", zorder=3)
        ax.plot(
            [card.x],
            [y0 + card.height],
            marker="o",
            markersize=5,
            color=PALETTE["encounter_dot"],
            zorder=3,
        )
    return top + track.height


def _draw_medications(ax: Axes, layout: TimelineLayout, top: float) -> float:
    track = layout.medications
    if track is None or not track.bars:
        return top
    for bar in track.bars:
        y0 = top + bar.row * track.row_height + 2.0
        ax.add_patch(
            mpatches.Rectangle(
                (bar.x, y0),
                bar.width,
                track.row_height - 4.0,
                facecolor=bar.colors.fill,
                edgecolor=bar.colors.edge,
                linewidth=0.8,
                zorder=2,
            )
        )
        mid = y0 + (track.row_height - 4.0) / 2
        ax.text(bar.x + 4, mid, bar.name, fontsize=6, va="center", clip_on=True, zorder=3)
    return top + track.height


def _draw_labs(ax: Axes, layout: TimelineLayout, top: float) -> float:
    for chart in layout.labs:
        if chart.band_lines is not None:
            upper, lower = chart.band_lines
            for y, color in ((upper, PALETTE["out_of_range"]), (lower, PALETTE["in_range"])):
                ax.hlines(top + y, 0, layout.width, colors=color, linestyles="--", alpha=0.3)
        if chart.line:
            xs = [x for x, _ in chart.line]
            ys = [top + y for _, y in chart.line]
            ax.plot(xs, ys, color=PALETTE["in_range"], linewidth=2.0, zorder=2)
        for point in chart.points:
            ax.plot(
                [point.x],
                [top + point.y],
                marker="o",
                markersize=5,
                markerfacecolor="white",
                markeredgecolor=point.color,
                markeredgewidth=2.0,
                zorder=3,
            )
        header = f"{chart.biomarker} ({chart.unit})" if chart.unit else chart.biomarker
        ax.text(8, top + 12, header, fontsize=7, fontweight="bold", va="center")
        ax.text(
            layout.width - 8,
            top + 12,
            f"{chart.last_value:g}",
            fontsize=8,
            ha="right",
            va="center",
            color=PALETTE["out_of_range"] if chart.last_abnormal else PALETTE["axis_text"],
        )
        top += chart.height
    return top


def _draw_risk(ax: Axes, layout: TimelineLayout, top: float) -> float:
    track = layout.risk
    if track is None:
        return top
    xs = [m.x for m in track.markers]
    ys = [top + m.y for m in track.markers]
    ax.plot(xs, ys, color=PALETTE["risk_medium"], linewidth=2.5, zorder=2)
    for marker in track.markers:
        ax.plot(
            [marker.x],
            [top + marker.y],
            marker="o",
            markersize=6,
            markerfacecolor="white",
            markeredgecolor=marker.color,
            markeredgewidth=2.0,
            zorder=3,
        )
    ax.text(8, top + 12, "RISK", fontsize=7, fontweight="bold", va="center")
    return top + track.height


def _draw_events(ax: Axes, layout: TimelineLayout, top: float) -> float:
    track = layout.events
    if track is None or not track.cards:
        return top
    for card in track.cards:
        ax.vlines(
            card.x,
            top,
            top + card.connector_height,
            colors=PALETTE["event_connector"],
            linestyles="--",
            linewidth=1.5,
        )
        ax.plot([card.x], [top], marker="o", markersize=6, color=PALETTE["event_dot"], zorder=3)
        left = card.x - card.width / 2.0
        y0 = top + card.top
        body = 28.0 + 18.0 * len(card.titles)
        ax.add_patch(
            mpatches.FancyBboxPatch(
                (left, y0),
                card.width,
                body,
                boxstyle="round,pad=0,rounding_size=6",
                facecolor=PALETTE["event_card"],
                edgecolor=PALETTE["event_edge"],
                linewidth=1.0,
                zorder=2,
            )
        )
        ax.text(
            left + 8, y0 + 12, card.date_label, fontsize=7, fontweight="bold", va="center", zorder=3
        )
        for idx, title in enumerate(card.titles):
            line_y = y0 + 30 + idx * 18
            ax.text(left + 8, line_y, _truncate(title, 42), fontsize=7, va="center", zorder=3)
    return top + track.height



def _draw_pathways(ax: Axes, layout: TimelineLayout, top: float) -> float:
    track = layout.pathways
    if track is None:
        return top
    ax.text(8, top + 16, "CAUSAL PATHWAY", fontsize=7, fontweight="bold", va="center")
    spine_y = top + 52
    first, last = track.steps[0], track.steps[-1]
    ax.hlines(
        spine_y, first.x, last.x + last.width, colors=PALETTE["grid_line"], linewidth=2.0, zorder=1
    )
    for step in track.steps:
        ax.plot(
            [step.x + 24],
            [spine_y],
            marker="o",
            markersize=14,
            color=step.color,
            markeredgecolor="white",
            zorder=3,
        )
        ax.text(
            step.x + 24,
            spine_y,
            str(step.number),
            fontsize=6,
            color="white",
            ha="center",
            va="center",
            fontweight="bold",
            zorder=4,
        )
        y0 = spine_y + 20
        ax.add_patch(
            mpatches.FancyBboxPatch(
                (step.x, y0),
                step.width,
                max(track.height - (y0 - top) - 16, 24.0),
                boxstyle="round,pad=0,rounding_size=8",
                facecolor="white",
                edgecolor=step.color,
                linewidth=1.0,
                zorder=2,
            )
        )
        ax.text(
            step.x + 12,
            y0 + 14,
            step.status.upper(),
            fontsize=6,
            color=step.color,
            va="center",
            fontweight="bold",
            zorder=3,
        )
        title = _truncate(step.title, 38)
        ax.text(step.x + 12, y0 + 34, title, fontsize=7, fontweight="bold", va="center", zorder=3)
        summary = _truncate(step.description, 44)
        ax.text(step.x + 12, y0 + 52, summary, fontsize=6, va="center", zorder=3)
    return top + track.height

def export_figure(layout: TimelineLayout, out_path: Path | str, dpi: float = 100.0) -> Path:
    """Save ``layout`` to ``out_path``; the format follows the file suffix."""

    out_path = Path(out_path)
    fig = build_figure(layout, dpi=dpi)
    width_px = fig.get_figwidth() * dpi
    height_px = fig.get_figheight() * dpi
    if max(width_px, height_px) > _MAX_PIXELS:
        old_dpi = dpi
        dpi = dpi * _MAX_PIXELS / max(width_px, height_px)
        log.warning(
            "Export size clamped from %.0f×%.0f px (%.0f dpi) to %.0f dpi to stay under %d px",
            width_px,
            height_px,
            old_dpi,
            dpi,
            _MAX_PIXELS,
        )
    fig.savefig(out_path, dpi=dpi, facecolor="white")
    log.info("Rendered timeline to %s", out_path)
    return out_path
