# ChronoMed
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Per-track layout: turns records plus a shared scale into descriptors."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime

from chronomed.config import LayoutConfig
from chronomed.core import domain as series_domain
from chronomed.core.errors import InvalidInputError
from chronomed.core.events import cluster, cluster_lanes, format_cluster_date
from chronomed.core.lanes import assign, row_count
from chronomed.core.scale import AnchorScale
from chronomed.core.timeutil import format_day, to_nanos
from chronomed.core.types import DomainResult, LaneItem
from chronomed.io.models import (
    CausalNode,
    Encounter,
    KeyEvent,
    LabMetric,
    Medication,
    RiskPoint,
)

from .theme import (
    band_gradient_stops,
    medication_colors,
    pathway_color,
    pathway_status,
    risk_color,
    sample_color,
)
from .types import (
    AxisTick,
    EncounterCard,
    EncounterTrack,
    EventCard,
    EventTrack,
    LabChart,
    LabPoint,
    MedicationBar,
    MedicationTrack,
    PathwayStep,
    PathwayTrack,
    RiskMarker,
    RiskTrack,
)

__all__ = [
    "axis_ticks",
    "encounter_track",
    "medication_track",
    "lab_chart",
    "lab_charts",
    "risk_track",
    "event_track",
    "pathway_track",
]

log = logging.getLogger(__name__)

# Encounter cards sit 8 px below the track top and leave 16 px underneath.
_ENCOUNTER_TOP = 8.0
_ENCOUNTER_BOTTOM = 16.0

RISK_DOMAIN = (0.0, 10.0)


def _chronological(items: Sequence, key) -> list:
    return sorted(items, key=lambda item: to_nanos(key(item)))


def axis_ticks(encounters: Sequence[Encounter], scale: AnchorScale) -> tuple[AxisTick, ...]:
    """One labelled tick per encounter, in date order."""

    ordered = _chronological(encounters, lambda e: e.date)
    return tuple(
        AxisTick(instant=enc.date, x=scale.map(enc.date), label=format_day(enc.date))
        for enc in ordered
    )


def encounter_track(
    encounters: Sequence[Encounter], scale: AnchorScale, config: LayoutConfig
) -> EncounterTrack:
    if not encounters:
        return EncounterTrack(cards=(), rows=0, height=0.0)

    ordered = _chronological(encounters, lambda e: e.date)
    width = config.encounter_card_width
    xs = [scale.map(enc.date) for enc in ordered]
    rows = assign([LaneItem(position=x, half_width=width / 2.0) for x in xs], config.encounter_gap)
    pitch = config.encounter_card_height + config.encounter_gap

    cards = []
    for enc, x, row in zip(ordered, xs, rows):
        cards.append(
            EncounterCard(
                encounter_no=enc.encounter_no,
                instant=enc.date,
                x=x,
                width=width,
                row=row,
                top=_ENCOUNTER_TOP + row * pitch,
                height=config.encounter_card_height,
                title=enc.title,
                description=enc.description,
                kind=enc.type,
                provider=enc.provider,
                chief_complaint=enc.chief_complaint,
                secondary_differentials=tuple(enc.differential_diagnosis[1:]),
            )
        )
    used = row_count(rows)
    height = (
        _ENCOUNTER_TOP
        + used * config.encounter_card_height
        + (used - 1) * config.encounter_gap
        + _ENCOUNTER_BOTTOM
    )
    return EncounterTrack(cards=tuple(cards), rows=used, height=height)


def medication_track(
    medications: Sequence[Medication],
    scale: AnchorScale,
    config: LayoutConfig,
    *,
    now: datetime,
) -> MedicationTrack:
    """One row per drug name (first-seen order); open courses run until ``now``."""

    groups: dict[str, list[Medication]] = {}
    for med in medications:
        groups.setdefault(med.name, []).append(med)

    bars = []
    for row, (name, courses) in enumerate(groups.items()):
        colors = medication_colors(name)
        for med in courses:
            start = scale.map(med.start_date)
            end = scale.map(med.end_date if med.end_date is not None else now)
            bars.append(
                MedicationBar(
                    name=name,
                    row=row,
                    x=start,
                    end_x=end,
                    width=max(end - start, config.medication_min_width),
                    open_ended=med.is_open,
                    colors=colors,
                    dose=med.dose,
                    indication=med.indication,
                )
            )
    return MedicationTrack(
        bars=tuple(bars),
        groups=tuple(groups),
        row_height=config.medication_row_height,
        height=len(groups) * config.medication_row_height,
    )


def _step_after(points: Sequence[LabPoint]) -> tuple[tuple[float, float], ...]:
    vertices: list[tuple[float, float]] = []
    for prev, point in zip(points, points[1:]):
        if not vertices:
            vertices.append((prev.x, prev.y))
        vertices.append((point.x, prev.y))
        vertices.append((point.x, point.y))
    if not vertices and points:
        vertices.append((points[0].x, points[0].y))
    return tuple(vertices)


def lab_chart(metric: LabMetric, scale: AnchorScale, config: LayoutConfig) -> LabChart:
    """Lay out one biomarker chart.

    Raises :class:`InvalidInputError` for a metric without values or with
    non-finite values.
    """

    values = _chronological(metric.values, lambda v: v.t)
    band = metric.band()
    dom = series_domain.compute(
        [v.value for v in values],
        band,
        chart_height=config.lab_chart_height,
        margin_top=config.lab_margin_top,
        margin_bottom=config.lab_margin_bottom,
    )

    points = []
    for v in values:
        abnormal = band is not None and not band.contains(v.value)
        points.append(
            LabPoint(
                instant=v.t,
                value=v.value,
                x=scale.map(v.t),
                y=dom.value_to_pixel(v.value),
                abnormal=abnormal,
                color=sample_color(abnormal),
            )
        )

    band_lines = None
    if band is not None:
        band_lines = (dom.value_to_pixel(band.max), dom.value_to_pixel(band.min))

    return LabChart(
        biomarker=metric.biomarker,
        unit=metric.unit,
        band=band,
        domain=dom,
        points=tuple(points),
        line=_step_after(points),
        band_lines=band_lines,
        gradient=tuple(band_gradient_stops(dom, has_band=band is not None)),
        last_abnormal=points[-1].abnormal,
        height=config.lab_chart_height,
    )


def lab_charts(
    labs: Sequence[LabMetric], scale: AnchorScale, config: LayoutConfig
) -> tuple[tuple[LabChart, ...], tuple[str, ...]]:
    """Charts for every metric that has data, plus warnings for skipped ones."""

    charts = []
    warnings = []
    for metric in labs:
        if not metric.values:
            continue
        try:
            charts.append(lab_chart(metric, scale, config))
        except InvalidInputError as exc:
            log.warning("Skipping lab chart %s: %s", metric.biomarker, exc)
            warnings.append(f"{metric.biomarker}: {exc}")
    return tuple(charts), tuple(warnings)


def risk_track(
    risks: Sequence[RiskPoint], scale: AnchorScale, config: LayoutConfig
) -> RiskTrack | None:
    """Risk scores on a fixed 0-10 axis; ``None`` when there are no scores."""

    if not risks:
        return None
    dom = DomainResult(
        domain_min=RISK_DOMAIN[0],
        domain_max=RISK_DOMAIN[1],
        band_fraction_low=0.0,
        band_fraction_high=1.0,
        chart_height=config.risk_height,
        margin_top=config.risk_margin,
        margin_bottom=config.risk_margin,
    )
    markers = tuple(
        RiskMarker(
            instant=point.t,
            score=point.risk_score,
            x=scale.map(point.t),
            y=dom.value_to_pixel(point.risk_score),
            color=risk_color(point.risk_score),
            factors=tuple(point.factors),
        )
        for point in _chronological(risks, lambda r: r.t)
    )
    return RiskTrack(markers=markers, domain=dom, height=config.risk_height)


def event_track(
    events: Sequence[KeyEvent], scale: AnchorScale, config: LayoutConfig
) -> EventTrack:
    """Date-grouped event cards stacked into lanes; zero height when empty."""

    clusters = cluster([e.to_point_event() for e in events], scale)
    if not clusters:
        return EventTrack(cards=(), rows=0, height=0.0)

    rows = cluster_lanes(clusters, card_width=config.event_card_width, min_gap=config.event_gap)
    cards = tuple(
        EventCard(
            instant=group.instant,
            date_label=format_cluster_date(group),
            x=group.position,
            width=config.event_card_width,
            row=row,
            top=config.event_card_top + row * config.event_row_pitch,
            titles=tuple(evt.title for evt in group.events),
            notes=tuple(evt.note for evt in group.events),
        )
        for group, row in zip(clusters, rows)
    )
    used = row_count(rows)
    height = used * config.event_row_height + config.event_track_padding
    return EventTrack(cards=cards, rows=used, height=height)


def pathway_track(nodes: Sequence[CausalNode], config: LayoutConfig) -> PathwayTrack | None:
    """Numbered pathway cards in document order; ``None`` without nodes.

    The pathway is a narrative sequence, not a time series, so it does not
    use the shared scale and may be narrower or wider than the timeline.
    """

    if not nodes:
        return None
    card = config.pathway_card_width
    pitch = card + config.pathway_gap
    steps = []
    for index, node in enumerate(nodes):
        status = pathway_status(node.title, node.description)
        steps.append(
            PathwayStep(
                index=index,
                title=node.title,
                description=node.description,
                status=status,
                color=pathway_color(status),
                x=config.pathway_padding + index * pitch,
                width=card,
            )
        )
    width = 2 * config.pathway_padding + len(steps) * card + (len(steps) - 1) * config.pathway_gap
    return PathwayTrack(steps=tuple(steps), width=width, height=config.pathway_height)
