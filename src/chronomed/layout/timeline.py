"""Assemble every track of one patient timeline on a shared scale."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from chronomed.config import LayoutConfig
from chronomed.core.scale import AnchorScale
from chronomed.core.timeutil import to_timestamp
from chronomed.io.models import PatientTimeline

from .tracks import (
    axis_ticks,
    encounter_track,
    event_track,
    lab_charts,
    medication_track,
    pathway_track,
    risk_track,
)
from .types import TimelineLayout

__all__ = ["build_scale", "build_timeline_layout"]

log = logging.getLogger(__name__)


def build_scale(record: PatientTimeline, config: LayoutConfig) -> AnchorScale:
    dates = [enc.date for enc in record.encounters]
    if config.step is not None:
        return AnchorScale.for_step(dates, config.step, config.padding)
    return AnchorScale.build(dates, config.width, config.padding)


def build_timeline_layout(
    record: PatientTimeline,
    config: LayoutConfig | None = None,
    *,
    now: datetime | None = None,
) -> TimelineLayout:
    """Lay out ``record``; open medication courses are resolved to ``now``.

    ``now`` defaults to the current UTC time. A record without encounters
    has nothing to anchor the time axis and yields an empty layout.
    """

    config = config or LayoutConfig()
    resolved_now = to_timestamp(now if now is not None else datetime.now(timezone.utc))
    now_dt = resolved_now.to_pydatetime()

    scale = build_scale(record, config)
    if scale.is_empty:
        log.info(
            "Timeline %s has no encounters; nothing to lay out", record.patient_id or "<unnamed>"
        )
        return TimelineLayout(scale=scale, width=0.0, now=now_dt)

    charts, warnings = lab_charts(record.labs, scale, config)
    layout = TimelineLayout(
        scale=scale,
        width=scale.width,
        axis=axis_ticks(record.encounters, scale),
        encounters=encounter_track(record.encounters, scale, config),
        medications=medication_track(record.medications, scale, config, now=now_dt),
        labs=charts,
        risk=risk_track(record.risks, scale, config),
        events=event_track(record.key_events, scale, config),
        pathways=pathway_track(record.causal_nodes, config),
        now=now_dt,
        warnings=warnings,
    )
    log.debug(
        "Timeline layout: width=%.1f height=%.1f labs=%d warnings=%d",
        layout.width,
        layout.height,
        len(layout.labs),
        len(layout.warnings),
    )
    return layout
