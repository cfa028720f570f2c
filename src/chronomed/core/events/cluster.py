from __future__ import annotations

import datetime as _dt
import logging
from collections.abc import Iterable

from ..errors import InvalidInputError
from ..lanes import assign
from ..scale import AnchorScale
from ..timeutil import calendar_date, to_nanos
from ..types import EventCluster, LaneItem, PointEvent

__all__ = ["cluster", "cluster_lanes"]

log = logging.getLogger(__name__)


def cluster(events: Iterable[PointEvent], scale: AnchorScale) -> list[EventCluster]:
    """Group events by UTC calendar date and pin each group on ``scale``.

    The representative instant of a group is its first event in input
    order, not necessarily the earliest of the day. Groups come back
    sorted by that instant; ties keep first-seen order.
    """

    groups: dict[_dt.date, list[PointEvent]] = {}
    for event in events:
        groups.setdefault(calendar_date(event.instant), []).append(event)

    if not groups:
        return []
    if scale.is_empty:
        raise InvalidInputError("Cannot place events on a scale without anchors")

    clusters: list[EventCluster] = []
    for members in groups.values():
        head = members[0]
        clusters.append(
            EventCluster(
                instant=head.instant,
                events=tuple(members),
                position=scale.map(head.instant),
            )
        )
    clusters.sort(key=lambda c: to_nanos(c.instant))
    log.debug("Clustered %d events into %d dates", sum(len(c) for c in clusters), len(clusters))
    return clusters


def cluster_lanes(
    clusters: Iterable[EventCluster],
    *,
    card_width: float,
    min_gap: float,
) -> list[int]:
    """Lane rows for cluster cards of ``card_width`` separated by ``min_gap``."""

    half = float(card_width) / 2.0
    items = [LaneItem(position=c.position, half_width=half) for c in clusters]
    return assign(items, min_gap)
