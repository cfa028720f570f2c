from __future__ import annotations

from collections.abc import Iterable

from ..timeutil import format_day
from ..types import EventCluster

__all__ = ["format_cluster_date", "format_cluster_label", "total_count"]


def format_cluster_date(cluster: EventCluster) -> str:
    """Card header date, e.g. ``"Mar 5, 2021"``."""

    return format_day(cluster.instant)


def format_cluster_label(cluster: EventCluster) -> str:
    """Return a compact label for a cluster (e.g. "Mar 5, 2021 (+2)")."""

    label = format_cluster_date(cluster)
    extra = len(cluster.events) - 1
    return f"{label} (+{extra})" if extra > 0 else label


def total_count(clusters: Iterable[EventCluster]) -> int:
    """Return the number of events across clusters."""

    return sum(len(cluster.events) for cluster in clusters)
