"""Temporal layout core: scale, value domains, lanes and event clusters."""

from chronomed.core import domain, lanes
from chronomed.core.errors import InvalidInputError
from chronomed.core.events import cluster, cluster_lanes, format_cluster_label
from chronomed.core.scale import AnchorScale
from chronomed.core.types import (
    DomainResult,
    EventCluster,
    LaneItem,
    PointEvent,
    ReferenceBand,
    ValueSample,
)

__all__ = [
    "AnchorScale",
    "DomainResult",
    "EventCluster",
    "InvalidInputError",
    "LaneItem",
    "PointEvent",
    "ReferenceBand",
    "ValueSample",
    "cluster",
    "cluster_lanes",
    "domain",
    "format_cluster_label",
    "lanes",
]
