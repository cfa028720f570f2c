# ChronoMed
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Public package interface for the ChronoMed timeline layout engine."""

from importlib import import_module

from chronomed.config import LayoutConfig
from chronomed.core import (
    AnchorScale,
    DomainResult,
    EventCluster,
    InvalidInputError,
    LaneItem,
    PointEvent,
    ReferenceBand,
    ValueSample,
    cluster,
    domain,
    lanes,
)
from chronomed.io import PatientTimeline, TimelineLoadError, load_timeline
from chronomed.layout import TimelineLayout, build_timeline_layout

# Rendering pulls in Matplotlib; resolve it on first use.
_RENDER_EXPORTS = {
    "build_figure": ("chronomed.render.figure", "build_figure"),
    "export_figure": ("chronomed.render.figure", "export_figure"),
}


def __getattr__(name: str):
    if name in _RENDER_EXPORTS:
        module_name, attr = _RENDER_EXPORTS[name]
        module = import_module(module_name)
        value = getattr(module, attr)
        globals()[name] = value
        return value
    raise AttributeError(f"module 'chronomed' has no attribute {name!r}")


__version__ = "0.1.0"

__all__ = [
    "AnchorScale",
    "DomainResult",
    "EventCluster",
    "InvalidInputError",
    "LaneItem",
    "LayoutConfig",
    "PatientTimeline",
    "PointEvent",
    "ReferenceBand",
    "TimelineLayout",
    "TimelineLoadError",
    "ValueSample",
    "build_figure",
    "build_timeline_layout",
    "cluster",
    "domain",
    "export_figure",
    "lanes",
    "load_timeline",
]
