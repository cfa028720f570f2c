"""Timeline document loading and layout export."""

from .export import LAYOUT_COLUMNS, export_layout_csv, layout_table
from .models import (
    CausalNode,
    Encounter,
    KeyEvent,
    LabMetric,
    LabValue,
    Medication,
    PatientTimeline,
    ReferenceRange,
    RiskPoint,
)
from .records import TimelineLoadError, load_timeline, parse_timeline

__all__ = [
    "LAYOUT_COLUMNS",
    "CausalNode",
    "Encounter",
    "KeyEvent",
    "LabMetric",
    "LabValue",
    "Medication",
    "PatientTimeline",
    "ReferenceRange",
    "RiskPoint",
    "TimelineLoadError",
    "export_layout_csv",
    "layout_table",
    "load_timeline",
    "parse_timeline",
]
