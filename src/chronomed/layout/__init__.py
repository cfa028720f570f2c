"""Track layout descriptors built on the temporal core."""

from .theme import (
    PALETTE,
    GradientStop,
    band_gradient_stops,
    medication_colors,
    pathway_status,
    risk_color,
)
from .timeline import build_scale, build_timeline_layout
from .tracks import (
    axis_ticks,
    encounter_track,
    event_track,
    lab_chart,
    lab_charts,
    medication_track,
    pathway_track,
    risk_track,
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
    TimelineLayout,
)

__all__ = [
    "PALETTE",
    "AxisTick",
    "EncounterCard",
    "EncounterTrack",
    "EventCard",
    "EventTrack",
    "GradientStop",
    "LabChart",
    "LabPoint",
    "MedicationBar",
    "MedicationTrack",
    "PathwayStep",
    "PathwayTrack",
    "RiskMarker",
    "RiskTrack",
    "TimelineLayout",
    "axis_ticks",
    "band_gradient_stops",
    "build_scale",
    "build_timeline_layout",
    "encounter_track",
    "event_track",
    "lab_chart",
    "lab_charts",
    "medication_colors",
    "medication_track",
    "pathway_status",
    "pathway_track",
    "risk_color",
    "risk_track",
]
