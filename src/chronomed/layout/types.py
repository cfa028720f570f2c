"""Per-item layout descriptors handed to a renderer."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from chronomed.core.scale import AnchorScale
from chronomed.core.types import DomainResult, ReferenceBand

from .theme import GradientStop, MedicationColors

__all__ = [
    "AxisTick",
    "EncounterCard",
    "EncounterTrack",
    "MedicationBar",
    "MedicationTrack",
    "LabPoint",
    "LabChart",
    "RiskMarker",
    "RiskTrack",
    "EventCard",
    "EventTrack",
    "PathwayStep",
    "PathwayTrack",
    "TimelineLayout",
]


@dataclass(frozen=True)
class AxisTick:
    instant: datetime
    x: float
    label: str


@dataclass(frozen=True)
class EncounterCard:
    encounter_no: int | str
    instant: datetime
    x: float
    width: float
    row: int
    top: float
    height: float
    title: str
    description: str
    kind: str = ""
    provider: str | None = None
    chief_complaint: str | None = None
    secondary_differentials: tuple[str, ...] = ()

    @property
    def left(self) -> float:
        return self.x - self.width / 2.0


@dataclass(frozen=True)
class EncounterTrack:
    cards: tuple[EncounterCard, ...]
    rows: int
    height: float


@dataclass(frozen=True)
class MedicationBar:
    name: str
    row: int
    x: float
    end_x: float
    width: float
    open_ended: bool
    colors: MedicationColors
    dose: str | None = None
    indication: str | None = None


@dataclass(frozen=True)
class MedicationTrack:
    bars: tuple[MedicationBar, ...]
    groups: tuple[str, ...]
    row_height: float
    height: float


@dataclass(frozen=True)
class LabPoint:
    instant: datetime
    value: float
    x: float
    y: float
    abnormal: bool
    color: str


@dataclass(frozen=True)
class LabChart:
    biomarker: str
    unit: str
    band: ReferenceBand | None
    domain: DomainResult
    points: tuple[LabPoint, ...]
    # Step-after polyline through the points.
    line: tuple[tuple[float, float], ...]
    band_lines: tuple[float, float] | None
    gradient: tuple[GradientStop, ...]
    last_abnormal: bool
    height: float

    @property
    def last_value(self) -> float:
        return self.points[-1].value


@dataclass(frozen=True)
class RiskMarker:
    instant: datetime
    score: float
    x: float
    y: float
    color: str
    factors: tuple[str, ...] = ()


@dataclass(frozen=True)
class RiskTrack:
    markers: tuple[RiskMarker, ...]
    domain: DomainResult
    height: float


@dataclass(frozen=True)
class EventCard:
    instant: datetime
    date_label: str
    x: float
    width: float
    row: int
    top: float
    titles: tuple[str, ...]
    notes: tuple[str, ...]

    @property
    def connector_height(self) -> float:
        return self.top + 4.0


@dataclass(frozen=True)
class EventTrack:
    cards: tuple[EventCard, ...]
    rows: int
    height: float


@dataclass(frozen=True)
class PathwayStep:
    index: int
    title: str
    description: str
    status: str
    color: str
    x: float
    width: float

    @property
    def number(self) -> int:
        return self.index + 1


@dataclass(frozen=True)
class PathwayTrack:
    """Causal pathway cards laid out left to right in narrative order."""

    steps: tuple[PathwayStep, ...]
    width: float
    height: float


@dataclass(frozen=True)
class TimelineLayout:
    """Everything a renderer needs to draw one patient timeline."""

    scale: AnchorScale
    width: float
    axis: tuple[AxisTick, ...] = ()
    encounters: EncounterTrack | None = None
    medications: MedicationTrack | None = None
    labs: tuple[LabChart, ...] = ()
    risk: RiskTrack | None = None
    events: EventTrack | None = None
    pathways: PathwayTrack | None = None
    now: datetime | None = None
    warnings: tuple[str, ...] = field(default=())

    @property
    def is_empty(self) -> bool:
        return self.scale.is_empty

    @property
    def grid_lines(self) -> tuple[float, ...]:
        return tuple(tick.x for tick in self.axis)

    @property
    def height(self) -> float:
        total = 0.0
        if self.encounters is not None:
            total += self.encounters.height
        if self.medications is not None:
            total += self.medications.height
        total += sum(chart.height for chart in self.labs)
        if self.risk is not None:
            total += self.risk.height
        if self.events is not None:
            total += self.events.height
        if self.pathways is not None:
            total += self.pathways.height
        return total
