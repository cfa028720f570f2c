"""Validated records of one patient timeline document."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from chronomed.core.timeutil import to_timestamp
from chronomed.core.types import PointEvent, ReferenceBand, ValueSample

__all__ = [
    "Encounter",
    "Medication",
    "ReferenceRange",
    "LabValue",
    "LabMetric",
    "KeyEvent",
    "RiskPoint",
    "CausalNode",
    "PatientTimeline",
]


def _coerce_instant(value: Any) -> Any:
    # Naive UTC throughout, so aware and naive inputs compare cleanly.
    if value is None:
        return value
    return to_timestamp(value).to_pydatetime()


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Encounter(_Record):
    encounter_no: int | str
    date: datetime
    type: str = ""
    provider: str | None = None
    diagnosis: str | None = None
    differential_diagnosis: list[str] = Field(default_factory=list)
    impression: str | None = None
    notes: str | None = None
    chief_complaint: str | None = None

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_instants(cls, value: Any) -> Any:
        return _coerce_instant(value)

    @property
    def title(self) -> str:
        if self.differential_diagnosis:
            return self.differential_diagnosis[0]
        return self.diagnosis or self.type

    @property
    def description(self) -> str:
        return self.impression or self.notes or ""


class Medication(_Record):
    name: str
    start_date: datetime = Field(alias="startDate")
    end_date: datetime | None = Field(default=None, alias="endDate")
    dose: str | None = None
    indication: str | None = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _coerce_instants(cls, value: Any) -> Any:
        return _coerce_instant(value)

    @model_validator(mode="after")
    def _end_after_start(self) -> Medication:
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError(f"Medication {self.name!r} ends before it starts")
        return self

    @property
    def is_open(self) -> bool:
        return self.end_date is None


class ReferenceRange(_Record):
    min: float
    max: float

    @model_validator(mode="after")
    def _ordered(self) -> ReferenceRange:
        if self.min > self.max:
            raise ValueError("referenceRange min must not exceed max")
        return self


class LabValue(_Record):
    t: datetime
    value: float

    @field_validator("t", mode="before")
    @classmethod
    def _coerce_instants(cls, value: Any) -> Any:
        return _coerce_instant(value)


class LabMetric(_Record):
    biomarker: str
    unit: str = ""
    reference_range: ReferenceRange | None = Field(default=None, alias="referenceRange")
    values: list[LabValue] = Field(default_factory=list)

    def samples(self) -> list[ValueSample]:
        return [ValueSample(instant=v.t, value=v.value) for v in self.values]

    def band(self) -> ReferenceBand | None:
        if self.reference_range is None:
            return None
        return ReferenceBand(self.reference_range.min, self.reference_range.max)


class KeyEvent(_Record):
    t: datetime
    event: str
    note: str = ""

    @field_validator("t", mode="before")
    @classmethod
    def _coerce_instants(cls, value: Any) -> Any:
        return _coerce_instant(value)

    def to_point_event(self) -> PointEvent:
        return PointEvent(instant=self.t, title=self.event, note=self.note)


class RiskPoint(_Record):
    t: datetime
    risk_score: float = Field(alias="riskScore", ge=0, le=10)
    factors: list[str] = Field(default_factory=list)

    @field_validator("t", mode="before")
    @classmethod
    def _coerce_instants(cls, value: Any) -> Any:
        return _coerce_instant(value)


class CausalNode(_Record):
    """One step of a causal pathway; its status is derived from the wording."""

    title: str
    description: str = ""


class PatientTimeline(_Record):
    patient_id: str | None = None
    encounters: list[Encounter] = Field(default_factory=list)
    medications: list[Medication] = Field(default_factory=list)
    labs: list[LabMetric] = Field(default_factory=list)
    key_events: list[KeyEvent] = Field(default_factory=list, alias="keyEvents")
    risks: list[RiskPoint] = Field(default_factory=list)
    causal_nodes: list[CausalNode] = Field(default_factory=list, alias="causalNodes")
