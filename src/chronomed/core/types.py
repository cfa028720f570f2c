# ChronoMed
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Value types exchanged between the layout core and its callers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from .errors import InvalidInputError

__all__ = [
    "ReferenceBand",
    "ValueSample",
    "PointEvent",
    "EventCluster",
    "DomainResult",
    "LaneItem",
]


@dataclass(frozen=True)
class ReferenceBand:
    """Clinically normal range for one measured quantity."""

    min: float
    max: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.min) and math.isfinite(self.max)):
            raise InvalidInputError(f"Reference band must be finite, got {self.min}..{self.max}")
        if self.min > self.max:
            raise InvalidInputError(f"Reference band min {self.min} exceeds max {self.max}")

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max


@dataclass(frozen=True)
class ValueSample:
    instant: Any
    value: float


@dataclass(frozen=True)
class PointEvent:
    instant: Any
    title: str
    note: str = ""


@dataclass(frozen=True)
class EventCluster:
    """Point events sharing one calendar date, pinned at ``position``."""

    instant: Any
    events: tuple[PointEvent, ...]
    position: float

    def __len__(self) -> int:
        return len(self.events)


@dataclass(frozen=True)
class DomainResult:
    """Plotting bounds for one value series plus its colour-band boundaries.

    ``band_fraction_low`` and ``band_fraction_high`` are fractions of the
    chart height measured from the top: the former marks the upper edge of
    the reference band (its ``max``), the latter the lower edge (its
    ``min``). Without a band they are ``0.0`` and ``1.0``.
    """

    domain_min: float
    domain_max: float
    band_fraction_low: float
    band_fraction_high: float
    chart_height: float = 1.0
    margin_top: float = 0.0
    margin_bottom: float = 0.0

    def value_to_pixel(self, value: float) -> float:
        bottom = self.chart_height - self.margin_bottom
        top = self.margin_top
        span = self.domain_max - self.domain_min
        if span == 0:
            return bottom
        return bottom + (float(value) - self.domain_min) * (top - bottom) / span


@dataclass(frozen=True)
class LaneItem:
    position: float
    half_width: float

    @property
    def left(self) -> float:
        return self.position - self.half_width

    @property
    def right(self) -> float:
        return self.position + self.half_width
