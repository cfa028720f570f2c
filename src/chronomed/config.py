# ChronoMed
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Layout parameters with overrides from the ``CHRONOMED_LAYOUT`` environment variable."""

from __future__ import annotations

import logging
import math
import os
from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass, fields, replace
from typing import Any

from chronomed.core.errors import InvalidInputError

__all__ = ["ENV_VAR", "LayoutConfig", "parse_overrides"]

log = logging.getLogger(__name__)

ENV_VAR = "CHRONOMED_LAYOUT"


@dataclass(frozen=True)
class LayoutConfig:
    """Viewport and card geometry, in pixels."""

    width: float = 1200.0
    padding: float = 160.0
    # When set, the canvas width grows with the encounter count instead.
    step: float | None = None

    encounter_card_width: float = 260.0
    encounter_card_height: float = 180.0
    encounter_gap: float = 20.0

    medication_row_height: float = 20.0
    medication_min_width: float = 10.0

    lab_chart_height: float = 140.0
    lab_margin_top: float = 24.0
    lab_margin_bottom: float = 20.0

    risk_height: float = 160.0
    risk_margin: float = 20.0

    event_card_width: float = 280.0
    event_gap: float = 20.0
    event_card_top: float = 40.0
    event_row_pitch: float = 200.0
    event_row_height: float = 240.0
    event_track_padding: float = 60.0

    pathway_card_width: float = 256.0
    pathway_gap: float = 16.0
    pathway_padding: float = 32.0
    pathway_height: float = 260.0

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if not math.isfinite(value) or value < 0:
                raise InvalidInputError(
                    f"Layout setting {f.name} must be non-negative, got {value}"
                )
        if self.step is None and self.width < 2 * self.padding:
            raise InvalidInputError(
                f"width {self.width} is smaller than twice the padding {self.padding}"
            )
        charts = (
            ("lab", self.lab_chart_height, self.lab_margin_top, self.lab_margin_bottom),
            ("risk", self.risk_height, self.risk_margin, self.risk_margin),
        )
        for name, height, top, bottom in charts:
            if top + bottom >= height:
                raise InvalidInputError(
                    f"{name} chart margins {top} + {bottom} leave no plot area in height {height}"
                )

    def with_overrides(self, **overrides: Any) -> LayoutConfig:
        """Return a copy with ``overrides`` applied; ``None`` values are ignored."""

        known = {f.name for f in fields(self)}
        updates: dict[str, Any] = {}
        for key, value in overrides.items():
            if key not in known:
                raise InvalidInputError(f"Unknown layout setting {key!r}")
            if value is None:
                continue
            try:
                updates[key] = float(value)
            except (TypeError, ValueError) as exc:
                raise InvalidInputError(
                    f"Layout setting {key} must be a number, got {value!r}"
                ) from exc
        return replace(self, **updates) if updates else self

    @classmethod
    def from_env(cls, env_value: str | None = None) -> LayoutConfig:
        raw = env_value if env_value is not None else os.environ.get(ENV_VAR, "")
        return cls().with_overrides(**parse_overrides(raw))

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _normalise(name: str) -> str:
    return name.strip().lower().replace("-", "_")


def _tokenise(raw: str) -> Iterable[str]:
    for token in raw.split(","):
        clean = token.strip()
        if clean:
            yield clean


def parse_overrides(raw: str, known: Mapping[str, Any] | None = None) -> dict[str, float]:
    """Parse ``"width=900,padding=50"`` into a settings mapping.

    Unknown keys and values that are not numbers are dropped with a warning.
    """

    names = set(known) if known is not None else {f.name for f in fields(LayoutConfig)}
    overrides: dict[str, float] = {}
    for token in _tokenise(raw):
        if "=" not in token:
            log.warning("Ignoring layout override without a value: %r", token)
            continue
        key, value = token.split("=", 1)
        key = _normalise(key)
        if key not in names:
            log.warning("Ignoring unknown layout setting %r", key)
            continue
        try:
            overrides[key] = float(value)
        except ValueError:
            log.warning("Ignoring non-numeric value for %s: %r", key, value)
    return overrides
