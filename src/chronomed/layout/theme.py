# ChronoMed
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Track colours and the banded gradient derived from a value domain."""

from __future__ import annotations

from dataclasses import dataclass

from chronomed.core.types import DomainResult

__all__ = [
    "PALETTE",
    "MedicationColors",
    "GradientStop",
    "medication_colors",
    "risk_color",
    "sample_color",
    "band_gradient_stops",
    "PATHWAY_STATUSES",
    "pathway_status",
    "pathway_color",
]

PALETTE = {
    # Surfaces and grid
    "grid_line": "#E5E7EB",
    "grid_dot": "#CBD5E1",
    "axis_text": "#475569",
    # Encounters
    "encounter_card": "#FFFFFF",
    "encounter_edge": "#E2E8F0",
    "encounter_dot": "#3B82F6",
    # Labs
    "in_range": "#10B981",
    "out_of_range": "#EF4444",
    # Risk
    "risk_low": "#22C55E",
    "risk_medium": "#EAB308",
    "risk_high": "#EF4444",
    # Key events
    "event_card": "#FFFFFF",
    "event_edge": "#FECACA",
    "event_dot": "#EF4444",
    "event_connector": "#FCA5A5",
}

RISK_MEDIUM_ABOVE = 4.0
RISK_HIGH_ABOVE = 7.0

# First match wins; anything unmatched is "neutral".
_PATHWAY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (
        "critical",
        ("crisis", "injury", "toxic", "failure", "severe", "dili", "encephalopathy"),
    ),
    ("warning", ("risk", "warning", "missed", "exposure", "continued", "accumulation")),
    ("good", ("recovery", "cessation", "stable", "outcome", "normal")),
)

_PATHWAY_COLORS = {
    "critical": "#EF4444",
    "warning": "#F59E0B",
    "good": "#10B981",
    "neutral": "#3B82F6",
}

PATHWAY_STATUSES = tuple(_PATHWAY_COLORS)


@dataclass(frozen=True)
class MedicationColors:
    fill: str
    edge: str
    dot: str


_DEFAULT_MEDICATION = MedicationColors(fill="#D1FAE5", edge="#6EE7B7", dot="#10B981")

# Checked in order against the lower-cased drug name.
_MEDICATION_KEYWORDS: tuple[tuple[str, MedicationColors], ...] = (
    ("methotrexate", MedicationColors(fill="#F3E8FF", edge="#D8B4FE", dot="#A855F7")),
    ("lisinopril", MedicationColors(fill="#FFEDD5", edge="#FDBA74", dot="#F97316")),
    ("trimethoprim", MedicationColors(fill="#FEE2E2", edge="#FCA5A5", dot="#EF4444")),
)


@dataclass(frozen=True)
class GradientStop:
    offset: float
    color: str


def medication_colors(name: str) -> MedicationColors:
    lowered = name.lower()
    for keyword, colors in _MEDICATION_KEYWORDS:
        if keyword in lowered:
            return colors
    return _DEFAULT_MEDICATION


def risk_color(score: float) -> str:
    if score > RISK_HIGH_ABOVE:
        return PALETTE["risk_high"]
    if score > RISK_MEDIUM_ABOVE:
        return PALETTE["risk_medium"]
    return PALETTE["risk_low"]


def sample_color(abnormal: bool) -> str:
    return PALETTE["out_of_range"] if abnormal else PALETTE["in_range"]


def band_gradient_stops(domain: DomainResult, *, has_band: bool) -> list[GradientStop]:
    """Vertical gradient stops, top (0) to bottom (1), in chart pixel space.

    With a band: out-of-range above the band, in-range inside it, and
    out-of-range below it, using hard stops at the band fractions.
    """

    in_range = PALETTE["in_range"]
    if not has_band:
        return [GradientStop(0.0, in_range), GradientStop(1.0, in_range)]
    out = PALETTE["out_of_range"]
    low = domain.band_fraction_low
    high = domain.band_fraction_high
    return [
        GradientStop(0.0, out),
        GradientStop(low, out),
        GradientStop(low, in_range),
        GradientStop(high, in_range),
        GradientStop(high, out),
        GradientStop(1.0, out),
    ]


def pathway_status(title: str, description: str = "") -> str:
    """Classify a causal pathway step by the keywords in its wording."""

    text = f"{title} {description}".lower()
    for status, keywords in _PATHWAY_KEYWORDS:
        if any(word in text for word in keywords):
            return status
    return "neutral"


def pathway_color(status: str) -> str:
    return _PATHWAY_COLORS[status]
