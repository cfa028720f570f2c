# ChronoMed
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Polylinear time to pixel scale pinned to encounter dates.

Encounters are spread evenly across the available width no matter how
irregular their dates are. Between two encounters time is interpolated
linearly; outside the encounter span a virtual one-year interval on each
side sets the slope, so medications or labs that start before the first
encounter (or continue after the last) still land at finite, ordered
positions.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from typing import Any

import numpy as np
import pandas as pd

from .errors import InvalidInputError
from .timeutil import ONE_YEAR, to_nanos, to_timestamp

__all__ = ["AnchorScale"]

log = logging.getLogger(__name__)


def _check_size(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value) or value < 0:
        raise InvalidInputError(f"{name} must be a finite non-negative number, got {value}")
    return value


class AnchorScale:
    """Map instants to horizontal pixel positions.

    Build instances with :meth:`build` or :meth:`for_step`. The control
    points hold the synthetic pre-anchor, every real anchor, and the
    synthetic post-anchor, in that order.
    """

    def __init__(
        self,
        anchors: Sequence[pd.Timestamp],
        control_times: np.ndarray,
        control_pixels: np.ndarray,
        *,
        width: float,
        padding: float,
        step: float,
    ) -> None:
        self._anchors = tuple(anchors)
        self._times = control_times
        self._pixels = control_pixels
        self._width = width
        self._padding = padding
        self._step = step

    # ------------------------------------------------------------------ construction
    @classmethod
    def build(cls, instants: Iterable[Any], target_width: float, padding: float) -> AnchorScale:
        """Spread ``instants`` evenly over ``target_width`` minus ``padding`` per side."""

        width = _check_size("target_width", target_width)
        pad = _check_size("padding", padding)
        if width < 2 * pad:
            raise InvalidInputError(
                f"target_width {width} leaves no room for padding {pad} on both sides"
            )

        anchors = sorted(to_timestamp(value) for value in instants)
        if not anchors:
            log.debug("Built empty anchor scale (width=%s)", width)
            return cls(
                (), np.empty(0, dtype=np.int64), np.empty(0), width=width, padding=pad, step=0.0
            )

        count = len(anchors)
        step = (width - 2 * pad) / max(count - 1, 1)

        times = [anchors[0] - ONE_YEAR, *anchors, anchors[-1] + ONE_YEAR]
        pixels = [pad - step]
        pixels.extend(pad + i * step for i in range(count))
        pixels.append(width - pad + step)

        control_times = np.asarray([ts.value for ts in times], dtype=np.int64)
        control_pixels = np.asarray(pixels, dtype=float)
        log.debug(
            "Built anchor scale: %d anchors, width=%.1f, padding=%.1f, step=%.2f",
            count,
            width,
            pad,
            step,
        )
        return cls(anchors, control_times, control_pixels, width=width, padding=pad, step=step)

    @classmethod
    def for_step(cls, instants: Iterable[Any], step: float, padding: float) -> AnchorScale:
        """Build a scale whose width grows with the anchor count at a fixed ``step``."""

        step = _check_size("step", step)
        pad = _check_size("padding", padding)
        values = list(instants)
        width = 2 * pad + step * max(len(values) - 1, 1)
        return cls.build(values, width, pad)

    # ------------------------------------------------------------------ properties
    @property
    def anchors(self) -> tuple[pd.Timestamp, ...]:
        return self._anchors

    @property
    def control_points(self) -> list[tuple[pd.Timestamp, float]]:
        return [
            (pd.Timestamp(int(t)), float(px)) for t, px in zip(self._times, self._pixels)
        ]

    @property
    def width(self) -> float:
        return self._width

    @property
    def padding(self) -> float:
        return self._padding

    @property
    def step(self) -> float:
        return self._step

    @property
    def is_empty(self) -> bool:
        return not self._anchors

    def __len__(self) -> int:
        return len(self._anchors)

    def __repr__(self) -> str:
        return (
            f"AnchorScale(anchors={len(self._anchors)}, width={self._width}, "
            f"padding={self._padding}, step={self._step})"
        )

    # ------------------------------------------------------------------ mapping
    def map(self, instant: Any) -> float:
        """Pixel position of ``instant``."""

        return float(self._interpolate(np.asarray([to_nanos(instant)], dtype=np.int64))[0])

    __call__ = map

    def map_many(self, instants: Iterable[Any]) -> np.ndarray:
        values = np.asarray([to_nanos(v) for v in instants], dtype=np.int64)
        if values.size == 0:
            if self.is_empty:
                raise InvalidInputError("Cannot map instants on a scale without anchors")
            return np.empty(0)
        return self._interpolate(values)

    def _interpolate(self, t: np.ndarray) -> np.ndarray:
        if self.is_empty:
            raise InvalidInputError("Cannot map instants on a scale without anchors")

        times = self._times
        pixels = self._pixels
        # side="right" lands on the last of any duplicated anchors, so a
        # zero-length segment is never used as the interpolation segment.
        idx = np.searchsorted(times, t, side="right") - 1
        idx = np.clip(idx, 0, len(times) - 2)

        t0 = times[idx]
        t1 = times[idx + 1]
        p0 = pixels[idx]
        p1 = pixels[idx + 1]
        frac = _offset(t, t0) / _offset(t1, t0)
        return p0 + frac * (p1 - p0)


# Below this magnitude an int64 difference of two epoch nanosecond values
# cannot have wrapped.
_SAFE_SPAN = float(2**62)


def _offset(t: np.ndarray, t0: np.ndarray) -> np.ndarray:
    """``t - t0`` in nanoseconds as float64, without int64 wraparound.

    Integer differences keep nanosecond precision near the anchors, where
    float64 cannot hold epoch nanoseconds exactly. Far from them (e.g.
    centuries before the first anchor) the integer subtraction can
    overflow, so the float difference is used instead.
    """

    approx = t.astype(float) - t0.astype(float)
    with np.errstate(over="ignore"):
        exact = (t - t0).astype(float)
    return np.where(np.abs(approx) < _SAFE_SPAN, exact, approx)
