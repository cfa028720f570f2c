# ChronoMed
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Numeric plotting domain for a single value series."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import replace

import numpy as np

from .errors import InvalidInputError
from .types import DomainResult, ReferenceBand, ValueSample

__all__ = ["compute", "BUFFER_FACTOR"]

log = logging.getLogger(__name__)

BUFFER_FACTOR = 0.2


def _sample_values(samples: Iterable[ValueSample | float]) -> np.ndarray:
    values = []
    for sample in samples:
        raw = sample.value if isinstance(sample, ValueSample) else sample
        try:
            values.append(float(raw))
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(f"Sample value {raw!r} is not numeric") from exc
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        raise InvalidInputError("Cannot compute a domain for an empty series")
    if not np.all(np.isfinite(arr)):
        raise InvalidInputError("Series contains non-finite values")
    return arr


def compute(
    samples: Iterable[ValueSample | float],
    band: ReferenceBand | None = None,
    *,
    chart_height: float = 1.0,
    margin_top: float = 0.0,
    margin_bottom: float = 0.0,
) -> DomainResult:
    """Return the plotting domain for ``samples`` and the band's colour boundaries.

    The domain always contains every sample and the whole reference band,
    padded by a proportional buffer. A series that is entirely
    non-negative (band included) never gets a negative lower bound.

    The band fractions are pixel positions of ``band.max`` and ``band.min``
    under the value to pixel map, divided by ``chart_height`` and clamped
    to ``[0, 1]``. They feed a vertical gradient defined in pixel space,
    which is why they can only be derived after the domain is fixed.
    """

    values = _sample_values(samples)
    height = float(chart_height)
    if not math.isfinite(height) or height <= 0:
        raise InvalidInputError(f"chart_height must be positive, got {chart_height}")
    if margin_top < 0 or margin_bottom < 0:
        raise InvalidInputError("Chart margins must be non-negative")
    if margin_top + margin_bottom >= height:
        raise InvalidInputError(
            f"Chart margins {margin_top} + {margin_bottom} leave no plot area in height {height}"
        )

    data_min = float(values.min())
    data_max = float(values.max())
    observed_min, observed_max = data_min, data_max
    if band is not None:
        observed_min = min(observed_min, band.min)
        observed_max = max(observed_max, band.max)

    span = observed_max - observed_min
    if span > 0:
        buffer = span * BUFFER_FACTOR
    else:
        buffer = max(observed_max, 1.0) * BUFFER_FACTOR

    domain_min = observed_min - buffer
    domain_max = observed_max + buffer
    if data_min >= 0 and (band is None or band.min >= 0):
        domain_min = max(0.0, domain_min)

    result = DomainResult(
        domain_min=domain_min,
        domain_max=domain_max,
        band_fraction_low=0.0,
        band_fraction_high=1.0,
        chart_height=height,
        margin_top=float(margin_top),
        margin_bottom=float(margin_bottom),
    )
    if band is None:
        return result

    frac_top = min(1.0, max(0.0, result.value_to_pixel(band.max) / height))
    frac_bottom = min(1.0, max(0.0, result.value_to_pixel(band.min) / height))
    log.debug(
        "Domain [%.4g, %.4g] with band %.4g..%.4g -> fractions %.3f/%.3f",
        domain_min,
        domain_max,
        band.min,
        band.max,
        frac_top,
        frac_bottom,
    )
    return replace(result, band_fraction_low=frac_top, band_fraction_high=frac_bottom)
