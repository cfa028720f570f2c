"""Instant coercion shared by the scale and the event clusterer."""

from __future__ import annotations

import datetime as _dt
from typing import Any

import numpy as np
import pandas as pd

from .errors import InvalidInputError

__all__ = ["ONE_YEAR", "to_timestamp", "to_nanos", "calendar_date", "as_nanos_array", "format_day"]

# Virtual interval used for the synthetic anchors outside the encounter span.
ONE_YEAR = pd.DateOffset(years=1)


def to_timestamp(value: Any) -> pd.Timestamp:
    """Return ``value`` as a naive UTC ``pd.Timestamp``.

    Accepts ``datetime``, ``date``, ISO strings, ``numpy.datetime64`` and
    ``pd.Timestamp``. Aware values are converted to UTC; naive values are
    taken as UTC already.
    """

    if value is None:
        raise InvalidInputError("Instant must not be None")
    if isinstance(value, _dt.date) and not isinstance(value, _dt.datetime):
        value = _dt.datetime(value.year, value.month, value.day)
    try:
        ts = pd.Timestamp(value)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Cannot interpret {value!r} as an instant") from exc
    if ts is pd.NaT or pd.isna(ts):
        raise InvalidInputError(f"Instant {value!r} is not a valid time")
    if ts.tzinfo is not None:
        ts = ts.tz_convert("UTC").tz_localize(None)
    return ts


def to_nanos(value: Any) -> int:
    """Nanoseconds since the epoch for ``value`` (naive UTC)."""

    return int(to_timestamp(value).value)


def calendar_date(value: Any) -> _dt.date:
    """UTC calendar date of ``value``; used as the clustering key."""

    return to_timestamp(value).date()


def as_nanos_array(values: Any) -> np.ndarray:
    return np.asarray([to_nanos(v) for v in values], dtype=np.int64)


def format_day(value: Any) -> str:
    """Short calendar label, e.g. ``"Aug 10, 2015"``."""

    ts = to_timestamp(value)
    return f"{ts.strftime('%b')} {ts.day}, {ts.year}"
