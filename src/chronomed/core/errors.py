# ChronoMed
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Exceptions raised by the layout core."""

from __future__ import annotations

__all__ = ["InvalidInputError"]


class InvalidInputError(ValueError):
    """Raised when a layout operation is called outside its contract.

    Covers empty anchor sets passed to ``map``, non-finite values, and
    negative sizes. Degenerate but valid input (a single anchor, a flat
    series, nothing to place) never raises.
    """
