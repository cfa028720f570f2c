"""Matplotlib rendering of timeline layouts."""

from .figure import build_figure, export_figure

__all__ = ["build_figure", "export_figure"]
