# ChronoMed
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Load a patient timeline document from JSON."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from .models import PatientTimeline

__all__ = ["TimelineLoadError", "load_timeline", "parse_timeline"]

log = logging.getLogger(__name__)


class TimelineLoadError(RuntimeError):
    """Raised when a timeline document cannot be read or validated."""

    def __init__(self, path: Path | str | None, message: str) -> None:
        self.path = Path(path) if path is not None else None
        prefix = f"{self.path}: " if self.path is not None else ""
        super().__init__(f"{prefix}{message}")


def parse_timeline(data: dict, *, path: Path | str | None = None) -> PatientTimeline:
    """Validate an already decoded document."""

    try:
        return PatientTimeline.model_validate(data)
    except ValidationError as exc:
        message = f"invalid timeline document ({exc.error_count()} errors)\n{exc}"
        raise TimelineLoadError(path, message) from exc


def load_timeline(path: Path | str) -> PatientTimeline:
    """Read ``path`` (UTF-8 JSON) and return the validated timeline."""

    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise TimelineLoadError(path, "file not found") from exc
    except OSError as exc:
        raise TimelineLoadError(path, f"cannot read file: {exc}") from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise TimelineLoadError(path, f"invalid JSON at line {exc.lineno}: {exc.msg}") from exc
    if not isinstance(data, dict):
        raise TimelineLoadError(path, "top-level JSON value must be an object")

    timeline = parse_timeline(data, path=path)
    log.info(
        "Loaded timeline %s: %d encounters, %d medications, %d labs, %d events, %d risk points",
        path.name,
        len(timeline.encounters),
        len(timeline.medications),
        len(timeline.labs),
        len(timeline.key_events),
        len(timeline.risks),
    )
    return timeline
