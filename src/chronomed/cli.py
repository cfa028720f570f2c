from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any

from .config import LayoutConfig
from .core.errors import InvalidInputError
from .io import TimelineLoadError, export_layout_csv, load_timeline
from .layout import TimelineLayout, build_timeline_layout
from .logging_config import setup_logging

log = logging.getLogger(__name__)

EXIT_INPUT_ERROR = 2


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _layout_to_dict(layout: TimelineLayout) -> dict[str, Any]:
    payload = {
        name: asdict(getattr(layout, name)) if is_dataclass(getattr(layout, name)) else None
        for name in ("encounters", "medications", "risk", "events", "pathways")
    }
    payload.update(
        width=layout.width,
        height=layout.height,
        now=layout.now,
        anchors=[ts.isoformat() for ts in layout.scale.anchors],
        axis=[asdict(tick) for tick in layout.axis],
        labs=[asdict(chart) for chart in layout.labs],
        warnings=list(layout.warnings),
    )
    return payload


def _build_layout(args: argparse.Namespace) -> TimelineLayout:
    config = LayoutConfig.from_env().with_overrides(
        width=args.width, padding=args.padding, step=args.step
    )
    record = load_timeline(args.path)
    return build_timeline_layout(record, config, now=args.now)


def cmd_layout(args: argparse.Namespace) -> None:
    layout = _build_layout(args)
    print(json.dumps(_layout_to_dict(layout), indent=2, default=_json_default))


def cmd_table(args: argparse.Namespace) -> None:
    layout = _build_layout(args)
    out = export_layout_csv(layout, args.out)
    print(f"Wrote {out}")


def cmd_render(args: argparse.Namespace) -> None:
    # Matplotlib is only imported when a figure is requested.
    from .render import export_figure

    layout = _build_layout(args)
    out = export_figure(layout, args.out, dpi=args.dpi)
    print(f"Wrote {out}")


def _add_layout_options(sp: argparse.ArgumentParser) -> None:
    sp.add_argument("path", type=Path, help="patient timeline JSON document")
    sp.add_argument("--width", type=float, default=None)
    sp.add_argument("--padding", type=float, default=None)
    sp.add_argument(
        "--step",
        type=float,
        default=None,
        help="fixed pixels between encounters; overrides --width",
    )
    sp.add_argument(
        "--now",
        default=None,
        help="ISO instant used as the end of open medication courses (default: current UTC time)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser("chronomed")
    parser.add_argument("--verbose", "-v", action="store_true", help="debug output on stderr")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("layout", help="print the computed layout as JSON")
    _add_layout_options(sp)
    sp.set_defaults(func=cmd_layout)

    sp = sub.add_parser("table", help="write the layout as a CSV table")
    _add_layout_options(sp)
    sp.add_argument("--out", type=Path, required=True)
    sp.set_defaults(func=cmd_table)

    sp = sub.add_parser("render", help="draw the timeline to an image file")
    _add_layout_options(sp)
    sp.add_argument("--out", type=Path, required=True)
    sp.add_argument("--dpi", type=float, default=100.0)
    sp.set_defaults(func=cmd_render)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(
        console_level=logging.DEBUG if args.verbose else logging.WARNING,
        to_file=False,
    )
    try:
        args.func(args)
    except (TimelineLoadError, InvalidInputError) as exc:
        print(f"chronomed: error: {exc}", file=sys.stderr)
        return EXIT_INPUT_ERROR
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
