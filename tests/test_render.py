import logging

import matplotlib

matplotlib.use("Agg")

import pytest

from chronomed.core.errors import InvalidInputError
from chronomed.io import parse_timeline
from chronomed.layout import build_timeline_layout
from chronomed.render import build_figure, export_figure
from chronomed.render import figure as figure_module
from chronomed.render.figure import AXIS_HEIGHT


@pytest.fixture
def layout(document, now):
    return build_timeline_layout(parse_timeline(document), now=now)


def test_build_figure_matches_layout_size(layout):
    fig = build_figure(layout, dpi=100)

    width_in, height_in = fig.get_size_inches()
    assert width_in * 100 == pytest.approx(layout.width)
    assert height_in * 100 == pytest.approx(AXIS_HEIGHT + layout.height)
    ax = fig.axes[0]
    assert ax.get_ylim()[0] > ax.get_ylim()[1]
    # Encounter and event cards are drawn as patches.
    assert len(ax.patches) >= len(layout.encounters.cards) + len(layout.events.cards)


def test_empty_layout_cannot_be_rendered(now):
    layout = build_timeline_layout(parse_timeline({}), now=now)

    with pytest.raises(InvalidInputError):
        build_figure(layout)


def test_export_png(layout, tmp_path):
    out = export_figure(layout, tmp_path / "timeline.png", dpi=50)

    assert out.exists()
    assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_export_svg(layout, tmp_path):
    out = export_figure(layout, tmp_path / "timeline.svg")

    assert "<svg" in out.read_text(encoding="utf-8")


def test_export_clamps_oversized_output(layout, tmp_path, caplog, monkeypatch):
    monkeypatch.setattr(figure_module, "_MAX_PIXELS", 600)

    with caplog.at_level(logging.WARNING, logger="chronomed.render.figure"):
        out = export_figure(layout, tmp_path / "big.png", dpi=100)

    assert out.exists()
    assert any("clamped" in r.getMessage() for r in caplog.records)


def test_lazy_package_exports():
    import chronomed

    assert chronomed.build_figure is build_figure
    assert chronomed.export_figure is export_figure
    with pytest.raises(AttributeError):
        chronomed.not_a_thing  # noqa: B018


def test_wide_pathway_widens_figure(document, now):
    document["causalNodes"] = [{"title": f"Step {i}"} for i in range(8)]
    layout = build_timeline_layout(parse_timeline(document), now=now)

    fig = build_figure(layout, dpi=100)

    assert layout.pathways.width > layout.width
    assert fig.get_size_inches()[0] * 100 == pytest.approx(layout.pathways.width)
