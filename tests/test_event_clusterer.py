import pandas as pd
import pytest

from chronomed.core.errors import InvalidInputError
from chronomed.core.events import (
    cluster,
    cluster_lanes,
    format_cluster_date,
    format_cluster_label,
    total_count,
)
from chronomed.core.scale import AnchorScale
from chronomed.core.types import EventCluster, PointEvent


def _scale():
    return AnchorScale.build(["2020-01-01", "2020-06-01", "2021-01-01"], 900.0, 50.0)


def _event(instant, title, note=""):
    return PointEvent(instant=instant, title=title, note=note)


def test_same_day_events_share_a_cluster():
    events = [
        _event("2020-03-05T15:00:00", "Biopsy"),
        _event("2020-03-05T09:00:00", "Admission"),
        _event("2020-08-01T12:00:00", "Discharge"),
    ]
    clusters = cluster(events, _scale())

    assert [len(c) for c in clusters] == [2, 1]
    first = clusters[0]
    assert [e.title for e in first.events] == ["Biopsy", "Admission"]
    # The first event in input order is the representative, even if later in the day.
    assert first.instant == "2020-03-05T15:00:00"
    assert first.position == pytest.approx(_scale().map("2020-03-05T15:00:00"))


def test_clusters_are_sorted_by_instant():
    events = [
        _event("2020-11-01", "C"),
        _event("2020-02-01", "A"),
        _event("2020-07-01", "B"),
    ]
    clusters = cluster(events, _scale())

    titles = [c.events[0].title for c in clusters]
    assert titles == ["A", "B", "C"]
    positions = [c.position for c in clusters]
    assert positions == sorted(positions)


def test_grouping_uses_utc_calendar_date():
    events = [
        # 2020-03-05 23:30 at UTC-5 is already 2020-03-06 in UTC.
        _event("2020-03-05T23:30:00-05:00", "Late"),
        _event("2020-03-06T02:00:00Z", "Early"),
        _event("2020-03-05T10:00:00Z", "Morning"),
    ]
    clusters = cluster(events, _scale())

    assert [[e.title for e in c.events] for c in clusters] == [["Morning"], ["Late", "Early"]]


def test_accepts_timestamps():
    events = [
        _event(pd.Timestamp("2020-04-01 08:00"), "X"),
        _event(pd.Timestamp("2020-04-01"), "Y"),
    ]
    clusters = cluster(events, _scale())

    assert len(clusters) == 1
    assert total_count(clusters) == 2


def test_no_events_gives_no_clusters():
    assert cluster([], _scale()) == []
    assert cluster([], AnchorScale.build([], 900.0, 50.0)) == []


def test_events_on_empty_scale_are_rejected():
    with pytest.raises(InvalidInputError):
        cluster([_event("2020-01-01", "X")], AnchorScale.build([], 900.0, 50.0))


def test_unparseable_event_instant_is_rejected():
    with pytest.raises(InvalidInputError):
        cluster([_event("someday", "X")], _scale())


def test_cluster_lanes_separate_close_cards():
    clusters = [
        EventCluster(instant="2020-01-01", events=(_event("2020-01-01", "A"),), position=100.0),
        EventCluster(instant="2020-01-02", events=(_event("2020-01-02", "B"),), position=250.0),
        EventCluster(instant="2020-03-01", events=(_event("2020-03-01", "C"),), position=400.0),
    ]

    rows = cluster_lanes(clusters, card_width=280.0, min_gap=20.0)

    assert rows == [0, 1, 0]


def test_labels():
    single = EventCluster(
        instant="2021-03-05", events=(_event("2021-03-05", "A"),), position=0.0
    )
    triple = EventCluster(
        instant="2021-03-05T18:00:00",
        events=tuple(_event("2021-03-05", t) for t in "ABC"),
        position=0.0,
    )

    assert format_cluster_date(single) == "Mar 5, 2021"
    assert format_cluster_label(single) == "Mar 5, 2021"
    assert format_cluster_label(triple) == "Mar 5, 2021 (+2)"
    assert total_count([single, triple]) == 4
