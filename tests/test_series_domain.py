import pytest

from chronomed.core import domain
from chronomed.core.errors import InvalidInputError
from chronomed.core.types import ReferenceBand, ValueSample


def _samples(*values):
    return [ValueSample(instant=f"2020-01-{i + 1:02d}", value=v) for i, v in enumerate(values)]


def test_band_widens_domain_and_sets_fractions():
    result = domain.compute(_samples(5.0, 15.0), ReferenceBand(8.0, 12.0))

    assert (result.domain_min, result.domain_max) == pytest.approx((3.0, 17.0))
    assert result.band_fraction_low == pytest.approx(5 / 14)
    assert result.band_fraction_high == pytest.approx(9 / 14)


def test_band_outside_data_is_included():
    result = domain.compute(_samples(5.0, 6.0), ReferenceBand(10.0, 20.0))

    assert result.domain_min <= 5.0
    assert result.domain_max >= 20.0
    assert 0.0 <= result.band_fraction_low <= result.band_fraction_high <= 1.0


def test_without_band_fractions_span_whole_chart():
    result = domain.compute(_samples(1.0, 3.0))

    assert (result.domain_min, result.domain_max) == pytest.approx((0.6, 3.4))
    assert result.band_fraction_low == 0.0
    assert result.band_fraction_high == 1.0


@pytest.mark.parametrize(
    "values, expected",
    [
        ((4.0, 4.0), (3.2, 4.8)),
        ((0.0, 0.0), (0.0, 0.2)),
        ((-5.0, 5.0), (-7.0, 7.0)),
        ((-5.0, -5.0), (-5.2, -4.8)),
    ],
)
def test_buffer_and_zero_span(values, expected):
    result = domain.compute(_samples(*values))

    assert (result.domain_min, result.domain_max) == pytest.approx(expected)
    assert result.domain_min < result.domain_max


def test_non_negative_series_is_clamped_at_zero():
    result = domain.compute(_samples(1.0, 2.0), ReferenceBand(0.0, 10.0))

    assert (result.domain_min, result.domain_max) == pytest.approx((0.0, 12.0))


def test_negative_band_disables_clamp():
    result = domain.compute(_samples(0.0, 2.0), ReferenceBand(-1.0, 3.0))

    assert (result.domain_min, result.domain_max) == pytest.approx((-1.8, 3.8))


def test_plain_numbers_are_accepted():
    result = domain.compute([5.0, 15.0], ReferenceBand(8.0, 12.0))

    assert result.domain_min == pytest.approx(3.0)


def test_margins_shift_band_fractions():
    result = domain.compute(
        _samples(5.0, 15.0),
        ReferenceBand(8.0, 12.0),
        chart_height=140.0,
        margin_top=24.0,
        margin_bottom=20.0,
    )

    # Values map onto [120, 24] px; fractions are of the full 140 px.
    top_px = 120.0 - (12.0 - 3.0) * 96.0 / 14.0
    bottom_px = 120.0 - (8.0 - 3.0) * 96.0 / 14.0
    assert result.band_fraction_low == pytest.approx(top_px / 140.0)
    assert result.band_fraction_high == pytest.approx(bottom_px / 140.0)
    assert result.value_to_pixel(result.domain_max) == pytest.approx(24.0)
    assert result.value_to_pixel(result.domain_min) == pytest.approx(120.0)


def test_value_to_pixel_is_inverted():
    result = domain.compute(_samples(0.0, 10.0), chart_height=100.0)

    assert result.value_to_pixel(result.domain_min) == pytest.approx(100.0)
    assert result.value_to_pixel(result.domain_max) == pytest.approx(0.0)


def test_empty_series_is_rejected():
    with pytest.raises(InvalidInputError):
        domain.compute([])


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), "abc", None])
def test_bad_values_are_rejected(bad):
    with pytest.raises(InvalidInputError):
        domain.compute([1.0, bad])


def test_inverted_band_is_rejected():
    with pytest.raises(InvalidInputError):
        ReferenceBand(5.0, 1.0)


def test_bad_chart_geometry_is_rejected():
    with pytest.raises(InvalidInputError):
        domain.compute([1.0, 2.0], chart_height=0.0)
    with pytest.raises(InvalidInputError):
        domain.compute([1.0, 2.0], chart_height=100.0, margin_top=-1.0)


@pytest.mark.parametrize("top, bottom", [(24.0, 20.0), (30.0, 0.0), (15.0, 15.0)])
def test_margins_must_leave_plot_area(top, bottom):
    with pytest.raises(InvalidInputError):
        domain.compute(
            _samples(5.0, 15.0),
            ReferenceBand(8.0, 12.0),
            chart_height=30.0,
            margin_top=top,
            margin_bottom=bottom,
        )
