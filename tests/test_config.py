import logging

import pytest

from chronomed.config import ENV_VAR, LayoutConfig, parse_overrides
from chronomed.core.errors import InvalidInputError


def test_defaults():
    config = LayoutConfig()

    assert config.width == 1200.0
    assert config.padding == 160.0
    assert config.step is None
    assert config.lab_chart_height == 140.0
    assert config.event_card_width == 280.0


def test_with_overrides_ignores_none():
    config = LayoutConfig().with_overrides(width=900, padding=None)

    assert config.width == 900.0
    assert config.padding == 160.0


def test_with_overrides_rejects_unknown_key():
    with pytest.raises(InvalidInputError):
        LayoutConfig().with_overrides(colour=1)


def test_validation():
    with pytest.raises(InvalidInputError):
        LayoutConfig(width=-1.0)
    with pytest.raises(InvalidInputError):
        LayoutConfig(width=100.0, padding=60.0)
    # A fixed step makes the width irrelevant.
    assert LayoutConfig(width=100.0, padding=60.0, step=150.0).step == 150.0


def test_parse_overrides():
    assert parse_overrides("width=900, padding=50,step=120") == {
        "width": 900.0,
        "padding": 50.0,
        "step": 120.0,
    }
    assert parse_overrides("Event-Gap=12") == {"event_gap": 12.0}
    assert parse_overrides("") == {}


def test_parse_overrides_warns_and_skips_bad_tokens(caplog):
    with caplog.at_level(logging.WARNING, logger="chronomed.config"):
        result = parse_overrides("width=abc,bogus=1,padding,width=800")

    assert result == {"width": 800.0}
    messages = " ".join(r.getMessage() for r in caplog.records)
    assert "non-numeric" in messages
    assert "unknown" in messages
    assert "without a value" in messages


def test_from_env(monkeypatch):
    monkeypatch.setenv(ENV_VAR, "width=900,padding=50")

    config = LayoutConfig.from_env()
    assert (config.width, config.padding) == (900.0, 50.0)

    explicit = LayoutConfig.from_env("width=700")
    assert (explicit.width, explicit.padding) == (700.0, 160.0)


def test_from_env_without_variable(monkeypatch):
    monkeypatch.delenv(ENV_VAR, raising=False)

    assert LayoutConfig.from_env() == LayoutConfig()


def test_to_dict_round_trips():
    config = LayoutConfig(width=900.0)

    assert LayoutConfig(**config.to_dict()) == config


@pytest.mark.parametrize(
    "overrides",
    [
        {"lab_chart_height": 30.0},
        {"lab_margin_top": 100.0, "lab_margin_bottom": 40.0},
        {"risk_height": 40.0},
    ],
)
def test_chart_margins_must_fit_height(overrides):
    with pytest.raises(InvalidInputError):
        LayoutConfig(**overrides)


def test_env_chart_height_below_margins_is_rejected():
    with pytest.raises(InvalidInputError):
        LayoutConfig.from_env("lab_chart_height=30")


def test_with_overrides_rejects_non_numeric_value():
    with pytest.raises(InvalidInputError, match="must be a number"):
        LayoutConfig().with_overrides(width="wide")
