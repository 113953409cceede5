"""Tests for parsing raw volume input into observation series"""

import logging
import math

import pandas as pd
import pytest

from traffic_trends.data.series import (
    Direction,
    Observation,
    StationInfo,
    parse_series,
    parse_volumes,
    series_to_frame
)


class TestParseVolumes:

    def test_splits_on_any_whitespace(self):
        assert parse_volumes("5200\t5100  4950\n4800") == [5200.0, 5100.0, 4950.0, 4800.0]

    def test_drops_non_numeric_tokens(self):
        assert parse_volumes("100 abc 200 - nan 300") == [100.0, 200.0, 300.0]

    def test_uses_leading_number_of_token(self):
        assert parse_volumes("12veh 3.5e2 .5") == [12.0, 350.0, 0.5]

    def test_keeps_negative_and_zero(self):
        assert parse_volumes("-5 0") == [-5.0, 0.0]

    def test_infinity_token(self):
        assert parse_volumes("Infinity") == [math.inf]

    @pytest.mark.parametrize("raw", ["", "   \n\t ", "abc def"])
    def test_empty_input(self, raw):
        assert parse_volumes(raw) == []


class TestParseSeries:

    def test_default_station_example(self, default_series):
        assert [o.year for o in default_series] == [2019, 2020, 2021, 2022, 2023, 2024]
        assert [o.volume for o in default_series] == [4500, 4650, 4800, 4950, 5100, 5200]

        rates = [o.growth_rate for o in default_series]
        assert rates[0] == 0
        assert rates[1:] == pytest.approx([3.3333, 3.2258, 3.125, 3.0303, 1.9608], abs=1e-4)

    def test_years_cover_anchor_backwards_sorted_ascending(self):
        series = parse_series(2010, "1 2 x 3 4")

        assert [o.year for o in series] == [2007, 2008, 2009, 2010]
        # newest first in the input, oldest first in the series
        assert [o.volume for o in series] == [4.0, 3.0, 2.0, 1.0]

    def test_growth_rate_definition(self):
        series = parse_series(2024, "110 100 80")

        assert series[0].growth_rate == 0
        assert series[1].growth_rate == pytest.approx(25.0)
        assert series[2].growth_rate == pytest.approx(10.0)

    def test_zero_previous_volume_gives_zero_growth(self):
        series = parse_series(2024, "100 0 50")

        assert [(o.year, o.volume) for o in series] == [(2022, 50.0), (2023, 0.0), (2024, 100.0)]
        assert series[1].growth_rate == pytest.approx(-100.0)
        assert series[2].growth_rate == 0

    def test_single_value_has_zero_growth(self):
        series = parse_series(2024, "5000")
        assert series == (Observation(year=2024, volume=5000.0, growth_rate=0.0),)

    def test_empty_input_gives_empty_series(self):
        assert parse_series(2024, "") == ()
        assert parse_series(2024, "n/a") == ()

    def test_deterministic(self):
        assert parse_series(2024, "3 2 1") == parse_series(2024, "3 2 1")

    def test_series_is_immutable(self, default_series):
        assert isinstance(default_series, tuple)
        with pytest.raises(AttributeError):
            default_series[0].volume = 1.0

    @pytest.mark.parametrize("anchor", ["2024", 2024.0, None, True])
    def test_anchor_must_be_integer(self, anchor):
        with pytest.raises(TypeError):
            parse_series(anchor, "1 2 3")


def test_series_to_frame(default_series):
    df = series_to_frame(default_series)

    assert list(df.columns) == ['year', 'volume', 'growth_rate']
    assert len(df) == 6
    assert df['year'].is_monotonic_increasing
    assert df.iloc[-1]['volume'] == 5200


def test_series_to_frame_empty():
    df = series_to_frame(())
    assert isinstance(df, pd.DataFrame)
    assert df.empty


def test_station_info_defaults():
    station = StationInfo(road="México - Querétaro")
    assert station.direction == Direction.S1
    assert Direction("S0") is Direction.S0


@pytest.mark.parametrize("raw", ["Infinity 5", "1e999 5"])
def test_infinite_token_is_kept_with_warning(raw, caplog):
    with caplog.at_level(logging.WARNING, logger='traffic_trends'):
        volumes = parse_volumes(raw)

    assert volumes == [math.inf, 5.0]
    assert 'infinite volume' in caplog.text
