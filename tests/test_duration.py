"""Tests for duration parsing and scene counting."""

import math

import pytest

from apa.duration import (
    MINUTE_UNITS,
    SCENE_WINDOW_SECONDS,
    SECOND_UNITS,
    format_duration,
    parse_duration,
    scene_count,
)
from apa.errors import ErrorKind, InvalidDurationError


class TestParseDuration:
    @pytest.mark.parametrize("unit", sorted(MINUTE_UNITS))
    @pytest.mark.parametrize("value", [1, 2.5, 10])
    def test_minute_units(self, unit, value):
        assert parse_duration(f"{value}{unit}") == value * 60
        assert parse_duration(f"{value} {unit}") == value * 60

    @pytest.mark.parametrize("unit", sorted(SECOND_UNITS))
    @pytest.mark.parametrize("value", [1, 7.5, 45])
    def test_second_units(self, unit, value):
        assert parse_duration(f"{value}{unit}") == value
        assert parse_duration(f"{value} {unit}") == value

    @pytest.mark.parametrize(
        "expression, expected",
        [
            ("1m 30s", 90),
            ("2m 15s", 135),
            ("45", 45),
            ("1 phút", 60),
            ("30 giây", 30),
            ("1 phút 30s", 90),
            ("1m30s", 90),
            ("30s 1m", 90),
            ("2 Minutes", 120),
            ("  90 SECONDS  ", 90),
            ("1,5 phút", 90),
            ("0.5m", 30),
            (".5m", 30),
            ("12.5", 12.5),
        ],
    )
    def test_examples(self, expression, expected):
        assert parse_duration(expression) == expected

    def test_decomposed_vietnamese_is_normalized(self):
        # "phút" with the accent as a separate combining character
        assert parse_duration("2 phu\u0301t") == 120

    def test_unit_must_not_run_into_a_word(self):
        with pytest.raises(InvalidDurationError):
            parse_duration("5 mangoes")

    @pytest.mark.parametrize(
        "expression",
        ["", "   ", "0s", "0", "-5s", "-5", "abc", "một phút", "inf", "nan", "0m 0s"],
    )
    def test_rejects_non_positive_or_unreadable(self, expression):
        with pytest.raises(InvalidDurationError) as exc_info:
            parse_duration(expression)
        assert exc_info.value.kind == ErrorKind.INVALID_DURATION

    def test_error_carries_original_input(self):
        with pytest.raises(InvalidDurationError) as exc_info:
            parse_duration("about a while")
        assert exc_info.value.expression == "about a while"
        assert "about a while" in str(exc_info.value)

    def test_none_is_rejected(self):
        with pytest.raises(InvalidDurationError):
            parse_duration(None)


class TestSceneCount:
    def test_window_is_eight_seconds(self):
        assert SCENE_WINDOW_SECONDS == 8

    @pytest.mark.parametrize("seconds", [0.1, 1, 7.99, 8])
    def test_one_scene_up_to_one_window(self, seconds):
        assert scene_count(seconds) == 1

    @pytest.mark.parametrize("seconds", [8.01, 12, 16])
    def test_two_scenes_up_to_two_windows(self, seconds):
        assert scene_count(seconds) == 2

    @pytest.mark.parametrize("seconds", [17, 24, 30, 90, 135, 600])
    def test_general_ceiling(self, seconds):
        assert scene_count(seconds) == math.ceil(seconds / 8)

    def test_monotonic(self):
        durations = [0.5 * i for i in range(1, 400)]
        counts = [scene_count(d) for d in durations]
        assert counts == sorted(counts)

    @pytest.mark.parametrize("seconds", [0, -1, float("inf"), float("nan")])
    def test_rejects_invalid_seconds(self, seconds):
        with pytest.raises(InvalidDurationError):
            scene_count(seconds)

    def test_parsed_duration_drives_count(self):
        assert scene_count(parse_duration("24s")) == 3
        assert scene_count(parse_duration("1 phút")) == 8


class TestFormatDuration:
    @pytest.mark.parametrize(
        "seconds, expected",
        [(45, "45s"), (60, "1m"), (90, "1m 30s"), (135, "2m 15s"), (7.5, "7.5s")],
    )
    def test_format(self, seconds, expected):
        assert format_duration(seconds) == expected

    def test_summary_uses_same_seconds_as_count(self):
        seconds = parse_duration("2m 15s")
        assert format_duration(seconds) == "2m 15s"
        assert scene_count(seconds) == 17
