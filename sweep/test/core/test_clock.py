"""Tests for sweep.core.clock module."""

from __future__ import annotations

from datetime import datetime

import pytest

from sweep.core.clock import (
    FrozenClock,
    SystemClock,
    format_release_identifier,
    parse_relative,
    parse_release_timestamp,
)
from sweep.core.result import Err, Ok

NOW = 1_700_000_000


class TestParseRelative:
    @pytest.mark.parametrize(
        ("expression", "expected"),
        [
            ("now", NOW),
            ("121 seconds ago", NOW - 121),
            ("0 seconds ago", NOW),
            ("1 sec ago", NOW - 1),
            ("5 minutes ago", NOW - 300),
            ("2 hours ago", NOW - 7200),
            ("7 days ago", NOW - 7 * 86400),
            ("1 week ago", NOW - 7 * 86400),
            ("+1 day", NOW + 86400),
            ("-1 day", NOW - 86400),
            ("1 day 2 hours ago", NOW - 86400 - 7200),
            ("1 week -1 day", NOW + 6 * 86400),
            ("  3 Days Ago  ", NOW - 3 * 86400),
            ("1 month ago", NOW - 30 * 86400),
        ],
    )
    def test_relative_expressions(self, expression: str, expected: int) -> None:
        assert parse_relative(expression, NOW) == Ok(expected)

    def test_absolute_iso_datetime(self) -> None:
        expected = int(datetime(2023, 1, 1, 12, 0, 0).timestamp())
        assert parse_relative("2023-01-01 12:00:00", NOW) == Ok(expected)

    @pytest.mark.parametrize("expression", ["", "ago", "soon", "3 fortnights and a day", "5 parsecs ago"])
    def test_rejects_unknown_syntax(self, expression: str) -> None:
        result = parse_relative(expression, NOW)

        assert isinstance(result, Err)
        assert result.error.value == expression


class TestParseReleaseTimestamp:
    def test_parses_fixed_format(self) -> None:
        expected = int(datetime(2023, 1, 2, 3, 4, 5).timestamp())
        assert parse_release_timestamp("20230102030405") == Ok(expected)

    @pytest.mark.parametrize("value", ["", "2023010203040", "202301020304056", "2023-01-02", "current"])
    def test_rejects_wrong_shape(self, value: str) -> None:
        assert isinstance(parse_release_timestamp(value), Err)

    def test_rejects_impossible_date(self) -> None:
        result = parse_release_timestamp("20231345000000")

        assert isinstance(result, Err)
        assert "20231345000000" in result.error.message

    def test_format_is_inverse(self) -> None:
        ts = parse_release_timestamp("20230102030405").unwrap()
        assert format_release_identifier(ts) == "20230102030405"


class TestClocks:
    def test_frozen_clock_resolves_against_now(self) -> None:
        clock = FrozenClock(now=NOW)

        assert clock.current_time() == NOW
        assert clock.string_to_time("10 seconds ago") == Ok(NOW - 10)

    def test_system_clock_is_close_to_wall_time(self) -> None:
        clock = SystemClock()
        before = int(datetime.now().timestamp())

        assert abs(clock.current_time() - before) <= 2

    def test_system_clock_parses_identifiers(self) -> None:
        assert SystemClock().parse_fixed_format("20230101000000") == parse_release_timestamp(
            "20230101000000"
        )
