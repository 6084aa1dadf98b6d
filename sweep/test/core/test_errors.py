"""Tests for sweep.core.errors module."""

from sweep.core.errors import ErrorCode


class TestErrorCode:
    def test_values_are_stable(self) -> None:
        assert ErrorCode.OK == 0
        assert ErrorCode.USER_ERROR == 1
        assert ErrorCode.CONFIG_ERROR == 2
        assert ErrorCode.PARSE_ERROR == 3
        assert ErrorCode.SHELL_ERROR == 4
