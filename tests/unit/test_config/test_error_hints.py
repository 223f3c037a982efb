"""Unit tests for configuration error hints."""

import pytest

from trendscore.config.error_hints import (
    ERROR_HINTS,
    FIELD_HINTS,
    format_validation_error,
    get_error_hint,
)


class TestGetErrorHint:
    """Tests for get_error_hint function."""

    @pytest.mark.unit
    def test_returns_hint_for_known_error_type(self) -> None:
        """Known error types return their hints."""
        hint = get_error_hint("missing")
        assert hint == ERROR_HINTS["missing"]
        assert "required" in hint.lower()

    @pytest.mark.unit
    def test_returns_default_for_unknown_error_type(self) -> None:
        """Unknown error types return the default hint."""
        hint = get_error_hint("some_unknown_error_type")
        assert "documentation" in hint.lower()

    @pytest.mark.unit
    def test_field_specific_hint_takes_precedence(self) -> None:
        """Field hints override error type hints."""
        hint = get_error_hint("less_than_equal", field_name="time_decay.floor")
        assert hint == FIELD_HINTS["floor"]

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("field_name", "expected_substring"),
        [
            ("engagement.stars", "10.0"),
            ("time_decay.peak_window_hours", "full_window_hours"),
            ("wilson.z", "1.96"),
            ("version", "1.0"),
        ],
    )
    def test_field_hints_contain_expected_info(
        self, field_name: str, expected_substring: str
    ) -> None:
        """Field hints carry the relevant constraint."""
        assert expected_substring in get_error_hint("missing", field_name=field_name)

    @pytest.mark.unit
    def test_unknown_field_falls_back_to_type(self) -> None:
        """Fields without a hint use the error type hint."""
        hint = get_error_hint("greater_than", field_name="quality.length_divisor")
        assert hint == ERROR_HINTS["greater_than"]


class TestFormatValidationError:
    """Tests for format_validation_error function."""

    @pytest.mark.unit
    def test_includes_hint_by_default(self) -> None:
        """Formatted errors carry a hint line."""
        formatted = format_validation_error(
            "wilson.z", "Input should be greater than 0", "greater_than"
        )
        assert formatted.startswith("wilson.z: Input should be greater than 0")
        assert "\n    Hint: " in formatted

    @pytest.mark.unit
    def test_without_hint(self) -> None:
        """Hints can be suppressed."""
        formatted = format_validation_error(
            "version", "bad", "string_pattern_mismatch", include_hint=False
        )
        assert formatted == "version: bad"
