"""Error hints for configuration validation errors.

Provides user-friendly hints with actionable remediation steps
for common validation errors.
"""

from typing import Final


# Mapping of error types to user-friendly hints
ERROR_HINTS: Final[dict[str, str]] = {
    "missing": "This field is required. Please add it to your configuration.",
    "extra_forbidden": "Unknown field. Check the spelling against the documented keys.",
    "int_type": "This field must be an integer (whole number).",
    "int_parsing": "This field must be an integer (whole number).",
    "float_type": "This field must be a number.",
    "float_parsing": "This field must be a number.",
    "string_type": "This field must be a text string.",
    "dict_type": "This field must be an object/mapping.",
    "model_type": "This section must be an object/mapping.",
    "greater_than": "The value is too small. It must be strictly positive.",
    "greater_than_equal": "The value is too small. Check the minimum allowed.",
    "less_than_equal": "The value is too large. Check the maximum allowed.",
    "string_pattern_mismatch": "The format is invalid. Use MAJOR.MINOR, e.g. '1.0'.",
    "value_error": "The values are inconsistent with each other.",
    "file_not_found": "The file does not exist. Check the file path.",
    "yaml_parse_error": "Invalid YAML syntax. Check for proper indentation and formatting.",
}

# Field-specific hints for more context
FIELD_HINTS: Final[dict[str, str]] = {
    "version": "Must look like '1.0'.",
    "stars": "Engagement weight, between 0.0 and 10.0.",
    "forks": "Engagement weight, between 0.0 and 10.0.",
    "views": "Engagement weight, between 0.0 and 10.0.",
    "comments": "Engagement weight, between 0.0 and 10.0.",
    "shares": "Engagement weight, between 0.0 and 10.0.",
    "peak_window_hours": "Hours of freshness premium; must be below full_window_hours.",
    "full_window_hours": "Hours until decay reaches the floor; must exceed peak_window_hours.",
    "floor": "Minimum decay, between 0.0 and 1.0.",
    "z": "Normal quantile for the Wilson bound (1.96 is 95% confidence).",
    "max_velocity": "Velocity saturation cap, must be positive.",
}


def get_error_hint(error_type: str, field_name: str | None = None) -> str:
    """Get a user-friendly hint for a validation error.

    Args:
        error_type: The Pydantic error type (e.g., 'missing', 'greater_than_equal').
        field_name: Optional field name for field-specific hints.

    Returns:
        A user-friendly hint string.
    """
    if field_name:
        # 'engagement.stars' -> 'stars'
        simple_field = field_name.split(".")[-1]
        if simple_field in FIELD_HINTS:
            return FIELD_HINTS[simple_field]

    return ERROR_HINTS.get(
        error_type, "Check the configuration documentation for valid values."
    )


def format_validation_error(
    location: str,
    message: str,
    error_type: str,
    *,
    include_hint: bool = True,
) -> str:
    """Format a validation error with optional hint.

    Args:
        location: The error location (e.g., 'time_decay.floor').
        message: The original error message.
        error_type: The error type.
        include_hint: Whether to include a hint.

    Returns:
        Formatted error string.
    """
    base = f"{location}: {message}"
    if include_hint:
        hint = get_error_hint(error_type, location)
        return f"{base}\n    Hint: {hint}"
    return base
