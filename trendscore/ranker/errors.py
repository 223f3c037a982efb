"""Error types for the scoring engine.

Two classes of failure exist. Input errors (unusable timestamps, missing
stats) are recoverable: the scorer substitutes the component's neutral
value and carries on. Computation errors (non-finite arithmetic) that reach
the combined score exclude the item from ranked output.
"""

import math
from enum import Enum


class ScoringErrorClass(str, Enum):
    """Classification of scoring errors.

    - INPUT: malformed or missing input data
    - COMPUTATION: unexpected internal fault such as NaN
    """

    INPUT = "INPUT"
    COMPUTATION = "COMPUTATION"


class ScoringError(Exception):
    """Base exception for scoring errors.

    Provides structured error information for logging and diagnostics.
    """

    def __init__(
        self,
        error_class: ScoringErrorClass,
        message: str,
        note_id: str | None = None,
        details: dict[str, str | int | float | bool | None] | None = None,
    ) -> None:
        """Initialize the scoring error.

        Args:
            error_class: Classification of the error.
            message: Human-readable error message.
            note_id: Identifier of the note being scored, if known.
            details: Additional structured error details.
        """
        super().__init__(message)
        self.error_class = error_class
        self.message = message
        self.note_id = note_id
        self.details = details or {}

    def to_dict(
        self,
    ) -> dict[str, str | None | dict[str, str | int | float | bool | None]]:
        """Convert error to dictionary for logging/serialization.

        Returns:
            Dictionary representation of the error.
        """
        return {
            "error_class": self.error_class.value,
            "message": self.message,
            "note_id": self.note_id,
            "details": self.details,
        }


class InputError(ScoringError):
    """Malformed or missing input for a scoring component."""

    def __init__(
        self,
        message: str,
        field: str,
        value: object = None,
        note_id: str | None = None,
    ) -> None:
        """Initialize the input error.

        Args:
            message: Human-readable error message.
            field: Name of the offending input field.
            value: The offending value.
            note_id: Identifier of the note being scored.
        """
        super().__init__(
            error_class=ScoringErrorClass.INPUT,
            message=message,
            note_id=note_id,
            details={"field": field, "value": repr(value)},
        )
        self.field = field
        self.value = value


class ComputationError(ScoringError):
    """A scoring component produced a non-finite value."""

    def __init__(
        self,
        message: str,
        component: str,
        note_id: str | None = None,
    ) -> None:
        """Initialize the computation error.

        Args:
            message: Human-readable error message.
            component: Component that produced the value.
            note_id: Identifier of the note being scored.
        """
        super().__init__(
            error_class=ScoringErrorClass.COMPUTATION,
            message=message,
            note_id=note_id,
            details={"component": component},
        )
        self.component = component


def ensure_finite(value: float, component: str) -> float:
    """Return ``value`` unchanged, or raise if it is NaN or infinite.

    Args:
        value: Computed value.
        component: Component name for the error.

    Returns:
        The same value.

    Raises:
        ComputationError: If the value is not finite.
    """
    if not math.isfinite(value):
        msg = f"{component} produced a non-finite value: {value!r}"
        raise ComputationError(msg, component=component)
    return value
