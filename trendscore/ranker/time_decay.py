"""Time decay: age-based freshness multiplier.

The reference time is always passed in. Nothing here reads a clock, so
repeated runs over the same inputs give the same decay.
"""

from datetime import UTC, datetime

from trendscore.config.schemas import TimeDecayConfig
from trendscore.ranker.constants import COMPONENT_TIME_DECAY, SECONDS_PER_HOUR
from trendscore.ranker.errors import InputError, ensure_finite


def parse_timestamp(value: datetime | str | None) -> datetime:
    """Parse a creation timestamp into an aware UTC datetime.

    Accepts datetimes and ISO-8601 strings (a trailing ``Z`` included).
    Naive values are taken to be UTC.

    Args:
        value: Raw timestamp.

    Returns:
        Timezone-aware datetime.

    Raises:
        InputError: If the value is missing or unparseable.
    """
    if value is None:
        msg = "Timestamp is missing"
        raise InputError(msg, field="created_at", value=value)

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError as e:
            msg = f"Unparseable timestamp: {value!r}"
            raise InputError(msg, field="created_at", value=value) from e
    else:
        msg = f"Unsupported timestamp type: {type(value).__name__}"
        raise InputError(msg, field="created_at", value=value)

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def age_hours(created_at: datetime | str | None, now: datetime) -> float:
    """Age of an item in hours, never negative.

    Args:
        created_at: Raw creation timestamp.
        now: Reference time.

    Returns:
        Age in hours; items dated in the future have age zero.

    Raises:
        InputError: If the timestamp is unusable.
    """
    created = parse_timestamp(created_at)
    reference = now if now.tzinfo is not None else now.replace(tzinfo=UTC)
    return max(0.0, (reference - created).total_seconds() / SECONDS_PER_HOUR)


class TimeDecayCalculator:
    """Computes the decay multiplier for an item's age.

    Within the peak window the multiplier falls linearly from
    ``1 + peak_bonus`` to 1.0. After it, the multiplier is
    ``1 - age / full_window`` floored at ``floor``, so old content stays
    rankable at low weight.
    """

    def __init__(self, config: TimeDecayConfig) -> None:
        """Initialize the calculator.

        Args:
            config: Decay windows and floor.
        """
        self._config = config

    @property
    def neutral(self) -> float:
        """Decay substituted when the timestamp cannot be used."""
        return self._config.neutral_decay

    def decay(self, created_at: datetime | str | None, now: datetime) -> float:
        """Compute the decay factor.

        Args:
            created_at: Raw creation timestamp.
            now: Reference time.

        Returns:
            Decay multiplier.

        Raises:
            InputError: If the timestamp is unusable.
        """
        return self.decay_for_age(age_hours(created_at, now))

    def decay_for_age(self, hours: float) -> float:
        """Compute the decay factor for a known age.

        Args:
            hours: Age in hours (negative values count as zero).

        Returns:
            Decay multiplier.
        """
        cfg = self._config
        hours = max(0.0, hours)

        if hours <= cfg.peak_window_hours:
            progress = hours / cfg.peak_window_hours
            value = 1.0 + cfg.peak_bonus - progress * cfg.peak_bonus
        else:
            value = max(cfg.floor, 1.0 - hours / cfg.full_window_hours)

        return ensure_finite(value, COMPONENT_TIME_DECAY)
