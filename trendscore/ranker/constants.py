"""Constants for the ranker module."""

import re
from typing import Final


# Content classifier patterns. Fixtures depend on these exact expressions.
IMAGE_PATTERN: Final[re.Pattern[str]] = re.compile(r"!\[.*?\]\(.*?\)|<img")
MARKDOWN_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"#{1,6}\s|(\*\*|__).+?\1|(\*|_).+?\2|\[.+?\]\(.+?\)"
)
CODE_BLOCK_PATTERN: Final[re.Pattern[str]] = re.compile(r"```[\s\S]*?```|`[^`\n]+`")

SECONDS_PER_HOUR: Final[float] = 3600.0

# Component names used in ScoreResult.degraded and diagnostics
COMPONENT_ENGAGEMENT: Final[str] = "engagement"
COMPONENT_TIME_DECAY: Final[str] = "time_decay"
COMPONENT_QUALITY: Final[str] = "quality"
COMPONENT_AUTHOR: Final[str] = "author"
COMPONENT_VELOCITY: Final[str] = "velocity"
COMPONENT_WILSON: Final[str] = "wilson"
COMPONENT_COMBINER: Final[str] = "combiner"

# Components whose joint failure means the trending score carries no signal
TRENDING_COMPONENTS: Final[frozenset[str]] = frozenset(
    {
        COMPONENT_ENGAGEMENT,
        COMPONENT_TIME_DECAY,
        COMPONENT_QUALITY,
        COMPONENT_AUTHOR,
    }
)

# Neutral substitutes for components that failed on bad input.
# Time decay and velocity come from ScoringConfig since they are tunable.
NEUTRAL_ENGAGEMENT: Final[float] = 0.0
NEUTRAL_QUALITY: Final[float] = 0.0
NEUTRAL_AUTHOR: Final[float] = 0.0
NEUTRAL_WILSON: Final[float] = 0.0
