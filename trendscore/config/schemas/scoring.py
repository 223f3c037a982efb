"""Scoring configuration schema.

Every tunable constant of the trending engine lives here. The root
``ScoringConfig`` is immutable and is passed explicitly into each scorer,
so two scorers with different weights can run side by side.
"""

from typing import Annotated

from pydantic import Field, model_validator

from trendscore.data_model import StrictBaseModel


class EngagementWeights(StrictBaseModel):
    """Per-metric weights for the log-dampened engagement sum.

    Attributes:
        stars: Weight for stars.
        forks: Weight for forks.
        views: Weight for views.
        comments: Weight for comments.
        shares: Weight for shares.
    """

    stars: Annotated[float, Field(ge=0.0, le=10.0)] = 2.0
    forks: Annotated[float, Field(ge=0.0, le=10.0)] = 1.5
    views: Annotated[float, Field(ge=0.0, le=10.0)] = 0.5
    comments: Annotated[float, Field(ge=0.0, le=10.0)] = 1.2
    shares: Annotated[float, Field(ge=0.0, le=10.0)] = 1.8


class TimeDecayConfig(StrictBaseModel):
    """Age-based decay configuration.

    Attributes:
        peak_window_hours: Age up to which content earns a freshness premium.
        full_window_hours: Age at which linear decay reaches the floor.
        peak_bonus: Premium at age zero (decay starts at 1 + peak_bonus).
        floor: Minimum decay for old content.
        neutral_decay: Substitute used when the timestamp is unusable.
    """

    peak_window_hours: Annotated[float, Field(gt=0.0, le=720.0)] = 24.0
    full_window_hours: Annotated[float, Field(gt=0.0, le=8760.0)] = 168.0
    peak_bonus: Annotated[float, Field(ge=0.0, le=1.0)] = 0.2
    floor: Annotated[float, Field(ge=0.0, le=1.0)] = 0.1
    neutral_decay: Annotated[float, Field(ge=0.0, le=2.0)] = 0.5

    @model_validator(mode="after")
    def validate_windows(self) -> "TimeDecayConfig":
        """Ensure the full window extends past the peak window."""
        if self.full_window_hours <= self.peak_window_hours:
            msg = "full_window_hours must be greater than peak_window_hours"
            raise ValueError(msg)
        return self


class QualityBonusConfig(StrictBaseModel):
    """Content-richness bonus configuration.

    Attributes:
        min_content_length: Length (chars) that must be exceeded for a length bonus.
        length_divisor: Characters per unit of length factor.
        max_length_factor: Cap on the length factor.
        content_length_bonus: Bonus per unit of length factor.
        image_bonus: Bonus for embedded images.
        markdown_bonus: Bonus for markdown formatting.
        code_block_bonus: Bonus for code blocks or inline code.
    """

    min_content_length: Annotated[int, Field(ge=0)] = 100
    length_divisor: Annotated[float, Field(gt=0.0)] = 1000.0
    max_length_factor: Annotated[float, Field(ge=0.0, le=100.0)] = 3.0
    content_length_bonus: Annotated[float, Field(ge=0.0, le=5.0)] = 0.3
    image_bonus: Annotated[float, Field(ge=0.0, le=5.0)] = 0.2
    markdown_bonus: Annotated[float, Field(ge=0.0, le=5.0)] = 0.1
    code_block_bonus: Annotated[float, Field(ge=0.0, le=5.0)] = 0.15


class AuthorFactorConfig(StrictBaseModel):
    """Author credibility configuration.

    Attributes:
        follower_log_divisor: log10(followers + 1) is divided by this, then capped at 1.
        follower_weight: Weight of the normalized follower signal.
        reputation_divisor: Reputation is divided by this, then capped at 1.
        reputation_weight: Weight of the normalized reputation signal.
        verified_bonus: Flat bonus for verified authors.
    """

    follower_log_divisor: Annotated[float, Field(gt=0.0)] = 4.0
    follower_weight: Annotated[float, Field(ge=0.0, le=5.0)] = 0.1
    reputation_divisor: Annotated[float, Field(gt=0.0)] = 10.0
    reputation_weight: Annotated[float, Field(ge=0.0, le=5.0)] = 0.2
    verified_bonus: Annotated[float, Field(ge=0.0, le=5.0)] = 0.3


class VelocityConfig(StrictBaseModel):
    """Growth velocity configuration.

    Attributes:
        growth_divisor: Growth ratio that maps to a velocity of 1.0.
        max_velocity: Saturation cap.
        neutral_velocity: Value for items without a baseline.
    """

    growth_divisor: Annotated[float, Field(gt=0.0)] = 2.0
    max_velocity: Annotated[float, Field(gt=0.0, le=100.0)] = 2.5
    neutral_velocity: Annotated[float, Field(ge=0.0, le=100.0)] = 1.0


class WilsonConfig(StrictBaseModel):
    """Wilson lower bound configuration.

    Attributes:
        z: Standard normal quantile (1.96 for 95% confidence).
    """

    z: Annotated[float, Field(gt=0.0, le=10.0)] = 1.96


class CategoryConfig(StrictBaseModel):
    """Per-category filtering and truncation.

    Attributes:
        trending_max_age_hours: Maximum age for the trending feed.
        trending_limit: Maximum items in the trending feed.
        hot_max_age_hours: Maximum age for the hot feed.
        hot_limit: Maximum items in the hot feed.
        rising_velocity_threshold: Velocity that must be exceeded for rising.
        rising_limit: Maximum items in the rising feed.
        default_limit: Pass-through length for unrecognized categories.
    """

    trending_max_age_hours: Annotated[float, Field(gt=0.0)] = 168.0
    trending_limit: Annotated[int, Field(ge=0)] = 20
    hot_max_age_hours: Annotated[float, Field(gt=0.0)] = 6.0
    hot_limit: Annotated[int, Field(ge=0)] = 15
    rising_velocity_threshold: Annotated[float, Field(ge=0.0)] = 1.5
    rising_limit: Annotated[int, Field(ge=0)] = 10
    default_limit: Annotated[int, Field(ge=0)] = 20


class ScoringConfig(StrictBaseModel):
    """Root configuration for scoring.yaml.

    Attributes:
        version: Schema version.
        engagement: Engagement weights.
        time_decay: Time decay settings.
        quality: Quality bonus settings.
        author: Author factor settings.
        velocity: Velocity settings.
        wilson: Wilson score settings.
        categories: Category ranking settings.
    """

    version: Annotated[str, Field(pattern=r"^\d+\.\d+$")] = "1.0"
    engagement: EngagementWeights = Field(default_factory=EngagementWeights)
    time_decay: TimeDecayConfig = Field(default_factory=TimeDecayConfig)
    quality: QualityBonusConfig = Field(default_factory=QualityBonusConfig)
    author: AuthorFactorConfig = Field(default_factory=AuthorFactorConfig)
    velocity: VelocityConfig = Field(default_factory=VelocityConfig)
    wilson: WilsonConfig = Field(default_factory=WilsonConfig)
    categories: CategoryConfig = Field(default_factory=CategoryConfig)
