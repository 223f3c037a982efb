"""Data models for the trending ranker."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from trendscore.data_model import StrictBaseModel


class ContentItem(StrictBaseModel):
    """A note as supplied by the data layer.

    Attributes:
        id: Note identifier.
        created_at: Creation time. Kept as supplied (datetime, ISO-8601
            string, or None) and parsed at scoring time.
        content: Note body text.
        author_id: Identifier of the author.
    """

    id: Annotated[str, Field(min_length=1)]
    created_at: datetime | str | None = None
    content: str = ""
    author_id: str | None = None

    @field_validator("content", mode="before")
    @classmethod
    def validate_content(cls, value: object) -> object:
        """Treat missing content as empty text."""
        return "" if value is None else value


class EngagementStats(StrictBaseModel):
    """Snapshot of interaction counts for one note.

    Negative counts are accepted here and clamped to zero when scored.
    """

    stars: int = 0
    forks: int = 0
    views: int = 0
    comments: int = 0
    shares: int = 0

    @field_validator("stars", "forks", "views", "comments", "shares", mode="before")
    @classmethod
    def validate_counts(cls, value: object) -> object:
        """Treat a missing (null) count as zero."""
        return 0 if value is None else value


class AuthorProfile(StrictBaseModel):
    """Author credibility signals.

    Attributes:
        follower_count: Number of followers.
        reputation: Reputation score (e.g. average stars per note).
        verified: Whether the author is verified.
    """

    follower_count: int = 0
    reputation: float = 0.0
    verified: bool = False

    @field_validator("follower_count", "reputation", mode="before")
    @classmethod
    def validate_signals(cls, value: object) -> object:
        """Treat a missing (null) signal as zero."""
        return 0 if value is None else value


class HistoricalBaseline(StrictBaseModel):
    """Prior-window average of stars and forks for one note."""

    stars: float = 0.0
    forks: float = 0.0

    @field_validator("stars", "forks", mode="before")
    @classmethod
    def validate_averages(cls, value: object) -> object:
        """Treat a missing (null) average as zero."""
        return 0.0 if value is None else value

    @property
    def total(self) -> float:
        """Baseline stars + forks, negatives clamped to zero."""
        return max(0.0, self.stars) + max(0.0, self.forks)


class RankCategory(str, Enum):
    """Feed categories understood by the category ranker."""

    TRENDING = "trending"
    HOT = "hot"
    RISING = "rising"
    DEFAULT = "default"

    @classmethod
    def parse(cls, value: "str | RankCategory") -> "RankCategory":
        """Resolve a category name case-insensitively.

        Unrecognized names resolve to DEFAULT.

        Args:
            value: Category name or member.

        Returns:
            Matching category.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.DEFAULT


@dataclass(frozen=True)
class ScoringInput:
    """Everything the scorer needs for one note.

    Attributes:
        item: The note.
        stats: Engagement snapshot, None when unavailable.
        author: Author profile, None when unavailable.
        baseline: Historical baseline, None when no history exists.
    """

    item: ContentItem
    stats: EngagementStats | None = None
    author: AuthorProfile | None = None
    baseline: HistoricalBaseline | None = None


@dataclass(frozen=True)
class ScoreResult:
    """Score breakdown for one note.

    Attributes:
        item: The scored note.
        engagement_score: Log-weighted interaction sum.
        time_decay: Freshness multiplier.
        quality_bonus: Content-richness bonus.
        author_factor: Author credibility bonus.
        trending_score: Combined score.
        velocity_score: Growth against the historical baseline.
        wilson_score: Lower confidence bound of the star rate.
        degraded: Components replaced by their neutral default.
    """

    item: ContentItem
    engagement_score: float
    time_decay: float
    quality_bonus: float
    author_factor: float
    trending_score: float
    velocity_score: float
    wilson_score: float
    degraded: tuple[str, ...] = ()

    @property
    def note_id(self) -> str:
        """Identifier of the scored note."""
        return self.item.id

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for serialization.

        Returns:
            Dictionary of score fields keyed by name.
        """
        return {
            "note_id": self.note_id,
            "engagement_score": self.engagement_score,
            "time_decay": self.time_decay,
            "quality_bonus": self.quality_bonus,
            "author_factor": self.author_factor,
            "trending_score": self.trending_score,
            "velocity_score": self.velocity_score,
            "wilson_score": self.wilson_score,
            "degraded": list(self.degraded),
        }


@dataclass
class DroppedEntry:
    """Diagnostic record of a note excluded from output.

    Attributes:
        note_id: ID of the dropped note.
        error_class: Error classification value.
        component: Component that failed.
        message: Error message.
    """

    note_id: str
    error_class: str
    component: str
    message: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for serialization."""
        return {
            "note_id": self.note_id,
            "error_class": self.error_class,
            "component": self.component,
            "message": self.message,
        }


class RankerResult(BaseModel):
    """Complete result of scoring and ranking a batch.

    Attributes:
        category: Category that was ranked.
        ranked: Ordered, length-bounded notes.
        scores: Score results for every note that was not dropped, in input order.
        dropped: Diagnostics for notes excluded from output.
        notes_in: Input note count.
        notes_out: Ranked note count.
        score_percentiles: p50/p90/p99 of trending scores.
        output_checksum: SHA-256 of the ordered output.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    category: RankCategory
    ranked: list[ContentItem] = Field(default_factory=list)
    scores: list[ScoreResult] = Field(default_factory=list)
    dropped: list[DroppedEntry] = Field(default_factory=list)
    notes_in: Annotated[int, Field(ge=0)] = 0
    notes_out: Annotated[int, Field(ge=0)] = 0
    score_percentiles: dict[str, float] = Field(default_factory=dict)
    output_checksum: str = ""

    def to_json_dict(self) -> dict[str, object]:
        """Build a JSON-friendly representation.

        Returns:
            Dictionary with ranked ids, scores, and diagnostics.
        """
        return {
            "category": self.category.value,
            "ranked": [item.id for item in self.ranked],
            "scores": [s.to_dict() for s in self.scores],
            "dropped": [d.to_dict() for d in self.dropped],
            "notes_in": self.notes_in,
            "notes_out": self.notes_out,
            "score_percentiles": self.score_percentiles,
            "output_checksum": self.output_checksum,
        }
