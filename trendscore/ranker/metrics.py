"""Metrics collection for the ranker module."""

from dataclasses import dataclass, field


@dataclass
class RankerMetrics:
    """Metrics for one ranker instance.

    Attributes:
        notes_in: Number of input notes.
        notes_scored: Notes that produced a score.
        notes_dropped: Notes excluded after a failure.
        ranked_out: Notes in the ranked output.
        degraded_by_component: Neutral-default substitutions per component.
        score_values: Trending scores for percentile calculation.
        scoring_duration_ms: Time spent scoring.
        ranking_duration_ms: Time spent on category ranking.
    """

    notes_in: int = 0
    notes_scored: int = 0
    notes_dropped: int = 0
    ranked_out: int = 0
    degraded_by_component: dict[str, int] = field(default_factory=dict)
    score_values: list[float] = field(default_factory=list)
    scoring_duration_ms: float = 0.0
    ranking_duration_ms: float = 0.0

    def record_notes_in(self, count: int) -> None:
        """Record input note count.

        Args:
            count: Number of input notes.
        """
        self.notes_in = count

    def record_scored(self, trending_score: float, degraded: tuple[str, ...]) -> None:
        """Record one scored note.

        Args:
            trending_score: The note's trending score.
            degraded: Components that used neutral defaults.
        """
        self.notes_scored += 1
        self.score_values.append(trending_score)
        for component in degraded:
            self.degraded_by_component[component] = (
                self.degraded_by_component.get(component, 0) + 1
            )

    def record_drop(self) -> None:
        """Record a dropped note."""
        self.notes_dropped += 1

    def record_ranked_out(self, count: int) -> None:
        """Record output note count.

        Args:
            count: Number of ranked notes.
        """
        self.ranked_out = count

    def record_scoring_duration(self, duration_ms: float) -> None:
        """Record scoring duration.

        Args:
            duration_ms: Duration in milliseconds.
        """
        self.scoring_duration_ms = duration_ms

    def record_ranking_duration(self, duration_ms: float) -> None:
        """Record category ranking duration.

        Args:
            duration_ms: Duration in milliseconds.
        """
        self.ranking_duration_ms = duration_ms

    def get_score_percentiles(self) -> dict[str, float]:
        """Calculate score percentiles (p50/p90/p99).

        Returns:
            Dictionary with p50, p90, p99 values.
        """
        if not self.score_values:
            return {"p50": 0.0, "p90": 0.0, "p99": 0.0}

        sorted_scores = sorted(self.score_values)
        n = len(sorted_scores)

        def percentile(p: float) -> float:
            idx = int(p * n / 100)
            return sorted_scores[min(idx, n - 1)]

        return {
            "p50": percentile(50),
            "p90": percentile(90),
            "p99": percentile(99),
        }

    def to_dict(self) -> dict[str, object]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "notes_in": self.notes_in,
            "notes_scored": self.notes_scored,
            "notes_dropped": self.notes_dropped,
            "ranked_out": self.ranked_out,
            "degraded_by_component": dict(self.degraded_by_component),
            "scoring_duration_ms": self.scoring_duration_ms,
            "ranking_duration_ms": self.ranking_duration_ms,
            "score_percentiles": self.get_score_percentiles(),
        }
