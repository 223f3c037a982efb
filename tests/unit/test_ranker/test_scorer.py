"""Unit tests for the note scorer."""

import math
from datetime import timedelta

import pytest
from structlog.testing import capture_logs

from tests.helpers.time import FIXED_NOW
from trendscore.config.schemas import EngagementWeights, ScoringConfig
from trendscore.ranker.errors import ComputationError, ScoringErrorClass
from trendscore.ranker.models import (
    AuthorProfile,
    ContentItem,
    EngagementStats,
    HistoricalBaseline,
    ScoringInput,
)
from trendscore.ranker.scorer import (
    NoteScorer,
    combine_trending_score,
    compute_score,
)


IMAGE_TOKEN = "![](https://cdn.example.com/photo.png)"


class _ExplodingClassifier:
    """Classifier stub whose image check raises."""

    def __init__(self, error: Exception) -> None:
        self._error = error

    def has_images(self, content: str) -> bool:
        raise self._error

    def has_markdown_formatting(self, content: str) -> bool:
        return False

    def has_code_blocks(self, content: str) -> bool:
        return False


def _make_item(
    note_id: str = "note-1",
    hours_old: float = 1.0,
    content: str = "",
) -> ContentItem:
    """Create a ContentItem created ``hours_old`` before FIXED_NOW."""
    return ContentItem(
        id=note_id,
        created_at=FIXED_NOW - timedelta(hours=hours_old),
        content=content,
        author_id="author-1",
    )


def _fixture_content() -> str:
    """150 characters with one embedded image and no other formatting."""
    content = IMAGE_TOKEN + " " + "a" * (150 - len(IMAGE_TOKEN) - 1)
    assert len(content) == 150
    return content


def _fixture_stats() -> EngagementStats:
    return EngagementStats(stars=10, forks=2, views=100, comments=1, shares=0)


def _fixture_author() -> AuthorProfile:
    return AuthorProfile(follower_count=50, reputation=5, verified=False)


class TestCombineTrendingScore:
    """Tests for combine_trending_score."""

    @pytest.mark.unit
    def test_decay_multiplies_engagement_only(self) -> None:
        """Quality and author are added after decay."""
        assert combine_trending_score(2.0, 0.5, 0.3, 0.2) == pytest.approx(1.5)

    @pytest.mark.unit
    def test_floored_at_zero(self) -> None:
        """Negative combinations become zero."""
        assert combine_trending_score(-5.0, 1.0, 0.0, 0.0) == 0.0

    @pytest.mark.unit
    def test_non_finite_raises(self) -> None:
        """NaN or infinity is a computation error."""
        with pytest.raises(ComputationError) as exc_info:
            combine_trending_score(math.inf, 1.0, 0.0, 0.0)
        assert exc_info.value.component == "combiner"


class TestScoreNote:
    """Tests for NoteScorer.score_note."""

    @pytest.mark.unit
    def test_golden_fixture(self) -> None:
        """Reference note produces the recorded breakdown."""
        result = compute_score(
            _make_item(content=_fixture_content()),
            _fixture_stats(),
            _fixture_author(),
            None,
            FIXED_NOW,
        )

        assert result.engagement_score == pytest.approx(4.1618639, abs=1e-6)
        assert result.time_decay == pytest.approx(1.1916667, abs=1e-6)
        assert result.quality_bonus == pytest.approx(0.245)
        assert result.author_factor == pytest.approx(0.1426893, abs=1e-6)
        assert result.trending_score == pytest.approx(5.3472438, abs=1e-6)
        assert result.velocity_score == 1.0
        assert result.degraded == ()

    @pytest.mark.unit
    def test_wilson_uses_stars_over_views(self) -> None:
        """Wilson score is stars out of views."""
        scorer = NoteScorer(run_id="test")
        result = scorer.score_note(
            _make_item(), EngagementStats(stars=40, views=50), None, None, FIXED_NOW
        )
        assert result.wilson_score == pytest.approx(0.6696, abs=1e-3)

    @pytest.mark.unit
    def test_wilson_total_never_below_stars(self) -> None:
        """Stars without recorded views still produce a bound."""
        scorer = NoteScorer(run_id="test")
        result = scorer.score_note(
            _make_item(), EngagementStats(stars=3), None, None, FIXED_NOW
        )
        assert result.wilson_score > 0.0

    @pytest.mark.unit
    def test_velocity_from_baseline(self) -> None:
        """Velocity uses the supplied baseline."""
        scorer = NoteScorer(run_id="test")
        result = scorer.score_note(
            _make_item(),
            EngagementStats(stars=40),
            None,
            HistoricalBaseline(stars=10.0),
            FIXED_NOW,
        )
        assert result.velocity_score == pytest.approx(2.0)

    @pytest.mark.unit
    def test_injected_config(self) -> None:
        """Weights come from the injected configuration."""
        config = ScoringConfig(engagement=EngagementWeights(stars=4.0))
        default = NoteScorer(run_id="a").score_note(
            _make_item(hours_old=24), EngagementStats(stars=9), None, None, FIXED_NOW
        )
        custom = NoteScorer(run_id="b", config=config).score_note(
            _make_item(hours_old=24), EngagementStats(stars=9), None, None, FIXED_NOW
        )
        assert default.trending_score == pytest.approx(2.0)
        assert custom.trending_score == pytest.approx(4.0)

    @pytest.mark.unit
    def test_deterministic_for_same_inputs(self) -> None:
        """Same inputs and reference time give identical results."""
        scorer = NoteScorer(run_id="test")
        args = (
            _make_item(content=_fixture_content()),
            _fixture_stats(),
            _fixture_author(),
            HistoricalBaseline(stars=4.0, forks=1.0),
            FIXED_NOW,
        )
        assert scorer.score_note(*args) == scorer.score_note(*args)


class TestNeutralDefaults:
    """Tests for neutral-default substitution."""

    @pytest.mark.unit
    def test_missing_stats_uses_zero_engagement(self) -> None:
        """Missing stats degrade engagement but the note is still scored."""
        result = NoteScorer(run_id="test").score_note(
            _make_item(), None, _fixture_author(), None, FIXED_NOW
        )
        assert result.engagement_score == 0.0
        assert result.degraded == ("engagement",)
        assert result.trending_score == pytest.approx(result.author_factor)
        assert result.velocity_score == 1.0
        assert result.wilson_score == 0.0

    @pytest.mark.unit
    def test_bad_timestamp_uses_neutral_decay(self) -> None:
        """Unparseable timestamps decay at 0.5."""
        item = ContentItem(id="n", created_at="yesterday-ish")
        result = NoteScorer(run_id="test").score_note(
            item, EngagementStats(stars=9), None, None, FIXED_NOW
        )
        assert result.time_decay == 0.5
        assert result.degraded == ("time_decay",)
        assert result.trending_score == pytest.approx(1.0)

    @pytest.mark.unit
    def test_missing_timestamp_uses_neutral_decay(self) -> None:
        """Missing timestamps decay at 0.5."""
        item = ContentItem(id="n", created_at=None)
        result = NoteScorer(run_id="test").score_note(
            item, EngagementStats(stars=9), None, None, FIXED_NOW
        )
        assert result.time_decay == 0.5

    @pytest.mark.unit
    def test_classifier_computation_error_uses_zero_quality(self) -> None:
        """A component computation error degrades only that component."""
        classifier = _ExplodingClassifier(ComputationError("bad", component="quality"))
        result = NoteScorer(run_id="test", classifier=classifier).score_note(
            _make_item(content=_fixture_content()),
            _fixture_stats(),
            None,
            None,
            FIXED_NOW,
        )
        assert result.quality_bonus == 0.0
        assert result.degraded == ("quality",)
        assert result.engagement_score > 0.0

    @pytest.mark.unit
    def test_substitution_is_logged(self) -> None:
        """Each substitution emits a warning event."""
        with capture_logs() as logs:
            NoteScorer(run_id="test").score_note(
                _make_item(), None, None, None, FIXED_NOW
            )
        events = [e for e in logs if e["event"] == "neutral_default_substituted"]
        assert len(events) == 1
        assert events[0]["failed_component"] == "engagement"
        assert events[0]["error_class"] == "INPUT"
        assert events[0]["log_level"] == "warning"

    @pytest.mark.unit
    def test_all_trending_components_failed_raises(self) -> None:
        """A note with nothing usable is a computation error."""
        classifier = _ExplodingClassifier(ComputationError("bad", component="quality"))
        scorer = NoteScorer(run_id="test", classifier=classifier)

        def broken_factor(author: AuthorProfile | None) -> float:
            raise ComputationError("bad", component="author")

        scorer._author.factor = broken_factor  # type: ignore[method-assign]
        item = ContentItem(id="hopeless", created_at="never")

        with pytest.raises(ComputationError) as exc_info:
            scorer.score_note(item, None, None, None, FIXED_NOW)
        assert exc_info.value.component == "combiner"
        assert exc_info.value.note_id == "hopeless"


class TestScoreBatch:
    """Tests for NoteScorer.score_batch."""

    def _make_inputs(self, count: int) -> list[ScoringInput]:
        return [
            ScoringInput(
                item=_make_item(f"note-{i}", hours_old=i, content="x" * (i * 20)),
                stats=EngagementStats(stars=i, views=i * 10),
                author=AuthorProfile(follower_count=i * 3),
            )
            for i in range(count)
        ]

    @pytest.mark.unit
    def test_results_keep_input_order(self) -> None:
        """Results come back in input order."""
        results, dropped = NoteScorer(run_id="test").score_batch(
            self._make_inputs(10), FIXED_NOW
        )
        assert dropped == []
        assert [r.note_id for r in results] == [f"note-{i}" for i in range(10)]

    @pytest.mark.unit
    def test_parallel_matches_sequential(self) -> None:
        """Worker threads do not change results or order."""
        inputs = self._make_inputs(40)
        scorer = NoteScorer(run_id="test")
        sequential, _ = scorer.score_batch(inputs, FIXED_NOW, max_workers=1)
        parallel, _ = scorer.score_batch(inputs, FIXED_NOW, max_workers=8)
        assert parallel == sequential

    @pytest.mark.unit
    def test_unexpected_error_drops_only_that_note(self) -> None:
        """An unexpected exception isolates the failing note."""
        inputs = self._make_inputs(3)
        inputs[1] = ScoringInput(
            item=_make_item("poison", content="has text"), stats=EngagementStats()
        )

        class _PickyClassifier(_ExplodingClassifier):
            def has_images(self, content: str) -> bool:
                if content == "has text":
                    raise RuntimeError("classifier crashed")
                return False

        with capture_logs() as logs:
            scorer = NoteScorer(
                run_id="test", classifier=_PickyClassifier(RuntimeError("unused"))
            )
            results, dropped = scorer.score_batch(inputs, FIXED_NOW)

        assert [r.note_id for r in results] == ["note-0", "note-2"]
        assert len(dropped) == 1
        assert dropped[0].note_id == "poison"
        assert dropped[0].error_class == ScoringErrorClass.COMPUTATION.value
        assert dropped[0].component == "scorer"
        assert "classifier crashed" in dropped[0].message
        assert any(e["event"] == "note_dropped" for e in logs)

    @pytest.mark.unit
    def test_non_finite_score_is_dropped(self) -> None:
        """A non-finite combined score excludes the note."""
        inputs = self._make_inputs(2)
        scorer = NoteScorer(run_id="test")

        def infinite_factor(author: AuthorProfile | None) -> float:
            return math.inf

        scorer._author.factor = infinite_factor  # type: ignore[method-assign]
        results, dropped = scorer.score_batch(inputs, FIXED_NOW)

        assert results == []
        assert {d.note_id for d in dropped} == {"note-0", "note-1"}
        assert all(d.component == "combiner" for d in dropped)

    @pytest.mark.unit
    def test_empty_batch(self) -> None:
        """An empty batch scores nothing."""
        assert NoteScorer(run_id="test").score_batch([], FIXED_NOW) == ([], [])
