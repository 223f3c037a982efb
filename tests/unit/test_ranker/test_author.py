"""Unit tests for the author factor."""

import math

import pytest

from trendscore.config.schemas import AuthorFactorConfig
from trendscore.ranker.author import AuthorFactorCalculator
from trendscore.ranker.models import AuthorProfile


def _factor(author: AuthorProfile | None) -> float:
    return AuthorFactorCalculator(AuthorFactorConfig()).factor(author)


class TestAuthorFactor:
    """Tests for AuthorFactorCalculator."""

    @pytest.mark.unit
    def test_missing_author_is_zero(self) -> None:
        """No profile means no bonus."""
        assert _factor(None) == 0.0

    @pytest.mark.unit
    def test_empty_profile_is_zero(self) -> None:
        """Zero signals give zero."""
        assert _factor(AuthorProfile()) == 0.0

    @pytest.mark.unit
    def test_fixture_author(self) -> None:
        """50 followers and reputation 5 give the expected bonus."""
        expected = math.log10(51) / 4 * 0.1 + 0.5 * 0.2
        assert _factor(AuthorProfile(follower_count=50, reputation=5)) == pytest.approx(
            expected
        )

    @pytest.mark.unit
    def test_verified_adds_flat_bonus(self) -> None:
        """Verification adds exactly 0.3."""
        plain = _factor(AuthorProfile(follower_count=120, reputation=2.5))
        verified = _factor(AuthorProfile(follower_count=120, reputation=2.5, verified=True))
        assert verified - plain == pytest.approx(0.3)

    @pytest.mark.unit
    def test_signals_saturate(self) -> None:
        """Huge follower counts and reputation are capped."""
        capped = _factor(AuthorProfile(follower_count=9_999, reputation=10, verified=True))
        huge = _factor(
            AuthorProfile(follower_count=50_000_000, reputation=1_000, verified=True)
        )
        assert capped == pytest.approx(0.6)
        assert huge == pytest.approx(0.6)

    @pytest.mark.unit
    def test_negative_signals_clamped(self) -> None:
        """Negative values count as zero."""
        assert _factor(AuthorProfile(follower_count=-10, reputation=-3)) == 0.0

    @pytest.mark.unit
    def test_null_signals_become_zero(self) -> None:
        """Null values from the data layer are treated as zero."""
        author = AuthorProfile.model_validate(
            {"follower_count": None, "reputation": None, "verified": True}
        )
        assert _factor(author) == pytest.approx(0.3)
