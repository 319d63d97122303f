# =============================================================================
# TESTS - Home feed
# =============================================================================

from unittest.mock import MagicMock

import pytest


class TestHomeFeed:
    """Tests for build_home_feed."""

    @pytest.mark.asyncio
    async def test_four_slots_from_sample_store(self, sample_store, connaught_place):
        from directory.engine.feed import build_home_feed
        from directory.engine.proximity import ProximityPolicy, ProximityRanker

        feed = await build_home_feed(
            ProximityRanker(sample_store, ProximityPolicy()), *connaught_place
        )

        assert len(feed.nearby) == 10
        assert [s.id for s in feed.left] == ["sample-002", "sample-003"]
        assert [s.id for s in feed.right] == ["sample-002", "sample-004"]
        assert len(feed.hero) == 5

    @pytest.mark.asyncio
    async def test_failing_slot_is_isolated(self):
        """One failing ranking leaves only that list empty."""
        from core.exceptions import UpstreamUnavailable
        from directory.engine.feed import build_home_feed
        from directory.models.schemas import NearbyShop

        async def rank(query):
            if query.rail == "hero":
                raise UpstreamUnavailable("hero query failed")
            return [NearbyShop(id=f"{query.rail or 'nearby'}-1", name="Shop", distance=1.0)]

        ranker = MagicMock()
        ranker.rank = rank

        feed = await build_home_feed(ranker, 28.6, 77.2)

        assert feed.hero == []
        assert [s.id for s in feed.nearby] == ["nearby-1"]
        assert [s.id for s in feed.left] == ["left-1"]
        assert [s.id for s in feed.right] == ["right-1"]

    @pytest.mark.asyncio
    async def test_zero_coordinate_rejected(self):
        from core.exceptions import ValidationError
        from directory.engine.feed import build_home_feed

        with pytest.raises(ValidationError):
            await build_home_feed(MagicMock(), 0, 77.2)
