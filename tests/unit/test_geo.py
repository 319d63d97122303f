# =============================================================================
# TESTS - Great-circle distance
# =============================================================================

import math


class TestGreatCircle:
    """Tests for great_circle_km."""

    def test_same_point_is_zero(self):
        """Identical points are zero km apart (no acos domain error)."""
        from directory.engine.geo import great_circle_km

        assert great_circle_km(28.6139, 77.209, 28.6139, 77.209) == 0.0

    def test_delhi_to_mumbai(self):
        """Known city pair lands in the expected range."""
        from directory.engine.geo import great_circle_km

        distance = great_circle_km(28.6139, 77.2090, 19.0760, 72.8777)

        assert 1140 < distance < 1160

    def test_symmetric(self):
        from directory.engine.geo import great_circle_km

        a = great_circle_km(28.6139, 77.209, 26.9124, 75.7873)
        b = great_circle_km(26.9124, 75.7873, 28.6139, 77.209)

        assert math.isclose(a, b)

    def test_antipodal_points(self):
        """Antipodes are half the circumference apart."""
        from directory.engine.geo import EARTH_RADIUS_KM, great_circle_km

        distance = great_circle_km(0.0, 0.0, 0.0, 180.0)

        assert math.isclose(distance, math.pi * EARTH_RADIUS_KM, rel_tol=1e-9)

    def test_short_distance(self):
        """One thousandth of a degree of latitude is about 111 m."""
        from directory.engine.geo import great_circle_km

        distance = great_circle_km(28.0, 77.0, 28.001, 77.0)

        assert 0.10 < distance < 0.12


class TestDistanceExpression:
    """Tests for the aggregation form of the formula."""

    def test_scaled_by_earth_radius(self):
        from directory.engine.geo import EARTH_RADIUS_KM, distance_expression

        expression = distance_expression(28.6, 77.2)

        assert expression["$multiply"][0] == EARTH_RADIUS_KM
        assert "$acos" in expression["$multiply"][1]

    def test_acos_argument_clamped(self):
        """The cosine is bounded to [-1, 1] before acos."""
        from directory.engine.geo import distance_expression

        clamped = distance_expression(28.6, 77.2)["$multiply"][1]["$acos"]

        assert clamped["$min"][0] == 1
        assert clamped["$min"][1]["$max"][0] == -1

    def test_uses_document_coordinates(self):
        from directory.engine.geo import distance_expression

        text = repr(distance_expression(28.6, 77.2))

        assert "$latitude" in text
        assert "$longitude" in text
        assert "28.6" in text
        assert "77.2" in text
