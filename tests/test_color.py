"""Unit tests for colors."""

from src.phongtrace.core.color import BLACK, WHITE, Color


class TestColor:
    """Tests for color construction and arithmetic."""

    def test_components(self):
        c = Color(-0.5, 0.4, 1.7)
        assert c.red == -0.5
        assert c.green == 0.4
        assert c.blue == 1.7

    def test_add(self):
        assert Color(0.9, 0.6, 0.75) + Color(0.7, 0.1, 0.25) == Color(1.6, 0.7, 1.0)

    def test_subtract(self):
        assert Color(0.9, 0.6, 0.75) - Color(0.7, 0.1, 0.25) == Color(0.2, 0.5, 0.5)

    def test_scalar_multiply(self):
        assert Color(0.2, 0.3, 0.4) * 2 == Color(0.4, 0.6, 0.8)
        assert 2 * Color(0.2, 0.3, 0.4) == Color(0.4, 0.6, 0.8)

    def test_hadamard_product(self):
        expected = Color(0.9, 0.2, 0.04)
        assert Color(1, 0.2, 0.4) * Color(0.9, 1, 0.1) == expected
        assert Color(1, 0.2, 0.4).hadamard(Color(0.9, 1, 0.1)) == expected

    def test_values_are_not_clamped(self):
        c = Color(0.8, 0.8, 0.8) + Color(0.8, 0.8, 0.8)
        assert c.red > 1.0

    def test_constants(self):
        assert BLACK == Color(0, 0, 0)
        assert WHITE == Color(1, 1, 1)
