"""RGB color values.

Colors are unrestricted floats while shading; components outside [0, 1] are
only clamped when an image is serialized (see preview.canvas).
"""

from __future__ import annotations

from dataclasses import dataclass

from src.phongtrace.core.tuples import approx_equal


@dataclass(frozen=True, eq=False)
class Color:
    """An RGB triple.

    Attributes:
        red: Red channel.
        green: Green channel.
        blue: Blue channel.
    """

    red: float
    green: float
    blue: float

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.red, self.green, self.blue)

    def approx_eq(self, other: Color) -> bool:
        return (
            approx_equal(self.red, other.red)
            and approx_equal(self.green, other.green)
            and approx_equal(self.blue, other.blue)
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return self.approx_eq(other)

    def __add__(self, other: Color) -> Color:
        return Color(self.red + other.red, self.green + other.green, self.blue + other.blue)

    def __sub__(self, other: Color) -> Color:
        return Color(self.red - other.red, self.green - other.green, self.blue - other.blue)

    def __mul__(self, other: Color | float) -> Color:
        if isinstance(other, Color):
            return self.hadamard(other)
        return Color(self.red * other, self.green * other, self.blue * other)

    def __rmul__(self, scalar: float) -> Color:
        return self.__mul__(scalar)

    def hadamard(self, other: Color) -> Color:
        """Component-wise (Hadamard) product."""
        return Color(self.red * other.red, self.green * other.green, self.blue * other.blue)


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
