"""Pixel canvas and plain-text PPM serialization.

The canvas is the pixel-color sink of the tracer: write_color(x, y, color)
stores an unclamped color. Quantization to [0, 255] happens only when the
canvas is serialized.

PPM (P3) layout:
    P3
    <width> <height>
    255
    <r g b r g b ...>   one image row per block, lines wrapped at 70 chars

Example:
    >>> from src.phongtrace.core.color import Color
    >>> from src.phongtrace.preview.canvas import Canvas
    >>> c = Canvas(5, 3)
    >>> c.write_color(0, 0, Color(1.5, 0.0, 0.0))
    >>> c.to_ppm().splitlines()[3]
    '255 0 0 0 0 0 0 0 0 0 0 0 0 0 0'
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt

from src.phongtrace.core.color import Color

# Maximum channel value written to the PPM header
PPM_MAX_COLOR_VALUE = 255

# Maximum characters per PPM data line
PPM_LINE_WIDTH = 70


def quantize(image: npt.NDArray[np.floating], max_value: int = PPM_MAX_COLOR_VALUE) -> npt.NDArray[np.int64]:
    """Scale [0, 1] colors to integers in [0, max_value].

    Values are multiplied by max_value, rounded half up and clamped, so
    out-of-range colors saturate instead of wrapping.
    """
    scaled = np.floor(np.asarray(image, dtype=np.float64) * max_value + 0.5)
    return np.clip(scaled, 0, max_value).astype(np.int64)


class Canvas:
    """A width x height grid of colors, initially black.

    Pixel (0, 0) is the top-left corner; x grows to the right and y grows
    downward.

    Attributes:
        width: Width in pixels.
        height: Height in pixels.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")
        self._width = width
        self._height = height
        self._pixels = np.zeros((height, width, 3), dtype=np.float64)

    @classmethod
    def from_numpy(cls, image: npt.NDArray[np.floating]) -> Canvas:
        """Wrap an (H, W, 3) array as a canvas (the data is copied)."""
        if image.ndim != 3 or image.shape[2] != 3:
            raise ValueError(f"Expected an (H, W, 3) image, got shape {image.shape}")
        canvas = cls(image.shape[1], image.shape[0])
        canvas._pixels[...] = image
        return canvas

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(
                f"Pixel ({x}, {y}) is outside the {self._width}x{self._height} canvas"
            )

    def write_color(self, x: int, y: int, color: Color) -> None:
        """Store a color at (x, y). Components are kept unclamped."""
        self._check_bounds(x, y)
        self._pixels[y, x] = color.to_tuple()

    def pixel_at(self, x: int, y: int) -> Color:
        self._check_bounds(x, y)
        r, g, b = self._pixels[y, x]
        return Color(float(r), float(g), float(b))

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Get a copy of the pixels as an (H, W, 3) float array."""
        return self._pixels.copy()

    def to_ppm(self) -> str:
        """Serialize to plain-text PPM (P3)."""
        lines = [
            "P3",
            f"{self._width} {self._height}",
            str(PPM_MAX_COLOR_VALUE),
        ]
        channels = quantize(self._pixels)
        for row in channels:
            lines.extend(_wrap_values(row.ravel().tolist()))
        return "\n".join(lines) + "\n"

    def save_ppm(self, filepath: str | Path) -> None:
        Path(filepath).write_text(self.to_ppm(), encoding="ascii")

    def __repr__(self) -> str:
        return f"Canvas(width={self._width}, height={self._height})"


def _wrap_values(values: list[int], width: int = PPM_LINE_WIDTH) -> list[str]:
    """Join numbers with spaces, breaking lines before they exceed width."""
    lines: list[str] = []
    current = ""
    for value in values:
        token = str(value)
        if current and len(current) + 1 + len(token) > width:
            lines.append(current)
            current = token
        elif current:
            current += " " + token
        else:
            current = token
    lines.append(current)
    return lines
