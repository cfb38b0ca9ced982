"""Image export utilities for rendered images.

This module provides functions for saving rendered images to files. Colors
are clamped and quantized here, never during shading.

Supported formats:
    - PPM (plain-text P3, see preview.canvas)
    - PNG (8-bit via Pillow)

Example:
    >>> from src.phongtrace.preview.canvas import Canvas
    >>> from src.phongtrace.preview.export import save_png
    >>>
    >>> canvas = Canvas(100, 100)
    >>> save_png(canvas, "output.png")
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from src.phongtrace.preview.canvas import Canvas, quantize


def _as_array(image: Canvas | npt.NDArray[np.floating]) -> npt.NDArray[np.floating]:
    if isinstance(image, Canvas):
        return image.to_numpy()
    return image


def image_to_uint8(image: Canvas | npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Convert a linear float image to uint8 for display/export.

    Uses the same clamp-and-round quantization as the PPM writer, so PNG
    and PPM output agree pixel for pixel.

    Args:
        image: A Canvas or an (H, W, 3) float array.

    Returns:
        8-bit image array of shape (H, W, 3) with dtype uint8.
    """
    return quantize(_as_array(image)).astype(np.uint8)


def save_png(image: Canvas | npt.NDArray[np.floating], filepath: str | Path) -> None:
    """Save a canvas or float image as an 8-bit PNG.

    Args:
        image: A Canvas or an (H, W, 3) float array.
        filepath: Output file path (should end in .png).
    """
    pil_image = PILImage.fromarray(image_to_uint8(image))
    pil_image.save(filepath)


def save_image(image: Canvas | npt.NDArray[np.floating], filepath: str | Path) -> None:
    """Save an image, choosing the format from the file extension.

    ".ppm" writes plain-text P3; anything else is handed to Pillow.
    """
    path = Path(filepath)
    if path.suffix.lower() == ".ppm":
        canvas = image if isinstance(image, Canvas) else Canvas.from_numpy(image)
        canvas.save_ppm(path)
    else:
        save_png(image, path)


def compute_rmse(
    image_a: npt.NDArray[np.floating],
    image_b: npt.NDArray[np.floating],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
