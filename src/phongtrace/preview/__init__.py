"""Preview module for output and visualization.

Components:
    canvas: Float RGB canvas and plain-text PPM (P3) serialization
    export: PNG export via Pillow and image comparison
    display: Matplotlib-based preview display

Colors are clamped to [0, 1] and quantized to 0..255 only when exported.

Example:
    >>> from src.phongtrace.preview import Canvas, save_image
    >>>
    >>> canvas = Canvas(10, 2)
    >>> save_image(canvas, "output.ppm")
"""

from src.phongtrace.preview.canvas import (
    PPM_LINE_WIDTH,
    PPM_MAX_COLOR_VALUE,
    Canvas,
    quantize,
)
from src.phongtrace.preview.display import (
    apply_gamma,
    show_comparison,
    show_preview,
    to_display_image,
)
from src.phongtrace.preview.export import (
    compute_rmse,
    image_to_uint8,
    save_image,
    save_png,
)

__all__ = [
    # Canvas
    "Canvas",
    "quantize",
    "PPM_LINE_WIDTH",
    "PPM_MAX_COLOR_VALUE",
    # Display functions
    "show_preview",
    "show_comparison",
    "apply_gamma",
    "to_display_image",
    # Export functions
    "save_png",
    "save_image",
    "image_to_uint8",
    "compute_rmse",
]
