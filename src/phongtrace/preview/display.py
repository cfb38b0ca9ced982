"""Matplotlib-based preview display for rendered images.

This module provides functions for displaying rendered images using
Matplotlib. Shading output is unclamped, so images are clamped to [0, 1]
here, with optional gamma correction for display only.

Example:
    >>> from src.phongtrace.preview.display import show_preview
    >>>
    >>> show_preview(canvas, title="Phong sphere")
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from src.phongtrace.preview.canvas import Canvas


def apply_gamma(
    image: npt.NDArray[np.floating],
    gamma: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Apply gamma correction for display.

    Args:
        image: Linear image array of shape (H, W, 3).
        gamma: Gamma value (default 1.0, i.e. unchanged).

    Returns:
        Gamma corrected image.
    """
    # Clamp to [0, 1] before gamma to avoid NaN from negative values
    image = np.clip(image, 0.0, 1.0)

    if gamma == 1.0:
        return image.astype(np.float32)

    return np.power(image, 1.0 / gamma).astype(np.float32)


def to_display_image(
    image: Canvas | npt.NDArray[np.floating],
    gamma: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Get a [0, 1] float32 image ready for imshow.

    Args:
        image: A Canvas or an (H, W, 3) float array.
        gamma: Display gamma.
    """
    if isinstance(image, Canvas):
        image = image.to_numpy()
    return apply_gamma(image, gamma)


def show_preview(
    image: Canvas | npt.NDArray[np.floating],
    *,
    gamma: float = 1.0,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 8),
    block: bool = True,
) -> None:
    """Display a rendered image as a Matplotlib figure.

    Args:
        image: A Canvas or an (H, W, 3) float array.
        gamma: Display gamma (default 1.0).
        title: Custom title (default shows the image size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    display_image = to_display_image(image, gamma)

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(display_image)
    ax.axis("off")

    if title is None:
        height, width = display_image.shape[:2]
        title = f"Render Preview - {width}x{height}"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)


def show_comparison(
    image_a: npt.NDArray[np.floating],
    image_b: npt.NDArray[np.floating],
    *,
    labels: tuple[str, str] = ("A", "B"),
    diff_scale: float = 10.0,
    figsize: tuple[float, float] = (16, 6),
    block: bool = True,
) -> float:
    """Display side-by-side comparison of two images with difference view.

    Useful for checking the parallel renderer against the reference tracer.

    Args:
        image_a: First image array (H, W, 3).
        image_b: Second image array (H, W, 3).
        labels: Labels for the two images.
        diff_scale: Scale factor for difference amplification.
        figsize: Figure size in inches.
        block: Whether to block execution until figure is closed.

    Returns:
        RMSE (root mean squared error) between the two clamped images.
    """
    import matplotlib.pyplot as plt

    display_a = to_display_image(image_a)
    display_b = to_display_image(image_b)

    diff = display_a.astype(np.float64) - display_b.astype(np.float64)
    rmse = float(np.sqrt(np.mean(diff**2)))
    diff_amplified = np.clip(np.abs(diff) * diff_scale, 0.0, 1.0)

    fig, axes = plt.subplots(1, 3, figsize=figsize)

    axes[0].imshow(display_a)
    axes[0].set_title(labels[0])
    axes[0].axis("off")

    axes[1].imshow(display_b)
    axes[1].set_title(labels[1])
    axes[1].axis("off")

    axes[2].imshow(diff_amplified)
    axes[2].set_title(f"Difference ({diff_scale}x) - RMSE: {rmse:.6f}")
    axes[2].axis("off")

    plt.tight_layout()
    plt.show(block=block)

    return rmse
