"""Camera module for primary ray generation.

Components:
    pinhole: Eye point looking down +z at a square wall of pixels

Pixel (0, 0) is the top-left corner; y grows downward on the image and
upward in the world.

The pinhole module allocates Taichi fields at import time, so it must only
be imported after ti.init().
"""

from .pinhole import PinholeCamera, get_camera_info, get_ray, setup_camera

__all__ = [
    "PinholeCamera",
    "setup_camera",
    "get_ray",
    "get_camera_info",
]
