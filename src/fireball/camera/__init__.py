"""Camera module for primary ray generation.

Components:
    pinhole: Fixed-orientation pinhole camera looking down -z
"""

from .pinhole import PinholeCamera, primary_ray, ray_direction

__all__ = [
    "PinholeCamera",
    "primary_ray",
    "ray_direction",
]
