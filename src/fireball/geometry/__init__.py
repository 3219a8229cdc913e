"""Geometry module for the procedural fireball surface.

Components:
    noise: Deterministic scalar hash and 3D value noise
    fbm: Four-octave fractal Brownian motion over rotated value noise
    displaced_sphere: Signed distance to the noise-displaced sphere and its
        finite-difference normal

Everything here is a pure Taichi function of position; no function reads or
writes shared state, so any number of pixels can evaluate it concurrently.
"""

from .displaced_sphere import (
    NOISE_AMPLITUDE,
    SPHERE_RADIUS,
    displacement,
    distance_field_normal,
    signed_distance,
)
from .fbm import fractal_brownian_motion, rotate_octave
from .noise import scalar_hash, value_noise

__all__ = [
    "scalar_hash",
    "value_noise",
    "rotate_octave",
    "fractal_brownian_motion",
    "SPHERE_RADIUS",
    "NOISE_AMPLITUDE",
    "displacement",
    "signed_distance",
    "distance_field_normal",
]
