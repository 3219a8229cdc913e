"""Fractal Brownian motion over rotated value noise.

Four octaves of value noise are summed with halving weights. The sample
position is first rotated by a fixed orthonormal matrix so the octave
lattices do not line up with the world axes, then rescaled between octaves
by non-integer factors (2.32, 3.03, 2.61). The scales compound: the second
octave samples at ``p * 2.32``, the third at ``p * 2.32 * 3.03``.

The result is divided by the weight sum so it stays within [0, 1].
"""

import taichi as ti

from fireball.core.vector import vec3
from fireball.geometry.noise import value_noise

# Fixed decorrelating rotation; rows are applied as dot products
OCTAVE_ROTATION = ti.Matrix(
    [
        [0.00, 0.80, 0.60],
        [-0.80, 0.36, -0.48],
        [-0.60, -0.48, 0.64],
    ]
)

# Sum of the octave weights 0.5 + 0.25 + 0.125 + 0.0625
WEIGHT_SUM = 0.9375


@ti.func
def rotate_octave(v: vec3) -> vec3:
    """Apply the fixed octave rotation to a position."""
    return OCTAVE_ROTATION @ v


@ti.func
def fractal_brownian_motion(v: vec3) -> ti.f32:
    """Sum four rotated, rescaled octaves of value noise.

    Args:
        v: Sample position.

    Returns:
        Normalized fractal noise, approximately in [0, 1].
    """
    p = rotate_octave(v)
    f = 0.0
    f += 0.5 * value_noise(p)
    p = p * 2.32
    f += 0.25 * value_noise(p)
    p = p * 3.03
    f += 0.125 * value_noise(p)
    p = p * 2.61
    f += 0.0625 * value_noise(p)

    return f / WEIGHT_SUM
