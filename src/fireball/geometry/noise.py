"""Deterministic hash and 3D value noise.

The hash is the classic ``fract(sin(n) * 43758.5453)`` shader hash: low
quality, but fully reproducible with no seed and no external randomness.

Value noise assigns a hashed value to every integer lattice corner and
blends the eight corners of the enclosing cell with a smoothstep fade.
Corner hash inputs are derived from a single scalar lattice index
``n = floor(p) . (1, 57, 113)``, so the eight corners sit at offsets
0, 1, 57, 58, 113, 114, 170 and 171 from n.
"""

import taichi as ti
import taichi.math as tm

from fireball.core.vector import dot, lerp, vec3

HASH_SCALE = 43758.5453

# Lattice stride along x, y and z used to build the scalar corner index
LATTICE_STRIDE = vec3(1.0, 57.0, 113.0)


@ti.func
def scalar_hash(n: ti.f32) -> ti.f32:
    """Hash a scalar to a pseudo-random value in [0, 1).

    Args:
        n: Hash input.

    Returns:
        fract(sin(n) * HASH_SCALE).
    """
    x = ti.sin(n) * HASH_SCALE
    return x - ti.floor(x)


@ti.func
def value_noise(x: vec3) -> ti.f32:
    """Evaluate 3D value noise at a point.

    Args:
        x: Sample position.

    Returns:
        Trilinear blend of the hashed cell corners, in [0, 1).
    """
    p = tm.floor(x)
    f = x - p
    # Smoothstep fade, componentwise
    f = f * f * (3.0 - 2.0 * f)
    n = dot(p, LATTICE_STRIDE)

    return lerp(
        lerp(
            lerp(scalar_hash(n + 0.0), scalar_hash(n + 1.0), f.x),
            lerp(scalar_hash(n + 57.0), scalar_hash(n + 58.0), f.x),
            f.y,
        ),
        lerp(
            lerp(scalar_hash(n + 113.0), scalar_hash(n + 114.0), f.x),
            lerp(scalar_hash(n + 170.0), scalar_hash(n + 171.0), f.x),
            f.y,
        ),
        f.z,
    )
