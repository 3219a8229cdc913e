"""Signed distance field of the noise-displaced sphere.

The fireball is a sphere of radius ``radius`` whose surface is pushed inward
by fractal noise:

    sdf(p) = |p| - (radius + displacement(p))
    displacement(p) = -fbm(p * NOISE_FREQUENCY) * amplitude

Positive distances lie outside the surface, negative inside. Because the
displacement is never positive, the undisplaced sphere of radius ``radius``
bounds the whole surface; the tracer relies on this for its early cull.

Normals are estimated with a forward-difference gradient of the field.
"""

import taichi as ti

from fireball.core.vector import magnitude, normalize, vec3
from fireball.geometry.fbm import fractal_brownian_motion

SPHERE_RADIUS = 1.5
NOISE_AMPLITUDE = 1.0

# Spatial frequency of the displacement noise
NOISE_FREQUENCY = 3.4

# Finite-difference step for normal estimation
NORMAL_EPSILON = 0.1


@ti.func
def displacement(p: vec3, amplitude: ti.f32) -> ti.f32:
    """Inward surface displacement at p (zero or negative)."""
    return -fractal_brownian_motion(p * NOISE_FREQUENCY) * amplitude


@ti.func
def signed_distance(p: vec3, radius: ti.f32, amplitude: ti.f32) -> ti.f32:
    """Evaluate the signed distance to the displaced sphere.

    Args:
        p: Query position.
        radius: Base sphere radius.
        amplitude: Noise amplitude. With 0 the field is exactly |p| - radius.

    Returns:
        Signed distance; negative inside the surface.
    """
    return magnitude(p) - (radius + displacement(p, amplitude))


@ti.func
def distance_field_normal(pos: vec3, radius: ti.f32, amplitude: ti.f32) -> vec3:
    """Estimate the surface normal at pos from the field gradient.

    Uses forward differences with step NORMAL_EPSILON along each axis. Only
    meaningful at or near the surface, where the gradient is non-zero.

    Args:
        pos: Point at or near the surface.
        radius: Base sphere radius.
        amplitude: Noise amplitude.

    Returns:
        Unit-length gradient direction.
    """
    eps = NORMAL_EPSILON
    d = signed_distance(pos, radius, amplitude)
    nx = signed_distance(pos + vec3(eps, 0.0, 0.0), radius, amplitude) - d
    ny = signed_distance(pos + vec3(0.0, eps, 0.0), radius, amplitude) - d
    nz = signed_distance(pos + vec3(0.0, 0.0, eps), radius, amplitude) - d
    return normalize(vec3(nx, ny, nz))
