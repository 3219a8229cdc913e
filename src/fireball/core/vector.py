"""Ray data structure and vector utilities.

This module provides the Ray dataclass and the small set of vector operations
the fireball pipeline is written against. All functions are Taichi functions
and must be called from within a Taichi kernel.

Vectors are ``ti.math.vec3`` values (float32). Every operation returns a new
value; vectors are never mutated in place.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from fireball.core.vector import make_ray, normalize, vec3
    >>>
    >>> @ti.kernel
    ... def build() -> ti.f32:
    ...     ray = make_ray(vec3(0.0, 0.0, 3.0), normalize(vec3(0.0, 0.0, -2.0)))
    ...     return ray.direction.z
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction of the ray (vec3). Unit length by
            construction; consumers do not re-normalize it.
    """

    origin: vec3
    direction: vec3


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction.

    Args:
        origin: The starting point of the ray.
        direction: The direction vector (expected to be normalized).

    Returns:
        A new Ray instance.
    """
    return Ray(origin=origin, direction=direction)


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def add(a: vec3, b: vec3) -> vec3:
    """Componentwise sum a + b."""
    return a + b


@ti.func
def sub(a: vec3, b: vec3) -> vec3:
    """Componentwise difference a - b."""
    return a - b


@ti.func
def scale(v: vec3, s: ti.f32) -> vec3:
    """Scale a vector by a scalar.

    The scalar-on-left form ``s * v`` is the native Taichi operator and
    yields the same result.
    """
    return v * s


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product of two vectors.

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        The dot product a . b.
    """
    return tm.dot(a, b)


@ti.func
def magnitude(v: vec3) -> ti.f32:
    """Compute the Euclidean length of a vector.

    Args:
        v: The input vector.

    Returns:
        sqrt(v . v).
    """
    return tm.length(v)


@ti.func
def normalize(v: vec3) -> vec3:
    """Normalize a vector to unit length.

    The input must have non-zero length. A zero vector yields NaN
    components; callers are responsible for never passing one.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v.
    """
    return v * (1.0 / tm.length(v))


@ti.func
def lerp(v0, v1, t: ti.f32):
    """Interpolate from v0 to v1 with the parameter clamped to [0, 1].

    Works for both scalars and vectors. Because t is clamped, values outside
    [0, 1] hold at the nearest endpoint instead of extrapolating.

    Args:
        v0: Value at t = 0.
        v1: Value at t = 1.
        t: Interpolation parameter.

    Returns:
        v0 + (v1 - v0) * clamp(t, 0, 1).
    """
    return v0 + (v1 - v0) * tm.clamp(t, 0.0, 1.0)
