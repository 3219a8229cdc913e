"""Sphere tracing against the displaced sphere distance field.

The tracer walks a ray forward in damped steps sized by the signed distance
until a sample lands inside the surface. It records the first interior
sample as the hit point; there is no bisection or secant refinement toward
the exact zero crossing.

Before marching, rays whose closest approach to the origin lies outside the
undisplaced sphere are rejected outright, since the displaced surface never
extends beyond it.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from fireball.core.tracer import sphere_trace
    >>> from fireball.core.vector import vec3
    >>>
    >>> result = ti.field(dtype=ti.i32, shape=())
    >>>
    >>> @ti.kernel
    ... def trace_center():
    ...     for _ in range(1):
    ...         hit = sphere_trace(vec3(0.0, 0.0, 3.0), vec3(0.0, 0.0, -1.0), 1.5, 1.0)
    ...         result[None] = hit.hit
"""

import taichi as ti

from fireball.core.vector import add, dot, scale, vec3
from fireball.geometry.displaced_sphere import signed_distance

# =============================================================================
# Marching Constants
# =============================================================================

# Maximum number of distance evaluations per ray
MAX_MARCH_STEPS = 128

# Fraction of the signed distance advanced per step
STEP_DAMPING = 0.1

# Smallest step taken, so the march always makes forward progress
MIN_STEP = 0.01


@ti.dataclass
class TraceResult:
    """Outcome of a sphere trace.

    Attributes:
        hit: 1 if the march reached the interior, 0 otherwise.
        point: The first sample found inside the surface. Only valid if
            hit == 1.
        steps: Number of distance evaluations performed. 0 when the ray was
            culled by the bounding sphere, at most MAX_MARCH_STEPS otherwise.
    """

    hit: ti.i32
    point: vec3
    steps: ti.i32


@ti.func
def misses_bounding_sphere(origin: vec3, direction: vec3, radius: ti.f32) -> ti.i32:
    """Check whether a ray passes entirely outside the bounding sphere.

    Compares the squared distance of closest approach to the origin,
    |o|^2 - (o . d)^2, against radius^2. The direction must be unit length.

    Args:
        origin: Ray origin.
        direction: Unit ray direction.
        radius: Bounding sphere radius (centered at the origin).

    Returns:
        1 if the ray cannot intersect the sphere, 0 otherwise.
    """
    along = dot(origin, direction)
    return dot(origin, origin) - along * along > radius * radius


@ti.func
def sphere_trace(origin: vec3, direction: vec3, radius: ti.f32, amplitude: ti.f32) -> TraceResult:
    """March a ray toward the displaced sphere surface.

    Each step evaluates the signed distance d at the current position. A
    negative d ends the march with a hit; otherwise the position advances by
    max(d * STEP_DAMPING, MIN_STEP). The march gives up after
    MAX_MARCH_STEPS evaluations.

    Args:
        origin: Ray origin.
        direction: Unit ray direction. Not re-normalized here.
        radius: Base sphere radius.
        amplitude: Noise amplitude of the surface displacement.

    Returns:
        A TraceResult; check the hit field to tell a hit from a miss.
    """
    did_hit = 0
    hit_point = vec3(0.0, 0.0, 0.0)
    steps = 0

    if not misses_bounding_sphere(origin, direction, radius):
        pos = origin
        # Taichi functions cannot return from inside a loop, so the remaining
        # iterations idle once the hit is recorded
        for _ in range(MAX_MARCH_STEPS):
            if did_hit == 0:
                steps += 1
                d = signed_distance(pos, radius, amplitude)
                if d < 0.0:
                    did_hit = 1
                    hit_point = pos
                else:
                    pos = add(pos, scale(direction, ti.max(d * STEP_DAMPING, MIN_STEP)))

    return TraceResult(hit=did_hit, point=hit_point, steps=steps)
