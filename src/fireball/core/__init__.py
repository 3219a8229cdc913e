"""Core rendering module.

Components:
    vector: Ray data structure and vector utilities
    tracer: Sphere tracing against the displaced sphere distance field
    renderer: Frame driver filling the framebuffer scanline by scanline

All per-pixel work runs inside Taichi kernels; the outermost loop of the
frame kernel is parallelized across scanlines.
"""

from .vector import (
    Ray,
    add,
    dot,
    lerp,
    magnitude,
    make_ray,
    normalize,
    scale,
    sub,
    vec3,
)

# Note: tracer and renderer are NOT imported here to avoid circular imports
# with the geometry package. Import them directly:
#   from fireball.core.tracer import sphere_trace
#   from fireball.core.renderer import FireballRenderer

__all__ = [
    "Ray",
    "make_ray",
    "vec3",
    "add",
    "sub",
    "scale",
    "dot",
    "magnitude",
    "normalize",
    "lerp",
]
