"""Pinhole camera model for primary ray generation.

The camera sits at a fixed position and always looks down the -z axis with
+y up. Pixel (i, j) is addressed with i = 0 at the left column and j = 0 at
the top scanline; rays pass through pixel centers with no jitter.

The image plane is placed at the distance where the vertical field of view
spans exactly ``height`` pixel units:

    direction = normalize(i + 0.5 - width / 2,
                          height / 2 - (j + 0.5),
                          -height / (2 * tan(fov / 2)))
"""

import math
from dataclasses import dataclass

import taichi as ti

from fireball.core.vector import Ray, make_ray, normalize, vec3


@dataclass(frozen=True)
class PinholeCamera:
    """Configuration for the pinhole camera.

    Attributes:
        position: Camera position in world space (x, y, z).
        fov: Vertical field of view in radians.
    """

    position: tuple[float, float, float] = (0.0, 0.0, 3.0)
    fov: float = math.pi / 3.0


@ti.func
def ray_direction(pixel_i: ti.i32, pixel_j: ti.i32, width: ti.i32, height: ti.i32, fov: ti.f32) -> vec3:
    """Compute the unit direction through the center of a pixel.

    Args:
        pixel_i: Pixel column (0 = left).
        pixel_j: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.
        fov: Vertical field of view in radians.

    Returns:
        Normalized view direction.
    """
    w = ti.cast(width, ti.f32)
    h = ti.cast(height, ti.f32)
    dir_x = (ti.cast(pixel_i, ti.f32) + 0.5) - w / 2.0
    dir_y = -(ti.cast(pixel_j, ti.f32) + 0.5) + h / 2.0
    dir_z = -h / (2.0 * ti.tan(fov / 2.0))
    return normalize(vec3(dir_x, dir_y, dir_z))


@ti.func
def primary_ray(
    pixel_i: ti.i32,
    pixel_j: ti.i32,
    width: ti.i32,
    height: ti.i32,
    fov: ti.f32,
    origin: vec3,
) -> Ray:
    """Generate the primary ray for a pixel.

    Args:
        pixel_i: Pixel column (0 = left).
        pixel_j: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.
        fov: Vertical field of view in radians.
        origin: Camera position.

    Returns:
        A Ray from the camera through the pixel center.
    """
    return make_ray(origin, ray_direction(pixel_i, pixel_j, width, height, fov))
