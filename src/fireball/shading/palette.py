"""Fire palette and hit-point shading.

Surface color is driven by how far the surface has been displaced inward:
deeper points map further along a gray -> dark gray -> red -> orange ->
yellow ramp. The palette is piecewise linear over four equal bands of [0, 1].

The ramp color is then scaled by a single-light Lambertian term floored at
LIGHT_FLOOR, so no visible surface point is fully black.

Colors are linear values and are not clamped here; yellow intentionally
exceeds 1.0 in red and green.
"""

import taichi as ti
import taichi.math as tm

from fireball.core.vector import dot, lerp, magnitude, normalize, sub, vec3
from fireball.geometry.displaced_sphere import distance_field_normal

# (threshold, (r, g, b)) stops partitioning [0, 1] into four equal bands
PALETTE_STOPS = (
    (0.00, (0.4, 0.4, 0.4)),  # gray
    (0.25, (0.2, 0.2, 0.2)),  # dark gray
    (0.50, (1.0, 0.0, 0.0)),  # red
    (0.75, (1.0, 0.6, 0.0)),  # orange
    (1.00, (1.7, 1.3, 1.0)),  # yellow
)

GRAY = vec3(*PALETTE_STOPS[0][1])
DARK_GRAY = vec3(*PALETTE_STOPS[1][1])
RED = vec3(*PALETTE_STOPS[2][1])
ORANGE = vec3(*PALETTE_STOPS[3][1])
YELLOW = vec3(*PALETTE_STOPS[4][1])

# Color for rays that never reach the surface
BACKGROUND_COLOR = (0.2, 0.7, 0.8)

# Palette input is (noise_level - HEAT_OFFSET) * HEAT_GAIN
HEAT_OFFSET = 0.2
HEAT_GAIN = 2.0

# Lower bound of the diffuse light term
LIGHT_FLOOR = 0.4


@ti.func
def palette_fire(d: ti.f32) -> vec3:
    """Map a heat value to a fire color.

    Args:
        d: Heat value, clamped to [0, 1].

    Returns:
        The interpolated palette color.
    """
    t = tm.clamp(d, 0.0, 1.0)
    color = vec3(0.0, 0.0, 0.0)
    if t < 0.25:
        color = lerp(GRAY, DARK_GRAY, t * 4.0)
    elif t < 0.5:
        color = lerp(DARK_GRAY, RED, t * 4.0 - 1.0)
    elif t < 0.75:
        color = lerp(RED, ORANGE, t * 4.0 - 2.0)
    else:
        color = lerp(ORANGE, YELLOW, t * 4.0 - 3.0)
    return color


@ti.func
def noise_level(hit: vec3, radius: ti.f32, amplitude: ti.f32) -> ti.f32:
    """Inward displacement depth of a surface point, in units of amplitude."""
    return (radius - magnitude(hit)) / amplitude


@ti.func
def light_intensity(hit: vec3, light_pos: vec3, radius: ti.f32, amplitude: ti.f32) -> ti.f32:
    """Diffuse light term at a surface point, floored at LIGHT_FLOOR.

    Args:
        hit: Surface point.
        light_pos: Point light position.
        radius: Base sphere radius.
        amplitude: Noise amplitude.

    Returns:
        max(dot(normalize(light_pos - hit), normal(hit)), LIGHT_FLOOR).
    """
    light_dir = normalize(sub(light_pos, hit))
    normal = distance_field_normal(hit, radius, amplitude)
    return ti.max(dot(light_dir, normal), LIGHT_FLOOR)


@ti.func
def shade_hit(hit: vec3, light_pos: vec3, radius: ti.f32, amplitude: ti.f32) -> vec3:
    """Compute the color of a traced surface point.

    Args:
        hit: Surface point returned by the tracer.
        light_pos: Point light position.
        radius: Base sphere radius.
        amplitude: Noise amplitude. Must be non-zero.

    Returns:
        Palette color of the displacement depth scaled by the light term.
    """
    heat = (noise_level(hit, radius, amplitude) - HEAT_OFFSET) * HEAT_GAIN
    return palette_fire(heat) * light_intensity(hit, light_pos, radius, amplitude)
