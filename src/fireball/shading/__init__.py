"""Shading module for the fireball surface.

Components:
    palette: Five-stop fire palette and the hit-point shading model
"""

from .palette import (
    BACKGROUND_COLOR,
    PALETTE_STOPS,
    light_intensity,
    noise_level,
    palette_fire,
    shade_hit,
)

__all__ = [
    "BACKGROUND_COLOR",
    "PALETTE_STOPS",
    "palette_fire",
    "noise_level",
    "light_intensity",
    "shade_hit",
]
