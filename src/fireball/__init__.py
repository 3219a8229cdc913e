"""Procedural fireball renderer built on Taichi.

This package renders a single still image of a noise-displaced sphere by
sphere tracing an implicit signed distance field, then writes the frame as a
binary pixel map (P6 PPM).

Subpackages:
    core: Vector utilities, the sphere tracer and the frame driver
    geometry: Value noise, fractal Brownian motion and the displaced sphere SDF
    shading: Fire palette and hit-point shading
    camera: Pinhole primary ray generation
    preview: PPM/PNG export and Matplotlib preview
"""

__version__ = "0.1.0"
