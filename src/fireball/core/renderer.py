"""Frame driver for the fireball renderer.

This module fills a framebuffer by tracing one primary ray per pixel through
the displaced sphere distance field. Rays that reach the surface are shaded
with the fire palette; rays that miss receive the background color.

The frame kernel's outermost loop runs over scanlines, which Taichi
parallelizes across its CPU thread pool. Each scanline task writes only its
own row of the framebuffer and every pixel depends only on its own ray, so the
result is independent of scheduling order. Returning from the kernel is the
only synchronization point before the image is handed to an encoder.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from fireball.config import RenderSettings
    >>> from fireball.core.renderer import FireballRenderer
    >>>
    >>> renderer = FireballRenderer(RenderSettings(width=64, height=48))
    >>> image = renderer.render()  # (48, 64, 3) float32
"""

import logging
import time

import numpy as np
import numpy.typing as npt
import taichi as ti

from fireball.camera.pinhole import primary_ray
from fireball.config import RenderSettings
from fireball.core.tracer import sphere_trace
from fireball.core.vector import vec3
from fireball.shading.palette import shade_hit

logger = logging.getLogger(__name__)


# =============================================================================
# Per-Pixel Pipeline
# =============================================================================


@ti.func
def shade_pixel(
    pixel_i: ti.i32,
    pixel_j: ti.i32,
    width: ti.i32,
    height: ti.i32,
    fov: ti.f32,
    camera_pos: vec3,
    light_pos: vec3,
    background: vec3,
    radius: ti.f32,
    amplitude: ti.f32,
) -> vec3:
    """Trace and shade a single pixel.

    Args:
        pixel_i: Pixel column (0 = left).
        pixel_j: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.
        fov: Vertical field of view in radians.
        camera_pos: Camera position.
        light_pos: Point light position.
        background: Color for rays that miss the surface.
        radius: Base sphere radius.
        amplitude: Noise amplitude.

    Returns:
        The linear pixel color.
    """
    ray = primary_ray(pixel_i, pixel_j, width, height, fov, camera_pos)
    result = sphere_trace(ray.origin, ray.direction, radius, amplitude)

    color = background
    if result.hit == 1:
        color = shade_hit(result.point, light_pos, radius, amplitude)
    return color


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_frame(
    framebuffer: ti.template(),
    width: ti.i32,
    height: ti.i32,
    fov: ti.f32,
    camera_pos: vec3,
    light_pos: vec3,
    background: vec3,
    radius: ti.f32,
    amplitude: ti.f32,
):
    """Fill every framebuffer cell, one parallel task per scanline."""
    for j in range(height):
        for i in range(width):
            framebuffer[j, i] = shade_pixel(
                i, j, width, height, fov, camera_pos, light_pos, background, radius, amplitude
            )


@ti.kernel
def _render_single_pixel(
    out: ti.template(),
    pixel_i: ti.i32,
    pixel_j: ti.i32,
    width: ti.i32,
    height: ti.i32,
    fov: ti.f32,
    camera_pos: vec3,
    light_pos: vec3,
    background: vec3,
    radius: ti.f32,
    amplitude: ti.f32,
):
    """Evaluate one pixel into a 0-D field. Used for debugging and tests."""
    for _ in range(1):
        out[None] = shade_pixel(
            pixel_i, pixel_j, width, height, fov, camera_pos, light_pos, background, radius, amplitude
        )


# =============================================================================
# Public Rendering API
# =============================================================================


class FireballRenderer:
    """Renders the fireball frame into a Taichi framebuffer.

    The framebuffer has shape (height, width), row 0 being the top scanline,
    so its NumPy export is already in row-major image order.

    Taichi must be initialized before constructing a renderer.

    Attributes:
        settings: The validated render settings.
    """

    def __init__(self, settings: RenderSettings | None = None) -> None:
        """Validate the settings and allocate the framebuffer.

        Args:
            settings: Render settings. Defaults to the reference 640x480 frame.

        Raises:
            ValueError: If the settings are invalid.
        """
        self._settings = settings if settings is not None else RenderSettings()
        self._settings.validate()

        self._framebuffer = ti.Vector.field(
            3, dtype=ti.f32, shape=(self._settings.height, self._settings.width)
        )
        self._pixel = ti.Vector.field(3, dtype=ti.f32, shape=())

    @property
    def settings(self) -> RenderSettings:
        """Get the render settings."""
        return self._settings

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._settings.width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._settings.height

    def _scene_args(self) -> tuple:
        s = self._settings
        return (
            s.width,
            s.height,
            s.camera.fov,
            vec3(*s.camera.position),
            vec3(*s.light_position),
            vec3(*s.background_color),
            s.sphere_radius,
            s.noise_amplitude,
        )

    def render(self) -> npt.NDArray[np.float32]:
        """Render the full frame.

        Every framebuffer cell is written exactly once per call, so repeated
        calls produce identical images.

        Returns:
            Linear colors of shape (height, width, 3), dtype float32. Values
            are not clamped; yellow surface regions exceed 1.0.
        """
        logger.debug("Rendering %dx%d frame", self.width, self.height)
        start_time = time.perf_counter()

        _render_frame(self._framebuffer, *self._scene_args())
        image = self.get_image_numpy()

        elapsed = time.perf_counter() - start_time
        logger.info("Rendered %dx%d frame in %.2fs", self.width, self.height, elapsed)
        return image

    def render_pixel(self, pixel_i: int, pixel_j: int) -> tuple[float, float, float]:
        """Render a single pixel without touching the framebuffer.

        Args:
            pixel_i: Pixel column (0 = left).
            pixel_j: Pixel row (0 = top).

        Returns:
            Tuple of (R, G, B) linear color values.

        Raises:
            IndexError: If the pixel lies outside the image.
        """
        if not (0 <= pixel_i < self.width and 0 <= pixel_j < self.height):
            raise IndexError(
                f"Pixel ({pixel_i}, {pixel_j}) outside {self.width}x{self.height} image"
            )

        width, height, *rest = self._scene_args()
        _render_single_pixel(self._pixel, pixel_i, pixel_j, width, height, *rest)
        color = self._pixel[None]
        return (float(color[0]), float(color[1]), float(color[2]))

    def get_image_numpy(self) -> npt.NDArray[np.float32]:
        """Get the framebuffer contents as a NumPy array.

        Returns:
            Array of shape (height, width, 3) with dtype float32.
        """
        return self._framebuffer.to_numpy().astype(np.float32)

    def __repr__(self) -> str:
        """Return a string representation of the renderer."""
        return f"FireballRenderer(width={self.width}, height={self.height})"


def render_frame(settings: RenderSettings | None = None) -> npt.NDArray[np.float32]:
    """Render the fireball frame with a one-shot renderer.

    Args:
        settings: Render settings. Defaults to the reference 640x480 frame.

    Returns:
        Linear colors of shape (height, width, 3), dtype float32.
    """
    return FireballRenderer(settings).render()
