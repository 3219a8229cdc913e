"""Render settings for the fireball image.

All scene parameters are fixed constants of the renderer; RenderSettings
collects them in one frozen dataclass so the frame driver, the command line
and the tests share a single source. The defaults reproduce the reference
640x480 frame.
"""

import math
from dataclasses import dataclass, field

from fireball.camera.pinhole import PinholeCamera
from fireball.geometry.displaced_sphere import NOISE_AMPLITUDE, SPHERE_RADIUS
from fireball.shading.palette import BACKGROUND_COLOR

# Largest frame the renderer accepts along each axis
MAX_IMAGE_WIDTH = 4096
MAX_IMAGE_HEIGHT = 4096


@dataclass(frozen=True)
class RenderSettings:
    """Parameters of a single fireball render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        camera: Camera position and vertical field of view.
        light_position: Point light position in world space.
        sphere_radius: Radius of the undisplaced sphere.
        noise_amplitude: Scale of the inward noise displacement.
        background_color: Linear color for rays that miss the surface.
    """

    width: int = 640
    height: int = 480
    camera: PinholeCamera = field(default_factory=PinholeCamera)
    light_position: tuple[float, float, float] = (10.0, 10.0, 10.0)
    sphere_radius: float = SPHERE_RADIUS
    noise_amplitude: float = NOISE_AMPLITUDE
    background_color: tuple[float, float, float] = BACKGROUND_COLOR

    def validate(self) -> None:
        """Check that the settings describe a renderable frame.

        Raises:
            ValueError: If a dimension is out of range, the field of view is
                not in (0, pi), or the radius or amplitude is not positive.
        """
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.width > MAX_IMAGE_WIDTH or self.height > MAX_IMAGE_HEIGHT:
            raise ValueError(
                f"Image dimensions ({self.width}x{self.height}) exceed maximum supported "
                f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
            )
        if not 0.0 < self.camera.fov < math.pi:
            raise ValueError(f"Field of view must be in (0, pi), got {self.camera.fov}")
        if self.sphere_radius <= 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.sphere_radius}")
        if self.noise_amplitude <= 0.0:
            raise ValueError(f"Noise amplitude must be positive, got {self.noise_amplitude}")
