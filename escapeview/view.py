"""View state: which part of the complex plane is shown, and at what size."""

from __future__ import annotations

from dataclasses import dataclass, replace

from .compute import point_to_xy, xy_to_point
from .config import ConfigurationError

DEFAULT_CENTER = complex(-0.5, 0.0)
DEFAULT_SCALE = 4.0
# Placeholder size, replaced by the first real Resize from the host
DEFAULT_SIZE = 10


@dataclass(frozen=True)
class ViewState:
    """
    Center and scale of the view plus its pixel dimensions.

    Attributes:
        center: Point of the complex plane at the middle of the viewport
        scale: Width of the longer viewport side, in plane units
        width, height: Viewport size in pixels
    """

    center: complex = DEFAULT_CENTER
    scale: float = DEFAULT_SCALE
    width: int = DEFAULT_SIZE
    height: int = DEFAULT_SIZE

    def __post_init__(self) -> None:
        if not self.scale > 0:
            raise ConfigurationError(f"scale must be positive, got {self.scale}")
        if self.width < 1 or self.height < 1:
            raise ConfigurationError(
                f"viewport must be at least 1x1 pixels, got {self.width}x{self.height}"
            )
        object.__setattr__(self, "center", complex(self.center))
        object.__setattr__(self, "scale", float(self.scale))
        object.__setattr__(self, "width", int(self.width))
        object.__setattr__(self, "height", int(self.height))

    @property
    def greater_dim(self) -> int:
        return max(self.width, self.height)

    def xy_to_point(self, x: float, y: float) -> complex:
        """Plane point under pixel (x, y); fractional pixels are allowed."""
        re, im = xy_to_point(x, y, self.center.real, self.center.imag,
                             self.scale, self.width, self.height)
        return complex(re, im)

    def point_to_xy(self, point: complex) -> tuple[float, float]:
        """Pixel coordinates at which `point` is drawn."""
        point = complex(point)
        return point_to_xy(point.real, point.imag, self.center.real,
                           self.center.imag, self.scale, self.width, self.height)

    def resized(self, width: int, height: int) -> ViewState:
        return replace(self, width=width, height=height)

    def moved(self, center: complex, scale: float | None = None) -> ViewState:
        return replace(self, center=center, scale=self.scale if scale is None else scale)
