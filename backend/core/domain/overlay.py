"""
Overlay Domain Models

The draw plan: a passive description of what to paint on top of a frame,
independent of any specific drawing API. All coordinates are destination
(viewport) pixels.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .rules import EvaluationResult


class FitMode(Enum):
    """
    How the source image is scaled into the viewport.

    - CONTAIN: whole image visible (static images, recorded video)
    - COVER: viewport filled, image may be cropped (live camera preview)
    """
    CONTAIN = "contain"
    COVER = "cover"


@dataclass(frozen=True)
class Color:
    """An sRGB color with alpha. Channels are 0-255."""
    r: int
    g: int
    b: int
    a: int = 255

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Parse "#RRGGBB" or "#AARRGGBB" (Android-style ARGB)."""
        text = value.strip().lstrip("#")
        if len(text) == 6:
            return cls(int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16))
        if len(text) == 8:
            return cls(
                int(text[2:4], 16),
                int(text[4:6], 16),
                int(text[6:8], 16),
                int(text[0:2], 16),
            )
        raise ValueError(f"Invalid color: {value!r}")

    @property
    def hex(self) -> str:
        """"#AARRGGBB" representation."""
        return f"#{self.a:02X}{self.r:02X}{self.g:02X}{self.b:02X}"

    @property
    def argb(self) -> int:
        """Packed 32-bit ARGB integer, as used by Android paints."""
        return (self.a << 24) | (self.r << 16) | (self.g << 8) | self.b

    def to_bgr(self) -> tuple[int, int, int]:
        """Channel order expected by OpenCV."""
        return (self.b, self.g, self.r)


GREEN = Color(0, 255, 0)
RED = Color(255, 0, 0)
YELLOW = Color(255, 255, 0)
WHITE = Color(255, 255, 255)


@dataclass(frozen=True)
class Viewport:
    """Destination drawing area in pixels."""
    width: float
    height: float


@dataclass(frozen=True)
class ScaleTransform:
    """Uniform scale applied to both axes of the source image."""
    scale: float
    image_width: float
    image_height: float
    fit_mode: FitMode

    def apply(self, x: float, y: float) -> tuple[float, float]:
        """Map normalized (x, y) to viewport pixels."""
        return (
            x * self.image_width * self.scale,
            y * self.image_height * self.scale,
        )


@dataclass(frozen=True)
class ScreenPoint:
    x: float
    y: float


@dataclass(frozen=True)
class DrawLine:
    """
    One skeletal connection.

    `rule_index` is the index of the governing rule, or None for a
    neutral connection.
    """
    start_index: int
    end_index: int
    start: ScreenPoint
    end: ScreenPoint
    color: Color
    stroke_width: float
    rule_index: Optional[int] = None


@dataclass(frozen=True)
class DrawLabel:
    text: str
    anchor: ScreenPoint
    color: Color
    text_size: float
    rule_index: int


@dataclass(frozen=True)
class DrawPlan:
    """
    Everything to paint for one frame.

    Attributes:
        points: One marker per landmark
        lines: One segment per topology connection present in the frame
        labels: Angle text at rule-governed connections
        evaluations: Rule results the colors were derived from
        point_color: Color of every point marker
        point_size: Diameter of point markers in pixels
        scale: Scale transform used, None for an empty plan
    """
    points: tuple[ScreenPoint, ...] = ()
    lines: tuple[DrawLine, ...] = ()
    labels: tuple[DrawLabel, ...] = ()
    evaluations: tuple[EvaluationResult, ...] = ()
    point_color: Color = YELLOW
    point_size: float = 0.0
    scale: Optional[ScaleTransform] = None

    @classmethod
    def empty(cls) -> "DrawPlan":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not (self.points or self.lines or self.labels)
