"""
Coordinate Mapper Service

Maps normalized landmark coordinates into viewport pixels.

The source image is scaled uniformly into the viewport:
- CONTAIN (image / recorded video): the whole image is visible
- COVER (live stream): the image fills the viewport, matching a
  FILL_START camera preview
"""

import math

import numpy as np

from ..domain.pose import PoseFrame, PoseLandmark, RunningMode
from ..domain.overlay import FitMode, ScaleTransform, ScreenPoint, Viewport
from ..domain.errors import DegenerateViewport


class CoordinateMapper:
    """
    Converts normalized [0, 1] landmark positions to screen coordinates.

    All methods are static - no state needed.
    """

    @staticmethod
    def fit_mode_for(running_mode: RunningMode) -> FitMode:
        """Live previews fill the view; images and videos fit inside it."""
        if running_mode == RunningMode.LIVE_STREAM:
            return FitMode.COVER
        return FitMode.CONTAIN

    @staticmethod
    def scale_for(
        image_width: float,
        image_height: float,
        viewport_width: float,
        viewport_height: float,
        fit_mode: FitMode,
    ) -> ScaleTransform:
        """
        Compute the uniform scale factor.

        Raises:
            DegenerateViewport: if any dimension is zero, negative or not finite
        """
        if not all(math.isfinite(d) for d in (image_width, image_height, viewport_width, viewport_height)):
            raise DegenerateViewport(
                f"Non-finite size: image {image_width}x{image_height}, viewport {viewport_width}x{viewport_height}"
            )
        if image_width <= 0 or image_height <= 0:
            raise DegenerateViewport(f"Invalid image size {image_width}x{image_height}")
        if viewport_width <= 0 or viewport_height <= 0:
            raise DegenerateViewport(f"Invalid viewport size {viewport_width}x{viewport_height}")

        width_ratio = viewport_width / image_width
        height_ratio = viewport_height / image_height

        if fit_mode == FitMode.COVER:
            scale = max(width_ratio, height_ratio)
        else:
            scale = min(width_ratio, height_ratio)

        return ScaleTransform(
            scale=float(scale),
            image_width=float(image_width),
            image_height=float(image_height),
            fit_mode=fit_mode,
        )

    @classmethod
    def map(
        cls,
        landmark: PoseLandmark,
        image_width: float,
        image_height: float,
        viewport_width: float,
        viewport_height: float,
        fit_mode: FitMode,
    ) -> tuple[float, float]:
        """
        Map one landmark to (screen_x, screen_y).

        Example:
            A landmark at (0.5, 0.5) of a 640x480 image shown in a
            1280x960 viewport lands at (640.0, 480.0).
        """
        transform = cls.scale_for(
            image_width, image_height, viewport_width, viewport_height, fit_mode
        )
        return transform.apply(landmark.x, landmark.y)

    @classmethod
    def transform_for(cls, frame: PoseFrame, viewport: Viewport) -> ScaleTransform:
        """Scale transform for a frame shown in a viewport."""
        return cls.scale_for(
            frame.image_width,
            frame.image_height,
            viewport.width,
            viewport.height,
            cls.fit_mode_for(frame.running_mode),
        )

    @staticmethod
    def map_all(frame: PoseFrame, transform: ScaleTransform) -> list[ScreenPoint]:
        """Map every landmark of a frame in one vectorized pass."""
        if not frame.landmarks:
            return []

        coords = np.array([[lm.x, lm.y] for lm in frame.landmarks], dtype=float)
        factors = np.array([
            transform.image_width * transform.scale,
            transform.image_height * transform.scale,
        ])
        pixels = coords * factors

        return [ScreenPoint(float(x), float(y)) for x, y in pixels]
