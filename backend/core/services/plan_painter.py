"""
Plan Painter Service

Paints a DrawPlan onto an OpenCV image. Useful for previews, debugging
and exporting annotated frames; the plan itself carries all geometry
and colors.
"""

import cv2
import numpy as np

from ..domain.overlay import DrawPlan

# Android text sizes are pixel heights; Hershey fonts are ~30px at scale 1.0
_HERSHEY_BASE_HEIGHT = 30.0


class PlanPainter:
    """
    Draws points, lines and labels from a DrawPlan with OpenCV.

    Usage:
        plan = renderer.build_draw_plan(frame, rules, Viewport(w, h))
        annotated = PlanPainter.paint(image, plan)
        cv2.imwrite("annotated.jpg", annotated)
    """

    @staticmethod
    def _pt(point) -> tuple[int, int]:
        return (int(round(point.x)), int(round(point.y)))

    @classmethod
    def paint(cls, image: np.ndarray, plan: DrawPlan) -> np.ndarray:
        """
        Draw the plan on the image.

        Args:
            image: BGR image sized like the plan's viewport (will be modified)
            plan: Draw plan to paint

        Returns:
            Image with the overlay drawn
        """
        if plan.is_empty:
            return image

        # Lines first so points and labels stay visible on top
        for line in plan.lines:
            cv2.line(
                image,
                cls._pt(line.start),
                cls._pt(line.end),
                line.color.to_bgr(),
                max(1, int(round(line.stroke_width))),
                cv2.LINE_AA,
            )

        radius = max(1, int(round(plan.point_size / 2)))
        for point in plan.points:
            cv2.circle(image, cls._pt(point), radius, plan.point_color.to_bgr(), -1)

        for label in plan.labels:
            font_scale = label.text_size / _HERSHEY_BASE_HEIGHT
            # Shadow
            cv2.putText(
                image,
                label.text,
                cls._pt(label.anchor),
                cv2.FONT_HERSHEY_SIMPLEX,
                font_scale,
                (0, 0, 0),
                3,
                cv2.LINE_AA,
            )
            cv2.putText(
                image,
                label.text,
                cls._pt(label.anchor),
                cv2.FONT_HERSHEY_SIMPLEX,
                font_scale,
                label.color.to_bgr(),
                1,
                cv2.LINE_AA,
            )

        return image

    @classmethod
    def render_blank(cls, plan: DrawPlan, width: int, height: int) -> np.ndarray:
        """Paint a plan onto a black canvas of the given size."""
        canvas = np.zeros((height, width, 3), dtype=np.uint8)
        return cls.paint(canvas, plan)
