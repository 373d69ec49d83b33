import numpy as np

from core.domain.overlay import (
    Color,
    DrawLabel,
    DrawLine,
    DrawPlan,
    ScreenPoint,
    Viewport,
)
from core.services import OverlayRenderer, PlanPainter

from conftest import make_frame


def test_empty_plan_leaves_image_untouched():
    image = np.zeros((50, 50, 3), dtype=np.uint8)
    result = PlanPainter.paint(image, DrawPlan.empty())
    assert not result.any()


def test_lines_points_and_labels_are_painted():
    plan = DrawPlan(
        points=(ScreenPoint(10, 40), ScreenPoint(90, 40)),
        lines=(
            DrawLine(
                start_index=0,
                end_index=1,
                start=ScreenPoint(10, 10),
                end=ScreenPoint(90, 10),
                color=Color(255, 0, 0),
                stroke_width=4,
                rule_index=0,
            ),
        ),
        labels=(
            DrawLabel(text="90.0", anchor=ScreenPoint(20, 80), color=Color(255, 255, 255),
                      text_size=30, rule_index=0),
        ),
        point_color=Color(255, 255, 0),
        point_size=6,
    )

    canvas = PlanPainter.render_blank(plan, 100, 100)

    # RGBA colors land in BGR order
    assert tuple(canvas[10, 50]) == (0, 0, 255)
    assert tuple(canvas[40, 10]) == (0, 255, 255)
    assert canvas[60:85, 15:80].any()


def test_renderer_output_paints_onto_viewport():
    frame = make_frame([(0.0, 0.0), (1.0, 0.0), (0.0, 1.0)])
    plan = OverlayRenderer().build_draw_plan(
        frame, [], Viewport(64, 64), topology=((0, 1),)
    )

    canvas = PlanPainter.render_blank(plan, 64, 64)

    assert canvas.shape == (64, 64, 3)
    assert canvas[0, 32].any()
