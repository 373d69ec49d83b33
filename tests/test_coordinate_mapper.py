import pytest

from core.domain.pose import PoseLandmark, RunningMode
from core.domain.overlay import FitMode, Viewport
from core.domain.errors import DegenerateViewport
from core.services import CoordinateMapper

from conftest import make_frame


def test_contain_uses_smaller_ratio():
    transform = CoordinateMapper.scale_for(100, 200, 200, 200, FitMode.CONTAIN)
    assert transform.scale == pytest.approx(1.0)


def test_cover_uses_larger_ratio():
    transform = CoordinateMapper.scale_for(100, 200, 200, 200, FitMode.COVER)
    assert transform.scale == pytest.approx(2.0)


@pytest.mark.parametrize("fit_mode, expected", [
    (FitMode.CONTAIN, (50.0, 100.0)),
    (FitMode.COVER, (100.0, 200.0)),
])
def test_map_landmark(fit_mode, expected):
    landmark = PoseLandmark(x=0.5, y=0.5)
    x, y = CoordinateMapper.map(landmark, 100, 200, 200, 200, fit_mode)
    assert (x, y) == pytest.approx(expected)


def test_fit_mode_follows_running_mode():
    assert CoordinateMapper.fit_mode_for(RunningMode.IMAGE) == FitMode.CONTAIN
    assert CoordinateMapper.fit_mode_for(RunningMode.VIDEO) == FitMode.CONTAIN
    assert CoordinateMapper.fit_mode_for(RunningMode.LIVE_STREAM) == FitMode.COVER


@pytest.mark.parametrize("dims", [
    (0, 100, 100, 100),
    (100, 0, 100, 100),
    (100, 100, 0, 100),
    (100, 100, 100, 0),
    (100, 100, -5, 100),
    (100, 100, float("nan"), 100),
    (100, 100, float("inf"), 100),
    (float("inf"), 100, 100, 100),
])
def test_degenerate_dimensions_raise(dims):
    with pytest.raises(DegenerateViewport):
        CoordinateMapper.scale_for(*dims, FitMode.CONTAIN)


def test_map_all_matches_single_mapping():
    frame = make_frame(
        [(0.0, 0.0), (1.0, 1.0), (0.25, 0.75)],
        image_width=640,
        image_height=480,
        running_mode=RunningMode.LIVE_STREAM,
    )
    viewport = Viewport(1080, 1920)
    transform = CoordinateMapper.transform_for(frame, viewport)

    points = CoordinateMapper.map_all(frame, transform)

    assert transform.fit_mode == FitMode.COVER
    assert transform.scale == pytest.approx(4.0)
    for landmark, point in zip(frame.landmarks, points):
        x, y = CoordinateMapper.map(landmark, 640, 480, 1080, 1920, FitMode.COVER)
        assert (point.x, point.y) == pytest.approx((x, y))


def test_map_all_empty_frame():
    frame = make_frame([])
    transform = CoordinateMapper.transform_for(frame, Viewport(100, 100))
    assert CoordinateMapper.map_all(frame, transform) == []


def test_fractional_image_size_is_not_truncated():
    landmark = PoseLandmark(x=1.0, y=1.0)
    x, y = CoordinateMapper.map(landmark, 100.5, 50.25, 100.5, 50.25, FitMode.CONTAIN)
    assert (x, y) == pytest.approx((100.5, 50.25))
