"""Shared fixtures for the overlay tests."""

import pytest

from core.config import OverlayConfig
from core.domain.pose import BodyPart, PoseFrame, PoseLandmark, RunningMode
from core.services import TechniqueCatalog


def make_frame(points, image_width=100, image_height=100, running_mode=RunningMode.IMAGE, frame_number=0):
    """Frame from a list of (x, y) tuples."""
    return PoseFrame(
        landmarks=tuple(PoseLandmark(x=x, y=y) for x, y in points),
        image_width=image_width,
        image_height=image_height,
        running_mode=running_mode,
        frame_number=frame_number,
    )


def sprint_points():
    """
    33 landmarks with a right knee bent at 90 degrees and a straight left leg.

    Right: hip (0.5, 0.5), knee (0.5, 0.7), ankle (0.7, 0.7) -> 90
    Left:  hip (0.4, 0.5), knee (0.4, 0.7), ankle (0.4, 0.9) -> 180
    """
    points = [(0.5, 0.3)] * 33
    points[BodyPart.RIGHT_HIP] = (0.5, 0.5)
    points[BodyPart.RIGHT_KNEE] = (0.5, 0.7)
    points[BodyPart.RIGHT_ANKLE] = (0.7, 0.7)
    points[BodyPart.LEFT_HIP] = (0.4, 0.5)
    points[BodyPart.LEFT_KNEE] = (0.4, 0.7)
    points[BodyPart.LEFT_ANKLE] = (0.4, 0.9)
    return points


@pytest.fixture
def config():
    return OverlayConfig()


@pytest.fixture
def catalog():
    return TechniqueCatalog.default()


@pytest.fixture
def right_angle_frame():
    """vertex (0,0) at index 0, joint A (1,0) at index 1, joint B (0,1) at index 2."""
    return make_frame([(0.0, 0.0), (1.0, 0.0), (0.0, 1.0)])


@pytest.fixture
def sprint_frame():
    return make_frame(sprint_points(), image_width=640, image_height=480)
