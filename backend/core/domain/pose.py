"""
Pose Domain Models

Data structures for representing human body pose landmarks
produced by an external pose detector (MediaPipe Pose Landmarker).

MediaPipe Pose returns 33 landmarks:
https://developers.google.com/mediapipe/solutions/vision/pose_landmarker
"""
from dataclasses import dataclass
from enum import Enum, IntEnum


class BodyPart(IntEnum):
    """
    MediaPipe Pose landmark indices.

    These map directly to MediaPipe's 33-point pose model.
    """
    # Face
    NOSE = 0
    LEFT_EYE_INNER = 1
    LEFT_EYE = 2
    LEFT_EYE_OUTER = 3
    RIGHT_EYE_INNER = 4
    RIGHT_EYE = 5
    RIGHT_EYE_OUTER = 6
    LEFT_EAR = 7
    RIGHT_EAR = 8
    MOUTH_LEFT = 9
    MOUTH_RIGHT = 10

    # Upper body
    LEFT_SHOULDER = 11
    RIGHT_SHOULDER = 12
    LEFT_ELBOW = 13
    RIGHT_ELBOW = 14
    LEFT_WRIST = 15
    RIGHT_WRIST = 16

    # Hands
    LEFT_PINKY = 17
    RIGHT_PINKY = 18
    LEFT_INDEX = 19
    RIGHT_INDEX = 20
    LEFT_THUMB = 21
    RIGHT_THUMB = 22

    # Lower body
    LEFT_HIP = 23
    RIGHT_HIP = 24
    LEFT_KNEE = 25
    RIGHT_KNEE = 26
    LEFT_ANKLE = 27
    RIGHT_ANKLE = 28

    # Feet
    LEFT_HEEL = 29
    RIGHT_HEEL = 30
    LEFT_FOOT_INDEX = 31
    RIGHT_FOOT_INDEX = 32


# Skeleton edges of the 33-point model, in the detector's own order.
POSE_CONNECTIONS: tuple[tuple[int, int], ...] = (
    # Face
    (0, 1), (1, 2), (2, 3), (3, 7),
    (0, 4), (4, 5), (5, 6), (6, 8),
    (9, 10),

    # Arms and hands
    (11, 12),
    (11, 13), (13, 15), (15, 17), (15, 19), (15, 21), (17, 19),
    (12, 14), (14, 16), (16, 18), (16, 20), (16, 22), (18, 20),

    # Torso
    (11, 23), (12, 24), (23, 24),

    # Legs and feet
    (23, 25), (24, 26), (25, 27), (26, 28),
    (27, 29), (28, 30), (29, 31), (30, 32),
    (27, 31), (28, 32),
)


class RunningMode(Enum):
    """How the frames were produced; decides how landmarks fit the viewport."""
    IMAGE = "image"
    VIDEO = "video"
    LIVE_STREAM = "live_stream"


@dataclass(frozen=True)
class PoseLandmark:
    """
    A single body landmark.

    Attributes:
        x: Horizontal position (0.0 = left edge, 1.0 = right edge)
        y: Vertical position (0.0 = top edge, 1.0 = bottom edge)
        z: Depth (smaller = closer to camera). Not used for angles.
        visibility: Confidence score (0.0 to 1.0)

    Note:
        Coordinates are normalized to image dimensions.
        To get pixel coordinates: pixel_x = x * image_width
    """
    x: float
    y: float
    z: float = 0.0
    visibility: float = 1.0


@dataclass(frozen=True)
class PoseFrame:
    """
    One detection result, ready to be rendered.

    Attributes:
        landmarks: Landmarks in topology order (index = BodyPart value)
        image_width: Source image width in pixels
        image_height: Source image height in pixels
        running_mode: Image, recorded video or live stream
        frame_number: Sequential frame number
        timestamp_ms: Video timestamp in milliseconds
    """
    landmarks: tuple[PoseLandmark, ...]
    image_width: int
    image_height: int
    running_mode: RunningMode = RunningMode.IMAGE
    frame_number: int = 0
    timestamp_ms: int = 0

    def __len__(self) -> int:
        return len(self.landmarks)

    def has_index(self, index: int) -> bool:
        """Check whether a landmark index exists in this frame."""
        return 0 <= index < len(self.landmarks)
