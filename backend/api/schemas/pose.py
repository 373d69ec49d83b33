"""
Pose API Schemas

Pydantic models for landmark frames and WebSocket messages.
These define the JSON structure for communication with the frontend.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from enum import Enum


class RunningModeEnum(str, Enum):
    """How the frame was produced."""
    IMAGE = "image"
    VIDEO = "video"
    LIVE_STREAM = "live_stream"


class LandmarkSchema(BaseModel):
    """
    Single body landmark from the pose detector.

    Coordinates are normalized (0.0 to 1.0).
    """
    x: float = Field(..., ge=0.0, le=1.0, description="Horizontal position (0=left, 1=right)")
    y: float = Field(..., ge=0.0, le=1.0, description="Vertical position (0=top, 1=bottom)")
    z: float = Field(0.0, description="Depth (negative=closer to camera), unused for angles")
    visibility: float = Field(1.0, ge=0.0, le=1.0, description="Detection confidence")

    class Config:
        json_schema_extra = {
            "example": {
                "x": 0.45,
                "y": 0.32,
                "z": -0.15,
                "visibility": 0.95
            }
        }


class PoseFrameSchema(BaseModel):
    """
    One detection result: landmarks plus source image metadata.

    Landmarks are listed in MediaPipe topology order (33 for a full body).
    """
    landmarks: List[LandmarkSchema] = Field(..., description="Body landmarks in topology order")
    image_width: int = Field(..., description="Source image width in pixels")
    image_height: int = Field(..., description="Source image height in pixels")
    running_mode: RunningModeEnum = Field(RunningModeEnum.IMAGE, description="Image, video or live stream")
    frame_number: int = Field(0, ge=0, description="Sequential frame number")
    timestamp_ms: int = Field(0, ge=0, description="Video timestamp in milliseconds")

    class Config:
        json_schema_extra = {
            "example": {
                "landmarks": [
                    {"x": 0.5, "y": 0.2, "z": 0.0, "visibility": 0.99}
                ],
                "image_width": 640,
                "image_height": 480,
                "running_mode": "live_stream",
                "frame_number": 45,
                "timestamp_ms": 1500
            }
        }


class ViewportSchema(BaseModel):
    """Destination drawing area in pixels."""
    width: float = Field(..., description="Viewport width in pixels")
    height: float = Field(..., description="Viewport height in pixels")


# =============================================================================
# WebSocket Message Schemas
# =============================================================================

class WebSocketMessageType(str, Enum):
    """Types of WebSocket messages."""
    # Client -> Server
    FRAME = "frame"                          # Landmarks for one frame
    SELECT_TECHNIQUE = "select_technique"    # Switch active rule set
    END_SESSION = "end_session"              # End overlay session

    # Server -> Client
    DRAW_PLAN = "draw_plan"                  # Draw plan for a frame
    TECHNIQUE_SELECTED = "technique_selected"
    ERROR = "error"                          # Error message
    SESSION_STARTED = "session_started"
    SESSION_ENDED = "session_ended"


class WebSocketMessage(BaseModel):
    """
    Base WebSocket message structure.

    All WebSocket communication uses this format.
    """
    type: WebSocketMessageType = Field(..., description="Message type")
    data: dict = Field(default_factory=dict, description="Message payload")
    timestamp: int = Field(0, description="Unix timestamp in milliseconds")


class FrameMessage(BaseModel):
    """
    WebSocket payload carrying one frame of landmarks.

    Sent from frontend to backend after on-device pose detection.
    """
    frame: PoseFrameSchema = Field(..., description="Detected landmarks")
    viewport: ViewportSchema = Field(..., description="Overlay size on screen")


class SelectTechniqueMessage(BaseModel):
    """WebSocket payload switching the active technique."""
    sport: str = Field(..., description="Sport name, e.g. 'Sprint'")
    technique: str = Field(..., description="Technique name, e.g. 'Technique1'")
