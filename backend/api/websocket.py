"""
WebSocket Handler

Real-time overlay via WebSocket connection.
The frontend streams detected landmarks and receives draw plans back.
Each connection owns its own overlay session (active technique).
"""

import json
import time
import logging
from typing import Optional
from fastapi import WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from .schemas import (
    WebSocketMessageType,
    FrameMessage,
    SelectTechniqueMessage,
)
from .converters import frame_from_schema, viewport_from_schema, plan_to_schema, rule_set_to_schema
from .deps import get_catalog
from core.config import get_config
from core.services import OverlaySession

# Configure logging
logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class ConnectionManager:
    """
    Manages WebSocket connections.

    Handles multiple concurrent connections, one overlay session each.
    """

    def __init__(self):
        self.active_connections: list[WebSocket] = []
        self.sessions: dict[WebSocket, OverlaySession] = {}

    async def connect(self, websocket: WebSocket) -> None:
        """Accept new WebSocket connection."""
        await websocket.accept()
        self.active_connections.append(websocket)

        # Create dedicated overlay session for this connection
        self.sessions[websocket] = OverlaySession(get_catalog(), get_config())

        logger.info(f"New WebSocket connection. Total: {len(self.active_connections)}")

    def disconnect(self, websocket: WebSocket) -> None:
        """Handle WebSocket disconnection."""
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)

        session = self.sessions.pop(websocket, None)
        if session is not None:
            session.clear()

        logger.info(f"WebSocket disconnected. Remaining: {len(self.active_connections)}")

    def get_session(self, websocket: WebSocket) -> Optional[OverlaySession]:
        """Get overlay session for a connection."""
        return self.sessions.get(websocket)

    async def send_json(self, websocket: WebSocket, data: dict) -> None:
        """Send JSON data to a specific connection."""
        try:
            await websocket.send_json(data)
        except Exception as e:
            logger.error(f"Failed to send WebSocket message: {e}")

    async def send_error(self, websocket: WebSocket, error: str) -> None:
        await self.send_json(websocket, {
            "type": WebSocketMessageType.ERROR.value,
            "data": {"error": error},
            "timestamp": _now_ms()
        })


# Global connection manager
manager = ConnectionManager()


async def websocket_endpoint(websocket: WebSocket) -> None:
    """
    WebSocket endpoint for the real-time overlay.

    Protocol:
    1. Client connects
    2. Client selects a technique
    3. Client sends landmark frames, server answers with draw plans
    4. Client ends the session or disconnects

    Message format (client -> server):
    {
        "type": "frame",
        "data": {
            "frame": {"landmarks": [...], "image_width": 640, "image_height": 480,
                      "running_mode": "live_stream", "frame_number": 0},
            "viewport": {"width": 1080, "height": 1920}
        },
        "timestamp": 1704067200000
    }

    Message format (server -> client):
    {
        "type": "draw_plan",
        "data": {"plan": { ... }, "processing_time_ms": 1.2},
        "timestamp": 1704067200002
    }
    """
    await manager.connect(websocket)

    try:
        # Send session started message
        await manager.send_json(websocket, {
            "type": WebSocketMessageType.SESSION_STARTED.value,
            "data": {"message": "Connected to technique overlay"},
            "timestamp": _now_ms()
        })

        # Main message loop
        while True:
            try:
                # Receive message from client
                data = await websocket.receive_json()

                # Process based on message type
                msg_type = data.get("type") if isinstance(data, dict) else None

                if msg_type == WebSocketMessageType.FRAME.value:
                    await handle_frame(websocket, data)

                elif msg_type == WebSocketMessageType.SELECT_TECHNIQUE.value:
                    await handle_select_technique(websocket, data)

                elif msg_type == WebSocketMessageType.END_SESSION.value:
                    await manager.send_json(websocket, {
                        "type": WebSocketMessageType.SESSION_ENDED.value,
                        "data": {"message": "Session ended"},
                        "timestamp": _now_ms()
                    })
                    break

                else:
                    await manager.send_error(websocket, f"Unknown message type: {msg_type}")

            except json.JSONDecodeError:
                await manager.send_error(websocket, "Invalid JSON")

    except WebSocketDisconnect:
        logger.info("Client disconnected")
    except Exception as e:
        logger.error(f"WebSocket error: {e}")
    finally:
        manager.disconnect(websocket)


async def handle_select_technique(websocket: WebSocket, message: dict) -> None:
    """
    Switch the session to another technique.

    The new rule set replaces the old one in full; frames rendered before
    the switch completes still use the old rules.
    """
    session = manager.get_session(websocket)
    if session is None:
        await manager.send_error(websocket, "Session not initialized")
        return

    try:
        request = SelectTechniqueMessage.model_validate(message.get("data"))
    except ValidationError as e:
        await manager.send_error(websocket, f"Invalid technique selection: {e.errors()}")
        return

    loaded = await session.load_technique(request.sport, request.technique)
    if not loaded:
        await manager.send_error(websocket, f"Unknown technique: {request.sport}/{request.technique}")
        return

    rule_set = session.active_rules.snapshot
    await manager.send_json(websocket, {
        "type": WebSocketMessageType.TECHNIQUE_SELECTED.value,
        "data": rule_set_to_schema(rule_set).model_dump(by_alias=True),
        "timestamp": _now_ms()
    })


async def handle_frame(websocket: WebSocket, message: dict) -> None:
    """
    Build the draw plan for one frame and send it back.
    """
    start_time = time.time()

    session = manager.get_session(websocket)
    if session is None:
        await manager.send_error(websocket, "Session not initialized")
        return

    try:
        payload = FrameMessage.model_validate(message.get("data"))
    except ValidationError as e:
        await manager.send_error(websocket, f"Invalid frame: {e.errors()}")
        return

    frame = frame_from_schema(payload.frame)
    plan = session.render(frame, viewport_from_schema(payload.viewport))

    processing_time = (time.time() - start_time) * 1000

    await manager.send_json(websocket, {
        "type": WebSocketMessageType.DRAW_PLAN.value,
        "data": {
            "plan": plan_to_schema(plan, frame.frame_number).model_dump(),
            "processing_time_ms": processing_time
        },
        "timestamp": _now_ms()
    })
