"""
WebSocket Handler

Real-time exercise sessions via WebSocket connection.
The frontend runs the pose detector, streams landmarks for every video
frame and receives feedback, phase and rep count back instantly.
"""

import json
import time
import logging
from typing import Optional
from fastapi import WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from .schemas import (
    WebSocketMessage,
    WebSocketMessageType,
    ExerciseMessage,
    LandmarkFrameSchema,
    FrameResultSchema,
    SessionSnapshotSchema,
)
from core.config import get_settings
from core.exceptions import UnknownExerciseError
from core.services import SessionController

# Configure logging
logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class ConnectionManager:
    """
    Manages WebSocket connections.

    Each connection gets its own SessionController, so sessions never share
    state.
    """

    def __init__(self):
        self.active_connections: list[WebSocket] = []
        self.controllers: dict[WebSocket, SessionController] = {}

    async def connect(self, websocket: WebSocket) -> None:
        """Accept new WebSocket connection."""
        await websocket.accept()
        self.active_connections.append(websocket)

        # Create dedicated session controller for this connection
        self.controllers[websocket] = SessionController(settings=get_settings())

        logger.info(f"New WebSocket connection. Total: {len(self.active_connections)}")

    def disconnect(self, websocket: WebSocket) -> None:
        """Handle WebSocket disconnection."""
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)

        # Session state is discarded with the connection
        controller = self.controllers.pop(websocket, None)
        if controller is not None:
            controller.stop()

        logger.info(f"WebSocket disconnected. Remaining: {len(self.active_connections)}")

    def get_controller(self, websocket: WebSocket) -> Optional[SessionController]:
        """Get session controller for a connection."""
        return self.controllers.get(websocket)

    async def send(self, websocket: WebSocket, msg_type: WebSocketMessageType, data: dict) -> None:
        """Send a typed message to a specific connection."""
        try:
            await websocket.send_json({
                "type": msg_type.value,
                "data": data,
                "timestamp": _now_ms()
            })
        except Exception as e:
            logger.error(f"Failed to send WebSocket message: {e}")

    async def send_error(self, websocket: WebSocket, error: str) -> None:
        await self.send(websocket, WebSocketMessageType.ERROR, {"error": error})


# Global connection manager
manager = ConnectionManager()


async def websocket_endpoint(websocket: WebSocket) -> None:
    """
    WebSocket endpoint for real-time exercise sessions.

    Protocol:
    1. Client connects, server sends session_ready with a state snapshot
    2. Client sends start_session with the exercise id
    3. Client streams frame messages with landmarks (or null landmarks
       when its detector found no person)
    4. Server answers each frame with feedback
    5. Client sends stop_session, then end_session or disconnects

    Message format (client -> server):
    {
        "type": "frame",
        "data": {
            "landmarks": [{"x": 0.5, "y": 0.2, "visibility": 0.99}, ...],
            "frame_number": 0
        },
        "timestamp": 1704067200000
    }

    Message format (server -> client):
    {
        "type": "feedback",
        "data": {
            "frame_number": 0,
            "feedback": {"message": "...", "severity": "good", ...},
            "phase": "up",
            "rep_count": 3,
            ...
        },
        "timestamp": 1704067200025
    }
    """
    await manager.connect(websocket)

    try:
        controller = manager.get_controller(websocket)
        if controller is None:
            return

        await manager.send(
            websocket,
            WebSocketMessageType.SESSION_READY,
            _snapshot_data(controller),
        )

        # Main message loop
        while True:
            try:
                # Receive message from client
                data = await websocket.receive_json()
                message = WebSocketMessage.model_validate(data)

                # Process based on message type
                msg_type = message.type.value
                payload = message.data or {}

                if msg_type == WebSocketMessageType.FRAME.value:
                    await handle_frame(websocket, controller, payload)

                elif msg_type == WebSocketMessageType.START_SESSION.value:
                    request = ExerciseMessage.model_validate(payload)
                    controller.start(request.exercise)
                    await manager.send(
                        websocket,
                        WebSocketMessageType.SESSION_STARTED,
                        _snapshot_data(controller),
                    )

                elif msg_type == WebSocketMessageType.SELECT_EXERCISE.value:
                    request = ExerciseMessage.model_validate(payload)
                    controller.select_exercise(request.exercise)
                    await manager.send(
                        websocket,
                        WebSocketMessageType.EXERCISE_SELECTED,
                        _snapshot_data(controller),
                    )

                elif msg_type == WebSocketMessageType.STOP_SESSION.value:
                    rep_count = controller.stop()
                    await manager.send(
                        websocket,
                        WebSocketMessageType.SESSION_STOPPED,
                        {"rep_count": rep_count, **_snapshot_data(controller)},
                    )

                elif msg_type == WebSocketMessageType.END_SESSION.value:
                    rep_count = controller.stop()
                    await manager.send(
                        websocket,
                        WebSocketMessageType.SESSION_ENDED,
                        {"message": "Session ended", "rep_count": rep_count},
                    )
                    break

                else:
                    await manager.send_error(websocket, f"Unknown message type: {msg_type}")

            except json.JSONDecodeError:
                await manager.send_error(websocket, "Invalid JSON")
            except ValidationError as e:
                await manager.send_error(websocket, f"Invalid payload: {e.errors(include_url=False, include_input=False)}")
            except UnknownExerciseError as e:
                await manager.send_error(websocket, str(e))

    except WebSocketDisconnect:
        logger.info("Client disconnected")
    except Exception as e:
        logger.error(f"WebSocket error: {e}")
    finally:
        manager.disconnect(websocket)


async def handle_frame(websocket: WebSocket, controller: SessionController, payload: dict) -> None:
    """
    Analyze one landmark frame and return the feedback.

    Frames that arrive while the session is stopped are dropped silently.
    """
    frame = LandmarkFrameSchema.model_validate(payload)
    landmarks = frame.to_domain(min_visibility=get_settings().MIN_LANDMARK_VISIBILITY)

    result = controller.on_frame(landmarks)
    if result is None:
        return

    await manager.send(
        websocket,
        WebSocketMessageType.FEEDBACK,
        FrameResultSchema.from_domain(result, frame_number=frame.frame_number).model_dump(mode="json"),
    )


def _snapshot_data(controller: SessionController) -> dict:
    return SessionSnapshotSchema.from_domain(controller.snapshot()).model_dump(mode="json")
