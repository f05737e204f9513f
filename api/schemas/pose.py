"""
Pose API Schemas

Pydantic models for landmark payloads and WebSocket messages.
These define the JSON structure for communication with the frontend.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from enum import Enum

from core.domain.pose import Landmark, LandmarkSet


class LandmarkSchema(BaseModel):
    """
    Single body landmark sent by the frontend's pose detector.

    Coordinates are normalized (0.0 to 1.0) or pixels, as long as a session
    sticks to one of them.
    """
    x: float = Field(..., allow_inf_nan=False, description="Horizontal position (0=left)")
    y: float = Field(..., allow_inf_nan=False, description="Vertical position (0=top)")
    z: Optional[float] = Field(None, allow_inf_nan=False, description="Depth (ignored by the analysis)")
    visibility: float = Field(1.0, ge=0.0, le=1.0, allow_inf_nan=False, description="Detection confidence")

    class Config:
        json_schema_extra = {
            "example": {
                "x": 0.45,
                "y": 0.32,
                "z": -0.15,
                "visibility": 0.95
            }
        }

    def to_domain(self) -> Landmark:
        return Landmark(x=self.x, y=self.y, visibility=self.visibility)


class LandmarkFrameSchema(BaseModel):
    """
    One frame of landmarks indexed by the MediaPipe Pose schema.

    ``landmarks`` is null when the detector found no person; individual
    entries are null when a joint was not tracked.
    """
    landmarks: Optional[List[Optional[LandmarkSchema]]] = Field(
        None, description="33 body landmarks, or null if no pose was detected"
    )
    frame_number: int = Field(0, ge=0, description="Sequential frame number")

    class Config:
        json_schema_extra = {
            "example": {
                "landmarks": [
                    {"x": 0.5, "y": 0.2, "visibility": 0.99}
                ],
                "frame_number": 45
            }
        }

    def to_domain(self, min_visibility: float = 0.0) -> Optional[LandmarkSet]:
        """Convert to a LandmarkSet, or None if no pose was detected."""
        if self.landmarks is None:
            return None
        return LandmarkSet(
            [lm.to_domain() if lm is not None else None for lm in self.landmarks],
            min_visibility=min_visibility,
        )


# =============================================================================
# WebSocket Message Schemas
# =============================================================================

class WebSocketMessageType(str, Enum):
    """Types of WebSocket messages."""
    # Client -> Server
    FRAME = "frame"                        # Landmarks for one video frame
    START_SESSION = "start_session"        # Start counting reps
    STOP_SESSION = "stop_session"          # Stop counting, keep the totals
    SELECT_EXERCISE = "select_exercise"    # Change exercise while stopped
    END_SESSION = "end_session"            # Close the connection

    # Server -> Client
    SESSION_READY = "session_ready"
    SESSION_STARTED = "session_started"
    SESSION_STOPPED = "session_stopped"
    EXERCISE_SELECTED = "exercise_selected"
    FEEDBACK = "feedback"                  # Per-frame analysis result
    SESSION_ENDED = "session_ended"
    ERROR = "error"                        # Error message


class WebSocketMessage(BaseModel):
    """
    Base WebSocket message structure.

    All WebSocket communication uses this format.
    """
    type: WebSocketMessageType = Field(..., description="Message type")
    data: Optional[dict] = Field(None, description="Message payload (an object)")
    timestamp: float = Field(0, description="Unix timestamp in milliseconds")

    class Config:
        json_schema_extra = {
            "example": {
                "type": "start_session",
                "data": {"exercise": "squat"},
                "timestamp": 1704067200000
            }
        }


class ExerciseMessage(BaseModel):
    """Payload of start_session and select_exercise messages."""
    exercise: str = Field(..., description="Exercise id (e.g. 'squat')")
