"""
API Schemas

Pydantic models for request/response validation.
"""

from .pose import (
    LandmarkSchema,
    LandmarkFrameSchema,
    WebSocketMessageType,
    WebSocketMessage,
    ExerciseMessage,
)

from .analysis import (
    ExerciseEnum,
    PhaseEnum,
    SeverityEnum,
    FaultFlagEnum,
    AngleReadoutSchema,
    ClassificationSchema,
    FeedbackSchema,
    FrameResultSchema,
    SessionSnapshotSchema,
    ExerciseProfileSchema,
    ClassifyRequest,
    ClassifyResponse,
    HealthResponse,
)

__all__ = [
    # Pose schemas
    "LandmarkSchema",
    "LandmarkFrameSchema",
    "WebSocketMessageType",
    "WebSocketMessage",
    "ExerciseMessage",
    # Analysis schemas
    "ExerciseEnum",
    "PhaseEnum",
    "SeverityEnum",
    "FaultFlagEnum",
    "AngleReadoutSchema",
    "ClassificationSchema",
    "FeedbackSchema",
    "FrameResultSchema",
    "SessionSnapshotSchema",
    "ExerciseProfileSchema",
    "ClassifyRequest",
    "ClassifyResponse",
    "HealthResponse",
]
