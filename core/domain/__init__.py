"""
Domain Models

Pure data structures representing exercise-form analysis concepts.
No external dependencies - just Python dataclasses and enums.
"""

from .pose import BodyPart, Landmark, LandmarkSet
from .analysis import (
    AngleReadout,
    Classification,
    ExerciseId,
    FaultFlag,
    FeedbackEvent,
    FrameResult,
    Phase,
    SessionSnapshot,
    SessionState,
    Severity,
)
from .profile import ExerciseProfile, ProfileMessages

__all__ = [
    "BodyPart",
    "Landmark",
    "LandmarkSet",
    "AngleReadout",
    "Classification",
    "ExerciseId",
    "FaultFlag",
    "FeedbackEvent",
    "FrameResult",
    "Phase",
    "SessionSnapshot",
    "SessionState",
    "Severity",
    "ExerciseProfile",
    "ProfileMessages",
]
