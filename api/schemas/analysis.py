"""
Analysis API Schemas

Pydantic models for exercise analysis and session API responses.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from enum import Enum

from core.domain.analysis import (
    Classification,
    FeedbackEvent,
    FrameResult,
    SessionSnapshot,
)
from core.domain.profile import ExerciseProfile
from .pose import LandmarkFrameSchema


class ExerciseEnum(str, Enum):
    """Exercise ids for API."""
    SQUAT = "squat"
    PUSHUP = "pushup"


class PhaseEnum(str, Enum):
    """Exercise phases for API."""
    UP = "up"
    DOWN = "down"
    TRANSITION = "transition"


class SeverityEnum(str, Enum):
    """Feedback severities for API."""
    GOOD = "good"
    NORMAL = "normal"
    WARNING = "warning"
    ERROR = "error"


class FaultFlagEnum(str, Enum):
    """Posture faults for API."""
    DEEP_SQUAT = "deep_squat"
    EXCESSIVE_LEAN = "excessive_lean"
    HIP_MISALIGNMENT = "hip_misalignment"


class AngleReadoutSchema(BaseModel):
    """
    Angle measured at a joint, positioned for overlay text.
    """
    joint: str = Field(..., description="Joint name (e.g. 'left_knee')")
    index: int = Field(..., description="Landmark index in the pose schema")
    x: float = Field(..., description="Joint horizontal position")
    y: float = Field(..., description="Joint vertical position")
    angle: float = Field(..., ge=0.0, le=180.0, description="Angle in degrees")


class ClassificationSchema(BaseModel):
    """
    Classification of a single landmark frame.
    """
    primary_angle: float = Field(..., description="Averaged left/right joint angle")
    phase: PhaseEnum = Field(..., description="Phase implied by the primary angle")
    fault_flags: List[FaultFlagEnum] = Field(default_factory=list, description="Posture faults")
    torso_tilt: float = Field(..., description="Torso tilt from vertical (degrees)")
    readouts: List[AngleReadoutSchema] = Field(default_factory=list, description="Per-joint angles")

    @classmethod
    def from_domain(cls, classification: Classification) -> "ClassificationSchema":
        return cls(
            primary_angle=classification.primary_angle,
            phase=PhaseEnum(classification.phase.value),
            fault_flags=[FaultFlagEnum(f.value) for f in classification.fault_flags],
            torso_tilt=classification.torso_tilt,
            readouts=[
                AngleReadoutSchema(
                    joint=r.joint.label,
                    index=r.joint.value,
                    x=r.x,
                    y=r.y,
                    angle=r.angle,
                )
                for r in classification.readouts
            ],
        )


class FeedbackSchema(BaseModel):
    """
    Message shown to the user, with its severity.
    """
    message: str = Field(..., description="Feedback text")
    severity: SeverityEnum = Field(..., description="Severity level")
    angles: dict[str, float] = Field(default_factory=dict, description="Numeric readouts")
    rep_completed: bool = Field(False, description="Whether this frame completed a rep")

    class Config:
        json_schema_extra = {
            "example": {
                "message": "Rep complete! Upper body nicely extended. Get ready for the next rep.",
                "severity": "good",
                "angles": {"primary_angle": 165.2, "torso_tilt": 4.1},
                "rep_completed": True
            }
        }

    @classmethod
    def from_domain(cls, event: FeedbackEvent) -> "FeedbackSchema":
        return cls(
            message=event.message,
            severity=SeverityEnum(event.severity.value),
            angles=dict(event.angles),
            rep_completed=event.rep_completed,
        )


class FrameResultSchema(BaseModel):
    """
    Result of processing one frame in a running session.
    """
    frame_number: int = Field(0, description="Frame number echoed from the request")
    feedback: FeedbackSchema = Field(..., description="Feedback for this frame")
    phase: PhaseEnum = Field(..., description="Tracked phase after this frame")
    phase_label: str = Field(..., description="Tracked phase for the state readout (e.g. 'Down')")
    detected_phase: Optional[PhaseEnum] = Field(None, description="Phase classified from this frame alone")
    rep_count: int = Field(..., ge=0, description="Reps completed so far")
    rep_completed: bool = Field(False, description="Whether this frame completed a rep")
    classification: Optional[ClassificationSchema] = Field(
        None, description="Null when the pose was not detected or not recognized"
    )

    @classmethod
    def from_domain(cls, result: FrameResult, frame_number: int = 0) -> "FrameResultSchema":
        return cls(
            frame_number=frame_number,
            feedback=FeedbackSchema.from_domain(result.feedback),
            phase=PhaseEnum(result.phase.value),
            phase_label=result.phase.label,
            detected_phase=PhaseEnum(result.detected_phase.value) if result.detected_phase else None,
            rep_count=result.rep_count,
            rep_completed=result.rep_completed,
            classification=(
                ClassificationSchema.from_domain(result.classification)
                if result.classification is not None else None
            ),
        )


class SessionSnapshotSchema(BaseModel):
    """
    Current session state for the status readouts.
    """
    running: bool = Field(..., description="Whether frames are being analyzed")
    exercise: ExerciseEnum = Field(..., description="Selected exercise")
    exercise_name: str = Field(..., description="Exercise display name")
    rep_count: int = Field(..., ge=0, description="Reps completed")
    current_phase: PhaseEnum = Field(..., description="Tracked phase")
    previous_phase: PhaseEnum = Field(..., description="Phase before the last frame")
    feedback: Optional[FeedbackSchema] = Field(None, description="Latest status message")

    @classmethod
    def from_domain(cls, snapshot: SessionSnapshot) -> "SessionSnapshotSchema":
        return cls(
            running=snapshot.running,
            exercise=ExerciseEnum(snapshot.exercise.value),
            exercise_name=snapshot.exercise_name,
            rep_count=snapshot.rep_count,
            current_phase=PhaseEnum(snapshot.current_phase.value),
            previous_phase=PhaseEnum(snapshot.previous_phase.value),
            feedback=FeedbackSchema.from_domain(snapshot.feedback) if snapshot.feedback else None,
        )


class ExerciseProfileSchema(BaseModel):
    """
    Exercise rule set, as exposed to the exercise selector.
    """
    id: ExerciseEnum = Field(..., description="Exercise id")
    display_name: str = Field(..., description="Name shown in the UI")
    down_angle: float = Field(..., description="Angle below which the pose is 'down'")
    up_angle: float = Field(..., description="Angle above which the pose is 'up'")
    fault_angle: Optional[float] = Field(None, description="Angle below which the movement is too deep")
    torso_tilt_threshold: float = Field(..., description="Maximum torso tilt (degrees)")
    required_joints: List[int] = Field(..., description="Landmark indices that must be visible")

    class Config:
        json_schema_extra = {
            "example": {
                "id": "squat",
                "display_name": "Squat",
                "down_angle": 100.0,
                "up_angle": 160.0,
                "fault_angle": 70.0,
                "torso_tilt_threshold": 20.0,
                "required_joints": [11, 12, 23, 24, 25, 26, 27, 28]
            }
        }

    @classmethod
    def from_domain(cls, profile: ExerciseProfile) -> "ExerciseProfileSchema":
        return cls(
            id=ExerciseEnum(profile.id.value),
            display_name=profile.display_name,
            down_angle=profile.down_angle,
            up_angle=profile.up_angle,
            fault_angle=profile.fault_angle,
            torso_tilt_threshold=profile.torso_tilt_threshold,
            required_joints=[part.value for part in profile.required_joints],
        )


class ClassifyRequest(LandmarkFrameSchema):
    """
    Request to classify one landmark frame without a session.
    """
    exercise: str = Field("squat", description="Exercise id")


class ClassifyResponse(BaseModel):
    """
    Stateless classification result.
    """
    exercise: ExerciseEnum = Field(..., description="Exercise used")
    recognized: bool = Field(..., description="False if required joints were missing")
    classification: Optional[ClassificationSchema] = Field(None, description="Null if not recognized")
    feedback: FeedbackSchema = Field(..., description="Feedback the frame would produce")


class HealthResponse(BaseModel):
    """
    Health check response.
    """
    status: str = Field("healthy", description="Service status")
    version: str = Field(..., description="API version")
    exercises: List[ExerciseEnum] = Field(default_factory=list, description="Available exercises")
