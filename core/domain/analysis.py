"""
Exercise Analysis Domain Models

Data structures for representing per-frame exercise analysis results,
including phases, faults, feedback and session state.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional

from .pose import BodyPart

if TYPE_CHECKING:
    from .profile import ExerciseProfile


class ExerciseId(Enum):
    """Exercises the engine knows how to analyze."""
    SQUAT = "squat"
    PUSHUP = "pushup"


class Phase(Enum):
    """
    Classified posture stage for the active exercise.

    - UP: standing tall / arms extended
    - DOWN: bottom of the movement
    - TRANSITION: between the two phase-boundary angles
    """
    UP = "up"
    DOWN = "down"
    TRANSITION = "transition"

    @property
    def label(self) -> str:
        """Human-readable label for the state readout."""
        return self.value.capitalize()


class Severity(Enum):
    """
    Feedback severity, ordered from best to worst.

    The ordering is used to escalate a message: a fault can only ever make
    the severity worse, never better.
    """
    GOOD = "good"
    NORMAL = "normal"
    WARNING = "warning"
    ERROR = "error"

    @property
    def rank(self) -> int:
        return _SEVERITY_ORDER.index(self)

    def escalate(self, other: "Severity") -> "Severity":
        """Return the worse of the two severities."""
        return other if other.rank > self.rank else self


_SEVERITY_ORDER = [Severity.GOOD, Severity.NORMAL, Severity.WARNING, Severity.ERROR]


class FaultFlag(Enum):
    """Posture faults detected by an exercise profile."""
    DEEP_SQUAT = "deep_squat"
    EXCESSIVE_LEAN = "excessive_lean"
    HIP_MISALIGNMENT = "hip_misalignment"


@dataclass(frozen=True)
class AngleReadout:
    """
    An angle value pinned to the joint it was measured at.

    The presentation layer draws ``angle`` as text next to (x, y).
    """
    joint: BodyPart
    x: float
    y: float
    angle: float


@dataclass(frozen=True)
class Classification:
    """
    Result of running an exercise profile over one landmark set.

    Attributes:
        primary_angle: Averaged left/right angle that drives the phase
        phase: Phase implied by primary_angle alone
        fault_flags: Posture faults found in this frame
        torso_tilt: Hip-to-shoulder tilt from vertical, in degrees
        readouts: Per-joint angles for overlay
    """
    primary_angle: float
    phase: Phase
    fault_flags: tuple[FaultFlag, ...] = ()
    torso_tilt: float = 0.0
    readouts: tuple[AngleReadout, ...] = ()

    def has_fault(self, flag: FaultFlag) -> bool:
        return flag in self.fault_flags


@dataclass(frozen=True)
class FeedbackEvent:
    """
    The single message shown for a frame (or a session status change).

    Produced per frame, never persisted.
    """
    message: str
    severity: Severity
    angles: dict[str, float] = field(default_factory=dict)
    rep_completed: bool = False


@dataclass
class SessionState:
    """
    Mutable state of one workout session.

    Owned exclusively by the SessionController that created it.
    """
    exercise: "ExerciseProfile"
    running: bool = False
    rep_count: int = 0
    current_phase: Phase = Phase.UP
    previous_phase: Phase = Phase.UP


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of the session state for the presentation layer."""
    running: bool
    exercise: ExerciseId
    exercise_name: str
    rep_count: int
    current_phase: Phase
    previous_phase: Phase
    feedback: Optional[FeedbackEvent] = None


@dataclass(frozen=True)
class FrameResult:
    """
    Everything the presentation layer needs after one frame.

    ``classification`` is None when the frame was skipped because the pose
    was not detected or not recognized.
    """
    feedback: FeedbackEvent
    phase: Phase
    rep_count: int
    rep_completed: bool = False
    detected_phase: Optional[Phase] = None
    classification: Optional[Classification] = None

    @property
    def readouts(self) -> tuple[AngleReadout, ...]:
        if self.classification is None:
            return ()
        return self.classification.readouts
