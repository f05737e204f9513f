"""
Exercise Profile Domain Model

Declarative description of an exercise: which joints drive it, where its
phase boundaries sit, and what to tell the user about each phase.
"""

from dataclasses import dataclass
from typing import Optional

from .analysis import ExerciseId, FaultFlag, Severity
from .pose import BodyPart
from ..exceptions import ConfigurationError

JointTriple = tuple[BodyPart, BodyPart, BodyPart]

# Torso alignment always uses the shoulder and hip midpoints.
TORSO_JOINTS: tuple[BodyPart, ...] = (
    BodyPart.LEFT_SHOULDER,
    BodyPart.RIGHT_SHOULDER,
    BodyPart.LEFT_HIP,
    BodyPart.RIGHT_HIP,
)


@dataclass(frozen=True)
class ProfileMessages:
    """
    Feedback text for each phase of an exercise.

    ``torso`` is a format string receiving the measured tilt as ``tilt``.
    """
    down: str
    up: str
    transition: str
    torso: str
    too_deep: Optional[str] = None


@dataclass(frozen=True)
class ExerciseProfile:
    """
    Immutable rule set for one exercise.

    Attributes:
        id: Exercise identifier
        display_name: Name shown in the UI
        left_triple: (outer, vertex, outer) joints on the left side
        right_triple: Same triple on the right side
        down_angle: Primary angle below which the pose is DOWN
        up_angle: Primary angle above which the pose is UP
        fault_angle: Primary angle below which the movement is too deep
        depth_fault: Flag raised below fault_angle
        torso_tilt_threshold: Maximum tilt from vertical before warning
        torso_fault: Flag raised when the tilt threshold is exceeded
        torso_fault_severity: Minimum severity when torso_fault is raised
        messages: Feedback text per phase
    """
    id: ExerciseId
    display_name: str
    left_triple: JointTriple
    right_triple: JointTriple
    down_angle: float
    up_angle: float
    torso_tilt_threshold: float
    torso_fault: FaultFlag
    torso_fault_severity: Severity
    messages: ProfileMessages
    fault_angle: Optional[float] = None
    depth_fault: Optional[FaultFlag] = None

    def __post_init__(self) -> None:
        if self.down_angle >= self.up_angle:
            raise ConfigurationError(
                f"{self.id.value}: down_angle ({self.down_angle}) must be "
                f"below up_angle ({self.up_angle})"
            )

    @property
    def required_joints(self) -> tuple[BodyPart, ...]:
        """Every joint that must be present to analyze a frame."""
        joints = set(self.left_triple) | set(self.right_triple) | set(TORSO_JOINTS)
        return tuple(sorted(joints))
