"""
Exercise Profiles Service

Built-in exercise profiles and the pure classification function that maps a
landmark set to a phase, a primary angle and posture faults.

Adding an exercise means adding a profile to ``build_profiles`` - neither the
rep counter nor the session controller needs to change.
"""

import logging
from typing import Iterator, Optional, Union

from ..config import Settings, get_settings
from ..domain.analysis import (
    AngleReadout,
    Classification,
    ExerciseId,
    FaultFlag,
    Phase,
    Severity,
)
from ..domain.pose import BodyPart, LandmarkSet
from ..domain.profile import ExerciseProfile, ProfileMessages
from ..exceptions import UnknownExerciseError
from .angle_calculator import AngleCalculator

logger = logging.getLogger(__name__)


# =============================================================================
# Built-in Profiles
# =============================================================================

SQUAT_MESSAGES = ProfileMessages(
    down="Good depth! Hold the position.",
    too_deep="Very deep squat. Take care not to strain your knees and lower back.",
    up="Upper body nicely extended. Get ready for the next rep.",
    transition="Mid movement. Keep your form steady.",
    torso="Your torso is tilted {tilt:.1f}°. Keep your upper body upright.",
)

PUSHUP_MESSAGES = ProfileMessages(
    down="Down. Check that your elbows are fully bent.",
    up="Up. Straighten your arms.",
    transition="Mid movement.",
    torso="Your torso is tilted {tilt:.1f}°. Keep your hips in line.",
)


def build_profiles(settings: Optional[Settings] = None) -> dict[ExerciseId, ExerciseProfile]:
    """
    Create the built-in profiles using thresholds from settings.

    Args:
        settings: Application settings (defaults to the cached process settings)

    Returns:
        Mapping of exercise id to profile
    """
    settings = settings or get_settings()

    squat = ExerciseProfile(
        id=ExerciseId.SQUAT,
        display_name="Squat",
        left_triple=(BodyPart.LEFT_HIP, BodyPart.LEFT_KNEE, BodyPart.LEFT_ANKLE),
        right_triple=(BodyPart.RIGHT_HIP, BodyPart.RIGHT_KNEE, BodyPart.RIGHT_ANKLE),
        down_angle=settings.SQUAT_DOWN_ANGLE,
        up_angle=settings.SQUAT_UP_ANGLE,
        fault_angle=settings.SQUAT_DEEP_ANGLE,
        depth_fault=FaultFlag.DEEP_SQUAT,
        torso_tilt_threshold=settings.TORSO_TILT_THRESHOLD,
        torso_fault=FaultFlag.EXCESSIVE_LEAN,
        torso_fault_severity=Severity.ERROR,
        messages=SQUAT_MESSAGES,
    )

    pushup = ExerciseProfile(
        id=ExerciseId.PUSHUP,
        display_name="Push-up",
        left_triple=(BodyPart.LEFT_SHOULDER, BodyPart.LEFT_ELBOW, BodyPart.LEFT_WRIST),
        right_triple=(BodyPart.RIGHT_SHOULDER, BodyPart.RIGHT_ELBOW, BodyPart.RIGHT_WRIST),
        down_angle=settings.PUSHUP_DOWN_ANGLE,
        up_angle=settings.PUSHUP_UP_ANGLE,
        torso_tilt_threshold=settings.TORSO_TILT_THRESHOLD,
        torso_fault=FaultFlag.HIP_MISALIGNMENT,
        torso_fault_severity=Severity.WARNING,
        messages=PUSHUP_MESSAGES,
    )

    return {profile.id: profile for profile in (squat, pushup)}


class ProfileRegistry:
    """
    Lookup of exercise profiles by id.

    Usage:
        registry = ProfileRegistry()
        profile = registry.get("squat")
    """

    def __init__(self, profiles: Optional[dict[ExerciseId, ExerciseProfile]] = None):
        self._profiles = profiles if profiles is not None else build_profiles()

    def __iter__(self) -> Iterator[ExerciseProfile]:
        return iter(self._profiles.values())

    def __len__(self) -> int:
        return len(self._profiles)

    def get(self, exercise_id: Union[ExerciseId, str]) -> ExerciseProfile:
        """
        Resolve an exercise id (enum or its string value) to a profile.

        Raises:
            UnknownExerciseError: If no profile matches
        """
        try:
            key = ExerciseId(exercise_id)
        except ValueError:
            raise UnknownExerciseError(exercise_id) from None

        profile = self._profiles.get(key)
        if profile is None:
            raise UnknownExerciseError(exercise_id)
        return profile


# =============================================================================
# Classification
# =============================================================================

def classify_phase(profile: ExerciseProfile, primary_angle: float) -> Phase:
    """Map a primary angle onto the profile's phase boundaries."""
    if primary_angle < profile.down_angle:
        return Phase.DOWN
    if primary_angle > profile.up_angle:
        return Phase.UP
    return Phase.TRANSITION


def classify(profile: ExerciseProfile, landmarks: LandmarkSet) -> Optional[Classification]:
    """
    Classify one frame for the given exercise.

    Pure function: no state is read or written.

    Args:
        profile: Exercise rules to apply
        landmarks: Landmark set for the frame

    Returns:
        Classification, or None if any required joint is missing
    """
    missing = landmarks.missing(profile.required_joints)
    if missing:
        logger.debug(
            f"{profile.id.value}: missing joints {[part.name for part in missing]}"
        )
        return None

    left_angle = AngleCalculator.triple_angle(landmarks, profile.left_triple)
    right_angle = AngleCalculator.triple_angle(landmarks, profile.right_triple)
    tilt = AngleCalculator.torso_tilt(landmarks)

    # Type narrowing: required_joints already covers every joint used above
    if left_angle is None or right_angle is None or tilt is None:
        return None

    primary_angle = (left_angle + right_angle) / 2
    phase = classify_phase(profile, primary_angle)

    faults: list[FaultFlag] = []
    if (profile.depth_fault is not None and profile.fault_angle is not None
            and primary_angle < profile.fault_angle):
        faults.append(profile.depth_fault)
    if tilt > profile.torso_tilt_threshold:
        faults.append(profile.torso_fault)

    readouts = []
    for triple, angle in ((profile.left_triple, left_angle), (profile.right_triple, right_angle)):
        vertex = landmarks.require(triple[1])
        readouts.append(AngleReadout(joint=triple[1], x=vertex.x, y=vertex.y, angle=angle))

    return Classification(
        primary_angle=primary_angle,
        phase=phase,
        fault_flags=tuple(faults),
        torso_tilt=tilt,
        readouts=tuple(readouts),
    )
