"""
Feedback Composer Service

Turns a frame's classification into the single message shown to the user.

Priority when several conditions hold at once:
1. Rep completion - GOOD, prefixed to everything else
2. Torso faults - text appended, severity escalated to the profile's level
3. Phase description - GOOD at a safe depth, WARNING when too deep,
   NORMAL otherwise
"""

from ..domain.analysis import Classification, FeedbackEvent, Phase, Severity
from ..domain.profile import ExerciseProfile

REP_COMPLETED_MESSAGE = "Rep complete!"
POSE_NOT_DETECTED_MESSAGE = "Pose not detected. Make sure your whole body is visible."
POSE_NOT_RECOGNIZED_MESSAGE = "Pose not recognized. Make sure your whole body is visible."
IDLE_MESSAGE = "Press start to begin your workout."


class FeedbackComposer:
    """
    Builds FeedbackEvents for frames and session status changes.

    Exactly one message and one severity per event - there is no queue.

    All methods are static - no state needed.
    """

    # -------------------------------------------------------------------------
    # Frame Feedback
    # -------------------------------------------------------------------------

    @staticmethod
    def compose(
        profile: ExerciseProfile,
        classification: Classification,
        rep_completed: bool = False,
    ) -> FeedbackEvent:
        """
        Compose the feedback for an analyzed frame.

        Args:
            profile: Active exercise profile
            classification: Result of classifying the frame
            rep_completed: Whether this frame completed a repetition

        Returns:
            FeedbackEvent with message, severity and angle readouts
        """
        messages = profile.messages
        phase = classification.phase

        # Phase description
        if phase is Phase.DOWN:
            if profile.depth_fault and classification.has_fault(profile.depth_fault):
                parts = [messages.too_deep or messages.down]
                severity = Severity.WARNING
            else:
                parts = [messages.down]
                severity = Severity.GOOD
        elif phase is Phase.UP:
            parts = [messages.up]
            severity = Severity.NORMAL
        else:
            parts = [messages.transition]
            severity = Severity.NORMAL

        # Torso alignment
        if classification.has_fault(profile.torso_fault):
            parts.append(messages.torso.format(tilt=classification.torso_tilt))
            severity = severity.escalate(profile.torso_fault_severity)

        # Rep completion wins
        if rep_completed:
            parts.insert(0, REP_COMPLETED_MESSAGE)
            severity = Severity.GOOD

        return FeedbackEvent(
            message=" ".join(parts),
            severity=severity,
            angles=FeedbackComposer.angle_values(classification),
            rep_completed=rep_completed,
        )

    @staticmethod
    def angle_values(classification: Classification) -> dict[str, float]:
        """Numeric readouts for the overlay, rounded to one decimal."""
        angles = {
            "primary_angle": round(classification.primary_angle, 1),
            "torso_tilt": round(classification.torso_tilt, 1),
        }
        for readout in classification.readouts:
            angles[readout.joint.label] = round(readout.angle, 1)
        return angles

    # -------------------------------------------------------------------------
    # Status Feedback
    # -------------------------------------------------------------------------

    @staticmethod
    def pose_not_detected() -> FeedbackEvent:
        return FeedbackEvent(message=POSE_NOT_DETECTED_MESSAGE, severity=Severity.WARNING)

    @staticmethod
    def pose_not_recognized() -> FeedbackEvent:
        return FeedbackEvent(message=POSE_NOT_RECOGNIZED_MESSAGE, severity=Severity.WARNING)

    @staticmethod
    def idle() -> FeedbackEvent:
        return FeedbackEvent(message=IDLE_MESSAGE, severity=Severity.NORMAL)

    @staticmethod
    def session_started(profile: ExerciseProfile) -> FeedbackEvent:
        return FeedbackEvent(
            message=f"Workout started: {profile.display_name}.",
            severity=Severity.GOOD,
        )

    @staticmethod
    def session_stopped(rep_count: int) -> FeedbackEvent:
        return FeedbackEvent(
            message=f"Workout finished: {rep_count} reps in total.",
            severity=Severity.NORMAL,
        )

    @staticmethod
    def exercise_selected(profile: ExerciseProfile) -> FeedbackEvent:
        return FeedbackEvent(
            message=f"{profile.display_name} selected.",
            severity=Severity.NORMAL,
        )
