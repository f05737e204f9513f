"""
Session Controller Service

Owns the state of one workout session and routes each landmark frame
through profile classification, rep counting and feedback composition.

This is the main entry point for the presentation layer.
"""

import logging
from typing import Optional, Union

from ..config import Settings, get_settings
from ..domain.analysis import (
    ExerciseId,
    FeedbackEvent,
    FrameResult,
    SessionSnapshot,
    SessionState,
)
from ..domain.pose import LandmarkSet
from .exercise_profiles import ProfileRegistry, build_profiles, classify
from .feedback_composer import FeedbackComposer
from .rep_counter import RepCounter

logger = logging.getLogger(__name__)


class SessionController:
    """
    Controls a single workout session.

    One controller per session; controllers are never shared. Every call is
    synchronous and does no I/O, so a frame is always processed as one
    atomic step.

    Usage:
        controller = SessionController()
        controller.start("squat")

        for landmarks in landmark_stream:
            result = controller.on_frame(landmarks)
            if result is not None:
                print(result.feedback.message)

        total = controller.stop()
    """

    def __init__(
        self,
        registry: Optional[ProfileRegistry] = None,
        default_exercise: Union[ExerciseId, str] = ExerciseId.SQUAT,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize the controller.

        Args:
            registry: Exercise profiles (built from settings if not given)
            default_exercise: Exercise selected before the first start
            settings: Application settings
        """
        self.settings = settings or get_settings()
        if registry is None:
            registry = ProfileRegistry(build_profiles(self.settings))
        self.registry = registry
        self.state = SessionState(exercise=self.registry.get(default_exercise))
        self.last_feedback: FeedbackEvent = FeedbackComposer.idle()

    # -------------------------------------------------------------------------
    # Control Surface
    # -------------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self.state.running

    def start(self, exercise_id: Union[ExerciseId, str]) -> SessionSnapshot:
        """
        Start a new session with the given exercise.

        Counters and phases are always reset, whatever the previous session
        ended with.

        Raises:
            UnknownExerciseError: If exercise_id is not registered
                (state is left unchanged)
        """
        profile = self.registry.get(exercise_id)

        self.state.exercise = profile
        RepCounter.reset(self.state)
        self.state.running = True
        self.last_feedback = FeedbackComposer.session_started(profile)

        logger.info(f"Session started: {profile.id.value}")
        return self.snapshot()

    def stop(self) -> int:
        """
        Stop the session.

        Counters stay readable until the next start.

        Returns:
            Final rep count
        """
        if self.state.running:
            self.state.running = False
            self.last_feedback = FeedbackComposer.session_stopped(self.state.rep_count)
            logger.info(
                f"Session stopped: {self.state.exercise.id.value}, "
                f"{self.state.rep_count} reps"
            )
        return self.state.rep_count

    def select_exercise(self, exercise_id: Union[ExerciseId, str]) -> SessionSnapshot:
        """
        Change the selected exercise. Ignored while a session is running.

        Raises:
            UnknownExerciseError: If exercise_id is not registered
        """
        profile = self.registry.get(exercise_id)

        if self.state.running:
            logger.info(f"Ignoring exercise change to {profile.id.value} while running")
            return self.snapshot()

        self.state.exercise = profile
        self.last_feedback = FeedbackComposer.exercise_selected(profile)
        return self.snapshot()

    def snapshot(self) -> SessionSnapshot:
        """Read-only copy of the current state."""
        return SessionSnapshot(
            running=self.state.running,
            exercise=self.state.exercise.id,
            exercise_name=self.state.exercise.display_name,
            rep_count=self.state.rep_count,
            current_phase=self.state.current_phase,
            previous_phase=self.state.previous_phase,
            feedback=self.last_feedback,
        )

    # -------------------------------------------------------------------------
    # Frame Processing
    # -------------------------------------------------------------------------

    def on_frame(self, landmarks: Optional[LandmarkSet]) -> Optional[FrameResult]:
        """
        Process one frame from the landmark source.

        Args:
            landmarks: Landmarks for the frame, or None if no pose was found

        Returns:
            FrameResult, or None if the session is not running
        """
        if not self.state.running:
            return None

        if landmarks is None:
            return self._skip(FeedbackComposer.pose_not_detected())

        profile = self.state.exercise
        classification = classify(profile, landmarks)
        if classification is None:
            return self._skip(FeedbackComposer.pose_not_recognized())

        rep_completed = RepCounter.advance(self.state, classification.phase)
        feedback = FeedbackComposer.compose(profile, classification, rep_completed)
        self.last_feedback = feedback

        return FrameResult(
            feedback=feedback,
            phase=self.state.current_phase,
            rep_count=self.state.rep_count,
            rep_completed=rep_completed,
            detected_phase=classification.phase,
            classification=classification,
        )

    def _skip(self, feedback: FeedbackEvent) -> FrameResult:
        """Report a frame that could not be analyzed; state is untouched."""
        self.last_feedback = feedback
        return FrameResult(
            feedback=feedback,
            phase=self.state.current_phase,
            rep_count=self.state.rep_count,
        )
