"""
Rep Counter Service

Tracks the posture phase across frames and counts a repetition on every
DOWN -> UP transition.
"""

import logging

from ..domain.analysis import Phase, SessionState

logger = logging.getLogger(__name__)


class RepCounter:
    """
    Phase state machine with a repetition counter.

    Operates on the session's own SessionState, so the controller stays the
    single owner of phase and count.

    A TRANSITION classification keeps the last definitive phase, so the gap
    between a profile's down and up angles acts as the only noise filter:
    UP -> TRANSITION -> UP never counts, DOWN -> TRANSITION -> UP counts once.

    All methods are static - no state needed.

    Usage:
        if RepCounter.advance(state, classification.phase):
            print(f"Rep {state.rep_count}!")
    """

    @staticmethod
    def reset(state: SessionState) -> None:
        """Back to the initial UP state with no reps."""
        state.rep_count = 0
        state.current_phase = Phase.UP
        state.previous_phase = Phase.UP

    @staticmethod
    def advance(state: SessionState, phase: Phase) -> bool:
        """
        Feed the phase classified for a new frame.

        Args:
            state: Session state to update
            phase: Phase reported by the exercise profile

        Returns:
            True if this frame completed a repetition
        """
        tracked = state.current_phase if phase is Phase.TRANSITION else phase

        state.previous_phase = state.current_phase
        state.current_phase = tracked

        if state.previous_phase is Phase.DOWN and state.current_phase is Phase.UP:
            state.rep_count += 1
            logger.debug(f"{state.exercise.id.value}: rep {state.rep_count} completed")
            return True
        return False
