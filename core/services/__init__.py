"""
Services Layer

Business logic for exercise-form analysis.
These services orchestrate the domain models; none of them do any I/O.
"""

from .angle_calculator import AngleCalculator
from .exercise_profiles import ProfileRegistry, build_profiles, classify
from .rep_counter import RepCounter
from .feedback_composer import FeedbackComposer
from .session_controller import SessionController

__all__ = [
    "AngleCalculator",
    "ProfileRegistry",
    "build_profiles",
    "classify",
    "RepCounter",
    "FeedbackComposer",
    "SessionController",
]
