"""
Domain Exceptions

Raised by the analysis engine and translated into HTTP / WebSocket errors by
the API layer.
"""


class ConfigurationError(ValueError):
    """Invalid exercise or threshold configuration."""


class UnknownExerciseError(ConfigurationError):
    """Raised when an exercise id does not match any registered profile."""

    def __init__(self, exercise_id: object):
        self.exercise_id = exercise_id
        super().__init__(f"Unknown exercise: {exercise_id!r}")
