"""
REST API Routes

FastAPI routes for exercise-form analysis.
Real-time sessions run over the WebSocket endpoint; these routes cover
health, exercise listing and one-off classification.
"""

import logging
from typing import List
from fastapi import APIRouter, HTTPException

from .schemas import (
    ClassifyRequest,
    ClassifyResponse,
    ClassificationSchema,
    ExerciseEnum,
    ExerciseProfileSchema,
    FeedbackSchema,
    HealthResponse,
)
from core.config import get_settings
from core.exceptions import UnknownExerciseError
from core.services import FeedbackComposer, ProfileRegistry, build_profiles, classify

# Configure logging
logger = logging.getLogger(__name__)

# Create router
router = APIRouter()


def get_registry() -> ProfileRegistry:
    """Profile registry built from the current settings."""
    return ProfileRegistry(build_profiles(get_settings()))


# =============================================================================
# Health Check
# =============================================================================

@router.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="Health check endpoint"
)
async def health_check() -> HealthResponse:
    """
    Check if the API is running.

    Returns:
        Health status, version and available exercises
    """
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        version=settings.VERSION,
        exercises=[ExerciseEnum(profile.id.value) for profile in get_registry()]
    )


# =============================================================================
# Exercises
# =============================================================================

@router.get(
    "/exercises",
    response_model=List[ExerciseProfileSchema],
    tags=["Exercises"],
    summary="List available exercises"
)
async def list_exercises() -> List[ExerciseProfileSchema]:
    """
    List every exercise profile with its thresholds.

    Used to populate the exercise selector.
    """
    return [ExerciseProfileSchema.from_domain(profile) for profile in get_registry()]


@router.get(
    "/exercises/{exercise_id}",
    response_model=ExerciseProfileSchema,
    tags=["Exercises"],
    summary="Get a single exercise profile"
)
async def get_exercise(exercise_id: str) -> ExerciseProfileSchema:
    try:
        profile = get_registry().get(exercise_id)
    except UnknownExerciseError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return ExerciseProfileSchema.from_domain(profile)


# =============================================================================
# Analysis
# =============================================================================

@router.post(
    "/analysis/classify",
    response_model=ClassifyResponse,
    tags=["Analysis"],
    summary="Classify a single landmark frame"
)
async def classify_frame(request: ClassifyRequest) -> ClassifyResponse:
    """
    Classify one landmark frame for an exercise, without a session.

    Useful for:
    - Checking thresholds against recorded poses
    - Debugging the client-side detector output

    Nothing is counted: rep counting needs a session (WebSocket endpoint).

    Args:
        request: Landmarks and exercise id

    Returns:
        Phase, faults, angles and the feedback the frame would produce
    """
    try:
        profile = get_registry().get(request.exercise)
    except UnknownExerciseError as e:
        raise HTTPException(status_code=404, detail=str(e))

    landmarks = request.to_domain(min_visibility=get_settings().MIN_LANDMARK_VISIBILITY)
    if landmarks is None:
        return ClassifyResponse(
            exercise=ExerciseEnum(profile.id.value),
            recognized=False,
            feedback=FeedbackSchema.from_domain(FeedbackComposer.pose_not_detected()),
        )

    classification = classify(profile, landmarks)
    if classification is None:
        return ClassifyResponse(
            exercise=ExerciseEnum(profile.id.value),
            recognized=False,
            feedback=FeedbackSchema.from_domain(FeedbackComposer.pose_not_recognized()),
        )

    return ClassifyResponse(
        exercise=ExerciseEnum(profile.id.value),
        recognized=True,
        classification=ClassificationSchema.from_domain(classification),
        feedback=FeedbackSchema.from_domain(FeedbackComposer.compose(profile, classification)),
    )
