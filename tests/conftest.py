"""
Shared fixtures: synthetic landmark frames with known joint angles.
"""

import math

import pytest

from core.config import Settings
from core.domain import BodyPart, Landmark, LandmarkSet
from core.services import ProfileRegistry, SessionController, build_profiles


def _towards(origin: Landmark, length: float, degrees: float) -> Landmark:
    """Point at `length` from origin, `degrees` away from straight up."""
    radians = math.radians(degrees)
    return Landmark(
        x=origin.x + length * math.sin(radians),
        y=origin.y - length * math.cos(radians),
    )


def build_landmarks(
    knee_angle: float = 175.0,
    elbow_angle: float = 175.0,
    tilt: float = 0.0,
    drop: tuple[BodyPart, ...] = (),
) -> LandmarkSet:
    """
    Build a 33-point frame with the requested knee/elbow angles and torso tilt.

    Hips sit at y=0.5, shoulders are placed `tilt` degrees from vertical
    above the hip midpoint, knees and elbows hang straight down from hips and
    shoulders, and ankles/wrists are rotated so that the angle at the vertex
    is exactly the one requested.
    """
    points: dict[BodyPart, Landmark] = {}

    hips = {
        BodyPart.LEFT_HIP: Landmark(0.4, 0.5),
        BodyPart.RIGHT_HIP: Landmark(0.6, 0.5),
    }
    shoulder_mid = _towards(Landmark(0.5, 0.5), 0.3, tilt)
    shoulders = {
        BodyPart.LEFT_SHOULDER: Landmark(shoulder_mid.x - 0.1, shoulder_mid.y),
        BodyPart.RIGHT_SHOULDER: Landmark(shoulder_mid.x + 0.1, shoulder_mid.y),
    }
    points.update(hips)
    points.update(shoulders)

    legs = (
        (BodyPart.LEFT_HIP, BodyPart.LEFT_KNEE, BodyPart.LEFT_ANKLE),
        (BodyPart.RIGHT_HIP, BodyPart.RIGHT_KNEE, BodyPart.RIGHT_ANKLE),
    )
    for hip, knee, ankle in legs:
        points[knee] = Landmark(points[hip].x, points[hip].y + 0.2)
        points[ankle] = _towards(points[knee], 0.2, knee_angle)

    arms = (
        (BodyPart.LEFT_SHOULDER, BodyPart.LEFT_ELBOW, BodyPart.LEFT_WRIST),
        (BodyPart.RIGHT_SHOULDER, BodyPart.RIGHT_ELBOW, BodyPart.RIGHT_WRIST),
    )
    for shoulder, elbow, wrist in arms:
        points[elbow] = Landmark(points[shoulder].x, points[shoulder].y + 0.15)
        points[wrist] = _towards(points[elbow], 0.15, elbow_angle)

    for part in drop:
        points.pop(part, None)

    return LandmarkSet.from_mapping(points)


@pytest.fixture
def landmarks():
    """Factory for synthetic landmark frames."""
    return build_landmarks


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def registry(settings) -> ProfileRegistry:
    return ProfileRegistry(build_profiles(settings))


@pytest.fixture
def controller(registry, settings) -> SessionController:
    return SessionController(registry=registry, settings=settings)
