import math
import random

import pytest

from core.domain import BodyPart, Landmark, LandmarkSet
from core.services import AngleCalculator


def test_right_angle():
    a = Landmark(0.0, 1.0)
    b = Landmark(0.0, 0.0)
    c = Landmark(1.0, 0.0)
    assert AngleCalculator.joint_angle(a, b, c) == pytest.approx(90.0)


def test_collinear_with_vertex_between_is_straight():
    a = Landmark(0.0, 0.0)
    b = Landmark(0.5, 0.5)
    c = Landmark(1.0, 1.0)
    assert AngleCalculator.joint_angle(a, b, c) == pytest.approx(180.0)


def test_coincident_points_give_zero():
    p = Landmark(0.3, 0.3)
    assert AngleCalculator.joint_angle(p, p, p) == 0.0


def test_reflex_angle_is_folded_back():
    # Bearings of 170 and -170 degrees differ by 340; the inner angle is 20
    b = Landmark(0.0, 0.0)
    a = Landmark(math.cos(math.radians(170)), math.sin(math.radians(170)))
    c = Landmark(math.cos(math.radians(-170)), math.sin(math.radians(-170)))
    assert AngleCalculator.joint_angle(a, b, c) == pytest.approx(20.0)


def test_symmetric_and_bounded_for_random_points():
    rng = random.Random(7)
    for _ in range(200):
        a, b, c = (Landmark(rng.uniform(-1, 1), rng.uniform(-1, 1)) for _ in range(3))
        forward = AngleCalculator.joint_angle(a, b, c)
        backward = AngleCalculator.joint_angle(c, b, a)
        assert 0.0 <= forward <= 180.0
        assert forward == pytest.approx(backward)


class TestVerticalTilt:

    def test_upright(self):
        hip = Landmark(0.5, 0.8)
        shoulder = Landmark(0.5, 0.3)
        assert AngleCalculator.vertical_tilt_degrees(shoulder, hip) == pytest.approx(0.0)

    def test_horizontal(self):
        hip = Landmark(0.2, 0.5)
        shoulder = Landmark(0.7, 0.5)
        assert AngleCalculator.vertical_tilt_degrees(shoulder, hip) == pytest.approx(90.0)

    def test_upside_down(self):
        hip = Landmark(0.5, 0.2)
        shoulder = Landmark(0.5, 0.6)
        assert AngleCalculator.vertical_tilt_degrees(shoulder, hip) == pytest.approx(180.0)

    def test_forward_lean(self):
        hip = Landmark(0.0, 0.0)
        shoulder = Landmark(1.0, -1.0)
        assert AngleCalculator.vertical_tilt_degrees(shoulder, hip) == pytest.approx(45.0)

    def test_zero_length_torso_gives_zero(self):
        p = Landmark(0.4, 0.4)
        assert AngleCalculator.vertical_tilt_degrees(p, p) == 0.0


def test_midpoint():
    mid = AngleCalculator.midpoint(Landmark(0.2, 0.4, 0.9), Landmark(0.6, 0.8, 0.7))
    assert mid.x == pytest.approx(0.4)
    assert mid.y == pytest.approx(0.6)
    assert mid.visibility == pytest.approx(0.7)


def test_triple_angle_missing_joint():
    frame = LandmarkSet.from_mapping({
        BodyPart.LEFT_HIP: Landmark(0.4, 0.5),
        BodyPart.LEFT_KNEE: Landmark(0.4, 0.7),
    })
    triple = (BodyPart.LEFT_HIP, BodyPart.LEFT_KNEE, BodyPart.LEFT_ANKLE)
    assert AngleCalculator.triple_angle(frame, triple) is None


def test_torso_tilt_from_frame(landmarks):
    frame = landmarks(tilt=30.0)
    assert AngleCalculator.torso_tilt(frame) == pytest.approx(30.0)
