"""
Angle Calculator Service

Planar angle calculations for exercise-form analysis.
All angles are in degrees (0-180).

This is pure mathematics - no external dependencies except numpy.
"""

from typing import Optional

import numpy as np

from ..domain.pose import BodyPart, Landmark, LandmarkSet

# Straight up in image coordinates (y grows downward)
_VERTICAL_UP = np.array([0.0, -1.0])


class AngleCalculator:
    """
    Calculates joint angles and torso tilt from landmarks.

    Every method is a total function: degenerate input (coincident or
    collinear points, zero-length vectors) returns a defined value instead
    of raising.

    All methods are static - no state needed.
    """

    # -------------------------------------------------------------------------
    # Core Angle Calculations
    # -------------------------------------------------------------------------

    @staticmethod
    def joint_angle(a: Landmark, b: Landmark, c: Landmark) -> float:
        """
        Calculate angle at b formed by a-b-c.

        Takes the difference between the bearings of b->c and b->a, and
        reflects it into 0-180.

        Args:
            a: First point
            b: Vertex point (where angle is measured)
            c: Third point

        Returns:
            Angle in degrees (0-180)

        Example:
            For knee angle: hip -> knee -> ankle
            angle = joint_angle(hip, knee, ankle)
        """
        radians = (
            np.arctan2(c.y - b.y, c.x - b.x)
            - np.arctan2(a.y - b.y, a.x - b.x)
        )
        angle = abs(np.degrees(radians))
        if angle > 180.0:
            angle = 360.0 - angle
        return float(angle)

    @staticmethod
    def vertical_tilt_degrees(shoulder_mid: Landmark, hip_mid: Landmark) -> float:
        """
        Calculate torso tilt from vertical.

        Measured as the angle between:
        - Vertical line (straight up)
        - Line from hip midpoint to shoulder midpoint

        Returns:
            Tilt in degrees (0 = upright, 90 = horizontal, 180 = inverted).
            0 when the shoulders and hips coincide (no tilt signal).
        """
        torso_vector = np.array([
            shoulder_mid.x - hip_mid.x,
            shoulder_mid.y - hip_mid.y,
        ])
        length = np.linalg.norm(torso_vector)
        if length == 0:
            return 0.0

        cos_angle = np.dot(torso_vector, _VERTICAL_UP) / length
        # Clamp to valid range (handles floating point errors)
        cos_angle = np.clip(cos_angle, -1.0, 1.0)

        return float(np.degrees(np.arccos(cos_angle)))

    # -------------------------------------------------------------------------
    # Landmark Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def midpoint(p1: Landmark, p2: Landmark) -> Landmark:
        """Calculate midpoint between two landmarks."""
        return Landmark(
            x=(p1.x + p2.x) / 2,
            y=(p1.y + p2.y) / 2,
            visibility=min(p1.visibility, p2.visibility),
        )

    @classmethod
    def triple_angle(
        cls,
        landmarks: LandmarkSet,
        triple: tuple[BodyPart, BodyPart, BodyPart],
    ) -> Optional[float]:
        """
        Calculate the angle for a (outer, vertex, outer) joint triple.

        Returns:
            Angle in degrees, or None if any joint is missing
        """
        a, b, c = (landmarks.get_landmark(part) for part in triple)
        if a is None or b is None or c is None:
            return None
        return cls.joint_angle(a, b, c)

    @classmethod
    def torso_tilt(cls, landmarks: LandmarkSet) -> Optional[float]:
        """
        Calculate torso tilt from the shoulder and hip midpoints.

        Returns:
            Tilt in degrees, or None if a shoulder or hip is missing
        """
        left_shoulder = landmarks.get_landmark(BodyPart.LEFT_SHOULDER)
        right_shoulder = landmarks.get_landmark(BodyPart.RIGHT_SHOULDER)
        left_hip = landmarks.get_landmark(BodyPart.LEFT_HIP)
        right_hip = landmarks.get_landmark(BodyPart.RIGHT_HIP)

        if (left_shoulder is None or right_shoulder is None or
                left_hip is None or right_hip is None):
            return None

        return cls.vertical_tilt_degrees(
            cls.midpoint(left_shoulder, right_shoulder),
            cls.midpoint(left_hip, right_hip),
        )
