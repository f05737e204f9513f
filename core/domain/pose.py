"""
Pose Domain Models

Data structures for representing the body landmarks supplied by the
client-side pose detector.

Indices follow MediaPipe Pose's 33-point schema:
https://developers.google.com/mediapipe/solutions/vision/pose_landmarker
"""
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Optional, Sequence


class BodyPart(IntEnum):
    """
    MediaPipe Pose landmark indices used by the exercise profiles.

    These are fixed by the upstream model's schema and must not be
    reordered.
    """
    # Upper body
    LEFT_SHOULDER = 11
    RIGHT_SHOULDER = 12
    LEFT_ELBOW = 13
    RIGHT_ELBOW = 14
    LEFT_WRIST = 15
    RIGHT_WRIST = 16

    # Lower body
    LEFT_HIP = 23
    RIGHT_HIP = 24
    LEFT_KNEE = 25
    RIGHT_KNEE = 26
    LEFT_ANKLE = 27
    RIGHT_ANKLE = 28

    @property
    def label(self) -> str:
        """Lower-case name used as readout key (e.g. 'left_knee')."""
        return self.name.lower()


@dataclass(frozen=True)
class Landmark:
    """
    A single tracked body-joint position.

    Attributes:
        x: Horizontal position (0.0 = left edge, 1.0 = right edge)
        y: Vertical position (0.0 = top edge, 1.0 = bottom edge)
        visibility: Detector confidence (0.0 to 1.0)

    Note:
        Pixel coordinates work as well, as long as a session sticks to one
        coordinate space. Image y grows downward either way.
    """
    x: float
    y: float
    visibility: float = 1.0

    def is_visible(self, threshold: float = 0.5) -> bool:
        """Check if landmark is visible above confidence threshold."""
        return self.visibility >= threshold


class LandmarkSet:
    """
    One frame of landmarks, indexed by the detector's schema.

    Entries may be None when the detector left a joint out. A landmark whose
    visibility is below ``min_visibility`` is treated as missing.
    """

    def __init__(
        self,
        landmarks: Sequence[Optional[Landmark]],
        min_visibility: float = 0.0,
    ):
        self.landmarks = list(landmarks)
        self.min_visibility = min_visibility

    def __len__(self) -> int:
        return len(self.landmarks)

    def get_landmark(self, body_part: BodyPart) -> Optional[Landmark]:
        """Get a specific landmark by body part, or None if unavailable."""
        index = body_part.value
        if not 0 <= index < len(self.landmarks):
            return None
        landmark = self.landmarks[index]
        if landmark is None or not landmark.is_visible(self.min_visibility):
            return None
        return landmark

    def missing(self, body_parts: Iterable[BodyPart]) -> list[BodyPart]:
        """List the requested body parts that are not available."""
        return [part for part in body_parts if self.get_landmark(part) is None]

    def require(self, body_part: BodyPart) -> Landmark:
        """Get a landmark that the caller already checked for."""
        landmark = self.get_landmark(body_part)
        if landmark is None:
            raise KeyError(body_part.name)
        return landmark

    @classmethod
    def from_mapping(
        cls,
        points: dict[BodyPart, Landmark],
        size: int = 33,
        min_visibility: float = 0.0,
    ) -> "LandmarkSet":
        """Build a full-length set from a sparse {body_part: landmark} map."""
        landmarks: list[Optional[Landmark]] = [None] * size
        for part, landmark in points.items():
            landmarks[part.value] = landmark
        return cls(landmarks, min_visibility=min_visibility)
