"""
Angle Calculator Service

Joint angle calculations for technique evaluation.
All angles are calculated in degrees (0-180).

This is pure mathematics - no external dependencies except numpy.
"""

from typing import Sequence

import numpy as np

from ..domain.pose import PoseLandmark
from ..domain.errors import InvalidJointIndex


class AngleCalculator:
    """
    Calculates the interior angle at a joint from pose landmarks.

    The angle is the difference of the two absolute bearings
    vertex -> a and vertex -> b, folded into [0, 180]. The result does
    not depend on which outer joint comes first.

    All methods are static - no state needed.
    """

    @staticmethod
    def angle_at(
        vertex: PoseLandmark,
        a: PoseLandmark,
        b: PoseLandmark,
    ) -> float:
        """
        Calculate the angle at `vertex` between rays vertex->a and vertex->b.

        Only x and y are used; z is ignored.

        Args:
            vertex: Joint where the angle is measured
            a: First outer joint
            b: Second outer joint

        Returns:
            Angle in degrees (0-180)

        Example:
            For knee angle: hip -> knee -> ankle
            angle = AngleCalculator.angle_at(knee, hip, ankle)
        """
        raw = np.degrees(
            np.arctan2(b.y - vertex.y, b.x - vertex.x)
            - np.arctan2(a.y - vertex.y, a.x - vertex.x)
        )

        normalized = abs(float(raw)) % 360.0
        if normalized > 180.0:
            return 360.0 - normalized
        return normalized

    @classmethod
    def angle_for(
        cls,
        landmarks: Sequence[PoseLandmark],
        index_a: int,
        vertex_index: int,
        index_b: int,
    ) -> float:
        """
        Calculate the angle at landmarks[vertex_index].

        Raises:
            InvalidJointIndex: if any index is outside the landmark sequence
        """
        count = len(landmarks)
        for index in (index_a, vertex_index, index_b):
            if not 0 <= index < count:
                raise InvalidJointIndex(index, count)

        return cls.angle_at(
            landmarks[vertex_index],
            landmarks[index_a],
            landmarks[index_b],
        )
