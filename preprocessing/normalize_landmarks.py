"""
Landmark Normalization
======================
Converts one hand's pixel-space landmarks into a resolution-independent
feature vector.

Layout (point-major):
    [x1/w, y1/h, x2/w, y2/h, ..., x21/w, y21/h]  -> 42 values
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np


NUM_HAND_POINTS = 21
FEATURE_DIM = NUM_HAND_POINTS * 2  # 42


@dataclass(frozen=True)
class HandLandmarks:
    """One detected hand as reported by the pose estimator."""
    points: Tuple[Tuple[float, float], ...]  # (x, y) in pixels
    width: int                               # Source frame width
    height: int                              # Source frame height


def is_valid_feature_vector(features) -> bool:
    """True only for a flat vector of exactly FEATURE_DIM values."""
    if features is None:
        return False
    arr = np.asarray(features)
    return arr.ndim == 1 and arr.shape[0] == FEATURE_DIM


def normalize_landmarks(
    points: Sequence[Sequence[float]],
    width: float,
    height: float
) -> Optional[np.ndarray]:
    """
    Flatten pixel landmarks into a normalized feature vector.

    Args:
        points: Sequence of (x, y) pixel coordinates
        width: Frame width in pixels
        height: Frame height in pixels

    Returns:
        (42,) float32 array, or None when the tick must be skipped
        (no points, bad frame size, or wrong number of values)
    """
    if points is None or len(points) == 0:
        return None
    if width <= 0 or height <= 0:
        return None

    features = []
    for point in points:
        features.append(point[0] / width)
        features.append(point[1] / height)

    if len(features) != FEATURE_DIM:
        return None

    return np.asarray(features, dtype=np.float32)


def hand_to_features(hand: Optional[HandLandmarks]) -> Optional[np.ndarray]:
    """Normalize a HandLandmarks, passing through None for 'no hand'."""
    if hand is None:
        return None
    return normalize_landmarks(hand.points, hand.width, hand.height)
