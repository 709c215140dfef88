"""
Preprocessing Module
====================
Turns raw hand landmarks into classifier-ready feature vectors.

Example:
    from preprocessing import normalize_landmarks

    features = normalize_landmarks(points, width=640, height=480)
    if features is not None:
        client.classify(features)
"""

from .normalize_landmarks import (
    HandLandmarks,
    NUM_HAND_POINTS,
    FEATURE_DIM,
    normalize_landmarks,
    hand_to_features,
    is_valid_feature_vector,
)

__all__ = [
    "HandLandmarks",
    "NUM_HAND_POINTS",
    "FEATURE_DIM",
    "normalize_landmarks",
    "hand_to_features",
    "is_valid_feature_vector",
]
