"""
Normalizer Tests
================
Unit tests for landmark normalization.
"""

import unittest
import sys
from pathlib import Path

import numpy as np

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from preprocessing import (
    HandLandmarks,
    FEATURE_DIM,
    normalize_landmarks,
    hand_to_features,
    is_valid_feature_vector,
)


def make_points(n=21):
    return [(10.0 * i, 5.0 * i) for i in range(n)]


class TestNormalize(unittest.TestCase):

    def test_point_major_layout(self):
        features = normalize_landmarks(make_points(), 200, 100)
        self.assertEqual(features.shape, (FEATURE_DIM,))
        self.assertEqual(features.dtype, np.float32)
        # Point 3 -> (30, 15) -> (0.15, 0.15)
        self.assertAlmostEqual(float(features[6]), 0.15, places=6)
        self.assertAlmostEqual(float(features[7]), 0.15, places=6)

    def test_values_in_unit_range(self):
        points = [(640.0 * i / 20, 480.0 * i / 20) for i in range(21)]
        features = normalize_landmarks(points, 640, 480)
        self.assertTrue(np.all(features >= 0.0))
        self.assertTrue(np.all(features <= 1.0))

    def test_empty_hand_skipped(self):
        self.assertIsNone(normalize_landmarks([], 640, 480))
        self.assertIsNone(normalize_landmarks(None, 640, 480))

    def test_wrong_point_count_dropped(self):
        self.assertIsNone(normalize_landmarks(make_points(20), 640, 480))
        self.assertIsNone(normalize_landmarks(make_points(22), 640, 480))

    def test_bad_frame_size_dropped(self):
        self.assertIsNone(normalize_landmarks(make_points(), 0, 480))

    def test_hand_to_features(self):
        hand = HandLandmarks(points=tuple(make_points()), width=640, height=480)
        self.assertEqual(hand_to_features(hand).shape, (FEATURE_DIM,))
        self.assertIsNone(hand_to_features(None))


class TestValidity(unittest.TestCase):

    def test_valid(self):
        self.assertTrue(is_valid_feature_vector([0.0] * 42))
        self.assertTrue(is_valid_feature_vector(np.zeros(42)))

    def test_invalid(self):
        self.assertFalse(is_valid_feature_vector(None))
        self.assertFalse(is_valid_feature_vector([0.0] * 41))
        self.assertFalse(is_valid_feature_vector([0.0] * 63))
        self.assertFalse(is_valid_feature_vector(np.zeros((21, 2))))


if __name__ == "__main__":
    unittest.main()
