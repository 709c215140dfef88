"""
Presentation Tests
==================
The overlay renders a snapshot without touching aggregator state.
"""

import unittest
import sys
from pathlib import Path

import numpy as np

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.aggregator import SymbolAggregator


class TestDrawUI(unittest.TestCase):

    def setUp(self):
        try:
            from app.main import draw_ui
        except ImportError as e:
            self.skipTest(f"Import error: {e}")
        self.draw_ui = draw_ui

    def test_draws_on_copy(self):
        frame = np.zeros((480, 640, 3), dtype=np.uint8)
        aggregator = SymbolAggregator()
        aggregator.submit("a", 0.9)

        display = self.draw_ui(frame, aggregator.snapshot(), has_hand=True, pending=True, muted=True)

        self.assertEqual(display.shape, frame.shape)
        self.assertFalse(np.any(frame))
        self.assertTrue(np.any(display))
        self.assertEqual(aggregator.history, ("a",))

    def test_waiting_state(self):
        frame = np.zeros((240, 320, 3), dtype=np.uint8)
        display = self.draw_ui(frame, SymbolAggregator().snapshot())
        self.assertEqual(display.shape, frame.shape)


if __name__ == "__main__":
    unittest.main()
