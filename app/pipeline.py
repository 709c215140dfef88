"""
Sign to Speech Pipeline
========================
Poll-classify-aggregate cycle from hand landmarks to spoken words.

Pipeline:
    HandLandmarks → Normalizer (42) → Classifier → Gate → Aggregator → Speech

Only the classifier round-trip runs off the main thread. Its answer comes
back through a queue and is applied by drain(), so the aggregator has a
single writer.
"""

import queue
import threading
import time
from typing import Callable, Optional, Tuple

from preprocessing import HandLandmarks, hand_to_features
from CLASSIFIER_CLIENT import ClassificationResult, passes_confidence_gate

from .aggregator import SymbolAggregator, HistorySnapshot


class PollTimer:
    """Periodic tick source driven by the caller's clock."""

    def __init__(self, interval: float, clock: Callable[[], float] = time.monotonic):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = interval
        self.clock = clock
        self.cancelled = False
        self._next_due = clock()

    def due(self) -> bool:
        """True once per elapsed interval."""
        if self.cancelled:
            return False
        now = self.clock()
        if now < self._next_due:
            return False
        self._next_due = now + self.interval
        return True

    def cancel(self):
        self.cancelled = True


class SignSpellPipeline:
    """
    Drives the classifier on a fixed cadence and feeds the aggregator.

    Usage:
        pipeline = SignSpellPipeline(client, aggregator, interval=1.0)

        while running:
            frame_data = camera.read_frame()
            pipeline.tick(frame_data.hand)   # maybe dispatch a request
            pipeline.drain()                  # apply finished answers
            draw(pipeline.snapshot())

        pipeline.shutdown()
    """

    def __init__(
        self,
        client,
        aggregator: SymbolAggregator,
        interval: float = 1.0,
        confidence_threshold: float = 0.70,
        clock: Callable[[], float] = time.monotonic
    ):
        """
        Initialize pipeline.

        Args:
            client: Object with try_classify(features) -> Optional[ClassificationResult]
            aggregator: Owner of the symbol history
            interval: Seconds between ticks
            confidence_threshold: Gate applied before the aggregator
            clock: Time source (tests)
        """
        self.client = client
        self.aggregator = aggregator
        self.confidence_threshold = confidence_threshold
        self.timer = PollTimer(interval, clock=clock)

        self.results_queue: "queue.Queue[Tuple[int, Optional[ClassificationResult]]]" = queue.Queue()
        self.pending = False
        self.closed = False
        self.skipped_ticks = 0

        self._generation = 0
        self._worker: Optional[threading.Thread] = None
        self._in_flight = False
        self._close_lock = threading.Lock()

    def tick(self, hand: Optional[HandLandmarks]) -> bool:
        """
        Run one timer check with the latest hand detection.

        Returns:
            True if a classification request was dispatched
        """
        if self.closed or not self.timer.due():
            return False

        if self.pending:
            # Previous round-trip still running; drop this capture
            self.skipped_ticks += 1
            return False

        features = hand_to_features(hand)
        if features is None:
            return False

        self.pending = True
        generation = self._generation

        def worker():
            result = None
            try:
                result = self.client.try_classify(features)
            except Exception as e:
                print(f"❌ Backend error: {e}")
            finally:
                self.results_queue.put((generation, result))
                with self._close_lock:
                    self._in_flight = False
                    close_now = self.closed
                if close_now:
                    self.client.close()

        self._in_flight = True
        self._worker = threading.Thread(target=worker, daemon=True)
        self._worker.start()
        return True

    def drain(self) -> int:
        """
        Apply finished classifications on the calling thread.

        Returns:
            Number of results accepted by the aggregator
        """
        accepted = 0
        while True:
            try:
                generation, result = self.results_queue.get_nowait()
            except queue.Empty:
                break

            if self.closed or generation != self._generation:
                continue

            self.pending = False

            if not passes_confidence_gate(result, self.confidence_threshold):
                continue

            if self.aggregator.submit(result.label, result.confidence):
                accepted += 1

        return accepted

    def wait(self, timeout: Optional[float] = None) -> int:
        """Block until the in-flight request finishes, then drain()."""
        if self._worker is not None:
            self._worker.join(timeout)
        return self.drain()

    def snapshot(self) -> HistorySnapshot:
        return self.aggregator.snapshot()

    def reset(self):
        """Clear the history (operator control)."""
        self.aggregator.reset()

    def shutdown(self):
        """Stop ticking and discard anything still in flight."""
        self.timer.cancel()
        self._generation += 1
        self.pending = False

        # An in-flight worker closes the client when its request returns
        with self._close_lock:
            self.closed = True
            close_now = not self._in_flight
        if close_now:
            self.client.close()
