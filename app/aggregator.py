"""
Symbol Aggregator
=================
Turns gated classifier answers into a committed symbol history.

Rules per accepted event:
    "del"    -> undo the last symbol (no-op when empty)
    "space"  -> speak the trailing word, then clear the history
    literal  -> append unless it repeats the last symbol
    (history is a sliding window of the most recent N symbols)
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple


DELETE_LABEL = "del"
SPACE_LABEL = "space"
WORD_BOUNDARY = " "

DEFAULT_HISTORY_SIZE = 10
DEFAULT_CONFIDENCE_THRESHOLD = 0.70


@dataclass(frozen=True)
class HistorySnapshot:
    """Read-only view of the aggregator for rendering."""
    label: str                  # Last accepted label ("" before the first)
    confidence: float           # Confidence of the last accepted label
    history: Tuple[str, ...]    # Current unspoken symbols

    @property
    def label_text(self) -> str:
        return self.label or "Waiting..."

    @property
    def confidence_percent(self) -> str:
        return f"{self.confidence * 100:.2f}"

    @property
    def history_text(self) -> str:
        return " ".join(self.history) or "None"


def trailing_word(history) -> str:
    """Symbols after the last literal space, joined into a word."""
    word: List[str] = []
    for symbol in reversed(history):
        if symbol == WORD_BOUNDARY:
            break
        word.append(symbol)
    return "".join(reversed(word))


class SymbolAggregator:
    """
    Single-writer state machine over the symbol history.

    Usage:
        aggregator = SymbolAggregator(on_word=emitter.speak)

        aggregator.submit("h", 0.91)
        aggregator.submit("i", 0.88)
        aggregator.submit("space", 0.95)   # speaks "hi", history -> []

        snap = aggregator.snapshot()
        print(snap.history_text)
    """

    def __init__(
        self,
        on_word: Optional[Callable[[str], object]] = None,
        history_size: int = DEFAULT_HISTORY_SIZE,
        confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD
    ):
        """
        Initialize aggregator.

        Args:
            on_word: Called with each committed word (speech emitter)
            history_size: Maximum number of buffered symbols
            confidence_threshold: Minimum confidence to accept an event
        """
        if history_size < 1:
            raise ValueError("history_size must be at least 1")

        self.on_word = on_word
        self.history_size = history_size
        self.confidence_threshold = confidence_threshold

        self._history: List[str] = []
        self._last_label = ""
        self._last_confidence = 0.0

    @property
    def history(self) -> Tuple[str, ...]:
        return tuple(self._history)

    def submit(self, label: str, confidence: float) -> bool:
        """
        Feed one classifier answer through the confidence gate.

        Returns:
            True if the event was accepted and applied
        """
        if confidence < self.confidence_threshold:
            return False

        self._last_label = label
        self._last_confidence = confidence
        self.apply(label)
        return True

    def apply(self, label: str):
        """Run the transition rules for an already-accepted label."""
        if label == DELETE_LABEL:
            if self._history:
                self._history.pop()
        elif label == SPACE_LABEL:
            self._commit_word()
        elif self._history and self._history[-1] == label:
            # Same pose held across ticks
            return
        else:
            self._history.append(label)
            if len(self._history) > self.history_size:
                self._history = self._history[-self.history_size:]

    def _commit_word(self):
        word = trailing_word(self._history)
        self._history = []

        if not word.strip() or self.on_word is None:
            return

        try:
            self.on_word(word)
        except Exception as e:
            print(f"⚠️  Speech error: {e}")

    def reset(self):
        """Drop buffered symbols and the last label without speaking."""
        self._history = []
        self._last_label = ""
        self._last_confidence = 0.0

    def snapshot(self) -> HistorySnapshot:
        return HistorySnapshot(
            label=self._last_label,
            confidence=self._last_confidence,
            history=tuple(self._history)
        )
