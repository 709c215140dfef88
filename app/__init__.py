"""
Sign Spell App
==============
Fingerspelling recognition with voice output.

Pipeline:
    📹 Camera → 🖐️ MediaPipe → 🧠 Classifier → 📝 History → 🔊 Audio

Usage:
    python -m app.main
    # or
    from app import SignSpellApp
    app = SignSpellApp()
    app.run()

The camera and main window are imported lazily so the aggregation core can be
used without OpenCV/MediaPipe on the path.
"""

from .aggregator import SymbolAggregator, HistorySnapshot
from .pipeline import SignSpellPipeline, PollTimer
from .config import AppConfig, get_default_config, load_config, save_config

__all__ = [
    "SymbolAggregator",
    "HistorySnapshot",
    "SignSpellPipeline",
    "PollTimer",
    "AppConfig",
    "get_default_config",
    "load_config",
    "save_config",
    "SignSpellApp",
    "run_app"
]


def __getattr__(name):
    if name in ("SignSpellApp", "run_app"):
        from . import main
        return getattr(main, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
