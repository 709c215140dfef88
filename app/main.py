"""
Sign Spell - Main Application
==============================
Real-time fingerspelling to speech: camera, hand landmarks, remote
classifier, symbol history and voice output.

Usage:
    python -m app.main
    python -m app.main --mock --interval 0.5

Controls:
    R     - Reset/clear history
    M     - Toggle mute audio
    Q     - Quit
"""

import argparse
from typing import Optional

import cv2
import numpy as np

from CLASSIFIER_CLIENT import ClassifierClient, MockClassifierClient
from TTS_SERVICE import TextToSpeech, SpeechEmitter

from .aggregator import SymbolAggregator, HistorySnapshot
from .camera import CameraCapture, FrameData
from .config import AppConfig, get_default_config, load_config
from .pipeline import SignSpellPipeline


FONT = cv2.FONT_HERSHEY_SIMPLEX


def draw_ui(
    frame: np.ndarray,
    snapshot: HistorySnapshot,
    has_hand: bool = False,
    pending: bool = False,
    muted: bool = False
) -> np.ndarray:
    """Draw the prediction and history overlay. Read-only on state."""
    display = frame.copy()
    h, w = display.shape[:2]

    overlay = display.copy()

    # History box (top), prediction box (bottom)
    cv2.rectangle(overlay, (0, 0), (w, 70), (20, 20, 20), -1)
    cv2.rectangle(overlay, (0, h - 90), (w, h), (20, 20, 20), -1)

    cv2.addWeighted(overlay, 0.7, display, 0.3, 0, display)

    cv2.putText(display, f"History: {snapshot.history_text}", (10, 30),
                FONT, 0.7, (255, 255, 255), 2)

    status_color = (0, 255, 0) if has_hand else (100, 100, 100)
    status_text = "HAND DETECTED" if has_hand else "Show your hand"
    cv2.putText(display, status_text, (10, 58),
                FONT, 0.5, status_color, 1)

    if pending:
        cv2.putText(display, "...", (w - 60, 58),
                    FONT, 0.6, (0, 200, 255), 2)

    if muted:
        cv2.putText(display, "MUTED", (w - 90, 30),
                    FONT, 0.5, (0, 0, 255), 1)

    cv2.putText(display, f"Prediction: {snapshot.label_text}", (20, h - 55),
                FONT, 0.8, (255, 255, 255), 2)
    cv2.putText(display, f"Confidence: {snapshot.confidence_percent}%", (20, h - 20),
                FONT, 0.6, (200, 200, 200), 1)

    cv2.putText(display, "R=reset | M=mute | Q=quit", (w - 230, h - 20),
                FONT, 0.4, (100, 100, 100), 1)

    return display


class SignSpellApp:
    """
    Complete fingerspelling-to-speech application.

    Pipeline:
        📹 Camera → 🖐️ MediaPipe → 🧠 Classifier → 📝 History → 🔊 Audio

    Usage:
        app = SignSpellApp()
        app.run()
    """

    def __init__(self, config: Optional[AppConfig] = None):
        """
        Initialize application.

        Args:
            config: Application configuration
        """
        print("\n" + "=" * 60)
        print("🤟 SIGN SPELL")
        print("=" * 60 + "\n")

        self.config = config or get_default_config()
        cfg = self.config

        print("📷 Initializing camera...")
        self.camera = CameraCapture(
            camera_id=cfg.camera.camera_id,
            width=cfg.camera.width,
            height=cfg.camera.height,
            fps=cfg.camera.fps,
            mirror=cfg.camera.mirror,
            min_detection_confidence=cfg.camera.min_detection_confidence,
            min_tracking_confidence=cfg.camera.min_tracking_confidence
        )

        print("🔊 Initializing speech...")
        self.speech = self._init_speech()

        print("🧠 Initializing pipeline...")
        self.aggregator = SymbolAggregator(
            on_word=self.speech.speak,
            history_size=cfg.aggregator.history_size,
            confidence_threshold=cfg.aggregator.confidence_threshold
        )
        self.pipeline = SignSpellPipeline(
            client=self._init_client(),
            aggregator=self.aggregator,
            interval=cfg.classifier.poll_interval,
            confidence_threshold=cfg.aggregator.confidence_threshold
        )

        self.running = False

        print("\n✅ App initialized!")
        print(f"   Classifier: {'Mock' if cfg.classifier.use_mock else cfg.classifier.endpoint}")
        print(f"   TTS: {'Enabled' if self.speech.tts else 'Disabled (set ELEVENLABS_API_KEY)'}")
        print()

    def _init_client(self):
        """Build the classifier client."""
        cfg = self.config.classifier
        if cfg.use_mock:
            print("ℹ️  Using mock classifier")
            return MockClassifierClient()
        return ClassifierClient(endpoint=cfg.endpoint, timeout=cfg.timeout)

    def _init_speech(self) -> SpeechEmitter:
        """Build the speech emitter, with audio only when TTS is configured."""
        cfg = self.config.speech
        tts = None
        if self.config.tts_enabled:
            try:
                tts = TextToSpeech(voice=cfg.voice, locale=cfg.locale, model=cfg.model)
                print("✅ TTS Service initialized")
            except ValueError as e:
                print(f"⚠️  TTS error: {e}")
        return SpeechEmitter(tts=tts, locale=cfg.locale)

    def process_frame(self, frame_data: FrameData):
        """Tick the pipeline and apply any finished classification."""
        self.pipeline.tick(frame_data.hand)
        self.pipeline.drain()

    def handle_key(self, key: int) -> bool:
        """
        Handle keyboard input.

        Returns:
            False if should quit, True otherwise
        """
        if key == ord('q') or key == 27:  # Q or ESC
            return False

        elif key == ord('r'):  # R - reset
            print("🔄 Resetting history...")
            self.pipeline.reset()

        elif key == ord('m'):  # M - toggle mute
            muted = self.speech.toggle_mute()
            print(f"🔊 Audio: {'Muted' if muted else 'Enabled'}")

        return True

    def run(self):
        """Run the main application loop."""
        print("\n" + "-" * 40)
        print("CONTROLS:")
        print("  R     - Reset history")
        print("  M     - Toggle mute")
        print("  Q     - Quit")
        print("-" * 40 + "\n")

        if not self.camera.start():
            print("❌ Failed to start camera")
            self.pipeline.shutdown()
            return

        self.running = True

        try:
            while self.running:
                frame_data = self.camera.read_frame()

                if frame_data is None:
                    continue

                self.process_frame(frame_data)

                display = self.camera.draw_landmarks(frame_data.frame, frame_data.hand)
                display = draw_ui(
                    display,
                    self.pipeline.snapshot(),
                    has_hand=frame_data.has_hand,
                    pending=self.pipeline.pending,
                    muted=self.speech.muted
                )

                cv2.imshow(self.config.window_name, display)

                key = cv2.waitKey(1) & 0xFF
                if not self.handle_key(key):
                    break

        except KeyboardInterrupt:
            print("\n⚡ Interrupted by user")

        finally:
            self.running = False
            self.pipeline.shutdown()
            self.camera.stop()
            self.speech.close()
            cv2.destroyAllWindows()

            print("\n👋 Application closed")
            print(f"   Words spoken: {len(self.speech.spoken)}")
            print(f"   Skipped ticks: {self.pipeline.skipped_ticks}")


def build_config(args: argparse.Namespace) -> AppConfig:
    """Merge CLI flags over the (optional) YAML config."""
    config = load_config(args.config) if args.config else get_default_config()

    if args.camera is not None:
        config.camera.camera_id = args.camera
    if args.endpoint:
        config.classifier.endpoint = args.endpoint
    if args.interval is not None:
        config.classifier.poll_interval = args.interval
    if args.mock:
        config.classifier.use_mock = True
    if args.locale:
        config.speech.locale = args.locale
    if args.voice:
        config.speech.voice = args.voice
    if args.no_tts:
        config.speech.enable_tts = False

    return config


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sign Spell - fingerspelling to speech")
    parser.add_argument("--config", type=str, help="YAML config path")
    parser.add_argument("--camera", "-c", type=int, help="Camera ID")
    parser.add_argument("--endpoint", "-e", type=str, help="Classifier predict URL")
    parser.add_argument("--interval", "-i", type=float, help="Seconds between classifications")
    parser.add_argument("--mock", action="store_true", help="Use a random local classifier")
    parser.add_argument("--locale", "-l", type=str, help="Speech locale, e.g. en-US")
    parser.add_argument("--voice", "-v", type=str, help="TTS voice name or ID")
    parser.add_argument("--no-tts", action="store_true", help="Log words without audio")
    return parser.parse_args(argv)


def run_app(argv=None):
    """Entry point for running the app."""
    args = parse_args(argv)
    app = SignSpellApp(config=build_config(args))
    app.run()


if __name__ == "__main__":
    run_app()
