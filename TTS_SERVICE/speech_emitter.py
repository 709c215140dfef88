"""
Speech Emitter
==============
Speaks committed words without blocking the caller.

Each call synthesizes on its own daemon thread and plays the MP3 with
pygame. Calls are not serialized; overlapping words may cut each other off.
"""

import os
import tempfile
import threading
import time
from typing import List, Optional

import pygame

from .tts import TextToSpeech


class SpeechEmitter:
    """
    Fire-and-forget speech output.

    Usage:
        emitter = SpeechEmitter(tts=TextToSpeech())
        emitter.speak("hello")   # returns immediately

        # Log-only (no API key)
        emitter = SpeechEmitter()
    """

    def __init__(
        self,
        tts: Optional[TextToSpeech] = None,
        locale: str = "en-US",
        muted: bool = False
    ):
        """
        Initialize speech emitter.

        Args:
            tts: Synthesis service, or None to only log words
            locale: Locale tag for synthesis
            muted: Start muted
        """
        self.tts = tts
        self.locale = locale
        self.muted = muted

        if self.tts is not None:
            self.tts.locale = locale

        self.spoken: List[str] = []
        self._mixer_ready = False
        self._mixer_lock = threading.Lock()

    def _ensure_mixer(self) -> bool:
        # Speech threads may start together; init the mixer once
        with self._mixer_lock:
            if self._mixer_ready:
                return True
            try:
                pygame.mixer.init()
                self._mixer_ready = True
            except pygame.error as e:
                print(f"⚠️  Audio output unavailable: {e}")
            return self._mixer_ready

    def speak(self, word: str) -> bool:
        """
        Hand a word to the synthesizer.

        Returns:
            False for empty/whitespace text, True once dispatched
        """
        if not word or not word.strip():
            return False

        print(f"🔊 Speaking: {word}")
        self.spoken.append(word)

        if self.tts is None or self.muted:
            return True

        thread = threading.Thread(target=self._synthesize_and_play, args=(word,), daemon=True)
        thread.start()
        return True

    def _synthesize_and_play(self, word: str):
        try:
            audio_data = self.tts.synthesize(word)
        except (ValueError, ConnectionError) as e:
            print(f"TTS error: {e}")
            return

        if not audio_data or not self._ensure_mixer():
            return

        temp_path = None
        try:
            with tempfile.NamedTemporaryFile(suffix=".mp3", delete=False) as f:
                f.write(audio_data)
                temp_path = f.name

            pygame.mixer.music.load(temp_path)
            pygame.mixer.music.play()

            while pygame.mixer.music.get_busy():
                time.sleep(0.1)
        except pygame.error as e:
            print(f"Audio error: {e}")
        finally:
            if temp_path and os.path.exists(temp_path):
                os.unlink(temp_path)

    def toggle_mute(self) -> bool:
        self.muted = not self.muted
        return self.muted

    def close(self):
        """Stop playback and release the mixer."""
        if self._mixer_ready:
            pygame.mixer.quit()
            self._mixer_ready = False
