"""
Text-to-Speech Service
======================
High-level TTS service using ElevenLabs.

Examples:
    from TTS_SERVICE import TextToSpeech

    tts = TextToSpeech(voice="english_female", locale="en-US")
    audio = tts.synthesize("hello")
"""

from typing import Optional

from .elevenlabs_client import ElevenLabsClient, VOICES, locale_to_language_code


class TextToSpeech:
    """
    Text-to-Speech service using ElevenLabs.

    Usage:
        tts = TextToSpeech()

        # Get audio bytes
        audio = tts.synthesize("hello")

        # Different voices
        tts = TextToSpeech(voice="english_male")
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        voice: str = "english_female",
        locale: str = "en-US",
        model: str = "eleven_flash_v2_5",
        stability: float = 0.5,
        similarity_boost: float = 0.75,
        client: Optional[ElevenLabsClient] = None
    ):
        """
        Initialize TTS service.

        Args:
            api_key: ElevenLabs API key (or set ELEVENLABS_API_KEY env var)
            voice: Voice name (see VOICES dict) or voice ID
            locale: Locale tag the speech is pinned to (e.g. "en-US")
            model: ElevenLabs model id
            stability: Voice stability (0.0-1.0)
            similarity_boost: Voice clarity (0.0-1.0)
            client: Pre-built client (tests)
        """
        self.client = client or ElevenLabsClient(
            api_key=api_key,
            model_id=model
        )

        self.voice = voice
        self.locale = locale
        self.stability = stability
        self.similarity_boost = similarity_boost

        self._voice_id = self._resolve_voice_id(voice)

    def _resolve_voice_id(self, voice: str) -> str:
        """Resolve voice name to ID."""
        if voice.lower() in VOICES:
            return VOICES[voice.lower()]["id"]
        # Assume it's a voice ID
        return voice

    def synthesize(self, text: str) -> bytes:
        """
        Synthesize text to audio bytes.

        Args:
            text: Text to synthesize

        Returns:
            Audio bytes (MP3 format)
        """
        return self.client.synthesize(
            text=text,
            voice_id=self._voice_id,
            language_code=locale_to_language_code(self.locale),
            stability=self.stability,
            similarity_boost=self.similarity_boost
        )
