"""
TTS Service Module
===================
Text-to-Speech using ElevenLabs, plus the fire-and-forget speech emitter.

Example:
    from TTS_SERVICE import TextToSpeech, SpeechEmitter

    emitter = SpeechEmitter(tts=TextToSpeech(), locale="en-US")
    emitter.speak("hello")
"""

from .elevenlabs_client import ElevenLabsClient, Voice, VOICES, locale_to_language_code
from .tts import TextToSpeech
from .speech_emitter import SpeechEmitter

__all__ = [
    "TextToSpeech",
    "SpeechEmitter",
    "ElevenLabsClient",
    "Voice",
    "VOICES",
    "locale_to_language_code"
]
