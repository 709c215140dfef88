"""
Speech Tests
============
Speech emitter, TTS service and ElevenLabs client with mocked I/O.
"""

import threading
import time
import unittest
import sys
from pathlib import Path
from unittest import mock

import requests

# Add parent to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from TTS_SERVICE import (
    ElevenLabsClient,
    SpeechEmitter,
    TextToSpeech,
    VOICES,
    Voice,
    locale_to_language_code,
)


class FakeTTS:
    """Records synthesize calls and signals when one arrives."""

    def __init__(self, audio=b"", error=None):
        self.audio = audio
        self.error = error
        self.locale = None
        self.texts = []
        self.called = threading.Event()

    def synthesize(self, text):
        self.texts.append(text)
        self.called.set()
        if self.error:
            raise self.error
        return self.audio


class TestSpeechEmitter(unittest.TestCase):

    def test_rejects_blank(self):
        emitter = SpeechEmitter()
        self.assertFalse(emitter.speak(""))
        self.assertFalse(emitter.speak("   "))
        self.assertEqual(emitter.spoken, [])

    def test_log_only_without_tts(self):
        emitter = SpeechEmitter()
        self.assertTrue(emitter.speak("hello"))
        self.assertEqual(emitter.spoken, ["hello"])

    def test_dispatches_to_tts(self):
        tts = FakeTTS()
        emitter = SpeechEmitter(tts=tts, locale="en-US")
        self.assertEqual(tts.locale, "en-US")

        self.assertTrue(emitter.speak("hello"))
        self.assertTrue(tts.called.wait(5))
        self.assertEqual(tts.texts, ["hello"])

    def test_muted_skips_audio(self):
        tts = FakeTTS()
        emitter = SpeechEmitter(tts=tts, muted=True)
        self.assertTrue(emitter.speak("hello"))
        self.assertFalse(tts.called.wait(0.2))
        self.assertEqual(emitter.spoken, ["hello"])

    def test_toggle_mute(self):
        emitter = SpeechEmitter()
        self.assertTrue(emitter.toggle_mute())
        self.assertFalse(emitter.toggle_mute())

    def test_synthesis_error_is_contained(self):
        emitter = SpeechEmitter(tts=FakeTTS(error=ConnectionError("offline")))
        with mock.patch("TTS_SERVICE.speech_emitter.pygame") as fake_pygame:
            emitter._synthesize_and_play("hello")
            fake_pygame.mixer.init.assert_not_called()

    def test_plays_audio(self):
        emitter = SpeechEmitter(tts=FakeTTS(audio=b"ID3fake"))
        with mock.patch("TTS_SERVICE.speech_emitter.pygame") as fake_pygame:
            fake_pygame.error = type("PygameError", (Exception,), {})
            fake_pygame.mixer.music.get_busy.return_value = False

            emitter._synthesize_and_play("hello")

            fake_pygame.mixer.init.assert_called_once()
            fake_pygame.mixer.music.load.assert_called_once()
            fake_pygame.mixer.music.play.assert_called_once()

    def test_mixer_initialized_once_across_threads(self):
        emitter = SpeechEmitter(tts=FakeTTS())
        with mock.patch("TTS_SERVICE.speech_emitter.pygame") as fake_pygame:
            fake_pygame.error = type("PygameError", (Exception,), {})
            fake_pygame.mixer.init.side_effect = lambda: time.sleep(0.05)

            threads = [threading.Thread(target=emitter._ensure_mixer) for _ in range(4)]
            for t in threads:
                t.start()
            for t in threads:
                t.join(5)

            fake_pygame.mixer.init.assert_called_once()
        self.assertTrue(emitter._mixer_ready)


class TestTextToSpeech(unittest.TestCase):

    def test_passes_language_and_voice(self):
        client = mock.Mock()
        client.synthesize.return_value = b"audio"
        tts = TextToSpeech(voice="english_male", locale="en-US", client=client)

        self.assertEqual(tts.synthesize("hi"), b"audio")

        kwargs = client.synthesize.call_args.kwargs
        self.assertEqual(kwargs["language_code"], "en")
        self.assertEqual(kwargs["voice_id"], VOICES["english_male"]["id"])

    def test_raw_voice_id(self):
        tts = TextToSpeech(voice="customVoiceId", client=mock.Mock())
        self.assertEqual(tts._voice_id, "customVoiceId")

    def test_locale_to_language_code(self):
        self.assertEqual(locale_to_language_code("en-US"), "en")
        self.assertEqual(locale_to_language_code("pt_BR"), "pt")
        self.assertIsNone(locale_to_language_code(""))

    def test_only_synthesize_is_exposed(self):
        tts = TextToSpeech(client=mock.Mock())
        self.assertFalse(hasattr(tts, "synthesize_to_file"))
        self.assertFalse(hasattr(tts, "set_voice"))


class TestElevenLabsClient(unittest.TestCase):

    def test_requires_key(self):
        with mock.patch.dict("os.environ", {}, clear=True):
            with self.assertRaises(ValueError):
                ElevenLabsClient()

    @mock.patch("TTS_SERVICE.elevenlabs_client.requests.post")
    def test_synthesize_payload(self, post):
        post.return_value = mock.Mock(content=b"mp3", status_code=200)
        client = ElevenLabsClient(api_key="key")

        self.assertEqual(client.synthesize("hello", language_code="en"), b"mp3")

        kwargs = post.call_args.kwargs
        self.assertEqual(kwargs["json"]["text"], "hello")
        self.assertEqual(kwargs["json"]["language_code"], "en")
        self.assertEqual(kwargs["headers"]["xi-api-key"], "key")

    @mock.patch("TTS_SERVICE.elevenlabs_client.requests.post")
    def test_default_voice(self, post):
        post.return_value = mock.Mock(content=b"mp3", status_code=200)
        ElevenLabsClient(api_key="key").synthesize("hello")

        url = post.call_args.args[0]
        self.assertTrue(url.endswith(f"/text-to-speech/{Voice.ENGLISH_FEMALE.value}"))

    def test_voice_name_not_accepted(self):
        with self.assertRaises(TypeError):
            ElevenLabsClient(api_key="key").synthesize("hello", voice_name="english_male")

    @mock.patch("TTS_SERVICE.elevenlabs_client.requests.post")
    def test_unauthorized(self, post):
        response = mock.Mock(status_code=401)
        response.raise_for_status.side_effect = requests.exceptions.HTTPError("401")
        post.return_value = response

        with self.assertRaises(ValueError):
            ElevenLabsClient(api_key="bad").synthesize("hello")

    @mock.patch("TTS_SERVICE.elevenlabs_client.requests.post")
    def test_network_error(self, post):
        post.side_effect = requests.exceptions.ConnectionError("down")
        with self.assertRaises(ConnectionError):
            ElevenLabsClient(api_key="key").synthesize("hello")


if __name__ == "__main__":
    unittest.main()
