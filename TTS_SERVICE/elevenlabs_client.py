"""
ElevenLabs API Client
======================
Client for ElevenLabs Text-to-Speech API.

Installation:
    pip install requests

Get your API key at: https://elevenlabs.io/
"""

import os
import requests
from typing import Optional
from dataclasses import dataclass
from enum import Enum


# ============================================================================
# Voice Presets
# ============================================================================

class Voice(Enum):
    """Pre-defined voice options."""
    RACHEL = "21m00Tcm4TlvDq8ikWAM"      # Female, calm
    BELLA = "EXAVITQu4vr4xnSDxMaL"        # Female, soft
    ANTONI = "ErXwobaYiN019PkySvjV"       # Male, well-rounded
    JOSH = "TxGEqnHWrfWFTfGW9XjX"         # Male, deep
    ADAM = "pNInz6obpgDQGcFmaJgB"         # Male, deep

    # Defaults for en-US
    ENGLISH_FEMALE = "21m00Tcm4TlvDq8ikWAM"  # Rachel
    ENGLISH_MALE = "ErXwobaYiN019PkySvjV"    # Antoni


VOICES = {
    "rachel": {"id": Voice.RACHEL.value, "name": "Rachel", "gender": "female", "accent": "american"},
    "bella": {"id": Voice.BELLA.value, "name": "Bella", "gender": "female", "accent": "american"},
    "antoni": {"id": Voice.ANTONI.value, "name": "Antoni", "gender": "male", "accent": "american"},
    "josh": {"id": Voice.JOSH.value, "name": "Josh", "gender": "male", "accent": "american"},
    "adam": {"id": Voice.ADAM.value, "name": "Adam", "gender": "male", "accent": "american"},
    "english_female": {"id": Voice.ENGLISH_FEMALE.value, "name": "Rachel", "gender": "female", "accent": "american"},
    "english_male": {"id": Voice.ENGLISH_MALE.value, "name": "Antoni", "gender": "male", "accent": "american"},
}


def locale_to_language_code(locale: Optional[str]) -> Optional[str]:
    """'en-US' -> 'en' (ElevenLabs expects ISO 639-1)."""
    if not locale:
        return None
    return locale.replace("_", "-").split("-")[0].lower() or None


@dataclass
class ElevenLabsConfig:
    """Configuration for ElevenLabs API."""
    api_key: str
    base_url: str = "https://api.elevenlabs.io/v1"
    model_id: str = "eleven_flash_v2_5"   # Supports language_code
    output_format: str = "mp3_44100_128"  # High quality MP3


class ElevenLabsClient:
    """
    Client for ElevenLabs Text-to-Speech API.

    Usage:
        client = ElevenLabsClient(api_key="your-api-key")

        # Get audio bytes
        audio = client.synthesize("hello", language_code="en")

        # With specific voice
        audio = client.synthesize("hello", voice_id="21m00Tcm4TlvDq8ikWAM")
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_id: str = "eleven_flash_v2_5",
        output_format: str = "mp3_44100_128"
    ):
        """
        Initialize ElevenLabs client.

        Args:
            api_key: ElevenLabs API key (or set ELEVENLABS_API_KEY env var)
            model_id: Model to use:
                - eleven_flash_v2_5 (low latency, accepts language_code)
                - eleven_turbo_v2_5 (fast, accepts language_code)
                - eleven_multilingual_v2 (highest quality)
            output_format: Audio format:
                - mp3_44100_128 (high quality MP3)
                - mp3_44100_64 (standard MP3)
        """
        self.api_key = api_key or os.getenv("ELEVENLABS_API_KEY")
        if not self.api_key:
            raise ValueError(
                "ElevenLabs API key required. "
                "Set ELEVENLABS_API_KEY environment variable or pass api_key parameter."
            )

        self.config = ElevenLabsConfig(
            api_key=self.api_key,
            model_id=model_id,
            output_format=output_format
        )

        self.headers = {
            "xi-api-key": self.api_key,
            "Content-Type": "application/json"
        }

    def synthesize(
        self,
        text: str,
        voice_id: Optional[str] = None,
        language_code: Optional[str] = None,
        stability: float = 0.5,
        similarity_boost: float = 0.75
    ) -> bytes:
        """
        Synthesize text to speech.

        Args:
            text: Text to synthesize
            voice_id: ElevenLabs voice ID (defaults to Voice.ENGLISH_FEMALE)
            language_code: ISO 639-1 code enforced on the model ("en")
            stability: Voice stability (0.0-1.0). Lower = more expressive
            similarity_boost: Voice clarity (0.0-1.0). Higher = clearer

        Returns:
            Audio bytes (MP3 format by default)
        """
        if voice_id is None:
            voice_id = Voice.ENGLISH_FEMALE.value

        url = f"{self.config.base_url}/text-to-speech/{voice_id}"

        payload = {
            "text": text,
            "model_id": self.config.model_id,
            "voice_settings": {
                "stability": stability,
                "similarity_boost": similarity_boost
            }
        }
        if language_code:
            payload["language_code"] = language_code

        params = {"output_format": self.config.output_format}

        try:
            response = requests.post(
                url,
                headers=self.headers,
                json=payload,
                params=params,
                timeout=30
            )
            response.raise_for_status()
            return response.content

        except requests.exceptions.HTTPError as e:
            if response.status_code == 401:
                raise ValueError("Invalid ElevenLabs API key")
            elif response.status_code == 422:
                raise ValueError(f"Invalid request: {response.text}")
            else:
                raise ConnectionError(f"ElevenLabs API error: {e}")
        except requests.exceptions.RequestException as e:
            raise ConnectionError(f"ElevenLabs API error: {e}")
