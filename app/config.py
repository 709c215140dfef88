"""
App Configuration
=================
Settings for capture, classification, aggregation and speech.
"""

import os
from dataclasses import dataclass, asdict
from pathlib import Path


@dataclass
class CameraConfig:
    """Webcam and hand tracking configuration."""
    camera_id: int = 0
    width: int = 640
    height: int = 480
    fps: int = 30
    mirror: bool = True
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5


@dataclass
class ClassifierConfig:
    """Remote classifier configuration."""
    endpoint: str = "http://127.0.0.1:5000/predict"
    poll_interval: float = 1.0   # Seconds between classification ticks
    timeout: float = 5.0         # Per-request timeout
    use_mock: bool = False


@dataclass
class AggregatorConfig:
    """Symbol history configuration."""
    history_size: int = 10
    confidence_threshold: float = 0.70


@dataclass
class SpeechConfig:
    """Speech output configuration."""
    locale: str = "en-US"
    voice: str = "english_female"
    model: str = "eleven_flash_v2_5"
    enable_tts: bool = True      # Still requires ELEVENLABS_API_KEY


@dataclass
class AppConfig:
    """Complete configuration."""
    camera: CameraConfig = None
    classifier: ClassifierConfig = None
    aggregator: AggregatorConfig = None
    speech: SpeechConfig = None

    window_name: str = "Sign Spell"

    def __post_init__(self):
        if self.camera is None:
            self.camera = CameraConfig()
        if self.classifier is None:
            self.classifier = ClassifierConfig()
        if self.aggregator is None:
            self.aggregator = AggregatorConfig()
        if self.speech is None:
            self.speech = SpeechConfig()

    @property
    def tts_enabled(self) -> bool:
        return self.speech.enable_tts and os.getenv("ELEVENLABS_API_KEY") is not None


def get_default_config() -> AppConfig:
    """Get default configuration."""
    return AppConfig()


def load_config(path: str) -> AppConfig:
    """Load configuration from YAML file."""
    import yaml

    with open(path, 'r') as f:
        cfg_dict = yaml.safe_load(f) or {}

    config = AppConfig()

    if 'camera' in cfg_dict:
        config.camera = CameraConfig(**cfg_dict['camera'])
    if 'classifier' in cfg_dict:
        config.classifier = ClassifierConfig(**cfg_dict['classifier'])
    if 'aggregator' in cfg_dict:
        config.aggregator = AggregatorConfig(**cfg_dict['aggregator'])
    if 'speech' in cfg_dict:
        config.speech = SpeechConfig(**cfg_dict['speech'])
    if 'window_name' in cfg_dict:
        config.window_name = cfg_dict['window_name']

    return config


def save_config(config: AppConfig, path: str):
    """Save configuration to YAML file."""
    import yaml

    cfg_dict = {
        'window_name': config.window_name,
        'camera': asdict(config.camera),
        'classifier': asdict(config.classifier),
        'aggregator': asdict(config.aggregator),
        'speech': asdict(config.speech)
    }

    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        yaml.dump(cfg_dict, f, default_flow_style=False)
