"""
Camera Capture Module
=====================
Handles webcam capture and MediaPipe hand landmark extraction.
"""

import cv2
import numpy as np
import mediapipe as mp
from mediapipe.tasks import python
from mediapipe.tasks.python import vision
from pathlib import Path
from typing import Optional
from dataclasses import dataclass
import urllib.request
import time

from preprocessing import HandLandmarks, NUM_HAND_POINTS


MODELS_DIR = Path(__file__).parent.parent / "models" / "mediapipe"
HAND_MODEL_URL = "https://storage.googleapis.com/mediapipe-models/hand_landmarker/hand_landmarker/float16/latest/hand_landmarker.task"
HAND_MODEL_PATH = MODELS_DIR / "hand_landmarker.task"

# Bone pairs for drawing (MediaPipe hand topology)
HAND_CONNECTIONS = [
    (0, 1), (1, 2), (2, 3), (3, 4),
    (0, 5), (5, 6), (6, 7), (7, 8),
    (5, 9), (9, 10), (10, 11), (11, 12),
    (9, 13), (13, 14), (14, 15), (15, 16),
    (13, 17), (0, 17), (17, 18), (18, 19), (19, 20)
]


def download_model(url: str = HAND_MODEL_URL, path: Path = HAND_MODEL_PATH) -> Path:
    """Download the hand landmarker model if not exists."""
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        print(f"Downloading {path.name}...")
        urllib.request.urlretrieve(url, str(path))
        print(f"Downloaded: {path}")
    return path


@dataclass
class FrameData:
    """Data extracted from a single frame."""
    frame: np.ndarray               # Original BGR frame
    hand: Optional[HandLandmarks]   # First detected hand, pixel space
    timestamp: float                # Frame timestamp

    @property
    def has_hand(self) -> bool:
        return self.hand is not None


def landmarks_to_hand(landmarks, width: int, height: int) -> Optional[HandLandmarks]:
    """Scale MediaPipe's normalized landmarks to pixel coordinates."""
    if not landmarks:
        return None
    points = tuple((lm.x * width, lm.y * height) for lm in landmarks[:NUM_HAND_POINTS])
    return HandLandmarks(points=points, width=width, height=height)


class CameraCapture:
    """
    Webcam capture with MediaPipe hand landmark extraction.

    Usage:
        camera = CameraCapture()
        camera.start()

        frame_data = camera.read_frame()
        # frame_data.hand holds 21 pixel-space points or None

        camera.stop()
    """

    def __init__(
        self,
        camera_id: int = 0,
        width: int = 640,
        height: int = 480,
        fps: int = 30,
        mirror: bool = True,
        min_detection_confidence: float = 0.5,
        min_tracking_confidence: float = 0.5
    ):
        """
        Initialize camera capture.

        Args:
            camera_id: Camera device ID (0 for default webcam)
            width: Frame width
            height: Frame height
            fps: Target FPS
            mirror: Flip horizontally for a mirror view
            min_detection_confidence: Hand detection threshold
            min_tracking_confidence: Hand tracking threshold
        """
        self.camera_id = camera_id
        self.width = width
        self.height = height
        self.fps = fps
        self.mirror = mirror

        self.cap = None
        self.running = False
        self._start_time = 0.0
        self._last_timestamp_ms = -1

        self._setup_mediapipe(min_detection_confidence, min_tracking_confidence)

    def _setup_mediapipe(self, min_detection_confidence: float, min_tracking_confidence: float):
        """Initialize the MediaPipe hand landmarker (one hand)."""
        model_path = download_model()

        options = vision.HandLandmarkerOptions(
            base_options=python.BaseOptions(model_asset_path=str(model_path)),
            running_mode=vision.RunningMode.VIDEO,
            num_hands=1,
            min_hand_detection_confidence=min_detection_confidence,
            min_tracking_confidence=min_tracking_confidence
        )
        self.detector = vision.HandLandmarker.create_from_options(options)

    def start(self) -> bool:
        """Start camera capture."""
        self.cap = cv2.VideoCapture(self.camera_id)

        if not self.cap.isOpened():
            print(f"❌ Error: Cannot open camera {self.camera_id}")
            return False

        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
        self.cap.set(cv2.CAP_PROP_FPS, self.fps)

        self.running = True
        self._start_time = time.time()
        self._last_timestamp_ms = -1

        print(f"✅ Camera started: {self.width}x{self.height} @ {self.fps}fps")
        return True

    def stop(self):
        """Stop camera capture."""
        self.running = False
        if self.cap:
            self.cap.release()
        self.detector.close()
        print("📷 Camera stopped")

    def _extract_hand(self, frame: np.ndarray) -> Optional[HandLandmarks]:
        """Run the landmarker on one BGR frame."""
        h, w = frame.shape[:2]

        frame_rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=frame_rgb)

        # VIDEO mode requires strictly increasing timestamps
        timestamp_ms = int((time.time() - self._start_time) * 1000)
        if timestamp_ms <= self._last_timestamp_ms:
            timestamp_ms = self._last_timestamp_ms + 1
        self._last_timestamp_ms = timestamp_ms

        result = self.detector.detect_for_video(mp_image, timestamp_ms)

        if not result.hand_landmarks:
            return None
        return landmarks_to_hand(result.hand_landmarks[0], w, h)

    def read_frame(self) -> Optional[FrameData]:
        """Read and process a single frame."""
        if not self.cap or not self.running:
            return None

        ret, frame = self.cap.read()
        if not ret:
            return None

        if self.mirror:
            frame = cv2.flip(frame, 1)

        return FrameData(
            frame=frame,
            hand=self._extract_hand(frame),
            timestamp=time.time()
        )

    def draw_landmarks(self, frame: np.ndarray, hand: Optional[HandLandmarks]) -> np.ndarray:
        """Draw the hand skeleton on a copy of the frame."""
        frame_copy = frame.copy()
        if hand is None:
            return frame_copy

        points = [(int(x), int(y)) for x, y in hand.points]

        for a, b in HAND_CONNECTIONS:
            if a < len(points) and b < len(points):
                cv2.line(frame_copy, points[a], points[b], (0, 200, 0), 2)

        for point in points:
            cv2.circle(frame_copy, point, 3, (0, 255, 0), -1)

        return frame_copy
