"""
Landmark Classifier Client
==========================
HTTP client for the fingerspelling classifier service.

Wire format:
    POST /predict  {"landmarks": [42 floats]}
    200            {"prediction": "a", "confidence": 0.93}

Installation:
    pip install requests
"""

import random
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np
import requests

from preprocessing import is_valid_feature_vector


DEFAULT_ENDPOINT = "http://127.0.0.1:5000/predict"
DEFAULT_CONFIDENCE_THRESHOLD = 0.70

# Labels the mock client draws from
MOCK_VOCABULARY = list("abcdefghijklmnopqrstuvwxyz") + ["space", "del"]


class ClassifierError(Exception):
    """Transport or decoding failure for a single classification request."""


@dataclass(frozen=True)
class ClassificationResult:
    """One answer from the classifier."""
    label: str          # Symbol token: letter, "space", "del", ...
    confidence: float   # In [0, 1]


def passes_confidence_gate(
    result: Optional[ClassificationResult],
    threshold: float = DEFAULT_CONFIDENCE_THRESHOLD
) -> bool:
    """Forward only labelled results at or above the threshold."""
    if result is None or not result.label:
        return False
    return result.confidence >= threshold


def _decode_result(data) -> ClassificationResult:
    """Validate a decoded JSON body and build a result."""
    if not isinstance(data, dict):
        raise ClassifierError(f"Unexpected response body: {data!r}")

    if "prediction" not in data or "confidence" not in data:
        raise ClassifierError(f"Missing prediction/confidence in response: {data!r}")

    label = data["prediction"]
    confidence = data["confidence"]

    if label is None:
        label = ""
    if not isinstance(label, str):
        label = str(label)

    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
        raise ClassifierError(f"Non-numeric confidence: {confidence!r}")

    # Also rejects NaN
    if not 0.0 <= confidence <= 1.0:
        raise ClassifierError(f"Confidence out of range: {confidence!r}")

    return ClassificationResult(label=label, confidence=float(confidence))


class ClassifierClient:
    """
    Client for the remote landmark classifier.

    Usage:
        client = ClassifierClient()

        # Raises ClassifierError on failure
        result = client.classify(features)

        # Logs and returns None on failure
        result = client.try_classify(features)
    """

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float = 5.0,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize classifier client.

        Args:
            endpoint: Full URL of the predict route
            timeout: Per-request timeout in seconds
            session: Optional requests session (connection reuse)
        """
        self.endpoint = endpoint
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {"Content-Type": "application/json"}

    def classify(self, features: Sequence[float]) -> Optional[ClassificationResult]:
        """
        Send one feature vector and decode the answer.

        Args:
            features: (42,) normalized landmarks

        Returns:
            ClassificationResult, or None if the vector was rejected
            before transmission

        Raises:
            ClassifierError: network, HTTP or decoding failure
        """
        if not is_valid_feature_vector(features):
            return None

        payload = {"landmarks": [float(v) for v in np.asarray(features).tolist()]}

        try:
            response = self.session.post(
                self.endpoint,
                headers=self.headers,
                json=payload,
                timeout=self.timeout
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise ClassifierError(f"Classifier request failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise ClassifierError(f"Invalid JSON from classifier: {e}") from e

        return _decode_result(data)

    def try_classify(self, features: Sequence[float]) -> Optional[ClassificationResult]:
        """classify() that logs failures and returns None instead of raising."""
        try:
            result = self.classify(features)
        except ClassifierError as e:
            print(f"❌ Backend error: {e}")
            return None

        if result is not None:
            print(f"📡 Prediction: {result.label} ({result.confidence:.2f})")
        return result

    def close(self):
        """Release pooled connections."""
        self.session.close()


class MockClassifierClient:
    """Random classifier for running without a backend."""

    def __init__(
        self,
        vocabulary: Optional[List[str]] = None,
        seed: Optional[int] = None
    ):
        self.vocabulary = vocabulary or MOCK_VOCABULARY
        self.rng = random.Random(seed)

    def classify(self, features: Sequence[float]) -> Optional[ClassificationResult]:
        if not is_valid_feature_vector(features):
            return None
        label = self.rng.choice(self.vocabulary)
        confidence = self.rng.uniform(0.5, 1.0)
        return ClassificationResult(label=label, confidence=confidence)

    def try_classify(self, features: Sequence[float]) -> Optional[ClassificationResult]:
        return self.classify(features)

    def close(self):
        pass
