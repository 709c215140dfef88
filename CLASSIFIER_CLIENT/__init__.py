"""
Classifier Client Module
========================
Talks to the remote landmark classifier and gates its answers.

Example:
    from CLASSIFIER_CLIENT import ClassifierClient, passes_confidence_gate

    client = ClassifierClient("http://127.0.0.1:5000/predict")
    result = client.try_classify(features)
    if result and passes_confidence_gate(result):
        aggregator.submit(result.label, result.confidence)
"""

from .predict_client import (
    ClassificationResult,
    ClassifierClient,
    ClassifierError,
    MockClassifierClient,
    passes_confidence_gate,
    DEFAULT_ENDPOINT,
    DEFAULT_CONFIDENCE_THRESHOLD,
)

__all__ = [
    "ClassificationResult",
    "ClassifierClient",
    "ClassifierError",
    "MockClassifierClient",
    "passes_confidence_gate",
    "DEFAULT_ENDPOINT",
    "DEFAULT_CONFIDENCE_THRESHOLD",
]
