"""Profile-distance classification of cipher fingerprints."""

from cipher_identifier.services.classification.classifier import (
    MetricScales,
    ProfileDistanceClassifier,
    RankedCandidate,
)

__all__ = [
    "MetricScales",
    "ProfileDistanceClassifier",
    "RankedCandidate",
]
