"""Shared fixtures for the cipher identifier tests."""

import pytest

from cipher_identifier.services.classification.classifier import (
    MetricScales,
    ProfileDistanceClassifier,
)
from cipher_identifier.services.profiles.store import CipherProfile, ProfileStore
from cipher_identifier.services.statistics.fingerprint import (
    CLASSIFYING_METRICS,
    FingerprintVector,
)


def make_vector(*values: float) -> FingerprintVector:
    """Fingerprint with the given classifying values (one value fills all nine)."""
    if len(values) == 1:
        values = values * len(CLASSIFYING_METRICS)
    return FingerprintVector.from_mapping(dict(zip(CLASSIFYING_METRICS, values)))


def flat_profile(name: str, mean: float, sd: float | None = None) -> CipherProfile:
    count = len(CLASSIFYING_METRICS)
    return CipherProfile(
        name=name,
        mean=(mean,) * count,
        sd=None if sd is None else (sd,) * count,
    )


@pytest.fixture
def english_text():
    """Plain English prose with a natural letter distribution."""
    return (
        "CRYPTOGRAPHY IS THE STUDY OF SECURE COMMUNICATION IN THE PRESENCE "
        "OF ADVERSARIES. LONG BEFORE COMPUTERS EXISTED PEOPLE INVENTED CIPHERS "
        "TO HIDE MEANING FROM UNAUTHORIZED READERS. SOME METHODS RELIED ON SIMPLE "
        "SUBSTITUTION WHILE OTHERS USED TRANSPOSITION OR PERIODIC KEYS."
    )


@pytest.fixture
def unit_scales():
    return MetricScales((1.0,) * len(CLASSIFYING_METRICS))


@pytest.fixture
def synthetic_store():
    """Three flat profiles; alpha and gamma are indistinguishable."""
    return ProfileStore([
        flat_profile("alpha", 0.0),
        flat_profile("beta", 10.0),
        flat_profile("gamma", 0.0),
    ])


@pytest.fixture
def synthetic_classifier(synthetic_store, unit_scales):
    return ProfileDistanceClassifier(synthetic_store, unit_scales)


@pytest.fixture(scope="session")
def default_store():
    return ProfileStore.load_default()
