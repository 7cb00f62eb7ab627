"""
Profile-distance classifier.

Every cipher family leaves a characteristic fingerprint. A ciphertext is
scored against each reference profile with a normalised city-block distance
and the candidates are ranked from closest to furthest.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

import numpy as np
from scipy.spatial import distance

from cipher_identifier.core.config import get_settings
from cipher_identifier.core.exceptions import ConfigurationError, UnknownCipherError
from cipher_identifier.services.profiles.store import CipherProfile, ProfileStore
from cipher_identifier.services.statistics.fingerprint import (
    CLASSIFYING_METRICS,
    FingerprintVector,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetricScales:
    """Per-metric normalisation used when a profile carries no spread."""

    values: tuple[float, ...]

    def __post_init__(self):
        if len(self.values) != len(CLASSIFYING_METRICS):
            raise ConfigurationError(
                f"Expected {len(CLASSIFYING_METRICS)} metric scales, got {len(self.values)}"
            )
        bad = [
            name for name, value in zip(CLASSIFYING_METRICS, self.values)
            if not (math.isfinite(value) and value > 0)
        ]
        if bad:
            raise ConfigurationError(
                f"Metric scales must be positive: {', '.join(bad)}",
                {"metrics": bad},
            )

    def __getitem__(self, metric: str) -> float:
        return self.values[CLASSIFYING_METRICS.index(metric)]

    @classmethod
    def from_mapping(cls, scales: Mapping[str, float]) -> "MetricScales":
        """
        Build the scale table from a metric name -> scale mapping.

        Raises:
            ConfigurationError: If a metric is missing or a scale is not positive
        """
        missing = [name for name in CLASSIFYING_METRICS if name not in scales]
        if missing:
            raise ConfigurationError(
                f"Missing metric scales: {', '.join(missing)}",
                {"metrics": missing},
            )
        return cls(tuple(float(scales[name]) for name in CLASSIFYING_METRICS))

    @classmethod
    def default(cls) -> "MetricScales":
        """Scales from the application settings."""
        return cls.from_mapping(get_settings().metric_scales)


@dataclass(frozen=True)
class RankedCandidate:
    """A cipher family with its distance score and 1-based rank."""

    name: str
    score: float
    rank: int
    highlighted: bool = False


class ProfileDistanceClassifier:
    """
    Ranks cipher families by distance between a fingerprint and their profiles.

    The distance for one profile is the sum over the nine classifying metrics
    of |value - expected| / scale, where the scale is the profile's standard
    deviation for that metric when it is positive and the configured metric
    scale otherwise. Lower scores are better.
    """

    def __init__(self, store: ProfileStore, scales: MetricScales | None = None):
        self._store = store
        self._scales = scales or MetricScales.default()
        # Profiles are immutable, so weights are computed once
        self._means: dict[str, np.ndarray] = {}
        self._weights: dict[str, np.ndarray] = {}
        for profile in store:
            self._means[profile.name] = np.asarray(profile.mean, dtype=np.float64)
            self._weights[profile.name] = self._profile_weights(profile)

    @property
    def store(self) -> ProfileStore:
        return self._store

    def _profile_weights(self, profile: CipherProfile) -> np.ndarray:
        fallback = np.asarray(self._scales.values, dtype=np.float64)
        if profile.sd is None:
            scale = fallback
        else:
            sd = np.asarray(profile.sd, dtype=np.float64)
            scale = np.where(sd > 0, sd, fallback)
        return 1.0 / scale

    def score(self, fingerprint: FingerprintVector | Mapping[str, float], cipher_name: str) -> float:
        """
        Distance between a fingerprint and one cipher profile.

        Raises:
            UnknownCipherError: If the cipher has no profile
        """
        if cipher_name not in self._store:
            raise UnknownCipherError(cipher_name)
        values = _as_array(fingerprint)
        return self._distance(values, cipher_name)

    def _distance(self, values: np.ndarray, cipher_name: str) -> float:
        return float(distance.cityblock(
            values, self._means[cipher_name], w=self._weights[cipher_name]
        ))

    def rank(
        self,
        fingerprint: FingerprintVector | Mapping[str, float],
        candidate_names: Iterable[str] | None = None,
    ) -> list[RankedCandidate]:
        """
        Rank every candidate from best (lowest score) to worst.

        Args:
            fingerprint: Fingerprint of the ciphertext
            candidate_names: Ciphers to consider; all profiles when None

        Returns:
            Full ranking; ties keep the order of candidate_names

        Raises:
            UnknownCipherError: If a candidate has no profile
        """
        names = self._resolve_candidates(candidate_names)
        values = _as_array(fingerprint)

        scored = [(name, self._distance(values, name)) for name in names]
        # sorted() is stable, so equal scores keep candidate order
        scored = sorted(scored, key=lambda item: item[1])

        ranking = [
            RankedCandidate(name=name, score=score, rank=position)
            for position, (name, score) in enumerate(scored, start=1)
        ]

        if logger.isEnabledFor(logging.DEBUG) and ranking:
            logger.debug(
                "Ranked %d candidates, best %s (%.3f)",
                len(ranking), ranking[0].name, ranking[0].score,
            )
        return ranking

    def classify(
        self,
        fingerprint: FingerprintVector | Mapping[str, float],
        candidate_names: Iterable[str] | None = None,
        top_n: int | None = None,
        highlight: str | None = None,
    ) -> list[RankedCandidate]:
        """
        Rank candidates and keep the best top_n.

        When highlight names a candidate that falls outside the visible
        top_n, it is appended after them with its true rank. The
        highlighted entry is flagged wherever it appears.

        Args:
            fingerprint: Fingerprint of the ciphertext
            candidate_names: Ciphers to consider; all profiles when None
            top_n: Number of entries to return; all when None
            highlight: Cipher to flag in the result

        Returns:
            Ranked candidates, best first

        Raises:
            UnknownCipherError: If a candidate or the highlight has no profile
            ValueError: If top_n is negative
        """
        if top_n is not None and top_n < 0:
            raise ValueError(f"top_n must be non-negative, got {top_n}")
        if highlight is not None and highlight not in self._store:
            raise UnknownCipherError(highlight)

        ranking = self.rank(fingerprint, candidate_names)
        visible = ranking if top_n is None else ranking[:top_n]

        if highlight is None:
            return list(visible)

        result = [
            _flag(candidate) if candidate.name == highlight else candidate
            for candidate in visible
        ]
        if not any(candidate.highlighted for candidate in result):
            for candidate in ranking[len(visible):]:
                if candidate.name == highlight:
                    result.append(_flag(candidate))
                    break
        return result

    def _resolve_candidates(self, candidate_names: Iterable[str] | None) -> list[str]:
        if candidate_names is None:
            return self._store.all_names()
        names = list(dict.fromkeys(candidate_names))
        for name in names:
            if name not in self._store:
                raise UnknownCipherError(name)
        return names


def _flag(candidate: RankedCandidate) -> RankedCandidate:
    return RankedCandidate(
        name=candidate.name,
        score=candidate.score,
        rank=candidate.rank,
        highlighted=True,
    )


def _as_array(fingerprint: FingerprintVector | Mapping[str, float]) -> np.ndarray:
    if not isinstance(fingerprint, FingerprintVector):
        fingerprint = FingerprintVector.from_mapping(fingerprint)
    return np.asarray(fingerprint.classifying_values(), dtype=np.float64)
