"""
Cipher identification pipeline.

Runs the three stages in order:
1. Encode the ciphertext into the cipher symbol alphabet
2. Run the fingerprint test suite over the encoded stream
3. Rank the reference profiles by distance to the fingerprint
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from joblib import Parallel, delayed

from cipher_identifier.core.config import Settings
from cipher_identifier.core.exceptions import CiphertextTooLongError
from cipher_identifier.models.schemas import BasicStats
from cipher_identifier.services.classification.classifier import (
    MetricScales,
    ProfileDistanceClassifier,
    RankedCandidate,
)
from cipher_identifier.services.preprocessing.encoder import (
    SymbolEncoder,
    has_digits,
    has_hash,
    missing_letters,
)
from cipher_identifier.services.profiles.store import ProfileStore
from cipher_identifier.services.statistics.binary_random import binary_random
from cipher_identifier.services.statistics.fingerprint import FingerprintVector, fingerprint
from cipher_identifier.services.statistics.ioc import index_of_coincidence
from cipher_identifier.services.statistics.shannon import shannon_entropy

logger = logging.getLogger(__name__)

_encoder = SymbolEncoder()

# Leaves top_n to the identifier's configured default
_CONFIGURED = object()


@dataclass
class Identification:
    """Everything produced while identifying one ciphertext."""

    text: str
    basic_stats: BasicStats
    fingerprint: FingerprintVector
    candidates: list[RankedCandidate]

    @property
    def best(self) -> RankedCandidate | None:
        return self.candidates[0] if self.candidates else None




def normalize(text: str) -> str:
    """Strip whitespace and uppercase, as done before every analysis."""
    return _encoder.strip_whitespace(text)


def basic_stats(text: str) -> BasicStats:
    """
    Summary statistics for a ciphertext.

    Length, unique characters and missing letters are measured on the
    normalised text; the remaining figures on its encoded stream.
    """
    text = normalize(text)
    encoded = _encoder.encode_full(text)
    stream = encoded.stream
    return BasicStats(
        length=len(text),
        unique_chars=len(set(text)),
        missing_letters=missing_letters(text),
        ignored_chars=encoded.dropped_chars,
        index_of_coincidence=index_of_coincidence(stream),
        shannon_entropy=shannon_entropy(stream),
        binary_random=binary_random(stream),
        has_digits=has_digits(stream),
        has_hash=has_hash(stream),
    )


def fingerprint_many(texts: Sequence[str], n_jobs: int = 1) -> list[FingerprintVector]:
    """
    Fingerprint several texts across worker processes.

    Results are in input order. A single text or a single job runs in the
    calling process.
    """
    if n_jobs == 1 or len(texts) <= 1:
        return [fingerprint(text) for text in texts]

    return Parallel(n_jobs=n_jobs, prefer="processes")(
        delayed(fingerprint)(text) for text in texts
    )


class CipherIdentifier:
    """Identifies the most likely cipher families for ciphertexts."""

    def __init__(
        self,
        store: ProfileStore,
        classifier: ProfileDistanceClassifier | None = None,
        max_workers: int = 4,
        max_length: int | None = None,
        top_n: int = 5,
    ):
        self.store = store
        self.classifier = classifier or ProfileDistanceClassifier(store)
        self.max_workers = max_workers
        self.max_length = max_length
        self.top_n = top_n

    @classmethod
    def from_settings(cls, settings: Settings) -> "CipherIdentifier":
        """
        Load the reference profiles and wire up the pipeline from settings.

        Raises:
            ProfileStoreError: If the profile table is missing or malformed
            ConfigurationError: If the metric scales are invalid
        """
        if settings.profiles_path is not None:
            store = ProfileStore.from_json(settings.profiles_path)
        else:
            store = ProfileStore.load_default()

        classifier = ProfileDistanceClassifier(
            store, MetricScales.from_mapping(settings.metric_scales)
        )
        return cls(
            store,
            classifier,
            max_workers=settings.max_parallel_workers,
            max_length=settings.max_ciphertext_length,
            top_n=settings.default_top_n,
        )

    def prepare(self, text: str) -> str:
        """
        Normalise a ciphertext and enforce the length limit.

        Raises:
            CiphertextTooLongError: If the normalised text exceeds max_length
        """
        text = normalize(text)
        if self.max_length is not None and len(text) > self.max_length:
            raise CiphertextTooLongError(len(text), self.max_length)
        return text

    def identify(
        self,
        text: str,
        top_n=_CONFIGURED,
        highlight: str | None = None,
        candidate_names: Iterable[str] | None = None,
    ) -> Identification:
        """
        Identify one ciphertext.

        Args:
            text: Raw ciphertext; whitespace is stripped and case folded
            top_n: Number of candidates to keep; all when None, the
                configured default when omitted
            highlight: Cipher to flag in the ranking
            candidate_names: Ciphers to consider; all profiles when None

        Returns:
            Identification with stats, fingerprint and ranked candidates

        Raises:
            CiphertextTooLongError: If the text exceeds max_length
            UnknownCipherError: If a candidate or the highlight is unknown
        """
        text = self.prepare(text)
        return self._classify(text, fingerprint(text), top_n, highlight, candidate_names)

    def rank(self, text: str) -> list[RankedCandidate]:
        """Full ranking of every profile for one ciphertext."""
        return self.classifier.rank(fingerprint(self.prepare(text)))

    def identify_many(
        self,
        texts: Sequence[str],
        top_n=_CONFIGURED,
        highlight: str | None = None,
        candidate_names: Iterable[str] | None = None,
    ) -> list[Identification]:
        """
        Identify several ciphertexts, fingerprinting them in parallel.

        Every text is length-checked before any work starts. Results are
        returned in the same order as the input texts.
        """
        if candidate_names is not None:
            candidate_names = list(candidate_names)

        prepared = [self.prepare(text) for text in texts]
        vectors = fingerprint_many(prepared, self.max_workers)
        return [
            self._classify(text, vector, top_n, highlight, candidate_names)
            for text, vector in zip(prepared, vectors)
        ]

    def _classify(
        self,
        text: str,
        vector: FingerprintVector,
        top_n,
        highlight: str | None,
        candidate_names: Iterable[str] | None,
    ) -> Identification:
        if top_n is _CONFIGURED:
            top_n = self.top_n

        candidates = self.classifier.classify(
            vector,
            candidate_names=candidate_names,
            top_n=top_n,
            highlight=highlight,
        )
        logger.debug("Identified %d characters, %d candidates kept", len(text), len(candidates))

        return Identification(
            text=text,
            basic_stats=basic_stats(text),
            fingerprint=vector,
            candidates=candidates,
        )
