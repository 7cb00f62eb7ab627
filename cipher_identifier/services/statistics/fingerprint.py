"""
Combined fingerprint over every statistical test.

The nine classifying metrics feed the profile-distance classifier; Shannon
entropy and the binary random flag are diagnostics only.
"""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import ClassVar

from cipher_identifier.services.preprocessing.encoder import as_stream
from cipher_identifier.services.statistics.binary_random import RANDOM, binary_random
from cipher_identifier.services.statistics.dic import digraph_ic
from cipher_identifier.services.statistics.edi import even_digraph_ic
from cipher_identifier.services.statistics.ioc import index_of_coincidence
from cipher_identifier.services.statistics.ldi import letter_distribution_index
from cipher_identifier.services.statistics.lr import long_repeat
from cipher_identifier.services.statistics.mic import max_periodic_ic
from cipher_identifier.services.statistics.mka import max_kappa
from cipher_identifier.services.statistics.rod import repeat_order_distance
from cipher_identifier.services.statistics.sdd import difference_std_dev
from cipher_identifier.services.statistics.shannon import shannon_entropy

CLASSIFYING_METRICS: tuple[str, ...] = (
    "IoC", "MIC", "MKA", "DIC", "EDI", "LR", "ROD", "LDI", "SDD",
)
DIAGNOSTIC_METRICS: tuple[str, ...] = ("Shannon", "BinaryRandom")
ALL_METRICS: tuple[str, ...] = CLASSIFYING_METRICS + DIAGNOSTIC_METRICS


def _binary_random_flag(data: str | Sequence[int]) -> float:
    return 1.0 if binary_random(data) == RANDOM else 0.0


# Metric name -> test returning a float
TESTS: dict[str, Callable[[str | Sequence[int]], float]] = {
    "IoC": index_of_coincidence,
    "MIC": max_periodic_ic,
    "MKA": max_kappa,
    "DIC": digraph_ic,
    "EDI": even_digraph_ic,
    "LR": long_repeat,
    "ROD": repeat_order_distance,
    "LDI": letter_distribution_index,
    "SDD": difference_std_dev,
    "Shannon": shannon_entropy,
    "BinaryRandom": _binary_random_flag,
}


@dataclass(frozen=True)
class FingerprintVector:
    """Statistical fingerprint of one ciphertext."""

    ioc: float
    mic: float
    mka: float
    dic: float
    edi: float
    lr: float
    rod: float
    ldi: float
    sdd: float
    shannon: float = 0.0
    binary_random: float = 0.0

    # Attribute name for each literal metric name, in declaration order
    FIELD_NAMES: ClassVar[dict[str, str]] = {
        "IoC": "ioc",
        "MIC": "mic",
        "MKA": "mka",
        "DIC": "dic",
        "EDI": "edi",
        "LR": "lr",
        "ROD": "rod",
        "LDI": "ldi",
        "SDD": "sdd",
        "Shannon": "shannon",
        "BinaryRandom": "binary_random",
    }

    def __getitem__(self, metric: str) -> float:
        try:
            return getattr(self, self.FIELD_NAMES[metric])
        except KeyError:
            raise KeyError(metric) from None

    def classifying_values(self) -> tuple[float, ...]:
        """The nine classifying metrics in canonical order."""
        return tuple(self[name] for name in CLASSIFYING_METRICS)

    def to_dict(self) -> dict[str, float]:
        """Mapping keyed by the literal metric names."""
        return {name: self[name] for name in ALL_METRICS}

    @classmethod
    def from_mapping(cls, values: Mapping[str, float]) -> "FingerprintVector":
        """
        Build a fingerprint from a name -> value mapping.

        The nine classifying metrics are required; diagnostics default to 0.

        Raises:
            KeyError: If a classifying metric is missing
        """
        missing = [name for name in CLASSIFYING_METRICS if name not in values]
        if missing:
            raise KeyError(f"Fingerprint is missing metrics: {', '.join(missing)}")

        kwargs = {
            cls.FIELD_NAMES[name]: float(values[name])
            for name in ALL_METRICS
            if name in values
        }
        return cls(**kwargs)


def fingerprint(data: str | Sequence[int]) -> FingerprintVector:
    """
    Run every test over one ciphertext.

    The text is encoded once and the stream is shared by all tests.
    """
    stream = as_stream(data)
    values = {
        FingerprintVector.FIELD_NAMES[name]: TESTS[name](stream)
        for name in ALL_METRICS
    }
    return FingerprintVector(**values)


def run_all(data: str | Sequence[int]) -> dict[str, float]:
    """Run every test and return the results keyed by metric name."""
    return fingerprint(data).to_dict()
