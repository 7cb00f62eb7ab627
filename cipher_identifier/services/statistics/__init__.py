"""
Statistical fingerprint tests.

Each test is a pure function over raw text or an encoded stream. Streams
shorter than a test's minimum length score 0.0 (the binary random test
answers "N").
"""

from cipher_identifier.services.statistics.binary_random import binary_random
from cipher_identifier.services.statistics.dic import digraph_ic
from cipher_identifier.services.statistics.edi import even_digraph_ic
from cipher_identifier.services.statistics.fingerprint import (
    ALL_METRICS,
    CLASSIFYING_METRICS,
    DIAGNOSTIC_METRICS,
    TESTS,
    FingerprintVector,
    fingerprint,
    run_all,
)
from cipher_identifier.services.statistics.ioc import index_of_coincidence
from cipher_identifier.services.statistics.ldi import letter_distribution_index
from cipher_identifier.services.statistics.lr import long_repeat
from cipher_identifier.services.statistics.mic import max_periodic_ic
from cipher_identifier.services.statistics.mka import max_kappa
from cipher_identifier.services.statistics.rod import repeat_order_distance
from cipher_identifier.services.statistics.sdd import difference_std_dev
from cipher_identifier.services.statistics.shannon import shannon_entropy

__all__ = [
    "ALL_METRICS",
    "CLASSIFYING_METRICS",
    "DIAGNOSTIC_METRICS",
    "TESTS",
    "FingerprintVector",
    "binary_random",
    "difference_std_dev",
    "digraph_ic",
    "even_digraph_ic",
    "fingerprint",
    "index_of_coincidence",
    "letter_distribution_index",
    "long_repeat",
    "max_kappa",
    "max_periodic_ic",
    "repeat_order_distance",
    "run_all",
    "shannon_entropy",
]
