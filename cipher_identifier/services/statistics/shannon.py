"""Shannon entropy."""

import math
from collections import Counter
from collections.abc import Sequence

from cipher_identifier.services.preprocessing.encoder import as_stream


def shannon_entropy(data: str | Sequence[int]) -> float:
    """
    Calculate Shannon entropy in bits per symbol.

    Every symbol of the alphabet is eligible, not just letters.
    """
    stream = as_stream(data)
    n = len(stream)
    if n == 0:
        return 0.0

    entropy = 0.0
    for count in Counter(stream).values():
        p = count / n
        entropy -= p * math.log2(p)

    return entropy
