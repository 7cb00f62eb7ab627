"""Standard Deviation of Differences (SDD)."""

import math
from collections.abc import Sequence

from cipher_identifier.services.preprocessing.encoder import LETTER_COUNT, as_stream

MIN_LENGTH = 2
SCALE = 10.0


def difference_std_dev(data: str | Sequence[int]) -> float:
    """
    Population standard deviation of consecutive symbol differences, times 10.

    Differences wrap modulo 26, so Z -> A counts as a step of 1.
    """
    stream = as_stream(data)
    if len(stream) < MIN_LENGTH:
        return 0.0

    differences = [
        (current - previous) % LETTER_COUNT
        for previous, current in zip(stream, stream[1:])
    ]
    mean = sum(differences) / len(differences)
    variance = sum((d - mean) ** 2 for d in differences) / len(differences)

    return math.sqrt(variance) * SCALE
