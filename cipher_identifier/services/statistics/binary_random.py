"""Binary random test."""

from collections.abc import Sequence

from cipher_identifier.services.preprocessing.encoder import as_stream

MIN_LENGTH = 2
TRANSITION_THRESHOLD = 0.45

RANDOM = "Y"
NOT_RANDOM = "N"


def transition_ratio(stream: Sequence[int]) -> float:
    """Fraction of adjacent positions holding different symbols."""
    if len(stream) < MIN_LENGTH:
        return 0.0

    transitions = sum(1 for a, b in zip(stream, stream[1:]) if a != b)
    return transitions / (len(stream) - 1)


def binary_random(data: str | Sequence[int]) -> str:
    """Flag the stream as random ("Y") when over 45% of adjacent symbols differ."""
    stream = as_stream(data)
    if len(stream) < MIN_LENGTH:
        return NOT_RANDOM

    return RANDOM if transition_ratio(stream) > TRANSITION_THRESHOLD else NOT_RANDOM
