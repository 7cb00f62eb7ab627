"""Maximum Kappa (MKA)."""

from collections.abc import Sequence

from cipher_identifier.services.preprocessing.encoder import as_stream
from cipher_identifier.services.statistics.coincidence import SCALE, kappa, max_lag

MIN_LENGTH = 2
MAX_SHIFT = 10


def max_kappa(data: str | Sequence[int]) -> float:
    """Highest coincidence rate between the stream and a shift of 1..min(10, n/2)."""
    stream = as_stream(data)
    if len(stream) < MIN_LENGTH:
        return 0.0

    best = 0.0
    for shift in range(1, max_lag(stream, MAX_SHIFT) + 1):
        best = max(best, kappa(stream, shift) * SCALE)

    return best
