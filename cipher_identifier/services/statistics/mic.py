"""Maximum periodic Index of Coincidence (MIC)."""

from collections.abc import Sequence

from cipher_identifier.services.preprocessing.encoder import as_stream
from cipher_identifier.services.statistics.coincidence import (
    SCALE,
    coincidence_index,
    columns,
    max_lag,
)

MIN_LENGTH = 2
MAX_PERIOD = 10


def periodic_ic(stream: Sequence[int], period: int) -> float:
    """
    Average IoC of the residue columns for one assumed period.

    Columns with fewer than two symbols do not contribute.
    """
    values = [
        coincidence_index(column)
        for column in columns(stream, period)
        if len(column) > 1
    ]
    if not values:
        return 0.0

    return sum(values) / len(values) * SCALE


def max_periodic_ic(data: str | Sequence[int]) -> float:
    """
    Highest average column IoC over periods 1..min(10, n/2).

    A periodic polyalphabetic cipher recovers a language-like IoC once the
    stream is split at its key length.
    """
    stream = as_stream(data)
    if len(stream) < MIN_LENGTH:
        return 0.0

    best = 0.0
    for period in range(1, max_lag(stream, MAX_PERIOD) + 1):
        best = max(best, periodic_ic(stream, period))

    return best
