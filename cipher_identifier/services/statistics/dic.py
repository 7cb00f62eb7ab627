"""Digraph Index of Coincidence (DIC)."""

from collections.abc import Sequence

from cipher_identifier.services.preprocessing.encoder import as_stream
from cipher_identifier.services.statistics.coincidence import SCALE, coincidence_index, digraphs

MIN_LENGTH = 2


def digraph_ic(data: str | Sequence[int]) -> float:
    """IoC over all overlapping digraphs, per mille."""
    stream = as_stream(data)
    if len(stream) < MIN_LENGTH:
        return 0.0

    return coincidence_index(digraphs(stream, stride=1)) * SCALE
