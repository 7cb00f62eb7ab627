"""Even Digraph Index of Coincidence (EDI)."""

from collections.abc import Sequence

from cipher_identifier.services.preprocessing.encoder import as_stream
from cipher_identifier.services.statistics.coincidence import SCALE, coincidence_index, digraphs

# Two full digraphs are needed for a coincidence
MIN_LENGTH = 4


def even_digraph_ic(data: str | Sequence[int]) -> float:
    """
    IoC over the non-overlapping digraphs starting at even positions.

    Digraphic ciphers (Playfair, Foursquare) substitute exactly these pairs,
    so their EDI stays high while the overlapping DIC drops.
    """
    stream = as_stream(data)
    if len(stream) < MIN_LENGTH:
        return 0.0

    return coincidence_index(digraphs(stream, stride=2)) * SCALE
