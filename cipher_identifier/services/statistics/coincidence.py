"""
Shared coincidence counting for the fingerprint tests.

IoC, MIC, DIC and EDI all reduce to the same quantity: the probability that
two items drawn without replacement from a grouping of the stream are equal.
Only the grouping differs (single symbols, overlapping digraphs, even
digraphs, residue columns). MKA counts coincidences between shifted pairs.
"""

from collections import Counter
from collections.abc import Hashable, Iterable, Iterator, Sequence

# All ratio-style scores are reported per mille
SCALE = 1000.0


def coincidence_count(counts: Iterable[int]) -> int:
    """Sum of c * (c - 1) over a frequency table."""
    return sum(c * (c - 1) for c in counts)


def coincidence_index(items: Iterable[Hashable]) -> float:
    """
    Index of coincidence of an arbitrary grouping.

    Returns the unscaled probability, or 0.0 when fewer than two items
    were grouped.
    """
    counter = Counter(items)
    total = sum(counter.values())
    if total < 2:
        return 0.0

    return coincidence_count(counter.values()) / (total * (total - 1))


def symbols(stream: Sequence[int]) -> Iterator[int]:
    """Group the stream as single symbols."""
    return iter(stream)


def digraphs(stream: Sequence[int], stride: int = 1) -> Iterator[tuple[int, int]]:
    """Group the stream as adjacent pairs starting every `stride` positions."""
    for i in range(0, len(stream) - 1, stride):
        yield stream[i], stream[i + 1]


def columns(stream: Sequence[int], period: int) -> list[Sequence[int]]:
    """Split the stream into `period` residue-class columns."""
    return [stream[offset::period] for offset in range(period)]


def shifted_pairs(stream: Sequence[int], shift: int) -> Iterator[tuple[int, int]]:
    """Pair every symbol with the one `shift` positions later."""
    return zip(stream, stream[shift:])


def kappa(stream: Sequence[int], shift: int) -> float:
    """Fraction of positions where the stream coincides with its shift."""
    total = 0
    matches = 0
    for a, b in shifted_pairs(stream, shift):
        total += 1
        if a == b:
            matches += 1

    return matches / total if total > 0 else 0.0


def max_lag(stream: Sequence[int], limit: int = 10) -> int:
    """Largest period or shift examined for a stream: min(limit, n / 2)."""
    return min(limit, len(stream) // 2)
