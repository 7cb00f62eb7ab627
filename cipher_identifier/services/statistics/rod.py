"""Repeat Order Distance (ROD)."""

from collections.abc import Sequence

from cipher_identifier.services.preprocessing.encoder import as_stream

MIN_LENGTH = 2


def repeat_order_distance(data: str | Sequence[int]) -> float:
    """
    Mean distance from each repeated symbol back to its first occurrence.

    Returns 0.0 when no symbol repeats.
    """
    stream = as_stream(data)
    if len(stream) < MIN_LENGTH:
        return 0.0

    first_seen: dict[int, int] = {}
    total_distance = 0
    repeats = 0

    for position, code in enumerate(stream):
        first = first_seen.setdefault(code, position)
        if position > first:
            total_distance += position - first
            repeats += 1

    if repeats == 0:
        return 0.0

    return total_distance / repeats
