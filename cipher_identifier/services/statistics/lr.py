"""Long Repeat (LR)."""

from collections.abc import Sequence

from cipher_identifier.services.preprocessing.encoder import as_stream

MIN_LENGTH = 2
MIN_REPEAT = 2


def has_repeat(data: bytes, length: int) -> bool:
    """Check whether any substring of the given length occurs twice."""
    seen: set[bytes] = set()
    for i in range(len(data) - length + 1):
        chunk = data[i:i + length]
        if chunk in seen:
            return True
        seen.add(chunk)
    return False


def long_repeat(data: str | Sequence[int]) -> float:
    """
    Length of the longest substring that occurs at least twice.

    Only lengths 2..n/2 are considered; occurrences may overlap. A repeat of
    length L contains a repeat of length L - 1, so the largest length is
    found by bisection over the candidate lengths.
    """
    stream = as_stream(data)
    if len(stream) < MIN_LENGTH:
        return 0.0

    # Codes are < 38, so the stream packs into bytes for cheap slicing and hashing
    packed = bytes(stream)

    low, high = MIN_REPEAT, len(stream) // 2
    longest = 0
    while low <= high:
        mid = (low + high) // 2
        if has_repeat(packed, mid):
            longest = mid
            low = mid + 1
        else:
            high = mid - 1

    return float(longest)
