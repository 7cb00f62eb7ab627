"""Letter Distribution Index (LDI)."""

from collections import Counter
from collections.abc import Sequence

from cipher_identifier.services.preprocessing.encoder import LETTER_COUNT, as_stream

# Relative frequency of A..Z in English prose
ENGLISH_LETTER_FREQUENCIES: tuple[float, ...] = (
    0.082, 0.015, 0.028, 0.043, 0.127, 0.022, 0.020, 0.061, 0.070, 0.002,
    0.008, 0.040, 0.024, 0.067, 0.075, 0.019, 0.001, 0.060, 0.063, 0.091,
    0.028, 0.010, 0.023, 0.001, 0.020, 0.001,
)

SCALE = 100.0


def letter_distribution_index(data: str | Sequence[int]) -> float:
    """
    Chi-squared distance between the letter counts and English, times 100.

    Only the letters A-Z take part; digits and '#' are ignored. Lower
    values indicate a closer match to English frequencies.
    """
    stream = as_stream(data)
    counter = Counter(code for code in stream if code < LETTER_COUNT)
    total = sum(counter.values())
    if total == 0:
        return 0.0

    chi_squared = 0.0
    for code, frequency in enumerate(ENGLISH_LETTER_FREQUENCIES):
        expected = frequency * total
        if expected > 0:
            chi_squared += (counter.get(code, 0) - expected) ** 2 / expected

    return chi_squared * SCALE
