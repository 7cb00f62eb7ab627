import re
import string
from collections.abc import Sequence
from dataclasses import dataclass
from numbers import Integral
from typing import ClassVar

from cipher_identifier.core.exceptions import InvalidSymbolError

# Symbol table: A-Z -> 0..25, '#' -> 26, 0-9 -> 27..36
CIPHER_SYMBOLS = string.ascii_uppercase + "#" + string.digits

# Size of the frequency tables built over encoded streams
ALPHABET_SIZE = 38

LETTER_COUNT = 26
HASH_CODE = CIPHER_SYMBOLS.index("#")

EncodedStream = list[int]


@dataclass
class EncodedText:
    """Result of encoding with bookkeeping about dropped characters."""

    stream: EncodedStream
    original: str
    dropped_chars: dict[str, int]


class SymbolEncoder:
    """
    Maps raw text onto the canonical cipher symbol alphabet.

    Handles:
    - Case folding (uppercase before lookup)
    - Folding the slashed zero glyph to the digit 0
    - Dropping characters outside the alphabet
    """

    SYMBOLS: ClassVar[str] = CIPHER_SYMBOLS
    FOLDED: ClassVar[dict[str, str]] = {"Ø": "0"}

    def __init__(self) -> None:
        self._codes = {symbol: code for code, symbol in enumerate(self.SYMBOLS)}

    def encode(self, text: str) -> EncodedStream:
        """
        Encode text into a stream of alphabet indices.

        Args:
            text: Arbitrary input text

        Returns:
            List of symbol codes in input order
        """
        return self.encode_full(text).stream

    def encode_full(self, text: str) -> EncodedText:
        """Encode text and report which characters were dropped."""
        stream: EncodedStream = []
        dropped: dict[str, int] = {}

        for char in text.upper():
            char = self.FOLDED.get(char, char)
            code = self._codes.get(char)
            if code is None:
                dropped[char] = dropped.get(char, 0) + 1
            else:
                stream.append(code)

        return EncodedText(stream=stream, original=text, dropped_chars=dropped)

    def decode(self, stream: Sequence[int]) -> str:
        """Render an encoded stream back into symbols."""
        return "".join(self.SYMBOLS[code] for code in stream)

    def strip_whitespace(self, text: str) -> str:
        """Remove all whitespace and uppercase the text."""
        return re.sub(r"\s+", "", text).upper()


_default_encoder = SymbolEncoder()


def encode(text: str) -> EncodedStream:
    """Encode text with the default encoder."""
    return _default_encoder.encode(text)


def decode(stream: Sequence[int]) -> str:
    """Decode a stream with the default encoder."""
    return _default_encoder.decode(stream)


def as_stream(data: str | Sequence[int]) -> EncodedStream:
    """
    Accept either raw text or an already encoded stream.

    Raises:
        InvalidSymbolError: If a stream code is not an integer in 0..ALPHABET_SIZE-1
    """
    if isinstance(data, str):
        return encode(data)

    stream = list(data)
    for position, code in enumerate(stream):
        if not isinstance(code, Integral) or not 0 <= code < ALPHABET_SIZE:
            raise InvalidSymbolError(code, position, ALPHABET_SIZE)
    return stream


def has_digits(stream: Sequence[int]) -> str:
    """Return "Y" when the stream contains any digit symbol."""
    return "Y" if any(code > HASH_CODE for code in stream) else "N"


def has_hash(stream: Sequence[int]) -> str:
    """Return "Y" when the stream contains the '#' symbol."""
    return "Y" if HASH_CODE in stream else "N"


def missing_letters(text: str) -> str:
    """List the letters A-Z that never occur in the text."""
    present = set(text.upper())
    return "".join(c for c in string.ascii_uppercase if c not in present)
