"""Tests for the symbol encoder."""

import pytest

from cipher_identifier.core.exceptions import InvalidSymbolError, ValidationError
from cipher_identifier.services.preprocessing.encoder import (
    ALPHABET_SIZE,
    CIPHER_SYMBOLS,
    SymbolEncoder,
    as_stream,
    decode,
    encode,
    has_digits,
    has_hash,
    missing_letters,
)


class TestSymbolEncoder:
    """Test suite for mapping text onto the cipher alphabet."""

    @pytest.fixture
    def encoder(self):
        return SymbolEncoder()

    def test_letters(self):
        assert encode("HELLO") == [7, 4, 11, 11, 14]

    def test_lowercase_is_folded(self):
        assert encode("hello") == encode("HELLO")

    def test_unknown_characters_are_dropped(self):
        assert encode("AB 1!") == [0, 1, 28]

    def test_hash_and_digits(self):
        assert encode("#0123456789") == list(range(26, 37))

    def test_slashed_zero_folds_to_digit_zero(self):
        assert encode("Ø") == encode("0") == [27]
        assert encode("ø") == [27]

    def test_empty_text(self):
        assert encode("") == []

    def test_codes_fit_frequency_tables(self):
        stream = encode(CIPHER_SYMBOLS)
        assert max(stream) < ALPHABET_SIZE
        assert len(set(stream)) == len(CIPHER_SYMBOLS)

    def test_encode_full_reports_dropped(self, encoder):
        result = encoder.encode_full("a-b-c!")
        assert result.stream == [0, 1, 2]
        assert result.dropped_chars == {"-": 2, "!": 1}
        assert result.original == "a-b-c!"

    def test_decode_is_left_inverse_up_to_filtering(self):
        assert decode(encode("Attack at 0600!")) == "ATTACKAT0600"

    def test_strip_whitespace(self, encoder):
        assert encoder.strip_whitespace(" ab\tc\nd ") == "ABCD"

    def test_as_stream_accepts_both_forms(self):
        assert as_stream("AB") == [0, 1]
        assert as_stream((0, 1)) == [0, 1]

    def test_as_stream_accepts_every_alphabet_code(self):
        assert as_stream(range(ALPHABET_SIZE)) == list(range(ALPHABET_SIZE))

    @pytest.mark.parametrize("stream", [[40, 40, 99], [0, ALPHABET_SIZE], [-1, 3, -1, 3]])
    def test_as_stream_rejects_codes_outside_alphabet(self, stream):
        with pytest.raises(InvalidSymbolError):
            as_stream(stream)

    def test_as_stream_rejects_non_integer_codes(self):
        with pytest.raises(ValidationError, match="position 1"):
            as_stream([0, 1.5])


class TestStreamFlags:
    """Test suite for the digit, hash and missing letter helpers."""

    def test_has_digits(self):
        assert has_digits(encode("ABC1")) == "Y"
        assert has_digits(encode("ABC#")) == "N"

    def test_has_hash(self):
        assert has_hash(encode("AB#C")) == "Y"
        assert has_hash(encode("ABC")) == "N"

    def test_missing_letters(self):
        missing = missing_letters("HELLOWORLD")
        assert "A" in missing
        assert "L" not in missing
        assert len(missing) == 26 - len(set("HELLOWORLD"))
