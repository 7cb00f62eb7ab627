"""Tests for the identification pipeline."""

import pytest

from cipher_identifier.core.config import Settings
from cipher_identifier.core.exceptions import CiphertextTooLongError, UnknownCipherError
from cipher_identifier.services.pipeline import (
    CipherIdentifier,
    basic_stats,
    fingerprint_many,
    normalize,
)
from cipher_identifier.services.statistics.fingerprint import fingerprint


class TestBasicStats:
    """Test suite for the summary statistics."""

    def test_counts(self):
        stats = basic_stats("hello world")
        assert stats.length == 10
        assert stats.unique_chars == 7
        assert "A" in stats.missing_letters
        assert "H" not in stats.missing_letters
        assert stats.has_digits == "N"
        assert stats.has_hash == "N"

    def test_digits_and_hash(self):
        stats = basic_stats("AB#12")
        assert stats.has_digits == "Y"
        assert stats.has_hash == "Y"

    def test_ignored_characters(self):
        stats = basic_stats("Attack, at dawn!!")
        assert stats.ignored_chars == {",": 1, "!": 2}
        assert stats.length == 15

    def test_empty_text(self):
        stats = basic_stats("")
        assert stats.length == 0
        assert stats.index_of_coincidence == 0.0
        assert stats.binary_random == "N"


class TestCipherIdentifier:
    """Test suite for CipherIdentifier."""

    @pytest.fixture
    def identifier(self, default_store):
        return CipherIdentifier(default_store)

    def test_normalize(self):
        assert normalize(" ab c\n") == "ABC"

    def test_identify_top_n(self, identifier, english_text):
        result = identifier.identify(english_text, top_n=5)
        assert len(result.candidates) == 5
        assert [c.rank for c in result.candidates] == [1, 2, 3, 4, 5]
        scores = [c.score for c in result.candidates]
        assert scores == sorted(scores)
        assert result.best is result.candidates[0]

    def test_identify_uses_normalised_text(self, identifier, english_text):
        result = identifier.identify(english_text)
        assert " " not in result.text
        assert result.fingerprint == fingerprint(normalize(english_text))

    def test_identify_matches_full_ranking(self, identifier, english_text):
        result = identifier.identify(english_text, top_n=3)
        assert result.candidates == identifier.rank(english_text)[:3]

    def test_highlight_outside_top(self, identifier, english_text):
        ranking = identifier.rank(english_text)
        last = ranking[-1]

        result = identifier.identify(english_text, top_n=5, highlight=last.name)
        assert len(result.candidates) == 6
        assert result.candidates[-1].name == last.name
        assert result.candidates[-1].rank == len(ranking)
        assert result.candidates[-1].highlighted

    def test_unknown_highlight(self, identifier):
        with pytest.raises(UnknownCipherError):
            identifier.identify("HELLO", highlight="enigma")

    def test_restricted_candidates(self, identifier, english_text):
        result = identifier.identify(
            english_text, top_n=None, candidate_names=["playfair", "Vigenere"]
        )
        assert sorted(c.name for c in result.candidates) == ["Vigenere", "playfair"]

    def test_short_text_still_ranks(self, identifier):
        result = identifier.identify("", top_n=3)
        assert len(result.candidates) == 3
        assert result.basic_stats.length == 0

    def test_too_long(self, default_store):
        identifier = CipherIdentifier(default_store, max_length=5)
        with pytest.raises(CiphertextTooLongError):
            identifier.identify("ABCDEFG")

    def test_length_checked_after_stripping_whitespace(self, default_store):
        identifier = CipherIdentifier(default_store, max_length=5)
        assert identifier.identify("A B C D E").text == "ABCDE"

    def test_identify_many_keeps_order(self, identifier, english_text):
        texts = [english_text, "AAAAAAAAAA", "QWERTYUIOPASDFGHJKLZXCVBNM", ""]
        results = identifier.identify_many(texts, top_n=2)

        assert [r.text for r in results] == [normalize(t) for t in texts]
        for text, result in zip(texts, results):
            assert result.candidates == identifier.identify(text, top_n=2).candidates

    def test_identify_many_checks_every_length_first(self, default_store):
        identifier = CipherIdentifier(default_store, max_length=5)
        with pytest.raises(CiphertextTooLongError):
            identifier.identify_many(["ABC", "ABCDEFGH"])

    def test_identify_many_empty(self, identifier):
        assert identifier.identify_many([]) == []

    def test_identify_many_propagates_errors(self, identifier):
        with pytest.raises(UnknownCipherError):
            identifier.identify_many(["ABC", "DEF"], highlight="enigma")

    def test_configured_top_n(self, default_store, english_text):
        identifier = CipherIdentifier(default_store, top_n=2)
        assert len(identifier.identify(english_text).candidates) == 2
        assert len(identifier.identify(english_text, top_n=4).candidates) == 4
        assert len(identifier.identify(english_text, top_n=None).candidates) == 58

    def test_from_settings(self):
        identifier = CipherIdentifier.from_settings(
            Settings(max_parallel_workers=2, max_ciphertext_length=50, default_top_n=7)
        )
        assert len(identifier.store) == 58
        assert identifier.max_workers == 2
        assert identifier.max_length == 50
        assert identifier.top_n == 7


class TestFingerprintMany:
    """Test suite for fingerprinting across worker processes."""

    TEXTS = ["ABCDEFGHIJ", "AAAAAAAAAA", "QWERTYUIOP", "", "1234#5678"]

    def test_parallel_matches_serial_in_order(self):
        expected = [fingerprint(text) for text in self.TEXTS]
        assert fingerprint_many(self.TEXTS, n_jobs=2) == expected

    def test_single_job(self):
        assert fingerprint_many(self.TEXTS, n_jobs=1) == [fingerprint(t) for t in self.TEXTS]

    def test_empty(self):
        assert fingerprint_many([], n_jobs=4) == []
