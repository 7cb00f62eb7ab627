"""Tests for the reference profile store and cipher metadata."""

import json

import pytest

from cipher_identifier.core.exceptions import (
    ConfigurationError,
    ProfileStoreError,
    UnknownCipherError,
)
from cipher_identifier.services.profiles import CipherCatalog, ProfileStore
from cipher_identifier.services.statistics.fingerprint import CLASSIFYING_METRICS

from conftest import flat_profile, make_vector


def table(**profiles):
    return {"metrics": list(CLASSIFYING_METRICS), "profiles": profiles}


class TestDefaultStore:
    """Test suite for the packaged reference table."""

    def test_size_and_order(self, default_store):
        names = default_store.all_names()
        assert len(default_store) == 58
        assert names[0] == "6x6bifid"
        assert names[-1] == "twosquare"

    def test_every_profile_has_nine_values(self, default_store):
        for profile in default_store:
            assert len(profile.mean) == len(CLASSIFYING_METRICS)
            assert profile.sd is not None
            assert all(v >= 0 for v in profile.sd)

    def test_lookup(self, default_store):
        profile = default_store.lookup("Vigenere")
        assert profile.name == "Vigenere"
        assert profile.expected("IoC") == profile.mean[0]
        assert profile.as_dict()["SDD"] == profile.mean[-1]

    def test_unknown_cipher(self, default_store):
        with pytest.raises(UnknownCipherError) as exc_info:
            default_store.lookup("enigma")
        assert exc_info.value.cipher_name == "enigma"
        assert isinstance(exc_info.value, ConfigurationError)

    def test_contains(self, default_store):
        assert "playfair" in default_store
        assert "enigma" not in default_store


class TestStoreLoading:
    """Test suite for loading and validating profile tables."""

    def test_from_dict_keeps_order(self):
        store = ProfileStore.from_dict(table(
            zeta={"mean": [1.0] * 9},
            alpha={"mean": [2.0] * 9, "sd": [0.5] * 9},
        ))
        assert store.all_names() == ["zeta", "alpha"]
        assert store.lookup("zeta").sd is None
        assert store.lookup("alpha").spread("LR") == 0.5

    def test_missing_file(self, tmp_path):
        with pytest.raises(ProfileStoreError):
            ProfileStore.from_json(tmp_path / "missing.json")

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "profiles.json"
        path.write_text("{not json")
        with pytest.raises(ProfileStoreError):
            ProfileStore.from_json(path)

    def test_wrong_metric_header(self):
        data = {"metrics": ["IoC"], "profiles": {"a": {"mean": [1.0]}}}
        with pytest.raises(ProfileStoreError, match="metrics must be"):
            ProfileStore.from_dict(data)

    def test_empty_table(self):
        with pytest.raises(ProfileStoreError, match="no profiles"):
            ProfileStore.from_dict(table())

    def test_wrong_mean_length(self):
        with pytest.raises(ProfileStoreError, match="means"):
            ProfileStore.from_dict(table(a={"mean": [1.0] * 8}))

    def test_negative_deviation(self):
        with pytest.raises(ProfileStoreError, match="deviations"):
            ProfileStore.from_dict(table(a={"mean": [1.0] * 9, "sd": [-1.0] * 9}))

    def test_duplicate_names(self):
        with pytest.raises(ProfileStoreError, match="duplicate"):
            ProfileStore([flat_profile("a", 1.0), flat_profile("a", 2.0)])


class TestCalibration:
    """Test suite for building profiles from labelled fingerprints."""

    def test_mean_and_population_sd(self):
        store = ProfileStore.from_samples([
            ("first", make_vector(10.0)),
            ("second", make_vector(3.0)),
            ("first", make_vector(20.0)),
        ])
        assert store.all_names() == ["first", "second"]

        first = store.lookup("first")
        assert first.mean == (15.0,) * 9
        assert first.sd == (5.0,) * 9
        assert store.lookup("second").sd == (0.0,) * 9

    def test_no_samples(self):
        with pytest.raises(ProfileStoreError):
            ProfileStore.from_samples([])

    def test_written_table_loads_back(self, tmp_path):
        store = ProfileStore.from_samples([
            ("first", make_vector(1.23456)),
            ("second", make_vector(2.0)),
        ])
        path = tmp_path / "profiles.json"
        store.to_json(path)

        data = json.loads(path.read_text())
        assert data["metrics"] == list(CLASSIFYING_METRICS)

        loaded = ProfileStore.from_json(path)
        assert loaded.all_names() == ["first", "second"]
        assert loaded.lookup("first").mean[0] == 1.2346


class TestCipherCatalog:
    """Test suite for cipher metadata."""

    @pytest.fixture
    def catalog(self):
        return CipherCatalog.load_or_empty()

    def test_covers_every_profile(self, catalog, default_store):
        for name in default_store.all_names():
            assert name in catalog

    def test_primary_type(self, catalog):
        assert catalog.primary_type("6x6bifid") == "substitution"
        assert catalog.primary_type("columnar") == "transposition"

    def test_unknown_cipher(self, catalog):
        assert catalog.primary_type("enigma") == "unknown"
        assert catalog.get("enigma").types == []

    def test_missing_file_degrades(self, tmp_path):
        catalog = CipherCatalog.load_or_empty(tmp_path / "missing.json")
        assert len(catalog) == 0
        assert catalog.primary_type("playfair") == "unknown"

    def test_from_json_raises(self, tmp_path):
        with pytest.raises(ConfigurationError):
            CipherCatalog.from_json(tmp_path / "missing.json")
