"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from cipher_identifier.core.config import Settings
from cipher_identifier.main import create_app
from cipher_identifier.services.statistics.fingerprint import ALL_METRICS

API = "/api/v1"


def make_client(tmp_path, **overrides) -> TestClient:
    settings = Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        **overrides,
    )
    return TestClient(create_app(settings))


class TestIdentifyEndpoint:
    """Test suite for POST /identify."""

    @pytest.fixture
    def client(self, tmp_path):
        with make_client(tmp_path) as client:
            yield client

    def test_identify(self, client, english_text):
        response = client.post(f"{API}/identify", json={"ciphertext": english_text, "top_n": 3})
        assert response.status_code == 200

        data = response.json()
        assert isinstance(data["id"], int)
        assert len(data["candidates"]) == 3
        assert [c["rank"] for c in data["candidates"]] == [1, 2, 3]
        assert all(c["cipher_type"] != "" for c in data["candidates"])
        assert set(data["fingerprint"]) == set(ALL_METRICS)
        assert data["basic_stats"]["has_digits"] == "N"
        assert data["basic_stats"]["ignored_chars"] == {".": 3}
        assert data["top_n"] == 3

    def test_highlight(self, client, english_text):
        response = client.post(
            f"{API}/identify",
            json={"ciphertext": english_text, "top_n": 1, "highlight": "Grandpre"},
        )
        assert response.status_code == 200
        highlighted = [c for c in response.json()["candidates"] if c["highlighted"]]
        assert [c["name"] for c in highlighted] == ["Grandpre"]

    def test_unknown_highlight(self, client):
        response = client.post(
            f"{API}/identify",
            json={"ciphertext": "HELLOWORLD", "highlight": "enigma"},
        )
        assert response.status_code == 404
        data = response.json()
        assert data["error"] == "UnknownCipherError"
        assert data["details"]["cipher_name"] == "enigma"

    def test_unknown_candidate(self, client):
        response = client.post(
            f"{API}/identify",
            json={"ciphertext": "HELLOWORLD", "candidates": ["playfair", "enigma"]},
        )
        assert response.status_code == 404

    def test_default_top_n_from_settings(self, tmp_path, english_text):
        with make_client(tmp_path, default_top_n=2) as client:
            response = client.post(f"{API}/identify", json={"ciphertext": english_text})
        assert response.status_code == 200
        assert response.json()["top_n"] == 2
        assert len(response.json()["candidates"]) == 2

    def test_empty_ciphertext_rejected(self, client):
        response = client.post(f"{API}/identify", json={"ciphertext": ""})
        assert response.status_code == 422


class TestLengthLimit:
    """Test suite for the configured ciphertext limit."""

    @pytest.fixture
    def client(self, tmp_path):
        with make_client(tmp_path, max_ciphertext_length=10) as client:
            yield client

    def test_identify_too_long(self, client):
        response = client.post(f"{API}/identify", json={"ciphertext": "A" * 11})
        assert response.status_code == 400
        assert response.json()["error"] == "CiphertextTooLongError"

    def test_statistics_too_long(self, client):
        response = client.post(f"{API}/statistics", json={"ciphertext": "A" * 11})
        assert response.status_code == 400
        assert response.json()["error"] == "CiphertextTooLongError"

    def test_benchmark_skips_too_long_records(self, client):
        records = [
            {"ciphertype": "columnar", "ciphertext": "ABCDEFGHIJ"},
            {"ciphertype": "columnar", "ciphertext": "A" * 50},
        ]
        response = client.post(f"{API}/benchmark", json={"records": records})
        assert response.status_code == 200

        data = response.json()
        assert data["total"] == 1
        assert data["top_n"] == 5
        assert [f["line"] for f in data["failures"]] == [2]

    def test_whitespace_not_counted(self, client):
        response = client.post(f"{API}/identify", json={"ciphertext": "A B C D E F G H I J"})
        assert response.status_code == 200


class TestReadEndpoints:
    """Test suite for statistics, ciphers and benchmark."""

    @pytest.fixture
    def client(self, tmp_path):
        with make_client(tmp_path) as client:
            yield client

    def test_statistics(self, client):
        response = client.post(f"{API}/statistics", json={"ciphertext": "hello world 42"})
        assert response.status_code == 200

        data = response.json()
        assert data["basic_stats"]["length"] == 12
        assert data["basic_stats"]["has_digits"] == "Y"
        assert set(data["fingerprint"]) == set(ALL_METRICS)

    def test_ciphers(self, client):
        response = client.get(f"{API}/ciphers")
        assert response.status_code == 200

        data = response.json()
        assert data["total"] == 58
        first = data["items"][0]
        assert first["name"] == "6x6bifid"
        assert first["primary_type"] == "substitution"
        assert len(first["expected"]) == 9

    def test_benchmark(self, client, english_text):
        records = [
            {"ciphertype": "simplesubstitution", "ciphertext": english_text},
            {"ciphertype": "columnar", "ciphertext": english_text},
        ]
        response = client.post(f"{API}/benchmark", json={"records": records, "top_n": 5})
        assert response.status_code == 200

        data = response.json()
        assert data["total"] == 2
        assert 0 <= data["correct"] <= 2
        assert data["accuracy"] == pytest.approx(100.0 * data["correct"] / 2)


class TestHistoryEndpoints:
    """Test suite for identification history."""

    @pytest.fixture
    def client(self, tmp_path):
        with make_client(tmp_path) as client:
            yield client

    def test_empty_history(self, client):
        response = client.get(f"{API}/history")
        assert response.status_code == 200
        assert response.json()["total"] == 0

    def test_identifications_are_recorded(self, client, english_text):
        first = client.post(f"{API}/identify", json={"ciphertext": english_text}).json()
        client.post(f"{API}/identify", json={"ciphertext": "HELLOWORLD"})

        history = client.get(f"{API}/history").json()
        assert history["total"] == 2
        assert history["page"] == 1
        assert history["items"][0]["ciphertext_preview"] == "HELLOWORLD"
        assert history["items"][1]["ciphertext_preview"].endswith("...")

        detail = client.get(f"{API}/history/{first['id']}")
        assert detail.status_code == 200
        data = detail.json()
        assert data["ciphertext"] == "".join(english_text.split())
        assert data["best_cipher"] == first["candidates"][0]["name"]
        assert len(data["candidates"]) == 5

    def test_pagination(self, client):
        for text in ("AAA", "BBB", "CCC"):
            client.post(f"{API}/identify", json={"ciphertext": text})

        page = client.get(f"{API}/history", params={"page": 2, "page_size": 2}).json()
        assert page["total"] == 3
        assert len(page["items"]) == 1

    def test_missing_identification(self, client):
        response = client.get(f"{API}/history/999")
        assert response.status_code == 404
        data = response.json()
        assert data["error"] == "IdentificationNotFoundError"
        assert "not found" in data["message"]
