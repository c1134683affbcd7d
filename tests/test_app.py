import logging

import pytest

from app import create_app


@pytest.fixture
def client():
    app = create_app({"TESTING": True, "CORS_ORIGINS": "*", "MAX_TEXT_LENGTH": 64})
    return app.test_client()


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok"}


def test_compress_then_decompress(client):
    resp = client.post("/api/compress", json={"text": "hello world"})
    assert resp.status_code == 200
    body = resp.get_json()
    assert set(body) == {"encodedText", "codeTable"}

    resp = client.post("/api/decompress", json=body)
    assert resp.status_code == 200
    assert resp.get_json() == {"text": "hello world"}


def test_compress_single_symbol(client):
    resp = client.post("/api/compress", json={"text": "aaaaa"})
    assert resp.get_json() == {"encodedText": "00000", "codeTable": {"a": "0"}}


def test_compress_empty_and_missing_text(client):
    empty = {"encodedText": "", "codeTable": {}}
    assert client.post("/api/compress", json={"text": ""}).get_json() == empty
    assert client.post("/api/compress", json={}).get_json() == empty


def test_decompress_with_empty_table(client):
    resp = client.post("/api/decompress", json={"encodedText": "101010", "codeTable": {}})
    assert resp.status_code == 200
    assert resp.get_json() == {"text": ""}


def test_decompress_drops_trailing_bits(client):
    resp = client.post("/api/decompress",
                       json={"encodedText": "0001111110" + "0",
                             "codeTable": {"h": "00", "e": "01", "o": "10", "l": "11"}})
    assert resp.get_json() == {"text": "hello"}


def test_stats(client):
    resp = client.post("/api/stats", json={"text": "hello"})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["originalSize"] == 5
    assert body["compressedSize"] == 2
    assert body["compressionRatio"] == 40.0
    assert body["encodedText"] == "0001111110"


@pytest.mark.parametrize("path,payload", [
    ("/api/compress", {"text": 42}),
    ("/api/compress", ["not", "an", "object"]),
    ("/api/decompress", {"encodedText": "01", "codeTable": ["a"]}),
    ("/api/decompress", {"encodedText": "01", "codeTable": {"ab": "0"}}),
    ("/api/decompress", {"encodedText": "01", "codeTable": {"a": 0}}),
    ("/api/stats", {"text": 3.5}),
])
def test_bad_payloads(client, path, payload):
    resp = client.post(path, json=payload)
    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_non_json_body(client):
    resp = client.post("/api/compress", data="text=hello", content_type="text/plain")
    assert resp.status_code == 400


def test_oversized_text(client):
    resp = client.post("/api/compress", json={"text": "x" * 65})
    assert resp.status_code == 413
    assert "error" in resp.get_json()


def test_cors_header(client):
    resp = client.post("/api/compress", json={"text": "abc"})
    assert resp.headers["Access-Control-Allow-Origin"] == "*"
    resp = client.options("/api/compress")
    assert resp.headers["Access-Control-Allow-Origin"] == "*"


def test_roundtrip_near_text_limit(client):
    text = "hello world" * 5
    resp = client.post("/api/compress", json={"text": text})
    assert resp.status_code == 200
    body = resp.get_json()
    assert len(body["encodedText"]) > 64

    resp = client.post("/api/decompress", json=body)
    assert resp.status_code == 200
    assert resp.get_json() == {"text": text}


def test_encoded_limit_is_configurable():
    app = create_app({"TESTING": True, "MAX_TEXT_LENGTH": 64, "MAX_ENCODED_LENGTH": 8})
    resp = app.test_client().post("/api/decompress",
                                  json={"encodedText": "0" * 9, "codeTable": {"a": "0"}})
    assert resp.status_code == 413
    assert "error" in resp.get_json()


def test_log_level_from_config():
    app = create_app({"TESTING": True, "LOG_LEVEL": "debug"})
    assert app.logger.level == logging.DEBUG


def test_unknown_log_level_falls_back_to_info():
    app = create_app({"TESTING": True, "LOG_LEVEL": "verbose"})
    assert app.logger.level == logging.INFO
