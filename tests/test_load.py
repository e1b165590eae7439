"""Tests for the end-to-end fetch pipeline."""

import pytest

from browser.errors import ConnectionFailed, UnsupportedMediaType, UnsupportedScheme
from browser.load import fetch_url, load, render


class TestLoad:
    def test_data_url(self):
        """data:text/html,Hi loads to its payload."""
        assert load("data:text/html,Hi") == "Hi"

    def test_data_url_markup_stripped(self):
        assert load("data:text/html,<p>Hello</p> <i>there</i>") == "Hello there"

    def test_data_url_bad_media_type(self):
        with pytest.raises(UnsupportedMediaType):
            load("data:text/plain,Hi")

    def test_unknown_scheme(self):
        with pytest.raises(UnsupportedScheme):
            load("gopher://example.com/")

    def test_file_url(self, tmp_path):
        page = tmp_path / "index.html"
        page.write_text("<html><head><title>x</title></head><body>On disk</body></html>")
        assert load(f"file://{page}") == "On disk"

    def test_http_ok(self, http_server):
        port, requests = http_server(
            b"HTTP/1.1 200 OK\r\nContent-Type: text/html\r\n\r\n"
            b"<html><body><h1>Welcome</h1></body></html>"
        )
        assert load(f"http://127.0.0.1:{port}/", {"Accept": "text/html"}) == "Welcome"
        assert b"accept: text/html\r\n" in requests[0]

    def test_http_not_found_echoes_reason(self, http_server):
        """Reason text is echoed, not the real body."""
        port, _ = http_server(
            b"HTTP/1.1 404 Not Found\r\nContent-Type: text/html\r\n\r\n"
            b"<html><body>The real error page</body></html>"
        )
        response = fetch_url(f"http://127.0.0.1:{port}/missing")
        assert response.body == b"Not Found"

    def test_http_not_found_text(self, http_server):
        port, _ = http_server(b"HTTP/1.1 404 Not Found\r\n\r\n")
        assert load(f"http://127.0.0.1:{port}/missing") == "404 Not Found"


class TestRender:
    def test_success_text(self):
        assert render("data:text/html,Hi") == "Hi"

    def test_error_becomes_text(self):
        """Failures are rendered as their description."""
        assert render("data:text/plain,Hi") == "Unsupported data media type: text/plain"

    def test_connection_error_text(self, monkeypatch):
        def refuse(descriptor):
            raise ConnectionFailed("Cannot connect to example.invalid:80: refused")

        monkeypatch.setattr("browser.load.fetch", refuse)
        assert render("http://example.invalid/") == "Cannot connect to example.invalid:80: refused"
