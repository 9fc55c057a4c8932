"""
Unit tests for the route handlers.
"""

import gzip
from pathlib import Path

import pytest

from minihttp.handlers import (
    echo_handler,
    file_handler,
    index_handler,
    user_agent_handler,
)
from minihttp.handlers import echo as echo_module
from minihttp.handlers.echo import accepts_gzip
from minihttp.http.request import HTTPRequest, parse_request
from minihttp.http.response import HTTPStatus


def make_request(method: str, path: str, headers=None, body: bytes = b"", directory: str = "") -> HTTPRequest:
    """Helper to create a request for testing."""
    return HTTPRequest(
        method=method,
        path=path,
        headers=list(headers or []),
        body=body,
        directory=directory,
    )


class TestIndex:

    def test_bare_ok(self):
        response = index_handler(make_request("GET", "/"))
        assert response.to_bytes() == b"HTTP/1.1 200 OK\r\n\r\n"


class TestEcho:
    """Tests for the echo handler."""

    def test_plain(self):
        response = echo_handler(make_request("GET", "/echo/hello"))

        assert response.status == HTTPStatus.OK
        assert response.headers == ["Content-Type: text/plain", "Content-Length: 5"]
        assert response.body == b"hello"

    def test_only_third_segment(self):
        response = echo_handler(make_request("GET", "/echo/abc/def"))
        assert response.body == b"abc"

    def test_empty_segment(self):
        response = echo_handler(make_request("GET", "/echo/"))

        assert response.body == b""
        assert "Content-Length: 0" in response.headers

    def test_gzip(self):
        request = make_request("GET", "/echo/hello", headers=["accept-encoding: gzip"])
        response = echo_handler(request)

        assert response.headers[0] == "Content-Encoding: gzip"
        assert response.headers[1] == "Content-Type: text/plain"
        assert response.headers[2] == f"Content-Length: {len(response.body)}"
        assert gzip.decompress(response.body) == b"hello"

    def test_gzip_in_list(self):
        request = make_request("GET", "/echo/abc", headers=["accept-encoding: deflate, gzip, br"])
        response = echo_handler(request)

        assert gzip.decompress(response.body) == b"abc"

    def test_unsupported_encoding_ignored(self):
        request = make_request("GET", "/echo/abc", headers=["accept-encoding: deflate"])
        response = echo_handler(request)

        assert response.body == b"abc"
        assert not any(h.startswith("Content-Encoding") for h in response.headers)

    def test_header_case_from_wire(self):
        """Mixed-case header names still negotiate after parsing."""
        request = parse_request(b"GET /echo/hi HTTP/1.1\r\nAccept-Encoding: GZIP\r\n\r\n")
        response = echo_handler(request)

        assert gzip.decompress(response.body) == b"hi"

    def test_compression_failure(self, monkeypatch):
        def broken(body):
            raise OSError("boom")

        monkeypatch.setattr(echo_module, "compress", broken)
        request = make_request("GET", "/echo/abc", headers=["accept-encoding: gzip"])

        response = echo_handler(request)

        assert response.to_bytes() == b"HTTP/1.1 500 Internal Server Error\r\n\r\n"


class TestAcceptsGzip:

    @pytest.mark.parametrize("headers,expected", [
        ([], False),
        (["accept-encoding: gzip"], True),
        (["accept-encoding: deflate, gzip"], True),
        (["accept-encoding: x-gzip"], False),
        (["accept-encoding: deflate,gzip"], False),
        (["accept-encodings: gzip"], False),
        (["accept-encoding: deflate", "accept-encoding: gzip"], True),
        (["accept-encoding: gzip", "accept-encoding: gzip"], True),
    ])
    def test_negotiation(self, headers, expected):
        assert accepts_gzip(headers) is expected


class TestUserAgent:

    def test_echoes_value(self):
        request = make_request("GET", "/user-agent", headers=["host: a", "user-agent: curl/8.0"])
        response = user_agent_handler(request)

        assert response.status == HTTPStatus.OK
        assert response.headers == ["Content-Type: text/plain", "Content-Length: 8"]
        assert response.body == b"curl/8.0"

    def test_missing_header(self):
        response = user_agent_handler(make_request("GET", "/user-agent"))

        assert response.body == b""
        assert "Content-Length: 0" in response.headers


class TestFiles:
    """Tests for the file handler."""

    def test_get_existing(self, tmp_path: Path):
        (tmp_path / "data.bin").write_bytes(b"\x00\x01abc")
        request = make_request("GET", "/files/data.bin", directory=str(tmp_path))

        response = file_handler(request)

        assert response.status == HTTPStatus.OK
        assert response.headers == [
            "Content-Type: application/octet-stream",
            "Content-Length: 5",
        ]
        assert response.body == b"\x00\x01abc"

    def test_get_missing(self, tmp_path: Path):
        request = make_request("GET", "/files/doesnotexist", directory=str(tmp_path))

        response = file_handler(request)

        assert response.to_bytes() == b"HTTP/1.1 404 Not Found\r\n\r\n"

    def test_get_directory_is_error(self, tmp_path: Path):
        (tmp_path / "sub").mkdir()
        request = make_request("GET", "/files/sub", directory=str(tmp_path))

        response = file_handler(request)

        assert response.status == HTTPStatus.INTERNAL_SERVER_ERROR
        assert response.body == b""

    def test_post_writes_file(self, tmp_path: Path):
        request = make_request("POST", "/files/new.txt", body=b"abc", directory=str(tmp_path))

        response = file_handler(request)

        assert response.to_bytes() == b"HTTP/1.1 201 Created\r\n\r\n"
        assert (tmp_path / "new.txt").read_bytes() == b"abc"

    def test_post_truncates_existing(self, tmp_path: Path):
        (tmp_path / "f.txt").write_bytes(b"a much longer old content")
        request = make_request("POST", "/files/f.txt", body=b"new", directory=str(tmp_path))

        file_handler(request)

        assert (tmp_path / "f.txt").read_bytes() == b"new"

    def test_post_trims_trailing_nul(self, tmp_path: Path):
        request = make_request("POST", "/files/p.txt", body=b"abc\x00\x00\x00", directory=str(tmp_path))

        file_handler(request)

        assert (tmp_path / "p.txt").read_bytes() == b"abc"

    def test_post_keeps_inner_nul(self, tmp_path: Path):
        request = make_request("POST", "/files/p.bin", body=b"a\x00b", directory=str(tmp_path))

        file_handler(request)

        assert (tmp_path / "p.bin").read_bytes() == b"a\x00b"

    def test_post_write_error(self, tmp_path: Path):
        missing_dir = tmp_path / "nope"
        request = make_request("POST", "/files/x.txt", body=b"abc", directory=str(missing_dir))

        response = file_handler(request)

        assert response.to_bytes() == b"HTTP/1.1 500 Internal Server Error\r\n\r\n"

    @pytest.mark.parametrize("method", ["PUT", "DELETE", "HEAD", "get"])
    def test_other_methods_404(self, tmp_path: Path, method: str):
        (tmp_path / "f.txt").write_bytes(b"abc")
        request = make_request(method, "/files/f.txt", directory=str(tmp_path))

        response = file_handler(request)

        assert response.status == HTTPStatus.NOT_FOUND
        assert (tmp_path / "f.txt").read_bytes() == b"abc"

    def test_empty_directory_uses_cwd(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "here.txt").write_bytes(b"cwd")

        response = file_handler(make_request("GET", "/files/here.txt"))

        assert response.body == b"cwd"

    def test_post_then_get(self, tmp_path: Path):
        directory = str(tmp_path)
        file_handler(make_request("POST", "/files/test.txt", body=b"abc", directory=directory))

        response = file_handler(make_request("GET", "/files/test.txt", directory=directory))

        assert response.body == b"abc"
        assert "Content-Length: 3" in response.headers
