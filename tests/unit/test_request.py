"""
Unit tests for HTTP request parsing.
"""

import pytest

from minihttp.http.request import (
    HTTPRequest,
    RequestParser,
    HTTPParseError,
    parse_request,
    path_segment,
)


class TestRequestParser:
    """Tests for RequestParser class."""

    def test_parse_simple_get(self, sample_get_request: bytes):
        """Test parsing a simple GET request."""
        parser = RequestParser()
        request = parser.parse(sample_get_request, ("127.0.0.1", 12345))

        assert request.method == "GET"
        assert request.path == "/echo/abc"
        assert request.version == "HTTP/1.1"
        assert request.client_address == ("127.0.0.1", 12345)
        assert request.body == b""

    def test_headers_lower_cased_in_order(self, sample_get_request: bytes):
        """Header lines are kept raw, in order, lower-cased in full."""
        request = parse_request(sample_get_request)

        assert request.headers == [
            "host: localhost:4221",
            "user-agent: pytest/1.0",
            "accept: */*",
        ]

    def test_parse_post_with_body(self, sample_post_request: bytes):
        """Body is everything after the last CRLF."""
        request = parse_request(sample_post_request)

        assert request.method == "POST"
        assert request.path == "/files/notes.txt"
        assert request.body == b"hello world"
        assert request.headers == [
            "host: localhost:4221",
            "content-type: application/octet-stream",
            "content-length: 11",
        ]

    def test_directory_injected(self, sample_post_request: bytes):
        """The serving directory comes from the parser, not the wire."""
        parser = RequestParser(directory="/srv/data")
        request = parser.parse(sample_post_request)

        assert request.directory == "/srv/data"

    def test_parse_missing_headers(self):
        """Test parsing request with no headers."""
        request = parse_request(b"GET / HTTP/1.1\r\n\r\n")

        assert request.method == "GET"
        assert request.path == "/"
        assert request.headers == []
        assert request.body == b""

    def test_request_line_only(self):
        """A buffer with no CRLF at all still parses."""
        request = parse_request(b"GET /user-agent HTTP/1.1")

        assert request.path == "/user-agent"
        assert request.headers == []
        assert request.body == b""

    def test_extra_request_line_tokens_ignored(self):
        request = parse_request(b"GET /a HTTP/1.1 trailing junk\r\n\r\n")

        assert (request.method, request.path, request.version) == ("GET", "/a", "HTTP/1.1")

    def test_method_and_version_not_validated(self):
        request = parse_request(b"BREW /pot HTCPCP/1.0\r\n\r\n")

        assert request.method == "BREW"
        assert request.version == "HTCPCP/1.0"

    def test_parse_invalid_request_line(self):
        """Fewer than three request-line tokens is a 400."""
        with pytest.raises(HTTPParseError) as exc_info:
            parse_request(b"GET\r\nHost: test\r\n\r\n")

        assert exc_info.value.status_code == 400

    def test_parse_empty_buffer(self):
        with pytest.raises(HTTPParseError):
            parse_request(b"")

    def test_body_with_crlf_keeps_last_line(self):
        """Only the text after the final CRLF survives as the body."""
        raw = b"POST /files/a HTTP/1.1\r\n\r\nline1\r\nline2"
        request = parse_request(raw)

        assert request.body == b"line2"

    def test_body_is_not_lower_cased(self):
        raw = b"POST /files/a HTTP/1.1\r\nHost: X\r\n\r\nMiXeD"
        request = parse_request(raw)

        assert request.body == b"MiXeD"
        assert request.headers == ["host: x"]


class TestHTTPRequest:
    """Tests for HTTPRequest dataclass."""

    def test_get_header_case_insensitive(self):
        request = HTTPRequest(method="GET", path="/", headers=["user-agent: curl/8.0"])

        assert request.get_header("User-Agent") == "curl/8.0"
        assert request.get_header("user-agent") == "curl/8.0"

    def test_get_header_default(self):
        """Test get_header with default value."""
        request = HTTPRequest(method="GET", path="/")

        assert request.get_header("X-Missing") == ""
        assert request.get_header("X-Missing", "default") == "default"

    def test_get_header_first_match_wins(self):
        request = HTTPRequest(
            method="GET",
            path="/",
            headers=["user-agent: first", "user-agent: second"],
        )

        assert request.user_agent == "first"

    def test_user_agent_missing(self):
        assert HTTPRequest(method="GET", path="/").user_agent == ""


class TestPathSegment:
    """Tests for path_segment()."""

    @pytest.mark.parametrize("path,expected", [
        ("/files/notes.txt", "notes.txt"),
        ("/echo/abc", "abc"),
        ("/echo/abc/def", "abc"),
        ("/echo/", ""),
        ("/", ""),
    ])
    def test_third_element(self, path, expected):
        assert path_segment(path) == expected

