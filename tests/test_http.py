"""Tests for roost.http — Request and Response value objects."""

import pytest

from roost.http.request import Request
from roost.http.response import Response


class _User:
    username = "alice"


class TestRequest:
    def test_from_asgi(self) -> None:
        scope = {
            "type": "http",
            "method": "GET",
            "path": "/agents",
            "headers": [(b"HX-Request", b"true"), (b"Accept", b"text/html")],
            "user": "bob",
        }
        request = Request.from_asgi(scope)

        assert request.method == "GET"
        assert request.path == "/agents"
        assert request.headers["accept"] == "text/html"
        assert request.is_fragment
        assert request.user == "bob"

    def test_from_asgi_user_object(self) -> None:
        scope = {"method": "GET", "path": "/", "user": _User()}
        assert Request.from_asgi(scope).user == "alice"

    def test_from_asgi_anonymous(self) -> None:
        request = Request.from_asgi({"method": "GET", "path": "/"})
        assert request.user is None
        assert not request.is_fragment

    def test_with_path_params(self) -> None:
        request = Request("GET", "/pipelines/build")
        updated = request.with_path_params({"name": "build"})
        assert updated.path_params == {"name": "build"}
        assert request.path_params == {}

    def test_frozen(self) -> None:
        request = Request("GET", "/")
        with pytest.raises(AttributeError):
            request.path = "/other"  # type: ignore[misc]


class TestResponse:
    def test_defaults(self) -> None:
        response = Response("hi")
        assert response.status == 200
        assert response.content_type == "text/html; charset=utf-8"
        assert response.body_bytes == b"hi"

    def test_transformations_return_new(self) -> None:
        original = Response("hi")
        changed = original.with_status(404).with_header("X-A", "1").with_headers({"X-B": "2"})
        assert original.status == 200
        assert original.headers == ()
        assert changed.status == 404
        assert changed.headers == (("X-A", "1"), ("X-B", "2"))

    def test_header_lookup_is_case_insensitive(self) -> None:
        response = Response().with_header("Allow", "GET")
        assert response.header("allow") == "GET"
        assert response.header("missing") is None

    def test_bytes_body_text(self) -> None:
        assert Response(b"caf\xc3\xa9").text == "café"
