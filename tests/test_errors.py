"""Tests for roost.errors and roost.server.errors."""

import logging

import pytest

from roost.errors import (
    ActivationError,
    ConfigurationError,
    ConstructionError,
    Forbidden,
    HTTPError,
    MethodNotAllowed,
    NotFound,
    RoostError,
    UnknownToggleError,
)
from roost.http.request import Request
from roost.server.errors import handle_http_error, handle_internal_error


class RolesController:
    pass


class TestHierarchy:
    def test_all_are_roost_errors(self) -> None:
        for exc_type in (ConfigurationError, ConstructionError, ActivationError, HTTPError):
            assert issubclass(exc_type, RoostError)

    def test_unknown_toggle_is_key_error(self) -> None:
        exc = UnknownToggleError("components")
        assert isinstance(exc, KeyError)
        assert str(exc) == "Unknown toggle: 'components'"


class TestConstructionError:
    def test_default_reason(self) -> None:
        exc = ConstructionError(RolesController, "auth")
        assert str(exc) == "Cannot construct RolesController: dependency 'auth' has no provider"
        assert exc.controller is RolesController
        assert exc.dependency == "auth"

    def test_custom_reason(self) -> None:
        exc = ConstructionError(RolesController, "auth", "provider raised OSError()")
        assert str(exc).endswith("provider raised OSError()")

    def test_without_dependency(self) -> None:
        exc = ConstructionError(RolesController, None, "constructor raised TypeError()")
        assert str(exc) == "Cannot construct RolesController: constructor raised TypeError()"
        assert exc.dependency is None


class TestActivationError:
    def test_names_controller_and_cause(self) -> None:
        cause = ValueError("duplicate route")
        exc = ActivationError(RolesController, cause)
        assert exc.controller is RolesController
        assert exc.cause is cause
        assert str(exc) == "Activation of RolesController failed: duplicate route"


class TestHTTPErrors:
    def test_not_found(self) -> None:
        exc = NotFound()
        assert exc.status == 404
        assert str(exc) == "404: Not Found"

    def test_forbidden(self) -> None:
        assert Forbidden().status == 403
        assert Forbidden("nope").detail == "nope"

    def test_method_not_allowed(self) -> None:
        exc = MethodNotAllowed(frozenset({"POST", "GET"}))
        assert exc.status == 405
        assert exc.headers == (("Allow", "GET, POST"),)
        assert "GET, POST" in exc.detail

    def test_raisable(self) -> None:
        with pytest.raises(HTTPError):
            raise Forbidden()


class TestErrorResponses:
    def test_http_error_response(self) -> None:
        exc = MethodNotAllowed(frozenset({"GET"}))
        response = handle_http_error(exc, Request("POST", "/agents"), debug=False)
        assert response.status == 405
        assert response.header("Allow") == "GET"
        assert response.content_type.startswith("text/plain")

    def test_internal_error_hides_details(self, caplog: pytest.LogCaptureFixture) -> None:
        try:
            raise ZeroDivisionError("bad math")
        except ZeroDivisionError as exc:
            with caplog.at_level(logging.ERROR, logger="roost.server"):
                response = handle_internal_error(exc, Request("GET", "/boom"), debug=False)

        assert response.status == 500
        assert response.text == "Internal Server Error"
        assert any("500 GET /boom" in r.message for r in caplog.records)

    def test_internal_error_debug_traceback(self) -> None:
        try:
            raise ZeroDivisionError("bad math")
        except ZeroDivisionError as exc:
            response = handle_internal_error(exc, Request("GET", "/boom"), debug=True)

        assert "ZeroDivisionError: bad math" in response.text
