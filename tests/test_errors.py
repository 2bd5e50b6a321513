"""Tests for the error hierarchy and its HTTP mapping."""

from pathlib import Path

from zing.errors import (
    Forbidden,
    HTTPError,
    MethodNotAllowed,
    NotFound,
    RouteLoadError,
    TooManyRequests,
    ZingError,
)
from zing.server.errors import handle_http_error, handle_internal_error


class TestErrorTypes:
    def test_hierarchy(self) -> None:
        assert issubclass(HTTPError, ZingError)
        assert issubclass(RouteLoadError, ZingError)
        for cls in (NotFound, Forbidden, MethodNotAllowed, TooManyRequests):
            assert issubclass(cls, HTTPError)

    def test_statuses(self) -> None:
        assert NotFound().status == 404
        assert Forbidden().status == 403
        assert MethodNotAllowed(frozenset({"GET"})).status == 405
        assert TooManyRequests(5).status == 429

    def test_allow_header_is_sorted(self) -> None:
        exc = MethodNotAllowed(frozenset({"POST", "GET", "DELETE"}))
        assert exc.headers == (("Allow", "DELETE, GET, POST"),)

    def test_retry_after_header(self) -> None:
        exc = TooManyRequests(42)
        assert exc.headers == (("Retry-After", "42"),)
        assert exc.detail == "Too many requests, please try again later."

    def test_str(self) -> None:
        assert str(NotFound()) == "404: Not Found"
        assert str(HTTPError(status=418)) == "418"

    def test_route_load_error_keeps_cause(self) -> None:
        cause = SyntaxError("bad")
        exc = RouteLoadError(Path("routes/x.py"), cause)
        assert exc.cause is cause
        assert "routes/x.py" in str(exc)


class TestHandlers:
    def test_http_error_response(self, make_request) -> None:
        response = handle_http_error(MethodNotAllowed(frozenset({"GET"})), make_request("POST"))
        assert response.status == 405
        assert response.json() == {"error": "Method Not Allowed"}
        assert response.header("Allow") == "GET"

    def test_empty_detail_gets_fallback(self, make_request) -> None:
        response = handle_http_error(HTTPError(status=418), make_request())
        assert response.json() == {"error": "Error 418"}

    def test_internal_error_hides_details(self, make_request) -> None:
        response = handle_internal_error(KeyError("secret"), make_request())
        assert response.status == 500
        assert response.json() == {"error": "Internal Server Error"}
