"""Tests for the middleware chain runner and the JSON body step."""

import logging

import pytest

from zing.http.response import Response
from zing.middleware.body import parse_json_body
from zing.middleware.chain import run_chain
from zing.middleware.protocol import PROCEED, Respond


class TestRunChain:
    async def test_all_proceed_returns_none(self, make_request) -> None:
        seen: list[str] = []

        def first(request):
            seen.append("first")
            return PROCEED

        async def second(request):
            seen.append("second")
            return PROCEED

        assert await run_chain([first, second], make_request()) is None
        assert seen == ["first", "second"]

    async def test_respond_short_circuits(self, make_request) -> None:
        seen: list[str] = []

        def gate(request):
            seen.append("gate")
            return Respond(Response("stop", status=401))

        def never(request):
            seen.append("never")
            return PROCEED

        decision = await run_chain([gate, never], make_request())
        assert isinstance(decision, Respond)
        assert decision.response.status == 401
        assert seen == ["gate"]

    async def test_step_can_mutate_request(self, make_request) -> None:
        def tag(request):
            request.add_response_header("X-Seen", "yes")
            return PROCEED

        request = make_request()
        await run_chain([tag], request)
        assert request.response_headers == [("X-Seen", "yes")]

    async def test_missing_decision_is_an_error(self, make_request) -> None:
        def forgetful(request):
            return None

        with pytest.raises(TypeError, match="forgetful"):
            await run_chain([forgetful], make_request())

    async def test_callable_object_step(self, make_request) -> None:
        class Counter:
            def __init__(self) -> None:
                self.calls = 0

            async def __call__(self, request):
                self.calls += 1
                return PROCEED

        counter = Counter()
        await run_chain([counter, counter], make_request())
        assert counter.calls == 2


class TestParseJsonBody:
    async def test_valid_json(self, make_request) -> None:
        request = make_request("POST", chunks=[b'{"a": 1,', b' "b": 2}'])
        assert await parse_json_body(request) is PROCEED
        assert request.body == {"a": 1, "b": 2}

    async def test_empty_body_is_empty_mapping(self, make_request) -> None:
        request = make_request("POST")
        await parse_json_body(request)
        assert request.body == {}

    async def test_malformed_json_degrades_with_warning(self, make_request, caplog) -> None:
        request = make_request("POST", "/api", chunks=[b"{not json"])
        with caplog.at_level(logging.WARNING, logger="zing.middleware"):
            decision = await parse_json_body(request)
        assert decision is PROCEED
        assert request.body == {}
        assert "Failed to parse JSON body for POST /api" in caplog.text

    async def test_invalid_utf8_degrades(self, make_request) -> None:
        request = make_request("POST", chunks=[b"\x80abc"])
        assert await parse_json_body(request) is PROCEED
        assert request.body == {}
