"""Middleware step protocol and the Proceed/Respond decision type.

A middleware step is any callable matching::

    async def my_step(request: Request) -> Decision: ...

or the same thing as a plain ``def``. No base class required. The step
inspects or mutates the request, then returns exactly one decision:

- ``PROCEED`` — hand the request to the next step
- ``Respond(response)`` — stop here and send *response*

Returning anything else is a programming error; the chain raises
``TypeError`` rather than leaving the request hanging.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Final, Protocol, TypeAlias

from zing.http.request import Request
from zing.http.response import AnyResponse


@dataclass(frozen=True, slots=True)
class Proceed:
    """Continue with the next step."""


@dataclass(frozen=True, slots=True)
class Respond:
    """Short-circuit the chain with a finished response."""

    response: AnyResponse


PROCEED: Final = Proceed()

Decision: TypeAlias = Proceed | Respond


class Middleware(Protocol):
    """Protocol for zing middleware steps.

    Accepts both functions and callable objects::

        # Function step
        def require_key(request: Request) -> Decision:
            if "x-api-key" not in request.headers:
                return Respond(error_response(401, "Missing API key"))
            return PROCEED

        # Class step
        class Timing:
            async def __call__(self, request: Request) -> Decision:
                request.add_response_header("X-Started", str(time.time()))
                return PROCEED
    """

    def __call__(self, request: Request) -> Decision | Awaitable[Decision]: ...


Step: TypeAlias = Middleware | Callable[[Request], Decision | Awaitable[Decision]]
