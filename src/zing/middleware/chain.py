"""Middleware chain runner.

A trampoline over an ordered sequence of steps: each step returns a
decision, and the runner either advances or stops. No step ever holds
a continuation, so no step can forget to call one.
"""

from collections.abc import Sequence

from zing._internal.invoke import invoke
from zing.http.request import Request
from zing.middleware.protocol import Proceed, Respond, Step


async def run_chain(steps: Sequence[Step], request: Request) -> Respond | None:
    """Run *steps* in order against *request*.

    Returns the first ``Respond`` decision, or None if every step
    proceeded. Raises ``TypeError`` if a step returns something that is
    neither ``Proceed`` nor ``Respond``.
    """
    for step in steps:
        decision = await invoke(step, request)
        if isinstance(decision, Respond):
            return decision
        if not isinstance(decision, Proceed):
            name = getattr(step, "__qualname__", type(step).__qualname__)
            msg = f"Middleware step {name} returned {decision!r}; expected PROCEED or Respond(...)"
            raise TypeError(msg)
    return None
