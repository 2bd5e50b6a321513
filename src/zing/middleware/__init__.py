"""Middleware — ordered steps that return a decision, no inheritance required.

A step is any callable matching:
    def step(request: Request) -> Proceed | Respond   (or async def)

Built-in steps:
    parse_json_body -- Parses the JSON request body (always first)
    CORSMiddleware -- Cross-Origin Resource Sharing headers and preflight
    RateLimiter -- Fixed-window per-client request quota
    StaticFiles -- Static file resolution (run by the dispatcher, before the chain)
"""

from zing.middleware.body import parse_json_body
from zing.middleware.chain import run_chain
from zing.middleware.cors import CORSConfig, CORSMiddleware
from zing.middleware.protocol import PROCEED, Decision, Middleware, Proceed, Respond, Step
from zing.middleware.rate_limit import RateLimitConfig, RateLimiter
from zing.middleware.static import StaticFiles

__all__ = [
    "PROCEED",
    "CORSConfig",
    "CORSMiddleware",
    "Decision",
    "Middleware",
    "Proceed",
    "RateLimitConfig",
    "RateLimiter",
    "Respond",
    "StaticFiles",
    "Step",
    "parse_json_body",
    "run_chain",
]
