"""JSON body parsing step. Always first in the chain."""

import json
import logging

from zing.http.request import Request
from zing.middleware.protocol import PROCEED, Decision

logger = logging.getLogger("zing.middleware")


async def parse_json_body(request: Request) -> Decision:
    """Read the whole body and parse it as JSON into ``request.body``.

    An empty body yields ``{}``. A body that is not valid JSON also
    yields ``{}`` and a warning; the request still proceeds.
    """
    raw = await request.read_body()
    request.body = {}
    if not raw:
        return PROCEED
    try:
        request.body = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError):
        logger.warning("Failed to parse JSON body for %s %s", request.method, request.path)
    return PROCEED
