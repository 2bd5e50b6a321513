"""Response serialisation — maps handler return values to Response objects.

isinstance-based dispatch, no magic, fully predictable.
"""

from typing import Any

from zing.config import ResponseType
from zing.http.response import Response, StreamingResponse, json_response, text_response


def _serialize(value: Any, response_type: ResponseType) -> Response:
    if response_type == "json":
        return json_response(value)
    return text_response(value)


def negotiate(value: Any, response_type: ResponseType) -> Response | StreamingResponse:
    """Convert a route handler's return value to a response.

    Dispatch order:

    1. ``Response`` / ``StreamingResponse`` -> pass through
    2. ``list``               -> serialised as a whole
    3. ``(value, int)``       -> serialise value, override status
    4. ``(value, int, dict)`` -> serialise value, override status + headers
    5. anything else          -> JSON (``json.dumps``) or text (``str``),
                                 per the configured response type
    """
    match value:
        case Response() | StreamingResponse():
            return value
        case list():
            return _serialize(value, response_type)
        case (inner, int() as status):
            return negotiate(inner, response_type).with_status(status)
        case (inner, int() as status, dict() as headers):
            return negotiate(inner, response_type).with_status(status).with_headers(headers)
        case _:
            return _serialize(value, response_type)
