"""Sum two numbers, from the query string or a JSON body."""

import re

# Leading optional sign and digits, like parseInt: "12abc" -> 12, "abc" -> None
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _parse_int(value):
    if value is None:
        return None
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else None


def GET(request):
    """Add num1 and num2 from the query string."""
    num1 = _parse_int(request.query.get("num1"))
    num2 = _parse_int(request.query.get("num2"))
    if num1 is None or num2 is None:
        return {"error": "Invalid numbers provided"}
    return {"sum": num1 + num2}


def POST(request):
    """Add a and b from the JSON body."""
    body = request.body
    if not isinstance(body, dict) or "a" not in body or "b" not in body:
        return ({"error": "expected a JSON body with 'a' and 'b'"}, 400)
    return {"result": body["a"] + body["b"]}
