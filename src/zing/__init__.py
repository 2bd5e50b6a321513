"""Zing — a file-system routed HTTP framework.

Drop a module into ``routes/`` and it becomes an endpoint::

    # routes/api/v1/sum.py
    def POST(request):
        return {"result": request.body["a"] + request.body["b"]}

    # app.py
    from zing import App, AppConfig

    app = App(AppConfig(enable_cors=True))
    app.run()

Dynamic segments are written in brackets (``routes/user/[id].py``) and
arrive in ``request.params``.
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "EventBus",
    "Forbidden",
    "HTTPError",
    "MethodNotAllowed",
    "NotFound",
    "PROCEED",
    "Request",
    "Respond",
    "Response",
    "RouteLoadError",
    "StreamingResponse",
    "TooManyRequests",
    "ZingError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import zing`` fast while providing a clean top-level API.
    """
    if name == "App":
        from zing.app import App

        return App

    if name == "AppConfig":
        from zing.config import AppConfig

        return AppConfig

    if name == "EventBus":
        from zing.events import EventBus

        return EventBus

    if name == "Request":
        from zing.http.request import Request

        return Request

    if name in ("Response", "StreamingResponse"):
        from zing.http import response as _resp

        return getattr(_resp, name)

    if name in ("PROCEED", "Respond"):
        from zing.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in (
        "Forbidden",
        "HTTPError",
        "MethodNotAllowed",
        "NotFound",
        "RouteLoadError",
        "TooManyRequests",
        "ZingError",
    ):
        from zing import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
