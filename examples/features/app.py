"""Features — every built-in step switched on, plus a custom one.

- CORS headers on every response, 204 for preflight ``OPTIONS``
- per-client rate limiting (5 requests per minute here)
- static files from ``public/`` (``GET /`` serves ``public/index.html``)
- API docs at ``GET /docs``
- a custom API-key step registered with ``app.use``

Run:
    python app.py
"""

from pathlib import Path

from zing import PROCEED, App, AppConfig, Respond
from zing.http.response import error_response

HERE = Path(__file__).parent

app = App(
    AppConfig(
        routes_dir=HERE / "routes",
        static_dir=HERE / "public",
        log_file=HERE / "logs" / "server.log",
        enable_logging=__name__ == "__main__",
        enable_cors=True,
        enable_rate_limit=True,
        rate_limit_requests=5,
        rate_limit_window=60,
        serve_static=True,
        enable_docs=True,
        docs_title="Features API",
    )
)


@app.use
def require_key_for_admin(request):
    """Admin routes need the demo API key."""
    if request.path.startswith("/api/admin") and request.headers.get("x-api-key") != "demo":
        return Respond(error_response(401, "Missing or invalid API key"))
    return PROCEED


@app.route("/health")
def health(request):
    """Liveness probe."""
    return {"status": "ok", "routes": len(app.routes)}


if __name__ == "__main__":
    app.run()
