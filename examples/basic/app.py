"""Basic — file-system routing with query, body, and path parameters.

Every module under ``routes/`` becomes an endpoint::

    routes/api/v1/sum.py   -> GET/POST /api/v1/sum
    routes/user.py         -> GET/POST/DELETE /user
    routes/user/[id].py    -> GET/PUT/DELETE /user/<id>

Run:
    python app.py
"""

from pathlib import Path

from zing import App, AppConfig

HERE = Path(__file__).parent

app = App(
    AppConfig(
        routes_dir=HERE / "routes",
        log_file=HERE / "logs" / "server.log",
        # Only write log files when serving for real
        enable_logging=__name__ == "__main__",
    )
)


@app.on("route.failed")
def report_failure(data):
    print(f"could not load {data['file']}: {data['error']}")


if __name__ == "__main__":
    app.run()
