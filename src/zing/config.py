"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, TypeAlias

from zing.errors import ConfigurationError

ResponseType: TypeAlias = Literal["json", "text"]


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(enable_cors=True, serve_static=True, port=8080)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 3000

    # Feature switches
    enable_cors: bool = False
    enable_rate_limit: bool = False
    enable_logging: bool = True
    serve_static: bool = False
    default_response_type: ResponseType = "json"
    enable_docs: bool = False

    # Conventional directories, relative to the working directory
    routes_dir: str | Path = "routes"
    static_dir: str | Path = "public"
    log_file: str | Path = "logs/server.log"
    log_level: str = "info"

    # API docs (reserved prefix)
    docs_path: str = "/docs"
    docs_title: str = "zing API"
    docs_version: str = "1.0.0"
    docs_description: str = "Routes discovered from the routes directory"

    # Rate limiting
    rate_limit_requests: int = 100
    rate_limit_window: float = 15 * 60.0
    rate_limit_capacity: int = 10_000  # tracked client addresses

    def __post_init__(self) -> None:
        if self.default_response_type not in ("json", "text"):
            msg = (
                f"default_response_type must be 'json' or 'text', "
                f"got {self.default_response_type!r}"
            )
            raise ConfigurationError(msg)
        if not self.docs_path.startswith("/") or self.docs_path == "/":
            msg = f"docs_path must be a non-root absolute path, got {self.docs_path!r}"
            raise ConfigurationError(msg)
        if self.rate_limit_requests <= 0:
            raise ConfigurationError("rate_limit_requests must be positive")
        if self.rate_limit_window <= 0:
            raise ConfigurationError("rate_limit_window must be positive")
        if self.rate_limit_capacity <= 0:
            raise ConfigurationError("rate_limit_capacity must be positive")
