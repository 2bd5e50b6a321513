"""Console and file logging for the ``zing`` logger hierarchy."""

import logging
from pathlib import Path

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"

# Marks handlers attached by configure_logging so repeated calls don't stack them
_HANDLER_TAG = "_zing_handler"


def configure_logging(log_file: str | Path, level: str = "info") -> logging.Logger:
    """Attach a console handler and a file handler to the ``zing`` logger.

    Creates the log file's directory if needed. Idempotent: calling it
    again for the same file does not add duplicate handlers.
    """
    root = logging.getLogger("zing")
    root.setLevel(level.upper())

    path = Path(log_file).resolve()
    path.parent.mkdir(parents=True, exist_ok=True)

    attached = {getattr(h, _HANDLER_TAG) for h in root.handlers if hasattr(h, _HANDLER_TAG)}
    formatter = logging.Formatter(LOG_FORMAT)

    if "console" not in attached:
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        setattr(console, _HANDLER_TAG, "console")
        root.addHandler(console)

    if f"file:{path}" not in attached:
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        setattr(file_handler, _HANDLER_TAG, f"file:{path}")
        root.addHandler(file_handler)

    root.info("Logging initialized")
    return root
