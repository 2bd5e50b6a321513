"""Static file serving.

Resolves request paths against a root directory. Directories resolve
their index file. Files are streamed back in chunks.

Security: any path containing ``..`` is refused outright, and the
resolved file must still lie inside the root (symlinks included).
"""

import mimetypes
from collections.abc import AsyncIterator
from pathlib import Path

import anyio

from zing.errors import Forbidden
from zing.http.response import StreamingResponse


class StaticFiles:
    """Serves files from a directory for ``GET`` requests.

    The dispatcher calls ``resolve(path)`` before running the middleware
    chain; ``None`` means "not a static file", and dispatch continues.

    Usage::

        static = StaticFiles("public")
        response = static.resolve("/css/site.css")
    """

    __slots__ = ("_chunk_size", "_directory", "_index")

    def __init__(
        self,
        directory: str | Path,
        *,
        index: str = "index.html",
        chunk_size: int = 64 * 1024,
    ) -> None:
        self._directory = Path(directory).resolve()
        self._index = index
        self._chunk_size = chunk_size

    @property
    def directory(self) -> Path:
        return self._directory

    def ensure_directory(self) -> None:
        """Create the static root if it does not exist yet."""
        self._directory.mkdir(parents=True, exist_ok=True)

    def find(self, path: str) -> Path | None:
        """Map a URL path to a file under the root, or None if there is none.

        Raises ``Forbidden`` for traversal attempts.
        """
        if ".." in path:
            raise Forbidden("Forbidden: path traversal is not allowed")

        relative = path.lstrip("/")
        try:
            file_path = (self._directory / relative).resolve() if relative else self._directory
        except (ValueError, OSError):
            # NUL bytes, over-long names: no such file
            return None
        if not file_path.is_relative_to(self._directory):
            raise Forbidden("Forbidden: path escapes the static directory")

        try:
            if file_path.is_dir():
                file_path = file_path / self._index
            if file_path.is_file():
                return file_path
        except (ValueError, OSError):
            return None
        return None

    def resolve(self, path: str) -> StreamingResponse | None:
        """Build a streaming response for *path*, or None to fall through."""
        file_path = self.find(path)
        if file_path is None:
            return None
        return self.file_response(file_path)

    def file_response(self, file_path: Path, *, status: int = 200) -> StreamingResponse:
        content_type, _ = mimetypes.guess_type(str(file_path))
        if content_type is None:
            content_type = "application/octet-stream"
        size = file_path.stat().st_size
        return StreamingResponse(
            chunks=self._read_chunks(file_path),
            status=status,
            content_type=content_type,
            headers=(("Content-Length", str(size)),),
        )

    async def _read_chunks(self, file_path: Path) -> AsyncIterator[bytes]:
        async with await anyio.open_file(file_path, "rb") as f:
            while chunk := await f.read(self._chunk_size):
                yield chunk
