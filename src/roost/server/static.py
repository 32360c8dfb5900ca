"""Static asset serving for the dashboard bundle.

Maps a request path under the static route onto the static directory
and returns the file with a content type from the fixed extension table.
Every request re-reads the file; there is no cache and no conditional GET.
"""

import logging
import os
import re
from pathlib import Path

import anyio

from roost.http.content_types import content_type_for
from roost.http.response import Response

logger = logging.getLogger("roost.server")

_REPEATED_SLASHES = re.compile(r"/{2,}")


class StaticFiles:
    """Serves files from ``directory`` for paths under the static route.

    The request path may arrive in three shapes, tried in this order:
    mounted under the base path (``/admin/static/app.js``), under the
    literal ``/static`` prefix, or under the bare static route.

    Paths are joined onto ``directory`` with lexical normalisation only.
    ``..`` segments collapse the same way a plain path join would, and
    nothing checks that the result stays inside ``directory``.

    Usage::

        static = StaticFiles("ui/dist", static_route="/static", base_path="/admin")
        response = await static.serve("/admin/static/app.js")
    """

    __slots__ = ("_base_url_path", "_directory", "_static_route")

    def __init__(
        self,
        directory: str | Path,
        *,
        static_route: str,
        base_path: str = "/",
    ) -> None:
        self._directory = str(directory)
        self._static_route = static_route
        self._base_url_path = _REPEATED_SLASHES.sub("/", f"{base_path}/{static_route}")

    @property
    def directory(self) -> str:
        return self._directory

    def relative_path(self, path: str) -> str:
        """Strip whichever static prefix *path* carries."""
        if path.startswith(self._base_url_path):
            relative = path[len(self._base_url_path) :]
        elif path.startswith("/static"):
            relative = path[len("/static") :]
        elif path.startswith(self._static_route):
            relative = path[len(self._static_route) :]
        else:
            relative = path
        return relative.removeprefix("/")

    def resolve(self, path: str) -> str:
        """Filesystem path for a request path."""
        return os.path.normpath(f"{self._directory}/{self.relative_path(path)}")

    async def serve(self, path: str) -> Response:
        """Read the file behind *path*.

        404 for anything the filesystem refuses (missing, a directory,
        permission denied); 500 if building the path itself fails.
        """
        try:
            full_path = self.resolve(path)
        except Exception:
            logger.exception("Static path resolution failed for %s", path)
            return Response.text("Internal Server Error", status=500)

        file_path = anyio.Path(full_path)
        try:
            if not await file_path.is_file():
                logger.debug("Static 404 %s -> %s", path, full_path)
                return Response.text("Not Found", status=404)
            body = await file_path.read_bytes()
        except OSError:
            logger.debug("Static 404 %s -> %s", path, full_path, exc_info=True)
            return Response.text("Not Found", status=404)

        content_type = content_type_for(os.path.splitext(full_path)[1])
        return Response(body=body, content_type=content_type)
