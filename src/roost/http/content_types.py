"""Extension -> MIME type table for static assets.

A fixed table: adding a type is a code change, not configuration.
"""

DEFAULT_CONTENT_TYPE = "application/octet-stream"

CONTENT_TYPES: dict[str, str] = {
    ".js": "application/javascript",
    ".mjs": "application/javascript",
    ".css": "text/css",
    ".html": "text/html",
    ".json": "application/json",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
    ".ico": "image/x-icon",
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".ttf": "font/ttf",
    ".eot": "application/vnd.ms-fontobject",
}


def content_type_for(extension: str) -> str:
    """Resolve a file extension (``".js"``) to its MIME type.

    Case-insensitive. Unknown or empty extensions resolve to
    ``application/octet-stream``.
    """
    return CONTENT_TYPES.get(extension.lower(), DEFAULT_CONTENT_TYPE)
