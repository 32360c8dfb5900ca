"""Path matching for ``:name`` route patterns.

Examples::

    match_path("/queues/:name", "/queues/mail")      -> {"name": "mail"}
    match_path("/queues/:name", "/queues/mail/jobs") -> None
    match_path("/a/b", "/a/c")                       -> None
"""


def split_path(path: str) -> list[str]:
    """Split on ``/`` and drop empty segments (leading, trailing, doubled)."""
    return [part for part in path.split("/") if part]


def match_path(pattern: str, path: str) -> dict[str, str] | None:
    """Match *path* against *pattern*, returning bound params or ``None``.

    Segment counts must be equal. A pattern segment starting with ``:``
    binds the path segment verbatim; every other segment must be equal.
    """
    pattern_parts = split_path(pattern)
    path_parts = split_path(path)

    if len(pattern_parts) != len(path_parts):
        return None

    params: dict[str, str] = {}
    for pattern_part, path_part in zip(pattern_parts, path_parts, strict=True):
        if pattern_part.startswith(":"):
            params[pattern_part[1:]] = path_part
        elif pattern_part != path_part:
            return None

    return params
