"""Helpers for repo-relative paths.

A repo-relative path uses forward slashes, never starts or ends with a slash,
and is ``""`` for the repository root.
"""

from __future__ import annotations

from modelscope_store._errors import InvalidPath


def normalize(raw: str) -> str:
    """Normalize a path to repo-relative form.

    :raises InvalidPath: If the path contains a null byte or a ``..`` segment.
    """
    if "\0" in raw:
        raise InvalidPath("Path contains null byte", path=raw)
    parts: list[str] = []
    for segment in raw.replace("\\", "/").split("/"):
        if segment == "" or segment == ".":
            continue
        if segment == "..":
            raise InvalidPath("Path contains '..' segment", path=raw)
        parts.append(segment)
    return "/".join(parts)


def trim_slashes(value: str) -> str:
    return value.strip().strip("/")


def is_root(path: str, root: str) -> bool:
    """Return ``True`` if ``path`` addresses the repository root."""
    return normalize(path) in ("", normalize(root))


def strip_root(path: str, root: str) -> str:
    """Convert a host path to a repo-relative path by removing ``root``.

    Paths that are not under ``root`` are assumed to be repo-relative already.

    Example: ``strip_root("/org/model/a/b", "org/model")`` returns ``"a/b"``.
    """
    rel = normalize(path)
    prefix = normalize(root)
    if not prefix:
        return rel
    if rel == prefix:
        return ""
    if rel.startswith(prefix + "/"):
        return rel[len(prefix) + 1 :]
    return rel


def join(parent: str, name: str) -> str:
    """Join a repo-relative directory and a child name."""
    parent = normalize(parent)
    name = trim_slashes(name)
    if not parent:
        return name
    return f"{parent}/{name}"
