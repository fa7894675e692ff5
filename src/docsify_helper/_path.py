"""DocPath — immutable, normalized path relative to the docs root."""

from __future__ import annotations

from typing import Final
from urllib.parse import quote

from docsify_helper._errors import InvalidPath

# Characters JavaScript's encodeURIComponent leaves untouched, beyond quote()'s own.
_URL_SAFE = "!*'()"


class DocPath:
    """An immutable, normalized path inside the documentation tree.

    :param raw: The raw relative path to normalize and validate.
    :raises InvalidPath: If the path is malformed or escapes the root.
    """

    __slots__ = ("_path",)
    _path: Final[str]  # type: ignore[misc]

    def __init__(self, raw: str) -> None:
        normalized = self._normalize(raw)
        object.__setattr__(self, "_path", normalized)

    @classmethod
    def from_parts(cls, parts: tuple[str, ...] | list[str]) -> DocPath:
        """Build a path from already-split segments, taken verbatim.

        Unlike the constructor, no separator rewriting happens, so a backslash
        inside a POSIX file name stays part of that name.

        :raises InvalidPath: If a segment is empty, ``.``/``..``, or contains
            ``/`` or a null byte.
        """
        if not parts:
            raise InvalidPath("Path has no segments")
        for segment in parts:
            if segment in ("", ".", "..") or "/" in segment or "\0" in segment:
                raise InvalidPath(f"Invalid path segment {segment!r}", path="/".join(parts))
        p = object.__new__(cls)
        object.__setattr__(p, "_path", "/".join(parts))
        return p

    @staticmethod
    def _normalize(raw: str) -> str:
        if "\0" in raw:
            raise InvalidPath("Path contains null byte", path=raw)
        p = raw.replace("\\", "/")
        parts: list[str] = []
        for segment in p.split("/"):
            if segment == "" or segment == ".":
                continue
            if segment == "..":
                raise InvalidPath("Path contains '..' segment", path=raw)
            parts.append(segment)
        if not parts:
            raise InvalidPath("Path is empty after normalization", path=raw)
        return "/".join(parts)

    @property
    def name(self) -> str:
        """Final component of the path."""
        return self._path.rsplit("/", 1)[-1]

    @property
    def parts(self) -> tuple[str, ...]:
        """Tuple of path components."""
        return tuple(self._path.split("/"))

    @property
    def depth(self) -> int:
        """Number of segments above the final component (0 at root level)."""
        return self._path.count("/")

    def to_url(self) -> str:
        """Percent-encode each segment independently and join them with ``/``.

        Example: ``DocPath("My Docs/a&b.md").to_url()`` returns
        ``"My%20Docs/a%26b.md"``.
        """
        return "/".join(quote(part, safe=_URL_SAFE) for part in self.parts)

    def __str__(self) -> str:
        return self._path

    def __repr__(self) -> str:
        return f"DocPath({self._path!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DocPath):
            return self._path == other._path
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._path)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"DocPath is immutable: cannot set '{name}'")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"DocPath is immutable: cannot delete '{name}'")
