"""
Path values.

An immutable, ordered sequence of URL path segments. Segments are either
literals ("users") or parameters (":id"). Paths are built from names,
parsed from strings, extended with extra segments, and rendered back
with `str()`.

Example:
    >>> str(Path("users", "show").concat([":id"]))
    '/users/show/:id'
    >>> Path.parse("u/new/:id").params
    ('id',)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple, Union

PARAM_MARKER = ":"


@dataclass(frozen=True)
class Segment:
    """A single path segment."""

    name: str
    is_param: bool = False

    @classmethod
    def from_string(cls, text: str) -> "Segment":
        if text.startswith(PARAM_MARKER) and len(text) > 1:
            return cls(text[len(PARAM_MARKER):], is_param=True)
        return cls(text)

    @classmethod
    def param(cls, name: str) -> "Segment":
        return cls(name, is_param=True)

    def __str__(self) -> str:
        return f"{PARAM_MARKER}{self.name}" if self.is_param else self.name


SegmentLike = Union[Segment, str]


class Path:
    """
    Immutable path value with structural equality.

    Args:
        *names: Literal segment names. Empty names are skipped, and a name
                containing '/' is split into several literal segments.
    """

    __slots__ = ("_segments",)

    def __init__(self, *names: str):
        segments = []
        for name in names:
            for piece in str(name).split("/"):
                if piece:
                    segments.append(Segment(piece))
        object.__setattr__(self, "_segments", tuple(segments))

    @classmethod
    def _from_segments(cls, segments: Iterable[Segment]) -> "Path":
        path = cls.__new__(cls)
        object.__setattr__(path, "_segments", tuple(segments))
        return path

    @classmethod
    def parse(cls, text: str) -> "Path":
        """Parse "a/:b/c" (leading and repeated slashes ignored)."""
        return cls._from_segments(
            Segment.from_string(piece) for piece in text.split("/") if piece
        )

    @property
    def segments(self) -> Tuple[Segment, ...]:
        return self._segments

    @property
    def params(self) -> Tuple[str, ...]:
        """Parameter names in order of appearance."""
        return tuple(s.name for s in self._segments if s.is_param)

    def concat(self, extra: Iterable[SegmentLike]) -> "Path":
        """Return a new path with `extra` segments appended."""
        added = [
            item if isinstance(item, Segment) else Segment.from_string(item)
            for item in extra
        ]
        return Path._from_segments(self._segments + tuple(added))

    def __setattr__(self, name, value):
        raise AttributeError("Path is immutable")

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Path):
            return self._segments == other._segments
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._segments)

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self):
        return iter(self._segments)

    def __str__(self) -> str:
        return "/" + "/".join(str(s) for s in self._segments)

    def __repr__(self) -> str:
        return f"Path({str(self)!r})"
