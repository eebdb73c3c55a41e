"""Immutable, case-insensitive HTTP headers.

Implements ``Mapping[str, str]`` with multi-value access. Every change
(``set``, ``add``, ``remove``) returns a new ``Headers``; the original is
never touched, so a header object shared between middleware and
concurrent requests cannot be altered under them.
"""

from collections.abc import Iterable, Iterator, Mapping


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive HTTP headers.

    ``__getitem__`` returns the first matching value.
    ``get_list`` returns all values for a header (e.g. multiple ``Set-Cookie``).
    Names keep the casing they were given; lookups ignore it.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: Iterable[tuple[str, str]] = ()) -> None:
        object.__setattr__(self, "_raw", tuple((str(k), str(v)) for k, v in raw))

    @classmethod
    def from_mapping(
        cls, headers: "Headers | Mapping[str, str] | Iterable[tuple[str, str]] | None"
    ) -> "Headers":
        """Build Headers from a mapping, pair iterable, or ``None``."""
        if headers is None:
            return cls()
        if isinstance(headers, Headers):
            return headers
        if isinstance(headers, Mapping):
            return cls(headers.items())
        return cls(headers)

    def __setattr__(self, name: str, value: object) -> None:
        msg = "Headers are immutable; use set() or add() to derive a new instance"
        raise AttributeError(msg)

    def __getitem__(self, key: str) -> str:
        key_lower = key.lower()
        for name, value in self._raw:
            if name.lower() == key_lower:
                return value
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        key_lower = key.lower()
        return any(name.lower() == key_lower for name, _ in self._raw)

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        for name, _ in self._raw:
            key = name.lower()
            if key not in seen:
                seen.add(key)
                yield key

    def __len__(self) -> int:
        return len(set(self))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Headers):
            return self.to_dict() == other.to_dict()
        if isinstance(other, Mapping):
            return self.to_dict() == {str(k).lower(): v for k, v in other.items()}
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"Headers({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        try:
            return self[key]
        except KeyError:
            return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        key_lower = key.lower()
        return [value for name, value in self._raw if name.lower() == key_lower]

    # -- Copy-on-write derivation --

    def set(self, name: str, value: str) -> "Headers":
        """Return new Headers with *name* replaced by a single *value*."""
        return Headers((*self.remove(name)._raw, (name, value)))

    def add(self, name: str, value: str) -> "Headers":
        """Return new Headers with *value* appended to *name*."""
        return Headers((*self._raw, (name, value)))

    def remove(self, name: str) -> "Headers":
        """Return new Headers without any value for *name*."""
        key_lower = name.lower()
        return Headers(pair for pair in self._raw if pair[0].lower() != key_lower)

    def merge(self, other: "Headers | Mapping[str, str]") -> "Headers":
        """Return new Headers where every header in *other* replaces ours."""
        incoming = Headers.from_mapping(other)
        kept = (pair for pair in self._raw if pair[0].lower() not in incoming)
        return Headers((*kept, *incoming.raw))

    def to_dict(self) -> dict[str, str]:
        """Flatten to a plain dict with lowercase names.

        Repeated headers are joined with ``", "``, the way a fetch-style
        ``Headers.entries()`` reports them.
        """
        return {key: ", ".join(self.get_list(key)) for key in self}

    @property
    def raw(self) -> tuple[tuple[str, str], ...]:
        """Header pairs in insertion order, original casing preserved."""
        return self._raw
