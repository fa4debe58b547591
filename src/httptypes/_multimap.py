"""MultiValueMap: case-insensitive name to ordered values mapping.

Underlies both request/response headers and query parameters.

- Lookup is case-insensitive; the casing of the first occurrence of a
  name is kept for serialization.
- Value order within a name is preserved exactly as supplied.
- A name with zero values is never stored (equivalent to absent).
- Immutable after construction: there is no mutation API.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Self

from httptypes._errors import ValidationError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping, Sequence
    from typing import TypeAlias

    RawValues: TypeAlias = str | Sequence[str]
    RawMultiValueMap: TypeAlias = Mapping[str, RawValues]


class MultiValueMap:
    """Immutable mapping from a name to an ordered tuple of string values.

    Accepts a mapping whose values are either a single string or a
    list/tuple of strings. Single strings become one-element tuples and
    empty sequences are dropped.

    Equality compares the stored name casing as well as the values, so two
    maps are equal only when they serialize to the same object. Name order
    is not significant.

    >>> headers = HttpHeaders({"Accept": "*/*", "X-Multi": ["a", "b"]})
    >>> headers.get("accept")
    '*/*'
    >>> headers.get_all("x-multi")
    ('a', 'b')
    """

    __slots__ = ("_entries",)

    # Used in error messages when the caller doesn't name the field.
    default_field = "values"

    _entries: dict[str, tuple[str, tuple[str, ...]]]

    def __init__(
        self,
        values: RawMultiValueMap | MultiValueMap | None = None,
        /,
        *,
        field: str | None = None,
    ) -> None:
        if isinstance(values, MultiValueMap):
            self._entries = dict(values._entries)
            return
        field = field or self.default_field
        entries: dict[str, tuple[str, tuple[str, ...]]] = {}
        if values is not None:
            if not hasattr(values, "items"):
                msg = f"{field} must be an object, got {type(values).__name__}"
                raise ValidationError(msg, field)
            for name, raw in values.items():
                _merge(entries, name, _normalize_values(name, raw, field), field)
        self._entries = entries

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]], *, field: str | None = None) -> Self:
        """Build a map from (name, value) pairs, accumulating repeated names in order."""
        instance = cls.__new__(cls)
        entries: dict[str, tuple[str, tuple[str, ...]]] = {}
        for name, value in pairs:
            _merge(entries, name, (value,), field or cls.default_field)
        instance._entries = entries
        return instance

    def get(self, name: str) -> str | None:
        """The first value for ``name`` (case-insensitive), or None if absent."""
        entry = self._entries.get(name.lower())
        return entry[1][0] if entry is not None else None

    def get_all(self, name: str) -> tuple[str, ...]:
        """All values for ``name`` (case-insensitive), or an empty tuple if absent."""
        entry = self._entries.get(name.lower())
        return entry[1] if entry is not None else ()

    def items(self) -> Iterator[tuple[str, tuple[str, ...]]]:
        """Yield (name, values) in insertion order, with the original name casing."""
        for display_name, values in self._entries.values():
            yield display_name, values

    def pairs(self) -> Iterator[tuple[str, str]]:
        """Yield every (name, value) pair, names in insertion order then values in order."""
        for name, values in self.items():
            for value in values:
                yield name, value

    def to_dict(self) -> dict[str, str | list[str]]:
        """Serialize for the wire: one value as a bare string, several as a list."""
        return {
            name: values[0] if len(values) == 1 else list(values)
            for name, values in self.items()
        }

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._entries

    def __iter__(self) -> Iterator[str]:
        return (display_name for display_name, _ in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MultiValueMap):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(frozenset(self._entries.items()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_dict()!r})"


class HttpHeaders(MultiValueMap):
    """HTTP request or response headers."""

    __slots__ = ()
    default_field = "headers"


class HttpQuery(MultiValueMap):
    """Decoded query string parameters."""

    __slots__ = ()
    default_field = "query"


def _normalize_values(name: Any, raw: Any, field: str) -> tuple[str, ...]:
    if isinstance(raw, str):
        return (raw,)
    if isinstance(raw, (list, tuple)):
        for value in raw:
            if not isinstance(value, str):
                msg = (
                    f"{field} {name!r} values must be strings, "
                    f"got {type(value).__name__}"
                )
                raise ValidationError(msg, field)
        return tuple(raw)
    msg = f"{field} {name!r} must be a string or a list of strings, got {type(raw).__name__}"
    raise ValidationError(msg, field)


def _merge(
    entries: dict[str, tuple[str, tuple[str, ...]]],
    name: str,
    values: tuple[str, ...],
    field: str,
) -> None:
    if not isinstance(name, str):
        msg = f"{field} names must be strings, got {type(name).__name__}"
        raise ValidationError(msg, field)
    if not values:
        return
    key = name.lower()
    existing = entries.get(key)
    if existing is None:
        entries[key] = (name, values)
    else:
        entries[key] = (existing[0], existing[1] + values)
