"""
Language-tagged string values.

A :class:`LanguageValue` aggregates the translations of a single
language property: one string per language tag plus an optional
default (untagged) string.  Instances are immutable snapshots produced
by :class:`LanguageValueBuilder`.

Tags are matched case-insensitively.  Lookup follows the RFC 4647
"lookup" scheme: the requested tag is progressively truncated
(``en-US-x-twain`` → ``en-US`` → ``en``) until a match is found, and
the default value is returned when nothing matches.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional


def _lookup_chain(tag: str) -> Iterator[str]:
    """Yield *tag* and its truncations, most specific first."""
    subtags = tag.lower().split("-")
    while subtags:
        yield "-".join(subtags)
        subtags.pop()
        # A singleton (e.g. the "x" in "en-x-foo") is never left dangling.
        if subtags and len(subtags[-1]) == 1:
            subtags.pop()


class LanguageValue:
    """Immutable mapping of language tag → string with a default value."""

    __slots__ = ("_values", "_default")

    def __init__(
        self,
        values: Optional[dict[str, tuple[str, Any]]] = None,
        default: Any = None,
    ):
        # lowercased tag → (tag as written, value)
        self._values: dict[str, tuple[str, Any]] = dict(values or {})
        self._default = default

    @property
    def default(self) -> Any:
        """The untagged value, or ``None``."""
        return self._default

    @property
    def has_default(self) -> bool:
        return self._default is not None

    @property
    def tags(self) -> tuple[str, ...]:
        """Language tags in insertion order, as written."""
        return tuple(tag for tag, _ in self._values.values())

    def has(self, tag: str) -> bool:
        """Whether a value is stored under exactly *tag*."""
        return tag.lower() in self._values

    def get(self, tag: Optional[str] = None) -> Any:
        """Return the best value for *tag*.

        With no tag the default is returned, or the first tagged value
        when there is no default.  Otherwise the exact tag and then its
        truncations are tried before falling back to the default.
        """
        if tag is None:
            if self._default is not None:
                return self._default
            for _, value in self._values.values():
                return value
            return None
        for candidate in _lookup_chain(tag):
            if candidate in self._values:
                return self._values[candidate][1]
        return self._default

    def to_dict(self) -> dict[str, Any]:
        """Return ``{tag: value}``; the default sits under the key ``None``."""
        result: dict[Any, Any] = {tag: value for tag, value in self._values.values()}
        if self._default is not None:
            result[None] = self._default
        return result

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, str) and self.has(tag)

    def __iter__(self) -> Iterator[str]:
        return iter(self.tags)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LanguageValue):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        value = self.get()
        return "" if value is None else str(value)

    def __repr__(self) -> str:
        return f"LanguageValue({self.to_dict()!r})"


class LanguageValueBuilder:
    """Accumulates tagged and default values into a :class:`LanguageValue`.

    A repeated tag (compared case-insensitively) or a repeated default
    overwrites the earlier value.
    """

    def __init__(self):
        self._values: dict[str, tuple[str, Any]] = {}
        self._default: Any = None

    def set(self, tag: str, value: Any) -> "LanguageValueBuilder":
        if not isinstance(tag, str) or not tag:
            raise ValueError(f"Language tag must be a non-empty string, got: {tag!r}")
        key = tag.lower()
        # Reassignment keeps the original insertion position.
        self._values[key] = (tag, value)
        return self

    def set_default(self, value: Any) -> "LanguageValueBuilder":
        self._default = value
        return self

    def get(self) -> LanguageValue:
        """Return a snapshot; later builder calls do not affect it."""
        return LanguageValue(self._values, self._default)
