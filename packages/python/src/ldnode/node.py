"""
Typed access to expanded JSON-LD nodes, and the builder that creates them.

A :class:`Node` wraps one expanded node fragment.  Property values are
decoded lazily on first access and memoized per node:

* language properties collapse into a single
  :class:`~ldnode.language.LanguageValue`;
* literals are coerced by their datatype (numbers, dates, booleans);
* node references are wrapped into further Nodes through the
  environment's type registry;
* functional properties yield their first value, all others a tuple.

A :class:`Builder` goes the other way: it accumulates values into an
expanded fragment, enforcing functional cardinality and recursively
building nested nodes from plain mappings.

Example::

    env = Environment(reasoner, aliases={"name": "http://schema.org/name"})
    person = Builder(env, "http://schema.org/Person").set("name", "Ada").get()
    person.get("name")  # ('Ada',)
"""

from __future__ import annotations

import json
import logging
import math
import re
import weakref
from datetime import datetime
from typing import TYPE_CHECKING, Any, Mapping, Optional, Sequence, Union

from ldnode.compaction import Callback, compact_fragment, schedule
from ldnode.errors import InvalidCardinality, InvalidObjectValue
from ldnode.language import LanguageValue, LanguageValueBuilder

if TYPE_CHECKING:
    import asyncio

    from ldnode.environment import Environment
    from ldnode.reasoner import Reasoner

logger = logging.getLogger(__name__)


def _is_literal(entry: Any) -> bool:
    return isinstance(entry, Mapping) and "@value" in entry


# xsd numeric lexical forms: integers, decimals, doubles and the special values.
_INTEGER_RE = re.compile(r"[+-]?\d+")
_DECIMAL_RE = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")
_SPECIAL_NUMBERS = {"INF": math.inf, "+INF": math.inf, "-INF": -math.inf, "NaN": math.nan}

# Supported ISO 8601 / xsd forms, tried in order before fromisoformat:
#   2024-03-01T10:30:00.5+00:00
#   2024-03-01T10:30:00Z
#   2024-03-01T10:30:00
#   2002-09-24-06:00
#   2002-09-24
_ISO_FORMATS = [
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d%z",
    "%Y-%m-%d",
]


def _to_number(value: Any) -> Union[int, float]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    text = str(value).strip()
    if _INTEGER_RE.fullmatch(text):
        return int(text)
    if _DECIMAL_RE.fullmatch(text):
        return float(text)
    return _SPECIAL_NUMBERS.get(text, math.nan)


def _to_datetime(value: Any) -> Any:
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    normalised = text[:-1] + "+00:00" if text.endswith("Z") else text
    for fmt in _ISO_FORMATS:
        try:
            return datetime.strptime(normalised, fmt)
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(normalised)
    except ValueError:
        logger.debug("Leaving unparsable date literal as-is: %r", text)
        return value


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return value != "false"


def _split_args(config: Any, callback: Optional[Callback]) -> tuple[dict[str, Any], Optional[Callback]]:
    """Allow ``export(callback)`` as well as ``export(config, callback)``."""
    if callable(config) and callback is None:
        return {}, config
    return dict(config or {}), callback


def _serialize(doc: Any, space: Any = None) -> str:
    if not space:
        return json.dumps(doc, separators=(",", ":"), ensure_ascii=False)
    return json.dumps(doc, indent=space, ensure_ascii=False)


class Node:
    """Read access to one expanded node fragment."""

    def __init__(
        self,
        expanded: dict[str, Any],
        env: "Environment",
        parent: Optional["Node"] = None,
    ):
        self._expanded = expanded
        self._env = env
        self._parent = weakref.ref(parent) if parent is not None else None
        self._cache: dict[str, Any] = {}

    # ── Identity ──────────────────────────────────────────────────

    @property
    def id(self) -> Optional[str]:
        return self._expanded.get("@id")

    @property
    def type(self) -> Union[None, str, tuple[str, ...]]:
        """``None``, the single type, or a tuple when there are several."""
        types = self._expanded.get("@type")
        if not types:
            return None
        if isinstance(types, str):
            return types
        if len(types) == 1:
            return types[0]
        return tuple(types)

    @property
    def parent(self) -> Optional["Node"]:
        return self._parent() if self._parent is not None else None

    @property
    def env(self) -> "Environment":
        return self._env

    @property
    def reasoner(self) -> "Reasoner":
        return self._env.reasoner

    @property
    def expanded(self) -> dict[str, Any]:
        """The underlying expanded fragment (shared, not copied)."""
        return self._expanded

    # ── Properties ────────────────────────────────────────────────

    def has(self, key: str) -> bool:
        """Whether the node holds at least one value for *key*."""
        return bool(self._expanded.get(self._env.normalize(key)))

    def get(self, key: str) -> Any:
        """Return the decoded value of *key*, or ``None`` when absent.

        Non-empty results are cached: every later call returns the same
        object.  Absent results are not cached.
        """
        key = self._env.normalize(key)
        if key in self._cache:
            return self._cache[key]

        entries = self._expanded.get(key)
        if not entries:
            return None
        if not isinstance(entries, list):
            entries = [entries]

        reasoner = self.reasoner
        if reasoner.is_language_property(key):
            value: Any = self._aggregate_language(key, entries)
        else:
            decoded = tuple(self._decode(entry) for entry in entries)
            value = decoded[0] if reasoner.is_functional(key) else decoded
        self._cache[key] = value
        return value

    def _aggregate_language(self, key: str, entries: Sequence[Any]) -> LanguageValue:
        builder = LanguageValueBuilder()
        for entry in entries:
            if not _is_literal(entry):
                logger.debug("Skipping non-literal value of language property %s", key)
                continue
            language = entry.get("@language")
            if language:
                builder.set(language, entry["@value"])
            else:
                builder.set_default(entry["@value"])
        return builder.get()

    def _decode(self, entry: Any) -> Any:
        if _is_literal(entry):
            value = entry["@value"]
            datatype = entry.get("@type")
            if not datatype:
                return value
            datatype = self._env.normalize(datatype)
            reasoner = self.reasoner
            if reasoner.is_number(datatype):
                return _to_number(value)
            if reasoner.is_date(datatype):
                return _to_datetime(value)
            if reasoner.is_boolean(datatype):
                return _to_bool(value)
            return value
        if isinstance(entry, Mapping):
            return self._env.wrap(entry, self)
        return entry

    # ── Export ────────────────────────────────────────────────────

    def export(
        self,
        config: Optional[Mapping[str, Any]] = None,
        callback: Optional[Callback] = None,
    ) -> "asyncio.Task[dict[str, Any]]":
        """Compact this node on a later loop iteration.

        Args:
            config: Optional mapping; ``additional_context`` is merged
                into the compaction context.  Other keys are ignored.
            callback: Optional ``callback(err, doc)``, called exactly
                once after the current call stack has unwound.

        Returns:
            The scheduled task, which can also be awaited.  Compaction
            errors are delivered through it and the callback unchanged.
        """
        config, callback = _split_args(config, callback)
        logger.debug("Scheduling export of node %s", self.id)
        return schedule(
            compact_fragment(
                self._env.compactor,
                self._expanded,
                config.get("additional_context"),
            ),
            callback,
        )

    async def _write(self, config: dict[str, Any]) -> str:
        doc = await compact_fragment(
            self._env.compactor, self._expanded, config.get("additional_context")
        )
        return _serialize(doc, config.get("space"))

    def write(
        self,
        config: Optional[Mapping[str, Any]] = None,
        callback: Optional[Callback] = None,
    ) -> "asyncio.Task[str]":
        """Like :meth:`export`, but delivers JSON text indented by ``space``."""
        config, callback = _split_args(config, callback)
        return schedule(self._write(config), callback)

    def pretty_write(
        self,
        config: Optional[Mapping[str, Any]] = None,
        callback: Optional[Callback] = None,
    ) -> "asyncio.Task[str]":
        """:meth:`write` with a 2-space indent."""
        config, callback = _split_args(config, callback)
        config["space"] = 2
        return self.write(config, callback)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, type={self.type!r})"


class Builder:
    """Accumulates values into an expanded fragment.

    Args:
        env: The environment supplying the reasoner and alias table.
        types: Optional initial ``@type`` (single or sequence).
        base: Optional existing Node to modify in place.  Its cached
            values are not invalidated by later ``set`` calls.
    """

    def __init__(
        self,
        env: "Environment",
        types: Any = None,
        base: Optional[Node] = None,
    ):
        self._env = env
        self._base = base if base is not None else Node({}, env)
        self._expanded = self._base.expanded
        if types is not None:
            self.type(types)

    def id(self, value: Optional[str]) -> "Builder":
        if not value:
            self._expanded.pop("@id", None)
        else:
            self._expanded["@id"] = value
        return self

    def type(self, value: Any) -> "Builder":
        """Replace ``@type``; a falsy value removes it."""
        if not value:
            self._expanded.pop("@type", None)
            return self
        if not isinstance(value, (list, tuple)):
            value = [value]
        self._expanded["@type"] = [str(item) for item in value]
        return self

    def set(
        self,
        key: str,
        value: Any,
        *,
        language: Optional[str] = None,
        datatype: Optional[str] = None,
    ) -> "Builder":
        """Append *value* (a scalar or a list/tuple) to property *key*.

        ``None`` deletes the property.  A functional property is cleared
        first and rejects sequences with :class:`InvalidCardinality`.
        Object properties accept Nodes, Builders, IRI strings and plain
        mappings (built recursively); anything else raises
        :class:`InvalidObjectValue`.  Other properties get literal
        entries tagged with *language* and *datatype* when given.
        """
        key = self._env.normalize(key)
        if isinstance(value, Builder):
            value = value.get()
        if value is None:
            self._expanded.pop(key, None)
            return self

        reasoner = self._env.reasoner
        is_sequence = isinstance(value, (list, tuple))
        if reasoner.is_functional(key):
            self._expanded.pop(key, None)
            if is_sequence:
                raise InvalidCardinality(key)

        items = list(value) if is_sequence else [value]
        is_object = reasoner.is_object_property(key)
        if datatype:
            datatype = self._env.normalize(datatype)
        entries = [
            self._entry(key, item, is_object, language, datatype)
            for item in items
        ]
        self._expanded.setdefault(key, []).extend(entries)
        return self

    def _entry(
        self,
        key: str,
        item: Any,
        is_object: bool,
        language: Optional[str],
        datatype: Optional[str],
    ) -> dict[str, Any]:
        if isinstance(item, Builder):
            item = item.get()
        if is_object or isinstance(item, Node):
            if isinstance(item, Node):
                return item.expanded
            if isinstance(item, str):
                return {"@id": item}
            if isinstance(item, Mapping):
                return self._build_nested(item).expanded
            raise InvalidObjectValue(key, item)

        entry: dict[str, Any] = {"@value": item}
        if language:
            entry["@language"] = language
        if datatype:
            entry["@type"] = datatype
        return entry

    def _build_nested(self, value: Mapping[str, Any]) -> Node:
        builder = Builder(self._env)
        for k, v in value.items():
            if k == "@id":
                builder.id(v)
            elif k == "@type":
                builder.type(v)
            else:
                builder.set(k, v)
        return builder.get()

    def get(self) -> Node:
        """Return the Node wrapping this builder's fragment."""
        return self._base
