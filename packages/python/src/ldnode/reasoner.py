"""
Reasoner interface and a table-driven default implementation.

A reasoner answers the schema questions a :class:`~ldnode.node.Node`
needs while decoding values: cardinality of a property, whether it
links to other nodes, whether its literals are language-tagged, and
which literal datatypes are numeric, temporal or boolean.  All
arguments are normalized absolute IRIs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Protocol, runtime_checkable

XSD_NAMESPACE = "http://www.w3.org/2001/XMLSchema#"

XSD_NUMERIC_TYPES: FrozenSet[str] = frozenset(
    f"{XSD_NAMESPACE}{name}"
    for name in (
        "decimal", "integer", "float", "double",
        "long", "int", "short", "byte",
        "nonNegativeInteger", "positiveInteger",
        "nonPositiveInteger", "negativeInteger",
        "unsignedLong", "unsignedInt", "unsignedShort", "unsignedByte",
    )
)

XSD_DATE_TYPES: FrozenSet[str] = frozenset(
    f"{XSD_NAMESPACE}{name}"
    for name in ("dateTime", "date", "dateTimeStamp")
)

XSD_BOOLEAN_TYPES: FrozenSet[str] = frozenset({f"{XSD_NAMESPACE}boolean"})


@runtime_checkable
class Reasoner(Protocol):
    """Schema classification consumed by nodes and builders."""

    def is_functional(self, key: str) -> bool: ...

    def is_object_property(self, key: str) -> bool: ...

    def is_language_property(self, key: str) -> bool: ...

    def is_number(self, datatype: str) -> bool: ...

    def is_date(self, datatype: str) -> bool: ...

    def is_boolean(self, datatype: str) -> bool: ...


@dataclass(frozen=True)
class TableReasoner:
    """Reasoner answering from fixed sets of property and datatype IRIs.

    Example::

        reasoner = TableReasoner(
            functional={"http://schema.org/birthDate"},
            object_properties={"http://schema.org/knows"},
            language_properties={"http://schema.org/name"},
        )
    """

    functional: FrozenSet[str] = field(default_factory=frozenset)
    object_properties: FrozenSet[str] = field(default_factory=frozenset)
    language_properties: FrozenSet[str] = field(default_factory=frozenset)
    numeric_types: FrozenSet[str] = XSD_NUMERIC_TYPES
    date_types: FrozenSet[str] = XSD_DATE_TYPES
    boolean_types: FrozenSet[str] = XSD_BOOLEAN_TYPES

    def __post_init__(self) -> None:
        # Accept any iterable of IRIs but store frozensets.
        for name in (
            "functional", "object_properties", "language_properties",
            "numeric_types", "date_types", "boolean_types",
        ):
            object.__setattr__(self, name, frozenset(getattr(self, name)))

    def is_functional(self, key: str) -> bool:
        return key in self.functional

    def is_object_property(self, key: str) -> bool:
        return key in self.object_properties

    def is_language_property(self, key: str) -> bool:
        return key in self.language_properties

    def is_number(self, datatype: str) -> bool:
        return datatype in self.numeric_types

    def is_date(self, datatype: str) -> bool:
        return datatype in self.date_types

    def is_boolean(self, datatype: str) -> bool:
        return datatype in self.boolean_types
