"""
ldnode: typed access to expanded JSON-LD nodes.

Decodes the properties of expanded JSON-LD node fragments into typed
Python values (numbers, datetimes, booleans, language maps and nested
nodes) with the help of a schema reasoner, and builds new fragments
back up.  Compaction and expansion are delegated to PyLD.
"""

__version__ = "0.1.0"

from ldnode.errors import LDNodeError, InvalidCardinality, InvalidObjectValue
from ldnode.iri import normalize_iri, normalize_key
from ldnode.language import LanguageValue, LanguageValueBuilder
from ldnode.reasoner import (
    Reasoner,
    TableReasoner,
    XSD_NAMESPACE,
    XSD_NUMERIC_TYPES,
    XSD_DATE_TYPES,
    XSD_BOOLEAN_TYPES,
)
from ldnode.node import Node, Builder
from ldnode.registry import TypeRegistry, wrap_object
from ldnode.compaction import PyLDCompactor
from ldnode.environment import Environment

__all__ = [
    "__version__",
    "LDNodeError",
    "InvalidCardinality",
    "InvalidObjectValue",
    "normalize_iri",
    "normalize_key",
    "LanguageValue",
    "LanguageValueBuilder",
    "Reasoner",
    "TableReasoner",
    "XSD_NAMESPACE",
    "XSD_NUMERIC_TYPES",
    "XSD_DATE_TYPES",
    "XSD_BOOLEAN_TYPES",
    "Node",
    "Builder",
    "TypeRegistry",
    "wrap_object",
    "PyLDCompactor",
    "Environment",
]
