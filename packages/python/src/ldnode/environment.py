"""
The configuration object threaded through every Node and Builder.

An :class:`Environment` bundles the reasoner, the vocabulary alias
table, the type registry, the compactor and the IRI normalizer.  There
is no process-wide default: each caller builds its own, which lets
several vocabularies coexist and lets tests inject fakes.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pyld import jsonld

from ldnode.compaction import Compactor, PyLDCompactor
from ldnode.iri import IriNormalizer, normalize_iri, normalize_key
from ldnode.node import Node
from ldnode.reasoner import Reasoner
from ldnode.registry import TypeRegistry, wrap_object


class Environment:
    """Shared, read-only context for nodes and builders.

    Args:
        reasoner: Schema classification collaborator.
        aliases: Short term → absolute IRI table consulted before
            normalization.  Unknown terms are used as literal IRIs.
        registry: ``@type`` → Node factory registry used for nested
            node references.  A fresh empty registry by default.
        compactor: Callable ``(expanded, additional_context)``
            returning a compact document.  Defaults to a
            :class:`~ldnode.compaction.PyLDCompactor` with an empty
            context.
        normalizer: IRI normalization function.
    """

    def __init__(
        self,
        reasoner: Reasoner,
        aliases: Optional[Mapping[str, str]] = None,
        registry: Optional[TypeRegistry] = None,
        compactor: Optional[Compactor] = None,
        normalizer: IriNormalizer = normalize_iri,
    ):
        self.reasoner = reasoner
        self.aliases: dict[str, str] = dict(aliases or {})
        self.registry = registry if registry is not None else TypeRegistry()
        self.compactor = compactor if compactor is not None else PyLDCompactor()
        self.normalizer = normalizer

    def normalize(self, key: str) -> str:
        """Resolve *key* through the alias table and normalize it."""
        return normalize_key(key, self.aliases, self.normalizer)

    def wrap(self, expanded: dict[str, Any], parent: Optional[Node] = None) -> Node:
        """Wrap an expanded fragment through the dispatch hook."""
        return wrap_object(expanded, self, parent)

    def load(
        self, document: Any, options: Optional[dict[str, Any]] = None
    ) -> list[Node]:
        """Expand a compact JSON-LD document with PyLD and wrap each node."""
        expanded = jsonld.expand(document, dict(options or {}))
        return [self.wrap(item) for item in expanded if isinstance(item, dict)]

    def __repr__(self) -> str:
        return (
            f"Environment(reasoner={self.reasoner!r}, "
            f"aliases={len(self.aliases)}, types={len(self.registry)})"
        )
