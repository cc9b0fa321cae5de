"""Type registry and the ``wrap_object`` dispatch hook.

Nested node references are wrapped into the Node subtype registered for
one of their ``@type`` IRIs, or into a plain :class:`~ldnode.node.Node`
when no type is registered.  Each :class:`~ldnode.environment.Environment`
carries its own registry so independent vocabularies can coexist.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Iterable, Optional

from ldnode.node import Node

if TYPE_CHECKING:
    from ldnode.environment import Environment

NodeFactory = Callable[[dict[str, Any], "Environment", Optional[Node]], Node]


class TypeRegistry:
    """Maps ``@type`` IRIs to Node factories."""

    def __init__(self, factories: Optional[dict[str, NodeFactory]] = None):
        self._factories: dict[str, NodeFactory] = {}
        for type_iri, factory in (factories or {}).items():
            self.register(type_iri, factory)

    def register(
        self,
        type_iri: str,
        factory: Optional[NodeFactory] = None,
        *,
        force: bool = False,
    ) -> Any:
        """Register *factory* for *type_iri*.

        Without *factory* this returns a decorator, so a Node subclass
        can be registered where it is defined::

            @registry.register("http://schema.org/Person")
            class Person(Node):
                ...

        Raises
        ------
        ValueError
            If *type_iri* is empty or already registered without *force*.
        TypeError
            If *factory* is not callable.
        """
        if not isinstance(type_iri, str) or not type_iri.strip():
            raise ValueError(
                f"Type IRI must be a non-empty string, got: {type_iri!r}"
            )

        if factory is None:
            def decorator(fn: NodeFactory) -> NodeFactory:
                self.register(type_iri, fn, force=force)
                return fn
            return decorator

        if not callable(factory):
            raise TypeError(
                f"Factory must be callable, got: {type(factory).__name__}"
            )
        if not force and type_iri in self._factories:
            raise ValueError(
                f"Type '{type_iri}' is already registered. "
                "Pass force=True to override."
            )
        self._factories[type_iri] = factory
        return factory

    def unregister(self, type_iri: str) -> None:
        """Remove the factory for *type_iri*.

        Raises ``KeyError`` if nothing is registered for it.
        """
        if type_iri not in self._factories:
            raise KeyError(f"Type '{type_iri}' is not registered")
        del self._factories[type_iri]

    def resolve(self, types: Iterable[str]) -> Optional[NodeFactory]:
        """Return the factory for the first registered type, or ``None``."""
        for type_iri in types:
            factory = self._factories.get(type_iri)
            if factory is not None:
                return factory
        return None

    def registered_types(self) -> list[str]:
        """Return a sorted snapshot of the registered type IRIs."""
        return sorted(self._factories)

    def __contains__(self, type_iri: object) -> bool:
        return type_iri in self._factories

    def __len__(self) -> int:
        return len(self._factories)


def wrap_object(
    expanded: dict[str, Any],
    env: "Environment",
    parent: Optional[Node] = None,
) -> Node:
    """Wrap an expanded node reference into the Node type for its ``@type``."""
    types = expanded.get("@type") or ()
    if isinstance(types, str):
        types = (types,)
    factory = env.registry.resolve(types)
    if factory is None:
        return Node(expanded, env, parent)
    return factory(expanded, env, parent)
