"""Error kinds raised while building linked-data nodes."""

from __future__ import annotations

from typing import Any


class LDNodeError(Exception):
    """Base class for errors raised by ldnode."""


class InvalidCardinality(LDNodeError, ValueError):
    """A functional (single-valued) property was given a sequence."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(
            f"Functional property {key!r} cannot have array values"
        )


class InvalidObjectValue(LDNodeError, TypeError):
    """An object property was given something that is not a node reference."""

    def __init__(self, key: str, value: Any):
        self.key = key
        self.value = value
        super().__init__(
            f"Invalid value for object property {key!r}: "
            f"expected Node, Builder, IRI string or mapping, "
            f"got: {type(value).__name__}"
        )
