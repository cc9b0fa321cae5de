"""
Compaction collaborator and asynchronous export scheduling.

:class:`PyLDCompactor` turns an expanded fragment into a compact
document with PyLD.  :func:`schedule` runs a coroutine as an asyncio
task and reports its outcome to an error-first ``callback(err, result)``.
The task body starts on a later loop iteration, so nothing it does runs
inside the caller's current call stack.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Coroutine, Optional, Union

from pyld import jsonld

logger = logging.getLogger(__name__)

Compactor = Callable[
    [dict[str, Any], Any],
    Union[dict[str, Any], Awaitable[dict[str, Any]]],
]
Callback = Callable[[Optional[BaseException], Any], None]


class PyLDCompactor:
    """Compacts expanded fragments against a JSON-LD context using PyLD.

    Args:
        context: The base context (a dict, a context IRI, or a list of
            them).  ``None`` compacts against an empty context.
        options: Extra options forwarded to ``pyld.jsonld.compact``
            (e.g. ``{"documentLoader": loader}``).
    """

    def __init__(self, context: Any = None, options: Optional[dict[str, Any]] = None):
        self.context = context
        self.options = dict(options or {})

    def merged_context(self, additional_context: Any = None) -> Any:
        """Return the base context combined with *additional_context*."""
        contexts = []
        for ctx in (self.context, additional_context):
            if ctx is None:
                continue
            if isinstance(ctx, list):
                contexts.extend(ctx)
            else:
                contexts.append(ctx)
        if not contexts:
            return {}
        if len(contexts) == 1:
            return contexts[0]
        return contexts

    def __call__(
        self, expanded: dict[str, Any], additional_context: Any = None
    ) -> dict[str, Any]:
        return jsonld.compact(
            expanded, self.merged_context(additional_context), dict(self.options)
        )


async def compact_fragment(
    compactor: Compactor,
    expanded: dict[str, Any],
    additional_context: Any = None,
) -> dict[str, Any]:
    """Run *compactor*, awaiting its result when it returns an awaitable."""
    result = compactor(expanded, additional_context)
    if inspect.isawaitable(result):
        result = await result
    return result


def schedule(
    coro: Coroutine[Any, Any, Any],
    callback: Optional[Callback] = None,
) -> "asyncio.Task[Any]":
    """Run *coro* as a task on the running loop.

    When *callback* is given it is called exactly once, on a later loop
    iteration, as ``callback(None, result)`` or ``callback(err, None)``.
    Raises ``RuntimeError`` when there is no running event loop.
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        coro.close()
        raise
    task = loop.create_task(coro)

    if callback is not None:
        def _deliver(done: "asyncio.Task[Any]") -> None:
            if done.cancelled():
                callback(asyncio.CancelledError(), None)
                return
            err = done.exception()
            if err is not None:
                logger.debug("Export task failed: %r", err)
                callback(err, None)
            else:
                callback(None, done.result())

        task.add_done_callback(_deliver)
    return task
