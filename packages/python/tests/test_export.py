"""Tests for asynchronous export, write and pretty_write."""

import asyncio
import json

import pytest

from ldnode import Builder, Environment, Node, PyLDCompactor, TableReasoner

S = "http://schema.org/"
CONTEXT = {"name": f"{S}name", "knows": {"@id": f"{S}knows", "@type": "@id"}}


# ═══════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════


class RecordingCompactor:
    """Compactor double that returns a fixed document or raises."""

    def __init__(self, result=None, error=None):
        self.result = result if result is not None else {"ok": True}
        self.error = error
        self.calls = []

    def __call__(self, expanded, additional_context=None):
        self.calls.append((expanded, additional_context))
        if self.error is not None:
            raise self.error
        return self.result


class AsyncCompactor(RecordingCompactor):
    async def __call__(self, expanded, additional_context=None):
        return super().__call__(expanded, additional_context)


def _node(compactor=None):
    env = Environment(TableReasoner(), compactor=compactor)
    return (
        Builder(env)
        .id("http://ex.org/ada")
        .set(f"{S}name", "Ada")
        .get()
    )


def _run(coro):
    return asyncio.run(coro)


# ═══════════════════════════════════════════════════════════════════
# export
# ═══════════════════════════════════════════════════════════════════


class TestExportOrdering:
    def test_callback_not_synchronous_and_fires_once(self):
        compactor = RecordingCompactor()
        node = _node(compactor)

        async def scenario():
            calls = []
            task = node.export(callback=lambda err, doc: calls.append((err, doc)))
            assert calls == []
            assert compactor.calls == []
            await task
            await asyncio.sleep(0)
            await asyncio.sleep(0)
            return calls

        assert _run(scenario()) == [(None, {"ok": True})]
        assert len(compactor.calls) == 1

    def test_callback_in_first_position(self):
        node = _node(RecordingCompactor())

        async def scenario():
            calls = []
            await node.export(lambda err, doc: calls.append((err, doc)))
            await asyncio.sleep(0)
            return calls

        assert _run(scenario()) == [(None, {"ok": True})]

    def test_awaitable_without_callback(self):
        node = _node(RecordingCompactor({"doc": 1}))

        async def scenario():
            return await node.export()

        assert _run(scenario()) == {"doc": 1}

    def test_async_compactor(self):
        node = _node(AsyncCompactor({"doc": 2}))

        async def scenario():
            return await node.export()

        assert _run(scenario()) == {"doc": 2}

    def test_requires_running_loop(self):
        with pytest.raises(RuntimeError):
            _node(RecordingCompactor()).export()


class TestExportConfig:
    def test_additional_context_forwarded(self):
        compactor = RecordingCompactor()
        node = _node(compactor)

        async def scenario():
            await node.export({"additional_context": CONTEXT, "unknown": 1})

        _run(scenario())
        expanded, extra = compactor.calls[0]
        assert expanded is node.expanded
        assert extra == CONTEXT


class TestExportErrors:
    def test_error_delivered_unchanged(self):
        boom = RuntimeError("compaction failed")
        node = _node(RecordingCompactor(error=boom))

        async def scenario():
            calls = []
            task = node.export(callback=lambda err, doc: calls.append((err, doc)))
            with pytest.raises(RuntimeError):
                await task
            await asyncio.sleep(0)
            return calls

        calls = _run(scenario())
        assert len(calls) == 1
        assert calls[0][0] is boom
        assert calls[0][1] is None

    def test_export_call_itself_never_raises(self):
        node = _node(RecordingCompactor(error=ValueError("bad")))

        async def scenario():
            errors = []
            node.export(callback=lambda err, doc: errors.append(err))
            await asyncio.sleep(0)
            await asyncio.sleep(0)
            return errors

        errors = _run(scenario())
        assert len(errors) == 1
        assert isinstance(errors[0], ValueError)


# ═══════════════════════════════════════════════════════════════════
# write / pretty_write
# ═══════════════════════════════════════════════════════════════════


class TestWrite:
    def test_compact_text(self):
        node = _node(RecordingCompactor({"a": 1, "b": [1, 2]}))

        async def scenario():
            return await node.write()

        assert _run(scenario()) == '{"a":1,"b":[1,2]}'

    def test_space(self):
        node = _node(RecordingCompactor({"a": 1}))

        async def scenario():
            return await node.write({"space": 4})

        assert _run(scenario()) == '{\n    "a": 1\n}'

    def test_pretty_write_forces_two_spaces(self):
        node = _node(RecordingCompactor({"a": 1}))

        async def scenario():
            calls = []
            await node.pretty_write({"space": 8}, lambda err, text: calls.append(text))
            await asyncio.sleep(0)
            return calls

        assert _run(scenario()) == ['{\n  "a": 1\n}']

    def test_write_error_through_callback(self):
        node = _node(RecordingCompactor(error=KeyError("x")))

        async def scenario():
            calls = []
            node.write(lambda err, text: calls.append((err, text)))
            for _ in range(3):
                await asyncio.sleep(0)
            return calls

        calls = _run(scenario())
        assert len(calls) == 1
        assert isinstance(calls[0][0], KeyError)


# ═══════════════════════════════════════════════════════════════════
# PyLD compaction
# ═══════════════════════════════════════════════════════════════════


class TestPyLDCompactor:
    def test_compacts_with_context(self):
        node = _node(PyLDCompactor(CONTEXT))

        async def scenario():
            return await node.export()

        doc = _run(scenario())
        assert doc["@id"] == "http://ex.org/ada"
        assert doc["name"] == "Ada"

    def test_additional_context(self):
        node = _node(PyLDCompactor())

        async def scenario():
            return await node.pretty_write({"additional_context": CONTEXT})

        doc = json.loads(_run(scenario()))
        assert doc["name"] == "Ada"

    def test_merged_context(self):
        compactor = PyLDCompactor({"a": "http://ex.org/a"})
        assert compactor.merged_context() == {"a": "http://ex.org/a"}
        assert compactor.merged_context({"b": "http://ex.org/b"}) == [
            {"a": "http://ex.org/a"},
            {"b": "http://ex.org/b"},
        ]
        assert PyLDCompactor().merged_context() == {}
