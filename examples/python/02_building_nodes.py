"""
Example 02: Building Nodes
==========================

Builds an expanded node with a Builder, reads it back, and writes it
out as compact JSON-LD text.

Use case: Recording an event whose organiser is given as plain data.
"""

import asyncio

from ldnode import Builder, Environment, InvalidCardinality, PyLDCompactor, TableReasoner

S = "http://schema.org/"
XSD = "http://www.w3.org/2001/XMLSchema#"

env = Environment(
    TableReasoner(
        functional={f"{S}startDate", f"{S}organizer"},
        object_properties={f"{S}organizer", f"{S}attendee"},
        language_properties={f"{S}name"},
    ),
    aliases={
        "name": f"{S}name",
        "startDate": f"{S}startDate",
        "organizer": f"{S}organizer",
        "attendee": f"{S}attendee",
    },
    compactor=PyLDCompactor({"@vocab": S}),
)

# ── 1. Building ──────────────────────────────────────────────────

print("=== 1. Building ===\n")

event = (
    Builder(env, f"{S}Event")
    .id("http://example.org/events/42")
    .set("name", "Difference Engine demo", language="en")
    .set("startDate", "1833-06-05T19:00:00Z", datatype=f"{XSD}dateTime")
    .set("organizer", {"@type": f"{S}Person", "name": "Charles Babbage"})
    .set("attendee", ["http://example.org/people/ada", "http://example.org/people/mary"])
    .get()
)

print(f"name:      {event.get('name').get('en')}")
print(f"start:     {event.get('startDate')!r}")
print(f"organizer: {event.get('organizer').get('name')}")
print(f"attendees: {[a.id for a in event.get('attendee')]}")

# ── 2. Cardinality ───────────────────────────────────────────────

print("\n=== 2. Cardinality ===\n")

try:
    Builder(env).set("startDate", ["1833-06-05", "1833-06-06"])
except InvalidCardinality as exc:
    print(f"Rejected: {exc}")

# ── 3. Writing ───────────────────────────────────────────────────

print("\n=== 3. Writing ===\n")


async def main():
    print(await event.pretty_write())


asyncio.run(main())
