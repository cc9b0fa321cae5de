"""
Example 01: Reading Nodes
=========================

Loads a compact JSON-LD document, then reads typed values from the
resulting nodes: language maps, coerced literals and nested nodes.

Use case: A catalogue entry for a book, with translated titles and an
author described inline.
"""

from ldnode import Environment, Node, TableReasoner, TypeRegistry

S = "http://schema.org/"
XSD = "http://www.w3.org/2001/XMLSchema#"

reasoner = TableReasoner(
    functional={f"{S}author", f"{S}datePublished", f"{S}numberOfPages"},
    object_properties={f"{S}author"},
    language_properties={f"{S}name"},
)

registry = TypeRegistry()


@registry.register(f"{S}Person")
class Person(Node):
    @property
    def display_name(self):
        return str(self.get("name"))


env = Environment(
    reasoner,
    aliases={
        "name": f"{S}name",
        "author": f"{S}author",
        "datePublished": f"{S}datePublished",
        "numberOfPages": f"{S}numberOfPages",
        "isAccessibleForFree": f"{S}isAccessibleForFree",
    },
    registry=registry,
)

doc = {
    "@context": {
        "@vocab": S,
        "xsd": XSD,
        "datePublished": {"@type": "xsd:dateTime"},
        "numberOfPages": {"@type": "xsd:integer"},
        "isAccessibleForFree": {"@type": "xsd:boolean"},
    },
    "@id": "http://example.org/books/1",
    "@type": "Book",
    "name": [
        {"@value": "The Analytical Engine", "@language": "en"},
        {"@value": "La machine analytique", "@language": "fr"},
        "The Analytical Engine",
    ],
    "datePublished": "1843-09-01T00:00:00Z",
    "numberOfPages": "66",
    "isAccessibleForFree": "false",
    "author": {"@type": "Person", "name": "Ada Lovelace"},
}

# ── 1. Identity ──────────────────────────────────────────────────

print("=== 1. Identity ===\n")

(book,) = env.load(doc)
print(f"id:   {book.id}")
print(f"type: {book.type}")

# ── 2. Language values ───────────────────────────────────────────

print("\n=== 2. Language Values ===\n")

title = book.get("name")
print(f"en:      {title.get('en')}")
print(f"fr-CA:   {title.get('fr-CA')}")   # falls back to "fr"
print(f"default: {title.default}")

# ── 3. Coerced literals ──────────────────────────────────────────

print("\n=== 3. Coerced Literals ===\n")

print(f"published: {book.get('datePublished')!r}")
print(f"pages:     {book.get('numberOfPages')!r}")
print(f"free:      {book.get('isAccessibleForFree')!r}")

# ── 4. Nested nodes ──────────────────────────────────────────────

print("\n=== 4. Nested Nodes ===\n")

author = book.get("author")
print(f"author class: {type(author).__name__}")
print(f"author name:  {author.display_name}")
print(f"parent:       {author.parent.id}")
