"""Tests for the table-driven reasoner."""

import dataclasses

import pytest

from ldnode.reasoner import (
    Reasoner,
    TableReasoner,
    XSD_BOOLEAN_TYPES,
    XSD_DATE_TYPES,
    XSD_NAMESPACE,
    XSD_NUMERIC_TYPES,
)

S = "http://schema.org/"


class TestTableReasoner:
    def test_property_classification(self):
        reasoner = TableReasoner(
            functional=[f"{S}birthDate"],
            object_properties=[f"{S}knows"],
            language_properties=[f"{S}name"],
        )
        assert reasoner.is_functional(f"{S}birthDate")
        assert not reasoner.is_functional(f"{S}knows")
        assert reasoner.is_object_property(f"{S}knows")
        assert reasoner.is_language_property(f"{S}name")
        assert not reasoner.is_language_property(f"{S}knows")

    def test_iterables_stored_as_frozensets(self):
        reasoner = TableReasoner(functional=[f"{S}a", f"{S}a"])
        assert reasoner.functional == frozenset({f"{S}a"})

    def test_xsd_defaults(self):
        reasoner = TableReasoner()
        assert reasoner.is_number(f"{XSD_NAMESPACE}integer")
        assert reasoner.is_number(f"{XSD_NAMESPACE}double")
        assert reasoner.is_date(f"{XSD_NAMESPACE}dateTime")
        assert reasoner.is_boolean(f"{XSD_NAMESPACE}boolean")
        assert not reasoner.is_number(f"{XSD_NAMESPACE}string")

    def test_datatype_tables_disjoint(self):
        assert not XSD_NUMERIC_TYPES & XSD_DATE_TYPES
        assert not XSD_NUMERIC_TYPES & XSD_BOOLEAN_TYPES
        assert not XSD_DATE_TYPES & XSD_BOOLEAN_TYPES

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            TableReasoner().functional = frozenset()

    def test_satisfies_protocol(self):
        assert isinstance(TableReasoner(), Reasoner)
