"""🧪 Tests for SchemaCrossReferencer."""

import pytest

from bicepdoc.crossref import SchemaCrossReferencer
from bicepdoc.models import (
    CapabilityFlags,
    DiagnosticKind,
    PropertySchemaEntry,
    ResourceDocModel,
)


def _prop(name, description="", *flags):
    return PropertySchemaEntry(
        name=name, description=description, flags=CapabilityFlags(flags)
    )


class TestSchemaCrossReferencer:
    """Tests for SchemaCrossReferencer class."""

    @pytest.fixture
    def crossref(self):
        return SchemaCrossReferencer()

    def test_properties_copied_in_schema_order(self, crossref):
        """Test that the schema is copied verbatim and never re-sorted."""
        schema = [_prop("zeta", "z"), _prop("alpha", "a"), _prop("mid", "m")]

        result = crossref.cross_reference(ResourceDocModel(), schema, "R")

        assert [p.name for p in result.properties] == ["zeta", "alpha", "mid"]
        assert result.resource_name == "R"
        assert result.diagnostics == []

    def test_missing_schema_is_treated_as_empty(self, crossref):
        """Test that a None schema yields no properties and no diagnostics."""
        result = crossref.cross_reference(ResourceDocModel(), None, "R")

        assert result.properties == ()
        assert result.diagnostics == []

    def test_one_undocumented_diagnostic_per_missing_property(self, crossref):
        """Test coverage completeness: no duplicates, no omissions."""
        schema = [
            _prop("a"),
            _prop("b", "documented"),
            _prop("c", "   "),
            _prop("d"),
        ]

        result = crossref.cross_reference(ResourceDocModel(), schema)

        undocumented = [
            d.name
            for d in result.diagnostics
            if d.kind == DiagnosticKind.UNDOCUMENTED_PROPERTY
        ]
        assert undocumented == ["a", "c", "d"]

    def test_duplicate_schema_names_reported_once(self, crossref):
        """Test that a repeated schema name yields a single diagnostic."""
        result = crossref.cross_reference(ResourceDocModel(), [_prop("a"), _prop("a")])

        assert len(result.diagnostics) == 1

    def test_property_doc_metadata_counts_as_documentation(self, crossref):
        """Test that a property:<name> metadata entry documents the property."""
        doc = ResourceDocModel(metadata={"property:a": "Documented via metadata"})

        result = crossref.cross_reference(doc, [_prop("a")])

        assert result.diagnostics == []

    def test_blank_property_doc_metadata_does_not_document(self, crossref):
        """Test that an empty property:<name> value is not documentation."""
        doc = ResourceDocModel(metadata={"property:a": ""})

        result = crossref.cross_reference(doc, [_prop("a")])

        assert [d.kind for d in result.diagnostics] == [
            DiagnosticKind.UNDOCUMENTED_PROPERTY
        ]

    def test_stale_metadata_reference(self, crossref):
        """Test that a metadata key referencing an unknown property is stale."""
        doc = ResourceDocModel(metadata={"property:NonExistent": "Old docs"})

        result = crossref.cross_reference(doc, [_prop("Resource", "doc")])

        assert len(result.diagnostics) == 1
        diagnostic = result.diagnostics[0]
        assert diagnostic.kind == DiagnosticKind.STALE_REFERENCE
        assert diagnostic.name == "NonExistent"

    def test_stale_front_matter_reference(self, crossref):
        """Test that front matter keys are checked for stale references too."""
        doc = ResourceDocModel(front_matter={2: {"property:gone": "x"}})

        result = crossref.cross_reference(doc, [_prop("here", "doc")])

        assert [(d.kind, d.name) for d in result.diagnostics] == [
            (DiagnosticKind.STALE_REFERENCE, "gone")
        ]

    def test_stale_reference_reported_once_per_name(self, crossref):
        """Test that a name referenced from several keys is reported once."""
        doc = ResourceDocModel(
            metadata={"property:gone": "a"},
            front_matter={1: {"property:gone": "b"}},
        )

        result = crossref.cross_reference(doc, [])

        assert len(result.diagnostics) == 1

    def test_reference_matching_is_case_sensitive(self, crossref):
        """Test that property references must match the schema name exactly."""
        doc = ResourceDocModel(metadata={"property:path": "lower"})

        result = crossref.cross_reference(doc, [_prop("Path", "doc")])

        assert [d.kind for d in result.diagnostics] == [DiagnosticKind.STALE_REFERENCE]

    def test_no_convention_keys_means_no_stale_check(self, crossref):
        """Test that plain keys never produce stale reference diagnostics."""
        doc = ResourceDocModel(
            metadata={"owner": "team", "NonExistent": "x"},
            front_matter={1: {"title": "T"}},
        )

        result = crossref.cross_reference(doc, [_prop("a", "doc")])

        assert result.diagnostics == []
