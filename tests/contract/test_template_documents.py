"""Element template document contract tests.

The Modeler reads generated files as plain JSON, so the exact bytes are
part of the contract: key order, two-space indentation, omitted defaults
and the object-versus-array shape. If these tests fail, previously
generated files would change on the next run.
"""

from __future__ import annotations

import json
from typing import Any

import pytest

from etgen_core import build_templates, load_templates, serialize_templates
from testing.fixtures.element_templates import SCHEMA_URL_LATEST, http_tasks_records
from testing.fixtures.golden_templates import list_golden_files, load_golden_text

pytestmark = pytest.mark.contract

TEMPLATE_KEYS = ["$schema", "name", "id", "appliesTo", "properties", "entriesVisible"]
PROPERTY_KEYS = [
    "label",
    "type",
    "value",
    "description",
    "choices",
    "editable",
    "binding",
    "constraints",
]


def _ordered_subset(keys: list[str], reference: list[str]) -> bool:
    positions = [reference.index(key) for key in keys]
    return positions == sorted(positions)


class TestGoldenDocuments:
    """Generated output must match the stored golden files byte for byte."""

    def test_golden_files_present(self) -> None:
        assert list_golden_files() == ["HttpTasksTemplates.json"]

    def test_http_tasks_matches_golden(self) -> None:
        result = build_templates(http_tasks_records())

        assert result.errors == []
        assert serialize_templates(result.templates, SCHEMA_URL_LATEST) == load_golden_text(
            "HttpTasksTemplates.json"
        )

    def test_reserialization_is_stable(self) -> None:
        golden = load_golden_text("HttpTasksTemplates.json")
        assert serialize_templates(load_templates(golden), SCHEMA_URL_LATEST) == golden

    def test_unknown_golden_file(self) -> None:
        with pytest.raises(ValueError, match="Unknown golden document"):
            load_golden_text("MissingTemplates.json")


class TestDocumentShape:
    """Key order and layout rules every generated file follows."""

    @pytest.fixture
    def documents(self) -> list[dict[str, Any]]:
        return json.loads(load_golden_text("HttpTasksTemplates.json"))

    def test_template_key_order(self, documents: list[dict[str, Any]]) -> None:
        for document in documents:
            assert _ordered_subset(list(document), TEMPLATE_KEYS)

    def test_property_key_order(self, documents: list[dict[str, Any]]) -> None:
        for document in documents:
            for prop in document["properties"]:
                assert _ordered_subset(list(prop), PROPERTY_KEYS)

    def test_every_property_has_binding(self, documents: list[dict[str, Any]]) -> None:
        for document in documents:
            assert all("binding" in prop for prop in document["properties"])

    def test_two_space_indent_without_trailing_newline(self) -> None:
        golden = load_golden_text("HttpTasksTemplates.json")

        assert golden.startswith('[\n  {\n    "$schema"')
        assert not golden.endswith("\n")

    def test_single_template_is_object(self) -> None:
        result = build_templates(http_tasks_records()[:1])
        document = json.loads(serialize_templates(result.templates, SCHEMA_URL_LATEST))

        assert isinstance(document, dict)
        assert document["$schema"] == SCHEMA_URL_LATEST
