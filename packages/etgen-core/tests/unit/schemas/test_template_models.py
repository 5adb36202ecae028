"""Unit tests for the Template, TemplateProperty and Choice models."""

from __future__ import annotations

import sys

import pytest
from pydantic import ValidationError

from etgen_core.schemas import (
    DEFAULT_SORT_INDEX,
    Choice,
    ParameterType,
    PropertyType,
    Template,
    TemplateProperty,
)

SCHEMA_A = "https://example.com/a/schema.json"
SCHEMA_B = "https://example.com/b/schema.json"


class TestTemplateProperty:
    """Tests for TemplateProperty defaults and validation."""

    def test_defaults(self) -> None:
        """Only type is required; everything else has a documented default."""
        prop = TemplateProperty(type=PropertyType.STRING)

        assert prop.label == ""
        assert prop.value == ""
        assert prop.choices == ()
        assert prop.description == ""
        assert prop.parameter_type is ParameterType.INPUT
        assert prop.binding_name == ""
        assert prop.script_format == ""
        assert prop.not_empty is False
        assert prop.editable is True
        assert prop.sort_index == DEFAULT_SORT_INDEX

    def test_default_sort_index_is_max_int(self) -> None:
        assert DEFAULT_SORT_INDEX == sys.maxsize

    def test_type_required(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            TemplateProperty()  # type: ignore[call-arg]
        assert "type" in str(exc_info.value)

    def test_type_accepts_document_names(self) -> None:
        prop = TemplateProperty(type="Dropdown", parameter_type="output")  # type: ignore[arg-type]
        assert prop.type is PropertyType.DROPDOWN
        assert prop.parameter_type is ParameterType.OUTPUT

    def test_unknown_type_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TemplateProperty(type="Boolean")  # type: ignore[arg-type]

    def test_dropdown_without_choices_allowed(self) -> None:
        prop = TemplateProperty(type=PropertyType.DROPDOWN)
        assert prop.choices == ()

    def test_frozen(self) -> None:
        prop = TemplateProperty(type=PropertyType.STRING)
        with pytest.raises(ValidationError):
            prop.label = "changed"  # type: ignore[misc]

    def test_extra_fields_forbidden(self) -> None:
        with pytest.raises(ValidationError):
            TemplateProperty(type=PropertyType.STRING, unknown="x")  # type: ignore[call-arg]


class TestChoice:
    """Tests for Choice."""

    def test_requires_name_and_value(self) -> None:
        with pytest.raises(ValidationError):
            Choice(name="GET")  # type: ignore[call-arg]

    def test_structural_equality(self) -> None:
        assert Choice(name="GET", value="get") == Choice(name="GET", value="get")


class TestTemplate:
    """Tests for Template."""

    def test_minimal_template(self) -> None:
        template = Template(id="t", applies_to=("bpmn:ServiceTask",))

        assert template.name == ""
        assert template.entries_visible is True
        assert template.schema_url is None
        assert template.properties == ()

    def test_id_required_non_empty(self) -> None:
        with pytest.raises(ValidationError):
            Template(id="", applies_to=("bpmn:ServiceTask",))

    def test_applies_to_required_non_empty(self) -> None:
        with pytest.raises(ValidationError):
            Template(id="t", applies_to=())

    def test_applies_to_blank_entries_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Template(id="t", applies_to=("",))

    def test_applies_to_dedupes_keeping_first_order(self) -> None:
        """applies_to has set semantics with deterministic order."""
        template = Template(
            id="t",
            applies_to=("bpmn:ServiceTask", "bpmn:SendTask", "bpmn:ServiceTask"),
        )
        assert template.applies_to == ("bpmn:ServiceTask", "bpmn:SendTask")


class TestTemplateWithSchema:
    """Tests for the exactly-once schema stamping."""

    def test_with_schema_returns_stamped_copy(self) -> None:
        template = Template(id="t", applies_to=("bpmn:ServiceTask",))
        stamped = template.with_schema(SCHEMA_A)

        assert stamped.schema_url == SCHEMA_A
        assert template.schema_url is None

    def test_restamp_same_url_is_noop(self) -> None:
        stamped = Template(id="t", applies_to=("bpmn:ServiceTask",)).with_schema(SCHEMA_A)
        assert stamped.with_schema(SCHEMA_A) is stamped

    def test_restamp_different_url_rejected(self) -> None:
        stamped = Template(id="t", applies_to=("bpmn:ServiceTask",)).with_schema(SCHEMA_A)
        with pytest.raises(ValueError, match="already stamped"):
            stamped.with_schema(SCHEMA_B)
