"""Element template object model.

This module defines the immutable models that represent one generated
element template document:
- Choice: One selectable option of a Dropdown property
- TemplateProperty: One configurable field of a template
- Template: One element template (the unit the modeler lists)

Models are built once per run by the TemplateBuilder and discarded after
serialization. The only late-bound field is Template.schema_url, stamped
exactly once through Template.with_schema().
"""

from __future__ import annotations

import sys
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_SORT_INDEX = sys.maxsize
"""Sort index meaning "no explicit order requested"; such properties sort last."""


class PropertyType(str, Enum):
    """Input control the modeler renders for a property."""

    STRING = "String"
    TEXT = "Text"
    DROPDOWN = "Dropdown"
    HIDDEN = "Hidden"


class ParameterType(str, Enum):
    """How a property value is bound into the BPMN element.

    Attributes:
        INPUT: Bound as a camunda:inputParameter.
        OUTPUT: Bound as a camunda:outputParameter.
        PROPERTY: Bound directly to a BPMN element property.
    """

    INPUT = "input"
    OUTPUT = "output"
    PROPERTY = "property"


class Choice(BaseModel):
    """One selectable option of a Dropdown property.

    Attributes:
        name: Label shown in the dropdown.
        value: Value written into the BPMN element.

    Example:
        >>> Choice(name="GET", value="get")
        Choice(name='GET', value='get')
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., description="Label shown in the dropdown")
    value: str = Field(..., description="Value written into the BPMN element")


class TemplateProperty(BaseModel):
    """One configurable field of an element template.

    Every field except ``type`` has a default; defaults are omitted from the
    serialized document. ``sort_index`` is a build-time ordering key and is
    never serialized.

    Attributes:
        label: Label shown in the properties panel.
        type: Input control type.
        value: Preset value.
        choices: Options for Dropdown properties, in declared order.
        description: Help text shown below the control.
        parameter_type: Binding kind (input, output or property).
        binding_name: Name of the bound parameter or property.
        script_format: Script format for script-valued parameters.
        not_empty: Whether the modeler rejects empty values.
        editable: Whether the user may change the value.
        sort_index: Ordering key, ascending; DEFAULT_SORT_INDEX sorts last.

    Example:
        >>> prop = TemplateProperty(
        ...     label="URL",
        ...     type=PropertyType.STRING,
        ...     binding_name="url",
        ...     not_empty=True,
        ... )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    label: str = Field(default="", description="Label shown in the properties panel")
    type: PropertyType = Field(..., description="Input control type")
    value: str = Field(default="", description="Preset value")
    choices: tuple[Choice, ...] = Field(
        default=(),
        description="Options for Dropdown properties",
    )
    description: str = Field(default="", description="Help text")
    parameter_type: ParameterType = Field(
        default=ParameterType.INPUT,
        description="Binding kind",
    )
    binding_name: str = Field(default="", description="Name of the bound parameter")
    script_format: str = Field(default="", description="Script format of the parameter")
    not_empty: bool = Field(default=False, description="Reject empty values")
    editable: bool = Field(default=True, description="Whether the value is editable")
    sort_index: int = Field(
        default=DEFAULT_SORT_INDEX,
        description="Build-time ordering key (not serialized)",
    )


class Template(BaseModel):
    """One element template document.

    ``applies_to`` has set semantics: duplicates are dropped and the first
    occurrence order is kept so that output stays deterministic.

    Attributes:
        name: Display name in the modeler template chooser.
        id: Identifier, unique within the output namespace.
        applies_to: BPMN element types the template is valid for.
        entries_visible: Whether non-template entries stay visible.
        schema_url: JSON Schema locator, stamped after construction.
        properties: Template properties in final order.

    Example:
        >>> template = Template(
        ...     name="HTTP Request",
        ...     id="com.example.http",
        ...     applies_to=("bpmn:ServiceTask",),
        ... )
        >>> stamped = template.with_schema("https://example.com/schema.json")
        >>> stamped.schema_url
        'https://example.com/schema.json'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(default="", description="Display name")
    id: str = Field(..., min_length=1, description="Template identifier")
    applies_to: tuple[str, ...] = Field(
        ...,
        min_length=1,
        description="BPMN element types the template applies to",
    )
    entries_visible: bool = Field(default=True, description="Show non-template entries")
    schema_url: str | None = Field(default=None, description="JSON Schema locator")
    properties: tuple[TemplateProperty, ...] = Field(
        default=(),
        description="Template properties in final order",
    )

    @field_validator("applies_to")
    @classmethod
    def dedupe_applies_to(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Drop duplicate and blank element types, keeping first-seen order."""
        unique = tuple(dict.fromkeys(t for t in v if t))
        if not unique:
            raise ValueError("applies_to must contain at least one element type")
        return unique

    def with_schema(self, url: str) -> Template:
        """Return a copy of this template stamped with a schema URL.

        The schema URL is set exactly once. Stamping again with the same URL
        returns the template unchanged.

        Args:
            url: JSON Schema locator.

        Returns:
            Template with ``schema_url`` set.

        Raises:
            ValueError: If the template already carries a different URL.
        """
        if self.schema_url == url:
            return self
        if self.schema_url is not None:
            msg = (
                f"Template '{self.id}' is already stamped with {self.schema_url}; "
                f"cannot restamp with {url}"
            )
            raise ValueError(msg)
        return self.model_copy(update={"schema_url": url})
