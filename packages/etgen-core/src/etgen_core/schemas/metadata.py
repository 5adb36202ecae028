"""Raw metadata records attached to code elements.

These records mirror the Template/TemplateProperty/Choice shapes exactly as
they are declared on one code element. Every field is always present;
omission is expressed with sentinel values ("" for strings, () for
sequences, DEFAULT_SORT_INDEX for ordering) which the TemplateBuilder maps
to the documented defaults.

Records accept snake_case field names as well as the camelCase names used
in template documents, so plain mappings such as
``{"id": "my.task", "appliesTo": ["bpmn:ServiceTask"]}`` validate directly.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from etgen_core.schemas.template import DEFAULT_SORT_INDEX, ParameterType, PropertyType

RECORD_CONFIG = ConfigDict(
    frozen=True,
    extra="forbid",
    alias_generator=to_camel,
    populate_by_name=True,
)


class ChoiceMetadata(BaseModel):
    """Declared dropdown option.

    Attributes:
        name: Label shown in the dropdown.
        value: Value written into the BPMN element.
    """

    model_config = RECORD_CONFIG

    name: str = Field(..., description="Label shown in the dropdown")
    value: str = Field(..., description="Value written into the BPMN element")


class PropertyMetadata(BaseModel):
    """Declared template property, as attached to a code element.

    Only ``type`` is required. All other fields carry sentinel defaults.

    Example:
        >>> PropertyMetadata.model_validate({"label": "URL", "type": "String", "sortIndex": 1})
    """

    model_config = RECORD_CONFIG

    label: str = ""
    type: PropertyType
    value: str = ""
    choices: tuple[ChoiceMetadata, ...] = ()
    description: str = ""
    parameter_type: ParameterType = ParameterType.INPUT
    binding_name: str = ""
    script_format: str = ""
    not_empty: bool = False
    editable: bool = True
    sort_index: int = DEFAULT_SORT_INDEX


class TemplateMetadata(BaseModel):
    """Declared element template, as attached to one code element.

    ``id`` and ``applies_to`` are required by the builder but default to
    empty sentinels here, so a record with missing values can still be
    represented and reported as malformed instead of failing discovery.

    Attributes:
        name: Display name.
        id: Template identifier (required non-empty by the builder).
        applies_to: BPMN element types (required non-empty by the builder).
        function: Function value surfaced through a hidden property.
        function_name_property: Name of the BPMN property that receives
            ``function``.
        function_sort_index: Sort index of the synthesized function property.
        properties: Declared properties in declaration order.
        entries_visible: Whether non-template entries stay visible.
        source: Qualified name of the code element, for diagnostics.
    """

    model_config = RECORD_CONFIG

    name: str = ""
    id: str = ""
    applies_to: tuple[str, ...] = ()
    function: str = ""
    function_name_property: str = ""
    function_sort_index: int = DEFAULT_SORT_INDEX
    properties: tuple[PropertyMetadata, ...] = ()
    entries_visible: bool = True
    source: str = ""
