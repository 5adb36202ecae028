"""Element template document serialization.

This module renders Template models into the JSON documents consumed by the
modeler and reads them back:
- template_to_document(): one Template -> ordered dict
- serialize_templates(): one Template -> JSON object, several -> JSON array
- load_templates(): JSON text -> list[Template]

Document contract:
- Top-level keys, in order: $schema, name, id, appliesTo, properties, entriesVisible
- Property keys appear only when they differ from the default, except
  ``type`` (always) and ``binding`` (always, the schema requires it)
- sort_index is never serialized
- Output is a pure function of its input: no timestamps, fixed key order
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

from etgen_core.schemas import (
    Choice,
    ParameterType,
    PropertyType,
    Template,
    TemplateProperty,
)

INPUT_PARAMETER_BINDING = "camunda:inputParameter"
OUTPUT_PARAMETER_BINDING = "camunda:outputParameter"
PROPERTY_BINDING = "property"

_BINDING_TYPES: dict[ParameterType, str] = {
    ParameterType.INPUT: INPUT_PARAMETER_BINDING,
    ParameterType.OUTPUT: OUTPUT_PARAMETER_BINDING,
    ParameterType.PROPERTY: PROPERTY_BINDING,
}
_PARAMETER_TYPES: dict[str, ParameterType] = {v: k for k, v in _BINDING_TYPES.items()}

JSON_INDENT = 2


def binding_to_document(prop: TemplateProperty) -> dict[str, str]:
    """Render the binding object of a property.

    Output parameters name their source variable under ``source``; input
    parameters and BPMN properties use ``name``.
    """
    binding: dict[str, str] = {"type": _BINDING_TYPES[prop.parameter_type]}

    if prop.parameter_type is ParameterType.OUTPUT:
        binding["source"] = prop.binding_name
    else:
        binding["name"] = prop.binding_name

    if prop.script_format and prop.parameter_type is not ParameterType.PROPERTY:
        binding["scriptFormat"] = prop.script_format

    return binding


def property_to_document(prop: TemplateProperty) -> dict[str, Any]:
    """Render one property, omitting fields that hold their default."""
    document: dict[str, Any] = {}

    if prop.label:
        document["label"] = prop.label
    document["type"] = prop.type.value
    if prop.value:
        document["value"] = prop.value
    if prop.description:
        document["description"] = prop.description
    if prop.choices:
        document["choices"] = [{"name": c.name, "value": c.value} for c in prop.choices]
    if not prop.editable:
        document["editable"] = False
    document["binding"] = binding_to_document(prop)
    if prop.not_empty:
        document["constraints"] = {"notEmpty": True}

    return document


def template_to_document(
    template: Template,
    schema_url: str | None = None,
) -> dict[str, Any]:
    """Render one template with the fixed top-level key order.

    Args:
        template: Template to render.
        schema_url: Optional schema URL to stamp before rendering.

    Returns:
        Ordered dictionary ready for json.dumps().

    Raises:
        ValueError: If no schema URL is available, or ``schema_url``
            conflicts with the URL already stamped on the template.
    """
    if schema_url is not None:
        template = template.with_schema(schema_url)
    if template.schema_url is None:
        msg = f"Template '{template.id}' has no schema URL; stamp it before serialization"
        raise ValueError(msg)

    return {
        "$schema": template.schema_url,
        "name": template.name,
        "id": template.id,
        "appliesTo": list(template.applies_to),
        "properties": [property_to_document(p) for p in template.properties],
        "entriesVisible": template.entries_visible,
    }


def serialize_templates(
    templates: Sequence[Template],
    schema_url: str | None = None,
) -> str:
    """Serialize templates into canonical JSON text.

    A single template is written as a JSON object; several templates are
    written as a JSON array in the given order.

    Args:
        templates: Templates to serialize (at least one).
        schema_url: Optional schema URL to stamp on every template.

    Returns:
        Pretty-printed JSON text.

    Raises:
        ValueError: If ``templates`` is empty or a template has no schema URL.

    Example:
        >>> text = serialize_templates([template], schema_url=SCHEMA_URL)
        >>> json.loads(text)["id"]
        'com.example.http'
    """
    if not templates:
        raise ValueError("At least one template is required")

    documents = [template_to_document(t, schema_url) for t in templates]
    payload: Any = documents[0] if len(documents) == 1 else documents

    return json.dumps(payload, indent=JSON_INDENT, ensure_ascii=False)


def load_templates(text: str) -> list[Template]:
    """Parse template JSON text back into Template models.

    Omitted keys take their documented defaults. ``sort_index`` is not part
    of the document, so loaded properties carry the default index and keep
    their document order.

    Args:
        text: JSON text holding one template object or an array of them.

    Returns:
        Templates in document order.

    Raises:
        json.JSONDecodeError: If the text is not JSON.
        ValueError: If the JSON is not a template object or array, or a
            property has a missing or unknown type or binding type.
        pydantic.ValidationError: If a template is structurally invalid.
    """
    data = json.loads(text)
    documents = data if isinstance(data, list) else [data]

    templates: list[Template] = []
    for document in documents:
        if not isinstance(document, Mapping):
            raise ValueError(f"Expected a template object, got {type(document).__name__}")
        templates.append(_template_from_document(document))
    return templates


def _template_from_document(document: Mapping[str, Any]) -> Template:
    """Rebuild a Template from its document form."""
    return Template(
        name=document.get("name", ""),
        id=document.get("id", ""),
        applies_to=tuple(document.get("appliesTo", ())),
        entries_visible=document.get("entriesVisible", True),
        schema_url=document.get("$schema"),
        properties=tuple(
            _property_from_document(p, index)
            for index, p in enumerate(document.get("properties", ()))
        ),
    )


def _property_from_document(document: Mapping[str, Any], index: int) -> TemplateProperty:
    """Rebuild a TemplateProperty from its document form.

    Raises:
        ValueError: If ``type`` is missing or unknown, or the binding type
            is not one this serializer writes.
    """
    if "type" not in document:
        raise ValueError(f"Property {index} has no 'type'")
    try:
        property_type = PropertyType(document["type"])
    except ValueError as e:
        raise ValueError(f"Property {index} has unknown type {document['type']!r}") from e

    binding: Mapping[str, Any] = document.get("binding", {})
    binding_type = binding.get("type")
    if binding_type is None:
        parameter_type = ParameterType.INPUT
    elif binding_type in _PARAMETER_TYPES:
        parameter_type = _PARAMETER_TYPES[binding_type]
    else:
        raise ValueError(f"Property {index} has unsupported binding type {binding_type!r}")

    if parameter_type is ParameterType.OUTPUT:
        binding_name = binding.get("source", "")
    else:
        binding_name = binding.get("name", "")

    return TemplateProperty(
        label=document.get("label", ""),
        type=property_type,
        value=document.get("value", ""),
        choices=tuple(Choice.model_validate(c) for c in document.get("choices", ())),
        description=document.get("description", ""),
        parameter_type=parameter_type,
        binding_name=binding_name,
        script_format=binding.get("scriptFormat", ""),
        not_empty=document.get("constraints", {}).get("notEmpty", False),
        editable=document.get("editable", True),
    )
