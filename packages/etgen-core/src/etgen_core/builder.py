"""TemplateBuilder: raw metadata records -> Template models.

This module implements the rules that turn declared metadata into element
templates:
- Defaulting: sentinel values map to the documented model defaults
- Ordering: properties are stably sorted by sort_index, so ties keep
  declaration order and unordered properties sort last
- Synthesis: a template declaring both ``function`` and
  ``function_name_property`` gets one extra hidden property that writes the
  function into the named BPMN property
- Validation: a record without ``id`` or ``applies_to`` is rejected with a
  MalformedMetadataError; the remaining records are still built
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog
from pydantic import ValidationError as PydanticValidationError

from etgen_core.errors import MalformedMetadataError
from etgen_core.schemas import (
    Choice,
    ParameterType,
    PropertyMetadata,
    PropertyType,
    Template,
    TemplateMetadata,
    TemplateProperty,
)

logger = structlog.get_logger(__name__)


@dataclass
class BuildResult:
    """Outcome of building a batch of metadata records.

    Attributes:
        templates: Built templates, in input order.
        errors: One MalformedMetadataError per rejected record.
    """

    templates: list[Template] = field(default_factory=list)
    errors: list[MalformedMetadataError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True if every record was built."""
        return not self.errors


class TemplateBuilder:
    """Build Template models from raw metadata records.

    Example:
        >>> builder = TemplateBuilder()
        >>> result = builder.build([
        ...     {
        ...         "id": "my.task",
        ...         "appliesTo": ["bpmn:ServiceTask"],
        ...         "properties": [
        ...             {"label": "URL", "type": "String", "sortIndex": 1},
        ...             {"label": "Retries", "type": "String"},
        ...         ],
        ...     }
        ... ])
        >>> [p.label for p in result.templates[0].properties]
        ['URL', 'Retries']
    """

    def __init__(self) -> None:
        self._log = logger.bind(component="template_builder")

    def build(
        self,
        records: Iterable[TemplateMetadata | Mapping[str, Any]],
    ) -> BuildResult:
        """Build one Template per record.

        Malformed records are collected in the result instead of aborting
        the batch.

        Args:
            records: Metadata records in discovery order.

        Returns:
            BuildResult with templates in input order and per-record errors.
        """
        result = BuildResult()

        for record in records:
            try:
                result.templates.append(self.build_template(record))
            except MalformedMetadataError as e:
                self._log.warning(
                    "template_skipped",
                    source=e.source,
                    field_path=e.field_path,
                    reason=e.user_message,
                )
                result.errors.append(e)

        return result

    def build_template(self, record: TemplateMetadata | Mapping[str, Any]) -> Template:
        """Build a single Template.

        Args:
            record: Metadata record or an equivalent mapping.

        Returns:
            Validated, immutable Template.

        Raises:
            MalformedMetadataError: If the record is missing ``id`` or
                ``applies_to``, or cannot be read as a metadata record.
        """
        metadata = self._coerce(record)
        source = metadata.source or None

        if not metadata.id:
            raise MalformedMetadataError(
                "Template id must not be empty",
                source=source,
                field_path="id",
            )
        if not any(metadata.applies_to):
            raise MalformedMetadataError(
                "Template must apply to at least one element type",
                source=source,
                field_path="applies_to",
            )

        properties = [self._build_property(p, metadata) for p in metadata.properties]

        function_property = self._synthesize_function_property(metadata)
        if function_property is not None:
            properties.append(function_property)

        # sorted() is stable: equal sort_index keeps declaration order
        properties = sorted(properties, key=lambda p: p.sort_index)

        template = Template(
            name=metadata.name,
            id=metadata.id,
            applies_to=metadata.applies_to,
            entries_visible=metadata.entries_visible,
            properties=tuple(properties),
        )

        self._log.debug(
            "template_built",
            template_id=template.id,
            source=source,
            properties=len(template.properties),
        )
        return template

    def _coerce(self, record: TemplateMetadata | Mapping[str, Any]) -> TemplateMetadata:
        """Validate a mapping into a TemplateMetadata record."""
        if isinstance(record, TemplateMetadata):
            return record

        try:
            return TemplateMetadata.model_validate(record)
        except PydanticValidationError as e:
            first = e.errors()[0]
            field_path = ".".join(str(x) for x in first["loc"])
            source = record.get("source") if isinstance(record, Mapping) else None
            raise MalformedMetadataError(
                f"Invalid template metadata: {first['msg']}",
                source=source if isinstance(source, str) and source else None,
                field_path=field_path or None,
                internal_details=str(e),
            ) from e

    def _build_property(
        self,
        prop: PropertyMetadata,
        metadata: TemplateMetadata,
    ) -> TemplateProperty:
        """Map a declared property onto a TemplateProperty."""
        if prop.type is PropertyType.DROPDOWN and not prop.choices:
            self._log.warning(
                "dropdown_without_choices",
                template_id=metadata.id,
                label=prop.label,
                source=metadata.source or None,
            )

        return TemplateProperty(
            label=prop.label,
            type=prop.type,
            value=prop.value,
            choices=tuple(Choice(name=c.name, value=c.value) for c in prop.choices),
            description=prop.description,
            parameter_type=prop.parameter_type,
            binding_name=prop.binding_name,
            script_format=prop.script_format,
            not_empty=prop.not_empty,
            editable=prop.editable,
            sort_index=prop.sort_index,
        )

    def _synthesize_function_property(
        self,
        metadata: TemplateMetadata,
    ) -> TemplateProperty | None:
        """Create the hidden property that surfaces ``function``, if declared."""
        if metadata.function and metadata.function_name_property:
            return TemplateProperty(
                type=PropertyType.HIDDEN,
                value=metadata.function,
                parameter_type=ParameterType.PROPERTY,
                binding_name=metadata.function_name_property,
                sort_index=metadata.function_sort_index,
            )

        if metadata.function or metadata.function_name_property:
            self._log.warning(
                "function_property_incomplete",
                template_id=metadata.id,
                function=metadata.function or None,
                function_name_property=metadata.function_name_property or None,
            )
        return None


def build_templates(
    records: Iterable[TemplateMetadata | Mapping[str, Any]],
) -> BuildResult:
    """Build templates with a default TemplateBuilder.

    Args:
        records: Metadata records in discovery order.

    Returns:
        BuildResult with templates and per-record errors.
    """
    return TemplateBuilder().build(records)
