"""Element template models and raw metadata records.

This package provides:
- Template, TemplateProperty, Choice: the generated document model
- PropertyType, ParameterType: property control and binding kinds
- TemplateMetadata, PropertyMetadata, ChoiceMetadata: raw records attached
  to code elements and consumed by the TemplateBuilder
"""

from __future__ import annotations

from etgen_core.schemas.metadata import ChoiceMetadata, PropertyMetadata, TemplateMetadata
from etgen_core.schemas.template import (
    DEFAULT_SORT_INDEX,
    Choice,
    ParameterType,
    PropertyType,
    Template,
    TemplateProperty,
)

__all__: list[str] = [
    # Document model
    "Template",
    "TemplateProperty",
    "Choice",
    "PropertyType",
    "ParameterType",
    "DEFAULT_SORT_INDEX",
    # Raw metadata records
    "TemplateMetadata",
    "PropertyMetadata",
    "ChoiceMetadata",
]
