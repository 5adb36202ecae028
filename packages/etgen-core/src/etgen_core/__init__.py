"""etgen-core: Element template generation for the Camunda Modeler.

This package provides:
- Decorators that attach template metadata to code (etgen_core.annotations)
- Template, TemplateProperty, Choice: the generated document model
- TemplateBuilder: Raw metadata records -> Template models
- serialize_templates / load_templates: Template documents as JSON
- SchemaResolver / TemplateValidator: Validation against the published schema
"""

from __future__ import annotations

__version__ = "0.1.0"

# Builder
from etgen_core.builder import BuildResult, TemplateBuilder, build_templates

# Error types
from etgen_core.errors import (
    EtgenError,
    MalformedMetadataError,
    PersistenceError,
    SchemaResolutionError,
)

# Models and raw records
from etgen_core.schemas import (
    DEFAULT_SORT_INDEX,
    Choice,
    ChoiceMetadata,
    ParameterType,
    PropertyMetadata,
    PropertyType,
    Template,
    TemplateMetadata,
    TemplateProperty,
)

# Serialization
from etgen_core.serializer import load_templates, serialize_templates, template_to_document

# Validation
from etgen_core.validation import (
    ConformanceDiagnostic,
    SchemaResolver,
    TemplateValidator,
    ValidationReport,
    schema_url,
)

__all__ = [
    "__version__",
    # Builder
    "TemplateBuilder",
    "BuildResult",
    "build_templates",
    # Errors
    "EtgenError",
    "MalformedMetadataError",
    "SchemaResolutionError",
    "PersistenceError",
    # Models
    "Template",
    "TemplateProperty",
    "Choice",
    "PropertyType",
    "ParameterType",
    "DEFAULT_SORT_INDEX",
    "TemplateMetadata",
    "PropertyMetadata",
    "ChoiceMetadata",
    # Serialization
    "serialize_templates",
    "template_to_document",
    "load_templates",
    # Validation
    "schema_url",
    "SchemaResolver",
    "TemplateValidator",
    "ConformanceDiagnostic",
    "ValidationReport",
]
