"""Decorators and helpers that attach template metadata to code.

Usage:
    from etgen_core.annotations import SERVICE_TASK, choice, template, template_property

    class HttpTasks:
        # Class-level property, shared by every template of the class
        url = template_property(type="String", label="URL", binding_name="url", sort_index=1)

        @template(
            name="HTTP GET",
            id="com.example.http.get",
            applies_to=[SERVICE_TASK],
            function="httpGet",
            function_name_property="camunda:class",
            properties=[
                template_property(
                    type="Dropdown",
                    label="Method",
                    binding_name="method",
                    choices=[choice("GET", "get"), choice("HEAD", "head")],
                ),
            ],
        )
        def get(self) -> None: ...

The decorators only record metadata; nothing is generated at import time.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from etgen_core.schemas.metadata import ChoiceMetadata, PropertyMetadata, TemplateMetadata
from etgen_core.schemas.template import DEFAULT_SORT_INDEX, ParameterType, PropertyType

F = TypeVar("F", bound=Callable[..., Any])

TEMPLATE_ATTRIBUTE = "__etgen_template__"

# Element types
SERVICE_TASK = "bpmn:ServiceTask"

# Property types
STRING = PropertyType.STRING
TEXT = PropertyType.TEXT
DROPDOWN = PropertyType.DROPDOWN
HIDDEN = PropertyType.HIDDEN

# Parameter types
INPUT = ParameterType.INPUT
OUTPUT = ParameterType.OUTPUT
PROPERTY = ParameterType.PROPERTY


def choice(name: str, value: str) -> ChoiceMetadata:
    """Declare one dropdown option."""
    return ChoiceMetadata(name=name, value=value)


def template_property(
    *,
    type: PropertyType | str,
    label: str = "",
    value: str = "",
    choices: Iterable[ChoiceMetadata] = (),
    description: str = "",
    parameter_type: ParameterType | str = ParameterType.INPUT,
    binding_name: str = "",
    script_format: str = "",
    not_empty: bool = False,
    editable: bool = True,
    sort_index: int = DEFAULT_SORT_INDEX,
) -> PropertyMetadata:
    """Declare a template property.

    Assigned as a class attribute, the property is shared by every template
    declared on that class. Passed in ``template(properties=[...])`` it
    belongs to that template only.

    Raises:
        pydantic.ValidationError: If ``type`` or ``parameter_type`` is unknown.
    """
    return PropertyMetadata(
        label=label,
        type=type,
        value=value,
        choices=tuple(choices),
        description=description,
        parameter_type=parameter_type,
        binding_name=binding_name,
        script_format=script_format,
        not_empty=not_empty,
        editable=editable,
        sort_index=sort_index,
    )


def template(
    *,
    name: str,
    id: str,
    applies_to: Iterable[str] | str,
    function: str = "",
    function_name_property: str = "",
    function_sort_index: int = DEFAULT_SORT_INDEX,
    properties: Iterable[PropertyMetadata] = (),
    entries_visible: bool = True,
) -> Callable[[F], F]:
    """Mark a function or method as the source of one element template.

    Args:
        name: Display name in the modeler.
        id: Template identifier.
        applies_to: BPMN element types (a single string is accepted).
        function: Value surfaced through a hidden property.
        function_name_property: BPMN property that receives ``function``.
        function_sort_index: Sort index of the hidden function property.
        properties: Template-specific properties.
        entries_visible: Whether non-template entries stay visible.

    Returns:
        Decorator that records a TemplateMetadata on the function.

    Raises:
        TypeError: If the function already carries a template.
    """
    if isinstance(applies_to, str):
        applies_to = (applies_to,)

    def decorator(func: F) -> F:
        target = getattr(func, "__func__", func)
        if get_template_metadata(target) is not None:
            msg = f"{target.__qualname__} already declares an element template"
            raise TypeError(msg)

        metadata = TemplateMetadata(
            name=name,
            id=id,
            applies_to=tuple(applies_to),
            function=function,
            function_name_property=function_name_property,
            function_sort_index=function_sort_index,
            properties=tuple(properties),
            entries_visible=entries_visible,
            source=f"{target.__module__}.{target.__qualname__}",
        )
        setattr(target, TEMPLATE_ATTRIBUTE, metadata)
        return func

    return decorator


def get_template_metadata(obj: Any) -> TemplateMetadata | None:
    """Return the template metadata attached to ``obj``, if any.

    Unwraps staticmethod and classmethod objects as found in a class
    ``__dict__``.
    """
    func = getattr(obj, "__func__", obj)
    metadata = getattr(func, TEMPLATE_ATTRIBUTE, None)
    if isinstance(metadata, TemplateMetadata):
        return metadata
    return None
