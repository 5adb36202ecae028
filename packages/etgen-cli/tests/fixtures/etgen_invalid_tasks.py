"""Templates with a malformed record and a non-conforming property."""

from __future__ import annotations

from etgen_core.annotations import DROPDOWN, SERVICE_TASK, STRING, template, template_property


class InvalidTasks:
    @template(
        name="Valid",
        id="com.example.invalid.valid",
        applies_to=[SERVICE_TASK],
        properties=[template_property(type=STRING, label="Name", binding_name="name")],
    )
    def valid(self) -> None:
        pass

    @template(name="Missing id", id="", applies_to=[SERVICE_TASK])
    def missing_id(self) -> None:
        pass

    @template(
        name="Empty dropdown",
        id="com.example.invalid.dropdown",
        applies_to=[SERVICE_TASK],
        properties=[template_property(type=DROPDOWN, label="Mode", binding_name="mode")],
    )
    def empty_dropdown(self) -> None:
        pass


class OnlyMalformedTasks:
    @template(name="No element", id="com.example.invalid.none", applies_to=[])
    def nothing(self) -> None:
        pass
