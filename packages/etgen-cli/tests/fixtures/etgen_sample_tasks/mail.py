"""Mail service tasks sharing a class-level property."""

from __future__ import annotations

from etgen_core.annotations import SERVICE_TASK, STRING, template, template_property


class MailTasks:
    smtp_host = template_property(type=STRING, label="SMTP host", binding_name="smtpHost", sort_index=0)

    @template(
        name="Send mail",
        id="com.example.mail.send",
        applies_to=[SERVICE_TASK, "bpmn:SendTask", SERVICE_TASK],
        properties=[template_property(type=STRING, label="To", binding_name="to", not_empty=True)],
    )
    def send(self) -> None:
        pass

    @staticmethod
    @template(
        name="Check inbox",
        id="com.example.mail.check",
        applies_to=[SERVICE_TASK],
        entries_visible=False,
    )
    def check() -> None:
        pass


class MailHelper:
    """Not a template group."""

    def format(self, text: str) -> str:
        return text.strip()
