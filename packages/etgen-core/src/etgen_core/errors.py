"""Custom exception hierarchy for etgen-core.

This module defines the exception classes used throughout etgen:
- EtgenError: Base exception for all etgen-related errors
- MalformedMetadataError: A raw metadata record failed required-field validation
- SchemaResolutionError: The element-templates JSON Schema could not be fetched or parsed
- PersistenceError: A generated template file could not be written

Scope of each error:
- MalformedMetadataError and PersistenceError are element-scoped. The element is
  skipped and the run continues with the remaining elements.
- SchemaResolutionError is run-scoped. It is reported once and validation becomes
  a no-op for the rest of the run.

User-facing messages are safe to display; technical details are logged
internally via structlog.
"""

from __future__ import annotations

import structlog

logger = structlog.get_logger(__name__)


class EtgenError(Exception):
    """Base exception for etgen.

    All etgen exceptions inherit from this class. User-facing messages
    are safe to display; technical details are logged internally.

    Args:
        user_message: Safe message to display to the user.
        internal_details: Optional technical details for logging. This is
            logged internally but never part of the user message.

    Example:
        >>> raise EtgenError(
        ...     "Template generation failed",
        ...     internal_details="KeyError: 'appliesTo' in HttpTasks.send",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize EtgenError with user message and optional internal details.

        Args:
            user_message: Safe message to display to the user.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message)
        self.user_message = user_message
        self.internal_details = internal_details

        if internal_details:
            logger.error(
                "etgen_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class MalformedMetadataError(EtgenError):
    """Raised when a raw metadata record fails required-field validation.

    Use this exception when:
    - A template record has an empty ``id``
    - A template record has no ``applies_to`` entries
    - A mapping cannot be coerced into a metadata record (unknown property
      type, wrong field types)

    Attributes:
        source: Qualified name of the code element the record came from.
        field_path: Dot-separated path to the offending field (e.g., "id",
            "template_properties.2.type").

    Example:
        >>> raise MalformedMetadataError(
        ...     "Template id must not be empty",
        ...     source="tasks.HttpTasks.send",
        ...     field_path="id",
        ... )
        # User sees: "Template id must not be empty (element 'tasks.HttpTasks.send', field 'id')"
    """

    def __init__(
        self,
        user_message: str,
        *,
        source: str | None = None,
        field_path: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        """Initialize MalformedMetadataError with element context.

        Args:
            user_message: Safe message to display to the user.
            source: Qualified name of the code element (optional).
            field_path: Dot-separated path to the field (optional).
            internal_details: Technical details for internal logging only.
        """
        context_parts: list[str] = []
        if source:
            context_parts.append(f"element '{source}'")
        if field_path:
            context_parts.append(f"field '{field_path}'")

        if context_parts:
            full_message = f"{user_message} ({', '.join(context_parts)})"
        else:
            full_message = user_message

        super().__init__(full_message, internal_details=internal_details)

        self.source = source
        self.field_path = field_path


class SchemaResolutionError(EtgenError):
    """Raised when the element-templates JSON Schema cannot be resolved.

    Use this exception when:
    - The schema URL cannot be reached (transport error, timeout)
    - The server answers with an error status
    - The body is not JSON or not a valid JSON Schema

    Attributes:
        url: The schema locator that failed.

    Example:
        >>> raise SchemaResolutionError(
        ...     "Failed to download schema",
        ...     url="https://unpkg.com/@camunda/element-templates-json-schema/resources/schema.json",
        ...     internal_details="ConnectError: [Errno -2] Name or service not known",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        url: str,
        internal_details: str | None = None,
    ) -> None:
        """Initialize SchemaResolutionError.

        Args:
            user_message: Safe message to display to the user.
            url: The schema URL that could not be resolved.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(f"{user_message}: {url}", internal_details=internal_details)
        self.url = url


class PersistenceError(EtgenError):
    """Raised when a template file cannot be written.

    Attributes:
        path: Output path that could not be written.

    Example:
        >>> raise PersistenceError(
        ...     "Failed to write output file",
        ...     path="element-templates/HttpTasksTemplates.json",
        ...     internal_details="PermissionError: [Errno 13] Permission denied",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        path: str,
        internal_details: str | None = None,
    ) -> None:
        """Initialize PersistenceError.

        Args:
            user_message: Safe message to display to the user.
            path: Output file path.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(f"{user_message} {path}", internal_details=internal_details)
        self.path = path
