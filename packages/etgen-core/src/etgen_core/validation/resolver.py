"""Element-templates JSON Schema resolution.

The schema is published on unpkg under a fixed base location. The locator
is ``<base>[@<version>]/resources/schema.json``; without a version the host
serves the latest release.

SchemaResolver fetches the schema once per run (lazily, on the first
resolve() call) and reuses the compiled validator for every document. A
transport, HTTP, JSON or schema failure is reported once as a
SchemaResolutionError and degrades validation to a no-op; resolve() never
refetches after a failure. A schema whose references cannot be resolved
is discovered on first use and degrades the same way (see discard()).
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import httpx
import structlog
from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError
from jsonschema.validators import validator_for
from referencing import Registry

from etgen_core.errors import SchemaResolutionError

if TYPE_CHECKING:
    from jsonschema.protocols import Validator

logger = structlog.get_logger(__name__)

SCHEMA_BASE_URL = "https://unpkg.com/@camunda/element-templates-json-schema"
SCHEMA_PATH = "/resources/schema.json"
LATEST_VERSION = "latest"
DEFAULT_TIMEOUT_SECONDS = 10.0


def schema_url(version: str | None = None, base_url: str = SCHEMA_BASE_URL) -> str:
    """Build the schema locator for a version.

    Args:
        version: Schema package version. None, "" or "latest" select the
            latest release (no version segment).
        base_url: Base location of the schema package.

    Returns:
        Schema URL.

    Example:
        >>> schema_url("0.12.0")
        'https://unpkg.com/@camunda/element-templates-json-schema@0.12.0/resources/schema.json'
        >>> schema_url()
        'https://unpkg.com/@camunda/element-templates-json-schema/resources/schema.json'
    """
    base = base_url.rstrip("/")
    if version and version != LATEST_VERSION:
        base = f"{base}@{version}"
    return f"{base}{SCHEMA_PATH}"


class SchemaResolver:
    """Fetch and compile the element-templates schema once per run.

    Attributes:
        url: Schema locator.
        timeout: HTTP timeout in seconds.
        error: The SchemaResolutionError of a failed resolution, if any.

    Example:
        >>> resolver = SchemaResolver("0.12.0")
        >>> validator = resolver.resolve()  # fetches
        >>> validator is resolver.resolve()  # cached, no second fetch
        True
    """

    def __init__(
        self,
        version: str | None = None,
        *,
        base_url: str = SCHEMA_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            version: Schema package version; None or "latest" for latest.
            base_url: Base location of the schema package.
            timeout: HTTP timeout in seconds.
            client: Optional httpx client (custom transport, proxies).
        """
        self.url = schema_url(version, base_url)
        self.timeout = timeout
        self.error: SchemaResolutionError | None = None
        self._client = client
        self._attempted = False
        self._validator: Validator | None = None
        self._log = logger.bind(component="schema_resolver", url=self.url)

    @property
    def attempted(self) -> bool:
        """True once resolution has been attempted."""
        return self._attempted

    @property
    def available(self) -> bool:
        """True if the schema was resolved successfully."""
        return self._validator is not None

    def resolve(self) -> Validator | None:
        """Return the compiled schema validator, fetching it on first use.

        Returns:
            jsonschema validator, or None if resolution failed.
        """
        if self._attempted:
            return self._validator

        self._attempted = True
        try:
            self._validator = self._load()
        except SchemaResolutionError as e:
            self.error = e
            self._log.warning("schema_resolution_failed", reason=e.user_message)
            return None

        self._log.info("schema_resolved")
        return self._validator

    def discard(self, error: SchemaResolutionError) -> None:
        """Drop a resolved schema that turned out to be unusable.

        Later resolve() calls return None and ``error`` is reported like
        any other resolution failure.

        Args:
            error: Why the schema cannot be used.
        """
        self._attempted = True
        self._validator = None
        self.error = error
        self._log.warning("schema_resolution_failed", reason=error.user_message)

    def _load(self) -> Validator:
        """Fetch, parse and compile the schema."""
        text = self._fetch()

        try:
            schema = json.loads(text)
        except json.JSONDecodeError as e:
            raise SchemaResolutionError(
                "Downloaded schema is not valid JSON",
                url=self.url,
                internal_details=f"JSONDecodeError: {e}",
            ) from e

        if not isinstance(schema, dict):
            raise SchemaResolutionError(
                "Downloaded schema is not a JSON object",
                url=self.url,
                internal_details=f"Top-level type: {type(schema).__name__}",
            )

        validator_cls = validator_for(schema, default=Draft7Validator)
        try:
            validator_cls.check_schema(schema)
        except SchemaError as e:
            raise SchemaResolutionError(
                "Downloaded document is not a valid JSON Schema",
                url=self.url,
                internal_details=f"SchemaError: {e.message}",
            ) from e

        # An empty registry keeps $ref lookups local; nothing is fetched during validation
        return validator_cls(schema, registry=Registry())

    def _fetch(self) -> str:
        """Download the schema text."""
        self._log.debug("schema_fetch_started", timeout=self.timeout)
        try:
            if self._client is not None:
                response = self._client.get(
                    self.url, timeout=self.timeout, follow_redirects=True
                )
            else:
                response = httpx.get(self.url, timeout=self.timeout, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise SchemaResolutionError(
                "Failed to download schema",
                url=self.url,
                internal_details=f"{type(e).__name__}: {e}",
            ) from e

        return response.text
