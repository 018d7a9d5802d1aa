"""Response validation for response-conformance."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from response_conformance.config import ValidatorConfig
from response_conformance.validation.result import ValidationResult
from response_conformance.validation.strategies import validate_json, validate_text, validate_xml

if TYPE_CHECKING:
    from response_conformance.record import ResponseRecord

logger = logging.getLogger(__name__)

Strategy = Callable[["ResponseRecord", ValidatorConfig], ValidationResult]
ContentTypePredicate = Callable[[str], bool]


def content_type_prefix(*prefixes: str) -> ContentTypePredicate:
    """Build a case-insensitive prefix match over content types.

    Example:
        >>> matches = content_type_prefix("text/plain", "text/html")
        >>> matches("TEXT/HTML; charset=utf-8")
        True
    """
    lowered = tuple(prefix.lower() for prefix in prefixes)

    def matches(content_type: str) -> bool:
        return content_type.lower().startswith(lowered)

    return matches


def accept_unsupported(response: ResponseRecord, config: ValidatorConfig) -> ValidationResult:
    """Fallback strategy: content types without a strategy are valid."""
    return ValidationResult.skipped(f"Content type '{response.media_type}' is not supported, skipping validation")


# Evaluated top to bottom, first match wins.
DISPATCH_TABLE: tuple[tuple[ContentTypePredicate, Strategy], ...] = (
    (content_type_prefix("application/json"), validate_json),
    (content_type_prefix("application/xml"), validate_xml),
    (content_type_prefix("text/plain", "text/html"), validate_text),
)


def select_strategy(content_type: str) -> Strategy:
    """Pick the strategy for a declared content type.

    Args:
        content_type: Declared content type, parameters included.

    Returns:
        The first matching strategy of :data:`DISPATCH_TABLE`, or
        :func:`accept_unsupported` when nothing matches.
    """
    for matches, strategy in DISPATCH_TABLE:
        if matches(content_type):
            return strategy
    return accept_unsupported


class ResponseValidator:
    """Validate response payloads against their expected schema.

    Picks a strategy from the declared content type: JSON Schema for
    ``application/json``, XML Schema for ``application/xml`` and a JSON string
    check for ``text/plain`` and ``text/html``.

    Missing context fails open: a response without a schema, without a
    content type, or with an unsupported content type is valid. Broken input
    fails closed: a malformed schema, a malformed payload or a schema
    violation makes the response invalid. No exception escapes for either.

    The validator holds only its configuration, so one instance can be shared
    across threads.

    Example:
        >>> validator = ResponseValidator()
        >>> record = ResponseRecord(
        ...     content='{"x": 1}',
        ...     content_type="application/json",
        ...     expected_schema={"type": "object", "required": ["x"]},
        ... )
        >>> validator.is_valid(record)
        True
    """

    def __init__(self, config: ValidatorConfig | None = None) -> None:
        """Initialize the response validator.

        Args:
            config: Validation settings. Defaults to :class:`ValidatorConfig`.
        """
        self.config = config or ValidatorConfig()

    def validate(self, response: ResponseRecord) -> ValidationResult:
        """Validate a response and explain the verdict.

        Args:
            response: The response record to check.

        Returns:
            ValidationResult with errors for invalid responses and a warning
            when validation was skipped.
        """
        if response.expected_schema is None:
            logger.debug("No expected schema for %r, skipping validation", response)
            return ValidationResult.skipped("No expected schema, skipping validation")

        if not response.content_type:
            logger.debug("No content type for %r, skipping validation", response)
            return ValidationResult.skipped("No content type, skipping validation")

        strategy = select_strategy(response.content_type)
        logger.debug("Validating %s response with %s", response.media_type, strategy.__name__)
        result = strategy(response, self.config)

        if not result.valid:
            logger.debug("%s response failed validation: %s", response.media_type, "; ".join(result.errors))

        return result

    def is_valid(self, response: ResponseRecord) -> bool:
        """Check whether a response conforms to its expected schema."""
        return self.validate(response).valid


def is_valid(response: ResponseRecord, config: ValidatorConfig | None = None) -> bool:
    """Check whether a response conforms to its expected schema.

    Shortcut for ``ResponseValidator(config).is_valid(response)``.
    """
    return ResponseValidator(config).is_valid(response)
