"""Format-specific validation strategies.

Each strategy takes a response record and the active configuration and returns
a :class:`ValidationResult`. Strategies never raise for bad input: malformed
schemas, malformed payloads and schema violations all come back as an invalid
result.
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, Any

from lxml import etree
from referencing.exceptions import Unresolvable

from response_conformance.validation.result import ValidationResult
from response_conformance.validation.schema import (
    compile_json_schema,
    compile_xml_schema,
    parse_json_payload,
)

if TYPE_CHECKING:
    from jsonschema.protocols import Validator

    from response_conformance.config import ValidatorConfig
    from response_conformance.record import ResponseRecord


def _format_error_path(error: Any) -> str:
    return ".".join(str(p) for p in error.path) if error.path else "root"


def evaluate_json(validator: Validator, document: Any, *, collect_all_errors: bool = True) -> ValidationResult:
    """Evaluate a parsed JSON document against a compiled JSON Schema.

    Args:
        validator: Compiled validator from :func:`compile_json_schema`.
        document: Parsed JSON document.
        collect_all_errors: Report every error rather than the first one.

    Returns:
        ValidationResult listing one error per schema violation.
    """
    try:
        if collect_all_errors:
            violations = list(validator.iter_errors(document))
        else:
            first = next(iter(validator.iter_errors(document)), None)
            violations = [first] if first is not None else []
    except Unresolvable as e:
        return ValidationResult.failure(f"Schema reference cannot be resolved: {e}")
    except RecursionError:
        # e.g. {"$ref": "#"}, or a document nested deeper than the schema walk can follow
        return ValidationResult.failure("JSON Schema evaluation recursed too deeply")

    if violations:
        return ValidationResult(
            valid=False,
            errors=[f"JSON Schema validation failed at {_format_error_path(v)}: {v.message}" for v in violations],
        )

    return ValidationResult(valid=True)


def _validate_json_text(text: str, response: ResponseRecord, config: ValidatorConfig) -> ValidationResult:
    compiled = compile_json_schema(response.expected_schema, config)
    if not compiled.ok:
        return ValidationResult.failure(compiled.error)

    document = parse_json_payload(text)
    if not document.ok:
        return ValidationResult.failure(document.error)

    return evaluate_json(compiled.value, document.value, collect_all_errors=config.collect_all_errors)


def validate_json(response: ResponseRecord, config: ValidatorConfig) -> ValidationResult:
    """Validate a JSON body against the expected JSON Schema.

    An absent body is parsed as the empty string and is therefore invalid.
    """
    try:
        text = response.content_text()
    except UnicodeDecodeError as e:
        return ValidationResult.failure(f"Response body is not valid UTF-8: {e}")

    return _validate_json_text(text, response, config)


def validate_text(response: ResponseRecord, config: ValidatorConfig) -> ValidationResult:
    """Validate a plain text or HTML body as a single JSON string value.

    The body is wrapped in double quotes and parsed as a JSON string literal,
    so schemas such as ``{"type": "string", "maxLength": 64}`` apply to the
    text itself. The body is not escaped first: quotes, backslashes or control
    characters in it make the literal malformed and the response invalid.
    """
    try:
        text = response.content_text()
    except UnicodeDecodeError as e:
        return ValidationResult.failure(f"Response body is not valid UTF-8: {e}")

    return _validate_json_text(f'"{text}"', response, config)


def validate_xml(response: ResponseRecord, config: ValidatorConfig) -> ValidationResult:
    """Validate an XML body against the expected XML Schema.

    The body is streamed through a schema-validating parser. Reading stops at
    the first well-formedness error or schema violation; the stream is closed
    on every path out.

    Byte bodies are parsed in the encoding they declare. Text bodies are
    already decoded, so any ``encoding=`` in their XML declaration is ignored.
    """
    compiled = compile_xml_schema(response.expected_schema)
    if not compiled.ok:
        return ValidationResult.failure(compiled.error)

    try:
        payload = response.content_bytes()
    except UnicodeEncodeError as e:
        return ValidationResult.failure(f"Response body cannot be encoded as UTF-8: {e}")

    encoding = None if isinstance(response.content, (bytes, bytearray)) else "utf-8"

    try:
        with io.BytesIO(payload) as source:
            for _event, _element in etree.iterparse(
                source,
                schema=compiled.value,
                encoding=encoding,
                resolve_entities=False,
                no_network=True,
            ):
                pass
    except etree.LxmlError as e:
        return ValidationResult.failure(f"XML Schema validation failed: {e}")

    return ValidationResult(valid=True)
