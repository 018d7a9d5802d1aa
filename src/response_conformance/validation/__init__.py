"""Response validation for response-conformance."""

from __future__ import annotations

from response_conformance.validation.response import (
    DISPATCH_TABLE,
    ResponseValidator,
    is_valid,
    select_strategy,
)
from response_conformance.validation.result import Outcome, ValidationResult
from response_conformance.validation.schema import (
    compile_json_schema,
    compile_xml_schema,
    parse_json_payload,
    serialize_schema,
)
from response_conformance.validation.strategies import validate_json, validate_text, validate_xml

__all__ = [
    "DISPATCH_TABLE",
    "Outcome",
    "ResponseValidator",
    "ValidationResult",
    "compile_json_schema",
    "compile_xml_schema",
    "is_valid",
    "parse_json_payload",
    "select_strategy",
    "serialize_schema",
    "validate_json",
    "validate_text",
    "validate_xml",
]
