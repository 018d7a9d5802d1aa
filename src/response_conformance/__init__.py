"""response-conformance: content-type-aware validation of API responses against their schemas."""

from __future__ import annotations

from response_conformance.__metadata__ import __version__
from response_conformance.config import (
    ValidatorConfig,
    load_config_from_pyproject,
    merge_configs,
)
from response_conformance.record import ResponseRecord
from response_conformance.validation import (
    Outcome,
    ResponseValidator,
    ValidationResult,
    compile_json_schema,
    compile_xml_schema,
    is_valid,
    serialize_schema,
)

__all__ = [
    "__version__",
    # Config
    "ValidatorConfig",
    "load_config_from_pyproject",
    "merge_configs",
    # Records
    "ResponseRecord",
    # Validation
    "Outcome",
    "ResponseValidator",
    "ValidationResult",
    "is_valid",
    # Schemas
    "compile_json_schema",
    "compile_xml_schema",
    "serialize_schema",
]
