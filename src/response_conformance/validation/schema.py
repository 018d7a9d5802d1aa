"""Schema compilation and payload parsing.

A response's expected schema is a single JSON-like tree. JSON and text payloads
read it as a JSON Schema; XML payloads serialize it to text and read that text
as an XML Schema (XSD). Each reading lives behind its own compile function so
the reinterpretation can be exercised on its own.

Every helper here returns an :class:`Outcome` instead of raising, so the
strategies only ever deal with success or a failure message.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from jsonschema import (
    Draft4Validator,
    Draft6Validator,
    Draft7Validator,
    Draft201909Validator,
    Draft202012Validator,
)
from jsonschema.exceptions import SchemaError
from jsonschema.validators import validator_for
from lxml import etree
from referencing import Registry

from response_conformance.config import ValidatorConfig
from response_conformance.validation.result import Outcome

if TYPE_CHECKING:
    from jsonschema.protocols import Validator

DRAFT_VALIDATORS: dict[str, type[Validator]] = {
    "draft4": Draft4Validator,
    "draft6": Draft6Validator,
    "draft7": Draft7Validator,
    "draft2019-09": Draft201909Validator,
    "draft2020-12": Draft202012Validator,
}

DEFAULT_VALIDATOR: type[Validator] = Draft202012Validator


def serialize_schema(schema: Any) -> str:
    """Render a schema tree as text.

    Strings are already text and are returned as-is, bytes are decoded as
    UTF-8, every other node is dumped as JSON.

    Raises:
        TypeError: If the tree holds values JSON cannot represent.
        ValueError: If the tree is circular or bytes are not valid UTF-8.
    """
    if isinstance(schema, str):
        return schema
    if isinstance(schema, (bytes, bytearray)):
        return bytes(schema).decode("utf-8")
    return json.dumps(schema)


def _reject_constant(name: str) -> Any:
    msg = f"Non-standard JSON literal {name!r}"
    raise ValueError(msg)


def parse_json_payload(text: str) -> Outcome[Any]:
    """Parse strict JSON text.

    ``NaN`` and ``Infinity`` are refused, like any strict JSON parser would.
    Nesting deeper than the interpreter can recurse is refused too.

    Integer literals longer than the interpreter's integer string conversion
    limit (4300 digits by default, see :func:`sys.set_int_max_str_digits`) are
    refused on Python versions that enforce it, so such bodies are invalid.
    """
    try:
        return Outcome.success(json.loads(text, parse_constant=_reject_constant))
    except ValueError as e:
        return Outcome.failure(f"Response body is not valid JSON: {e}")
    except RecursionError:
        return Outcome.failure("Response body is not valid JSON: nested too deeply")


def compile_json_schema(schema: Any, config: ValidatorConfig | None = None) -> Outcome[Validator]:
    """Compile a schema tree into a JSON Schema validator.

    Args:
        schema: JSON-like schema tree.
        config: Validation settings. Defaults to :class:`ValidatorConfig`.

    Returns:
        Outcome holding a ready-to-use validator, or the reason the schema
        could not be compiled.
    """
    config = config or ValidatorConfig()

    try:
        document = json.loads(json.dumps(schema))
    except (TypeError, ValueError) as e:
        return Outcome.failure(f"Schema is not JSON-serializable: {e}")
    except RecursionError:
        return Outcome.failure("Schema is not JSON-serializable: nested too deeply")

    if not isinstance(document, (dict, bool)):
        return Outcome.failure(f"JSON Schema must be an object or a boolean, got {type(document).__name__}")

    if isinstance(document, dict) and not isinstance(document.get("$schema", ""), str):
        return Outcome.failure("JSON Schema '$schema' must be a string")

    validator_class = DRAFT_VALIDATORS.get(config.json_schema_draft) or validator_for(
        document, default=DEFAULT_VALIDATOR
    )

    try:
        validator_class.check_schema(document)
    except SchemaError as e:
        return Outcome.failure(f"Invalid JSON Schema: {e.message}")
    except RecursionError:
        return Outcome.failure("Invalid JSON Schema: nested too deeply")

    format_checker = validator_class.FORMAT_CHECKER if config.check_formats else None
    # An empty registry keeps $ref resolution local: remote references are never retrieved
    return Outcome.success(validator_class(document, format_checker=format_checker, registry=Registry()))


def _safe_parser() -> etree.XMLParser:
    # Markup is always UTF-8 here, whatever its XML declaration says
    return etree.XMLParser(encoding="utf-8", resolve_entities=False, no_network=True)


def compile_xml_schema(schema: Any) -> Outcome[etree.XMLSchema]:
    """Compile a schema tree into an XML Schema.

    The tree is serialized to text and the text parsed as XSD markup. Only
    schemas for the unqualified namespace are accepted, so an XSD declaring a
    ``targetNamespace`` is refused.

    Args:
        schema: JSON-like schema tree, typically a string holding XSD markup.

    Returns:
        Outcome holding the compiled schema, or the reason it failed.
    """
    try:
        markup = serialize_schema(schema).encode("utf-8")
    except (TypeError, ValueError) as e:
        return Outcome.failure(f"Schema cannot be serialized: {e}")
    except RecursionError:
        return Outcome.failure("Schema cannot be serialized: nested too deeply")

    try:
        root = etree.fromstring(markup, _safe_parser())
    except etree.XMLSyntaxError as e:
        return Outcome.failure(f"Schema is not well-formed XML: {e}")

    if root.get("targetNamespace"):
        return Outcome.failure(f"XML Schema targets namespace {root.get('targetNamespace')!r}, expected none")

    try:
        return Outcome.success(etree.XMLSchema(root))
    except etree.XMLSchemaParseError as e:
        return Outcome.failure(f"Invalid XML Schema: {e}")
