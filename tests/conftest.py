"""Shared test fixtures."""

from __future__ import annotations

from typing import Any

import pytest

pytest_plugins = ["pytester"]

ROOT_XSD = """<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema">
  <xs:element name="root">
    <xs:complexType>
      <xs:sequence>
        <xs:element name="x" type="xs:int"/>
      </xs:sequence>
    </xs:complexType>
  </xs:element>
</xs:schema>
"""


@pytest.fixture
def object_schema() -> dict[str, Any]:
    """JSON Schema requiring a numeric ``x`` property."""
    return {
        "type": "object",
        "required": ["x"],
        "properties": {"x": {"type": "number"}},
    }


@pytest.fixture
def string_schema() -> dict[str, Any]:
    """JSON Schema for a non-empty string."""
    return {"type": "string", "minLength": 1}


@pytest.fixture
def root_xsd() -> str:
    """XML Schema for ``<root><x>int</x></root>``."""
    return ROOT_XSD


@pytest.fixture
def deep_schema() -> dict[str, Any]:
    """JSON Schema nested far deeper than the interpreter recursion limit."""
    schema: dict[str, Any] = {"type": "integer"}
    for _ in range(5000):
        schema = {"type": "array", "items": schema}
    return schema
