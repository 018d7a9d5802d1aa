"""Pytest plugin exposing response validation to test suites."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from response_conformance.config import (
    JSON_SCHEMA_DRAFTS,
    ValidatorConfig,
    load_config_from_pyproject,
    merge_configs,
)
from response_conformance.validation.response import ResponseValidator

if TYPE_CHECKING:
    from collections.abc import Callable

    from response_conformance.record import ResponseRecord

logger = logging.getLogger(__name__)

# Effective configuration, stored on the pytest config during pytest_configure
conformance_config_key = pytest.StashKey[ValidatorConfig]()


def pytest_addoption(parser: pytest.Parser) -> None:
    """Add pytest command line options."""
    group = parser.getgroup("conformance")
    group.addoption(
        "--conformance-draft",
        action="store",
        default="auto",
        choices=JSON_SCHEMA_DRAFTS,
        help="JSON Schema draft for JSON and text responses (default: auto, from $schema)",
    )
    group.addoption(
        "--conformance-check-formats",
        action="store_true",
        dest="conformance_check_formats",
        default=None,
        help="Assert the JSON Schema 'format' keyword instead of treating it as an annotation",
    )
    group.addoption(
        "--no-conformance-check-formats",
        action="store_false",
        dest="conformance_check_formats",
        help="Treat the JSON Schema 'format' keyword as an annotation, overriding pyproject.toml",
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register plugin markers and build the effective configuration."""
    config.addinivalue_line("markers", "conformance: mark test as a response conformance check")

    try:
        file_config = load_config_from_pyproject(Path(config.rootpath) / "pyproject.toml")
    except (ImportError, ValueError) as e:
        logger.warning("response-conformance: could not load pyproject.toml config: %s", e)
        file_config = ValidatorConfig()

    # None when neither --conformance-check-formats nor its negation was given
    check_formats = config.getoption("conformance_check_formats", default=None)
    cli_config = ValidatorConfig(
        json_schema_draft=config.getoption("--conformance-draft", default="auto"),
        check_formats=bool(check_formats),
    )

    merged = merge_configs(cli_config, file_config)
    if check_formats is not None:
        merged = replace(merged, check_formats=check_formats)

    config.stash[conformance_config_key] = merged


@pytest.fixture
def conformance_config(pytestconfig: pytest.Config) -> ValidatorConfig:
    """Effective validation configuration (pyproject.toml merged with CLI options)."""
    return pytestconfig.stash.get(conformance_config_key, ValidatorConfig())


@pytest.fixture
def response_validator(conformance_config: ValidatorConfig) -> ResponseValidator:
    """Response validator built from the effective configuration."""
    return ResponseValidator(conformance_config)


@pytest.fixture
def assert_conforms(response_validator: ResponseValidator) -> Callable[[ResponseRecord], None]:
    """Assertion helper failing the test when a response does not conform.

    Example:
        >>> def test_user(client, assert_conforms):
        ...     response = client.get("/users/1")
        ...     assert_conforms(ResponseRecord.from_response(response, USER_SCHEMA))
    """

    def _assert_conforms(response: ResponseRecord) -> None:
        result = response_validator.validate(response)
        if not result.valid:
            details = "\n".join(f"  - {error}" for error in result.errors)
            msg = f"{response!r} does not conform to its expected schema:\n{details}"
            raise AssertionError(msg)

    return _assert_conforms
