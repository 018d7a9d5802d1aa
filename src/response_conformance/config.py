"""Configuration for response-conformance."""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Literal

# Python 3.11+ has tomllib, earlier versions need tomli
if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib  # type: ignore[import-untyped]
    except ImportError:
        tomllib = None  # type: ignore[assignment]

PYPROJECT_SECTION = "response-conformance"

JsonSchemaDraft = Literal["auto", "draft4", "draft6", "draft7", "draft2019-09", "draft2020-12"]
JSON_SCHEMA_DRAFTS: tuple[str, ...] = ("auto", "draft4", "draft6", "draft7", "draft2019-09", "draft2020-12")


@dataclass
class ValidatorConfig:
    """Configuration for response validation.

    Attributes:
        json_schema_draft: JSON Schema draft used for JSON and text payloads.
            ``"auto"`` honors the schema's ``$schema`` keyword and falls back
            to Draft 2020-12.
        check_formats: Assert the ``format`` keyword instead of treating it as
            an annotation.
        collect_all_errors: Report every schema error instead of stopping at
            the first one. Only affects the error list, never the verdict.
    """

    json_schema_draft: JsonSchemaDraft = "auto"
    check_formats: bool = False
    collect_all_errors: bool = True

    def __post_init__(self) -> None:
        if self.json_schema_draft not in JSON_SCHEMA_DRAFTS:
            msg = f"Unknown JSON Schema draft {self.json_schema_draft!r}. Expected one of: {', '.join(JSON_SCHEMA_DRAFTS)}"
            raise ValueError(msg)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ValidatorConfig:
        """Create config from dictionary (e.g., from pyproject.toml).

        Args:
            data: Dictionary containing configuration values. Keys use the
                pyproject spelling (``draft``, ``check_formats``,
                ``collect_all_errors``).

        Returns:
            ValidatorConfig instance with values from dictionary.

        Raises:
            ValueError: If the draft name is not supported.

        Examples:
            >>> config = ValidatorConfig.from_dict({"draft": "draft7", "check_formats": True})
            >>> config.json_schema_draft
            'draft7'
        """
        defaults = cls()

        return cls(
            json_schema_draft=data.get("draft", defaults.json_schema_draft),
            check_formats=data.get("check_formats", defaults.check_formats),
            collect_all_errors=data.get("collect_all_errors", defaults.collect_all_errors),
        )


def load_config_from_pyproject(path: Path | None = None) -> ValidatorConfig:
    """Load configuration from pyproject.toml [tool.response-conformance] section.

    Args:
        path: Path to pyproject.toml file. If None, looks in current working directory.

    Returns:
        ValidatorConfig instance loaded from file, or defaults if file not found.

    Raises:
        ImportError: If tomllib/tomli is not available (Python < 3.11 and tomli not installed).
        ValueError: If pyproject.toml cannot be parsed or contains invalid configuration.

    Example config in pyproject.toml::

        [tool.response-conformance]
        draft = "draft7"
        check_formats = true
    """
    if tomllib is None:
        msg = "tomllib is not available. For Python < 3.11, install tomli: pip install tomli"
        raise ImportError(msg)

    if path is None:
        path = Path.cwd() / "pyproject.toml"

    if not path.exists():
        return ValidatorConfig()

    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        msg = f"Failed to parse pyproject.toml: {e}"
        raise ValueError(msg) from e

    config_data = data.get("tool", {}).get(PYPROJECT_SECTION, {})

    if not config_data:
        return ValidatorConfig()

    return ValidatorConfig.from_dict(config_data)


def merge_configs(
    cli_config: ValidatorConfig | None = None,
    file_config: ValidatorConfig | None = None,
) -> ValidatorConfig:
    """Merge CLI and file configs, with CLI taking precedence.

    Priority order (highest to lowest):
    1. CLI options (if provided and not default)
    2. pyproject.toml values
    3. Built-in defaults

    Examples:
        >>> file_cfg = ValidatorConfig(json_schema_draft="draft7")
        >>> cli_cfg = ValidatorConfig(check_formats=True)
        >>> merged = merge_configs(cli_cfg, file_cfg)
        >>> merged.json_schema_draft, merged.check_formats
        ('draft7', True)
    """
    defaults = ValidatorConfig()

    if cli_config is None:
        return file_config or defaults

    if file_config is None:
        return cli_config

    merged = {}
    for config_field in fields(ValidatorConfig):
        name = config_field.name
        cli_value = getattr(cli_config, name)
        merged[name] = cli_value if cli_value != getattr(defaults, name) else getattr(file_config, name)

    return ValidatorConfig(**merged)
