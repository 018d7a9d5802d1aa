"""Metadata for the response-conformance package."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

__all__ = ("__project__", "__version__")

__project__ = "response-conformance"

try:
    __version__ = version(__project__)
except PackageNotFoundError:
    __version__ = "0.0.0"
