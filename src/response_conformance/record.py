"""Response record passed to the validators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ResponseRecord:
    """A response payload bound to the schema it is expected to satisfy.

    Records are immutable and built per call. The same record may be validated
    any number of times, from any thread, with the same verdict.

    Attributes:
        content: Raw payload. Bytes are treated as UTF-8, any other value is
            rendered with ``str()``. ``None`` stands for an empty body.
        content_type: Declared MIME type, possibly with parameters
            (e.g. ``"application/json; charset=utf-8"``).
        expected_schema: JSON-like schema tree (dicts, lists, scalars) or
            ``None`` when the operation declares no schema.

    Example:
        >>> record = ResponseRecord(
        ...     content='{"id": 1}',
        ...     content_type="application/json",
        ...     expected_schema={"type": "object"},
        ... )
        >>> record.media_type
        'application/json'
    """

    content: Any = None
    content_type: str | None = None
    expected_schema: Any = None

    def __repr__(self) -> str:
        schema = "schema" if self.expected_schema is not None else "no schema"
        return f"ResponseRecord({self.content_type or 'no content type'}, {schema})"

    @property
    def media_type(self) -> str | None:
        """Content type without parameters, lower-cased."""
        if not self.content_type:
            return None
        return self.content_type.split(";")[0].strip().lower()

    def content_text(self) -> str:
        """Render the payload as text.

        Returns:
            The payload as a string, ``""`` when there is no content.

        Raises:
            UnicodeDecodeError: If byte content is not valid UTF-8.
        """
        if self.content is None:
            return ""
        if isinstance(self.content, (bytes, bytearray)):
            return bytes(self.content).decode("utf-8")
        return str(self.content)

    def content_bytes(self) -> bytes:
        """Render the payload as bytes, leaving byte content untouched."""
        if isinstance(self.content, (bytes, bytearray)):
            return bytes(self.content)
        if self.content is None:
            return b""
        return str(self.content).encode("utf-8")

    @classmethod
    def from_response(cls, response: Any, expected_schema: Any = None) -> ResponseRecord:
        """Build a record from an HTTP response object.

        Works with any object exposing ``content`` and a ``headers`` mapping,
        such as ``httpx.Response``.

        Args:
            response: The HTTP response object.
            expected_schema: Schema the response body should satisfy.

        Returns:
            A record carrying the body and the ``content-type`` header.
        """
        headers = getattr(response, "headers", None) or {}
        return cls(
            content=getattr(response, "content", None),
            content_type=headers.get("content-type"),
            expected_schema=expected_schema,
        )
