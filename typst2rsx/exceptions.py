"""Exception hierarchy for typst2rsx.

Every exception raised by the library derives from :class:`Typst2RsxError`
and records the pipeline ``stage`` it belongs to, so callers can tell an
external compiler failure apart from a malformed document.
"""

from __future__ import annotations

from typing import Any


class Typst2RsxError(Exception):
    """Base class for all typst2rsx errors."""

    stage: str = "convert"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        extra = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({extra})"


class ConfigError(Typst2RsxError):
    """Configuration file is unreadable or has invalid values."""

    stage = "config"


class SourceReadError(Typst2RsxError):
    """Input document could not be read from disk."""

    stage = "read"

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


class OutputWriteError(Typst2RsxError):
    """Generated RSX could not be written to its destination."""

    stage = "write"

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot write {path}: {reason}")
        self.path = path
        self.reason = reason


class ExternalCompileError(Typst2RsxError):
    """The typst compiler was missing, timed out or exited non-zero."""

    stage = "compile"

    def __init__(
        self,
        message: str,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        details = {"returncode": returncode} if returncode is not None else None
        super().__init__(message, details=details)
        self.returncode = returncode
        self.stderr = stderr

    def __str__(self) -> str:
        text = super().__str__()
        if self.stderr.strip():
            text = f"{text}\n{self.stderr.strip()}"
        return text


class SVGParseError(Typst2RsxError):
    """Base class for failures while building the node tree."""

    stage = "parse"

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        super().__init__(message)
        self.line = line
        self.column = column

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"{self.message} at line {self.line}, column {self.column}"


class MalformedXmlError(SVGParseError):
    """The token stream is not well-formed XML."""


class MismatchedTagError(SVGParseError):
    """A closing tag does not match the innermost open element."""

    def __init__(
        self,
        expected: str,
        found: str | None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        shown = f"</{found}>" if found else "closing tag"
        super().__init__(f"Mismatched tag: expected </{expected}>, found {shown}", line, column)
        self.expected = expected
        self.found = found


class UnclosedElementError(SVGParseError):
    """Input ended while an element was still open."""

    def __init__(self, tag: str, line: int | None = None, column: int | None = None) -> None:
        super().__init__(f"Unclosed element <{tag}>", line, column)
        self.tag = tag


class NoRootElementError(SVGParseError):
    """The document contains no element at all."""

    def __init__(self, line: int | None = None, column: int | None = None) -> None:
        super().__init__("Document has no root element", line, column)


class MultipleRootElementsError(SVGParseError):
    """A second top-level element follows the root."""

    def __init__(
        self,
        tag: str | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        shown = f" <{tag}>" if tag else ""
        super().__init__(f"Multiple root elements: unexpected{shown} after root", line, column)
        self.tag = tag


class InvalidEntityError(SVGParseError):
    """Unknown entity or invalid character reference."""

    def __init__(
        self,
        entity: str | None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        shown = entity or "entity reference"
        super().__init__(f"Invalid entity {shown}", line, column)
        self.entity = entity


class DuplicateAttributeError(SVGParseError):
    """An attribute name appears twice on one element."""


class RenderError(Typst2RsxError):
    """Tree could not be rendered. Unreachable for trees built by the parser."""

    stage = "render"
