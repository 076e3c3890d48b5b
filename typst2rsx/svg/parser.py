"""SVG parsing into the typst2rsx node tree.

Tokenizing is delegated to the expat SAX reader from defusedxml, which
refuses entity declarations. A DOCTYPE naming an external DTD is accepted
but the DTD itself is never read. The tree itself is
assembled by :class:`SVGTreeBuilder`, a SAX content handler that keeps an
explicit stack of open elements, so memory beyond the tree is proportional to
nesting depth only.

Expat reports failures as generic ``SAXParseException`` objects; they are
translated here into the specific :class:`~typst2rsx.exceptions.SVGParseError`
subclasses.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from xml.parsers.expat import errors as expat_errors
from xml.sax import SAXParseException
from xml.sax.expatreader import ExpatLocator
from xml.sax.handler import ContentHandler

import defusedxml.sax
from defusedxml import DefusedXmlException

from typst2rsx.exceptions import (
    DuplicateAttributeError,
    InvalidEntityError,
    MalformedXmlError,
    MismatchedTagError,
    MultipleRootElementsError,
    NoRootElementError,
    SourceReadError,
    SVGParseError,
    UnclosedElementError,
)
from typst2rsx.svg.nodes import Element, Text

logger = logging.getLogger(__name__)

_CODE = expat_errors.codes
_TAG_MISMATCH = _CODE[expat_errors.XML_ERROR_TAG_MISMATCH]
_NO_ELEMENTS = _CODE[expat_errors.XML_ERROR_NO_ELEMENTS]
_JUNK_AFTER_ROOT = _CODE[expat_errors.XML_ERROR_JUNK_AFTER_DOC_ELEMENT]
_DUPLICATE_ATTRIBUTE = _CODE[expat_errors.XML_ERROR_DUPLICATE_ATTRIBUTE]
_ENTITY_ERRORS = frozenset(
    {
        _CODE[expat_errors.XML_ERROR_UNDEFINED_ENTITY],
        _CODE[expat_errors.XML_ERROR_BAD_CHAR_REF],
        _CODE[expat_errors.XML_ERROR_RECURSIVE_ENTITY_REF],
    }
)
_TOKEN_ERRORS = frozenset(
    {
        _CODE[expat_errors.XML_ERROR_INVALID_TOKEN],
        _CODE[expat_errors.XML_ERROR_SYNTAX],
    }
)

_END_TAG_RE = re.compile(r"</\s*([^\s>]+)")
_START_TAG_RE = re.compile(r"<([^\s/>!?]+)")
_ENTITY_RE = re.compile(r"&#?[\w.:-]*;?")
_ATTRIBUTE_RE = re.compile(r"([^\s=<>/]+)\s*=")
_NEWLINE_RE = re.compile(r"\r\n|\r|\n")


class SVGTreeBuilder(ContentHandler):
    """SAX content handler that builds an :class:`Element` tree.

    The handler is single use: feed one document through a parser, then read
    :attr:`root`.
    """

    def __init__(self) -> None:
        super().__init__()
        self.root: Element | None = None
        self._stack: list[Element] = []
        self._text: list[str] = []
        self._locator = None

    @property
    def open_tags(self) -> list[str]:
        return [element.tag for element in self._stack]

    def setDocumentLocator(self, locator) -> None:  # noqa: N802 - SAX API
        self._locator = locator

    def startElement(self, name, attrs) -> None:  # noqa: N802 - SAX API
        self._flush_text()
        element = Element(tag=name, attributes=dict(attrs.items()))
        if self._stack:
            self._stack[-1].children.append(element)
        elif self.root is None:
            self.root = element
        else:
            line, column = self._position()
            raise MultipleRootElementsError(name, line, column)
        self._stack.append(element)

    def endElement(self, name) -> None:  # noqa: N802 - SAX API
        self._flush_text()
        if not self._stack or self._stack[-1].tag != name:
            line, column = self._position()
            expected = self._stack[-1].tag if self._stack else ""
            raise MismatchedTagError(expected, name, line, column)
        self._stack.pop()

    def characters(self, content) -> None:
        if self._stack:
            self._text.append(content)

    def _flush_text(self) -> None:
        if self._text:
            self._stack[-1].children.append(Text("".join(self._text)))
            self._text = []

    def _position(self) -> tuple[int | None, int | None]:
        if self._locator is None:
            return None, None
        column = self._locator.getColumnNumber()
        return self._locator.getLineNumber(), None if column is None else column + 1


def parse_svg_string(data: str | bytes) -> Element:
    """Parse SVG markup into a node tree.

    Args:
        data: Document text, or raw bytes whose encoding is taken from the
            XML declaration (UTF-8 when absent).

    Returns:
        The document's root element.

    Raises:
        SVGParseError: One of its subclasses, describing the first problem
            found. Parsing never continues past an error.
    """
    builder = SVGTreeBuilder()
    parser = defusedxml.sax.make_parser()
    # external DTD subsets are skipped, never loaded
    parser.forbid_external = False
    parser.setContentHandler(builder)
    builder.setDocumentLocator(ExpatLocator(parser))

    try:
        parser.feed(data)
        parser.close()
    except SAXParseException as e:
        raise _translate_error(e, data, builder) from e
    except DefusedXmlException as e:
        raise MalformedXmlError(f"Forbidden XML construct: {e}") from e

    if builder.open_tags:
        raise UnclosedElementError(builder.open_tags[-1])
    if builder.root is None:
        raise NoRootElementError()

    logger.debug(
        "Parsed <%s> with %d direct children", builder.root.tag, len(builder.root.children)
    )
    return builder.root


def parse_svg(path: str | Path) -> Element:
    """Read and parse an SVG file.

    Raises:
        SourceReadError: If the file cannot be read.
        SVGParseError: If the content is not a well-formed document.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise SourceReadError(str(path), e.strerror or str(e)) from e
    logger.debug("Read %d bytes from %s", len(data), path)
    return parse_svg_string(data)


def _translate_error(
    exc: SAXParseException, data: str | bytes, builder: SVGTreeBuilder
) -> SVGParseError:
    """Map an expat failure onto the typst2rsx error taxonomy."""
    cause = exc.getException()
    code = getattr(cause, "code", None)
    line = exc.getLineNumber()
    column = exc.getColumnNumber()
    reported_column = None if column is None else column + 1
    text = _source_line(data, line)
    pos = min(column or 0, len(text))

    if code == _TAG_MISMATCH:
        # expat points at either the "</" or the name right after it
        start = text.rfind("</", 0, pos + 2)
        match = _END_TAG_RE.match(text, start) if start >= 0 else _END_TAG_RE.search(text, pos)
        expected = builder.open_tags[-1] if builder.open_tags else ""
        return MismatchedTagError(
            expected, match.group(1) if match else None, line, reported_column
        )

    if code == _NO_ELEMENTS:
        if builder.open_tags:
            return UnclosedElementError(builder.open_tags[-1], line, reported_column)
        if builder.root is None:
            return NoRootElementError(line, reported_column)

    if code == _JUNK_AFTER_ROOT:
        match = _START_TAG_RE.match(text[pos:].lstrip())
        if match:
            return MultipleRootElementsError(match.group(1), line, reported_column)

    if code == _DUPLICATE_ATTRIBUTE:
        match = _ATTRIBUTE_RE.match(text, pos)
        name = f" {match.group(1)!r}" if match else ""
        return DuplicateAttributeError(f"Duplicate attribute{name}", line, reported_column)

    if code in _ENTITY_ERRORS:
        match = _ENTITY_RE.search(text, pos)
        amp = text.rfind("&", 0, pos + 1)
        if match is None and amp >= 0:
            match = _ENTITY_RE.match(text, amp)
        return InvalidEntityError(match.group(0) if match else None, line, reported_column)

    if code in _TOKEN_ERRORS:
        amp = text.rfind("&", 0, pos + 1)
        match = _ENTITY_RE.match(text, amp) if amp >= 0 else None
        if match is not None and match.end() >= pos:
            return InvalidEntityError(match.group(0), line, reported_column)

    return MalformedXmlError(
        f"Malformed XML: {exc.getMessage()}", line, reported_column
    )


def _source_line(data: str | bytes, line: int | None) -> str:
    """Return the text of ``line`` (1-based) for diagnostics, or ``""``."""
    if line is None:
        return ""
    text = data.decode("utf-8", errors="replace") if isinstance(data, bytes) else data
    lines = _NEWLINE_RE.split(text)
    if not 1 <= line <= len(lines):
        return ""
    return lines[line - 1]
