"""Lexical rules of the Dioxus ``rsx!`` dialect.

Names coming from SVG are turned into Rust identifiers and text is turned
into Rust string literals. RSX string literals double as format strings, so
braces are doubled in addition to the usual backslash escapes.
"""

from __future__ import annotations

import re

WORD_SEPARATOR = "_"

RUST_KEYWORDS = frozenset(
    {
        "as", "async", "await", "break", "const", "continue", "crate", "dyn",
        "else", "enum", "extern", "false", "fn", "for", "gen", "if", "impl",
        "in", "let", "loop", "match", "mod", "move", "mut", "pub", "ref",
        "return", "self", "Self", "static", "struct", "super", "trait", "true",
        "try", "type", "unsafe", "use", "where", "while", "abstract", "become",
        "box", "do", "final", "macro", "override", "priv", "typeof", "unsized",
        "virtual", "yield",
    }
)
# Keywords that cannot be written as raw identifiers
NON_RAW_KEYWORDS = frozenset({"crate", "self", "Self", "super"})

_IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")
_NON_IDENTIFIER_CHAR_RE = re.compile(r"[^A-Za-z0-9_]")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f-\x9f\ud800-\udfff]")
_UNICODE_ESCAPE_RE = re.compile(r"\\u\{([0-9A-Fa-f]{1,6})\}")
_BYTE_ESCAPE_RE = re.compile(r"\\x([0-7][0-9A-Fa-f])")

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
    "{": "{{",
    "}": "}}",
}
_ESCAPE_TABLE = str.maketrans(_ESCAPES)
_SIMPLE_UNESCAPES = {
    "\\": "\\",
    '"': '"',
    "'": "'",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "0": "\0",
}


def map_name(name: str) -> str:
    """Replace every hyphen with the word separator; case is preserved.

    >>> map_name("stroke-width")
    'stroke_width'
    """
    return name.replace("-", WORD_SEPARATOR)


def is_identifier(name: str) -> bool:
    return name != "_" and _IDENTIFIER_RE.match(name) is not None


def attribute_key(name: str) -> str:
    """Return the RSX key for an SVG attribute name.

    Keywords become raw identifiers. Names that are still not identifiers
    after mapping, such as ``xlink:href``, become quoted custom attribute
    keys.
    """
    mapped = map_name(name)
    if not is_identifier(mapped) or mapped in NON_RAW_KEYWORDS:
        return quote(mapped)
    if mapped in RUST_KEYWORDS:
        return f"r#{mapped}"
    return mapped


def tag_identifier(tag: str) -> str:
    """Return the RSX element identifier for an SVG tag name."""
    mapped = _NON_IDENTIFIER_CHAR_RE.sub(WORD_SEPARATOR, map_name(tag))
    if not mapped or mapped[0].isdigit() or mapped == "_":
        mapped = f"_{mapped}"
    if mapped in NON_RAW_KEYWORDS:
        return f"{mapped}_"
    if mapped in RUST_KEYWORDS:
        return f"r#{mapped}"
    return mapped


def _escape_control(match: re.Match[str]) -> str:
    return f"\\u{{{ord(match.group()):x}}}"


def quote(text: str) -> str:
    """Render ``text`` as a double-quoted RSX string literal."""
    return '"' + _CONTROL_RE.sub(_escape_control, text.translate(_ESCAPE_TABLE)) + '"'


def unquote(literal: str) -> str:
    """Parse an RSX string literal produced by :func:`quote` back to text.

    Raises:
        ValueError: If ``literal`` is not a complete, valid string literal.
    """
    if len(literal) < 2 or literal[0] != '"' or literal[-1] != '"':
        raise ValueError(f"Not a string literal: {literal!r}")

    body = literal[1:-1]
    out: list[str] = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == "\\":
            escape = body[i + 1 : i + 2]
            if escape in _SIMPLE_UNESCAPES:
                out.append(_SIMPLE_UNESCAPES[escape])
                i += 2
                continue
            match = _UNICODE_ESCAPE_RE.match(body, i) or _BYTE_ESCAPE_RE.match(body, i)
            if match is None:
                raise ValueError(f"Invalid escape at offset {i + 1}: {body[i:i + 2]!r}")
            out.append(chr(int(match.group(1), 16)))
            i = match.end()
        elif ch in "{}":
            if body[i + 1 : i + 2] != ch:
                raise ValueError(f"Unescaped {ch!r} at offset {i + 1}")
            out.append(ch)
            i += 2
        elif ch == '"':
            raise ValueError(f"Unescaped quote at offset {i + 1}")
        else:
            out.append(ch)
            i += 1
    return "".join(out)
