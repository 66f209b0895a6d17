"""Scala identifier rules: reserved words and backtick quoting."""

from __future__ import annotations

import re

SCALA_RESERVED = frozenset(
    {
        "abstract",
        "case",
        "catch",
        "class",
        "def",
        "do",
        "else",
        "extends",
        "false",
        "final",
        "finally",
        "for",
        "forSome",
        "if",
        "implicit",
        "import",
        "lazy",
        "macro",
        "match",
        "new",
        "null",
        "object",
        "override",
        "package",
        "private",
        "protected",
        "return",
        "sealed",
        "super",
        "then",
        "this",
        "throw",
        "trait",
        "try",
        "true",
        "type",
        "val",
        "var",
        "while",
        "with",
        "yield",
    }
)

_IDENT_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_PACKAGE_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


def is_plain_identifier(name: str) -> bool:
    """True when name can be written without backticks."""
    return name not in SCALA_RESERVED and _IDENT_RE.match(name) is not None


def sanitize(name: str) -> str:
    """Backtick-quote reserved words and names outside the identifier grammar."""
    if is_plain_identifier(name):
        return name
    return "`" + name + "`"


def sanitize_path(path: str) -> str:
    """Sanitize each segment of a dotted name."""
    return ".".join(sanitize(segment) for segment in path.split("."))


def package_clause(name: str) -> str:
    """Render the file's package clause; dotted or hyphenated names are quoted whole."""
    if "-" in name or _PACKAGE_RE.match(name) is None or name in SCALA_RESERVED:
        return "package `" + name + "`"
    return "package " + name


def capitalize(name: str) -> str:
    """Uppercase the first character, leaving the rest untouched."""
    return (name[0].upper() + name[1:]) if name else ""
