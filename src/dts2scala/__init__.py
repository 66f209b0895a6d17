"""TypeScript declaration files to Scala.js facades — public API."""

from __future__ import annotations

from .ast import DeclarationFile
from .emit import emit
from .errors import ConvertError as ConvertError, ParseError as ParseError
from .parse import parse as parse


def convert(source: str, package_name: str) -> str:
    """Convert `.d.ts` source text into a Scala.js facade in package_name."""
    if package_name == "":
        raise ConvertError("package name must not be empty")
    tree = parse(source)
    return emit(tree, package_name)


def convert_tree(tree: DeclarationFile, package_name: str) -> str:
    """Convert an already parsed declaration tree."""
    if package_name == "":
        raise ConvertError("package name must not be empty")
    return emit(tree, package_name)
