"""Exceptions raised by the converter."""

from __future__ import annotations


class ConvertError(Exception):
    """Base for all conversion failures."""


class ParseError(ConvertError):
    """Declaration text could not be parsed. line and col are 1-indexed."""

    def __init__(self, msg: str, line: int, col: int):
        self.msg: str = msg
        self.line: int = line
        self.col: int = col
        super().__init__(f"{msg} at line {line}, column {col}")
