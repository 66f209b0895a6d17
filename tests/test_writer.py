"""Writer tests."""

import pytest

from dts2scala.writer import Writer


def test_block_indents_body():
    w = Writer()
    with w.block("object A"):
        w.line("val x: Int")
        with w.block("object B"):
            w.line("val y: Int")
    assert w.output() == "object A {\n  val x: Int\n  object B {\n    val y: Int\n  }\n}\n"


def test_flat_block_keeps_level():
    w = Writer()
    with w.block("package p", indent=False):
        w.line("class C")
    assert w.lines == ["package p {", "class C", "}"]


def test_blank_is_deduplicated():
    w = Writer()
    w.blank()
    w.blank()
    w.line("x")
    w.blank()
    w.blank()
    assert w.lines == ["", "x", ""]


def test_empty_line_is_not_indented():
    w = Writer()
    with w.block("object A"):
        w.line()
    assert w.lines == ["object A {", "", "}"]


def test_block_closes_on_error():
    w = Writer()
    with pytest.raises(ValueError):
        with w.block("object A"):
            raise ValueError("boom")
    assert w.lines[-1] == "}"
    assert w.indent == 0
