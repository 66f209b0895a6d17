"""Identifier quoting tests."""

import pytest

from dts2scala.names import capitalize, is_plain_identifier, package_clause, sanitize, sanitize_path


@pytest.mark.parametrize("name", ["type", "val", "object", "match", "yield", "forSome", "this"])
def test_reserved_words_are_quoted(name: str):
    assert sanitize(name) == "`" + name + "`"


@pytest.mark.parametrize("name", ["foo", "_private", "$el", "Foo42", "Map"])
def test_plain_names_untouched(name: str):
    assert is_plain_identifier(name)
    assert sanitize(name) == name


@pytest.mark.parametrize("name", ["data-id", "1st", "has space", "a.b"])
def test_non_identifiers_are_quoted(name: str):
    assert sanitize(name) == "`" + name + "`"


def test_sanitize_path():
    assert sanitize_path("a.type.c") == "a.`type`.c"
    assert sanitize_path("plain") == "plain"


def test_package_clause():
    assert package_clause("mylib") == "package mylib"
    assert package_clause("my-lib") == "package `my-lib`"
    assert package_clause("lib.foo") == "package `lib.foo`"
    assert package_clause("type") == "package `type`"


def test_capitalize():
    assert capitalize("geo") == "Geo"
    assert capitalize("fooBar") == "FooBar"
    assert capitalize("") == ""
