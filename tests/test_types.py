"""Type mapping tests on hand-built type nodes."""

import pytest

from dts2scala.ast import (
    ArrayType,
    FunctionType,
    IntersectionType,
    KeyOfType,
    KeywordType,
    LiteralType,
    ObjectType,
    Param,
    ParenType,
    TypeParam,
    TypeRef,
    UnionType,
    UnsupportedType,
)
from dts2scala.types import map_return, map_type, render_type_params, unique


def s(text: str) -> LiteralType:
    return LiteralType("string", '"' + text + '"')


def n(text: str) -> LiteralType:
    return LiteralType("number", text)


@pytest.mark.parametrize(
    "name,expected",
    [
        ("string", "String"),
        ("number", "Double"),
        ("boolean", "Boolean"),
        ("void", "Unit"),
        ("any", "js.Any"),
        ("unknown", "js.Any"),
        ("object", "js.Object"),
        ("never", "Nothing"),
        ("symbol", "js.Symbol"),
        ("mystery", "js.Any"),
    ],
)
def test_keywords(name: str, expected: str):
    assert map_type(KeywordType(name)) == expected


def test_missing_type_is_any():
    assert map_type(None) == "js.Any"


def test_map_return_default():
    assert map_return(None, "Unit") == "Unit"
    assert map_return(KeywordType("string"), "Unit") == "String"


def test_references():
    assert map_type(TypeRef("Foo")) == "Foo"
    assert map_type(TypeRef("Map", [KeywordType("string"), TypeRef("Foo")])) == "Map[String, Foo]"
    assert map_type(TypeRef("Float32Array")) == "js.typedarray.Float32Array"
    assert map_type(TypeRef("PromiseLike", [KeywordType("number")])) == "js.Thenable[Double]"


def test_arrays():
    assert map_type(ArrayType(KeywordType("string"))) == "js.Array[String]"
    assert map_type(ArrayType(ArrayType(KeywordType("number")))) == "js.Array[js.Array[Double]]"
    assert map_type(TypeRef("Array", [TypeRef("Foo")])) == "js.Array[Foo]"
    assert map_type(TypeRef("ReadonlyArray", [TypeRef("Foo")])) == "js.Array[_ <: Foo]"


def test_string_literal_union_collapses():
    assert map_type(UnionType([s("a"), s("b"), s("c")])) == "String"


def test_numeric_literal_unions():
    assert map_type(UnionType([n("1"), n("2")])) == "Int"
    assert map_type(UnionType([n("0.5"), n("1.5")])) == "Double"
    assert map_type(UnionType([n("1"), n("1.5")])) == "Int | Double"


def test_nullable_union():
    typ = UnionType([TypeRef("Foo"), LiteralType("null", "null"), LiteralType("undefined", "undefined")])
    assert map_type(typ) == "Foo | Null | Unit"


def test_mixed_string_literal_union():
    typ = UnionType([s("auto"), KeywordType("number"), s("none"), KeywordType("string")])
    assert map_type(typ) == "String | Double | String"


def test_mixed_string_literal_union_keeps_repeats():
    typ = UnionType([s("a"), KeywordType("string"), KeywordType("number"), KeywordType("number")])
    assert map_type(typ) == "String | String | Double | Double"


def test_union_deduplicates():
    typ = UnionType([KeywordType("string"), KeywordType("number"), KeywordType("string")])
    assert map_type(typ) == "String | Double"


def test_intersection():
    typ = IntersectionType([TypeRef("A"), TypeRef("B"), TypeRef("A")])
    assert map_type(typ) == "A with B"


def test_functions():
    number = KeywordType("number")
    assert map_type(FunctionType([], None)) == "js.Function0[Unit]"
    assert map_type(FunctionType([Param("x", number)], KeywordType("string"))) == "js.Function1[Double, String]"
    two = FunctionType([Param("a", number), Param("b", None)], KeywordType("boolean"))
    assert map_type(two) == "js.Function2[Double, js.Any, Boolean]"
    three = FunctionType([Param("a", number), Param("b", number), Param("c", number)], None)
    assert map_type(three) == "js.Function"


def test_parenthesized_and_keyof():
    assert map_type(ParenType(KeywordType("string"))) == "String"
    assert map_type(KeyOfType(TypeRef("Foo"))) == "String"


def test_unsupported_degrade_to_any():
    assert map_type(ObjectType([])) == "js.Any"
    assert map_type(UnsupportedType("tuple_type")) == "js.Any"
    assert map_type(UnsupportedType("conditional_type")) == "js.Any"


def test_mapping_is_stable():
    typ = UnionType([TypeRef("Foo", [ArrayType(s("x"))]), LiteralType("null", "null")])
    assert map_type(typ) == map_type(typ)


def test_render_type_params():
    assert render_type_params([]) == ""
    params = [TypeParam("T"), TypeParam("U", TypeRef("Base", [TypeRef("T")]))]
    assert render_type_params(params) == "[T, U <: Base[T]]"


def test_unique_keeps_first_order():
    assert unique(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]
