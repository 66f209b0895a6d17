"""TypeScript type nodes to Scala.js type expressions.

`map_type` is total: anything without a mapping degrades to `js.Any` so the
facade always compiles. It is pure; the same node always yields the same text,
which the union and intersection rules rely on for de-duplication.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .ast import (
    ArrayType,
    FunctionType,
    IntersectionType,
    KeyOfType,
    KeywordType,
    LiteralType,
    ObjectType,
    Param,
    ParenType,
    TypeNode,
    TypeParam,
    TypeRef,
    UnionType,
    UnsupportedType,
)

logger = logging.getLogger(__name__)

ANY: str = "js.Any"

KEYWORD_TYPES: dict[str, str] = {
    "string": "String",
    "number": "Double",
    "boolean": "Boolean",
    "void": "Unit",
    "undefined": "Unit",
    "null": "Null",
    "never": "Nothing",
    "any": "js.Any",
    "unknown": "js.Any",
    "object": "js.Object",
    "this": "this.type",
    "symbol": "js.Symbol",
    "bigint": "js.BigInt",
}

# Library types with a native Scala.js counterpart
BUILTIN_TYPES: dict[str, str] = {
    "null": "Null",
    "undefined": "Unit",
    "Float32Array": "js.typedarray.Float32Array",
    "Float64Array": "js.typedarray.Float64Array",
    "Uint8Array": "js.typedarray.Uint8Array",
    "Uint16Array": "js.typedarray.Uint16Array",
    "Uint32Array": "js.typedarray.Uint32Array",
    "Int8Array": "js.typedarray.Int8Array",
    "Int16Array": "js.typedarray.Int16Array",
    "Int32Array": "js.typedarray.Int32Array",
    "Uint8ClampedArray": "js.typedarray.Uint8ClampedArray",
    "ArrayBuffer": "js.typedarray.ArrayBuffer",
    "ArrayBufferView": "js.typedarray.ArrayBufferView",
    "DataView": "js.typedarray.DataView",
    "ReadonlyArray": "js.Array",
    "PromiseLike": "js.Thenable",
    "Promise": "js.Promise",
    "Function": "js.Function",
    "Date": "js.Date",
    "RegExp": "js.RegExp",
    "Error": "js.Error",
}


def map_type(node: TypeNode | None) -> str:
    """Map one type node to a Scala.js type expression. Missing types are js.Any."""
    match node:
        case None:
            return ANY
        case KeywordType(name=name):
            return KEYWORD_TYPES.get(name, ANY)
        case LiteralType(kind=kind, text=text):
            return _literal(kind, text)
        case TypeRef(name=name, args=args):
            return _reference(name, args)
        case ArrayType(element=element):
            return "js.Array[" + map_type(element) + "]"
        case UnionType(members=members):
            return _union(members)
        case IntersectionType(members=members):
            return " with ".join(unique(map_type(m) for m in members))
        case FunctionType(params=params, ret=ret):
            return _function(params, ret)
        case ParenType(inner=inner):
            return map_type(inner)
        case KeyOfType():
            # literal key names are not enumerated
            return "String"
        case ObjectType():
            return ANY
        case UnsupportedType(kind=kind):
            logger.debug("no mapping for %s, using js.Any", kind)
            return ANY
        case _:
            return ANY


def map_return(node: TypeNode | None, default: str) -> str:
    """Map a return annotation, using default when it is absent."""
    if node is None:
        return default
    return map_type(node)


def unique(items: Iterable[str]) -> list[str]:
    """Drop repeats, keeping first-seen order."""
    seen: set[str] = set()
    result: list[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


def render_type_params(params: list[TypeParam]) -> str:
    """[T, U <: Bound] or the empty string."""
    if len(params) == 0:
        return ""
    parts: list[str] = []
    for tp in params:
        if tp.constraint is not None:
            parts.append(tp.name + " <: " + map_type(tp.constraint))
        else:
            parts.append(tp.name)
    return "[" + ", ".join(parts) + "]"


def _literal(kind: str, text: str) -> str:
    if kind == "string":
        return "String"
    if kind == "number":
        return "Double" if "." in text else "Int"
    if kind == "boolean":
        return "Boolean"
    if kind == "null":
        return "Null"
    if kind == "undefined":
        return "Unit"
    return ANY


def _reference(name: str, args: list[TypeNode]) -> str:
    mapped_args = [map_type(a) for a in args]
    if name == "Array" and len(mapped_args) > 0:
        return "js.Array[" + ", ".join(mapped_args) + "]"
    if name == "ReadonlyArray" and len(mapped_args) > 0:
        return "js.Array[_ <: " + ", ".join(mapped_args) + "]"
    target = BUILTIN_TYPES.get(name, name)
    if len(mapped_args) > 0:
        return target + "[" + ", ".join(mapped_args) + "]"
    return target


def _is_string_literal(node: TypeNode) -> bool:
    return isinstance(node, LiteralType) and node.kind == "string"


def _is_number_literal(node: TypeNode) -> bool:
    return isinstance(node, LiteralType) and node.kind == "number"


def _union(members: list[TypeNode]) -> str:
    if all(_is_string_literal(m) for m in members):
        return "String"
    if all(_is_number_literal(m) for m in members):
        fractional = ["." in m.text for m in members if isinstance(m, LiteralType)]
        if not any(fractional):
            return "Int"
        if all(fractional):
            return "Double"
    types = unique(map_type(m) for m in members)
    if "Null" in types and "Unit" in types and len(types) == 3:
        other = [t for t in types if t != "Null" and t != "Unit"]
        return other[0] + " | Null | Unit"
    if any(_is_string_literal(m) for m in members):
        # the remainder is kept as written, repeats included
        return " | ".join(["String"] + [map_type(m) for m in members if not _is_string_literal(m)])
    return " | ".join(types)


def _function(params: list[Param], ret: TypeNode | None) -> str:
    args = [map_type(p.typ) for p in params]
    result = map_return(ret, "Unit")
    if len(args) == 0:
        return "js.Function0[" + result + "]"
    if len(args) == 1:
        return "js.Function1[" + args[0] + ", " + result + "]"
    if len(args) == 2:
        return "js.Function2[" + args[0] + ", " + args[1] + ", " + result + "]"
    return "js.Function"
