"""Class, trait and object members to Scala.js facade lines."""

from __future__ import annotations

import re

from .ast import (
    CallMember,
    IndexMember,
    Member,
    MethodMember,
    Param,
    PropertyMember,
)
from .names import capitalize, is_plain_identifier, sanitize
from .types import ANY, map_return, map_type, render_type_params

# Scope kinds: where the rendered member will live
TRAIT: str = "trait"
CLASS: str = "class"
ABSTRACT_CLASS: str = "abstract_class"
OBJECT: str = "object"

NATIVE: str = " = js.native"

# Methods that collide with members every js.Object already has
OVERRIDDEN_METHODS: frozenset[str] = frozenset({"toString", "clone"})

_ARRAY_RE = re.compile(r"^js\.Array\[(.+)\]$")


def is_visible(member: Member) -> bool:
    """Only public members reach the facade."""
    return member.visibility == "public"


def render_member(member: Member, scope: str) -> list[str]:
    """Render one member; returns no lines for hidden or unsupported members."""
    if not is_visible(member):
        return []
    body = "" if scope == ABSTRACT_CLASS else NATIVE
    match member:
        case PropertyMember(name=name, typ=typ, readonly=readonly):
            return [_binding_keyword(readonly, scope) + " " + sanitize(name) + ": " + map_type(typ) + body]
        case MethodMember(accessor="get"):
            return ["def " + sanitize(member.name) + ": " + map_return(member.ret, ANY) + body]
        case MethodMember(accessor="set"):
            value = map_type(member.params[0].typ) if len(member.params) > 0 else ANY
            return ["def " + _setter_name(member.name) + "(v: " + value + "): Unit" + body]
        case MethodMember():
            default_ret = "js.Dynamic" if scope == TRAIT else "Unit"
            prefix = "override " if member.name in OVERRIDDEN_METHODS else ""
            signature = (
                sanitize(member.name)
                + render_type_params(member.type_params)
                + "("
                + render_params(member.params)
                + "): "
                + map_return(member.ret, default_ret)
            )
            return [prefix + "def " + signature + body]
        case IndexMember():
            return _index_accessors(member)
        case CallMember(type_params=type_params, params=params, ret=ret):
            return [
                "def apply"
                + render_type_params(type_params)
                + "("
                + render_params(params)
                + "): "
                + map_return(ret, "js.Dynamic")
                + NATIVE
            ]
        case _:
            # constructors belong to the class header; the rest has no facade form
            return []


def render_nested_property(prop: PropertyMember, owner: str) -> str:
    """Property typed by an object literal, pointing at the synthesized `Owner.Prop` trait."""
    keyword = "def" if prop.readonly else "var"
    return keyword + " " + sanitize(prop.name) + ": " + owner + "." + nested_type_name(prop.name) + NATIVE


def nested_type_name(prop_name: str) -> str:
    return sanitize(capitalize(prop_name))


def render_params(params: list[Param]) -> str:
    """Parameter list body; optional params get a placeholder default, rest params become varargs."""
    parts: list[str] = []
    for p in params:
        name = sanitize(p.name)
        typ = map_type(p.typ)
        if p.rest:
            parts.append(name + ": " + _element_type(typ) + "*")
        elif p.optional:
            parts.append(name + ": " + typ + " = ???")
        else:
            parts.append(name + ": " + typ)
    return ", ".join(parts)


def _binding_keyword(readonly: bool, scope: str) -> str:
    if not readonly:
        return "var"
    if scope == OBJECT:
        return "val"
    return "def"


def _setter_name(name: str) -> str:
    if is_plain_identifier(name):
        return name + "_="
    return sanitize(name + "_=")


def _element_type(typ: str) -> str:
    """Strip one js.Array[...] layer for a varargs parameter."""
    m = _ARRAY_RE.match(typ)
    if m is None:
        return typ
    return m.group(1)


def _index_accessors(member: IndexMember) -> list[str]:
    key = sanitize(member.key_name)
    key_type = map_type(member.key_type)
    value_type = map_type(member.value_type)
    lines = ["@JSBracketAccess", "def apply(" + key + ": " + key_type + "): " + value_type + NATIVE]
    if not member.readonly:
        lines.append("@JSBracketAccess")
        lines.append("def update(" + key + ": " + key_type + ", v: " + value_type + "): Unit" + NATIVE)
    return lines
