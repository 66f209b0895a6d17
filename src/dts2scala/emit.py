"""Facade emitter — walks a DeclarationFile once and writes Scala.js source.

Every statement kind is handled by one method. Type aliases, functions,
plain variables and export assignments are never written in place; they go
to the enclosing scope's ExportCollection and come out in its container
object when the scope closes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .ast import (
    GLOBAL_AUGMENTATION,
    ClassDecl,
    ConstructorMember,
    DeclarationFile,
    EnumDecl,
    ExportAssignment,
    FunctionDecl,
    ImportDecl,
    InterfaceDecl,
    Member,
    ModuleDecl,
    ObjectType,
    OtherStmt,
    PropertyMember,
    Stmt,
    TypeAliasDecl,
    TypeRef,
    VariableStmt,
    is_object_literal,
)
from .exports import ExportCollection, container_name, emit_container
from .members import (
    ABSTRACT_CLASS,
    CLASS,
    NATIVE,
    OBJECT,
    TRAIT,
    is_visible,
    nested_type_name,
    render_member,
    render_nested_property,
    render_params,
)
from .names import package_clause, sanitize, sanitize_path
from .types import map_type, render_type_params, unique
from .writer import Writer

logger = logging.getLogger(__name__)

HEADER_IMPORTS: tuple[str, ...] = (
    "import scala.scalajs.js",
    "import js.annotation._",
    "import js.|",
)


def emit(tree: DeclarationFile, package_name: str) -> str:
    """Render a whole declaration file as a Scala.js facade."""
    writer = Writer()
    DeclarationEmitter(writer).emit_file(tree, package_name)
    return writer.output()


@dataclass
class EmissionContext:
    """Namespace path and export collection of the innermost open scope."""

    path: tuple[str, ...] = ()
    exports: ExportCollection = field(default_factory=ExportCollection)

    def enter(self, segments: list[str]) -> EmissionContext:
        return EmissionContext(self.path + tuple(segments), ExportCollection())

    def qualified(self, name: str) -> str:
        return ".".join(self.path + (name,))

    def global_annotation(self, name: str) -> str:
        """@JSGlobal("ns.Name") inside a namespace, bare @JSGlobal at top level."""
        if len(self.path) == 0:
            return "@JSGlobal"
        return '@JSGlobal("' + self.qualified(name) + '")'


class DeclarationEmitter:
    def __init__(self, writer: Writer) -> None:
        self.writer = writer

    # ── File ────────────────────────────────────────────────

    def emit_file(self, tree: DeclarationFile, package_name: str) -> None:
        w = self.writer
        w.line()
        for line in HEADER_IMPORTS:
            w.line(line)
        w.line()
        ctx = EmissionContext()
        with w.block(package_clause(package_name), indent=False):
            for stmt in tree.statements:
                self.emit_statement(stmt, ctx)
            emit_container(w, ctx.exports, container_name(package_name), "@JSGlobalScope", "Unit")
            w.blank()
            if any(_is_module_like(stmt) for stmt in tree.statements):
                w.line()

    # ── Statements ──────────────────────────────────────────

    def emit_statement(self, stmt: Stmt, ctx: EmissionContext) -> None:
        ctx.exports.collect(stmt)
        match stmt:
            case ModuleDecl():
                self._emit_module(stmt, ctx)
            case ClassDecl():
                self._emit_class(stmt, ctx)
            case InterfaceDecl():
                self._emit_interface(stmt)
            case EnumDecl():
                self._emit_enum(stmt, ctx)
            case VariableStmt():
                self._emit_variables(stmt, ctx)
            case TypeAliasDecl() | FunctionDecl() | ExportAssignment():
                # rendered by the scope's container object
                pass
            case ImportDecl():
                pass
            case _:
                logger.debug("skipping unsupported statement: %s", stmt)

    def _emit_module(self, stmt: ModuleDecl, ctx: EmissionContext) -> None:
        if stmt.quoted:
            logger.debug("skipping external module declaration %r", stmt.name)
            return
        inner = ctx.enter(stmt.name.split("."))
        w = self.writer
        w.blank()
        with w.block("package " + sanitize_path(stmt.name), indent=False):
            for child in stmt.body or []:
                self.emit_statement(child, inner)
            annotation = '@JSGlobal("' + ".".join(inner.path) + '")'
            emit_container(w, inner.exports, container_name(stmt.name), annotation, "js.Dynamic")
            w.blank()

    def _emit_class(self, stmt: ClassDecl, ctx: EmissionContext) -> None:
        w = self.writer
        name = sanitize(stmt.name)
        statics = [m for m in stmt.members if m.static]
        instance = [m for m in stmt.members if not m.static]
        param_ctors = [
            m for m in instance if isinstance(m, ConstructorMember) and is_visible(m) and len(m.params) > 0
        ]
        scope = ABSTRACT_CLASS if stmt.abstract else CLASS
        header = "abstract class " if stmt.abstract else "class "
        header += name + render_type_params(stmt.type_params)
        if len(param_ctors) > 0:
            header += " protected ()"
        header += " extends " + _class_parents(stmt)
        annotation = ctx.global_annotation(stmt.name)
        w.blank()
        w.line("@js.native")
        w.line(annotation)
        with w.block(header):
            for ctor in param_ctors:
                w.line("def this(" + render_params(ctor.params) + ") = this()")
            for member in instance:
                for line in render_member(member, scope):
                    w.line(line)
        static_lines: list[str] = []
        for member in statics:
            static_lines.extend(render_member(member, OBJECT))
        if len(static_lines) == 0:
            return
        w.line("@js.native")
        w.line(annotation)
        with w.block("object " + name + " extends js.Object"):
            for line in static_lines:
                w.line(line)

    def _emit_interface(self, stmt: InterfaceDecl) -> None:
        w = self.writer
        name = sanitize(stmt.name)
        parents = unique(map_type(t) for t in stmt.extends)
        if len(parents) == 0:
            parents = ["js.Object"]
        w.blank()
        w.line("@js.native")
        with w.block("trait " + name + render_type_params(stmt.type_params) + " extends " + " with ".join(parents)):
            self._emit_trait_body(stmt.members, name)
        nested = _object_literal_properties(stmt.members)
        if len(nested) > 0:
            w.blank()
            with w.block("object " + name):
                self._emit_nested_traits(nested)

    def _emit_trait_body(self, members: list[Member], owner: str) -> None:
        """Trait members, skipping any whose rendering repeats an earlier one."""
        seen: set[str] = set()
        for member in members:
            if isinstance(member, PropertyMember) and is_visible(member) and is_object_literal(member.typ):
                lines = [render_nested_property(member, owner)]
            else:
                lines = render_member(member, TRAIT)
            key = "\n".join(lines)
            if len(lines) == 0 or key in seen:
                continue
            seen.add(key)
            for line in lines:
                self.writer.line(line)

    def _emit_nested_traits(self, props: list[PropertyMember]) -> None:
        """One trait per object-literal property, with a companion for deeper literals."""
        w = self.writer
        for prop in props:
            literal = prop.typ
            if not isinstance(literal, ObjectType):
                continue
            trait_name = nested_type_name(prop.name)
            w.line("@js.native")
            with w.block("trait " + trait_name + " extends js.Object"):
                self._emit_trait_body(literal.members, trait_name)
            deeper = _object_literal_properties(literal.members)
            if len(deeper) > 0:
                w.blank()
                with w.block("object " + trait_name):
                    self._emit_nested_traits(deeper)

    def _emit_enum(self, stmt: EnumDecl, ctx: EmissionContext) -> None:
        w = self.writer
        name = sanitize(stmt.name)
        w.blank()
        w.line("@js.native")
        with w.block("sealed trait " + name + " extends js.Object"):
            pass
        w.blank()
        w.line("@js.native")
        w.line('@JSGlobal("' + ctx.qualified(stmt.name) + '")')
        with w.block("object " + name + " extends js.Object"):
            for member in stmt.members:
                w.line("var " + sanitize(member) + ": " + name + NATIVE)
            w.line("@JSBracketAccess")
            w.line("def apply(value: " + name + "): String" + NATIVE)

    def _emit_variables(self, stmt: VariableStmt, ctx: EmissionContext) -> None:
        """Object-literal typed variables become native objects; the rest wait for the container."""
        w = self.writer
        for decl in stmt.decls:
            if not isinstance(decl.typ, ObjectType):
                continue
            w.blank()
            w.line("@js.native")
            w.line(ctx.global_annotation(decl.name))
            with w.block("object " + sanitize(decl.name) + " extends js.Object"):
                for member in decl.typ.members:
                    for line in render_member(member, OBJECT):
                        w.line(line)


def _is_module_like(stmt: Stmt) -> bool:
    """Namespaces, external modules and `declare global` blocks."""
    if isinstance(stmt, ModuleDecl):
        return True
    return isinstance(stmt, OtherStmt) and stmt.kind == GLOBAL_AUGMENTATION


def _class_parents(stmt: ClassDecl) -> str:
    """Base type first, then mixins. Without extends, the first implemented type is the base."""
    heritage: list[TypeRef] = stmt.extends + stmt.implements
    if len(heritage) == 0:
        return "js.Object"
    return " with ".join(map_type(t) for t in heritage)


def _object_literal_properties(members: list[Member]) -> list[PropertyMember]:
    """Visible properties typed by an object literal, first occurrence per trait name."""
    result: list[PropertyMember] = []
    names: set[str] = set()
    for member in members:
        if not isinstance(member, PropertyMember) or not is_visible(member):
            continue
        if not is_object_literal(member.typ):
            continue
        trait_name = nested_type_name(member.name)
        if trait_name in names:
            continue
        names.add(trait_name)
        result.append(member)
    return result
