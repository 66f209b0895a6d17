"""Per-scope export collection and the container objects synthesized from it.

Scala has no free-standing functions, values or type aliases at package level
inside a facade, so each scope's aliases, functions and variables are gathered
while its children are visited and flushed into one native object when the
scope closes.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .ast import (
    ClassDecl,
    ExportAssignment,
    FunctionDecl,
    InterfaceDecl,
    Stmt,
    TypeAliasDecl,
    VariableDecl,
    VariableStmt,
    is_object_literal,
)
from .members import NATIVE, render_params
from .names import capitalize, sanitize
from .types import map_return, map_type, render_type_params
from .writer import Writer


@dataclass
class ExportCollection:
    """Direct children of one scope, grouped by kind, in source order."""

    type_aliases: list[TypeAliasDecl] = field(default_factory=list)
    functions: list[FunctionDecl] = field(default_factory=list)
    variables: list[VariableDecl] = field(default_factory=list)
    export_assignments: list[ExportAssignment] = field(default_factory=list)
    interfaces: list[InterfaceDecl] = field(default_factory=list)
    classes: list[ClassDecl] = field(default_factory=list)

    def collect(self, stmt: Stmt) -> None:
        match stmt:
            case TypeAliasDecl():
                self.type_aliases.append(stmt)
            case FunctionDecl():
                self.functions.append(stmt)
            case VariableStmt(decls=decls):
                for decl in decls:
                    # object-literal variables are emitted in place as objects
                    if not is_object_literal(decl.typ):
                        self.variables.append(decl)
            case ExportAssignment():
                self.export_assignments.append(stmt)
            case InterfaceDecl():
                self.interfaces.append(stmt)
            case ClassDecl():
                self.classes.append(stmt)
            case _:
                pass

    def is_empty(self) -> bool:
        """True when nothing needs a container. Interfaces and classes are emitted in place."""
        return (
            len(self.type_aliases) == 0
            and len(self.functions) == 0
            and len(self.variables) == 0
            and len(self.export_assignments) == 0
        )

    def resolve(self, assignment: ExportAssignment) -> FunctionDecl | None:
        """Function named by `export = name`, if the scope declares one."""
        if not assignment.is_identifier:
            return None
        for func in self.functions:
            if func.name == assignment.name:
                return func
        return None


def container_name(scope_name: str) -> str:
    """Object name for a scope: its last dotted segment, capitalized."""
    return sanitize(capitalize(scope_name.split(".")[-1]))


def render_function(func: FunctionDecl, default_return: str) -> str:
    """Binding for a free function; default_return stands in for a missing annotation."""
    return (
        "def "
        + sanitize(func.name)
        + render_type_params(func.type_params)
        + "("
        + render_params(func.params)
        + "): "
        + map_return(func.ret, default_return)
        + NATIVE
    )


def render_alias(alias: TypeAliasDecl) -> str:
    return "type " + sanitize(alias.name) + render_type_params(alias.type_params) + " = " + map_type(alias.value)


def render_variable(decl: VariableDecl) -> str:
    keyword = "val" if decl.const else "var"
    return keyword + " " + sanitize(decl.name) + ": " + map_type(decl.typ) + NATIVE


def emit_container(
    writer: Writer, exports: ExportCollection, name: str, annotation: str, default_return: str
) -> None:
    """Flush a scope's collection as one native object. Writes nothing for an empty scope.

    Untyped functions return Unit in the file object and js.Dynamic in namespace objects.
    """
    if exports.is_empty():
        return
    lines: list[str] = []
    for alias in exports.type_aliases:
        lines.append(render_alias(alias))
    for assignment in exports.export_assignments:
        target = exports.resolve(assignment)
        if target is not None:
            lines.append(render_function(target, default_return))
    for decl in exports.variables:
        lines.append(render_variable(decl))
    for func in exports.functions:
        lines.append(render_function(func, default_return))
    writer.blank()
    writer.line("@js.native")
    writer.line(annotation)
    with writer.block("object " + name + " extends js.Object"):
        seen: set[str] = set()
        for line in lines:
            if line in seen:
                continue
            seen.add(line)
            writer.line(line)
