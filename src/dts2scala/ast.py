"""Declaration tree — node definitions produced by the frontend."""

from __future__ import annotations

from dataclasses import dataclass, field


# ============================================================
# TYPES
# ============================================================


@dataclass
class TypeNode:
    """Base for all type nodes."""


@dataclass
class KeywordType(TypeNode):
    """string, number, boolean, void, any, unknown, object, never, this, ..."""

    name: str


@dataclass
class LiteralType(TypeNode):
    """A literal used as a type. kind: string, number, boolean, null, undefined."""

    kind: str
    text: str


@dataclass
class TypeRef(TypeNode):
    """Name or Name<A, B>."""

    name: str
    args: list[TypeNode] = field(default_factory=list)


@dataclass
class ArrayType(TypeNode):
    """T[]."""

    element: TypeNode


@dataclass
class UnionType(TypeNode):
    """A | B | ..., flattened, 1+ members."""

    members: list[TypeNode]


@dataclass
class IntersectionType(TypeNode):
    """A & B & ..., flattened, 1+ members."""

    members: list[TypeNode]


@dataclass
class FunctionType(TypeNode):
    """(params) => ret."""

    params: list[Param]
    ret: TypeNode | None


@dataclass
class ParenType(TypeNode):
    """(T)."""

    inner: TypeNode


@dataclass
class ObjectType(TypeNode):
    """{ members }: anonymous structural type."""

    members: list[Member]


@dataclass
class KeyOfType(TypeNode):
    """keyof T."""

    operand: TypeNode


@dataclass
class UnsupportedType(TypeNode):
    """Any type syntax without a dedicated node (tuples, conditionals, ...)."""

    kind: str


# ============================================================
# SIGNATURE PIECES
# ============================================================


@dataclass
class Param:
    """Function or method parameter."""

    name: str
    typ: TypeNode | None
    optional: bool = False
    rest: bool = False


@dataclass
class TypeParam:
    """T or T extends C. Defaults are not kept."""

    name: str
    constraint: TypeNode | None = None


# ============================================================
# MEMBERS (class bodies, interface bodies, object literal types)
# ============================================================


@dataclass
class Member:
    """Base for all members. visibility: public, private, protected."""

    visibility: str
    static: bool


@dataclass
class PropertyMember(Member):
    name: str
    typ: TypeNode | None
    readonly: bool = False
    optional: bool = False
    abstract: bool = False


@dataclass
class MethodMember(Member):
    """Method or accessor. accessor is "", "get" or "set"."""

    name: str
    type_params: list[TypeParam]
    params: list[Param]
    ret: TypeNode | None
    accessor: str = ""
    optional: bool = False
    abstract: bool = False


@dataclass
class IndexMember(Member):
    """[key: K]: V."""

    key_name: str
    key_type: TypeNode | None
    value_type: TypeNode | None
    readonly: bool = False


@dataclass
class CallMember(Member):
    """(params): R. Makes the owner callable."""

    type_params: list[TypeParam]
    params: list[Param]
    ret: TypeNode | None


@dataclass
class ConstructorMember(Member):
    params: list[Param]


@dataclass
class OtherMember(Member):
    """Member syntax with no facade equivalent (construct signatures, ...)."""

    kind: str


# ============================================================
# STATEMENTS
# ============================================================


@dataclass
class Stmt:
    """Base for all statements."""


@dataclass
class ModuleDecl(Stmt):
    """namespace A.B { } or module "x" { }. quoted is True for the latter."""

    name: str
    quoted: bool
    body: list[Stmt] | None


@dataclass
class ClassDecl(Stmt):
    name: str
    type_params: list[TypeParam]
    extends: list[TypeRef]
    implements: list[TypeRef]
    members: list[Member]
    abstract: bool = False


@dataclass
class InterfaceDecl(Stmt):
    name: str
    type_params: list[TypeParam]
    extends: list[TypeRef]
    members: list[Member]


@dataclass
class EnumDecl(Stmt):
    name: str
    members: list[str]
    const: bool = False


@dataclass
class TypeAliasDecl(Stmt):
    name: str
    type_params: list[TypeParam]
    value: TypeNode


@dataclass
class VariableDecl:
    name: str
    typ: TypeNode | None
    const: bool = False


@dataclass
class VariableStmt(Stmt):
    decls: list[VariableDecl]


@dataclass
class FunctionDecl(Stmt):
    name: str
    type_params: list[TypeParam]
    params: list[Param]
    ret: TypeNode | None


@dataclass
class ExportAssignment(Stmt):
    """export = x / export default x. name is the expression text."""

    name: str
    is_identifier: bool


@dataclass
class ImportDecl(Stmt):
    text: str


@dataclass
class OtherStmt(Stmt):
    """Statement kind with no facade equivalent."""

    kind: str


# OtherStmt kind for `declare global { ... }`
GLOBAL_AUGMENTATION: str = "global_augmentation"


@dataclass
class DeclarationFile:
    statements: list[Stmt]


def is_object_literal(typ: TypeNode | None) -> bool:
    """True when typ is an anonymous structural type."""
    return isinstance(typ, ObjectType)
