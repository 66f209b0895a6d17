"""Frontend — lowers the tree-sitter TypeScript syntax tree into a DeclarationFile.

One function per syntax kind. The declaration tree keeps only what the facade
emitter needs; everything else is carried as OtherStmt / OtherMember /
UnsupportedType so that the emitter decides what to drop.
"""

from __future__ import annotations

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from .ast import (
    GLOBAL_AUGMENTATION,
    ArrayType,
    CallMember,
    ClassDecl,
    ConstructorMember,
    DeclarationFile,
    EnumDecl,
    ExportAssignment,
    FunctionDecl,
    FunctionType,
    ImportDecl,
    IndexMember,
    InterfaceDecl,
    IntersectionType,
    KeyOfType,
    KeywordType,
    LiteralType,
    Member,
    MethodMember,
    ModuleDecl,
    ObjectType,
    OtherMember,
    OtherStmt,
    Param,
    ParenType,
    PropertyMember,
    Stmt,
    TypeAliasDecl,
    TypeNode,
    TypeParam,
    TypeRef,
    UnionType,
    UnsupportedType,
    VariableDecl,
    VariableStmt,
)
from .errors import ParseError

TS_LANGUAGE = Language(tree_sitter_typescript.language_typescript())

ANNOTATION_KINDS: set[str] = {
    "type_annotation",
    "omitting_type_annotation",
    "adding_type_annotation",
    "opting_type_annotation",
}

CLASS_KINDS: set[str] = {"class_declaration", "abstract_class_declaration", "class"}


def parse(source: str) -> DeclarationFile:
    """Parse declaration text into a DeclarationFile. Raises ParseError."""
    parser = Parser(TS_LANGUAGE)
    tree = parser.parse(source.encode("utf-8"))
    root = tree.root_node
    if root.has_error:
        bad = _first_error(root)
        if bad is None:
            raise ParseError("syntax error", 1, 1)
        line = bad.start_point[0] + 1
        col = bad.start_point[1] + 1
        if bad.is_missing:
            raise ParseError("missing " + bad.type, line, col)
        raise ParseError("unexpected " + repr(_snippet(bad)), line, col)
    return DeclarationFile(_statements(root.named_children))


def _first_error(node: Node) -> Node | None:
    """Depth-first search for the first ERROR or missing node."""
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def _snippet(node: Node) -> str:
    text = _text(node).strip()
    first = text.split("\n", 1)[0]
    if len(first) > 30:
        return first[:30] + "..."
    return first


# ── Helpers ─────────────────────────────────────────────


def _text(node: Node) -> str:
    return node.text.decode("utf-8")


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] in "'\"`" and text[-1] == text[0]:
        return text[1:-1]
    return text


def _keywords(node: Node) -> set[str]:
    """Anonymous tokens directly under node: static, readonly, abstract, get, ?, ..."""
    return {child.type for child in node.children if not child.is_named}


def _visibility(node: Node) -> str:
    for child in node.children:
        if child.type == "accessibility_modifier":
            return _text(child)
    name = node.child_by_field_name("name")
    if name is not None and name.type == "private_property_identifier":
        return "private"
    return "public"


def _property_name(node: Node | None) -> str | None:
    """Member name text; None for computed names like [Symbol.iterator]."""
    if node is None or node.type == "computed_property_name":
        return None
    if node.type == "string":
        return _unquote(_text(node))
    return _text(node)


# ── Statements ──────────────────────────────────────────


def _statements(nodes: list[Node]) -> list[Stmt]:
    result: list[Stmt] = []
    for node in nodes:
        if node.type == "comment":
            continue
        result.append(_statement(node))
    return result


def _statement(node: Node) -> Stmt:
    kind = node.type
    if kind == "ambient_declaration":
        return _ambient(node)
    if kind == "export_statement":
        return _export(node)
    if kind == "expression_statement":
        # `namespace X {}` without `declare` parses as an expression statement
        inner = node.named_children[0] if node.named_children else None
        if inner is not None and inner.type == "internal_module":
            return _module(inner)
        return OtherStmt(kind)
    if kind == "module" or kind == "internal_module":
        return _module(node)
    if kind in CLASS_KINDS:
        return _class(node)
    if kind == "interface_declaration":
        return _interface(node)
    if kind == "enum_declaration":
        return _enum(node)
    if kind == "type_alias_declaration":
        return _type_alias(node)
    if kind == "lexical_declaration" or kind == "variable_declaration":
        return _variables(node)
    if kind == "function_signature" or kind == "function_declaration":
        return _function(node)
    if kind == "import_statement" or kind == "import_alias":
        return ImportDecl(_text(node))
    return OtherStmt(kind)


def _ambient(node: Node) -> Stmt:
    for child in node.named_children:
        if child.type == "comment":
            continue
        if child.type == "statement_block":
            return OtherStmt(GLOBAL_AUGMENTATION)
        return _statement(child)
    return OtherStmt(node.type)


def _export(node: Node) -> Stmt:
    decl = node.child_by_field_name("declaration")
    if decl is not None:
        return _statement(decl)
    value = node.child_by_field_name("value")
    if value is None:
        saw_equals = False
        for child in node.children:
            if saw_equals and child.is_named:
                value = child
                break
            if child.type == "=":
                saw_equals = True
    if value is None:
        return OtherStmt("export_clause")
    if value.type in CLASS_KINDS:
        return _class(value)
    return ExportAssignment(_text(value), value.type == "identifier")


def _module(node: Node) -> ModuleDecl:
    name = node.child_by_field_name("name")
    body = node.child_by_field_name("body")
    stmts = _statements(body.named_children) if body is not None else None
    if name is None:
        return ModuleDecl("", False, stmts)
    if name.type == "string":
        return ModuleDecl(_unquote(_text(name)), True, stmts)
    return ModuleDecl(_text(name), False, stmts)


def _class(node: Node) -> ClassDecl:
    name = node.child_by_field_name("name")
    extends: list[TypeRef] = []
    implements: list[TypeRef] = []
    for child in node.named_children:
        if child.type != "class_heritage":
            continue
        for clause in child.named_children:
            if clause.type == "extends_clause":
                extends.extend(_extends_clause(clause))
            elif clause.type == "implements_clause":
                implements.extend(_heritage_types(clause))
    body = node.child_by_field_name("body")
    return ClassDecl(
        name=_text(name) if name is not None else "AnonymousClass",
        type_params=_type_params(node.child_by_field_name("type_parameters")),
        extends=extends,
        implements=implements,
        members=_members(body),
        abstract=node.type == "abstract_class_declaration",
    )


def _extends_clause(clause: Node) -> list[TypeRef]:
    """extends A<T>, B: type arguments attach to the preceding expression."""
    refs: list[TypeRef] = []
    for child in clause.named_children:
        if child.type == "comment":
            continue
        if child.type == "type_arguments":
            if len(refs) > 0:
                refs[-1].args = _type_args(child)
            continue
        refs.append(TypeRef(_text(child)))
    return refs


def _heritage_types(clause: Node) -> list[TypeRef]:
    refs: list[TypeRef] = []
    for child in clause.named_children:
        if child.type == "comment":
            continue
        typ = _type(child)
        if isinstance(typ, TypeRef):
            refs.append(typ)
    return refs


def _interface(node: Node) -> InterfaceDecl:
    name = node.child_by_field_name("name")
    extends: list[TypeRef] = []
    for child in node.named_children:
        if child.type == "extends_type_clause":
            extends.extend(_heritage_types(child))
        elif child.type == "extends_clause":
            extends.extend(_extends_clause(child))
    return InterfaceDecl(
        name=_text(name),
        type_params=_type_params(node.child_by_field_name("type_parameters")),
        extends=extends,
        members=_members(node.child_by_field_name("body")),
    )


def _enum(node: Node) -> EnumDecl:
    name = node.child_by_field_name("name")
    body = node.child_by_field_name("body")
    members: list[str] = []
    if body is not None:
        for child in body.named_children:
            if child.type == "enum_assignment":
                member = _property_name(child.child_by_field_name("name"))
            elif child.type in ("property_identifier", "identifier", "string", "number"):
                member = _property_name(child)
            else:
                continue
            if member is not None:
                members.append(member)
    const = any(child.type == "const" for child in node.children)
    return EnumDecl(_text(name), members, const)


def _type_alias(node: Node) -> TypeAliasDecl:
    name = node.child_by_field_name("name")
    value = node.child_by_field_name("value")
    return TypeAliasDecl(
        name=_text(name),
        type_params=_type_params(node.child_by_field_name("type_parameters")),
        value=_type(value) if value is not None else UnsupportedType("missing"),
    )


def _variables(node: Node) -> VariableStmt:
    kind = node.child_by_field_name("kind")
    if kind is None and len(node.children) > 0:
        kind = node.children[0]
    const = kind is not None and kind.type == "const"
    decls: list[VariableDecl] = []
    for child in node.named_children:
        if child.type != "variable_declarator":
            continue
        name = child.child_by_field_name("name")
        # destructuring patterns bind no single name
        if name is None or name.type != "identifier":
            continue
        typ = _annotation(child.child_by_field_name("type"))
        decls.append(VariableDecl(_text(name), typ, const))
    return VariableStmt(decls)


def _function(node: Node) -> Stmt:
    name = node.child_by_field_name("name")
    if name is None:
        return OtherStmt("anonymous_function")
    return FunctionDecl(
        name=_text(name),
        type_params=_type_params(node.child_by_field_name("type_parameters")),
        params=_params(node.child_by_field_name("parameters")),
        ret=_annotation(node.child_by_field_name("return_type")),
    )


# ── Signatures ──────────────────────────────────────────


def _type_params(node: Node | None) -> list[TypeParam]:
    if node is None:
        return []
    result: list[TypeParam] = []
    for child in node.named_children:
        if child.type != "type_parameter":
            continue
        name = child.child_by_field_name("name")
        constraint = child.child_by_field_name("constraint")
        bound: TypeNode | None = None
        if constraint is not None and len(constraint.named_children) > 0:
            bound = _type(constraint.named_children[0])
        result.append(TypeParam(_text(name), bound))
    return result


def _params(node: Node | None) -> list[Param]:
    if node is None:
        return []
    params: list[Param] = []
    for child in node.named_children:
        if child.type != "required_parameter" and child.type != "optional_parameter":
            continue
        pattern = child.child_by_field_name("pattern")
        typ = _annotation(child.child_by_field_name("type"))
        rest = False
        if pattern is not None and pattern.type == "this":
            # `this: T` only types the receiver
            continue
        if pattern is not None and pattern.type == "identifier":
            name = _text(pattern)
        elif pattern is not None and pattern.type == "rest_pattern":
            rest = True
            inner = pattern.named_children
            name = _text(inner[0]) if len(inner) > 0 and inner[0].type == "identifier" else "args"
        else:
            name = "arg" + str(len(params))
        optional = child.type == "optional_parameter" or child.child_by_field_name("value") is not None
        params.append(Param(name, typ, optional, rest))
    return params


def _annotation(node: Node | None) -> TypeNode | None:
    """Unwrap `: T`, type predicates and asserts into a type node."""
    if node is None:
        return None
    if node.type == "type_predicate_annotation" or node.type == "type_predicate":
        return KeywordType("boolean")
    if node.type == "asserts_annotation" or node.type == "asserts":
        return KeywordType("void")
    if node.type in ANNOTATION_KINDS:
        if len(node.named_children) == 0:
            return None
        return _type(node.named_children[0])
    return _type(node)


def _type_args(node: Node | None) -> list[TypeNode]:
    if node is None:
        return []
    return [_type(child) for child in node.named_children if child.type != "comment"]


# ── Members ─────────────────────────────────────────────


def _members(body: Node | None) -> list[Member]:
    if body is None:
        return []
    result: list[Member] = []
    for child in body.named_children:
        if child.type == "comment" or child.type == "decorator":
            continue
        result.append(_member(child))
    return result


def _member(node: Node) -> Member:
    kind = node.type
    visibility = _visibility(node)
    keywords = _keywords(node)
    static = "static" in keywords
    if kind == "property_signature" or kind == "public_field_definition":
        name = _property_name(node.child_by_field_name("name"))
        if name is None:
            return OtherMember(visibility, static, "computed_property")
        return PropertyMember(
            visibility,
            static,
            name=name,
            typ=_annotation(node.child_by_field_name("type")),
            readonly="readonly" in keywords,
            optional="?" in keywords,
            abstract="abstract" in keywords,
        )
    if kind in ("method_signature", "method_definition", "abstract_method_signature"):
        name = _property_name(node.child_by_field_name("name"))
        if name is None:
            return OtherMember(visibility, static, "computed_method")
        params = _params(node.child_by_field_name("parameters"))
        if name == "constructor":
            return ConstructorMember(visibility, static, params)
        accessor = ""
        if "get" in keywords:
            accessor = "get"
        elif "set" in keywords:
            accessor = "set"
        return MethodMember(
            visibility,
            static,
            name=name,
            type_params=_type_params(node.child_by_field_name("type_parameters")),
            params=params,
            ret=_annotation(node.child_by_field_name("return_type")),
            accessor=accessor,
            optional="?" in keywords,
            abstract=kind == "abstract_method_signature" or "abstract" in keywords,
        )
    if kind == "index_signature":
        return _index_signature(node, visibility, static, keywords)
    if kind == "call_signature":
        return CallMember(
            visibility,
            static,
            type_params=_type_params(node.child_by_field_name("type_parameters")),
            params=_params(node.child_by_field_name("parameters")),
            ret=_annotation(node.child_by_field_name("return_type")),
        )
    return OtherMember(visibility, static, kind)


def _index_signature(node: Node, visibility: str, static: bool, keywords: set[str]) -> Member:
    for child in node.named_children:
        if child.type == "mapped_type_clause":
            return OtherMember(visibility, static, "mapped_type")
    key = node.child_by_field_name("name")
    key_type = node.child_by_field_name("index_type")
    return IndexMember(
        visibility,
        static,
        key_name=_text(key) if key is not None else "key",
        key_type=_type(key_type) if key_type is not None else None,
        value_type=_annotation(node.child_by_field_name("type")),
        readonly="readonly" in keywords,
    )


# ── Types ───────────────────────────────────────────────


def _type(node: Node) -> TypeNode:
    kind = node.type
    if kind == "predefined_type":
        return KeywordType(_text(node))
    if kind == "this_type" or kind == "this":
        return KeywordType("this")
    if kind in ("type_identifier", "identifier", "nested_type_identifier"):
        return TypeRef(_text(node))
    if kind == "generic_type":
        name = node.child_by_field_name("name")
        return TypeRef(_text(name), _type_args(node.child_by_field_name("type_arguments")))
    if kind == "literal_type":
        return _literal_type(node)
    if kind == "union_type":
        return UnionType(_flatten(node, "union_type"))
    if kind == "intersection_type":
        return IntersectionType(_flatten(node, "intersection_type"))
    if kind == "array_type":
        return ArrayType(_type(node.named_children[0]))
    if kind == "readonly_type":
        return _type(node.named_children[0])
    if kind == "parenthesized_type":
        return ParenType(_type(node.named_children[0]))
    if kind == "function_type":
        return FunctionType(
            params=_params(node.child_by_field_name("parameters")),
            ret=_annotation(node.child_by_field_name("return_type")),
        )
    if kind == "object_type":
        return ObjectType(_members(node))
    if kind == "index_type_query":
        return KeyOfType(_type(node.named_children[0]))
    if kind == "type_predicate":
        return KeywordType("boolean")
    return UnsupportedType(kind)


def _flatten(node: Node, kind: str) -> list[TypeNode]:
    """A | B | C nests as ((A | B) | C); collect the leaves in source order."""
    result: list[TypeNode] = []
    for child in node.named_children:
        if child.type == "comment":
            continue
        if child.type == kind:
            result.extend(_flatten(child, kind))
        else:
            result.append(_type(child))
    return result


def _literal_type(node: Node) -> TypeNode:
    text = _text(node)
    inner = node.named_children[0] if len(node.named_children) > 0 else None
    inner_kind = inner.type if inner is not None else text
    if inner_kind == "string" or text[:1] in ("'", '"'):
        return LiteralType("string", text)
    if inner_kind == "true" or inner_kind == "false":
        return LiteralType("boolean", text)
    if inner_kind == "null":
        return LiteralType("null", text)
    if inner_kind == "undefined":
        return LiteralType("undefined", text)
    if inner_kind == "number" or inner_kind == "unary_expression":
        return LiteralType("number", text)
    return UnsupportedType("literal_type")
