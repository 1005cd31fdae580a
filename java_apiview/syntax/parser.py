"""Java source parser built on tree-sitter-java.

Converts the concrete syntax tree into the reduced syntax tree of
java_apiview.syntax.nodes. Javadoc comments are attached to the declaration
that immediately follows them; bodies are discarded.

Each JavaSourceParser owns its own tree-sitter Parser, so configuration is
per instance and nothing is shared between analyser runs.
"""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Iterator

import tree_sitter_java
from tree_sitter import Language, Node, Parser

from java_apiview.exceptions import JavaSyntaxError, SourceReadError
from java_apiview.syntax.nodes import (
    Annotation,
    AnnotationMember,
    AnnotationValue,
    ArrayType,
    ArrayValue,
    ClassLiteral,
    ClassType,
    CompilationUnit,
    ConstructorDeclaration,
    DeclarationKind,
    EnumConstant,
    ExpressionValue,
    FieldDeclaration,
    ImportDeclaration,
    MethodDeclaration,
    ModuleDeclaration,
    ModuleDirective,
    OpaqueType,
    Parameter,
    PrimitiveType,
    TypeDeclaration,
    TypeParameter,
    TypeRef,
    UnsupportedDeclaration,
    VariableDeclarator,
)

JAVA_LANGUAGE = Language(tree_sitter_java.language())

_COMMENT_TYPES: frozenset[str] = frozenset({"comment", "line_comment", "block_comment"})
_ANNOTATION_TYPES: frozenset[str] = frozenset({"marker_annotation", "annotation"})
_NAME_TYPES: frozenset[str] = frozenset({"identifier", "scoped_identifier"})
_PRIMITIVE_TYPES: frozenset[str] = frozenset({"integral_type", "floating_point_type", "boolean_type", "void_type"})
_TYPE_DECLARATION_KINDS: dict[str, DeclarationKind] = {
    "class_declaration": DeclarationKind.CLASS,
    "interface_declaration": DeclarationKind.INTERFACE,
    "enum_declaration": DeclarationKind.ENUM,
    "annotation_type_declaration": DeclarationKind.ANNOTATION,
}
_UNSUPPORTED_DECLARATIONS: frozenset[str] = frozenset({"record_declaration"})
_DIRECTIVE_KEYWORDS: frozenset[str] = frozenset({"requires", "exports", "opens", "uses", "provides"})
_REQUIRES_MODIFIERS: frozenset[str] = frozenset({"transitive", "static", "requires_modifier"})


class JavaSourceParser:
    """Parses Java compilation units into CompilationUnit trees."""

    def __init__(self) -> None:
        self._parser = Parser(JAVA_LANGUAGE)

    def parse(self, source: str | bytes, path: Path | None = None) -> CompilationUnit:
        """Parse source text. Raises JavaSyntaxError when the tree contains errors."""
        data = source.encode("utf-8") if isinstance(source, str) else source
        root = self._parser.parse(data).root_node
        if root.has_error:
            row, column = _first_error(root).start_point
            raise JavaSyntaxError(path, row + 1, column + 1)
        return _build_unit(root, path)

    def parse_file(self, path: Path) -> CompilationUnit:
        """Read and parse one file. Raises SourceReadError or JavaSyntaxError."""
        try:
            data = path.read_bytes()
            data.decode("utf-8")
        except OSError as exc:
            raise SourceReadError(path, exc.strerror or str(exc)) from exc
        except UnicodeDecodeError as exc:
            raise SourceReadError(path, f"not valid UTF-8 ({exc.reason})") from exc
        return self.parse(data, path)


# ---------------------------------------------------------------------------
# Node helpers
# ---------------------------------------------------------------------------


def _first_error(node: Node) -> Node:
    for child in node.children:
        if child.type == "ERROR" or child.is_missing:
            return child
        if child.has_error:
            return _first_error(child)
    return node


def _text(node: Node | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8")


def _squash(text: str) -> str:
    """Join a multi-line source fragment into one line."""
    return " ".join(line.strip() for line in text.splitlines() if line.strip())


def _named(node: Node | None) -> list[Node]:
    if node is None:
        return []
    return [child for child in node.named_children if child.type not in _COMMENT_TYPES]


def _child_of_type(node: Node | None, *types: str) -> Node | None:
    if node is None:
        return None
    for child in node.children:
        if child.type in types:
            return child
    return None


def _field_or_child(node: Node, field_name: str, *types: str) -> Node | None:
    child = node.child_by_field_name(field_name)
    return child if child is not None else _child_of_type(node, *types)


def _name_of(node: Node) -> str:
    return _text(_field_or_child(node, "name", *_NAME_TYPES))


def _with_javadoc(nodes: list[Node]) -> Iterator[tuple[Node, str | None]]:
    """Yield non-comment nodes paired with the javadoc comment right before them."""
    pending: str | None = None
    for node in nodes:
        if node.type in _COMMENT_TYPES:
            text = _text(node)
            if text.startswith("/**"):
                pending = text
            continue
        yield node, pending
        pending = None


# ---------------------------------------------------------------------------
# Compilation unit
# ---------------------------------------------------------------------------


def _build_unit(root: Node, path: Path | None) -> CompilationUnit:
    package_name = ""
    package_doc: str | None = None
    first_doc: str | None = None
    imports: list[ImportDeclaration] = []
    types: list[TypeDeclaration | UnsupportedDeclaration] = []
    module: ModuleDeclaration | None = None

    for node, javadoc in _with_javadoc(root.named_children):
        first_doc = first_doc or javadoc
        if node.type == "package_declaration":
            package_name = _text(_child_of_type(node, *_NAME_TYPES))
            package_doc = javadoc
        elif node.type == "import_declaration":
            imports.append(_import(node))
        elif node.type == "module_declaration":
            module = _module(node)
        elif (declaration := _declaration(node, javadoc)) is not None:
            types.append(declaration)

    return CompilationUnit(
        path=path,
        package_name=package_name,
        imports=tuple(imports),
        types=tuple(types),
        module=module,
        javadoc=package_doc or first_doc,
    )


def _import(node: Node) -> ImportDeclaration:
    return ImportDeclaration(
        name=_text(_child_of_type(node, *_NAME_TYPES)),
        is_static=any(child.type == "static" for child in node.children),
        is_asterisk=any(child.type in ("asterisk", "*") for child in node.children),
    )


# ---------------------------------------------------------------------------
# Module descriptors
# ---------------------------------------------------------------------------


def _module(node: Node) -> ModuleDeclaration:
    directives: list[ModuleDirective] = []
    for child in _named(_field_or_child(node, "body", "module_body")):
        if (directive := _module_directive(child)) is not None:
            directives.append(directive)
    return ModuleDeclaration(
        name=_name_of(node),
        directives=tuple(directives),
        is_open=any(child.type == "open" for child in node.children),
    )


def _module_directive(node: Node) -> ModuleDirective | None:
    if node.type == "module_directive":
        inner = [child for child in _named(node) if child.type.endswith("_directive")]
        if inner:
            node = inner[0]
    keyword = next((child.type for child in node.children if child.type in _DIRECTIVE_KEYWORDS), None)
    names = [_text(child) for child in node.named_children if child.type in _NAME_TYPES]
    if keyword is None or not names:
        return None
    return ModuleDirective(
        keyword=keyword,
        name=names[0],
        modifiers=tuple(_text(child) for child in node.children if child.type in _REQUIRES_MODIFIERS),
        targets=tuple(names[1:]),
    )


# ---------------------------------------------------------------------------
# Type declarations
# ---------------------------------------------------------------------------


@dataclass
class _Members:
    """Mutable accumulator for the members of one type body."""

    enum_constants: list[EnumConstant] = field(default_factory=list)
    annotation_members: list[AnnotationMember] = field(default_factory=list)
    fields: list[FieldDeclaration] = field(default_factory=list)
    constructors: list[ConstructorDeclaration] = field(default_factory=list)
    methods: list[MethodDeclaration] = field(default_factory=list)
    types: list[TypeDeclaration | UnsupportedDeclaration] = field(default_factory=list)


def _declaration(node: Node, javadoc: str | None) -> TypeDeclaration | UnsupportedDeclaration | None:
    kind = _TYPE_DECLARATION_KINDS.get(node.type)
    modifiers, annotations = _modifiers(node)
    if kind is None:
        if node.type in _UNSUPPORTED_DECLARATIONS:
            return UnsupportedDeclaration(
                node_type=node.type,
                name=_name_of(node),
                line=node.start_point[0] + 1,
                modifiers=modifiers,
            )
        return None

    extends: tuple[TypeRef, ...] = ()
    if kind is DeclarationKind.CLASS:
        extends = tuple(_type(child) for child in _named(_child_of_type(node, "superclass")))
    elif kind is DeclarationKind.INTERFACE:
        extends = _type_list(_child_of_type(node, "extends_interfaces"))

    members = _Members()
    body = _field_or_child(node, "body", "class_body", "interface_body", "enum_body", "annotation_type_body")
    _collect_members(body.named_children if body is not None else [], members)

    return TypeDeclaration(
        kind=kind,
        name=_name_of(node),
        modifiers=modifiers,
        annotations=annotations,
        javadoc=javadoc,
        type_parameters=_type_parameters(node),
        extends=extends,
        implements=_type_list(_child_of_type(node, "super_interfaces")),
        enum_constants=tuple(members.enum_constants),
        annotation_members=tuple(members.annotation_members),
        fields=tuple(members.fields),
        constructors=tuple(members.constructors),
        methods=tuple(members.methods),
        members=tuple(members.types),
    )


def _collect_members(nodes: list[Node], members: _Members) -> None:
    for node, javadoc in _with_javadoc(nodes):
        kind = node.type
        if kind in ("field_declaration", "constant_declaration"):
            members.fields.append(_field(node, javadoc))
        elif kind == "method_declaration":
            members.methods.append(_method(node, javadoc))
        elif kind == "constructor_declaration":
            members.constructors.append(_constructor(node, javadoc))
        elif kind == "enum_constant":
            members.enum_constants.append(_enum_constant(node, javadoc))
        elif kind == "annotation_type_element_declaration":
            members.annotation_members.append(_annotation_member(node, javadoc))
        elif kind == "enum_body_declarations":
            _collect_members(node.named_children, members)
        elif (declaration := _declaration(node, javadoc)) is not None:
            members.types.append(declaration)


def _modifiers(node: Node) -> tuple[tuple[str, ...], tuple[Annotation, ...]]:
    """Modifier keywords in source order, and the annotations among them."""
    modifiers_node = _child_of_type(node, "modifiers")
    if modifiers_node is None:
        return (), ()
    keywords: list[str] = []
    annotations: list[Annotation] = []
    for child in modifiers_node.children:
        if child.type in _ANNOTATION_TYPES:
            annotations.append(_annotation(child))
        elif not child.is_named:
            keywords.append(_text(child))
    return tuple(keywords), tuple(annotations)


def _annotation(node: Node) -> Annotation:
    pairs: tuple[tuple[str, AnnotationValue], ...] = ()
    if node.type == "annotation":
        arguments = _named(node.child_by_field_name("arguments"))
        if arguments and all(argument.type == "element_value_pair" for argument in arguments):
            pairs = tuple(
                (_text(argument.child_by_field_name("key")), _annotation_value(argument.child_by_field_name("value")))
                for argument in arguments
            )
    return Annotation(name=_text(node.child_by_field_name("name")), text=_squash(_text(node)), pairs=pairs)


def _annotation_value(node: Node | None) -> AnnotationValue:
    if node is not None and node.type == "class_literal":
        parts = _named(node)
        return ClassLiteral(type_name=_text(parts[0]) if parts else _text(node), text=_text(node))
    if node is not None and node.type == "element_value_array_initializer":
        return ArrayValue(elements=tuple(_annotation_value(child) for child in _named(node)), text=_squash(_text(node)))
    return ExpressionValue(text=_squash(_text(node)))


# ---------------------------------------------------------------------------
# Members
# ---------------------------------------------------------------------------


def _field(node: Node, javadoc: str | None) -> FieldDeclaration:
    modifiers, annotations = _modifiers(node)
    declarators = []
    for declarator in node.children_by_field_name("declarator"):
        value = declarator.child_by_field_name("value")
        declarators.append(
            VariableDeclarator(
                name=_text(declarator.child_by_field_name("name")),
                initializer=_squash(_text(value)) if value is not None else None,
                dimensions=_dimensions_of(declarator),
            )
        )
    field_type = _type(node.child_by_field_name("type"))
    if len(declarators) == 1 and declarators[0].dimensions:
        field_type = _with_dimensions(field_type, declarators[0].dimensions)
        declarators[0] = replace(declarators[0], dimensions=0)
    return FieldDeclaration(
        type=field_type,
        declarators=tuple(declarators),
        modifiers=modifiers,
        annotations=annotations,
        javadoc=javadoc,
    )


def _method(node: Node, javadoc: str | None) -> MethodDeclaration:
    modifiers, annotations = _modifiers(node)
    return MethodDeclaration(
        name=_name_of(node),
        return_type=_with_dimensions(_type(node.child_by_field_name("type")), _dimensions_of(node)),
        parameters=_parameters(node),
        type_parameters=_type_parameters(node),
        throws=_throws(node),
        modifiers=modifiers,
        annotations=annotations,
        javadoc=javadoc,
    )


def _constructor(node: Node, javadoc: str | None) -> ConstructorDeclaration:
    modifiers, annotations = _modifiers(node)
    return ConstructorDeclaration(
        name=_name_of(node),
        parameters=_parameters(node),
        type_parameters=_type_parameters(node),
        throws=_throws(node),
        modifiers=modifiers,
        annotations=annotations,
        javadoc=javadoc,
    )


def _enum_constant(node: Node, javadoc: str | None) -> EnumConstant:
    _, annotations = _modifiers(node)
    return EnumConstant(
        name=_name_of(node),
        arguments=tuple(_squash(_text(argument)) for argument in _named(node.child_by_field_name("arguments"))),
        annotations=annotations,
        javadoc=javadoc,
    )


def _annotation_member(node: Node, javadoc: str | None) -> AnnotationMember:
    modifiers, annotations = _modifiers(node)
    default = node.child_by_field_name("value")
    return AnnotationMember(
        name=_name_of(node),
        type=_with_dimensions(_type(node.child_by_field_name("type")), _dimensions_of(node)),
        default=_squash(_text(default)) if default is not None else None,
        modifiers=modifiers,
        annotations=annotations,
        javadoc=javadoc,
    )


def _parameters(node: Node) -> tuple[Parameter, ...]:
    parameters: list[Parameter] = []
    for child in _named(node.child_by_field_name("parameters")):
        if child.type == "formal_parameter":
            parameters.append(
                Parameter(
                    type=_with_dimensions(_type(child.child_by_field_name("type")), _dimensions_of(child)),
                    name=_text(child.child_by_field_name("name")),
                )
            )
        elif child.type == "spread_parameter":
            parts = [part for part in _named(child) if part.type != "modifiers" and part.type not in _ANNOTATION_TYPES]
            declarator = _child_of_type(child, "variable_declarator")
            if declarator is not None:
                name = _text(declarator.child_by_field_name("name"))
                dimensions = _dimensions_of(declarator)
            else:
                name, dimensions = _text(parts[-1]), 0
            parameters.append(Parameter(type=_with_dimensions(_type(parts[0]), dimensions), name=name, varargs=True))
    return tuple(parameters)


def _type_parameters(node: Node) -> tuple[TypeParameter, ...]:
    type_parameters: list[TypeParameter] = []
    container = _field_or_child(node, "type_parameters", "type_parameters")
    for child in _named(container):
        if child.type != "type_parameter":
            continue
        bound = _child_of_type(child, "type_bound")
        type_parameters.append(
            TypeParameter(
                name=_text(_child_of_type(child, "type_identifier", "identifier")),
                bounds=tuple(_type(part) for part in _named(bound)),
            )
        )
    return tuple(type_parameters)


def _throws(node: Node) -> tuple[TypeRef, ...]:
    return tuple(_type(child) for child in _named(_child_of_type(node, "throws")) if child.type not in _ANNOTATION_TYPES)


def _type_list(node: Node | None) -> tuple[TypeRef, ...]:
    if node is None:
        return ()
    type_list = _child_of_type(node, "type_list")
    container = type_list if type_list is not None else node
    return tuple(_type(child) for child in _named(container))


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


def _type(node: Node | None) -> TypeRef:
    if node is None:
        return OpaqueType("")
    kind = node.type
    if kind in _PRIMITIVE_TYPES:
        return PrimitiveType(_text(node))
    if kind == "array_type":
        return _with_dimensions(_type(node.child_by_field_name("element")), _dimensions_of(node))
    if kind == "type_identifier":
        return ClassType(_text(node))
    if kind == "scoped_type_identifier":
        parts = [child for child in _named(node) if child.type not in _ANNOTATION_TYPES]
        scope = _type(parts[0])
        if isinstance(scope, ClassType) and len(parts) > 1:
            return ClassType(name=_text(parts[-1]), scope=scope)
    if kind == "generic_type":
        parts = _named(node)
        base = _type(parts[0]) if parts else None
        arguments = _child_of_type(node, "type_arguments")
        if isinstance(base, ClassType) and arguments is not None:
            return base.with_type_arguments(tuple(_type(argument) for argument in _named(arguments)))
    return OpaqueType(_squash(_text(node)))


def _dimensions_of(node: Node) -> int:
    """Number of `[]` pairs in the dimensions field of a node."""
    return _text(node.child_by_field_name("dimensions")).count("[")


def _with_dimensions(type_ref: TypeRef, dimensions: int) -> TypeRef:
    for _ in range(dimensions):
        type_ref = ArrayType(type_ref)
    return type_ref
