"""Syntax tree of a Java compilation unit, reduced to what the API listing needs.

Method bodies and initializer blocks are dropped at parse time. Type
references and declarations are small frozen dataclasses; consumers dispatch
on them with isinstance checks.
"""

from dataclasses import dataclass, replace
from enum import StrEnum
from pathlib import Path

ACCESS_MODIFIERS: frozenset[str] = frozenset({"public", "protected", "private"})


# ---------------------------------------------------------------------------
# Type references
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PrimitiveType:
    """Primitive type or void."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ArrayType:
    component: "TypeRef"

    def __str__(self) -> str:
        return f"{self.component}[]"


@dataclass(frozen=True)
class ClassType:
    """Class or interface type, optionally qualified and parameterised.

    type_arguments is None when no argument list was written, and an empty
    tuple for a diamond.
    """

    name: str
    scope: "ClassType | None" = None
    type_arguments: tuple["TypeRef", ...] | None = None

    def __str__(self) -> str:
        text = f"{self.scope}.{self.name}" if self.scope is not None else self.name
        if self.type_arguments is not None:
            text += "<" + ", ".join(str(argument) for argument in self.type_arguments) + ">"
        return text

    def with_type_arguments(self, type_arguments: tuple["TypeRef", ...]) -> "ClassType":
        return replace(self, type_arguments=type_arguments)


@dataclass(frozen=True)
class OpaqueType:
    """Wildcard, union, intersection or annotated type kept as normalised source text."""

    text: str

    def __str__(self) -> str:
        return self.text


TypeRef = PrimitiveType | ArrayType | ClassType | OpaqueType


# ---------------------------------------------------------------------------
# Annotations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ClassLiteral:
    """`Foo.class` used as an annotation value."""

    type_name: str
    text: str


@dataclass(frozen=True)
class ArrayValue:
    """`{a, b}` used as an annotation value."""

    elements: tuple["AnnotationValue", ...]
    text: str


@dataclass(frozen=True)
class ExpressionValue:
    text: str


AnnotationValue = ClassLiteral | ArrayValue | ExpressionValue


@dataclass(frozen=True)
class Annotation:
    """An annotation usage. pairs holds name=value arguments only."""

    name: str
    text: str
    pairs: tuple[tuple[str, AnnotationValue], ...] = ()

    @property
    def simple_name(self) -> str:
        return self.name.rsplit(".", 1)[-1]


def find_annotation(annotations: tuple[Annotation, ...], simple_name: str) -> Annotation | None:
    for annotation in annotations:
        if annotation.simple_name == simple_name:
            return annotation
    return None


# ---------------------------------------------------------------------------
# Members
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TypeParameter:
    name: str
    bounds: tuple[TypeRef, ...] = ()


@dataclass(frozen=True)
class Parameter:
    type: TypeRef
    name: str
    varargs: bool = False


@dataclass(frozen=True)
class VariableDeclarator:
    """One name of a field declaration.

    dimensions counts the `[]` pairs written after the name; they are folded
    into the field type when the declaration has a single declarator.
    """

    name: str
    initializer: str | None = None
    dimensions: int = 0


@dataclass(frozen=True)
class FieldDeclaration:
    type: TypeRef
    declarators: tuple[VariableDeclarator, ...]
    modifiers: tuple[str, ...] = ()
    annotations: tuple[Annotation, ...] = ()
    javadoc: str | None = None


@dataclass(frozen=True)
class MethodDeclaration:
    name: str
    return_type: TypeRef
    parameters: tuple[Parameter, ...] = ()
    type_parameters: tuple[TypeParameter, ...] = ()
    throws: tuple[TypeRef, ...] = ()
    modifiers: tuple[str, ...] = ()
    annotations: tuple[Annotation, ...] = ()
    javadoc: str | None = None


@dataclass(frozen=True)
class ConstructorDeclaration:
    name: str
    parameters: tuple[Parameter, ...] = ()
    type_parameters: tuple[TypeParameter, ...] = ()
    throws: tuple[TypeRef, ...] = ()
    modifiers: tuple[str, ...] = ()
    annotations: tuple[Annotation, ...] = ()
    javadoc: str | None = None


CallableDeclaration = MethodDeclaration | ConstructorDeclaration


@dataclass(frozen=True)
class EnumConstant:
    name: str
    arguments: tuple[str, ...] = ()
    annotations: tuple[Annotation, ...] = ()
    javadoc: str | None = None


@dataclass(frozen=True)
class AnnotationMember:
    """`type name() default value;` inside an @interface."""

    name: str
    type: TypeRef
    default: str | None = None
    modifiers: tuple[str, ...] = ()
    annotations: tuple[Annotation, ...] = ()
    javadoc: str | None = None


# ---------------------------------------------------------------------------
# Type declarations
# ---------------------------------------------------------------------------


class DeclarationKind(StrEnum):
    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    ANNOTATION = "annotation"


@dataclass(frozen=True)
class UnsupportedDeclaration:
    """A declaration shape the listing does not render (records, for instance)."""

    node_type: str
    name: str
    line: int
    modifiers: tuple[str, ...] = ()


@dataclass(frozen=True)
class TypeDeclaration:
    kind: DeclarationKind
    name: str
    modifiers: tuple[str, ...] = ()
    annotations: tuple[Annotation, ...] = ()
    javadoc: str | None = None
    type_parameters: tuple[TypeParameter, ...] = ()
    extends: tuple[TypeRef, ...] = ()
    implements: tuple[TypeRef, ...] = ()
    enum_constants: tuple[EnumConstant, ...] = ()
    annotation_members: tuple[AnnotationMember, ...] = ()
    fields: tuple[FieldDeclaration, ...] = ()
    constructors: tuple[ConstructorDeclaration, ...] = ()
    methods: tuple[MethodDeclaration, ...] = ()
    members: tuple["TypeDeclaration | UnsupportedDeclaration", ...] = ()

    @property
    def is_interface_like(self) -> bool:
        """Interfaces and @interfaces make their members implicitly public."""
        return self.kind in (DeclarationKind.INTERFACE, DeclarationKind.ANNOTATION)

    @property
    def nested_types(self) -> tuple["TypeDeclaration | UnsupportedDeclaration", ...]:
        """Nested classes, interfaces and enums, plus unsupported shapes to report."""
        return tuple(
            member
            for member in self.members
            if isinstance(member, UnsupportedDeclaration) or member.kind is not DeclarationKind.ANNOTATION
        )


# ---------------------------------------------------------------------------
# Compilation units
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ImportDeclaration:
    name: str
    is_static: bool = False
    is_asterisk: bool = False

    @property
    def qualifier(self) -> str | None:
        head, _, _ = self.name.rpartition(".")
        return head or None

    @property
    def identifier(self) -> str:
        return self.name.rpartition(".")[2]


@dataclass(frozen=True)
class ModuleDirective:
    """requires / exports / opens / uses / provides.

    targets holds the `to` modules of exports and opens, and the `with`
    implementations of provides.
    """

    keyword: str
    name: str
    modifiers: tuple[str, ...] = ()
    targets: tuple[str, ...] = ()


@dataclass(frozen=True)
class ModuleDeclaration:
    name: str
    directives: tuple[ModuleDirective, ...] = ()
    is_open: bool = False


@dataclass(frozen=True)
class CompilationUnit:
    path: Path | None = None
    package_name: str = ""
    imports: tuple[ImportDeclaration, ...] = ()
    types: tuple[TypeDeclaration | UnsupportedDeclaration, ...] = ()
    module: ModuleDeclaration | None = None
    javadoc: str | None = None
    """First javadoc comment of the file; the package doc of a package-info unit."""


# ---------------------------------------------------------------------------
# Visibility
# ---------------------------------------------------------------------------


def access_specifier(modifiers: tuple[str, ...]) -> str:
    """public, protected, private, or `package-private` when none is written."""
    for modifier in modifiers:
        if modifier in ACCESS_MODIFIERS:
            return modifier
    return "package-private"


def is_private_or_package_private(modifiers: tuple[str, ...]) -> bool:
    return access_specifier(modifiers) in ("private", "package-private")


def is_member_visible(modifiers: tuple[str, ...], owner: TypeDeclaration) -> bool:
    """Member visibility: interface members are public unless declared private."""
    if owner.is_interface_like:
        return "private" not in modifiers
    return not is_private_or_package_private(modifiers)


def is_public_api(
    declaration: TypeDeclaration | UnsupportedDeclaration,
    enclosing: TypeDeclaration | None = None,
) -> bool:
    """Whether a type is part of the public API surface.

    A type is public API when it is neither private nor package-private, or when
    it is nested inside an interface, where member types are always public.
    """
    if enclosing is not None and enclosing.kind is DeclarationKind.INTERFACE:
        return True
    return not is_private_or_package_private(declaration.modifiers)
