"""Declaration renderer.

Renders the members of one type declaration (enum constants, annotation
members, fields, constructors and methods) together with the pieces they
share: javadoc, annotations, modifiers, type parameters, parameters and the
throws clause. Type headers and nesting live in the type walker.
"""

import html
from typing import Iterator

from java_apiview.analyser.ids import callable_path, make_id, qualify
from java_apiview.analyser.ordering import group_methods, sort_callables
from java_apiview.analyser.type_printer import print_type, punctuation
from java_apiview.listing import APIListing, Token, TokenKind, TokenModifier
from java_apiview.settings import Settings
from java_apiview.syntax.nodes import (
    Annotation,
    AnnotationValue,
    ArrayValue,
    CallableDeclaration,
    ClassLiteral,
    ClassType,
    DeclarationKind,
    FieldDeclaration,
    MethodDeclaration,
    Parameter,
    TypeDeclaration,
    TypeParameter,
    TypeRef,
    VariableDeclarator,
    find_annotation,
    is_member_visible,
    is_private_or_package_private,
)

NO_PUBLIC_CONSTRUCTORS_COMMENT = (
    "// This class does not have any public constructors, and is not able to be instantiated using 'new'."
)


def javadoc_lines(javadoc: str) -> list[str]:
    """Text lines of a javadoc comment without the comment delimiters.

    Leading `*` gutters are removed and blank lines at either end dropped.
    """
    body = javadoc.strip().removeprefix("/**").removesuffix("*/")
    lines = []
    for line in body.splitlines():
        line = line.strip()
        if line.startswith("*"):
            line = line[1:].removeprefix(" ")
        lines.append(line.rstrip())
    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()
    return lines


class DeclarationRenderer:
    """Emits declaration signatures into an APIListing."""

    def __init__(self, listing: APIListing, settings: Settings):
        self.listing = listing
        self.settings = settings

    # ------------------------------------------------------------------
    # Shared pieces
    # ------------------------------------------------------------------

    def comment_lines(self, lines: list[str]) -> None:
        """One indented, HTML-escaped COMMENT per line."""
        for line in lines:
            self.listing.emit(
                Token(kind=TokenKind.COMMENT, text=html.escape(line)), TokenModifier.NEWLINE, prefix=TokenModifier.INDENT
            )

    def javadoc(self, javadoc: str | None) -> None:
        if javadoc is None or not self.settings.show_javadoc:
            return
        self.comment_lines(javadoc_lines(javadoc))

    def _allowed_annotations(self, annotations: tuple[Annotation, ...]) -> Iterator[Annotation]:
        for name in self.settings.annotation_allowlist:
            annotation = find_annotation(annotations, name)
            if annotation is not None:
                yield annotation

    def type_annotations(self, annotations: tuple[Annotation, ...]) -> None:
        """Allow-listed annotations, one per line, with their name=value pairs."""
        for annotation in self._allowed_annotations(annotations):
            self.listing.emit(Token(kind=TokenKind.TYPE_NAME, text=f"@{annotation.name}"), prefix=TokenModifier.INDENT)
            if annotation.pairs:
                self._annotation_properties(annotation)
            self.listing.emit_newline()

    def member_annotations(self, annotations: tuple[Annotation, ...]) -> None:
        """Allow-listed annotations inline, each followed by a space."""
        for annotation in self._allowed_annotations(annotations):
            self.listing.emit(Token(kind=TokenKind.TYPE_NAME, text=f"@{annotation.name}"), TokenModifier.SPACE)

    def _annotation_properties(self, annotation: Annotation) -> None:
        self.listing.emit(punctuation("("))
        self.listing.emit_separated(annotation.pairs, self._annotation_pair)
        self.listing.emit(punctuation(")"))

    def _annotation_pair(self, pair: tuple[str, AnnotationValue]) -> None:
        name, value = pair
        self.listing.emit(Token(kind=TokenKind.TEXT, text=name))
        self.listing.emit(punctuation("="), TokenModifier.SPACE, prefix=TokenModifier.SPACE)
        self.annotation_value(value)

    def annotation_value(self, value: AnnotationValue) -> None:
        """Class literals of known types become links, arrays recurse, anything else is text."""
        if isinstance(value, ClassLiteral):
            definition_id = self.listing.known_types.get(value.type_name)
            if definition_id is not None:
                self.listing.emit(Token(kind=TokenKind.TYPE_NAME, text=value.type_name, navigate_to_id=definition_id))
                return
        elif isinstance(value, ArrayValue):
            self.listing.emit(punctuation("{"), TokenModifier.SPACE)
            self.listing.emit_separated(value.elements, self.annotation_value)
            self.listing.emit(punctuation("}"), prefix=TokenModifier.SPACE)
            return
        self.listing.emit(Token(kind=TokenKind.TEXT, text=value.text))

    def modifiers(self, modifiers: tuple[str, ...]) -> None:
        for modifier in modifiers:
            self.listing.emit(Token(kind=TokenKind.KEYWORD, text=modifier), TokenModifier.SPACE)

    def type_parameters(self, type_parameters: tuple[TypeParameter, ...]) -> None:
        """`<T extends A & B, V>`; nothing when the list is empty."""
        if not type_parameters:
            return
        self.listing.emit(punctuation("<"))
        self.listing.emit_separated(type_parameters, self._type_parameter)
        self.listing.emit(punctuation(">"))

    def _type_parameter(self, type_parameter: TypeParameter) -> None:
        self.listing.emit(Token(kind=TokenKind.TYPE_NAME, text=type_parameter.name))
        if not type_parameter.bounds:
            return
        self.listing.emit(Token(kind=TokenKind.KEYWORD, text="extends"), TokenModifier.SPACE, prefix=TokenModifier.SPACE)
        for i, bound in enumerate(type_parameter.bounds):
            if i:
                self.listing.emit(punctuation("&"), TokenModifier.SPACE, prefix=TokenModifier.SPACE)
            print_type(self.listing, bound)

    def parameters(self, callable_id: str, parameters: tuple[Parameter, ...]) -> None:
        self.listing.emit(punctuation("("))
        self.listing.emit_separated(parameters, lambda parameter: self._parameter(callable_id, parameter))
        self.listing.emit(punctuation(")"))

    def _parameter(self, callable_id: str, parameter: Parameter) -> None:
        print_type(self.listing, parameter.type)
        if parameter.varargs:
            self.listing.emit(punctuation("..."))
        self.listing.emit_space()
        self.listing.emit(
            Token(kind=TokenKind.TEXT, text=parameter.name, definition_id=make_id(f"{callable_id}.{parameter.name}"))
        )

    def throws(self, throws: tuple[TypeRef, ...]) -> None:
        if not throws:
            return
        self.listing.emit(Token(kind=TokenKind.KEYWORD, text="throws"), TokenModifier.SPACE, prefix=TokenModifier.SPACE)
        self.listing.emit_separated(throws, self._thrown_type)

    def _thrown_type(self, type_ref: TypeRef) -> None:
        # Names not declared in this run may still be linked through the package they were imported from.
        if isinstance(type_ref, ClassType) and type_ref.scope is None and type_ref.type_arguments is None:
            name = type_ref.name
            if name not in self.listing.known_types and name not in self.listing.ambiguous_types:
                package = self.listing.package_of(name)
                if package is not None:
                    self.listing.emit(
                        Token(kind=TokenKind.TYPE_NAME, text=name, navigate_to_id=make_id(qualify(package, name)))
                    )
                    return
        print_type(self.listing, type_ref)

    # ------------------------------------------------------------------
    # Members
    # ------------------------------------------------------------------

    def enum_constants(self, owner: TypeDeclaration, fqn: str) -> None:
        """Constants in declaration order, `,` between them and `;` after the last."""
        if not owner.enum_constants:
            return
        self.listing.indent()
        last = len(owner.enum_constants) - 1
        for ordinal, constant in enumerate(owner.enum_constants):
            self.javadoc(constant.javadoc)
            self.listing.emit_indent()
            self.member_annotations(constant.annotations)
            self.listing.emit(
                Token(kind=TokenKind.MEMBER_NAME, text=constant.name, definition_id=make_id(f"{fqn}.{ordinal}"))
            )
            if constant.arguments:
                self.listing.emit(punctuation("("))
                self.listing.emit(Token(kind=TokenKind.TEXT, text=", ".join(constant.arguments)))
                self.listing.emit(punctuation(")"))
            self.listing.emit(punctuation("," if ordinal < last else ";"), TokenModifier.NEWLINE)
        self.listing.unindent()

    def annotation_members(self, owner: TypeDeclaration, fqn: str) -> None:
        """`type name() default value;` for each element of an @interface."""
        if not owner.annotation_members:
            return
        self.listing.indent()
        for member in owner.annotation_members:
            self.javadoc(member.javadoc)
            self.listing.emit_indent()
            self.member_annotations(member.annotations)
            print_type(self.listing, member.type)
            self.listing.emit_space()
            self.listing.emit(
                Token(kind=TokenKind.MEMBER_NAME, text=member.name, definition_id=make_id(f"{fqn}.{member.name}()"))
            )
            self.listing.emit(punctuation("("))
            self.listing.emit(punctuation(")"))
            if member.default is not None:
                self.listing.emit(Token(kind=TokenKind.KEYWORD, text="default"), TokenModifier.SPACE, prefix=TokenModifier.SPACE)
                self.listing.emit(Token(kind=TokenKind.TEXT, text=member.default))
            self.listing.emit(punctuation(";"), TokenModifier.NEWLINE)
        self.listing.unindent()

    def fields(self, owner: TypeDeclaration, fqn: str) -> None:
        visible = [field for field in owner.fields if is_member_visible(field.modifiers, owner)]
        if not visible:
            return
        self.listing.indent()
        for field in visible:
            self.field(field, fqn)
        self.listing.unindent()

    def field(self, field: FieldDeclaration, fqn: str) -> None:
        self.javadoc(field.javadoc)
        self.listing.emit_indent()
        self.member_annotations(field.annotations)
        self.modifiers(field.modifiers)
        print_type(self.listing, field.type)
        self.listing.emit_space()

        def emit_name(declarator: VariableDeclarator) -> None:
            name = declarator.name
            self.listing.emit(Token(kind=TokenKind.MEMBER_NAME, text=name, definition_id=make_id(f"{fqn}.{name}")))
            # Brackets after the name only reach here when they differ between declarators.
            for _ in range(declarator.dimensions):
                self.listing.emit(punctuation("[]"))

        if len(field.declarators) > 1:
            self.listing.emit_separated(field.declarators, emit_name)
        elif field.declarators:
            declarator = field.declarators[0]
            emit_name(declarator)
            if declarator.initializer is not None:
                self.listing.emit(punctuation("="), TokenModifier.SPACE, prefix=TokenModifier.SPACE)
                self.listing.emit(Token(kind=TokenKind.TEXT, text=declarator.initializer))
        self.listing.emit(punctuation(";"), TokenModifier.NEWLINE)

    def callable(self, declaration: CallableDeclaration, fqn: str) -> None:
        """One constructor or method signature on its own line."""
        self.javadoc(declaration.javadoc)
        self.listing.emit_indent()
        self.member_annotations(declaration.annotations)
        self.modifiers(declaration.modifiers)
        if declaration.type_parameters:
            self.type_parameters(declaration.type_parameters)
            self.listing.emit_space()
        if isinstance(declaration, MethodDeclaration):
            print_type(self.listing, declaration.return_type)
            self.listing.emit_space()
        callable_id = callable_path(fqn, declaration)
        self.listing.emit(Token(kind=TokenKind.MEMBER_NAME, text=declaration.name, definition_id=make_id(callable_id)))
        self.parameters(callable_id, declaration.parameters)
        self.throws(declaration.throws)
        self.listing.emit_newline()

    def constructors(self, owner: TypeDeclaration, fqn: str) -> None:
        """Visible constructors by parameter count.

        A class without constructors gets its implicit `public Name()`; a type
        whose constructors are all hidden gets an explanatory comment instead.
        """
        if not owner.constructors:
            if owner.kind is DeclarationKind.CLASS:
                self._default_constructor(owner, fqn)
            return
        self.listing.indent()
        if all(is_private_or_package_private(constructor.modifiers) for constructor in owner.constructors):
            self.listing.emit(
                Token(kind=TokenKind.COMMENT, text=NO_PUBLIC_CONSTRUCTORS_COMMENT),
                TokenModifier.NEWLINE,
                prefix=TokenModifier.INDENT,
            )
        else:
            visible = [constructor for constructor in owner.constructors if is_member_visible(constructor.modifiers, owner)]
            for constructor in sort_callables(visible):
                self.callable(constructor, fqn)
        self.listing.unindent()

    def _default_constructor(self, owner: TypeDeclaration, fqn: str) -> None:
        self.listing.indent()
        self.listing.emit(Token(kind=TokenKind.KEYWORD, text="public"), TokenModifier.SPACE, prefix=TokenModifier.INDENT)
        self.listing.emit(
            Token(kind=TokenKind.MEMBER_NAME, text=owner.name, definition_id=make_id(f"{fqn}.{owner.name}()"))
        )
        self.listing.emit(punctuation("("))
        self.listing.emit(punctuation(")"), TokenModifier.NEWLINE)
        self.listing.unindent()

    def methods(self, owner: TypeDeclaration, fqn: str) -> None:
        visible = [method for method in owner.methods if is_member_visible(method.modifiers, owner)]
        if not visible:
            return
        self.listing.indent()
        for group, methods in group_methods(owner, visible, self.settings):
            if group is not None:
                self.listing.emit(
                    Token(kind=TokenKind.COMMENT, text=f"// {group}:"), TokenModifier.NEWLINE, prefix=TokenModifier.INDENT
                )
            for method in methods:
                self.callable(method, fqn)
        self.listing.unindent()
