"""Type walker: renders whole type declarations and module descriptors."""

from java_apiview.analyser.declarations import DeclarationRenderer
from java_apiview.analyser.ids import MODULE_INFO_ID, make_id, module_directive_id, qualify
from java_apiview.analyser.type_printer import print_type_list, punctuation
from java_apiview.listing import APIListing, ChildItem, Token, TokenKind, TokenModifier, TypeKind
from java_apiview.logging import get_logger
from java_apiview.settings import Settings
from java_apiview.syntax.nodes import (
    CompilationUnit,
    DeclarationKind,
    ModuleDeclaration,
    ModuleDirective,
    TypeDeclaration,
    UnsupportedDeclaration,
    is_public_api,
)

logger = get_logger(__name__)

NAVIGATION_KINDS: dict[DeclarationKind, TypeKind] = {
    DeclarationKind.CLASS: TypeKind.CLASS,
    DeclarationKind.INTERFACE: TypeKind.INTERFACE,
    DeclarationKind.ENUM: TypeKind.ENUM,
    DeclarationKind.ANNOTATION: TypeKind.INTERFACE,
}


class TypeWalker:
    """Walks the declarations of compilation units into one listing.

    Every indent() issued while walking a declaration is matched by an
    unindent() before the walk of that declaration returns.
    """

    def __init__(self, listing: APIListing, settings: Settings):
        self.listing = listing
        self.settings = settings
        self.renderer = DeclarationRenderer(listing, settings)

    def walk_unit(self, unit: CompilationUnit) -> None:
        if unit.module is not None:
            self.walk_module(unit.module)
        for declaration in unit.types:
            self.walk_type(declaration, unit.package_name)

    def walk_type(
        self,
        declaration: TypeDeclaration | UnsupportedDeclaration,
        package: str,
        scope: str | None = None,
        enclosing: TypeDeclaration | None = None,
        parent: ChildItem | None = None,
    ) -> None:
        """Render one type and, recursively, its public nested types.

        Args:
            declaration: The type to render.
            package: Package of the compilation unit.
            scope: Qualified name of the enclosing type; the package for top-level types.
            enclosing: Enclosing type declaration, if nested.
            parent: Navigation item of the enclosing type, if nested.
        """
        if isinstance(declaration, UnsupportedDeclaration):
            logger.warning(
                "Skipping unsupported declaration %s %s at line %d", declaration.node_type, declaration.name, declaration.line
            )
            return
        if not is_public_api(declaration, enclosing):
            return

        listing = self.listing
        renderer = self.renderer
        fqn = qualify(package if scope is None else scope, declaration.name)
        type_id = make_id(fqn)

        renderer.javadoc(declaration.javadoc)
        if declaration.kind is DeclarationKind.ANNOTATION:
            for annotation in declaration.annotations:
                listing.emit(
                    Token(kind=TokenKind.KEYWORD, text=annotation.text), TokenModifier.NEWLINE, prefix=TokenModifier.INDENT
                )
        else:
            renderer.type_annotations(declaration.annotations)

        listing.emit_indent()
        renderer.modifiers(declaration.modifiers)

        item = ChildItem(id=type_id, display_name=declaration.name, kind=NAVIGATION_KINDS[declaration.kind])
        if parent is None:
            listing.add_child_item(item, package=package)
        else:
            parent.add_child_item(item)

        if declaration.kind is DeclarationKind.ANNOTATION:
            listing.emit(Token(kind=TokenKind.KEYWORD, text="@"))
            listing.emit(Token(kind=TokenKind.KEYWORD, text="interface"), TokenModifier.SPACE)
        else:
            listing.emit(Token(kind=TokenKind.KEYWORD, text=declaration.kind.value), TokenModifier.SPACE)
        listing.emit(Token(kind=TokenKind.TYPE_NAME, text=declaration.name, definition_id=type_id))

        renderer.type_parameters(declaration.type_parameters)
        if declaration.extends:
            listing.emit(Token(kind=TokenKind.KEYWORD, text="extends"), TokenModifier.SPACE, prefix=TokenModifier.SPACE)
            print_type_list(listing, declaration.extends)
        if declaration.implements:
            listing.emit(Token(kind=TokenKind.KEYWORD, text="implements"), TokenModifier.SPACE, prefix=TokenModifier.SPACE)
            print_type_list(listing, declaration.implements)
        listing.emit(punctuation("{"), TokenModifier.NEWLINE, prefix=TokenModifier.SPACE)

        renderer.enum_constants(declaration, fqn)
        renderer.annotation_members(declaration, fqn)
        renderer.fields(declaration, fqn)
        renderer.constructors(declaration, fqn)
        renderer.methods(declaration, fqn)

        for nested in declaration.nested_types:
            listing.indent()
            self.walk_type(nested, package, fqn, declaration, item)
            listing.unindent()

        listing.emit(punctuation("}"), TokenModifier.NEWLINE, prefix=TokenModifier.INDENT)

    # ------------------------------------------------------------------
    # Module descriptors
    # ------------------------------------------------------------------

    def walk_module(self, module: ModuleDeclaration) -> None:
        listing = self.listing
        listing.emit_indent()
        if module.is_open:
            listing.emit(Token(kind=TokenKind.KEYWORD, text="open"), TokenModifier.SPACE)
        listing.emit(Token(kind=TokenKind.KEYWORD, text="module"), TokenModifier.SPACE)
        listing.emit(Token(kind=TokenKind.TYPE_NAME, text=module.name, definition_id=MODULE_INFO_ID), TokenModifier.SPACE)
        listing.emit(punctuation("{"), TokenModifier.NEWLINE)

        for directive in module.directives:
            listing.indent()
            listing.emit_indent()
            self._directive(directive)
            listing.emit(punctuation(";"), TokenModifier.NEWLINE)
            listing.unindent()

        listing.emit(punctuation("}"), TokenModifier.NEWLINE, prefix=TokenModifier.INDENT)

    def _directive(self, directive: ModuleDirective) -> None:
        listing = self.listing
        listing.emit(Token(kind=TokenKind.KEYWORD, text=directive.keyword), TokenModifier.SPACE)
        if directive.keyword == "requires":
            for modifier in directive.modifiers:
                listing.emit(Token(kind=TokenKind.KEYWORD, text=modifier), TokenModifier.SPACE)
        listing.emit(
            Token(kind=TokenKind.TYPE_NAME, text=directive.name, definition_id=module_directive_id(directive.name))
        )
        if not directive.targets:
            return
        keyword = "with" if directive.keyword == "provides" else "to"
        listing.emit(Token(kind=TokenKind.KEYWORD, text=keyword), TokenModifier.SPACE, prefix=TokenModifier.SPACE)
        listing.emit_separated(
            directive.targets, lambda target: listing.emit(Token(kind=TokenKind.TYPE_NAME, text=target))
        )
