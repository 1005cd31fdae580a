"""Type printer: emits punctuation-correct tokens for a type reference.

Class types are linked by the listing itself: a bare TYPE_NAME whose text is a
known type gets its navigate_to_id at emit time.
"""

from java_apiview.listing import APIListing, Token, TokenKind
from java_apiview.syntax.nodes import ArrayType, ClassType, OpaqueType, PrimitiveType, TypeRef


def punctuation(text: str) -> Token:
    return Token(kind=TokenKind.PUNCTUATION, text=text)


def print_type(listing: APIListing, type_ref: TypeRef) -> None:
    """Emit tokens for one type reference.

    Primitives and unparsed shapes (wildcards, unions, intersections) are a
    single TYPE_NAME. Arrays recurse on the component and close with `[]`.
    Qualified names put `.` between segments, and type arguments are wrapped
    in `<` `>` with `, ` between them.
    """
    if isinstance(type_ref, PrimitiveType):
        listing.emit(Token(kind=TokenKind.TYPE_NAME, text=type_ref.name))
    elif isinstance(type_ref, ArrayType):
        print_type(listing, type_ref.component)
        listing.emit(punctuation("[]"))
    elif isinstance(type_ref, ClassType):
        _print_class_type(listing, type_ref)
    elif isinstance(type_ref, OpaqueType):
        listing.emit(Token(kind=TokenKind.TYPE_NAME, text=type_ref.text))
    else:
        raise TypeError(f"Unknown type reference: {type_ref!r}")


def _print_class_type(listing: APIListing, type_ref: ClassType) -> None:
    if type_ref.scope is not None:
        _print_class_type(listing, type_ref.scope)
        listing.emit(punctuation("."))
    listing.emit(Token(kind=TokenKind.TYPE_NAME, text=type_ref.name))
    if type_ref.type_arguments is None:
        return
    listing.emit(punctuation("<"))
    listing.emit_separated(type_ref.type_arguments, lambda argument: print_type(listing, argument))
    listing.emit(punctuation(">"))


def print_type_list(listing: APIListing, type_refs: tuple[TypeRef, ...]) -> None:
    """Emit types separated by `, `."""
    listing.emit_separated(type_refs, lambda type_ref: print_type(listing, type_ref))


__all__ = ["print_type", "print_type_list", "punctuation"]
