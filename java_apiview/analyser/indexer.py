"""Indexing pass: builds the cross-link indexes before anything is rendered."""

from typing import Iterable

from java_apiview.analyser.ids import MODULE_INFO_ID, make_id, qualify
from java_apiview.listing import APIListing, ChildItem, TypeKind
from java_apiview.logging import get_logger
from java_apiview.settings import Settings
from java_apiview.syntax.nodes import (
    CompilationUnit,
    DeclarationKind,
    TypeDeclaration,
    UnsupportedDeclaration,
    is_public_api,
)

logger = get_logger(__name__)


def index_units(listing: APIListing, units: Iterable[CompilationUnit], settings: Settings) -> None:
    """Populate known_types and package_types from every compilation unit.

    Must run to completion before the first token is emitted.
    """
    for unit in units:
        index_unit(listing, unit)
    if settings.drop_ambiguous_links and listing.ambiguous_types:
        logger.info("Dropping links for ambiguous type names: %s", ", ".join(sorted(listing.ambiguous_types)))
        listing.drop_ambiguous_types()
    logger.debug("Indexed %d known types in %d packages", len(listing.known_types), len(listing.package_types))


def index_unit(listing: APIListing, unit: CompilationUnit) -> None:
    if unit.module is not None:
        listing.add_child_item(ChildItem(id=MODULE_INFO_ID, display_name=MODULE_INFO_ID, kind=TypeKind.CLASS))

    for declaration in unit.types:
        _index_type(listing, declaration, unit.package_name)

    # Imports hint at which package a simple name comes from; wildcard and static imports carry no type name.
    for import_declaration in unit.imports:
        if import_declaration.is_asterisk or import_declaration.is_static or import_declaration.qualifier is None:
            continue
        listing.add_package_type(import_declaration.qualifier, import_declaration.identifier)


def _index_type(
    listing: APIListing,
    declaration: TypeDeclaration | UnsupportedDeclaration,
    scope: str,
    enclosing: TypeDeclaration | None = None,
) -> None:
    if isinstance(declaration, UnsupportedDeclaration):
        logger.debug("Not indexing %s %s", declaration.node_type, declaration.name)
        return
    if not is_public_api(declaration, enclosing):
        return

    fqn = qualify(scope, declaration.name)
    listing.add_package_type(scope, declaration.name)
    listing.add_known_type(declaration.name, make_id(fqn))

    for member in declaration.members:
        if isinstance(member, TypeDeclaration) and member.kind is not DeclarationKind.ANNOTATION:
            _index_type(listing, member, fqn, declaration)
