"""Token stream, navigation tree and the APIListing sink that collects them."""

from java_apiview.listing.api_listing import INDENT_WIDTH, ROOT_PACKAGE_DISPLAY_NAME, APIListing
from java_apiview.listing.navigation import ChildItem, TypeKind
from java_apiview.listing.tokens import Token, TokenKind, TokenModifier

__all__ = [
    "APIListing",
    "ChildItem",
    "INDENT_WIDTH",
    "ROOT_PACKAGE_DISPLAY_NAME",
    "Token",
    "TokenKind",
    "TokenModifier",
    "TypeKind",
]
