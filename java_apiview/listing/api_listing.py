"""The API listing sink.

One APIListing is created per analysis run and filled monotonically: the
indexing pass populates known_types and package_types, then the rendering
pass appends tokens and navigation items.
"""

from typing import Any, Callable, Sequence

from pydantic import BaseModel, Field, PrivateAttr, field_serializer

from java_apiview.listing.navigation import ChildItem, TypeKind
from java_apiview.listing.tokens import Token, TokenKind, TokenModifier
from java_apiview.logging import get_logger

logger = get_logger(__name__)

INDENT_WIDTH = 4
ROOT_PACKAGE_DISPLAY_NAME = "<root package>"


class APIListing(BaseModel):
    """Ordered token buffer plus the indexes used to cross-link it.

    Attributes:
        tokens: Tokens in emission order.
        navigation: Root navigation items (packages and the module descriptor).
        known_types: Simple type name -> definition id of its declaration.
        package_types: Package (or enclosing type) name -> simple type names.
        ambiguous_types: Simple names declared by more than one public type.
    """

    tokens: list[Token] = Field(default_factory=list)
    navigation: list[ChildItem] = Field(default_factory=list)
    known_types: dict[str, str] = Field(default_factory=dict)
    package_types: dict[str, set[str]] = Field(default_factory=dict)
    ambiguous_types: set[str] = Field(default_factory=set)

    _indent: int = PrivateAttr(default=0)
    _definition_ids: dict[str, int] = PrivateAttr(default_factory=dict)
    _package_items: dict[str, ChildItem] = PrivateAttr(default_factory=dict)

    @field_serializer("package_types")
    def serialize_package_types(self, value: dict[str, set[str]]) -> dict[str, list[str]]:
        return {package: sorted(names) for package, names in sorted(value.items())}

    @field_serializer("ambiguous_types")
    def serialize_ambiguous_types(self, value: set[str]) -> list[str]:
        return sorted(value)

    # ------------------------------------------------------------------
    # Indentation
    # ------------------------------------------------------------------

    @property
    def indent_level(self) -> int:
        return self._indent

    def indent(self) -> None:
        self._indent += INDENT_WIDTH

    def unindent(self) -> None:
        self._indent = max(self._indent - INDENT_WIDTH, 0)

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------

    def emit(
        self,
        token: Token,
        suffix: TokenModifier = TokenModifier.NOTHING,
        *,
        prefix: TokenModifier = TokenModifier.NOTHING,
    ) -> None:
        """Append prefix layout, the token, then suffix layout.

        A TYPE_NAME without a navigate_to_id is linked here when its text is
        a known type. A definition_id already used earlier in the run gets a
        numeric suffix so anchors stay unique.
        """
        self._emit_modifier(prefix)
        if token.kind is TokenKind.TYPE_NAME and token.navigate_to_id is None and token.text in self.known_types:
            token = token.model_copy(update={"navigate_to_id": self.known_types[token.text]})
        if token.definition_id is not None:
            token = self._claim_definition_id(token)
        self.tokens.append(token)
        self._emit_modifier(suffix)

    def emit_indent(self) -> None:
        """Append a WHITESPACE token as wide as the current indent."""
        self.tokens.append(Token(kind=TokenKind.WHITESPACE, text=" " * self._indent))

    def emit_space(self) -> None:
        self.tokens.append(Token(kind=TokenKind.WHITESPACE, text=" "))

    def emit_newline(self) -> None:
        self.tokens.append(Token(kind=TokenKind.NEW_LINE, text=""))

    def emit_separated(self, items: Sequence[Any], emit_item: Callable[[Any], None], separator: str = ",") -> None:
        """Emit items with `separator` + SPACE between consecutive entries."""
        for i, item in enumerate(items):
            if i:
                self.emit(Token(kind=TokenKind.PUNCTUATION, text=separator), TokenModifier.SPACE)
            emit_item(item)

    def _emit_modifier(self, modifier: TokenModifier) -> None:
        if modifier is TokenModifier.SPACE:
            self.emit_space()
        elif modifier is TokenModifier.NEWLINE:
            self.emit_newline()
        elif modifier is TokenModifier.INDENT:
            self.emit_indent()

    def _claim_definition_id(self, token: Token) -> Token:
        definition_id = token.definition_id
        assert definition_id is not None
        seen = self._definition_ids.get(definition_id, 0)
        self._definition_ids[definition_id] = seen + 1
        if not seen:
            return token
        ordinal = seen + 1
        candidate = f"{definition_id}-{ordinal}"
        while candidate in self._definition_ids:
            ordinal += 1
            candidate = f"{definition_id}-{ordinal}"
        self._definition_ids[candidate] = 1
        logger.debug("Duplicate definition id %s renamed to %s", definition_id, candidate)
        return token.model_copy(update={"definition_id": candidate})

    # ------------------------------------------------------------------
    # Indexes
    # ------------------------------------------------------------------

    def add_known_type(self, name: str, definition_id: str) -> None:
        """Register a public type; a second declaration of the same simple name wins."""
        previous = self.known_types.get(name)
        if previous is not None and previous != definition_id:
            self.ambiguous_types.add(name)
            logger.warning("Type name %s is declared by both %s and %s", name, previous, definition_id)
        self.known_types[name] = definition_id

    def add_package_type(self, package: str, name: str) -> None:
        self.package_types.setdefault(package, set()).add(name)

    def drop_ambiguous_types(self) -> None:
        """Remove links for simple names that resolve to more than one declaration."""
        for name in self.ambiguous_types:
            self.known_types.pop(name, None)

    def package_of(self, name: str) -> str | None:
        """First package (in sorted order) that is known to contain `name`."""
        for package in sorted(self.package_types):
            if name in self.package_types[package]:
                return package
        return None

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def add_child_item(self, item: ChildItem, package: str | None = None) -> None:
        """Add a root navigation item, or nest it under its package item."""
        if package is None:
            self.navigation.append(item)
            return
        package_item = self._package_items.get(package)
        if package_item is None:
            display_name = package or ROOT_PACKAGE_DISPLAY_NAME
            package_item = ChildItem(id=display_name, display_name=display_name, kind=TypeKind.UNKNOWN)
            self._package_items[package] = package_item
            self.navigation.append(package_item)
        package_item.add_child_item(item)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def to_json(self) -> str:
        return self.model_dump_json(indent=2)

    def to_text(self) -> str:
        """Plain-text rendering: token texts concatenated, NEW_LINE as a line break."""
        return "".join("\n" if token.kind is TokenKind.NEW_LINE else token.text for token in self.tokens)


__all__ = ["APIListing", "INDENT_WIDTH", "ROOT_PACKAGE_DISPLAY_NAME"]
