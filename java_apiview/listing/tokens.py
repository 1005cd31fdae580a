"""Token model of the API listing.

Tokens are the canonical product of an analysis run. The consumer is
position-sensitive: layout is conveyed only through explicit WHITESPACE and
NEW_LINE tokens.
"""

from enum import Enum, StrEnum

from pydantic import BaseModel, ConfigDict


class TokenKind(StrEnum):
    """Classification of an emitted token."""

    KEYWORD = "KEYWORD"
    TYPE_NAME = "TYPE_NAME"
    MEMBER_NAME = "MEMBER_NAME"
    TEXT = "TEXT"
    PUNCTUATION = "PUNCTUATION"
    WHITESPACE = "WHITESPACE"
    NEW_LINE = "NEW_LINE"
    COMMENT = "COMMENT"


class TokenModifier(Enum):
    """Layout sugar expanded around a token at emit time."""

    NOTHING = "nothing"
    SPACE = "space"
    NEWLINE = "newline"
    INDENT = "indent"


class Token(BaseModel):
    """A single classified token.

    definition_id marks the anchor of a declaration; navigate_to_id points a
    TYPE_NAME at the definition_id of the type it names.
    """

    kind: TokenKind
    text: str
    definition_id: str | None = None
    navigate_to_id: str | None = None

    model_config = ConfigDict(frozen=True)


__all__ = ["Token", "TokenKind", "TokenModifier"]
