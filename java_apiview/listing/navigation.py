"""Navigation tree mirroring the type-declaration hierarchy."""

from enum import StrEnum

from pydantic import BaseModel, Field


class TypeKind(StrEnum):
    """Kind of a navigation item."""

    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    UNKNOWN = "unknown"


class ChildItem(BaseModel):
    """Navigation node: a package, a type, or the module descriptor."""

    id: str
    display_name: str
    kind: TypeKind
    children: list["ChildItem"] = Field(default_factory=list)

    def add_child_item(self, item: "ChildItem") -> None:
        self.children.append(item)


__all__ = ["ChildItem", "TypeKind"]
