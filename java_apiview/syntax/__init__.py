"""Java syntax: the reduced syntax tree and the tree-sitter based parser."""

from java_apiview.syntax.nodes import CompilationUnit, DeclarationKind, TypeDeclaration
from java_apiview.syntax.parser import JavaSourceParser

__all__ = [
    "CompilationUnit",
    "DeclarationKind",
    "JavaSourceParser",
    "TypeDeclaration",
]
