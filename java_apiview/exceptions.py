"""Exception hierarchy for Java APIView.

This module defines the exceptions raised while reading and parsing Java sources.
All exceptions inherit from ApiViewError, providing a consistent error handling interface.
The analyser catches them per file, so a failing file never aborts a whole run.
"""

from pathlib import Path


class ApiViewError(Exception):
    """Base exception for all Java APIView errors."""


class SourceReadError(ApiViewError):
    """Raised when a source file cannot be read or decoded."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


class JavaSyntaxError(ApiViewError):
    """Raised when the parser reports a syntax error in a compilation unit."""

    def __init__(self, path: Path | None, line: int, column: int):
        location = str(path) if path is not None else "<source>"
        super().__init__(f"Syntax error in {location} at line {line}, column {column}")
        self.path = path
        self.line = line
        self.column = column
