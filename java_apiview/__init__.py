"""Java APIView - public API listings for Java source trees.

Parses Java compilation units and renders only their public API surface as a
linear stream of classified, cross-linked tokens, ready for a listing viewer.

Core Capabilities:
    - **Indexing**: Every public type is indexed before rendering, so type
      names anywhere in the listing link to their declaration
    - **Rendering**: Visibility filtering, stable member ordering, service
      method grouping and nested generic printing
    - **Navigation**: A package / type tree mirroring the declarations
    - **Output**: JSON or plain text through the ``java-apiview`` command

Quick Start:
    >>> from pathlib import Path
    >>> from java_apiview import Analyser
    >>>
    >>> listing = Analyser().analyse(sorted(Path("src/main/java").rglob("*.java")))
    >>> print(listing.to_text())

Environment Variables:
    - JAVA_APIVIEW_SHOW_JAVADOC: Emit declaration javadoc as comments
    - JAVA_APIVIEW_LOG_LEVEL: Level of the java_apiview loggers
    - JAVA_APIVIEW_LOGGING_CONFIG: Path to a YAML logging configuration
"""

from .analyser import Analyser, ScanUnit
from .exceptions import ApiViewError, JavaSyntaxError, SourceReadError
from .listing import APIListing, ChildItem, Token, TokenKind, TokenModifier, TypeKind
from .logging import get_logger, setup_logging
from .settings import Settings, settings
from .syntax import JavaSourceParser

__version__ = "0.1.0"

__all__ = [
    "APIListing",
    "Analyser",
    "ApiViewError",
    "ChildItem",
    "JavaSourceParser",
    "JavaSyntaxError",
    "ScanUnit",
    "Settings",
    "SourceReadError",
    "Token",
    "TokenKind",
    "TokenModifier",
    "TypeKind",
    "get_logger",
    "settings",
    "setup_logging",
]
