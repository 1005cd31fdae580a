"""Public API extraction: indexing pass, type walker and the driver."""

from java_apiview.analyser.analyser import Analyser, ScanUnit
from java_apiview.analyser.declarations import DeclarationRenderer
from java_apiview.analyser.indexer import index_units
from java_apiview.analyser.type_walker import TypeWalker

__all__ = [
    "Analyser",
    "DeclarationRenderer",
    "ScanUnit",
    "TypeWalker",
    "index_units",
]
