"""Driver of the public API extraction.

Runs two passes over the input: every compilation unit is parsed and indexed
first, then packages are rendered in ascending order, each with its units
sorted by primary type name.
"""

from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from java_apiview.analyser.declarations import javadoc_lines
from java_apiview.analyser.ids import make_id
from java_apiview.analyser.indexer import index_units
from java_apiview.analyser.type_printer import punctuation
from java_apiview.analyser.type_walker import TypeWalker
from java_apiview.exceptions import ApiViewError
from java_apiview.listing import ROOT_PACKAGE_DISPLAY_NAME, APIListing, Token, TokenKind, TokenModifier
from java_apiview.logging import get_logger
from java_apiview.settings import Settings
from java_apiview.settings import settings as default_settings
from java_apiview.syntax.nodes import CompilationUnit
from java_apiview.syntax.parser import JavaSourceParser

logger = get_logger(__name__)

PACKAGE_INFO_STEM = "package-info"


@dataclass(frozen=True)
class ScanUnit:
    """A parsed compilation unit waiting to be rendered."""

    compilation_unit: CompilationUnit
    source_path: Path
    primary_type_name: str
    package_name: str


class Analyser:
    """Turns a set of Java source files into an APIListing.

    Args:
        listing: Sink to fill; a fresh APIListing when omitted.
        settings: Run configuration; the module-level settings when omitted.
        parser: Source parser; each Analyser gets its own by default.

    Example:
        >>> listing = Analyser().analyse(sorted(Path("src").rglob("*.java")))
        >>> print(listing.to_text())
    """

    def __init__(
        self,
        listing: APIListing | None = None,
        settings: Settings | None = None,
        parser: JavaSourceParser | None = None,
    ):
        self.listing = listing if listing is not None else APIListing()
        self.settings = settings or default_settings
        self.parser = parser or JavaSourceParser()
        self.package_docs: dict[str, str] = {}
        self._has_run = False

    def filter_paths(self, paths: Iterable[Path]) -> list[Path]:
        """Drop directories, non-source files and private sub-package paths."""
        return [
            path
            for path in paths
            if not path.is_dir()
            and self.settings.excluded_path_marker not in str(path)
            and path.name.endswith(self.settings.source_suffix)
        ]

    def analyse(self, paths: Iterable[Path | str]) -> APIListing:
        """Parse, index and render every eligible file.

        Files that cannot be read or parsed are logged and left out; the run
        itself never fails on them. Each call renders into an empty listing:
        a second call on the same Analyser starts a new APIListing.
        """
        if self._has_run:
            logger.debug("Listing already filled by an earlier run, starting a new one")
            self.listing = APIListing()
        self._has_run = True
        self.package_docs = {}

        candidates = [Path(path) for path in paths]
        selected = self.filter_paths(candidates)

        units: list[ScanUnit] = []
        for path in selected:
            unit = self._scan(path)
            if unit is not None:
                units.append(unit)

        index_units(self.listing, (unit.compilation_unit for unit in units), self.settings)

        by_package: dict[str, list[ScanUnit]] = defaultdict(list)
        for unit in units:
            by_package[unit.package_name].append(unit)
        packages = sorted(set(by_package) | set(self.package_docs))

        walker = TypeWalker(self.listing, self.settings)
        for package in packages:
            self._render_package(walker, package, by_package.get(package, []))

        logger.info(
            "Analysed %d of %d files: %d units in %d packages, %d tokens",
            len(selected),
            len(candidates),
            len(units),
            len(packages),
            len(self.listing.tokens),
        )
        return self.listing

    def _scan(self, path: Path) -> ScanUnit | None:
        try:
            compilation_unit = self.parser.parse_file(path)
        except ApiViewError as e:
            logger.error("Skipping %s: %s", path, e)
            return None

        if path.stem == PACKAGE_INFO_STEM:
            if compilation_unit.javadoc is not None:
                self.package_docs[compilation_unit.package_name] = compilation_unit.javadoc
            return None

        return ScanUnit(
            compilation_unit=compilation_unit,
            source_path=path,
            primary_type_name=path.stem,
            package_name=compilation_unit.package_name,
        )

    def _render_package(self, walker: TypeWalker, package: str, units: list[ScanUnit]) -> None:
        listing = self.listing
        if package in self.package_docs:
            walker.renderer.comment_lines(javadoc_lines(self.package_docs[package]))

        listing.emit(Token(kind=TokenKind.KEYWORD, text="package"), TokenModifier.SPACE)
        if package:
            package_id = make_id(package)
            package_token = Token(kind=TokenKind.TYPE_NAME, text=package, definition_id=package_id, navigate_to_id=package_id)
        else:
            package_token = Token(kind=TokenKind.TEXT, text=ROOT_PACKAGE_DISPLAY_NAME)
        listing.emit(package_token, TokenModifier.SPACE)
        listing.emit(punctuation("{"), TokenModifier.NEWLINE)

        listing.indent()
        for unit in sorted(units, key=lambda unit: (unit.primary_type_name, str(unit.source_path))):
            walker.walk_unit(unit.compilation_unit)
        listing.unindent()

        listing.emit(punctuation("}"), TokenModifier.NEWLINE)
