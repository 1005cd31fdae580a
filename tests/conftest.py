"""Common test fixtures for Java APIView tests."""

from pathlib import Path
from typing import Callable

import pytest

from java_apiview.analyser import Analyser
from java_apiview.listing import APIListing
from java_apiview.settings import Settings
from java_apiview.syntax import JavaSourceParser


@pytest.fixture(scope="session")
def java_parser() -> JavaSourceParser:
    """One parser for the whole session; parsing keeps no state between calls."""
    return JavaSourceParser()


@pytest.fixture
def write_java(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a source file below tmp_path/src and return its path."""

    def write(relative_path: str, source: str) -> Path:
        path = tmp_path / "src" / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, encoding="utf-8")
        return path

    return write


@pytest.fixture
def analyse(write_java: Callable[[str, str], Path], java_parser: JavaSourceParser) -> Callable[..., APIListing]:
    """Write {relative_path: source} files and run a full analysis over them.

    Keyword arguments override Settings fields for the run.
    """

    def run(sources: dict[str, str], **overrides) -> APIListing:
        paths = [write_java(relative_path, source) for relative_path, source in sources.items()]
        return Analyser(settings=Settings(**overrides), parser=java_parser).analyse(paths)

    return run
