"""CLI for rendering the public API listing of Java sources."""

import argparse
import sys
from pathlib import Path

from java_apiview.analyser import Analyser
from java_apiview.logging import get_logger, setup_logging
from java_apiview.settings import settings

logger = get_logger(__name__)

OUTPUT_FORMATS: tuple[str, ...] = ("json", "text")
LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def collect_paths(inputs: list[Path], suffix: str) -> list[Path]:
    """Expand directories into their source files, in sorted order."""
    paths: list[Path] = []
    for path in inputs:
        if path.is_dir():
            paths.extend(sorted(p for p in path.rglob(f"*{suffix}") if p.is_file()))
        else:
            paths.append(path)
    return paths


def main(argv: list[str] | None = None) -> int:
    """Entry point for the java-apiview command."""
    parser = argparse.ArgumentParser(description="Render the public API of Java sources as a token listing")
    parser.add_argument("paths", nargs="+", type=Path, help="Java files or directories to scan")
    parser.add_argument("-o", "--output", type=Path, help="Write the listing to this file instead of stdout")
    parser.add_argument("--format", choices=OUTPUT_FORMATS, default="json", help="Output format (default: json)")
    parser.add_argument("--show-javadoc", action="store_true", help="Include declaration javadoc as comments")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Log level of the java_apiview loggers (default: $JAVA_APIVIEW_LOG_LEVEL or INFO)",
    )

    args = parser.parse_args(argv)
    setup_logging(level=args.log_level)

    run_settings = settings.model_copy(update={"show_javadoc": True}) if args.show_javadoc else settings
    analyser = Analyser(settings=run_settings)
    paths = analyser.filter_paths(collect_paths(args.paths, run_settings.source_suffix))
    if not paths:
        logger.error("No %s files to analyse", run_settings.source_suffix)
        return 1

    listing = analyser.analyse(paths)
    content = listing.to_json() if args.format == "json" else listing.to_text()

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(content, encoding="utf-8")
        logger.info("Listing written to %s", args.output)
    else:
        sys.stdout.write(content)
        if not content.endswith("\n"):
            sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
