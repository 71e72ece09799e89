"""
CLI main entry point.
"""

import argparse
import logging
import sys
from pathlib import Path

from ..config import Config, create_default_config, default_config_path, load_config
from ..errors import StorageUnavailableError
from ..schemas import LookupResult, LookupStatus
from ..services import LookupService, build_double_click_macro, open_lookup_result

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_INVALID_INPUT = 2


def setup_logging(verbose: bool = False, level: str = "INFO", log_file: Path | None = None) -> None:
    """Configure logging to the console and, optionally, a log file."""
    resolved_level = logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO)
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
        except OSError as e:
            print(f"⚠️  Cannot write log file {log_file}: {e}", file=sys.stderr)

    logging.basicConfig(
        level=resolved_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        handlers=handlers,
        force=True,
    )


def create_cli() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="article-locator",
        description="Find article PDFs by article number and print version",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: $ARTICLE_LOCATOR_CONFIG or config.yaml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # lookup command (spreadsheet cell values)
    lookup_parser = subparsers.add_parser(
        "lookup", help="Open the file(s) for free-form input such as 1234(056)"
    )
    lookup_parser.add_argument("text", type=str, help="Cell value, e.g. '1234(056)' or '1234 056'")
    lookup_parser.add_argument(
        "--no-open",
        action="store_true",
        help="Print matches without opening them",
    )

    # find command
    find_parser = subparsers.add_parser(
        "find", help="Open the file(s) for an explicit article and print version"
    )
    find_parser.add_argument("article", type=str, help="Article number (4-5 digits)")
    find_parser.add_argument("version", type=str, help="Print version (3 digits)")
    find_parser.add_argument(
        "--no-open",
        action="store_true",
        help="Print matches without opening them",
    )

    # rebuild command
    subparsers.add_parser("rebuild", help="Rescan the document root and rebuild the index")

    # status command
    subparsers.add_parser("status", help="Show index location and statistics")

    # macro command
    subparsers.add_parser("macro", help="Print the spreadsheet double-click macro")

    # init-config command
    init_parser = subparsers.add_parser("init-config", help="Write a default config file")
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing config file",
    )

    return parser


def _exit_code(result: LookupResult) -> int:
    if result.found:
        return EXIT_OK
    if result.status == LookupStatus.INVALID_INPUT:
        return EXIT_INVALID_INPUT
    return EXIT_NOT_FOUND


def _report(result: LookupResult, no_open: bool) -> int:
    """Print a lookup result and open its targets."""
    if result.status == LookupStatus.FOUND:
        for path in result.paths:
            print(f"  📄 {path}")
    elif result.status == LookupStatus.FOUND_DIRECTORY:
        print(f"  📁 {result.directory}")
        print(f"     ℹ️  {result.message}")
    elif result.status == LookupStatus.INVALID_INPUT:
        print(f"❌ Invalid input: {result.message}")
    else:
        print(f"❌ Nothing found: {result.message}")

    if result.found and not no_open:
        open_lookup_result(result)

    return _exit_code(result)


def cmd_lookup(config: Config, text: str, no_open: bool = False) -> int:
    """Resolve a raw cell value."""
    logger.info(f"Cell value: {text}")
    service = LookupService.from_config(config)
    return _report(service.resolve_text(text), no_open)


def cmd_find(config: Config, article: str, version: str, no_open: bool = False) -> int:
    """Resolve an explicit article/print version pair."""
    service = LookupService.from_config(config)
    return _report(service.resolve(article, version), no_open)


def cmd_rebuild(config: Config) -> int:
    """Rebuild the index on operator request."""
    print(f"🔄 Rebuilding index from {config.index.root_directory}...")

    if not config.index.root_directory.is_dir():
        print(f"❌ Document root not found: {config.index.root_directory}")
        print("   Check index.root_directory or ARTICLE_LOCATOR_ROOT")
        return EXIT_NOT_FOUND

    service = LookupService.from_config(config)
    records = service.rebuild()

    try:
        stored = service.store.count()
    except StorageUnavailableError as e:
        print(f"❌ Index unavailable: {e}")
        return EXIT_NOT_FOUND

    print(f"\n✓ Scanned: {len(records)}, Indexed: {stored}")
    return EXIT_OK


def cmd_status(config: Config) -> int:
    """Show index status."""
    service = LookupService.from_config(config)
    store = service.store

    print("\n📊 Index Status")
    print("=" * 40)
    print(f"  Document root:   {config.index.root_directory}")
    print(f"  Extensions:      {', '.join(config.index.extensions)}")
    print(f"  Index file:      {store.db_path}")
    print(f"  Index exists:    {'yes' if store.exists() else 'no'}")

    try:
        print(f"  Records:         {store.count()}")
    except StorageUnavailableError as e:
        print(f"  Records:         unavailable ({e})")
        print()
        return EXIT_NOT_FOUND

    print()
    return EXIT_OK


def cmd_macro(config: Config) -> int:
    """Print the spreadsheet macro."""
    print(build_double_click_macro(config.macro.executable))
    return EXIT_OK


def cmd_init_config(config_path: Path, force: bool = False) -> int:
    """Write a default config file."""
    if config_path.exists() and not force:
        print(f"❌ {config_path} already exists (use --force to overwrite)")
        return 1

    create_default_config(config_path)
    print(f"✓ Wrote {config_path}")
    return EXIT_OK


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_cli()
    parsed = parser.parse_args(args)

    if not parsed.command:
        parser.print_help()
        return 1

    config_path = parsed.config or default_config_path()

    if parsed.command == "init-config":
        setup_logging(parsed.verbose)
        return cmd_init_config(config_path, parsed.force)

    # Load config
    try:
        config = load_config(config_path)
        config.raise_for_errors()
    except Exception as e:
        setup_logging(parsed.verbose)
        print(f"❌ Failed to load config: {e}")
        return 1

    setup_logging(parsed.verbose, config.logging.level, config.logging.file)
    logger.debug(f"Config loaded from {config_path}")

    # Route to command
    if parsed.command == "lookup":
        return cmd_lookup(config, parsed.text, parsed.no_open)
    elif parsed.command == "find":
        return cmd_find(config, parsed.article, parsed.version, parsed.no_open)
    elif parsed.command == "rebuild":
        return cmd_rebuild(config)
    elif parsed.command == "status":
        return cmd_status(config)
    elif parsed.command == "macro":
        return cmd_macro(config)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
