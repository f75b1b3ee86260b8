from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from app_config import __version__, runner
from app_config.config import Config, ConfigLoadRequest, FileDocumentLoader, LoggingSettings, build
from app_config.config.factory import parse_logging_settings
from app_config.config.interfaces import DocumentLoader
from app_config.config.models import LOG_LEVELS
from app_config.errors import AppConfigError, ExitCode
from app_config.logging import init_logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="app-config",
        description="app-config: watch a remote configuration source for changes and take action",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=LOG_LEVELS,
        help="Override the logging level from the config file (default: WARNING)",
    )
    parser.add_argument(
        "--env-file",
        default=None,
        help="Load environment variables from this .env file before applying overrides",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    # Command: check
    check_parser = subparsers.add_parser("check", help="Look for updates and run hooks on new data")
    check_parser.add_argument("-f", "--file", required=True, help="Path to the config file (TOML or YAML)")

    # Command: query
    query_parser = subparsers.add_parser("query", help="Print the last data received")
    query_parser.add_argument("-f", "--file", required=True, help="Path to the config file (TOML or YAML)")

    return parser


def _load_config(args: argparse.Namespace) -> Config:
    request = ConfigLoadRequest(path=args.file, dotenv_path=args.env_file)
    loader: DocumentLoader = FileDocumentLoader()
    document = loader.load(request)
    # Before build, which opens the provider's store.
    init_logging(parse_logging_settings(document), level_override=args.log_level)
    return build(document)


def _check(args: argparse.Namespace) -> None:
    config = _load_config(args)
    try:
        runner.check(config)
    finally:
        config.close()


def _query(args: argparse.Namespace) -> None:
    config = _load_config(args)
    try:
        print(runner.query(config))
    finally:
        config.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    init_logging(LoggingSettings(), level_override=args.log_level)

    try:
        if args.command == "check":
            _check(args)
        elif args.command == "query":
            _query(args)
    except AppConfigError as e:
        logger.error("%s", e)
        return int(e.exit_code)
    except FileNotFoundError as e:
        logger.error("%s", e)
        return int(ExitCode.OSFILE)
    except OSError as e:
        logger.error("Could not open %s: %s", e.filename or "file", e.strerror or e)
        return int(ExitCode.OSFILE)
    except KeyboardInterrupt:
        logger.info("Interrupted by user.")
        return 130
    return int(ExitCode.OK)


if __name__ == "__main__":
    sys.exit(main())
