from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .audiobook import AudioBookResolver
from .config import ConfigError, NamingOptions, load_options
from .models import FileMetadata
from .stacking import StackResolver
from .summary_table import StackTableRenderer, result_to_dict
from .utils import InvalidArgumentError, env_bool, load_yaml_file
from .validation import validate_config_data
from .validation_output import ValidationFormatter
from .version import __version__

LOGGER = logging.getLogger(__name__)

CONSOLE = Console()
ERROR_CONSOLE = Console(stderr=True)

CONFIG_ENV = "MEDIASTACK_CONFIG"
VERBOSE_ENV = "MEDIASTACK_VERBOSE"


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="%H:%M:%S",
        handlers=[RichHandler(console=ERROR_CONSOLE, show_path=False)],
        force=True,
    )


def _default_config() -> Optional[Path]:
    value = os.getenv(CONFIG_ENV)
    return Path(value) if value else None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mediastack",
        description="Group multi-part media files into stacks.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config",
        type=Path,
        default=_default_config(),
        help=f"Naming options YAML file (env: {CONFIG_ENV})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    stack = subparsers.add_parser("stack", help="Resolve stacks from file and folder paths")
    stack.add_argument("paths", nargs="*", help="File paths")
    stack.add_argument(
        "--folder",
        dest="folders",
        action="append",
        default=[],
        metavar="PATH",
        help="Folder path (repeatable)",
    )
    stack.add_argument("--stdin", action="store_true", help="Read additional file paths from stdin, one per line")
    stack.add_argument("--json", action="store_true", help="Print the result as JSON")
    stack.add_argument("--show-skipped", action="store_true", help="List paths rejected as non-video files")
    stack.set_defaults(handler=run_stack)

    audiobook = subparsers.add_parser("audiobook", help="Extract part and chapter numbers from audiobook paths")
    audiobook.add_argument("paths", nargs="+", help="Audiobook file paths")
    audiobook.add_argument("--json", action="store_true", help="Print the result as JSON")
    audiobook.set_defaults(handler=run_audiobook)

    validate = subparsers.add_parser("validate-config", help="Validate a naming options YAML file")
    validate.add_argument("file", type=Path, nargs="?", help="File to validate (defaults to --config)")
    validate.set_defaults(handler=run_validate_config)

    return parser


def _load_options(args: argparse.Namespace) -> Optional[NamingOptions]:
    try:
        return load_options(args.config)
    except ConfigError as exc:
        LOGGER.error("%s", exc)
        return None


def run_stack(args: argparse.Namespace) -> int:
    options = _load_options(args)
    if options is None:
        return 1

    files = list(args.paths)
    if args.stdin:
        files.extend(line.strip() for line in sys.stdin if line.strip())
    entries = [FileMetadata(id=path, is_folder=False) for path in files]
    entries.extend(FileMetadata(id=path, is_folder=True) for path in args.folders)

    result = StackResolver(options).resolve(entries)
    if args.json:
        CONSOLE.print_json(json.dumps(result_to_dict(result)))
    else:
        StackTableRenderer(CONSOLE).render(result, show_skipped=args.show_skipped)
    return 0


def run_audiobook(args: argparse.Namespace) -> int:
    options = _load_options(args)
    if options is None:
        return 1

    resolver = AudioBookResolver(options)
    rows = []
    for path in args.paths:
        try:
            rows.append((path, resolver.parse_file(path)))
        except InvalidArgumentError as exc:
            LOGGER.error("%s", exc)
            return 1

    if args.json:
        payload = [
            {
                "path": path,
                "container": info.container if info else None,
                "part_number": info.part_number if info else None,
                "chapter_number": info.chapter_number if info else None,
            }
            for path, info in rows
        ]
        CONSOLE.print_json(json.dumps(payload))
    else:
        StackTableRenderer(CONSOLE).render_audiobooks(rows)
    return 0


def run_validate_config(args: argparse.Namespace) -> int:
    path = args.file or args.config
    if path is None:
        CONSOLE.print(f"[bold red]No configuration file given (pass a path or set {CONFIG_ENV}).[/bold red]")
        return 1
    try:
        data = load_yaml_file(path)
    except OSError as exc:
        CONSOLE.print(f"[bold red]Unable to read {escape(str(path))}: {escape(str(exc))}[/bold red]")
        return 1
    except yaml.YAMLError as exc:
        CONSOLE.print(f"[bold red]Invalid YAML in {escape(str(path))}: {escape(str(exc))}[/bold red]")
        return 1

    report = validate_config_data(data)
    ValidationFormatter(CONSOLE).format_report(report)
    return 0 if report.is_valid else 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose or bool(env_bool(VERBOSE_ENV)))
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
