"""CLI entrypoints for sync-ghes commands."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from .codeowners import generate_codeowners
from .config import SyncSettings, load_settings
from .logging import configure_logging
from .orchestrator import Orchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_location_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--root",
        default=".",
        help="Path to the starter-workflows checkout (defaults to current directory).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Settings file overriding the defaults (defaults to <root>/.sync-ghes.yml).",
    )


def _positive_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("timeout must be positive")
    return parsed


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sync-ghes",
        description="Sync GHES-compatible starter workflows onto the GHES branch.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write log output to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    sync_parser = subparsers.add_parser(
        "sync",
        help="Rebuild the GHES branch from the source branch.",
    )
    _add_verbose_option(sync_parser, suppress_default=True)
    _add_location_options(sync_parser)
    sync_parser.add_argument(
        "--source-branch",
        default=None,
        help="Branch to restore workflows from (default: main).",
    )
    sync_parser.add_argument(
        "--target-branch",
        default=None,
        help="Branch to rebuild (default: ghes).",
    )
    sync_parser.add_argument(
        "--no-placeholder",
        action="store_true",
        help="Do not append the placeholder step to restored workflows.",
    )
    sync_parser.add_argument(
        "--timeout",
        type=_positive_float,
        default=None,
        help="Kill any git/rm command running longer than this many seconds.",
    )

    check_parser = subparsers.add_parser(
        "check",
        help="Report which workflows are GHES compatible without touching branches.",
    )
    _add_verbose_option(check_parser, suppress_default=True)
    _add_location_options(check_parser)

    codeowners_parser = subparsers.add_parser(
        "codeowners",
        help="Regenerate CODEOWNERS from the JSON ownership config.",
    )
    _add_verbose_option(codeowners_parser, suppress_default=True)
    _add_location_options(codeowners_parser)

    return parser


def _settings_from_args(args: argparse.Namespace) -> SyncSettings:
    settings = load_settings(args.root, args.config)
    overrides: dict[str, object] = {}
    if getattr(args, "source_branch", None):
        overrides["source_branch"] = args.source_branch
    if getattr(args, "target_branch", None):
        overrides["target_branch"] = args.target_branch
    if getattr(args, "no_placeholder", False):
        overrides["add_placeholder_step"] = False
    if getattr(args, "timeout", None) is not None:
        overrides["command_timeout"] = args.timeout
    return replace(settings, **overrides) if overrides else settings


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for sync-ghes commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file) if args.log_file else None
    logger = configure_logging(verbose=bool(args.verbose), log_file=log_file)

    try:
        settings = _settings_from_args(args)
        if args.command == "sync":
            result = Orchestrator(settings).run()
            print(
                f"GHES branch '{settings.target_branch}' rebuilt with "
                f"{len(result.compatible)} compatible workflows"
            )
        elif args.command == "check":
            result = Orchestrator(settings).check()
            print(
                f"{len(result.compatible)} compatible, "
                f"{len(result.incompatible)} incompatible workflows"
            )
        elif args.command == "codeowners":
            output = generate_codeowners(
                settings.resolve(settings.codeowners_config),
                settings.resolve(settings.codeowners_output),
            )
            try:
                shown = output.relative_to(Path.cwd())
            except ValueError:
                shown = output
            print(f"CODEOWNERS written to {shown}")
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except Exception as exc:
        logger.debug("Fatal error", exc_info=True)
        parser.exit(
            1, f"sync-ghes {args.command} failed: {exc}\nRun with --verbose for more details.\n"
        )


if __name__ == "__main__":
    main(sys.argv[1:])
