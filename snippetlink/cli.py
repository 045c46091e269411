"""CLI entrypoints for snippetlink commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

from .config import ConfigError
from .logging import configure_logging
from .runner import DocumentReport, DocumentStatus, SnippetLinkRunner


def _document_options() -> argparse.ArgumentParser:
    """Options shared by every subcommand that walks a repository."""
    shared = argparse.ArgumentParser(add_help=False)
    # SUPPRESS keeps a top-level ``-v`` from being reset by the subcommand.
    shared.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Log importer probes and cache activity.",
    )
    shared.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Repository root to scan for documents (defaults to current directory).",
    )
    return shared


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snippetlink",
        description="Keep code snippets in Markdown documents in sync with their sources.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Log importer probes and cache activity.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    shared = _document_options()

    update_parser = subparsers.add_parser(
        "update",
        parents=[shared],
        help="Refresh every snippet marker and write changed documents.",
    )
    update_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report which documents would change without writing them.",
    )

    subparsers.add_parser(
        "check",
        parents=[shared],
        help="Fail when any document is out of date or has broken snippet markers.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for snippetlink commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    root = Path(args.path)
    if not root.is_dir():
        parser.exit(1, f"Repository path not found: {root}\n")

    check = args.command == "check"
    dry_run = check or bool(getattr(args, "dry_run", False))

    try:
        runner = SnippetLinkRunner(root)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")
    except ValueError as exc:
        # unknown plugin names from the enabled lists
        parser.exit(1, f"snippetlink {args.command} failed: {exc}\n")

    reports = runner.run(write=not dry_run)
    _print_reports(reports, runner.root, dry_run=dry_run)

    failed = any(report.status is DocumentStatus.FAILED for report in reports)
    stale = any(report.stale for report in reports)
    if failed or (check and stale):
        sys.exit(1)


def _print_reports(reports: List[DocumentReport], root: Path, *, dry_run: bool) -> None:
    for report in reports:
        print(_relativize(report.path, root))
        status = report.status.value
        if dry_run and report.stale:
            status += " (dry-run)"
        print(f"  {status}")
        if report.error:
            for line in report.error.splitlines():
                print(f"    {line}")


def _relativize(path: Path, root: Path) -> str:
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
