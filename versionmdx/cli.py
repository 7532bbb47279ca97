"""CLI entrypoints for versionmdx commands."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Mapping

from .commit_message import (
    COMMIT_TYPES,
    DEFAULT_SCOPES,
    CommitAnswers,
    CommitMessageError,
    build_commit_message,
)
from .config import (
    ENV_NEXT_VERSION,
    ENV_RELEASE_NOTES,
    FRAGMENT_STRATEGIES,
    ConfigError,
    VersionMdxConfig,
    load_config,
    read_env_value,
    validate_strategy,
)
from .git.log import StaticCommitSource, load_commits_file
from .logging import configure_logging, get_logger
from .orchestrator import Orchestrator, ReleaseOutcome
from .postproc.markers import MarkerError, PersistenceError


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    kwargs["default"] = argparse.SUPPRESS if suppress_default else False
    parser.add_argument("-v", "--verbose", **kwargs)


def _add_release_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the repository root (defaults to current directory).",
    )
    parser.add_argument(
        "--version",
        dest="release_version",
        default=None,
        help=f"Version being released (defaults to ${ENV_NEXT_VERSION}).",
    )
    parser.add_argument(
        "--date",
        dest="release_date",
        default=None,
        help="Release date to print (YYYY-MM-DD, defaults to today in UTC).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the release block without writing, deleting or staging anything.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="versionmdx",
        description="Maintain a Version.mdx changelog from conventional commits and fragments.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write debug logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    release_parser = subparsers.add_parser(
        "release",
        help="Insert a release block built from commits and fragment files.",
    )
    _add_verbose_option(release_parser, suppress_default=True)
    _add_release_options(release_parser)
    release_parser.add_argument(
        "--commits-file",
        type=Path,
        default=None,
        help="Read commits from a JSON dump supplied by the release host instead of git.",
    )
    release_parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Only render feat, fix and breaking commits; drop non-conventional subjects.",
    )
    release_parser.add_argument(
        "--strategy",
        choices=FRAGMENT_STRATEGIES,
        default=None,
        help="How fragments are matched to commits.",
    )

    notes_parser = subparsers.add_parser(
        "notes",
        help="Reformat generated release notes into a release block.",
    )
    _add_verbose_option(notes_parser, suppress_default=True)
    _add_release_options(notes_parser)
    notes_parser.add_argument(
        "--notes-file",
        type=Path,
        default=None,
        help=f"Read release notes from a file (defaults to ${ENV_RELEASE_NOTES}).",
    )

    message_parser = subparsers.add_parser(
        "commit-message",
        help="Print a conventional-commit message built from the given answers.",
    )
    _add_verbose_option(message_parser, suppress_default=True)
    message_parser.add_argument("--type", dest="commit_type", required=True, choices=tuple(COMMIT_TYPES))
    message_parser.add_argument(
        "--scope",
        default=None,
        help=f"Component or area touched (e.g. {', '.join(DEFAULT_SCOPES)}).",
    )
    message_parser.add_argument("--subject", required=True, help="Short imperative description.")
    message_parser.add_argument("--body", default=None, help='Longer description; "|" breaks lines.')
    message_parser.add_argument(
        "--version-content",
        default=None,
        help='Detailed component notes for Version.mdx; "|" separates lines.',
    )
    message_parser.add_argument("--breaking", default=None, help="Describe breaking changes.")
    message_parser.add_argument("--footer", default=None, help="Issues closed, e.g. #31, #34.")
    message_parser.add_argument(
        "--update-document",
        nargs="?",
        const=".",
        default=None,
        metavar="PATH",
        help="Also add the version content as an upcoming entry in the repository at PATH.",
    )

    return parser


def main(argv: list[str] | None = None, env: Mapping[str, str] | None = None) -> None:
    """CLI entrypoint for versionmdx commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    environ = os.environ if env is None else env

    configure_logging(
        verbose=bool(args.verbose),
        quiet=args.command == "commit-message",
        log_file=args.log_file,
    )
    logger = get_logger("cli")

    if args.command == "commit-message":
        _run_commit_message(parser, args)
        return

    try:
        config = _load_config(args)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    version = args.release_version or read_env_value(environ, ENV_NEXT_VERSION)
    try:
        if args.command == "release":
            orchestrator = Orchestrator(source=_commit_source(parser, args))
            outcome = orchestrator.run_release(
                config,
                version,
                release_date=args.release_date,
                dry_run=bool(args.dry_run),
            )
        elif args.command == "notes":
            notes = _read_notes(parser, args, environ)
            outcome = Orchestrator().run_notes(
                config,
                version,
                notes,
                release_date=args.release_date,
                dry_run=bool(args.dry_run),
            )
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except (MarkerError, PersistenceError) as exc:
        parser.exit(1, f"Error updating changelog: {exc}\n")
    except Exception as exc:  # pragma: no cover - unexpected failure surfaces as exit 1
        logger.debug("Unhandled error", exc_info=True)
        parser.exit(1, f"versionmdx {args.command} failed: {exc}\nRun with --verbose for more details.\n")

    _report(outcome)


def _load_config(args: argparse.Namespace) -> VersionMdxConfig:
    config = load_config(Path(args.path))
    if getattr(args, "strict", None):
        config.strict = True
    strategy = getattr(args, "strategy", None)
    if strategy:
        config.fragments.strategy = validate_strategy(strategy)
    return config


def _commit_source(
    parser: argparse.ArgumentParser, args: argparse.Namespace
) -> StaticCommitSource | None:
    if args.commits_file is None:
        return None
    try:
        commits = load_commits_file(args.commits_file)
    except (OSError, ValueError) as exc:
        parser.exit(1, f"Could not read commits from {args.commits_file}: {exc}\n")
    return StaticCommitSource(commits)


def _read_notes(
    parser: argparse.ArgumentParser,
    args: argparse.Namespace,
    environ: Mapping[str, str],
) -> str | None:
    if args.notes_file is None:
        return read_env_value(environ, ENV_RELEASE_NOTES)
    try:
        return args.notes_file.read_text(encoding="utf-8")
    except OSError as exc:
        parser.exit(1, f"Could not read release notes from {args.notes_file}: {exc}\n")


def _run_commit_message(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    answers = CommitAnswers(
        type=args.commit_type,
        subject=args.subject,
        scope=args.scope,
        body=args.body,
        version_content=args.version_content,
        breaking=args.breaking,
        footer=args.footer,
    )
    try:
        message = build_commit_message(answers)
    except CommitMessageError as exc:
        parser.exit(1, f"{exc}\n")

    if args.update_document is not None and args.version_content:
        try:
            config = load_config(Path(args.update_document))
            Orchestrator().run_upcoming(config, args.version_content)
        except (ConfigError, MarkerError, PersistenceError) as exc:
            # The message is still usable even when the document cannot be touched.
            get_logger("cli").warning("Could not update %s: %s", args.update_document, exc)

    print(message)


def _report(outcome: ReleaseOutcome | None) -> None:
    if outcome is None:
        print("Nothing to do")
        return
    if outcome.dry_run:
        print(f"Release block for {outcome.version} (dry-run):")
        print(outcome.block, end="")
        return
    print(f"Changelog for {outcome.version} written to {_relativize(outcome.path)}")
    if outcome.unstaged:
        print(f"Not staged: {', '.join(outcome.unstaged)}")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
