"""CLI entrypoint: sync one repository's labels with a YAML config.

Exit codes:
- 0: every change succeeded (or nothing to do)
- 1: a fatal error before any change, listing failed, or a change failed
- 2: bad arguments or settings
"""

from __future__ import annotations

import argparse
import logging
import platform
import sys

from pydantic import ValidationError

from gh_labels import __version__
from gh_labels.config import LabelSyncSettings, parse_repository
from gh_labels.credentials import load_gh_credentials
from gh_labels.desired import load_desired_labels
from gh_labels.errors import LabelSyncError, ListError
from gh_labels.github.client import GitHubLabelStore
from gh_labels.logging import LOG_LEVEL_CHOICES, configure_logging
from gh_labels.reconcile import sync_labels

logger = logging.getLogger(__name__)

PROG = "gh-labels"
EXIT_FAILURE = 1
EXIT_BAD_ARGS = 2


def version_string() -> str:
    return f"{PROG} {__version__} {platform.python_implementation()} {platform.python_version()}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        usage=f"{PROG} [flags] owner/repo",
        description="Create, update and optionally delete GitHub labels to match a YAML config",
        allow_abbrev=False,
    )
    parser.add_argument(
        "repository",
        nargs="?",
        default=None,
        metavar="owner/repo",
        help="Target repository in the form 'owner/repo'",
    )
    parser.add_argument(
        "-config",
        "--config",
        dest="config_path",
        default=None,
        metavar="path",
        help="Path to config file (default: gh-labels.yml)",
    )
    parser.add_argument(
        "-cleanup",
        "--cleanup",
        action="store_true",
        default=None,
        help="Delete labels that are not in the config",
    )
    parser.add_argument(
        "-log.level",
        "--log.level",
        dest="log_level",
        default=None,
        metavar="level",
        help=f"Log level ({LOG_LEVEL_CHOICES}, default: info)",
    )
    parser.add_argument(
        "-version",
        "--version",
        action="store_true",
        help="Print version and exit",
    )
    return parser


def _settings_overrides(args: argparse.Namespace) -> dict[str, object]:
    overrides: dict[str, object] = {}
    if args.config_path is not None:
        overrides["config_path"] = args.config_path
    if args.cleanup is not None:
        overrides["cleanup"] = args.cleanup
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    return overrides


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(version_string())
        return 0

    try:
        owner, repo = parse_repository(args.repository or "")
    except ValueError:
        parser.print_help(sys.stderr)
        return EXIT_BAD_ARGS

    try:
        settings = LabelSyncSettings(**_settings_overrides(args))
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your environment / .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return EXIT_BAD_ARGS

    configure_logging(settings.log_level)

    try:
        desired = load_desired_labels(settings.config_path)
        credentials = load_gh_credentials(settings.hosts_file, host=settings.github_host)
    except LabelSyncError as e:
        logger.error(str(e), extra={"error_type": type(e).__name__})
        return EXIT_FAILURE

    store = GitHubLabelStore(
        repository=f"{owner}/{repo}",
        username=credentials.user,
        token=credentials.token,
        base_url=settings.github_base_url,
    )
    try:
        result = sync_labels(store, desired, cleanup=settings.cleanup)
    except ListError:
        return EXIT_FAILURE
    finally:
        store.close()

    logger.debug(
        "Label sync finished",
        extra={
            "repo": store.repository,
            "applied": len(result.applied),
            "skipped": len(result.skipped),
            "failed": len(result.failures),
        },
    )
    return 0 if result.ok else EXIT_FAILURE


if __name__ == "__main__":
    raise SystemExit(main())
