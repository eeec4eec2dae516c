"""CLI entrypoints for pride commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, PrideConfig
from .errors import RETRY_HINT, ExtractionError, PrideError
from .index import load_index, lookup
from .logging import configure_logging
from .synthesizer import SynthesisResult, synthesize_workspace
from .workspace import Workspace


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    # Sub-commands repeat the flags with suppressed defaults so they work on either side.
    default_flag: object = argparse.SUPPRESS if suppress_default else False
    default_file: object = argparse.SUPPRESS if suppress_default else None
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default_flag,
        help="Increase log verbosity and show Gradle diagnostics.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=default_flag,
        help="Only log warnings and errors.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=default_file,
        help="Also write detailed logs to this file.",
    )


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the pride root (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pride",
        description="Combine independently versioned Gradle modules into one workspace.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser(
        "init",
        help="Create a pride and generate its settings file and projects index.",
    )
    _add_logging_options(init_parser, suppress_default=True)
    _add_path_argument(init_parser)
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Re-create the pride even if one already exists.",
    )
    init_parser.add_argument(
        "-m",
        "--module",
        action="append",
        dest="modules",
        metavar="NAME",
        help="Module directory to register (repeatable; defaults to every module found).",
    )
    init_parser.add_argument(
        "--gradle",
        dest="gradle_executable",
        help="Gradle executable used when a module has no wrapper.",
    )

    reinit_parser = subparsers.add_parser(
        "reinit",
        help="Regenerate the settings file and projects index of an existing pride.",
    )
    _add_logging_options(reinit_parser, suppress_default=True)
    _add_path_argument(reinit_parser)

    projects_parser = subparsers.add_parser(
        "projects",
        help="List indexed projects, or the paths providing one GROUP:ARTIFACT.",
    )
    _add_logging_options(projects_parser, suppress_default=True)
    _add_path_argument(projects_parser)
    projects_parser.add_argument(
        "--coordinate",
        metavar="GROUP:ARTIFACT",
        help="Only print the workspace paths providing this dependency.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for pride commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose), quiet=bool(args.quiet), log_file=args.log_file
    )

    try:
        if args.command == "init":
            _run_init(parser, args)
        elif args.command == "reinit":
            _run_reinit(args)
        elif args.command == "projects":
            _run_projects(parser, args)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except ExtractionError as exc:
        parser.exit(1, f"{exc}\n\n{RETRY_HINT}\n")
    except (PrideError, ConfigError) as exc:
        parser.exit(1, f"pride {args.command} failed: {exc}\nRun with --verbose for more details.\n")


def _run_init(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    root = Path(args.path)
    if Workspace.is_workspace(root) and not args.force:
        parser.exit(1, f"A pride already exists in {root.resolve()}; use --force to re-create it.\n")

    modules = args.modules or Workspace(root).discover_modules()
    config = PrideConfig(modules=list(modules))
    if args.gradle_executable:
        config.gradle.executable = args.gradle_executable
    config.gradle.verbose = bool(args.verbose)

    workspace = Workspace.create(root, config)
    _report(synthesize_workspace(workspace, config))


def _run_reinit(args: argparse.Namespace) -> None:
    workspace = Workspace.open(Path(args.path))
    config = workspace.load_config()
    if args.verbose:
        config.gradle.verbose = True
    _report(synthesize_workspace(workspace, config))


def _run_projects(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    workspace = Workspace.open(Path(args.path))
    entries = load_index(workspace.projects_file)
    if args.coordinate:
        group, _, artifact = args.coordinate.partition(":")
        if not group or not artifact:
            parser.exit(2, "--coordinate must look like GROUP:ARTIFACT\n")
        paths = lookup(entries, group, artifact)
        if not paths:
            parser.exit(1, f"No project provides {args.coordinate}\n")
        for path in paths:
            print(path)
        return
    for entry in entries:
        print(f"{entry.coordinate} {entry.workspace_path}")


def _report(result: SynthesisResult) -> None:
    modules = len({entry.module_location for entry in result.manifest})
    print(f"Included {len(result.manifest)} projects from {modules} modules")
    for directory in result.skipped:
        print(f"Skipped {directory}: module is not checked out")
    for coordinate, paths in result.ambiguities.items():
        print(f"Warning: {coordinate} is provided by {', '.join(paths)}")


if __name__ == "__main__":
    main(sys.argv[1:])
