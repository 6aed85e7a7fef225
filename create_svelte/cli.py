"""Command-line entry point for ``create-svelte``.

Usage::

    create-svelte my-svelte-app
    create-svelte my-svelte-app --mpa --use-cnpm
    create-svelte --info
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from rich.markup import escape

from create_svelte import __version__
from create_svelte.config import ScaffoldConfig
from create_svelte.envinfo import print_environment_info
from create_svelte.errors import (
    EnvironmentConflictError,
    MissingProjectNameError,
    PackageJsonError,
    UserInputError,
)
from create_svelte.models import ProjectRequest
from create_svelte.pipeline import Scaffolder
from create_svelte.utils import console, print_error

PROG = "create-svelte"


def build_parser(config: ScaffoldConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        usage=f"{PROG} <project-directory> [options]",
        description="Create a new Svelte project from a starter template.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Only <project-directory> is required.\n\n"
            "Pass --mpa to start from the multi-page template.\n\n"
            "If you have any problems, do not hesitate to file an issue:\n"
            f"  {config.issues_url}\n"
        ),
    )
    parser.add_argument(
        "project_directory",
        nargs="?",
        metavar="project-directory",
        help="Directory to create the project in; its name becomes the package name",
    )
    parser.add_argument(
        "-v", "-V", "--version",
        action="version",
        version=__version__,
        help="Print the version of this tool",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print additional logs while installing dependencies",
    )
    parser.add_argument(
        "--info",
        action="store_true",
        help="Print environment debug info and exit",
    )
    parser.add_argument(
        "--mpa",
        action="store_true",
        help="Use the multi-page template",
    )
    parser.add_argument(
        "--use-cnpm",
        action="store_true",
        help="Install dependencies with cnpm instead of npm",
    )
    return parser


def print_missing_name() -> None:
    print_error("Please specify the project directory:")
    console.print(f"  [cyan]{PROG}[/cyan] [green]<project-directory>[/green]")
    console.print()
    console.print("For example:")
    console.print(f"  [cyan]{PROG}[/cyan] [green]my-svelte-app[/green]")
    console.print()
    console.print(f"Run [cyan]{PROG} --help[/cyan] to see all options.")


def scaffold(args: argparse.Namespace, config: ScaffoldConfig) -> None:
    """Run the scaffold flow for the parsed command line."""
    if not args.project_directory:
        raise MissingProjectNameError()

    request = ProjectRequest(
        name=args.project_directory,
        use_cnpm=args.use_cnpm,
        verbose=args.verbose,
        multi_page=args.mpa,
    )
    asyncio.run(Scaffolder(config).run(request))


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``create-svelte`` and ``python -m create_svelte``.

    Unknown options are ignored so newer command lines keep working.
    """
    config = ScaffoldConfig.from_env()
    parser = build_parser(config)
    args, _unknown = parser.parse_known_args(argv)

    if args.info:
        asyncio.run(print_environment_info(config))
        return

    try:
        scaffold(args, config)
    except MissingProjectNameError:
        print_missing_name()
        sys.exit(1)
    except PackageJsonError as exc:
        print_error(escape(str(exc)))
        sys.exit(1)
    except (UserInputError, EnvironmentConflictError):
        # The failing stage has already printed the details.
        sys.exit(1)


if __name__ == "__main__":
    main()
