"""Dependency installation through npm or cnpm."""

from __future__ import annotations

import sys
from pathlib import Path

from rich.markup import escape

from create_svelte.errors import InstallError, NpmCwdMismatchError
from create_svelte.models import ProjectRequest, SubprocessOutcome
from create_svelte.utils import console, print_info, run_command

NPM_CWD_PREFIX = "; cwd = "


def install_command(request: ProjectRequest) -> list[str]:
    """Build the install invocation: exact pinned versions, errors-only logging."""
    cmd = [request.package_manager, "install", "--save", "--save-exact", "--loglevel", "error"]
    if request.verbose:
        cmd.append("--verbose")
    return cmd


async def install_dependencies(request: ProjectRequest) -> SubprocessOutcome:
    """Install the project's dependencies inside the project root.

    Raises:
        InstallError: The package manager exited with a non-zero code.
    """
    print_info("Installing packages. This might take a couple of minutes.")
    outcome = await run_command(install_command(request), cwd=request.root, capture=False)
    if not outcome.ok:
        raise InstallError(outcome.command_line, outcome.exit_code)
    return outcome


def parse_npm_cwd(output: str) -> str | None:
    """Extract the working directory from ``npm config list`` output."""
    for line in output.splitlines():
        if line.startswith(NPM_CWD_PREFIX):
            return line[len(NPM_CWD_PREFIX):].strip()
    return None


async def check_npm_can_read_cwd(root: Path) -> None:
    """Make sure a freshly spawned npm process starts in *root*.

    A misconfigured shell (for example a Windows ``AutoRun`` entry) can make
    every child process start elsewhere. If npm cannot be run or its output
    cannot be parsed the check passes.

    Raises:
        NpmCwdMismatchError: npm reports a different working directory.
    """
    outcome = await run_command(["npm", "config", "list"], cwd=root)
    if outcome.exit_code == -1:
        return

    npm_cwd = parse_npm_cwd(f"{outcome.stdout}\n{outcome.stderr}")
    if npm_cwd is None or npm_cwd == str(root):
        return

    console.print(
        f"[red]Could not start an npm process in the right directory.\n\n"
        f"The current directory is: [bold]{escape(str(root))}[/bold]\n"
        f"However, a newly started npm process runs in: [bold]{escape(npm_cwd)}[/bold]\n\n"
        f"This is probably caused by a misconfigured system terminal shell.[/red]"
    )
    if sys.platform == "win32":
        console.print(
            "[red]On Windows, this can usually be fixed by running:[/red]\n\n"
            '  [cyan]reg[/cyan] delete "HKCU\\Software\\Microsoft\\Command Processor" /v AutoRun /f\n'
            '  [cyan]reg[/cyan] delete "HKLM\\Software\\Microsoft\\Command Processor" /v AutoRun /f\n\n'
            "[red]Try to run the above two lines in the terminal.\n"
            "To learn more about this problem, read: "
            "https://blogs.msdn.microsoft.com/oldnewthing/20071121-00/?p=24433/[/red]"
        )
    raise NpmCwdMismatchError(str(root), npm_cwd)
