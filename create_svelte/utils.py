"""Shared utility functions for create-svelte.

Provides async command execution, JSON I/O and Rich-based console output.
Every external tool the scaffolder talks to goes through ``run_command`` so
exit codes and command lines are reported the same way everywhere.
"""

from __future__ import annotations

import asyncio
import json
import os
import shutil
import sys
from pathlib import Path
from typing import Any

from rich.console import Console

from create_svelte.models import SubprocessOutcome

console = Console()

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


def format_command(cmd: list[str]) -> str:
    """Render an argument list as the command line shown to the user."""
    return " ".join(cmd)


def _resolve_executable(program: str) -> str:
    # npm, npx and cnpm are .cmd shims on Windows which exec cannot start by bare name.
    if sys.platform == "win32":
        return shutil.which(program) or program
    return program


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: float | None = None,
    capture: bool = True,
    env: dict[str, str] | None = None,
) -> SubprocessOutcome:
    """Run an external command asynchronously.

    Args:
        cmd: Program and arguments.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed.
            ``None`` waits for as long as the command runs.
        capture: Whether to capture stdout/stderr (if ``False`` they inherit
            the parent's streams so the user sees live progress).
        env: Optional extra environment variables merged on top of ``os.environ``.

    Returns:
        A ``SubprocessOutcome``. A program that cannot be started yields exit
        code ``-1`` with the OS error in ``stderr``.
    """
    command_line = format_command(cmd)

    merged_env: dict[str, str] | None = None
    if env:
        merged_env = {**os.environ, **env}

    stdout_pipe = asyncio.subprocess.PIPE if capture else None
    stderr_pipe = asyncio.subprocess.PIPE if capture else None

    try:
        process = await asyncio.create_subprocess_exec(
            _resolve_executable(cmd[0]),
            *cmd[1:],
            stdout=stdout_pipe,
            stderr=stderr_pipe,
            cwd=str(cwd) if cwd else None,
            env=merged_env,
        )
    except OSError as exc:
        return SubprocessOutcome(exit_code=-1, command_line=command_line, stderr=str(exc))

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return SubprocessOutcome(
            exit_code=-1,
            command_line=command_line,
            stderr=f"Command timed out after {timeout}s: {command_line}",
        )

    stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
    stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return SubprocessOutcome(
        exit_code=process.returncode or 0,
        command_line=command_line,
        stdout=stdout_str,
        stderr=stderr_str,
    )


async def read_command_output(cmd: list[str], cwd: str | Path | None = None) -> str | None:
    """Return the trimmed stdout of *cmd*, or ``None`` if it failed or printed nothing."""
    outcome = await run_command(cmd, cwd=cwd)
    if not outcome.ok or not outcome.stdout:
        return None
    return outcome.stdout


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def load_json(path: str | Path) -> Any:
    """Load and parse a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    raw = Path(path).read_text(encoding="utf-8")
    return json.loads(raw)


def save_json(data: dict[str, Any], path: str | Path) -> None:
    """Write *data* with 2-space indentation and a platform line ending."""
    file_path = Path(path)
    content = json.dumps(data, indent=2, ensure_ascii=False) + os.linesep
    # newline="" stops text mode from translating os.linesep a second time.
    with file_path.open("w", encoding="utf-8", newline="") as fh:
        fh.write(content)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


def print_info(message: str) -> None:
    console.print(message)
