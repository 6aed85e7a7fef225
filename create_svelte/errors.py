"""Exceptions raised by the scaffold flow.

``UserInputError`` and ``EnvironmentConflictError`` are reported by the CLI
and end the run with exit code 1. ``SubprocessError`` carries the command
line of the external tool that failed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from create_svelte.models import DirectoryConflictReport, ValidationResult


class ScaffoldError(Exception):
    """Base class for every error raised while scaffolding a project."""


# ---------------------------------------------------------------------------
# Bad input
# ---------------------------------------------------------------------------


class UserInputError(ScaffoldError):
    """The user asked for something that cannot be created."""


class MissingProjectNameError(UserInputError):
    """No project directory was given on the command line."""

    def __init__(self) -> None:
        super().__init__("Please specify the project directory")


class InvalidNameError(UserInputError):
    """The project name breaks npm package naming rules."""

    def __init__(self, name: str, result: "ValidationResult") -> None:
        self.name = name
        self.result = result
        super().__init__(
            f'Cannot create a project named "{name}" because of npm naming restrictions'
        )


class ReservedNameError(UserInputError):
    """The project name collides with a dependency of the generated project."""

    def __init__(self, name: str, reserved: list[str]) -> None:
        self.name = name
        self.reserved = reserved
        super().__init__(
            f'Cannot create a project named "{name}" because a dependency with '
            f"the same name exists"
        )


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


class EnvironmentConflictError(ScaffoldError):
    """The local environment prevents the project from being created."""


class UnsafeDirectoryError(EnvironmentConflictError):
    """The target directory holds files the template could overwrite."""

    def __init__(self, name: str, report: "DirectoryConflictReport") -> None:
        self.name = name
        self.report = report
        super().__init__(f"The directory {name} contains files that could conflict")


class NpmCwdMismatchError(EnvironmentConflictError):
    """A freshly started npm process does not run in the project directory."""

    def __init__(self, cwd: str, npm_cwd: str) -> None:
        self.cwd = cwd
        self.npm_cwd = npm_cwd
        super().__init__(
            f"Could not start an npm process in the right directory "
            f"(expected {cwd}, npm runs in {npm_cwd})"
        )


class PackageJsonError(EnvironmentConflictError):
    """``package.json`` is missing or unreadable after the template fetch."""


# ---------------------------------------------------------------------------
# External tools
# ---------------------------------------------------------------------------


class SubprocessError(ScaffoldError):
    """An external command exited with a non-zero code."""

    def __init__(self, message: str, command: str, exit_code: int | None = None) -> None:
        self.command = command
        self.exit_code = exit_code
        super().__init__(f"{message}: {command}")


class FetchError(SubprocessError):
    """The template retrieval command failed."""

    def __init__(self, command: str, exit_code: int | None = None) -> None:
        super().__init__("Template fetch failed", command, exit_code)


class InstallError(SubprocessError):
    """The dependency install command failed."""

    def __init__(self, command: str, exit_code: int | None = None) -> None:
        super().__init__("Dependency install failed", command, exit_code)
