"""Target directory safety checks.

A project may be created in a directory that already exists, as long as the
directory only holds files the template cannot clash with: VCS metadata,
editor project files, documentation and logs left by a previous failed
install.
"""

from __future__ import annotations

import os
import shutil
import stat
from pathlib import Path

from rich.markup import escape

from create_svelte.errors import UnsafeDirectoryError
from create_svelte.models import DirectoryConflict, DirectoryConflictReport
from create_svelte.utils import console

VALID_FILES: frozenset[str] = frozenset({
    ".DS_Store",
    ".git",
    ".gitattributes",
    ".gitignore",
    ".gitlab-ci.yml",
    ".hg",
    ".hgcheck",
    ".hgignore",
    ".idea",
    ".npmignore",
    ".travis.yml",
    "docs",
    "LICENSE",
    "README.md",
    "mkdocs.yml",
    "Thumbs.db",
})

ERROR_LOG_PREFIXES: tuple[str, ...] = ("npm-debug.log", "yarn-error.log", "yarn-debug.log")

# IntelliJ IDEA writes its module file before the project is generated.
IDE_MODULE_SUFFIX = ".iml"


def is_error_log(filename: str) -> bool:
    """Return ``True`` for log files left behind by a previous install attempt."""
    return filename.startswith(ERROR_LOG_PREFIXES)


def is_allowed(filename: str) -> bool:
    return (
        filename in VALID_FILES
        or filename.endswith(IDE_MODULE_SUFFIX)
        or is_error_log(filename)
    )


def find_conflicts(root: Path) -> DirectoryConflictReport:
    """List the entries of *root* that could conflict with the template.

    Entries whose type cannot be determined are reported as plain files.
    """
    report = DirectoryConflictReport()
    for filename in sorted(os.listdir(root)):
        if is_allowed(filename):
            continue
        try:
            is_directory = stat.S_ISDIR((root / filename).lstat().st_mode)
        except OSError:
            is_directory = False
        report.conflicts.append(DirectoryConflict(filename, is_directory))
    return report


def remove_error_logs(root: Path) -> list[Path]:
    """Delete npm/yarn error logs from *root* and return what was removed."""
    removed: list[Path] = []
    for filename in os.listdir(root):
        if not is_error_log(filename):
            continue
        path = root / filename
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
        removed.append(path)
    return removed


def print_conflicts(name: str, report: DirectoryConflictReport) -> None:
    """Print the conflicting entries, directories with a trailing slash."""
    console.print(f"The directory [green]{escape(name)}[/green] contains files that could conflict:")
    console.print()
    for conflict in report.conflicts:
        if conflict.is_directory:
            console.print(f"  [blue]{escape(conflict.display())}[/blue]")
        else:
            console.print(f"  {escape(conflict.display())}")
    console.print()
    console.print("Either try using a new directory name, or remove the files listed above.")


def ensure_safe_directory(root: Path, name: str) -> DirectoryConflictReport:
    """Make sure the project can be generated inside *root*.

    On success any leftover error logs are deleted as a side effect.

    Raises:
        UnsafeDirectoryError: *root* holds entries that are not on the allow-list.
    """
    report = find_conflicts(root)
    if not report.is_safe:
        print_conflicts(name, report)
        raise UnsafeDirectoryError(name, report)

    remove_error_logs(root)
    return report
