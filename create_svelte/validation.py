"""Project name validation.

Checks a proposed name against the npm package naming rules and against the
dependencies the generated project declares. All violations are collected
before anything is reported so the user can fix them in one go.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from urllib.parse import quote

from rich.markup import escape

from create_svelte.errors import InvalidNameError, ReservedNameError
from create_svelte.models import ValidationResult
from create_svelte.utils import console

MAX_NAME_LENGTH = 214

BLACKLISTED_NAMES = ("node_modules", "favicon.ico")

# Node.js core modules; a package with one of these names would be shadowed.
NODE_BUILTINS = frozenset({
    "assert", "async_hooks", "buffer", "child_process", "cluster", "console",
    "constants", "crypto", "dgram", "diagnostics_channel", "dns", "domain",
    "events", "fs", "http", "http2", "https", "inspector", "module", "net",
    "os", "path", "perf_hooks", "process", "punycode", "querystring",
    "readline", "repl", "stream", "string_decoder", "sys", "timers", "tls",
    "trace_events", "tty", "url", "util", "v8", "vm", "wasi", "worker_threads",
    "zlib",
})

_SCOPED_NAME = re.compile(r"^(?:@([^/]+?)[/])?([^/]+?)$")
_SPECIAL_CHARS = re.compile(r"[~'!()*]")


def _is_url_friendly(part: str) -> bool:
    # Same character set encodeURIComponent leaves untouched.
    return quote(part, safe="!*'()") == part


def validate_package_name(name: str) -> ValidationResult:
    """Check *name* against npm package naming rules.

    Returns:
        A ``ValidationResult`` listing every error and warning found.
        ``result.valid`` is ``True`` only if both lists are empty.
    """
    result = ValidationResult()

    if not name:
        result.errors.append("name length must be greater than zero")
    if name.startswith("."):
        result.errors.append("name cannot start with a period")
    if name.startswith("_"):
        result.errors.append("name cannot start with an underscore")
    if name.strip() != name:
        result.errors.append("name cannot contain leading or trailing spaces")

    for blacklisted in BLACKLISTED_NAMES:
        if name.lower() == blacklisted:
            result.errors.append(f"{blacklisted} is a blacklisted name")

    if name in NODE_BUILTINS:
        result.warnings.append(f"{name} is a core module name")
    if len(name) > MAX_NAME_LENGTH:
        result.warnings.append(
            f"name can no longer contain more than {MAX_NAME_LENGTH} characters"
        )
    if name.lower() != name:
        result.warnings.append("name can no longer contain capital letters")
    if _SPECIAL_CHARS.search(name.split("/")[-1]):
        result.warnings.append(
            "name can no longer contain special characters (\"~'!()*\")"
        )

    if not _is_url_friendly(name):
        match = _SCOPED_NAME.match(name)
        scoped_ok = False
        if match and match.group(1) is not None:
            scoped_ok = _is_url_friendly(match.group(1)) and _is_url_friendly(match.group(2))
        if not scoped_ok:
            result.errors.append("name can only contain URL-friendly characters")

    return result


def check_app_name(app_name: str, reserved_names: Iterable[str]) -> None:
    """Validate the project name, printing every problem found.

    Raises:
        InvalidNameError: The name breaks npm naming rules.
        ReservedNameError: The name equals a dependency of the new project.
    """
    result = validate_package_name(app_name)
    if not result.valid:
        console.print(
            f'[red]Cannot create a project named [green]"{escape(app_name)}"[/green] '
            f"because of npm naming restrictions:[/red]\n"
        )
        for message in result.messages:
            console.print(f"[red]  * {escape(message)}[/red]")
        console.print("[red]\nPlease choose a different project name.[/red]")
        raise InvalidNameError(app_name, result)

    reserved = sorted(reserved_names)
    if app_name in reserved:
        console.print(
            f'[red]Cannot create a project named [green]"{escape(app_name)}"[/green] '
            f"because a dependency with the same name exists.\n"
            f"Due to the way npm works, the following names are not allowed:[/red]\n"
        )
        for dep_name in reserved:
            console.print(f"[cyan]  {escape(dep_name)}[/cyan]")
        console.print("[red]\nPlease choose a different project name.[/red]")
        raise ReservedNameError(app_name, reserved)
