"""Environment report printed by ``--info``.

Collects the details worth attaching to a bug report: operating system,
toolchain versions, installed browsers and the relevant npm packages.
Anything that cannot be found is listed as ``Not Found``.
"""

from __future__ import annotations

import json
import os
import platform
import shutil
import sys
from dataclasses import dataclass, field
from pathlib import Path

from rich.panel import Panel
from rich.table import Table

from create_svelte import __version__
from create_svelte.config import ScaffoldConfig
from create_svelte.utils import console, load_json, read_command_output, run_command

NOT_FOUND = "Not Found"

BINARIES: dict[str, str] = {
    "Node": "node",
    "npm": "npm",
    "Yarn": "yarn",
}

# Executables looked up on PATH, then well-known install locations.
BROWSERS: dict[str, dict[str, list[str]]] = {
    "Chrome": {
        "commands": ["google-chrome", "google-chrome-stable", "chrome", "chromium"],
        "paths": [
            "/Applications/Google Chrome.app/Contents/MacOS/Google Chrome",
            r"C:\Program Files\Google\Chrome\Application\chrome.exe",
        ],
    },
    "Edge": {
        "commands": ["microsoft-edge", "microsoft-edge-stable", "msedge"],
        "paths": [
            "/Applications/Microsoft Edge.app/Contents/MacOS/Microsoft Edge",
            r"C:\Program Files (x86)\Microsoft\Edge\Application\msedge.exe",
        ],
    },
    "Internet Explorer": {
        "commands": [],
        "paths": [r"C:\Program Files\Internet Explorer\iexplore.exe"],
    },
    "Firefox": {
        "commands": ["firefox"],
        "paths": [
            "/Applications/Firefox.app/Contents/MacOS/firefox",
            r"C:\Program Files\Mozilla Firefox\firefox.exe",
        ],
    },
    "Safari": {
        "commands": [],
        "paths": ["/Applications/Safari.app"],
    },
}

LOCAL_PACKAGES = ("svelte",)


@dataclass
class EnvironmentReport:
    """Ordered ``section -> [(label, value), ...]`` listing."""

    sections: dict[str, list[tuple[str, str]]] = field(default_factory=dict)

    def add(self, section: str, label: str, value: str | None) -> None:
        self.sections.setdefault(section, []).append((label, value or NOT_FOUND))

    def get(self, section: str, label: str) -> str | None:
        for key, value in self.sections.get(section, []):
            if key == label:
                return value
        return None


def find_browser(commands: list[str], paths: list[str]) -> str | None:
    for command in commands:
        found = shutil.which(command)
        if found:
            return found
    for candidate in paths:
        if Path(candidate).exists():
            return candidate
    return None


async def browser_version(executable: str) -> str:
    """Best-effort version of a browser; falls back to its install path."""
    if executable.endswith(".app") or sys.platform == "win32":
        return executable
    output = await read_command_output([executable, "--version"])
    return output.splitlines()[0] if output else executable


def local_package_version(package: str, cwd: Path) -> str | None:
    """Version of *package* installed in ``<cwd>/node_modules``."""
    manifest = cwd / "node_modules" / package / "package.json"
    try:
        data = load_json(manifest)
    except (OSError, json.JSONDecodeError):
        return None
    return data.get("version") if isinstance(data, dict) else None


async def global_package_version(package: str) -> str | None:
    """Version of *package* installed globally with npm."""
    outcome = await run_command(["npm", "ls", "-g", "--depth=0", "--json", package])
    if not outcome.stdout:
        return None
    try:
        data = json.loads(outcome.stdout)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict):
        return None
    dependencies = data.get("dependencies")
    if not isinstance(dependencies, dict):
        return None
    entry = dependencies.get(package)
    return entry.get("version") if isinstance(entry, dict) else None


async def collect_environment(config: ScaffoldConfig, cwd: Path | None = None) -> EnvironmentReport:
    cwd = cwd or Path.cwd()
    report = EnvironmentReport()

    report.add("System", "OS", f"{platform.system()} {platform.release()}".strip())
    report.add("System", "CPU", f"({os.cpu_count() or '?'}) {platform.machine() or 'unknown'}")

    for label, command in BINARIES.items():
        output = await read_command_output([command, "--version"])
        report.add("Binaries", label, output.lstrip("v") if output else None)

    for label, locations in BROWSERS.items():
        executable = find_browser(locations["commands"], locations["paths"])
        report.add("Browsers", label, await browser_version(executable) if executable else None)

    for package in LOCAL_PACKAGES:
        report.add("npmPackages", package, local_package_version(package, cwd))

    report.add(
        "npmGlobalPackages",
        config.package_name,
        await global_package_version(config.package_name),
    )
    return report


def render_environment(report: EnvironmentReport) -> Table:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="cyan", justify="right")
    table.add_column("Value", style="white")

    for section, rows in report.sections.items():
        table.add_row(f"[bold]{section}[/bold]", "")
        for label, value in rows:
            table.add_row(label, value if value != NOT_FOUND else f"[dim]{value}[/dim]")
        table.add_row("", "")
    return table


async def print_environment_info(config: ScaffoldConfig) -> EnvironmentReport:
    """Print the environment report used when filing issues."""
    console.print("\n[bold]Environment Info:[/bold]")
    console.print(f"\n  current version of {config.package_name}: {__version__}")
    console.print(f"  running from {Path(__file__).resolve().parent}")

    report = await collect_environment(config)
    console.print(
        Panel(
            render_environment(report),
            title=f"[bold cyan]{config.package_name}[/bold cyan]",
            border_style="cyan",
            padding=(1, 2),
        )
    )
    return report
