"""Starter template retrieval and ``package.json`` stamping."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from create_svelte.config import ScaffoldConfig
from create_svelte.errors import FetchError, PackageJsonError
from create_svelte.models import ProjectRequest, SubprocessOutcome
from create_svelte.utils import load_json, print_info, run_command, save_json


def template_command(request: ProjectRequest, config: ScaffoldConfig) -> list[str]:
    """Build the ``npx degit`` invocation for the requested template variant."""
    source = config.template_source + request.template_suffix(config.mpa_suffix)
    return ["npx", "degit", source, str(request.root)]


async def fetch_template(request: ProjectRequest, config: ScaffoldConfig) -> SubprocessOutcome:
    """Clone the starter template into the project root.

    The command inherits the terminal so degit's progress is shown live.

    Raises:
        FetchError: degit exited with a non-zero code.
    """
    print_info("Fetching the template...")
    outcome = await run_command(template_command(request, config), capture=False)
    if not outcome.ok:
        raise FetchError(outcome.command_line, outcome.exit_code)
    return outcome


def project_metadata(app_name: str, config: ScaffoldConfig) -> dict[str, Any]:
    return {
        "name": app_name,
        "version": config.project_version,
        "private": True,
    }


def update_package_json(root: Path, app_name: str, config: ScaffoldConfig) -> Path:
    """Overlay the project metadata onto the template's ``package.json``.

    Every other field of the template is kept as is.

    Raises:
        PackageJsonError: The file is missing or is not valid JSON.
    """
    path = root / "package.json"
    try:
        data = load_json(path)
    except FileNotFoundError as exc:
        raise PackageJsonError(f"No package.json found in {root}") from exc
    except json.JSONDecodeError as exc:
        raise PackageJsonError(f"Could not parse {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise PackageJsonError(f"{path} does not contain a JSON object")

    save_json({**data, **project_metadata(app_name, config)}, path)
    return path
