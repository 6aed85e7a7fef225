"""Scaffold flow orchestrator.

Runs the stages that turn a ``ProjectRequest`` into a ready-to-use project:

1. VALIDATE  -- check the project name against npm rules and reserved names.
2. PREPARE   -- create the target directory and make sure it is safe to use.
3. CHECK     -- advisory version checks for this tool, Node.js and npm.
4. FETCH     -- clone the starter template with ``npx degit``.
5. STAMP     -- write the project name and version into ``package.json``.
6. INSTALL   -- install dependencies with npm (or cnpm).

The version checks print warnings but never stop the flow. Stages run
strictly one after another.
"""

from __future__ import annotations

from rich.markup import escape

from create_svelte import __version__
from create_svelte.config import ScaffoldConfig
from create_svelte.directory import ensure_safe_directory
from create_svelte.errors import FetchError
from create_svelte.installer import check_npm_can_read_cwd, install_dependencies
from create_svelte.models import ProjectRequest, ScaffoldOutcome
from create_svelte.template import fetch_template, update_package_json
from create_svelte.utils import console, print_error, print_success
from create_svelte.validation import check_app_name
from create_svelte.versions import (
    RegistryClient,
    check_node_version,
    check_npm_version,
    check_self_version,
)


class Scaffolder:
    """Drives one scaffold run.

    Attributes:
        config: Scaffolder configuration.
        registry: Client used for the self-version check.
    """

    def __init__(self, config: ScaffoldConfig, registry: RegistryClient | None = None) -> None:
        self.config = config
        self.registry = registry or RegistryClient(
            config.dist_tags_url, timeout=config.registry_timeout
        )

    async def run(
        self, request: ProjectRequest, current_version: str = __version__
    ) -> ScaffoldOutcome:
        """Create the project described by *request*.

        A failed template fetch is reported and the run continues; a failed
        install is not caught.

        Raises:
            UserInputError: The project name is not usable.
            EnvironmentConflictError: The target directory, ``package.json`` or
                the npm setup prevents the project from being created.
            InstallError: Dependency installation failed.
        """
        root = request.root
        outcome = ScaffoldOutcome(root=root, app_name=request.app_name)

        check_app_name(outcome.app_name, self.config.reserved_names)
        root.mkdir(parents=True, exist_ok=True)
        ensure_safe_directory(root, request.name)
        console.print()

        await self.check_versions(current_version)

        try:
            await fetch_template(request, self.config)
            outcome.template_fetched = True
        except FetchError as exc:
            outcome.fetch_error = exc
            print_error(escape(str(exc)))

        variant = "multi-page" if request.multi_page else "single-page"
        console.print(
            f"Creating a new Svelte {variant} app in [green]{escape(str(root))}[/green]."
        )
        console.print()

        outcome.package_json = update_package_json(root, outcome.app_name, self.config)

        if not request.use_cnpm:
            await check_npm_can_read_cwd(root)

        await install_dependencies(request)
        self.print_next_steps(request)
        return outcome

    async def check_versions(self, current_version: str) -> None:
        """Run the advisory checks: this tool, Node.js and npm, in that order."""
        await check_self_version(self.config, current_version, self.registry)
        await check_node_version(self.config)
        await check_npm_version(self.config)

    @staticmethod
    def print_next_steps(request: ProjectRequest) -> None:
        console.print()
        console.print()
        print_success("Dependencies installed.")
        console.print()
        console.print(f"[bold blue]    cd {escape(request.name)}[/bold blue]")
        console.print()
        console.print("[bold blue]    npm start[/bold blue]")
        console.print()
        print_success("to start your project!")
