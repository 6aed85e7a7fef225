"""Advisory version checks.

Compares the running tool against the latest published release and checks
the locally installed Node.js and npm. Every check here is best effort: a
failed lookup skips the check, an outdated version prints a warning, and
nothing ever stops the scaffold flow.
"""

from __future__ import annotations

import httpx

from create_svelte.config import ScaffoldConfig
from create_svelte.models import ToolVersion, VersionInfo
from create_svelte.utils import console, print_warning, read_command_output


class RegistryClient:
    """Async client for the npm registry dist-tags endpoint.

    Fetches ``{"latest": "<version>", ...}`` for one package. Any transport
    error, non-200 status or malformed body yields ``None`` instead of raising.
    """

    def __init__(
        self,
        url: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        """Return a fresh ``AsyncClient`` with our timeout (``None`` disables it)."""
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            transport=self._transport,
            follow_redirects=True,
        )

    async def latest_version(self) -> str | None:
        try:
            async with self._client() as client:
                response = await client.get(self.url)
        except httpx.HTTPError:
            return None

        if response.status_code != 200:
            return None
        try:
            data = response.json()
        except ValueError:
            return None

        latest = data.get("latest") if isinstance(data, dict) else None
        return latest if isinstance(latest, str) and latest else None


async def resolve_latest_version(
    config: ScaffoldConfig,
    client: RegistryClient | None = None,
) -> str | None:
    """Find the latest published version of this tool.

    The registry is queried directly first. If that fails, fall back to the
    slower ``npm view <package> version``, which honours private registries
    and proxies configured for npm.
    """
    client = client or RegistryClient(config.dist_tags_url, timeout=config.registry_timeout)
    latest = await client.latest_version()
    if latest:
        return latest
    return await read_command_output(["npm", "view", config.package_name, "version"])


async def check_self_version(
    config: ScaffoldConfig,
    current_version: str,
    client: RegistryClient | None = None,
) -> VersionInfo:
    """Warn if a newer release of this tool has been published."""
    info = VersionInfo(
        current_version=current_version,
        latest_version=await resolve_latest_version(config, client),
    )
    if info.is_outdated:
        console.print()
        print_warning(
            f"You are running `{config.package_name}` {info.current_version}, "
            f"which is behind the latest release ({info.latest_version})."
        )
        console.print()
    return info


async def check_npm_version(config: ScaffoldConfig) -> ToolVersion:
    """Warn if the installed npm is older than ``config.min_npm_version``."""
    npm = ToolVersion(
        name="npm",
        version=await read_command_output(["npm", "--version"]),
        minimum=config.min_npm_version,
    )
    if not npm.meets_minimum:
        print_warning(
            f"You are using npm {npm.version} so the project will be bootstrapped "
            f"with an old unsupported version of tools.\n\n"
            f"Please update to npm {npm.minimum} or higher for a better, fully "
            f"supported experience.\n"
        )
    return npm


async def check_node_version(config: ScaffoldConfig) -> ToolVersion:
    """Warn if the installed Node.js is older than ``config.min_node_version``."""
    raw = await read_command_output(["node", "--version"])
    node = ToolVersion(
        name="node",
        version=raw.lstrip("v") if raw else None,
        minimum=config.min_node_version,
    )
    if not node.meets_minimum:
        print_warning(
            f"You are using Node {node.version}. Projects created with an old "
            f"version of Node will not be supported.\n\n"
            f"Please update to Node {node.minimum} or higher for a better, fully "
            f"supported experience.\n"
        )
    return node
