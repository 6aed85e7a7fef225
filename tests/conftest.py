"""Shared pytest fixtures for the create-svelte test suite.

Provides reusable fixtures for:
- Temporary project directories and working directories
- A default ``ScaffoldConfig``
- Mock subprocess helpers (single process and a command router)
- A mocked npm registry
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from create_svelte.config import ScaffoldConfig
from create_svelte.versions import RegistryClient


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Temporary, existing project directory (auto-cleanup)."""
    project_dir = tmp_path / "my-app"
    project_dir.mkdir()
    yield project_dir


@pytest.fixture
def in_tmp_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test with ``tmp_path`` as the current working directory."""
    monkeypatch.chdir(tmp_path)
    return Path.cwd()


@pytest.fixture
def config() -> ScaffoldConfig:
    return ScaffoldConfig()


@pytest.fixture
def template_package_json() -> dict[str, Any]:
    """``package.json`` as shipped by the starter template."""
    return {
        "name": "svelte-app",
        "version": "0.0.1",
        "scripts": {
            "build": "rollup -c",
            "dev": "rollup -c -w",
            "start": "sirv public",
        },
        "devDependencies": {"svelte": "^3.0.0"},
    }


# ---------------------------------------------------------------------------
# Mock subprocesses
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory


class CommandRouter:
    """Fake ``asyncio.create_subprocess_exec`` that answers per command prefix.

    ``routes`` maps an argv prefix (tuple) to ``(stdout, returncode)`` or to a
    callable ``(argv, kwargs) -> (stdout, returncode)``. Unrouted commands
    behave like a missing binary. Every call is recorded in ``calls``.
    """

    def __init__(self, make_proc: Callable[..., AsyncMock]) -> None:
        self._make_proc = make_proc
        self.routes: dict[tuple[str, ...], Any] = {}
        self.calls: list[tuple[list[str], dict[str, Any]]] = []

    def route(self, *prefix: str, stdout: str = "", returncode: int = 0, handler=None) -> None:
        self.routes[tuple(prefix)] = handler or (stdout, returncode)

    def commands(self) -> list[str]:
        return [" ".join(argv) for argv, _ in self.calls]

    def called(self, *prefix: str) -> bool:
        return any(tuple(argv[: len(prefix)]) == prefix for argv, _ in self.calls)

    async def __call__(self, *argv: str, **kwargs: Any) -> AsyncMock:
        argv_list = list(argv)
        self.calls.append((argv_list, kwargs))
        best: tuple[str, ...] | None = None
        for prefix in self.routes:
            if tuple(argv_list[: len(prefix)]) == prefix and (
                best is None or len(prefix) > len(best)
            ):
                best = prefix
        if best is None:
            raise FileNotFoundError(f"No such file or directory: '{argv_list[0]}'")

        answer = self.routes[best]
        if callable(answer):
            answer = answer(argv_list, kwargs)
        stdout, returncode = answer
        return self._make_proc(stdout=stdout, returncode=returncode)


@pytest.fixture
def command_router(mock_subprocess):
    """Patch ``asyncio.create_subprocess_exec`` with a ``CommandRouter``."""
    router = CommandRouter(mock_subprocess)
    with patch("asyncio.create_subprocess_exec", side_effect=router.__call__):
        yield router


# ---------------------------------------------------------------------------
# Mock registry
# ---------------------------------------------------------------------------

@pytest.fixture
def registry_client(config: ScaffoldConfig):
    """Factory for a ``RegistryClient`` backed by ``httpx.MockTransport``.

    Usage:
        client = registry_client(status=200, body={"latest": "1.2.0"})
        client = registry_client(error=httpx.ConnectError("offline"))
    """
    def factory(
        status: int = 200,
        body: Any = None,
        error: Exception | None = None,
    ) -> RegistryClient:
        def handler(request: httpx.Request) -> httpx.Response:
            if error is not None:
                raise error
            content = json.dumps(body if body is not None else {}).encode("utf-8")
            return httpx.Response(status, content=content, request=request)

        return RegistryClient(config.dist_tags_url, transport=httpx.MockTransport(handler))

    return factory
