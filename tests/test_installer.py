"""Unit tests for dependency installation (create_svelte.installer).

Tests cover:
- install_command for npm / cnpm / verbose
- install_dependencies success and InstallError carrying the command line
- parse_npm_cwd
- check_npm_can_read_cwd (match, mismatch, npm missing, unparseable output)
"""

from __future__ import annotations

from pathlib import Path

import pytest

from create_svelte.errors import InstallError, NpmCwdMismatchError
from create_svelte.installer import (
    check_npm_can_read_cwd,
    install_command,
    install_dependencies,
    parse_npm_cwd,
)
from create_svelte.models import ProjectRequest


# ---------------------------------------------------------------------------
# install_command / install_dependencies
# ---------------------------------------------------------------------------


class TestInstall:
    @pytest.mark.unit
    def test_npm_command(self):
        assert install_command(ProjectRequest(name="my-app")) == [
            "npm", "install", "--save", "--save-exact", "--loglevel", "error",
        ]

    @pytest.mark.unit
    def test_cnpm_verbose_command(self):
        cmd = install_command(ProjectRequest(name="my-app", use_cnpm=True, verbose=True))
        assert cmd[0] == "cnpm"
        assert cmd[-1] == "--verbose"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_runs_in_project_root(self, command_router, in_tmp_cwd: Path):
        command_router.route("npm", "install")
        outcome = await install_dependencies(ProjectRequest(name="my-app"))

        assert outcome.ok
        _, kwargs = command_router.calls[0]
        assert kwargs["cwd"] == str(in_tmp_cwd / "my-app")
        assert kwargs["stdout"] is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failure_carries_command_line(self, command_router, in_tmp_cwd: Path):
        command_router.route("npm", "install", returncode=1)

        with pytest.raises(InstallError) as exc_info:
            await install_dependencies(ProjectRequest(name="my-app"))

        assert exc_info.value.command == "npm install --save --save-exact --loglevel error"
        assert exc_info.value.exit_code == 1
        assert "npm install --save --save-exact --loglevel error" in str(exc_info.value)


# ---------------------------------------------------------------------------
# npm cwd check
# ---------------------------------------------------------------------------

NPM_CONFIG_LIST = """\
; "builtin" config from /usr/lib/node_modules/npm/npmrc

; node bin location = /usr/bin/node
; node version = v18.17.0
; npm local prefix = {cwd}
; npm version = 9.6.7
; cwd = {cwd}
; HOME = /home/dev
"""


class TestNpmCwd:
    @pytest.mark.unit
    def test_parse_npm_cwd(self):
        assert parse_npm_cwd(NPM_CONFIG_LIST.format(cwd="/work/app")) == "/work/app"

    @pytest.mark.unit
    def test_parse_npm_cwd_missing(self):
        assert parse_npm_cwd("; HOME = /home/dev\n") is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_matching_cwd_passes(self, command_router, tmp_project_dir: Path):
        command_router.route(
            "npm", "config", "list", stdout=NPM_CONFIG_LIST.format(cwd=tmp_project_dir)
        )
        await check_npm_can_read_cwd(tmp_project_dir)
        argv, kwargs = command_router.calls[0]
        assert kwargs["cwd"] == str(tmp_project_dir)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_mismatch_raises(self, command_router, tmp_project_dir: Path, capsys):
        command_router.route(
            "npm", "config", "list", stdout=NPM_CONFIG_LIST.format(cwd="/somewhere/else")
        )
        with pytest.raises(NpmCwdMismatchError) as exc_info:
            await check_npm_can_read_cwd(tmp_project_dir)

        assert exc_info.value.npm_cwd == "/somewhere/else"
        assert "/somewhere/else" in capsys.readouterr().out

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_npm_missing_passes(self, command_router, tmp_project_dir: Path):
        await check_npm_can_read_cwd(tmp_project_dir)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_no_cwd_line_passes(self, command_router, tmp_project_dir: Path):
        command_router.route("npm", "config", "list", stdout="; HOME = /home/dev")
        await check_npm_can_read_cwd(tmp_project_dir)
