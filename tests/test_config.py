"""Unit tests for ScaffoldConfig (create_svelte.config).

Tests cover:
- defaults and derived dist_tags_url
- reserved name sorting
- validation of the registry timeout
- from_env overrides
"""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from create_svelte.config import ScaffoldConfig


class TestScaffoldConfig:
    @pytest.mark.unit
    def test_defaults(self):
        config = ScaffoldConfig()
        assert config.package_name == "db-create-svelte"
        assert config.template_source == "dbMongola/svelte-template"
        assert config.mpa_suffix == "-mpa"
        assert config.reserved_names == ["svelte"]
        assert config.project_version == "1.0.0"
        assert config.min_npm_version == "6.0.0"
        assert config.min_node_version == "10.0.0"
        assert config.registry_timeout is None

    @pytest.mark.unit
    def test_dist_tags_url_strips_trailing_slash(self):
        config = ScaffoldConfig(registry_url="https://registry.npmmirror.com/", package_name="x")
        assert config.dist_tags_url == "https://registry.npmmirror.com/-/package/x/dist-tags"

    @pytest.mark.unit
    def test_reserved_names_sorted(self):
        config = ScaffoldConfig(reserved_names=["svelte", "rollup"])
        assert config.reserved_names == ["rollup", "svelte"]

    @pytest.mark.unit
    def test_non_positive_timeout_rejected(self):
        with pytest.raises(ValidationError):
            ScaffoldConfig(registry_timeout=0)

    @pytest.mark.unit
    def test_empty_template_source_rejected(self):
        with pytest.raises(ValidationError):
            ScaffoldConfig(template_source="")


class TestFromEnv:
    @pytest.mark.unit
    def test_no_env_gives_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            assert ScaffoldConfig.from_env() == ScaffoldConfig()

    @pytest.mark.unit
    def test_overrides(self):
        env = {
            "CREATE_SVELTE_PACKAGE_NAME": "my-create-svelte",
            "CREATE_SVELTE_REGISTRY_URL": "https://registry.example.com",
            "CREATE_SVELTE_REGISTRY_TIMEOUT": "2.5",
            "CREATE_SVELTE_TEMPLATE_SOURCE": "acme/svelte-starter",
            "CREATE_SVELTE_RESERVED_NAMES": "svelte, sirv ,rollup",
            "CREATE_SVELTE_MIN_NPM_VERSION": "7.0.0",
            "CREATE_SVELTE_MIN_NODE_VERSION": "14.0.0",
        }
        with patch.dict(os.environ, env, clear=True):
            config = ScaffoldConfig.from_env()

        assert config.package_name == "my-create-svelte"
        assert config.registry_timeout == 2.5
        assert config.template_source == "acme/svelte-starter"
        assert config.reserved_names == ["rollup", "sirv", "svelte"]
        assert config.min_npm_version == "7.0.0"
        assert config.min_node_version == "14.0.0"
        assert config.dist_tags_url == (
            "https://registry.example.com/-/package/my-create-svelte/dist-tags"
        )
