"""create-svelte configuration.

Centralised, typed configuration for the scaffolder. Settings use a Pydantic
v2 model so they are validated at construction time and can be overridden
from environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, Field, field_validator


class ScaffoldConfig(BaseModel):
    """Global scaffolder configuration.

    Instances are created once by the CLI entry point and passed explicitly
    through every stage of the scaffold flow.
    """

    package_name: str = Field(
        default="db-create-svelte",
        min_length=1,
        description="Published name of this tool, used for the self-version check",
    )
    registry_url: str = Field(default="https://registry.npmjs.org", min_length=8)
    registry_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Registry request timeout in seconds (None waits indefinitely)",
    )
    template_source: str = Field(
        default="dbMongola/svelte-template",
        min_length=1,
        description="degit source of the starter template",
    )
    mpa_suffix: str = Field(default="-mpa", description="Suffix selecting the multi-page template")
    reserved_names: list[str] = Field(
        default_factory=lambda: ["svelte"],
        description="Dependency names a new project may not take",
    )
    project_version: str = Field(default="1.0.0", description="Version stamped into package.json")
    min_npm_version: str = Field(default="6.0.0")
    min_node_version: str = Field(default="10.0.0")
    issues_url: str = Field(
        default="https://github.com/dbMongola/db-create-svelte/issues/new",
    )

    @field_validator("reserved_names")
    @classmethod
    def _sort_reserved(cls, value: list[str]) -> list[str]:
        """Keep reserved names sorted so error listings are deterministic."""
        return sorted(value)

    @property
    def dist_tags_url(self) -> str:
        """Registry endpoint returning ``{"latest": "<version>", ...}`` for this tool."""
        return f"{self.registry_url.rstrip('/')}/-/package/{self.package_name}/dist-tags"

    @classmethod
    def from_env(cls) -> "ScaffoldConfig":
        """Build a ``ScaffoldConfig`` from environment variables.

        Recognised variables (all optional):
            CREATE_SVELTE_PACKAGE_NAME, CREATE_SVELTE_REGISTRY_URL,
            CREATE_SVELTE_REGISTRY_TIMEOUT, CREATE_SVELTE_TEMPLATE_SOURCE,
            CREATE_SVELTE_RESERVED_NAMES, CREATE_SVELTE_MIN_NPM_VERSION,
            CREATE_SVELTE_MIN_NODE_VERSION.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("CREATE_SVELTE_PACKAGE_NAME"):
            kwargs["package_name"] = os.environ["CREATE_SVELTE_PACKAGE_NAME"]
        if os.environ.get("CREATE_SVELTE_REGISTRY_URL"):
            kwargs["registry_url"] = os.environ["CREATE_SVELTE_REGISTRY_URL"]
        if os.environ.get("CREATE_SVELTE_REGISTRY_TIMEOUT"):
            kwargs["registry_timeout"] = float(os.environ["CREATE_SVELTE_REGISTRY_TIMEOUT"])
        if os.environ.get("CREATE_SVELTE_TEMPLATE_SOURCE"):
            kwargs["template_source"] = os.environ["CREATE_SVELTE_TEMPLATE_SOURCE"]
        if os.environ.get("CREATE_SVELTE_RESERVED_NAMES"):
            names = os.environ["CREATE_SVELTE_RESERVED_NAMES"]
            kwargs["reserved_names"] = [n.strip() for n in names.split(",") if n.strip()]
        if os.environ.get("CREATE_SVELTE_MIN_NPM_VERSION"):
            kwargs["min_npm_version"] = os.environ["CREATE_SVELTE_MIN_NPM_VERSION"]
        if os.environ.get("CREATE_SVELTE_MIN_NODE_VERSION"):
            kwargs["min_node_version"] = os.environ["CREATE_SVELTE_MIN_NODE_VERSION"]

        return cls(**kwargs)
