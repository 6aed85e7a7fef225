"""Value objects passed between the stages of the scaffold flow."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import semver


def version_lt(current: str, other: str) -> bool:
    """Return ``True`` if *current* is strictly lower than *other*.

    Versions are compared by semver rules, so ``1.0.0-1`` is a prerelease
    of ``1.0.0``. Unparseable versions never compare as lower.
    """
    try:
        return semver.Version.parse(current.lstrip("v")) < semver.Version.parse(other.lstrip("v"))
    except ValueError:
        return False


@dataclass(frozen=True)
class ProjectRequest:
    """What the user asked for on the command line."""

    name: str
    use_cnpm: bool = False
    verbose: bool = False
    multi_page: bool = False

    @property
    def root(self) -> Path:
        """Absolute path of the project directory."""
        return Path(self.name).resolve()

    @property
    def app_name(self) -> str:
        """Package name of the new project (last component of the root)."""
        return self.root.name

    @property
    def package_manager(self) -> str:
        return "cnpm" if self.use_cnpm else "npm"

    def template_suffix(self, mpa_suffix: str = "-mpa") -> str:
        """Suffix appended to the template source for the selected variant."""
        return mpa_suffix if self.multi_page else ""


@dataclass
class ValidationResult:
    """Outcome of checking a name against npm package naming rules."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        """Valid for new packages: no errors and no warnings."""
        return not self.errors and not self.warnings

    @property
    def messages(self) -> list[str]:
        return [*self.errors, *self.warnings]


@dataclass(frozen=True)
class DirectoryConflict:
    """A pre-existing entry that blocks scaffolding."""

    filename: str
    is_directory: bool = False

    def display(self) -> str:
        return f"{self.filename}/" if self.is_directory else self.filename


@dataclass
class DirectoryConflictReport:
    """Entries of the target directory that are not known to be harmless."""

    conflicts: list[DirectoryConflict] = field(default_factory=list)

    @property
    def is_safe(self) -> bool:
        return not self.conflicts


@dataclass(frozen=True)
class VersionInfo:
    """Running version of the tool versus the latest published one."""

    current_version: str
    latest_version: str | None = None

    @property
    def is_outdated(self) -> bool:
        if not self.latest_version:
            return False
        return version_lt(self.current_version, self.latest_version)


@dataclass(frozen=True)
class ToolVersion:
    """Installed version of an external tool checked against a minimum."""

    name: str
    version: str | None
    minimum: str

    @property
    def meets_minimum(self) -> bool:
        """``False`` only when a version was read and it is below the minimum."""
        if self.version is None:
            return True
        return not version_lt(self.version, self.minimum)


@dataclass(frozen=True)
class SubprocessOutcome:
    """Exit status of an external command plus whatever output was captured."""

    exit_code: int
    command_line: str
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


@dataclass
class ScaffoldOutcome:
    """Result of a completed scaffold run.

    ``fetch_error`` is set when the template fetch failed and the run carried
    on regardless.
    """

    root: Path
    app_name: str
    template_fetched: bool = False
    fetch_error: Exception | None = None
    package_json: Path | None = None
