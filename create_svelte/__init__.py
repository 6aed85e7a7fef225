"""create-svelte -- scaffold a new Svelte project from a remote template.

The tool validates the requested project name, makes sure the target
directory is safe to write into, fetches the starter template with
``npx degit``, stamps ``package.json`` with the project metadata and finally
installs dependencies with ``npm`` (or ``cnpm``).

Quick usage::

    from create_svelte import ProjectRequest, ScaffoldConfig, Scaffolder

    request = ProjectRequest(name="my-svelte-app")
    outcome = await Scaffolder(ScaffoldConfig()).run(request)
"""

__version__ = "1.0.0"

from create_svelte.config import ScaffoldConfig
from create_svelte.models import ProjectRequest, ScaffoldOutcome
from create_svelte.pipeline import Scaffolder

__all__ = [
    "ProjectRequest",
    "ScaffoldConfig",
    "ScaffoldOutcome",
    "Scaffolder",
    "__version__",
]
