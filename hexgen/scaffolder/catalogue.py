"""The fixed catalogue of boilerplate files emitted into the solution.

Each ``TemplateArtifact`` says *which* template goes *where*; the text
itself lives in ``templates/<Layer>/*.j2``.  The render context for an
artifact exposes only the namespaces of its own layer and the layers that
layer references, so a template cannot import a project it has no edge to.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Any

from hexgen.layers import get_layer
from hexgen.models import Solution


@dataclass(frozen=True)
class TemplateArtifact:
    """A boilerplate file destined for one project."""

    name: str
    layer: str
    path: str
    template: str
    replaces: str | None = None

    def relative_path(self) -> PurePosixPath:
        """Destination path inside the project directory."""
        return PurePosixPath(self.path)


ARTIFACTS: tuple[TemplateArtifact, ...] = (
    # Composition root and HTTP entry point
    TemplateArtifact("bootstraper", "IoC", "Bootstraper.cs", "IoC/Bootstraper.cs.j2"),
    TemplateArtifact("startup", "WebAPI", "Startup.cs", "WebAPI/Startup.cs.j2"),
    TemplateArtifact(
        "example_controller",
        "WebAPI",
        "Controllers/v1/WeatherForecastController.cs",
        "WebAPI/WeatherForecastController.cs.j2",
        replaces="Controllers/WeatherForecastController.cs",
    ),
    TemplateArtifact(
        "launch_settings",
        "WebAPI",
        "Properties/launchSettings.json",
        "WebAPI/launchSettings.json.j2",
    ),
    # Domain
    TemplateArtifact(
        "database_enum",
        "Domain",
        "Enums/EnumDatabaseConnection.cs",
        "Domain/EnumDatabaseConnection.cs.j2",
    ),
    TemplateArtifact("client_model", "Domain", "Models/Client.cs", "Domain/Client.cs.j2"),
    TemplateArtifact(
        "dapper_map", "Dapper", "Maps/ClientMap.cs", "Dapper/ClientMap.cs.j2"
    ),
    TemplateArtifact(
        "connection_factory",
        "Dapper",
        "Factory/DbConnectionFactory.cs",
        "Dapper/DbConnectionFactory.cs.j2",
    ),
    TemplateArtifact(
        "connection_factory_interface",
        "Dapper",
        "Factory/IDbConnectionFactory.cs",
        "Dapper/IDbConnectionFactory.cs.j2",
    ),
    TemplateArtifact(
        "unit_of_work_interface",
        "Domain",
        "Interfaces/Repositories/IUnitOfWork.cs",
        "Domain/IUnitOfWork.cs.j2",
    ),
    TemplateArtifact(
        "crud_repository_interface",
        "Domain",
        "Interfaces/Repositories/ICrudRepository.cs",
        "Domain/ICrudRepository.cs.j2",
    ),
    TemplateArtifact(
        "client_repository_interface",
        "Domain",
        "Interfaces/Repositories/IClientRepository.cs",
        "Domain/IClientRepository.cs.j2",
    ),
    TemplateArtifact(
        "unit_of_work",
        "Dapper",
        "Repositories/UnitOfWork.cs",
        "Dapper/UnitOfWork.cs.j2",
    ),
    TemplateArtifact(
        "crud_repository",
        "Dapper",
        "Repositories/CrudRepository.cs",
        "Dapper/CrudRepository.cs.j2",
    ),
    TemplateArtifact(
        "client_repository",
        "Dapper",
        "Repositories/ClientRepository.cs",
        "Dapper/ClientRepository.cs.j2",
    ),
    # Outbound HTTP
    TemplateArtifact(
        "http_interface",
        "Domain",
        "Interfaces/Repositories/ExternalServices/IHTTP.cs",
        "Domain/IHTTP.cs.j2",
    ),
    TemplateArtifact(
        "http_client", "ExternalServices", "Base/HTTP.cs", "ExternalServices/HTTP.cs.j2"
    ),
)


def get_artifact(name: str) -> TemplateArtifact:
    for artifact in ARTIFACTS:
        if artifact.name == name:
            return artifact
    raise KeyError(f"Unknown template artifact '{name}'")


def build_context(solution: Solution, artifact: TemplateArtifact) -> dict[str, Any]:
    """Build the Jinja2 context for rendering *artifact* into *solution*.

    ``namespace`` is the destination project's root namespace; ``ns`` maps
    each referenced layer to its root namespace.
    """
    layer = get_layer(artifact.layer)
    return {
        "solution_name": solution.name,
        "framework": solution.framework,
        "namespace": solution.qualified_name(layer.name),
        "ns": {edge: solution.qualified_name(edge) for edge in layer.edges},
    }
