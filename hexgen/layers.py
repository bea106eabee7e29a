"""Layer graph and package manifest for the generated hexagonal solution.

The architecture is fixed: eight layers, each mapped to one project, with a
declarative table of reference edges and NuGet packages.  Everything here is
a pure lookup; the emitter consults these tables instead of branching on
layer names.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ConfigurationError(Exception):
    """Raised when an unknown layer is requested or a layer invariant breaks."""


class ProjectKind(str, Enum):
    """Build-unit kind, mapped to the dotnet template that scaffolds it."""
    LIBRARY = "classlib"
    SERVICE = "webapi"
    TEST_SUITE = "xunit"


# ---------------------------------------------------------------------------
# Package lists (manifest order is the attachment order)
# ---------------------------------------------------------------------------

_BASIC_PACKAGES: tuple[str, ...] = (
    "AutoMapper",
    "Microsoft.Extensions.DependencyInjection.Abstractions",
    "Microsoft.Extensions.Logging.Abstractions",
)

_DAPPER_PACKAGES: tuple[str, ...] = (
    "AutoMapper",
    "Dapper",
    "Dapper.FluentMap",
    "Dapper.FluentMap.Dommel",
    "Microsoft.Extensions.DependencyInjection.Abstractions",
    "Microsoft.Extensions.Logging.Abstractions",
    "Microsoft.Extensions.Configuration",
    "System.Data.SqlClient",
)

_EXTERNAL_SERVICES_PACKAGES: tuple[str, ...] = (
    "AutoMapper",
    "Microsoft.Extensions.DependencyInjection.Abstractions",
    "Microsoft.Extensions.Logging.Abstractions",
    "Microsoft.Extensions.Http",
)

_IOC_PACKAGES: tuple[str, ...] = (
    "AutoMapper.Extensions.Microsoft.DependencyInjection",
    "Microsoft.Extensions.Http",
    "Serilog.Enrichers.Environment",
    "Serilog.Extensions.Logging",
    "Serilog.Sinks.MSSqlServer",
    "Swashbuckle.AspNetCore.SwaggerGen",
    "Dapper",
    "Dapper.FluentMap",
    "Dapper.FluentMap.Dommel",
    "Microsoft.Extensions.Configuration",
)

_WEBAPI_PACKAGES: tuple[str, ...] = (
    "Microsoft.AspNetCore.Mvc.Versioning",
    "Microsoft.Extensions.DependencyInjection.Abstractions",
    "Microsoft.VisualStudio.Web.CodeGeneration.Design",
    "Swashbuckle.AspNetCore.Swagger",
    "Swashbuckle.AspNetCore.SwaggerGen",
    "Swashbuckle.AspNetCore.SwaggerUI",
)

_TESTS_PACKAGES: tuple[str, ...] = (
    "AutoFixture",
    "AutoMapper",
    "MockQueryable.Core",
    "MockQueryable.Moq",
    "Moq",
    "Serilog.Enrichers.Environment",
    "Serilog.Sinks.MSSqlServer",
    "ServiceStack.OrmLite.Sqlite",
    "SQLite",
)


# ---------------------------------------------------------------------------
# Layer model
# ---------------------------------------------------------------------------


class Layer(BaseModel):
    """One architectural slice and the project it becomes."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Project suffix, e.g. 'Dapper'")
    role: str = Field(..., description="Architectural role, e.g. 'DataAccess'")
    kind: ProjectKind = Field(default=ProjectKind.LIBRARY)
    packages: tuple[str, ...] = Field(default=())
    edges: tuple[str, ...] = Field(
        default=(),
        description="Referenced layer names, in attachment order",
    )

    @property
    def is_source(self) -> bool:
        """A source layer references nothing."""
        return not self.edges


# Declaration order is the topological order the driver walks.
LAYERS: tuple[Layer, ...] = (
    Layer(name="Domain", role="Domain", packages=_BASIC_PACKAGES),
    Layer(name="Helpers", role="Helpers", packages=_BASIC_PACKAGES),
    Layer(
        name="Dapper",
        role="DataAccess",
        packages=_DAPPER_PACKAGES,
        edges=("Domain", "Helpers"),
    ),
    Layer(
        name="ExternalServices",
        role="ExternalServices",
        packages=_EXTERNAL_SERVICES_PACKAGES,
        edges=("Domain", "Helpers"),
    ),
    Layer(
        name="Application",
        role="Application",
        packages=_BASIC_PACKAGES,
        edges=("Domain", "Helpers", "Dapper", "ExternalServices"),
    ),
    Layer(
        name="IoC",
        role="CrossCutting",
        packages=_IOC_PACKAGES,
        edges=("Domain", "Application", "Dapper", "ExternalServices", "Helpers"),
    ),
    Layer(
        name="WebAPI",
        role="Presentation",
        kind=ProjectKind.SERVICE,
        packages=_WEBAPI_PACKAGES,
        edges=("Domain", "Helpers", "IoC"),
    ),
    Layer(
        name="Tests",
        role="Tests",
        kind=ProjectKind.TEST_SUITE,
        packages=_TESTS_PACKAGES,
        edges=(
            "Domain",
            "Application",
            "Dapper",
            "ExternalServices",
            "IoC",
            "Helpers",
            "WebAPI",
        ),
    ),
)

_BY_NAME: dict[str, Layer] = {layer.name: layer for layer in LAYERS}
_BY_ROLE: dict[str, Layer] = {layer.role: layer for layer in LAYERS}


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


def get_layer(name: str) -> Layer:
    """Resolve a layer by project suffix (``'IoC'``) or role (``'CrossCutting'``).

    Raises:
        ConfigurationError: If *name* matches no known layer.
    """
    layer = _BY_NAME.get(name) or _BY_ROLE.get(name)
    if layer is None:
        raise ConfigurationError(
            f"Unknown layer '{name}'. Known layers: {', '.join(_BY_NAME)}"
        )
    return layer


def edges(name: str) -> tuple[str, ...]:
    """Return the layers *name* references, in attachment order."""
    return get_layer(name).edges


def packages(name: str) -> tuple[str, ...]:
    """Return the NuGet package ids for *name*, in manifest order."""
    return get_layer(name).packages


def topological_order() -> list[str]:
    """Return every layer name, sources first."""
    return [layer.name for layer in LAYERS]


def check_acyclic() -> None:
    """Verify every edge points at a layer declared earlier.

    Raises:
        ConfigurationError: On a forward, self or unknown reference.
    """
    seen: set[str] = set()
    for layer in LAYERS:
        for target in layer.edges:
            if target not in seen:
                raise ConfigurationError(
                    f"Layer '{layer.name}' references '{target}', "
                    "which is not created before it"
                )
        seen.add(layer.name)
