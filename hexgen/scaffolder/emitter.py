"""Project emission: one dotnet project per layer.

``ProjectEmitter.create_project`` scaffolds the build unit, registers it in
the solution manifest, attaches its NuGet packages and wires its project
references, all driven by the tables in :mod:`hexgen.layers`.
"""

from __future__ import annotations

from pathlib import PurePosixPath

from hexgen.layers import get_layer
from hexgen.models import Project, Solution
from hexgen.toolchain import DotnetToolchain
from hexgen.utils import console, print_warning


class ProjectEmitter:
    """Creates and wires the project for a single layer.

    Calls are strictly sequential.  A failing dotnet command raises
    ``ExternalToolFailure`` out of :meth:`create_project`, leaving whatever
    was already created on disk.
    """

    def __init__(self, toolchain: DotnetToolchain) -> None:
        self.toolchain = toolchain

    async def create_project(self, solution: Solution, layer: str) -> Project:
        """Create, register and wire the project for *layer*.

        An already-existing project directory is reused as-is; the scaffold,
        package and reference commands are issued regardless.

        Returns:
            The ``Project`` appended to ``solution.projects``.

        Raises:
            ConfigurationError: Before any dotnet call, if the project already
                exists in *solution* or one of its edges has no project yet.
        """
        spec = get_layer(layer)
        project = solution.new_project(spec.name)
        solution.check_can_add(project.qualified_name, spec.edges)

        console.print(f"[cyan]Create project[/cyan] [bold]{project.qualified_name}[/bold]")

        if project.path.exists():
            print_warning(f"  Directory already exists: {project.path}")
        project.path.mkdir(parents=True, exist_ok=True)

        await self.toolchain.new_project(
            spec.kind, project.qualified_name, project.path, solution.framework
        )
        await self.toolchain.add_to_solution(solution.solution_file, project.csproj)

        await self.attach_packages(project, spec.packages)

        if not spec.is_source:
            await self.attach_references(solution, project, spec.edges)

        solution.add_project(project)
        console.print()
        return project

    async def attach_packages(self, project: Project, package_ids: tuple[str, ...]) -> None:
        """Add each package to *project*, in manifest order."""
        console.print(f"  Add nuget packages for project {project.qualified_name}")
        for package in package_ids:
            await self.toolchain.add_package(project.path, package)
            project.packages.append(package)

    async def attach_references(
        self, solution: Solution, project: Project, targets: tuple[str, ...]
    ) -> None:
        """Reference each target layer's project from *project*, in edge order."""
        for target in targets:
            target_name = solution.qualified_name(target)
            relative = str(PurePosixPath("..") / target_name / f"{target_name}.csproj")
            console.print(f"  Add reference [bold]{target_name}[/bold]")
            await self.toolchain.add_reference(project.path, relative)
            project.references.append(get_layer(target).name)
