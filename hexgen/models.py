"""Pydantic models for the solution being generated.

A ``Solution`` owns an ordered list of ``Project`` entries, one per layer,
appended in creation order.  The solution also carries the explicit context
(root directory, target framework) that every toolchain call and template
render needs, so nothing depends on the process working directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from pydantic import BaseModel, Field

from hexgen.layers import ConfigurationError, ProjectKind, get_layer


class Project(BaseModel):
    """One compiled unit belonging to exactly one layer."""

    layer: str = Field(..., description="Layer name, e.g. 'WebAPI'")
    qualified_name: str = Field(..., description="'{solution}.{layer}'")
    path: Path = Field(..., description="Project directory")
    kind: ProjectKind = Field(default=ProjectKind.LIBRARY)
    packages: list[str] = Field(default_factory=list)
    references: list[str] = Field(
        default_factory=list,
        description="Referenced layer names, in attachment order",
    )

    @property
    def csproj(self) -> Path:
        """Path to the project's ``.csproj`` file."""
        return self.path / f"{self.qualified_name}.csproj"


class Solution(BaseModel):
    """Root container for the generated projects."""

    name: str = Field(..., description="Solution name, used as namespace root")
    directory: Path = Field(..., description="Parent directory of the solution root")
    framework: str = Field(default="netcoreapp3.1")
    projects: list[Project] = Field(default_factory=list)

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    @property
    def root(self) -> Path:
        """``{directory}/{name}``, where the ``.sln`` file lives."""
        return self.directory / self.name

    @property
    def solution_file(self) -> Path:
        return self.root / f"{self.name}.sln"

    def qualified_name(self, layer: str) -> str:
        """Return ``'{solution}.{layer}'`` for a known layer."""
        return f"{self.name}.{get_layer(layer).name}"

    def project_path(self, layer: str) -> Path:
        """Return the directory of the project for *layer*."""
        return self.root / self.qualified_name(layer)

    def csproj_path(self, layer: str) -> Path:
        name = self.qualified_name(layer)
        return self.root / name / f"{name}.csproj"

    # ------------------------------------------------------------------
    # Project registry
    # ------------------------------------------------------------------

    def new_project(self, layer: str) -> Project:
        """Build (but do not register) the ``Project`` for *layer*."""
        spec = get_layer(layer)
        return Project(
            layer=spec.name,
            qualified_name=self.qualified_name(spec.name),
            path=self.project_path(spec.name),
            kind=spec.kind,
        )

    def check_can_add(self, qualified_name: str, references: Iterable[str]) -> None:
        """Reject a duplicate name or a reference to a layer not added yet.

        Raises:
            ConfigurationError: If the qualified name is already taken or a
                referenced layer has no project in the solution.
        """
        existing = {p.qualified_name for p in self.projects}
        if qualified_name in existing:
            raise ConfigurationError(
                f"Project '{qualified_name}' already exists in solution '{self.name}'"
            )
        added = {p.layer for p in self.projects}
        missing = [ref for ref in references if get_layer(ref).name not in added]
        if missing:
            raise ConfigurationError(
                f"Project '{qualified_name}' references layers not yet "
                f"created: {', '.join(missing)}"
            )

    def add_project(self, project: Project) -> None:
        """Register *project*, enforcing unique names and backward-only references."""
        self.check_can_add(project.qualified_name, project.references)
        self.projects.append(project)

    def get_project(self, layer: str) -> Project | None:
        name = get_layer(layer).name
        for project in self.projects:
            if project.layer == name:
                return project
        return None

    @property
    def project_names(self) -> list[str]:
        return [p.qualified_name for p in self.projects]
