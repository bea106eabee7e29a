"""Writes the template catalogue into an existing project tree."""

from __future__ import annotations

import asyncio
from pathlib import Path, PurePosixPath

from hexgen.models import Solution
from hexgen.scaffolder.catalogue import ARTIFACTS, TemplateArtifact, build_context
from hexgen.scaffolder.templates import TemplateRenderer
from hexgen.utils import console


class TemplateWriter:
    """Renders each ``TemplateArtifact`` into its destination project.

    Destination projects must already exist; the driver guarantees this by
    running the emitter first.
    """

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    def destination(self, solution: Solution, artifact: TemplateArtifact) -> Path:
        """Absolute path *artifact* is written to."""
        return solution.project_path(artifact.layer).joinpath(*artifact.relative_path().parts)

    def render(self, solution: Solution, artifact: TemplateArtifact) -> str:
        """Render *artifact* for *solution* without touching the filesystem."""
        return self.renderer.render(artifact.template, build_context(solution, artifact))

    async def emit(
        self,
        solution: Solution,
        catalogue: tuple[TemplateArtifact, ...] = ARTIFACTS,
    ) -> list[Path]:
        """Write every artifact in *catalogue*, in order.

        Returns:
            The written file paths.
        """
        written: list[Path] = []
        for artifact in catalogue:
            out = self.destination(solution, artifact)
            console.print(f"[cyan]Create file[/cyan] {out.relative_to(solution.root)}")

            if artifact.replaces:
                stale = solution.project_path(artifact.layer).joinpath(
                    *PurePosixPath(artifact.replaces).parts
                )
                await asyncio.to_thread(stale.unlink, missing_ok=True)

            path = await self.renderer.render_to_file(
                artifact.template, out, build_context(solution, artifact)
            )
            written.append(path)
        return written
