"""hexgen scaffolder -- creates the layer projects and writes their boilerplate.

Quick usage::

    from hexgen.models import Solution
    from hexgen.scaffolder import ProjectEmitter, TemplateWriter
    from hexgen.toolchain import DotnetToolchain

    solution = Solution(name="Acme", directory=Path("/tmp/out"))
    emitter = ProjectEmitter(DotnetToolchain())
    await emitter.create_project(solution, "Domain")
    await TemplateWriter().emit(solution)
"""

from hexgen.scaffolder.catalogue import ARTIFACTS, TemplateArtifact
from hexgen.scaffolder.emitter import ProjectEmitter
from hexgen.scaffolder.templates import TemplateRenderer
from hexgen.scaffolder.writer import TemplateWriter

__all__ = [
    "ARTIFACTS",
    "ProjectEmitter",
    "TemplateArtifact",
    "TemplateRenderer",
    "TemplateWriter",
]
