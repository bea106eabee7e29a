"""Thin async wrapper around the ``dotnet`` CLI.

Each method maps to one primitive the generator needs (new solution, new
project, solution add, add package, add reference).  Every call is awaited to
completion; a non-zero exit raises ``ExternalToolFailure`` and is never
retried.
"""

from __future__ import annotations

from pathlib import Path

from hexgen.layers import ProjectKind
from hexgen.utils import console, run_command


class ExternalToolFailure(Exception):
    """Raised when a dotnet invocation exits with a non-zero code."""

    def __init__(
        self,
        message: str,
        command: str = "",
        returncode: int | None = None,
        stderr: str = "",
    ):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


class DotnetToolchain:
    """Issues dotnet commands with an explicit working directory per call."""

    def __init__(self, executable: str = "dotnet", timeout: float | None = None):
        self.executable = executable
        self.timeout = timeout

    async def run(self, *args: str, cwd: str | Path | None = None) -> str:
        """Run ``dotnet <args>`` in *cwd* and return its stdout.

        Raises:
            ExternalToolFailure: If the command exits with a non-zero code.
        """
        cmd = [self.executable, *args]
        cmd_str = " ".join(cmd)

        returncode, stdout, stderr = await run_command(cmd, cwd=cwd, timeout=self.timeout)

        if stdout:
            console.print(f"[dim]{stdout}[/dim]")

        if returncode != 0:
            raise ExternalToolFailure(
                f"dotnet command failed (exit {returncode}): {cmd_str}\n{stderr or stdout}",
                command=cmd_str,
                returncode=returncode,
                stderr=stderr,
            )

        return stdout

    # -- Primitives --------------------------------------------------------

    async def new_solution(self, name: str, output: Path) -> str:
        return await self.run("new", "sln", "-n", name, "-o", str(output))

    async def new_project(
        self, kind: ProjectKind, name: str, output: Path, framework: str
    ) -> str:
        return await self.run(
            "new", kind.value, "-n", name, "-o", str(output), "-f", framework
        )

    async def add_to_solution(self, solution_file: Path, csproj: Path) -> str:
        """Register *csproj* in the solution manifest (run from the solution root).

        *csproj* is passed relative to the solution root, or absolute when it
        lives outside it.
        """
        root = solution_file.parent
        target = csproj.relative_to(root) if csproj.is_relative_to(root) else csproj.resolve()
        return await self.run("sln", solution_file.name, "add", str(target), cwd=root)

    async def add_package(self, project_dir: Path, package: str) -> str:
        return await self.run("add", "package", package, cwd=project_dir)

    async def add_reference(self, project_dir: Path, target: str) -> str:
        """Add a project reference; *target* is relative to *project_dir*."""
        return await self.run("add", "reference", target, cwd=project_dir)
