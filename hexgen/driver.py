"""hexgen solution driver.

Walks a single linear state machine:

UNINITIALIZED    -- validate parameters, create the root directory and ``.sln``.
SOLUTION_CREATED -- create every layer project in topological order.
PROJECTS_CREATED -- write the boilerplate template catalogue.
TEMPLATES_EMITTED -- nothing left to do.
DONE

Usage::

    python -m hexgen.driver --name Acme --directory ./out
    python -m hexgen.driver -n Acme -d ./out -f net6.0
"""

from __future__ import annotations

import asyncio
import sys
from enum import Enum
from pathlib import Path

from rich.panel import Panel

from hexgen.config import DEFAULT_FRAMEWORK, GeneratorConfig, InputValidationError
from hexgen.layers import topological_order
from hexgen.models import Solution
from hexgen.scaffolder import ProjectEmitter, TemplateWriter
from hexgen.toolchain import DotnetToolchain, ExternalToolFailure
from hexgen.utils import (
    console,
    print_error,
    print_step_header,
    print_success,
    print_summary_table,
)


class DriverState(str, Enum):
    """Driver progress; transitions only move forward."""
    UNINITIALIZED = "uninitialized"
    SOLUTION_CREATED = "solution_created"
    PROJECTS_CREATED = "projects_created"
    TEMPLATES_EMITTED = "templates_emitted"
    DONE = "done"


class SolutionDriver:
    """Orchestrates solution creation, project emission and template writing.

    Attributes:
        config: Parameters for this run.
        state: Current ``DriverState``.
        solution: The solution being built, set once validation passes.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        toolchain: DotnetToolchain | None = None,
        writer: TemplateWriter | None = None,
    ) -> None:
        self.config = config
        self.toolchain = toolchain or DotnetToolchain(config.dotnet_executable)
        self.emitter = ProjectEmitter(self.toolchain)
        self.writer = writer or TemplateWriter()
        self.state = DriverState.UNINITIALIZED
        self.solution: Solution | None = None

    async def run(self) -> Solution:
        """Drive the state machine from ``UNINITIALIZED`` to ``DONE``.

        Raises:
            InputValidationError: Before any filesystem change, if a required
                parameter is blank.
            ExternalToolFailure: If any dotnet command fails; partial output
                is left on disk.
        """
        solution = await self._create_solution()
        await self._create_projects(solution)
        await self._emit_templates(solution)
        self.state = DriverState.DONE
        return solution

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    async def _create_solution(self) -> Solution:
        self._expect(DriverState.UNINITIALIZED)
        self.config.validate_required()

        solution = Solution(
            name=self.config.name,
            directory=Path(self.config.directory),
            framework=self.config.framework,
        )
        self.solution = solution

        print_step_header(1, "Solution")
        console.print(
            f"Create solution file [bold]{solution.solution_file.name}[/bold] "
            f"in the directory [bold]{solution.root}[/bold]"
        )
        solution.root.mkdir(parents=True, exist_ok=True)
        await self.toolchain.new_solution(solution.name, solution.root)

        self.state = DriverState.SOLUTION_CREATED
        return solution

    async def _create_projects(self, solution: Solution) -> None:
        self._expect(DriverState.SOLUTION_CREATED)
        print_step_header(2, "Projects")

        for layer in topological_order():
            await self.emitter.create_project(solution, layer)

        self.state = DriverState.PROJECTS_CREATED

    async def _emit_templates(self, solution: Solution) -> None:
        self._expect(DriverState.PROJECTS_CREATED)
        print_step_header(3, "Templates")

        await self.writer.emit(solution)

        self.state = DriverState.TEMPLATES_EMITTED

    def _expect(self, state: DriverState) -> None:
        if self.state is not state:
            raise RuntimeError(
                f"Driver is in state '{self.state.value}', expected '{state.value}'"
            )


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``hexgen`` / ``python -m hexgen.driver``."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="hexgen",
        description=(
            "Generates a .NET WebAPI solution template based on the hexagon architecture"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  hexgen --name Acme --directory ./out\n"
            "  hexgen -n Acme -d ./out -f net6.0\n"
        ),
    )
    parser.add_argument("-n", "--name", default=None, help="Sets the solution name")
    parser.add_argument(
        "-d", "--directory", default=None, help="Sets the solution directory"
    )
    parser.add_argument(
        "-f",
        "--framework",
        default=None,
        help=f"Sets the framework for the solution (default {DEFAULT_FRAMEWORK})",
    )
    parser.add_argument(
        "--dotnet",
        dest="dotnet_executable",
        default=None,
        help="Path to the dotnet executable (default: dotnet)",
    )

    args = parser.parse_args(argv)

    config = GeneratorConfig.from_env(
        name=args.name,
        directory=args.directory,
        framework=args.framework,
        dotnet_executable=args.dotnet_executable,
    )

    try:
        config.validate_required()
    except InputValidationError as exc:
        console.print(str(exc))
        console.print()
        return

    print_summary_table(
        {
            "Solution": config.name,
            "Directory": config.directory,
            "Framework": config.framework,
        },
        title="hexgen",
    )

    driver = SolutionDriver(config)
    try:
        solution = asyncio.run(driver.run())
    except ExternalToolFailure as exc:
        print_error(f"Generation aborted in state '{driver.state.value}'.")
        console.print(Panel(str(exc), title="dotnet failure", border_style="red"))
        sys.exit(1)

    print_success(f"Solution {solution.name} generated at {solution.root}")


if __name__ == "__main__":
    main()
