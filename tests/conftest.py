"""Shared pytest fixtures for the hexgen test suite.

Provides reusable fixtures for:
- A recording stand-in for the dotnet toolchain
- Pre-built ``Solution`` instances rooted in a temp directory
- Mock subprocess helpers
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from hexgen.models import Solution
from hexgen.toolchain import DotnetToolchain, ExternalToolFailure


# ---------------------------------------------------------------------------
# Fake toolchain
# ---------------------------------------------------------------------------


class RecordingToolchain(DotnetToolchain):
    """DotnetToolchain that records calls instead of spawning ``dotnet``.

    Path handling follows the real CLI: ``dotnet new`` resolves ``-o`` against
    the process directory and leaves ``{name}.csproj`` there, and
    ``dotnet sln add`` resolves its project argument against ``cwd`` and
    fails if no such file exists.  ``dotnet new webapi`` also leaves the
    default ``Controllers/WeatherForecastController.cs`` behind, so
    replacement logic can be exercised.  Set ``fail_on`` to a tuple of
    leading arguments to make the first matching call raise
    ``ExternalToolFailure``.
    """

    def __init__(self, fail_on: tuple[str, ...] | None = None) -> None:
        super().__init__(executable="dotnet")
        self.calls: list[tuple[tuple[str, ...], Path | None]] = []
        self.fail_on = fail_on

    async def run(self, *args: str, cwd: str | Path | None = None) -> str:
        self.calls.append((args, Path(cwd) if cwd else None))

        if self.fail_on and args[: len(self.fail_on)] == self.fail_on:
            raise self._failure(args, "simulated failure")

        if args[0] == "new" and args[1] != "sln":
            output = Path(args[args.index("-o") + 1])
            name = args[args.index("-n") + 1]
            output.mkdir(parents=True, exist_ok=True)
            (output / f"{name}.csproj").write_text("<Project />\n", encoding="utf-8")
            if args[1] == "webapi":
                controller = output / "Controllers" / "WeatherForecastController.cs"
                controller.parent.mkdir(parents=True, exist_ok=True)
                controller.write_text("// generated by dotnet new webapi\n", encoding="utf-8")

        if args[0] == "sln" and args[2] == "add":
            base = Path(cwd) if cwd else Path.cwd()
            if not (base / args[3]).is_file():
                raise self._failure(args, f"Project file {args[3]} not found (cwd {base})")
        return ""

    @staticmethod
    def _failure(args: tuple[str, ...], stderr: str) -> ExternalToolFailure:
        command = "dotnet " + " ".join(args)
        return ExternalToolFailure(
            f"dotnet command failed (exit 1): {command}\n{stderr}",
            command=command,
            returncode=1,
            stderr=stderr,
        )

    # -- Query helpers -----------------------------------------------------

    def commands(self) -> list[tuple[str, ...]]:
        return [args for args, _ in self.calls]

    def packages_for(self, project_dir: Path) -> list[str]:
        return [
            args[2]
            for args, cwd in self.calls
            if args[:2] == ("add", "package") and cwd == project_dir
        ]

    def references_for(self, project_dir: Path) -> list[str]:
        return [
            args[2]
            for args, cwd in self.calls
            if args[:2] == ("add", "reference") and cwd == project_dir
        ]


@pytest.fixture
def recording_toolchain() -> RecordingToolchain:
    """A toolchain double that records every dotnet invocation."""
    return RecordingToolchain()


@pytest.fixture
def failing_toolchain():
    """Factory for a recording toolchain that fails on a given command prefix.

    Usage:
        def test_abort(failing_toolchain):
            toolchain = failing_toolchain("add", "package")
    """
    def factory(*prefix: str) -> RecordingToolchain:
        return RecordingToolchain(fail_on=prefix)

    return factory


# ---------------------------------------------------------------------------
# Solutions
# ---------------------------------------------------------------------------


@pytest.fixture
def tmp_solution(tmp_path: Path) -> Solution:
    """An empty ``Acme`` solution rooted in a temp directory."""
    solution = Solution(name="Acme", directory=tmp_path)
    solution.root.mkdir(parents=True)
    return solution


# ---------------------------------------------------------------------------
# Subprocess helpers
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory
