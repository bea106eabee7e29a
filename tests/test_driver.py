"""Unit tests for the solution driver and CLI (hexgen.driver).

Tests cover:
- Validation before any filesystem change or dotnet call
- State transitions through a full run
- Abort on ExternalToolFailure, keeping partial output
- main() argument parsing, early return and failure exit code
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from hexgen.config import GeneratorConfig, InputValidationError
from hexgen.driver import DriverState, SolutionDriver, main
from hexgen.layers import topological_order
from hexgen.toolchain import ExternalToolFailure


pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# SolutionDriver
# ---------------------------------------------------------------------------


class TestValidation:
    @pytest.mark.asyncio
    async def test_blank_name_touches_nothing(self, recording_toolchain, tmp_path: Path):
        config = GeneratorConfig(name="   ", directory=str(tmp_path / "out"))
        driver = SolutionDriver(config, toolchain=recording_toolchain)

        with pytest.raises(InputValidationError):
            await driver.run()

        assert recording_toolchain.calls == []
        assert not (tmp_path / "out").exists()
        assert driver.state is DriverState.UNINITIALIZED
        assert driver.solution is None

    @pytest.mark.asyncio
    async def test_blank_directory(self, recording_toolchain):
        driver = SolutionDriver(GeneratorConfig(name="Acme"), toolchain=recording_toolchain)
        with pytest.raises(InputValidationError, match="working directory"):
            await driver.run()
        assert recording_toolchain.calls == []


class TestRun:
    @pytest.mark.asyncio
    async def test_full_run_reaches_done(self, recording_toolchain, tmp_path: Path):
        config = GeneratorConfig(name="Acme", directory=str(tmp_path))
        driver = SolutionDriver(config, toolchain=recording_toolchain)

        solution = await driver.run()

        assert driver.state is DriverState.DONE
        assert driver.solution is solution
        assert [p.layer for p in solution.projects] == topological_order()

    @pytest.mark.asyncio
    async def test_solution_created_first(self, recording_toolchain, tmp_path: Path):
        config = GeneratorConfig(name="Acme", directory=str(tmp_path))
        await SolutionDriver(config, toolchain=recording_toolchain).run()

        assert recording_toolchain.commands()[0] == (
            "new", "sln", "-n", "Acme", "-o", str(tmp_path / "Acme"),
        )
        assert (tmp_path / "Acme").is_dir()

    @pytest.mark.asyncio
    async def test_name_is_trimmed(self, recording_toolchain, tmp_path: Path):
        config = GeneratorConfig(name="  Acme ", directory=str(tmp_path))
        solution = await SolutionDriver(config, toolchain=recording_toolchain).run()
        assert solution.name == "Acme"
        assert solution.project_names[0] == "Acme.Domain"

    @pytest.mark.asyncio
    async def test_run_twice_is_rejected(self, recording_toolchain, tmp_path: Path):
        config = GeneratorConfig(name="Acme", directory=str(tmp_path))
        driver = SolutionDriver(config, toolchain=recording_toolchain)
        await driver.run()
        with pytest.raises(RuntimeError, match="expected 'uninitialized'"):
            await driver.run()

    @pytest.mark.asyncio
    async def test_default_toolchain_uses_configured_executable(self):
        config = GeneratorConfig(name="Acme", directory="out", dotnet_executable="/opt/dotnet")
        assert SolutionDriver(config).toolchain.executable == "/opt/dotnet"


class TestAbort:
    @pytest.mark.asyncio
    async def test_failure_during_projects(self, failing_toolchain, tmp_path: Path):
        toolchain = failing_toolchain("add", "reference")
        config = GeneratorConfig(name="Acme", directory=str(tmp_path))
        driver = SolutionDriver(config, toolchain=toolchain)

        with pytest.raises(ExternalToolFailure):
            await driver.run()

        assert driver.state is DriverState.SOLUTION_CREATED
        # Domain and Helpers completed; Dapper failed on its first reference
        assert driver.solution.project_names == ["Acme.Domain", "Acme.Helpers"]
        assert (tmp_path / "Acme" / "Acme.Dapper").is_dir()
        assert toolchain.commands()[-1][:2] == ("add", "reference")

    @pytest.mark.asyncio
    async def test_failure_creating_solution(self, failing_toolchain, tmp_path: Path):
        toolchain = failing_toolchain("new", "sln")
        driver = SolutionDriver(
            GeneratorConfig(name="Acme", directory=str(tmp_path)), toolchain=toolchain
        )
        with pytest.raises(ExternalToolFailure):
            await driver.run()
        assert driver.state is DriverState.UNINITIALIZED
        assert len(toolchain.calls) == 1


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


class TestMain:
    def test_missing_name_returns_without_work(self, monkeypatch, tmp_path: Path):
        monkeypatch.delenv("HEXGEN_NAME", raising=False)
        with patch("hexgen.driver.SolutionDriver") as mock_driver, \
             patch("hexgen.driver.console") as mock_console:
            main(["-d", str(tmp_path)])

        mock_driver.assert_not_called()
        printed = " ".join(str(c.args[0]) for c in mock_console.print.call_args_list if c.args)
        assert "The solution name is required" in printed

    def test_missing_directory_message(self, monkeypatch):
        monkeypatch.delenv("HEXGEN_DIRECTORY", raising=False)
        with patch("hexgen.driver.SolutionDriver") as mock_driver, \
             patch("hexgen.driver.console") as mock_console:
            main(["--name", "Acme"])

        mock_driver.assert_not_called()
        printed = " ".join(str(c.args[0]) for c in mock_console.print.call_args_list if c.args)
        assert "The working directory is required" in printed

    def test_flags_build_config(self, tmp_path: Path, recording_toolchain):
        captured: dict = {}

        def fake_driver(config):
            captured["config"] = config
            return SolutionDriver(config, toolchain=recording_toolchain)

        with patch("hexgen.driver.SolutionDriver", side_effect=fake_driver):
            main(["-n", "Acme", "-d", str(tmp_path), "-f", "net6.0"])

        config = captured["config"]
        assert config.name == "Acme"
        assert config.directory == str(tmp_path)
        assert config.framework == "net6.0"
        assert (tmp_path / "Acme" / "Acme.WebAPI" / "Startup.cs").is_file()

    def test_tool_failure_exits_non_zero(self, tmp_path: Path, failing_toolchain):
        toolchain = failing_toolchain("new", "sln")

        with patch(
            "hexgen.driver.SolutionDriver",
            side_effect=lambda config: SolutionDriver(config, toolchain=toolchain),
        ):
            with pytest.raises(SystemExit) as exc_info:
                main(["-n", "Acme", "-d", str(tmp_path)])

        assert exc_info.value.code == 1

    def test_help_exits_zero(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0
        assert "--framework" in capsys.readouterr().out

    def test_relative_directory_from_cli(self, tmp_path: Path, monkeypatch, recording_toolchain):
        monkeypatch.chdir(tmp_path)
        with patch(
            "hexgen.driver.SolutionDriver",
            side_effect=lambda config: SolutionDriver(config, toolchain=recording_toolchain),
        ):
            main(["-n", "Demo", "-d", "./out"])

        assert (tmp_path / "out" / "Demo" / "Demo.Tests" / "Demo.Tests.csproj").is_file()

    def test_summary_shows_trimmed_values(self, tmp_path: Path, recording_toolchain):
        with patch("hexgen.driver.print_summary_table") as mock_table, patch(
            "hexgen.driver.SolutionDriver",
            side_effect=lambda config: SolutionDriver(config, toolchain=recording_toolchain),
        ):
            main(["-n", "  Acme ", "-d", f" {tmp_path} "])

        summary = mock_table.call_args[0][0]
        assert summary["Solution"] == "Acme"
        assert summary["Directory"] == str(tmp_path)
        assert (tmp_path / "Acme" / "Acme.Domain").is_dir()
