"""hexgen configuration.

Typed settings for a single generator run.  Values come from CLI flags,
optionally seeded from environment variables, and are validated before the
driver touches the filesystem.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

DEFAULT_FRAMEWORK = "netcoreapp3.1"


class InputValidationError(Exception):
    """Raised when a required generator parameter is missing or blank."""


class GeneratorConfig(BaseModel):
    """Parameters for one solution generation run.

    ``name`` and ``directory`` default to empty strings so that an incomplete
    config can still be constructed; :meth:`validate_required` is the gate
    that rejects it.
    """

    name: str = Field(default="", description="Solution name")
    directory: str = Field(default="", description="Target root directory")
    framework: str = Field(default=DEFAULT_FRAMEWORK, description="Target framework moniker")
    dotnet_executable: str = Field(default="dotnet", description="dotnet CLI to invoke")

    @field_validator("name", "directory", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        return "" if value is None else str(value).strip()

    @field_validator("framework", mode="before")
    @classmethod
    def _default_framework(cls, value: Any) -> Any:
        if value is None or not str(value).strip():
            return DEFAULT_FRAMEWORK
        return str(value).strip()

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate_required(self) -> None:
        """Reject blank required parameters.

        Raises:
            InputValidationError: With the message shown to the user.
        """
        if not self.name:
            raise InputValidationError(
                "The solution name is required. See --help for available commands"
            )
        if not self.directory:
            raise InputValidationError(
                "The working directory is required. See --help for available commands"
            )

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    @property
    def solution_root(self) -> Path:
        """``{directory}/{name}``."""
        return Path(self.directory) / self.name

    @property
    def solution_file(self) -> Path:
        return self.solution_root / f"{self.name}.sln"

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls, **overrides: Any) -> "GeneratorConfig":
        """Build a config from environment variables, then apply *overrides*.

        Recognised variables (all optional):
            HEXGEN_NAME, HEXGEN_DIRECTORY, HEXGEN_FRAMEWORK, HEXGEN_DOTNET.

        Overrides whose value is ``None`` are ignored, so unset CLI flags do
        not clobber environment values.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("HEXGEN_NAME"):
            kwargs["name"] = os.environ["HEXGEN_NAME"]
        if os.environ.get("HEXGEN_DIRECTORY"):
            kwargs["directory"] = os.environ["HEXGEN_DIRECTORY"]
        if os.environ.get("HEXGEN_FRAMEWORK"):
            kwargs["framework"] = os.environ["HEXGEN_FRAMEWORK"]
        if os.environ.get("HEXGEN_DOTNET"):
            kwargs["dotnet_executable"] = os.environ["HEXGEN_DOTNET"]

        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)
