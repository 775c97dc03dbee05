"""Configuration models for dartgen.yaml."""
from typing import List

from pydantic import BaseModel, Field, field_validator

from dartgen_mcp.constants import DartDefaults


class DartGenConfig(BaseModel):
    """Validated contents of a dartgen.yaml file."""

    build_command: str = Field(
        default=DartDefaults.BUILD_COMMAND,
        description="Command run in the workspace root after a model is written",
    )
    source_extension: str = Field(
        default=DartDefaults.SOURCE_EXTENSION,
        description="Extension of files searched for base classes",
    )
    exclude_dirs: List[str] = Field(
        default_factory=lambda: list(DartDefaults.EXCLUDE_DIRS),
        description="Directory names skipped during the base class search",
    )
    run_build: bool = Field(
        default=True,
        description="Launch the build command after writing the model",
    )

    @field_validator("build_command")
    @classmethod
    def validate_build_command(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("build_command must not be empty")
        return v

    @field_validator("source_extension")
    @classmethod
    def validate_source_extension(cls, v: str) -> str:
        if not v.startswith("."):
            raise ValueError(f"source_extension must start with '.', got '{v}'")
        return v
