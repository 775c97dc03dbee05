"""Data models for dartgen-mcp."""

from dartgen_mcp.models.config import DartGenConfig
from dartgen_mcp.models.model_gen import (
    BaseClassReference,
    BuildResult,
    DartField,
    GeneratedModel,
    GenerationResult,
)

__all__ = [
    # Config
    "DartGenConfig",
    # Model generation
    "BaseClassReference",
    "BuildResult",
    "DartField",
    "GeneratedModel",
    "GenerationResult",
]
