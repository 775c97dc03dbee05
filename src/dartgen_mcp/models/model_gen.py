"""Data models for Dart model generation.

This module defines data models for:
- Extracted field declarations
- Located base classes
- Rendered model files
- Build command outcomes
- Overall command results
"""
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from dartgen_mcp.constants import DartDefaults

if TYPE_CHECKING:
    from dartgen_mcp.core.executor import BuildHandle


@dataclass(frozen=True)
class DartField:
    """A single `final` field declaration.

    Attributes:
        field_type: Type expression, with generic arguments normalized
        name: Field identifier
    """
    field_type: str
    name: str

    @property
    def declaration(self) -> str:
        """Canonical declaration string, e.g. `final Map<String,dynamic> tokens;`."""
        return f"{DartDefaults.FIELD_KEYWORD} {self.field_type} {self.name};"

    @classmethod
    def parse(cls, declaration: str) -> "DartField":
        """Parse a canonical declaration string.

        Raises:
            MalformedFieldError: If the string is not `final <type> <name>;`
        """
        from dartgen_mcp.core.exceptions import MalformedFieldError

        tokens = declaration.split(" ")
        if (
            len(tokens) != 3
            or tokens[0] != DartDefaults.FIELD_KEYWORD
            or not tokens[1]
            or not tokens[2].endswith(";")
            or len(tokens[2]) < 2
        ):
            raise MalformedFieldError(declaration)
        return cls(field_type=tokens[1], name=tokens[2][:-1])


@dataclass
class BaseClassReference:
    """Location of a base class declaration.

    Attributes:
        class_name: Name that was searched for
        file_path: Absolute path of the first file containing `class <name>`
    """
    class_name: str
    file_path: str


@dataclass
class GeneratedModel:
    """A rendered Dart model file.

    Attributes:
        model_name: Generated class name
        base_class_name: Class being extended
        base_name: Derived file stem (e.g. `user_model`)
        import_path: Relative import of the base class file
        fields: Canonical field declarations in source order
        content: Full file text
    """
    model_name: str
    base_class_name: str
    base_name: str
    import_path: str
    fields: List[str]
    content: str

    @property
    def file_name(self) -> str:
        return f"{self.base_name}{DartDefaults.SOURCE_EXTENSION}"


@dataclass
class BuildResult:
    """Outcome of a build command run."""
    command: List[str]
    cwd: str
    returncode: int
    stdout: str = ""
    stderr: str = ""
    execution_time_seconds: float = 0.0

    @property
    def success(self) -> bool:
        return self.returncode == 0


@dataclass
class GenerationResult:
    """Outcome of one generate-model command invocation.

    Attributes:
        success: Whether the model file was written
        output_path: Path of the written file
        model: Rendered model, if generation got that far
        error: Message shown to the user on failure
        build_started: Whether the build command was launched
        build: Handle of the launched build
    """
    success: bool
    output_path: Optional[str] = None
    model: Optional[GeneratedModel] = None
    error: Optional[str] = None
    build_started: bool = False
    build: Optional["BuildHandle"] = None
