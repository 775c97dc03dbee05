"""Shared pytest fixtures for dartgen-mcp test suite.

This module provides common fixtures used across unit tests:
temporary Dart workspaces, sample base classes and a mock MCP server.
"""

import shutil
import sys
import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


# ============================================================================
# Sample Code Fixtures
# ============================================================================

USER_ENTITY_SOURCE = """import 'package:equatable/equatable.dart';

class UserEntity extends Equatable {
  final String id;
  final String name;
  final Map<String, dynamic> tokens;
  final List<String> roles;

  const UserEntity({
    required this.id,
    required this.name,
    required this.tokens,
    required this.roles,
  });

  @override
  List<Object?> get props => [id, name, tokens, roles];
}
"""

EMPTY_ENTITY_SOURCE = """class EmptyEntity {
  const EmptyEntity();
}
"""


@pytest.fixture
def sample_entity_source() -> str:
    """Provide a Dart base class with four final fields.

    Returns:
        str: Dart source declaring UserEntity
    """
    return USER_ENTITY_SOURCE


# ============================================================================
# Temporary Directory Fixtures
# ============================================================================

@pytest.fixture
def temp_dir() -> Generator[str, None, None]:
    """Create a temporary directory for test isolation.

    Yields:
        str: Path to temporary directory
    """
    tmp = tempfile.mkdtemp()
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def create_dart_file(temp_dir) -> Callable[..., Path]:
    """Factory fixture for creating files inside the temporary directory."""
    def _create_file(relative_path: str, content: str) -> Path:
        file_path = Path(temp_dir) / relative_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
        return file_path

    return _create_file


@pytest.fixture
def dart_workspace(temp_dir, create_dart_file) -> str:
    """Create a small Flutter-style workspace.

    Layout:
        lib/domain/entities/user_entity.dart   (UserEntity, 4 fields)
        lib/domain/entities/empty_entity.dart  (EmptyEntity, no fields)
        lib/data/models/                       (output directory)

    Returns:
        str: Path to workspace root
    """
    create_dart_file("lib/domain/entities/user_entity.dart", USER_ENTITY_SOURCE)
    create_dart_file("lib/domain/entities/empty_entity.dart", EMPTY_ENTITY_SOURCE)
    (Path(temp_dir) / "lib" / "data" / "models").mkdir(parents=True)
    return temp_dir


# ============================================================================
# Mock MCP Server Fixtures
# ============================================================================

@pytest.fixture
def mock_mcp_instance():
    """Provide a mock MCP server instance for testing tools.

    Returns:
        MockFastMCP: Mock MCP instance
    """

    class MockFastMCP:
        """Mock FastMCP instance for testing."""
        def __init__(self):
            self.tools = {}

        def tool(self):
            """Decorator for registering tools."""
            def decorator(func):
                self.tools[func.__name__] = func
                return func
            return decorator

    return MockFastMCP()
