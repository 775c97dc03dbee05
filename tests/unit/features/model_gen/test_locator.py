"""Tests for base class lookup."""

import os
from unittest.mock import patch

import pytest

from dartgen_mcp.core.exceptions import BaseClassSearchError
from dartgen_mcp.features.model_gen.locator import find_base_class_file, iter_source_files


class TestFindBaseClassFile:
    """Tests for find_base_class_file."""

    def test_finds_declaring_file(self, dart_workspace):
        """Test the file declaring the class is returned."""
        reference = find_base_class_file("UserEntity", dart_workspace)
        assert reference is not None
        assert reference.class_name == "UserEntity"
        assert reference.file_path == os.path.join(dart_workspace, "lib", "domain", "entities", "user_entity.dart")

    def test_not_found_returns_none(self, dart_workspace):
        """Test an unknown class is a normal None result."""
        assert find_base_class_file("OrderEntity", dart_workspace) is None

    def test_substring_name_matches(self, temp_dir, create_dart_file):
        """Test the substring check also matches longer class names."""
        create_dart_file("lib/user_entity.dart", "class UserEntity {\n  final String id;\n}\n")
        reference = find_base_class_file("User", temp_dir)
        assert reference is not None
        assert reference.file_path.endswith("user_entity.dart")

    def test_only_dart_files_searched(self, temp_dir, create_dart_file):
        """Test files with other extensions are ignored."""
        create_dart_file("notes/user.txt", "class UserEntity {}")
        assert find_base_class_file("UserEntity", temp_dir) is None

    def test_custom_extension(self, temp_dir, create_dart_file):
        """Test the searched extension is configurable."""
        create_dart_file("lib/user.dart.txt", "class UserEntity {}")
        assert find_base_class_file("UserEntity", temp_dir, extension=".txt") is not None

    def test_excluded_and_hidden_directories_skipped(self, temp_dir, create_dart_file):
        """Test build output and hidden directories are not searched."""
        create_dart_file("build/generated/user.dart", "class UserEntity {}")
        create_dart_file(".dart_tool/cache/user.dart", "class UserEntity {}")
        assert find_base_class_file("UserEntity", temp_dir) is None

    def test_first_match_in_stable_order(self, temp_dir, create_dart_file):
        """Test the first file in sorted walk order wins."""
        create_dart_file("lib/b.dart", "class UserEntity {}")
        create_dart_file("lib/a.dart", "class UserEntity {}")
        reference = find_base_class_file("UserEntity", temp_dir)
        assert reference is not None
        assert os.path.basename(reference.file_path) == "a.dart"

    def test_unreadable_file_raises(self, temp_dir, create_dart_file):
        """Test read failures are distinct from not finding the class."""
        create_dart_file("lib/user.dart", "class UserEntity {}")
        with patch("builtins.open", side_effect=PermissionError("denied")):
            with pytest.raises(BaseClassSearchError) as exc_info:
                find_base_class_file("UserEntity", temp_dir)
        assert exc_info.value.file_path.endswith("user.dart")

    def test_invalid_utf8_raises(self, temp_dir):
        """Test undecodable content is reported as a search error."""
        path = os.path.join(temp_dir, "broken.dart")
        with open(path, "wb") as f:
            f.write(b"\xff\xfe\xfa class UserEntity")
        with pytest.raises(BaseClassSearchError):
            find_base_class_file("UserEntity", temp_dir)


class TestIterSourceFiles:
    """Tests for iter_source_files."""

    def test_lists_dart_files(self, dart_workspace):
        """Test both entity files are listed."""
        files = [os.path.basename(p) for p in iter_source_files(dart_workspace)]
        assert files == ["empty_entity.dart", "user_entity.dart"]
