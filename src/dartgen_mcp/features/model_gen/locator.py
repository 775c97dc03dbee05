"""Base class lookup across a Dart workspace."""

import os
from typing import Iterator, List, Optional

from dartgen_mcp.constants import DartDefaults
from dartgen_mcp.core.exceptions import BaseClassSearchError
from dartgen_mcp.core.logging import get_logger
from dartgen_mcp.models.model_gen import BaseClassReference


def _should_skip_directory(dirname: str, exclude_dirs: List[str]) -> bool:
    if dirname.startswith("."):
        return True
    return dirname in exclude_dirs


def iter_source_files(
    workspace_root: str,
    extension: str = DartDefaults.SOURCE_EXTENSION,
    exclude_dirs: Optional[List[str]] = None,
) -> Iterator[str]:
    """Yield source files under `workspace_root` in a stable order."""
    excluded = DartDefaults.EXCLUDE_DIRS if exclude_dirs is None else exclude_dirs

    for root, dirs, files in os.walk(workspace_root):
        # Filter directories in-place
        dirs[:] = sorted(d for d in dirs if not _should_skip_directory(d, excluded))

        for file in sorted(files):
            if file.endswith(extension):
                yield os.path.join(root, file)


def find_base_class_file(
    class_name: str,
    workspace_root: str,
    extension: str = DartDefaults.SOURCE_EXTENSION,
    exclude_dirs: Optional[List[str]] = None,
) -> Optional[BaseClassReference]:
    """Find the first source file containing `class <class_name>`.

    The check is a plain substring test, so `User` also matches a file that
    only declares `class UserEntity`.

    Args:
        class_name: Base class name
        workspace_root: Directory to search recursively
        extension: Source file extension
        exclude_dirs: Directory names to skip (hidden directories are always skipped)

    Returns:
        Reference to the matching file, or None if no file matches

    Raises:
        BaseClassSearchError: If a candidate file cannot be read
    """
    logger = get_logger("model_gen.locator")
    needle = f"class {class_name}"
    searched = 0

    for file_path in iter_source_files(workspace_root, extension, exclude_dirs):
        searched += 1
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error("source_read_failed", file=file_path, error=str(e))
            raise BaseClassSearchError(file_path, str(e)) from e

        if needle in content:
            logger.info("base_class_found", base_class=class_name, file=file_path, files_searched=searched)
            return BaseClassReference(class_name=class_name, file_path=os.path.abspath(file_path))

    logger.info("base_class_not_found", base_class=class_name, files_searched=searched)
    return None
