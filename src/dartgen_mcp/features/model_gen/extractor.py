"""Field extraction from Dart base class sources.

Single-pass regular expression matching over raw text. Only `final` fields
whose terminating semicolon is reached by the match are found; comments,
nested braces and function-typed fields are not understood.
"""

import re
from typing import List

from dartgen_mcp.constants import DartDefaults
from dartgen_mcp.core.logging import get_logger
from dartgen_mcp.models.model_gen import DartField

logger = get_logger(__name__)

# A `<...>` span whose argument list may contain whitespace around commas
GENERIC_SPAN_PATTERN = re.compile(r"<\s*([\w<, >]+)\s*>")
SEPARATOR_SPACING_PATTERN = re.compile(r"\s*([,<>])\s*")

# final <type expression> <name>;
FIELD_PATTERN = re.compile(rf"{DartDefaults.FIELD_KEYWORD}\s+([\w<>,\s|]+)\s+(\w+);")


def _collapse_generic(match: "re.Match[str]") -> str:
    arguments = SEPARATOR_SPACING_PATTERN.sub(r"\1", match.group(1)).strip()
    return f"<{arguments}>"


def normalize_generics(content: str) -> str:
    """Strip whitespace around commas inside generic argument lists.

    `Map<String, dynamic>` and `Map< String , dynamic >` both become
    `Map<String,dynamic>`. Whitespace next to nested angle brackets inside
    the span is dropped as well, so `List< Map<String, int> >` collapses
    to `List<Map<String,int>>`.
    """
    return GENERIC_SPAN_PATTERN.sub(_collapse_generic, content)


def extract_fields(content: str, base_class_name: str = "") -> List[str]:
    """Extract canonical `final <type> <name>;` declarations from source text.

    Args:
        content: Dart source text
        base_class_name: Used for logging only

    Returns:
        Declarations in source order; empty if none matched
    """
    normalized = normalize_generics(content)
    fields: List[str] = []

    for match in FIELD_PATTERN.finditer(normalized):
        field_type = match.group(1).strip()
        field_name = match.group(2).strip()
        fields.append(f"{DartDefaults.FIELD_KEYWORD} {field_type} {field_name};")
        logger.debug("field_extracted", base_class=base_class_name, field_type=field_type, field_name=field_name)

    if not fields:
        logger.info("no_fields_found", base_class=base_class_name)

    return fields


def extract_fields_from_file(file_path: str, base_class_name: str = "") -> List[str]:
    """Read a Dart file and extract its field declarations."""
    with open(file_path, "r", encoding="utf-8") as f:
        content = f.read()
    return extract_fields(content, base_class_name)


def parse_fields(declarations: List[str]) -> List[DartField]:
    """Convert canonical declaration strings into DartField objects."""
    return [DartField.parse(declaration) for declaration in declarations]
