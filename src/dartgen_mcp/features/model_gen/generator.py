"""Dart model rendering.

Produces a `json_serializable` model class that extends an existing base
class and forwards every base class field through the constructor. All
functions here are pure: nothing is read from or written to disk.
"""

import os
import re
from typing import List

from dartgen_mcp.constants import DartDefaults
from dartgen_mcp.core.logging import get_logger
from dartgen_mcp.models.model_gen import DartField, GeneratedModel

logger = get_logger(__name__)

MODEL_SUFFIX_PATTERN = re.compile(rf"{DartDefaults.MODEL_SUFFIX}$")

DART_MODEL_TEMPLATE: str = '''
import '{annotation_import}';
import '{base_import}';

part '{base_name}.g.dart';

@JsonSerializable()
class {model_name} extends {base_class_name} {{
  {model_name}({{
    {constructor_args}
  }});

  factory {model_name}.fromMap(Map<String, dynamic> json) =>
      _${model_name}FromJson(json);

  Map<String, dynamic> toMap() => _${model_name}ToJson(this);
}}
'''


def derive_base_name(model_name: str) -> str:
    """Derive the output file stem from a model name.

    `UserModel` becomes `user_model`; names without the suffix are only
    lower-cased (`Profile` becomes `profile`).
    """
    return MODEL_SUFFIX_PATTERN.sub(f"_{DartDefaults.MODEL_SUFFIX}", model_name.lower(), count=1)


def compute_import_path(target_dir: str, base_class_path: str) -> str:
    """Relative import of the base class file as seen from `target_dir`.

    Separators are always forward slashes.
    """
    return os.path.relpath(base_class_path, target_dir).replace("\\", "/")


def constructor_parameter_name(field_declaration: str) -> str:
    """Name of the constructor parameter forwarding `field_declaration`.

    Raises:
        MalformedFieldError: If the declaration is not `final <type> <name>;`
    """
    return DartField.parse(field_declaration).name


def format_constructor_args(fields: List[str]) -> str:
    """Render `required super.<name>,` lines for every field, in order."""
    return "\n    ".join(f"required super.{constructor_parameter_name(f)}," for f in fields)


def render_dart_model(
    model_name: str,
    base_class_name: str,
    fields: List[str],
    base_class_path: str,
    target_dir: str,
) -> str:
    """Render the full text of the generated Dart model file.

    Args:
        model_name: Name of the generated class
        base_class_name: Class being extended
        fields: Canonical field declarations in source order
        base_class_path: Path of the file declaring the base class
        target_dir: Directory the model file will be written to

    Returns:
        Dart source text

    Raises:
        MalformedFieldError: If any field declaration is malformed
    """
    return DART_MODEL_TEMPLATE.format(
        annotation_import=DartDefaults.JSON_ANNOTATION_IMPORT,
        base_import=compute_import_path(target_dir, base_class_path),
        base_name=derive_base_name(model_name),
        model_name=model_name,
        base_class_name=base_class_name,
        constructor_args=format_constructor_args(fields),
    )


def generate_dart_model(
    model_name: str,
    base_class_name: str,
    fields: List[str],
    base_class_path: str,
    target_dir: str,
) -> GeneratedModel:
    """Render a model and bundle it with the values derived along the way."""
    content = render_dart_model(model_name, base_class_name, fields, base_class_path, target_dir)
    model = GeneratedModel(
        model_name=model_name,
        base_class_name=base_class_name,
        base_name=derive_base_name(model_name),
        import_path=compute_import_path(target_dir, base_class_path),
        fields=list(fields),
        content=content,
    )
    logger.debug("model_rendered", model=model_name, base_class=base_class_name, field_count=len(fields))
    return model
