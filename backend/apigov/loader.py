"""
Spec document loader.

Reads an API description from a JSON or YAML file into a plain mapping.
The engine itself never touches the filesystem.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

import yaml

from .errors import DocumentLoadError


logger = logging.getLogger(__name__)

JSON_SUFFIXES = (".json",)
YAML_SUFFIXES = (".yaml", ".yml")


def parse_document(content: str, fmt: str = "yaml") -> Dict[str, Any]:
    """
    Parse document content.

    Args:
        content: Raw file content.
        fmt: "json" or "yaml". YAML also accepts JSON input.

    Returns:
        The parsed mapping.

    Raises:
        ValueError: If the content is empty, invalid or not a mapping.
    """
    if fmt == "json":
        try:
            data = json.loads(content) if content.strip() else None
        except json.JSONDecodeError as e:
            raise ValueError(f"JSON parse error: {e}") from e
    else:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValueError(f"YAML parse error: {e}") from e

    if data is None:
        raise ValueError("File is empty")
    if not isinstance(data, dict):
        raise ValueError(f"Top level must be a mapping, got {type(data).__name__}")
    return data


def load_document(path: Path) -> Dict[str, Any]:
    """
    Load a spec file.

    Raises:
        DocumentLoadError: If the file is missing or cannot be parsed.
    """
    path = Path(path)
    if not path.exists():
        raise DocumentLoadError(path, "File not found")

    fmt = "json" if path.suffix.lower() in JSON_SUFFIXES else "yaml"
    logger.debug("Loading %s as %s", path, fmt)

    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentLoadError(path, str(e)) from e

    try:
        return parse_document(content, fmt)
    except ValueError as e:
        raise DocumentLoadError(path, str(e)) from e
