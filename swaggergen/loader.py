"""Load a Swagger 2.0 document from disk.

Accepts YAML or JSON (JSON parses as YAML) and exposes the three top-level
sections the builders read: definitions, paths and basePath.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .errors import MalformedSchemaError


def load_spec(path: Path | str) -> dict[str, Any]:
    """Load the Swagger document from disk."""
    with open(path, encoding="utf-8") as f:
        spec = yaml.safe_load(f)
    if not isinstance(spec, dict):
        raise MalformedSchemaError("document root must be a mapping", str(path))
    return spec


def get_definitions(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract schema definitions from the spec."""
    return spec.get("definitions") or {}


def get_paths(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract paths from the spec."""
    return spec.get("paths") or {}


def get_base_path(spec: dict[str, Any]) -> str:
    """Extract basePath; a missing one is the empty string."""
    return spec.get("basePath") or ""
