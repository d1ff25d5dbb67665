"""Render class definitions and write the generated package.

Takes the result of a generation run and produces one Python module per
class under ``<output_dir>/models`` and ``<output_dir>/requests``, plus the
package ``__init__`` files and the fixed base classes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import jinja2

from .class_model import ClassDefinition, ClassKind, GenerationResult
from .errors import GenerationError
from .naming import to_class_name, to_identifier
from .type_resolver import TypeDescriptor

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"

_TEMPLATES: dict[ClassKind, str] = {
    ClassKind.MODEL: "model.py.j2",
    ClassKind.REQUEST: "request.py.j2",
    ClassKind.MODEL_BASE: "swagger_model.py.j2",
    ClassKind.REQUEST_BASE: "swagger_request.py.j2",
    ClassKind.CLIENT: "swagger_client.py.j2",
}

# Swagger scalar type -> Python annotation
_PYTHON_TYPES: dict[str, str] = {
    "string": "str",
    "integer": "int",
    "number": "float",
    "boolean": "bool",
    "null": "None",
    "object": "dict",
    "file": "bytes",
}


def annotation(type_: TypeDescriptor | None, optional: bool = False) -> str:
    """Python annotation for a resolved type."""
    if type_ is None:
        return "object"
    if type_.is_array:
        hint = f"list[{annotation(type_.element)}]"
    elif type_.is_reference:
        hint = to_class_name(type_.name)
    else:
        hint = _PYTHON_TYPES.get(type_.name, "object")
    if (optional or type_.nullable) and hint != "None":
        hint += " | None"
    return hint


def docstring(text: str, indent: int = 4) -> str:
    """Escape ``text`` for a triple-quoted docstring and indent its continuation lines."""
    text = text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    pad = " " * indent
    lines = text.strip().splitlines() or [""]
    return "\n".join([lines[0]] + [pad + line if line.strip() else "" for line in lines[1:]])


def _environment() -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )
    env.filters.update(
        annotation=annotation,
        attribute=to_identifier,
        class_name=to_class_name,
        docstring=docstring,
        module_name=to_identifier,
        pyrepr=repr,
    )
    return env


def render_class(env: jinja2.Environment, definition: ClassDefinition, context: dict[str, Any]) -> str:
    """Render one class definition to module source."""
    template = env.get_template(_TEMPLATES[definition.kind])
    return template.render(cls=definition, op=definition.operation, **context)


def _render_package(
    env: jinja2.Environment,
    directory: Path,
    package: str,
    classes: Iterable[ClassDefinition],
    context: dict[str, Any],
) -> dict[Path, str]:
    files: dict[Path, str] = {}
    owners: dict[str, str] = {}
    classes = list(classes)
    for definition in classes:
        module = to_identifier(definition.name)
        if module in owners:
            raise GenerationError(
                f"classes {owners[module]!r} and {definition.name!r} both map to module {module}.py",
                package,
            )
        owners[module] = definition.name
        files[directory / f"{module}.py"] = render_class(env, definition, context)

    init = env.get_template("package_init.py.j2")
    files[directory / "__init__.py"] = init.render(package=package, classes=classes, **context)
    logger.info("rendered %d modules for %s", len(classes), package)
    return files


def emit(result: GenerationResult, output_dir: Path) -> dict[Path, str]:
    """Render every class of ``result`` into a path -> source mapping."""
    env = _environment()
    context = {
        "namespace": result.namespace,
        "model_base": result.model_base,
        "request_base": result.request_base,
        "client_class": result.client_class,
    }

    files = _render_package(
        env, output_dir / "models", f"{result.namespace}.models", result.models.values(), context,
    )
    files.update(_render_package(
        env, output_dir / "requests", f"{result.namespace}.requests", result.requests.values(), context,
    ))

    root_init = output_dir / "__init__.py"
    if not root_init.exists():
        files[root_init] = f'"""Client for the {result.namespace} API."""\n'
    return files


def write_files(files: dict[Path, str]) -> None:
    """Write generated files to disk.

    Args:
        files: Dictionary mapping file paths to their content.
    """
    for path, content in files.items():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
