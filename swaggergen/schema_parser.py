"""Parse a loaded Swagger document into typed schema nodes.

Handles:
- Scalar, $ref, array, object and allOf schema shapes
- nullable / x-nullable flags (boolean or the string "true")
- Path-item level parameters shared by every operation of a path
- #/parameters/ and #/responses/ indirections
- Integer status-code keys produced by YAML

Everything downstream works on these frozen nodes instead of probing the raw
mappings, so a malformed document fails here with a location pointer.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .errors import MalformedSchemaError, UnresolvedReferenceError
from .loader import get_base_path, get_definitions, get_paths
from .naming import drop_trailing_char

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch")

# Keys of a non-body parameter that describe its value type
_PARAM_SCHEMA_KEYS = ("type", "format", "items", "enum", "nullable", "x-nullable")


@dataclass(frozen=True, kw_only=True)
class SchemaNode:
    """Base class for all schema nodes."""

    description: str = ""
    nullable: bool = False


@dataclass(frozen=True, kw_only=True)
class ScalarSchema(SchemaNode):
    """A leaf type: integer, string, boolean, number, null (or object/file)."""

    type_name: str


@dataclass(frozen=True, kw_only=True)
class ReferenceSchema(SchemaNode):
    """A pointer to a named definition."""

    target: str
    ref: str = ""


@dataclass(frozen=True, kw_only=True)
class ArraySchema(SchemaNode):
    items: SchemaNode


@dataclass(frozen=True, kw_only=True)
class ObjectSchema(SchemaNode):
    """Inline properties plus the names of the required ones."""

    properties: Mapping[str, SchemaNode] = field(default_factory=lambda: MappingProxyType({}))
    required: frozenset[str] = frozenset()


@dataclass(frozen=True, kw_only=True)
class CompositeSchema(SchemaNode):
    """An ``allOf`` list, kept in document order."""

    parts: tuple[SchemaNode, ...]


@dataclass(frozen=True)
class ParameterNode:
    name: str
    location: str  # path / query / body / header / formData
    required: bool
    description: str
    schema: SchemaNode | None


@dataclass(frozen=True)
class ResponseNode:
    description: str
    schema: SchemaNode | None


@dataclass(frozen=True)
class OperationNode:
    """One (path, HTTP method) pair."""

    method: str
    path: str
    summary: str
    description: str
    operation_id: str
    parameters: tuple[ParameterNode, ...]
    responses: Mapping[str, ResponseNode]


@dataclass(frozen=True)
class SchemaDocument:
    """Root of a parsed document; immutable for the length of a run."""

    base_path: str
    definitions: Mapping[str, SchemaNode]
    paths: Mapping[str, Mapping[str, OperationNode]]


def _is_nullable(raw: Mapping[str, Any]) -> bool:
    """Check the nullable flags, which some documents write as strings."""
    for key in ("nullable", "x-nullable"):
        if raw.get(key) in (True, "true"):
            return True
    return False


def ref_target(ref: Any, pointer: str) -> str:
    """Return the segment after the last ``/`` of a ``$ref`` string."""
    if not isinstance(ref, str) or not ref.rsplit("/", 1)[-1]:
        raise MalformedSchemaError(f"invalid $ref {ref!r}", pointer)
    return ref.rsplit("/", 1)[-1]


def parse_schema(raw: Any, pointer: str) -> SchemaNode:
    """Parse one raw schema mapping into a schema node."""
    if not isinstance(raw, Mapping):
        raise MalformedSchemaError("schema must be a mapping", pointer)

    common = {
        "description": raw.get("description") or "",
        "nullable": _is_nullable(raw),
    }

    if "$ref" in raw:
        ref = raw["$ref"]
        return ReferenceSchema(target=ref_target(ref, pointer), ref=ref, **common)

    if "allOf" in raw:
        parts = raw["allOf"]
        if not isinstance(parts, list):
            raise MalformedSchemaError("allOf must be a list", pointer)
        return CompositeSchema(
            parts=tuple(parse_schema(part, f"{pointer}/allOf/{i}") for i, part in enumerate(parts)),
            **common,
        )

    schema_type = raw.get("type")
    if schema_type == "array":
        if "items" not in raw:
            raise MalformedSchemaError("array schema has no items", pointer)
        return ArraySchema(items=parse_schema(raw["items"], f"{pointer}/items"), **common)

    if "properties" in raw or ("required" in raw and schema_type in (None, "object")):
        raw_properties = raw.get("properties") or {}
        if not isinstance(raw_properties, Mapping):
            raise MalformedSchemaError("properties must be a mapping", pointer)
        required = raw.get("required") or []
        if not isinstance(required, list) or not all(isinstance(name, str) for name in required):
            raise MalformedSchemaError("required must be a list of property names", pointer)

        properties = {
            str(name): parse_schema(prop, f"{pointer}/properties/{name}")
            for name, prop in raw_properties.items()
        }
        return ObjectSchema(
            properties=MappingProxyType(properties),
            required=frozenset(required),
            **common,
        )

    if schema_type:
        return ScalarSchema(type_name=str(schema_type), **common)

    raise MalformedSchemaError("schema has neither type nor $ref", pointer)


def _lookup(spec: Mapping[str, Any], ref: str, section: str, pointer: str) -> Any:
    """Follow a ``#/<section>/<name>`` pointer inside the document."""
    name = ref_target(ref, pointer)
    try:
        return spec[section][name]
    except (KeyError, TypeError):
        raise UnresolvedReferenceError(f"{ref} does not resolve", pointer) from None


def _parse_parameter(spec: Mapping[str, Any], raw: Any, pointer: str) -> ParameterNode:
    if isinstance(raw, Mapping) and str(raw.get("$ref", "")).startswith("#/parameters/"):
        raw = _lookup(spec, raw["$ref"], "parameters", pointer)
    if not isinstance(raw, Mapping) or "name" not in raw or "in" not in raw:
        raise MalformedSchemaError("parameter needs a name and an 'in' location", pointer)

    location = raw["in"]
    if location == "body":
        schema = parse_schema(raw["schema"], f"{pointer}/schema") if raw.get("schema") else None
    else:
        schema = parse_schema({k: raw[k] for k in _PARAM_SCHEMA_KEYS if k in raw}, pointer)

    return ParameterNode(
        name=str(raw["name"]),
        location=location,
        required=bool(raw.get("required", False)),
        description=raw.get("description") or "",
        schema=schema,
    )


def _merge_parameters(
    shared: tuple[ParameterNode, ...],
    own: tuple[ParameterNode, ...],
) -> tuple[ParameterNode, ...]:
    """Operation parameters replace path-item ones with the same name and location."""
    merged = {(p.name, p.location): p for p in shared}
    for param in own:
        merged[(param.name, param.location)] = param
    return tuple(merged.values())


def _parse_response(spec: Mapping[str, Any], raw: Any, pointer: str) -> ResponseNode:
    if raw is None:
        return ResponseNode(description="", schema=None)
    if not isinstance(raw, Mapping):
        raise MalformedSchemaError("response must be a mapping", pointer)

    if str(raw.get("$ref", "")).startswith("#/responses/"):
        raw = _lookup(spec, raw["$ref"], "responses", pointer)

    if "$ref" in raw:
        schema = parse_schema({"$ref": raw["$ref"]}, pointer)
    elif raw.get("schema"):
        schema = parse_schema(raw["schema"], f"{pointer}/schema")
    else:
        schema = None
    return ResponseNode(description=raw.get("description") or "", schema=schema)


def _parse_operation(
    spec: Mapping[str, Any],
    path: str,
    method: str,
    raw: Any,
    shared: tuple[ParameterNode, ...],
) -> OperationNode:
    pointer = f"paths/{path}/{method}"
    if not isinstance(raw, Mapping):
        raise MalformedSchemaError("operation must be a mapping", pointer)

    own = tuple(
        _parse_parameter(spec, param, f"{pointer}/parameters/{i}")
        for i, param in enumerate(raw.get("parameters") or [])
    )
    responses = {
        str(code): _parse_response(spec, response, f"{pointer}/responses/{code}")
        for code, response in (raw.get("responses") or {}).items()
    }

    return OperationNode(
        method=method,
        path=path,
        summary=raw.get("summary") or "",
        description=raw.get("description") or "",
        operation_id=raw.get("operationId") or "",
        parameters=_merge_parameters(shared, own),
        responses=MappingProxyType(responses),
    )


def parse_document(spec: Mapping[str, Any]) -> SchemaDocument:
    """Parse the loaded document into a ``SchemaDocument``."""
    definitions = {
        name: parse_schema(raw, f"definitions/{name}")
        for name, raw in get_definitions(spec).items()
    }

    paths: dict[str, Mapping[str, OperationNode]] = {}
    for path, path_item in get_paths(spec).items():
        if not isinstance(path_item, Mapping):
            raise MalformedSchemaError("path item must be a mapping", f"paths/{path}")
        shared = tuple(
            _parse_parameter(spec, param, f"paths/{path}/parameters/{i}")
            for i, param in enumerate(path_item.get("parameters") or [])
        )
        operations = {
            method: _parse_operation(spec, path, method, path_item[method], shared)
            for method in path_item
            if method in HTTP_METHODS
        }
        paths[path] = MappingProxyType(operations)

    return SchemaDocument(
        base_path=drop_trailing_char(str(get_base_path(spec)), "/"),
        definitions=MappingProxyType(definitions),
        paths=MappingProxyType(paths),
    )
