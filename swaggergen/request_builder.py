"""Build request classes from the ``paths`` section.

Assigns each (path, method) pair a class name, binds its path, query and body
parameters, and builds the per-status-code response map.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from types import MappingProxyType

from .class_model import (
    REQUEST_BASE_CLASS,
    BodyBinding,
    ClassDefinition,
    ClassKind,
    OperationBinding,
    ParameterBinding,
    ResponseType,
    freeze,
)
from .errors import MalformedSchemaError, NoSuccessResponseError
from .naming import capitalize, normalize_path, path_to_identifier, to_identifier
from .schema_parser import OperationNode, ParameterNode, ResponseNode, SchemaDocument
from .type_resolver import TypeResolver

logger = logging.getLogger(__name__)

# Status codes in this range count as a positive response
_SUCCESS_CODES = range(1, 400)

# A period followed by whitespace or the end of the text; "v1.2" does not match
_SENTENCE_END = re.compile(r"\.(?:\s|$)")


def class_name_for(method: str, path: str, more_specificity: bool = False) -> str:
    """``get`` + ``/users/{id}/posts`` -> ``GetUsersPosts``."""
    return capitalize(method.lower()) + path_to_identifier(normalize_path(path, more_specificity))


def is_success_code(code: str) -> bool:
    return code.isdigit() and int(code) in _SUCCESS_CODES


def _make_comment(operation: OperationNode) -> str:
    """Build the class comment from summary, description or the route."""
    if operation.summary:
        return operation.summary
    if operation.description:
        return _SENTENCE_END.split(operation.description, 1)[0].strip()
    return f"{operation.method.upper()} {operation.path}"


def _bind_parameter(param: ParameterNode, resolver: TypeResolver, pointer: str) -> ParameterBinding:
    return ParameterBinding(
        name=param.name,
        type=resolver.resolve(param.schema, pointer),
        required=param.required,
        description=param.description,
    )


def _bind_body(param: ParameterNode, resolver: TypeResolver, pointer: str) -> BodyBinding | None:
    """Bind a body parameter; bodies are always a single model."""
    if param.schema is None:
        return None
    body_type = resolver.resolve(param.schema, pointer)
    if not body_type.is_reference:
        raise MalformedSchemaError(
            f"body parameter {param.name!r} must reference a single definition", pointer,
        )
    return BodyBinding(name=param.name.lower(), model=body_type.name)


def _check_attributes(
    path_params: list[ParameterBinding],
    query_params: list[ParameterBinding],
    body: BodyBinding | None,
    pointer: str,
) -> None:
    """Fail when two bindings would share one member of the generated class."""
    owners: dict[str, str] = {}
    for binding in path_params + query_params:
        attr = to_identifier(binding.name)
        if attr in owners:
            raise MalformedSchemaError(
                f"parameters {owners[attr]!r} and {binding.name!r} both map to attribute {attr!r}",
                pointer,
            )
        owners[attr] = binding.name

    # Optional query parameters get a set_<attr> method of their own
    taken = {"header", "body"} if body is not None else {"header"}
    for binding in query_params:
        attr = to_identifier(binding.name)
        if not binding.required and attr in taken:
            raise MalformedSchemaError(
                f"query parameter {binding.name!r} clashes with set_{attr}", pointer,
            )


def response_type(response: ResponseNode, resolver: TypeResolver, pointer: str) -> ResponseType:
    """Resolve the model (if any) a response hydrates into."""
    if response.schema is None:
        return ResponseType()
    resolved = resolver.resolve(response.schema, pointer)
    if resolved.is_array:
        element = resolved.element
        if element is not None and element.is_reference:
            return ResponseType(model=element.name, is_array=True)
        return ResponseType()
    if resolved.is_reference:
        return ResponseType(model=resolved.name)
    return ResponseType()


def build_responses(
    operation: OperationNode,
    resolver: TypeResolver,
    pointer: str,
) -> Mapping[str, ResponseType]:
    """Build the status code -> response type map, requiring one success."""
    responses = {
        code: response_type(response, resolver, f"{pointer}/responses/{code}")
        for code, response in operation.responses.items()
    }
    if not any(is_success_code(code) for code in responses):
        raise NoSuccessResponseError(
            "response blocks must contain at least one positive response type", pointer,
        )
    return MappingProxyType(responses)


def build_request(
    operation: OperationNode,
    resolver: TypeResolver,
    base_path: str = "",
    request_base: str = REQUEST_BASE_CLASS,
    more_specificity: bool = False,
) -> ClassDefinition:
    """Build the class for one operation."""
    method, path = operation.method, operation.path
    pointer = f"paths/{path}/{method}"
    normalized = normalize_path(path, more_specificity)

    path_params: list[ParameterBinding] = []
    query_params: dict[str, ParameterBinding] = {}
    body: BodyBinding | None = None

    for i, param in enumerate(operation.parameters):
        param_pointer = f"{pointer}/parameters/{i}"
        if param.location == "path":
            path_params.append(_bind_parameter(param, resolver, param_pointer))
        elif param.location == "query":
            query_params[param.name] = _bind_parameter(param, resolver, param_pointer)
        elif param.location == "body":
            body = _bind_body(param, resolver, param_pointer)
        else:
            logger.debug("%s: %s parameter %r is not bound", pointer, param.location, param.name)

    _check_attributes(path_params, list(query_params.values()), body, pointer)

    uri = f"{base_path}/{normalized}"
    uri_template = base_path + (path if path.startswith("/") else f"/{path}")
    binding = OperationBinding(
        http_method=method.upper(),
        uri=uri,
        uri_template=uri_template,
        path_params=tuple(path_params),
        query_params=tuple(query_params.values()),
        body=body,
        responses=build_responses(operation, resolver, pointer),
    )

    return ClassDefinition(
        name=class_name_for(method, path, more_specificity),
        kind=ClassKind.REQUEST,
        extends=request_base,
        comment=_make_comment(operation),
        constants=MappingProxyType({
            "METHOD": binding.http_method,
            "URI": uri,
            "URI_TEMPLATE": uri_template,
        }),
        operation=binding,
    )


def build_requests(
    document: SchemaDocument,
    request_base: str = REQUEST_BASE_CLASS,
    more_specificity: bool = False,
) -> Mapping[str, ClassDefinition]:
    """Build one request class per operation, in document order."""
    resolver = TypeResolver(document.definitions)
    classes: dict[str, ClassDefinition] = {}

    for path, operations in document.paths.items():
        for method, operation in operations.items():
            request = build_request(
                operation,
                resolver,
                base_path=document.base_path,
                request_base=request_base,
                more_specificity=more_specificity,
            )
            if request.name in classes:
                logger.info(
                    "%s %s replaces an earlier %s; use more specificity to keep both",
                    method.upper(), path, request.name,
                )
            classes[request.name] = request

    return freeze(classes)
