"""Intermediate class model handed to the emission backend.

Builders produce these frozen values; nothing is mutated after a builder
returns. Methods are not modelled: getters, setters, adders, constructors and
``set_body`` are derived from properties and the operation binding when the
classes are rendered.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from .type_resolver import TypeDescriptor

MODEL_BASE_CLASS = "SwaggerModel"
REQUEST_BASE_CLASS = "SwaggerRequest"
CLIENT_CLASS = "SwaggerClient"

GENERATED_BANNER = "** This file was generated automatically, you might want to avoid editing it **"


class ClassKind(str, Enum):
    MODEL = "model"
    REQUEST = "request"
    MODEL_BASE = "model_base"
    REQUEST_BASE = "request_base"
    CLIENT = "client"


@dataclass(frozen=True)
class PropertyDefinition:
    """One member of a generated model.

    ``default`` is only meaningful when ``has_default`` is set, since ``None``
    is itself a valid default for null-typed members.
    """

    name: str
    type: TypeDescriptor
    required: bool
    description: str = ""
    has_default: bool = False
    default: Any = None
    accessor: str = ""
    element_name: str = ""
    element_accessor: str = ""


@dataclass(frozen=True)
class ParameterBinding:
    name: str
    type: TypeDescriptor
    required: bool
    description: str = ""


@dataclass(frozen=True)
class BodyBinding:
    name: str
    model: str


@dataclass(frozen=True)
class ResponseType:
    """``model`` is ``None`` for the empty marker (no model to hydrate)."""

    model: str | None = None
    is_array: bool = False

    @property
    def is_empty(self) -> bool:
        return self.model is None


@dataclass(frozen=True)
class OperationBinding:
    http_method: str
    uri: str
    uri_template: str
    path_params: tuple[ParameterBinding, ...] = ()
    query_params: tuple[ParameterBinding, ...] = ()
    body: BodyBinding | None = None
    responses: Mapping[str, ResponseType] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def constructor_params(self) -> tuple[ParameterBinding, ...]:
        """Path parameters and required query parameters, required ones first."""
        params = self.path_params + tuple(p for p in self.query_params if p.required)
        return tuple(p for p in params if p.required) + tuple(p for p in params if not p.required)

    @property
    def optional_query_params(self) -> tuple[ParameterBinding, ...]:
        return tuple(p for p in self.query_params if not p.required)


@dataclass(frozen=True)
class ClassDefinition:
    name: str
    kind: ClassKind
    extends: str | None = None
    comment: str = ""
    properties: tuple[PropertyDefinition, ...] = ()
    constants: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    operation: OperationBinding | None = None

    @property
    def is_base(self) -> bool:
        return self.kind not in (ClassKind.MODEL, ClassKind.REQUEST)


@dataclass(frozen=True)
class GenerationResult:
    """Everything the emission backend needs for one run."""

    namespace: str
    models: Mapping[str, ClassDefinition]
    requests: Mapping[str, ClassDefinition]
    model_base: str = MODEL_BASE_CLASS
    request_base: str = REQUEST_BASE_CLASS
    client_class: str = CLIENT_CLASS


def freeze(classes: Mapping[str, ClassDefinition]) -> Mapping[str, ClassDefinition]:
    """Return a read-only view over a builder's accumulated classes."""
    return MappingProxyType(dict(classes))
