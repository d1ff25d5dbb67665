"""Resolve schema nodes to type descriptors.

A descriptor says whether a member holds a scalar, a reference to another
generated class, or an array of either, and whether it may be null.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from .errors import UnresolvedReferenceError, UnsupportedInheritanceError
from .schema_parser import (
    ArraySchema,
    CompositeSchema,
    ObjectSchema,
    ReferenceSchema,
    ScalarSchema,
    SchemaNode,
)

# Swagger scalar type -> display name used in generated docs
_DISPLAY_NAMES: dict[str, str] = {
    "number": "float",
    "integer": "int",
    "boolean": "bool",
}


class TypeKind(str, Enum):
    SCALAR = "scalar"
    REFERENCE = "reference"
    ARRAY = "array"


@dataclass(frozen=True)
class TypeDescriptor:
    """Resolved type of a property, parameter, body or response."""

    kind: TypeKind
    name: str = ""
    element: TypeDescriptor | None = None
    nullable: bool = False

    @property
    def is_scalar(self) -> bool:
        return self.kind is TypeKind.SCALAR

    @property
    def is_reference(self) -> bool:
        return self.kind is TypeKind.REFERENCE

    @property
    def is_array(self) -> bool:
        return self.kind is TypeKind.ARRAY

    @property
    def display_name(self) -> str:
        """``number`` -> ``float``, arrays as ``Tag[]``."""
        if self.element is not None:
            return f"{self.element.display_name}[]"
        return _DISPLAY_NAMES.get(self.name, self.name)

    @property
    def model_name(self) -> str | None:
        """Class referenced by this type or its element, if any."""
        if self.element is not None:
            return self.element.model_name
        return self.name if self.is_reference else None


def scalar(type_name: str, nullable: bool = False) -> TypeDescriptor:
    return TypeDescriptor(TypeKind.SCALAR, type_name, nullable=nullable)


def reference(class_name: str, nullable: bool = False) -> TypeDescriptor:
    return TypeDescriptor(TypeKind.REFERENCE, class_name, nullable=nullable)


def array_of(element: TypeDescriptor, nullable: bool = False) -> TypeDescriptor:
    return TypeDescriptor(TypeKind.ARRAY, "array", element=element, nullable=nullable)


class TypeResolver:
    """Resolves nodes against the set of definition names of one document."""

    def __init__(self, definition_names: Iterable[str]) -> None:
        self._names = frozenset(definition_names)

    def check_reference(self, node: ReferenceSchema, pointer: str) -> str:
        """Return the referenced class name, failing if it is not defined."""
        if node.target not in self._names:
            raise UnresolvedReferenceError(
                f"{node.ref or node.target} does not name a definition", pointer,
            )
        return node.target

    def resolve(self, node: SchemaNode, pointer: str = "") -> TypeDescriptor:
        """Resolve ``node`` to a ``TypeDescriptor``."""
        nullable = node.nullable

        # A single-element allOf is an alias for its only entry
        while isinstance(node, CompositeSchema):
            if len(node.parts) != 1:
                raise UnsupportedInheritanceError(
                    f"allOf with {len(node.parts)} entries cannot be used as a member type",
                    pointer,
                )
            node = node.parts[0]
            nullable = nullable or node.nullable

        if isinstance(node, ReferenceSchema):
            return reference(self.check_reference(node, pointer), nullable)
        if isinstance(node, ArraySchema):
            return array_of(self.resolve(node.items, f"{pointer}/items"), nullable)
        if isinstance(node, ObjectSchema):
            return scalar("object", nullable)
        if isinstance(node, ScalarSchema):
            return scalar(node.type_name, nullable)
        raise TypeError(f"unexpected schema node {node!r}")
