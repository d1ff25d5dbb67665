"""Build model classes from the ``definitions`` section.

Handles:
- allOf inheritance (parent $ref + inline properties), flattened to ``extends``
- Single-element allOf and bare $ref definitions as alias classes
- Required / optional members with type-appropriate defaults
- Singular element accessors for array members
- Rejection of inheritance cycles and definitions named like the base class
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .class_model import (
    GENERATED_BANNER,
    MODEL_BASE_CLASS,
    ClassDefinition,
    ClassKind,
    PropertyDefinition,
    freeze,
)
from .errors import InvalidDefaultError, UnsupportedInheritanceError
from .naming import accessor_name, singularize
from .schema_parser import (
    CompositeSchema,
    ObjectSchema,
    ReferenceSchema,
    ScalarSchema,
    SchemaDocument,
    SchemaNode,
)
from .type_resolver import TypeDescriptor, TypeResolver

logger = logging.getLogger(__name__)

_SCALAR_DEFAULTS: dict[str, Any] = {
    "string": "",
    "integer": 0,
    "number": 0.0,
    "boolean": False,
    "null": None,
}


def default_value(prop_type: TypeDescriptor, name: str = "", pointer: str = "") -> Any:
    """Return the default for an optional member of type ``prop_type``."""
    if prop_type.is_array:
        return []
    if prop_type.is_reference:
        if prop_type.nullable:
            return None
        raise InvalidDefaultError(
            f"optional property {name!r} references {prop_type.name} and cannot have a default",
            pointer,
        )
    if prop_type.name in _SCALAR_DEFAULTS:
        return _SCALAR_DEFAULTS[prop_type.name]
    raise InvalidDefaultError(
        f"property {name!r} of type {prop_type.name!r} was not recognised to set a default value",
        pointer,
    )


def _own_members(node: SchemaNode, pointer: str) -> ObjectSchema | None:
    """Return the inline node holding a definition's own members."""
    if isinstance(node, ObjectSchema):
        return node
    if isinstance(node, ScalarSchema) and node.type_name == "object":
        return None
    raise UnsupportedInheritanceError(
        "the second allOf entry must hold the definition's own properties", pointer,
    )


def split_inheritance(
    node: SchemaNode,
    resolver: TypeResolver,
    model_base: str,
    pointer: str,
) -> tuple[str, ObjectSchema | None]:
    """Return (parent class name, node with own members) for a definition."""
    if isinstance(node, ReferenceSchema):
        return resolver.check_reference(node, pointer), None
    if isinstance(node, ObjectSchema):
        return model_base, node
    if not isinstance(node, CompositeSchema):
        return model_base, None

    parts = node.parts
    if len(parts) == 1:
        (part,) = parts
        if isinstance(part, CompositeSchema):
            raise UnsupportedInheritanceError("nested allOf is not supported", pointer)
        return split_inheritance(part, resolver, model_base, f"{pointer}/allOf/0")

    if len(parts) != 2:
        raise UnsupportedInheritanceError(
            f"allOf must hold a parent $ref and one inline node, got {len(parts)} entries",
            pointer,
        )

    parent, own = parts
    if not isinstance(parent, ReferenceSchema):
        raise UnsupportedInheritanceError("the first allOf entry must be a $ref", pointer)
    parent_name = resolver.check_reference(parent, f"{pointer}/allOf/0")
    return parent_name, _own_members(own, f"{pointer}/allOf/1")


def build_property(
    name: str,
    node: SchemaNode,
    required: bool,
    resolver: TypeResolver,
    pointer: str,
) -> PropertyDefinition:
    """Build one model member."""
    prop_type = resolver.resolve(node, pointer)
    accessor = accessor_name(name)

    element_name = element_accessor = ""
    if prop_type.is_array:
        element_name = singularize(name)
        element_accessor = singularize(accessor)

    return PropertyDefinition(
        name=name,
        type=prop_type,
        required=required,
        description=node.description,
        has_default=not required,
        default=None if required else default_value(prop_type, name, pointer),
        accessor=accessor,
        element_name=element_name,
        element_accessor=element_accessor,
    )


def build_model(
    name: str,
    node: SchemaNode,
    resolver: TypeResolver,
    model_base: str = MODEL_BASE_CLASS,
) -> ClassDefinition:
    """Build the class for one definition."""
    pointer = f"definitions/{name}"
    parent, own = split_inheritance(node, resolver, model_base, pointer)

    properties: list[PropertyDefinition] = []
    if own is not None:
        member_pointer = pointer if own is node else f"{pointer}/allOf/1"
        for prop_name, prop_node in own.properties.items():
            properties.append(build_property(
                prop_name,
                prop_node,
                prop_name in own.required,
                resolver,
                f"{member_pointer}/properties/{prop_name}",
            ))

    description = node.description or (own.description if own is not None else "")
    comment = GENERATED_BANNER
    if description:
        comment += f"\n\n{description}"

    return ClassDefinition(
        name=name,
        kind=ClassKind.MODEL,
        extends=parent,
        comment=comment,
        properties=tuple(properties),
    )


def check_inheritance(classes: Mapping[str, ClassDefinition]) -> None:
    """Fail when following ``extends`` from any model revisits a name."""
    for name, model in classes.items():
        chain = [name]
        parent = model.extends
        while parent in classes:
            if parent in chain:
                raise UnsupportedInheritanceError(
                    "inheritance cycle " + " -> ".join([*chain, parent]), f"definitions/{name}",
                )
            chain.append(parent)
            parent = classes[parent].extends


def build_models(
    document: SchemaDocument,
    model_base: str = MODEL_BASE_CLASS,
) -> Mapping[str, ClassDefinition]:
    """Build one model class per definition, in document order."""
    resolver = TypeResolver(document.definitions)
    classes: dict[str, ClassDefinition] = {}

    for name, node in document.definitions.items():
        if name == model_base:
            raise UnsupportedInheritanceError(
                f"definition {name!r} has the name of the model base class", f"definitions/{name}",
            )
        model = build_model(name, node, resolver, model_base)
        logger.debug(
            "model %s extends %s with %d properties", name, model.extends, len(model.properties),
        )
        classes[name] = model

    check_inheritance(classes)
    return freeze(classes)
