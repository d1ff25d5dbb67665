"""Exceptions raised while turning a Swagger document into classes.

Every generation error is fatal to the current run: builders raise at the
point of detection and nothing is partially emitted.
"""

from __future__ import annotations


class SwaggerGenError(Exception):
    """Base class for everything this package raises on purpose."""


class ConfigError(SwaggerGenError):
    """Invalid generator configuration (namespace, base class names)."""


class GenerationError(SwaggerGenError):
    """An inconsistency in the input document.

    ``pointer`` is a slash-delimited location inside the document, e.g.
    ``definitions/Pet/properties/tags``.
    """

    def __init__(self, message: str, pointer: str = "") -> None:
        self.message = message
        self.pointer = pointer
        super().__init__(f"{message} (at {pointer})" if pointer else message)


class MalformedSchemaError(GenerationError):
    """A node lacks both ``type`` and ``$ref``, or an array lacks ``items``."""


class UnresolvedReferenceError(GenerationError):
    """A ``$ref`` targets a name absent from ``definitions``."""


class InvalidDefaultError(GenerationError):
    """A default value was requested for a type that cannot have one."""


class NoSuccessResponseError(GenerationError):
    """An operation declares no status code in [1, 399]."""


class UnsupportedInheritanceError(GenerationError):
    """An ``allOf`` that is not a parent reference plus one inline node."""
