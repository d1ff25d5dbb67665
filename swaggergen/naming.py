"""Convert Swagger paths and property names to class and member names.

Request class names:
  METHOD + PascalCase of the normalized path

  GET    /users                 -> GetUsers
  GET    /users/{id}/posts      -> GetUsersPosts     (default)
  GET    /users/{id}/posts      -> GetUsersIdPosts   (more specificity)
  POST   /store/order           -> PostStoreOrder

Member names:
  photo_urls -> accessor PhotoUrls, element accessor PhotoUrl
  categories -> element name category
"""

from __future__ import annotations

import keyword
import re

_ACRONYM = re.compile(r"([A-Z]+)([A-Z][a-z])")
_LOWER_UPPER = re.compile(r"([a-z\d])([A-Z])")
_NON_WORD = re.compile(r"\W")

# Names generated members must not take: method parameters and the members
# of the generated base classes
_RESERVED_NAMES = frozenset({
    "self", "cls",
    "to_dict", "from_dict", "pre_output", "required_fields",
    "get_method", "get_uri", "get_path", "get_query", "get_body", "get_headers",
    "set_header", "send_with",
})


def drop_trailing_char(text: str, char: str) -> str:
    """Remove one trailing ``char`` from ``text`` if present."""
    if text and text[-1] == char:
        return text[:-1]
    return text


def capitalize(text: str) -> str:
    """Uppercase the first character only, leaving the rest untouched."""
    return text[:1].upper() + text[1:]


def snake_to_camel(name: str) -> str:
    """Convert snake_case to camelCase; camelCase input passes through."""
    head, *rest = name.split("_")
    return head + "".join(capitalize(part) for part in rest)


def camel_to_snake(name: str) -> str:
    """Convert camelCase or PascalCase to snake_case."""
    s1 = _ACRONYM.sub(r"\1_\2", name)
    return _LOWER_UPPER.sub(r"\1_\2", s1).lower()


def singularize(word: str) -> str:
    """Return the singular form of a plural identifier.

    ``categories`` -> ``category``, ``tags`` -> ``tag``, ``data`` -> ``data``.
    Words ending in ``ss`` are already singular.
    """
    if word.endswith("ies"):
        return word[:-3] + "y"
    if word.endswith("s") and not word.endswith("ss"):
        return word[:-1]
    return word


def path_to_identifier(path: str) -> str:
    """Turn ``pet/findByStatus`` into ``PetFindByStatus``.

    Segments are delimited by ``/`` or ``-``; empty segments are skipped and
    characters that cannot appear in an identifier are dropped.
    """
    parts = path.replace("/", "-").split("-")
    joined = "".join(capitalize(part) for part in parts if part)
    return _NON_WORD.sub("", joined)


def strip_path_params(path: str) -> str:
    """Drop every segment holding a ``{param}`` placeholder."""
    parts = path[1:].split("/") if path.startswith("/") else path.split("/")
    return "/".join(part for part in parts if "{" not in part)


def strip_placeholders(path: str) -> str:
    """Keep every segment but remove the ``{`` and ``}`` braces."""
    path = path[1:] if path.startswith("/") else path
    return path.replace("{", "").replace("}", "")


def normalize_path(path: str, more_specificity: bool = False) -> str:
    """Normalize a path template for class naming."""
    if more_specificity:
        return strip_placeholders(path)
    return strip_path_params(path)


def accessor_name(property_name: str) -> str:
    """``photo_urls`` -> ``PhotoUrls``."""
    return capitalize(snake_to_camel(property_name))


def to_identifier(name: str) -> str:
    """Make a wire name usable as a Python identifier.

    ``api-key`` -> ``api_key``, ``petId`` -> ``pet_id``, ``from`` -> ``from_``,
    ``to_dict`` -> ``to_dict_`` (a member of the generated base classes).
    """
    ident = _NON_WORD.sub("_", camel_to_snake(name))
    ident = re.sub(r"_+", "_", ident).strip("_") or "value"
    if ident[0].isdigit():
        ident = f"_{ident}"
    if keyword.iskeyword(ident) or ident in _RESERVED_NAMES:
        ident += "_"
    return ident


def to_class_name(name: str) -> str:
    """Make a definition name usable as a Python class name."""
    ident = _NON_WORD.sub("_", name) or "Model"
    if ident[0].isdigit():
        ident = f"_{ident}"
    if keyword.iskeyword(ident):
        ident += "_"
    return ident
