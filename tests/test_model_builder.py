"""Tests for the model_builder module."""

import pytest

from swaggergen.class_model import GENERATED_BANNER, MODEL_BASE_CLASS, ClassKind
from swaggergen.errors import (
    InvalidDefaultError,
    UnresolvedReferenceError,
    UnsupportedInheritanceError,
)
from swaggergen.model_builder import build_models, default_value
from swaggergen.schema_parser import parse_document
from swaggergen.type_resolver import array_of, reference, scalar


def _models(definitions, **kwargs):
    return build_models(parse_document({"definitions": definitions}), **kwargs)


class TestEndToEnd:
    """The minimal Pet document from start to finish."""

    @classmethod
    def setup_class(cls):
        cls.models = _models({
            "Pet": {
                "required": ["name"],
                "properties": {
                    "name": {"type": "string"},
                    "tags": {"type": "array", "items": {"type": "string"}},
                },
            },
        })
        cls.pet = cls.models["Pet"]

    def test_single_class(self):
        assert list(self.models) == ["Pet"]
        assert self.pet.kind is ClassKind.MODEL
        assert self.pet.extends == MODEL_BASE_CLASS

    def test_required_name_has_no_default(self):
        name = self.pet.properties[0]
        assert name.name == "name"
        assert name.required is True
        assert name.has_default is False

    def test_tags_default_to_empty_collection(self):
        tags = self.pet.properties[1]
        assert tags.required is False
        assert tags.has_default is True
        assert tags.default == []
        assert tags.type == array_of(scalar("string"))

    def test_element_accessor(self):
        tags = self.pet.properties[1]
        assert tags.element_name == "tag"
        assert tags.element_accessor == "Tag"
        assert tags.accessor == "Tags"

    def test_banner_comment(self):
        assert self.pet.comment == GENERATED_BANNER


class TestInheritance:
    """Test allOf flattening to extends."""

    def test_parent_and_own_properties(self):
        models = _models({
            "Base": {"properties": {"id": {"type": "integer"}}},
            "Child": {"allOf": [
                {"$ref": "#/definitions/Base"},
                {"required": ["a"], "properties": {"a": {"type": "string"}}},
            ]},
        })
        child = models["Child"]
        assert child.extends == "Base"
        assert [p.name for p in child.properties] == ["a"]
        assert child.properties[0].required is True

    def test_single_reference_is_alias(self):
        models = _models({
            "Base": {"properties": {"id": {"type": "integer"}}},
            "Alias": {"allOf": [{"$ref": "#/definitions/Base"}]},
        })
        assert models["Alias"].extends == "Base"
        assert models["Alias"].properties == ()

    def test_single_inline_node_is_own_properties(self):
        models = _models({"Solo": {"allOf": [{"properties": {"a": {"type": "string"}}}]}})
        assert models["Solo"].extends == MODEL_BASE_CLASS
        assert [p.name for p in models["Solo"].properties] == ["a"]

    def test_three_entries_unsupported(self):
        with pytest.raises(UnsupportedInheritanceError):
            _models({
                "Base": {"properties": {}},
                "Child": {"allOf": [
                    {"$ref": "#/definitions/Base"},
                    {"properties": {}},
                    {"properties": {}},
                ]},
            })

    def test_first_entry_must_be_reference(self):
        with pytest.raises(UnsupportedInheritanceError):
            _models({"Child": {"allOf": [{"properties": {}}, {"properties": {}}]}})

    def test_nested_chain_unsupported(self):
        with pytest.raises(UnsupportedInheritanceError):
            _models({
                "Base": {"properties": {}},
                "Child": {"allOf": [
                    {"$ref": "#/definitions/Base"},
                    {"allOf": [{"$ref": "#/definitions/Base"}, {"properties": {}}]},
                ]},
            })

    def test_missing_parent(self):
        with pytest.raises(UnresolvedReferenceError):
            _models({"Child": {"allOf": [{"$ref": "#/definitions/Gone"}, {"properties": {}}]}})

    def test_petstore_dog(self, petstore_document):
        dog = build_models(petstore_document)["Dog"]
        assert dog.extends == "Pet"
        assert [p.name for p in dog.properties] == ["breed", "good_boy"]
        assert dog.properties[1].accessor == "GoodBoy"


class TestDefaults:
    """Test the default-value law."""

    @pytest.mark.parametrize("type_name, expected", [
        ("string", ""),
        ("integer", 0),
        ("number", 0.0),
        ("boolean", False),
        ("null", None),
    ])
    def test_scalar_defaults(self, type_name, expected):
        models = _models({"M": {"properties": {"p": {"type": type_name}}}})
        prop = models["M"].properties[0]
        assert prop.has_default is True
        assert prop.default == expected
        assert type(prop.default) is type(expected)

    def test_optional_reference_raises(self):
        with pytest.raises(InvalidDefaultError):
            _models({
                "A": {"properties": {}},
                "M": {"properties": {"a": {"$ref": "#/definitions/A"}}},
            })

    def test_required_reference_allowed(self):
        models = _models({
            "A": {"properties": {}},
            "M": {"required": ["a"], "properties": {"a": {"$ref": "#/definitions/A"}}},
        })
        assert models["M"].properties[0].type == reference("A")

    def test_optional_nullable_reference_defaults_to_none(self):
        models = _models({
            "A": {"properties": {}},
            "M": {"properties": {"a": {"$ref": "#/definitions/A", "nullable": True}}},
        })
        prop = models["M"].properties[0]
        assert prop.has_default is True
        assert prop.default is None

    def test_unrecognised_scalar_raises(self):
        with pytest.raises(InvalidDefaultError):
            default_value(scalar("object"), "meta")


class TestModelSet:

    def test_order_and_count(self, petstore_document):
        models = build_models(petstore_document)
        assert list(models) == ["Pet", "Category", "Owner", "Dog", "Error"]

    def test_custom_base(self):
        models = _models({"M": {"properties": {}}}, model_base="BaseModel")
        assert models["M"].extends == "BaseModel"

    def test_description_in_comment(self, petstore_document):
        pet = build_models(petstore_document)["Pet"]
        assert pet.comment.startswith(GENERATED_BANNER)
        assert pet.comment.endswith("A pet for sale.")

    def test_non_object_definition_is_empty_class(self):
        models = _models({"Status": {"type": "string", "enum": ["a", "b"]}})
        assert models["Status"].properties == ()
        assert models["Status"].extends == MODEL_BASE_CLASS

    def test_result_is_read_only(self, petstore_document):
        models = build_models(petstore_document)
        with pytest.raises(TypeError):
            models["Extra"] = models["Pet"]


class TestInheritanceCycles:

    def test_self_alias(self):
        with pytest.raises(UnsupportedInheritanceError, match="A -> A"):
            _models({"A": {"$ref": "#/definitions/A"}})

    def test_two_definition_cycle(self):
        with pytest.raises(UnsupportedInheritanceError, match="inheritance cycle"):
            _models({
                "A": {"allOf": [{"$ref": "#/definitions/B"}, {"properties": {}}]},
                "B": {"allOf": [{"$ref": "#/definitions/A"}, {"properties": {}}]},
            })

    def test_definition_named_like_base(self):
        with pytest.raises(UnsupportedInheritanceError, match="model base class"):
            _models({"SwaggerModel": {"properties": {}}})

    def test_definition_named_like_custom_base(self):
        with pytest.raises(UnsupportedInheritanceError):
            _models({"Base": {"properties": {}}}, model_base="Base")

    def test_long_chain_is_fine(self):
        models = _models({
            "A": {"properties": {"a": {"type": "string"}}},
            "B": {"allOf": [{"$ref": "#/definitions/A"}, {"properties": {}}]},
            "C": {"allOf": [{"$ref": "#/definitions/B"}, {"properties": {}}]},
        })
        assert models["C"].extends == "B"
