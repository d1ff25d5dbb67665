"""Tests for the naming module."""

import pytest

from swaggergen.naming import (
    accessor_name,
    camel_to_snake,
    drop_trailing_char,
    normalize_path,
    path_to_identifier,
    singularize,
    snake_to_camel,
    to_class_name,
    to_identifier,
)


class TestSingularize:
    """Test plural -> singular element names."""

    def test_ies(self):
        assert singularize("categories") == "category"

    def test_trailing_s(self):
        assert singularize("tags") == "tag"

    def test_unchanged(self):
        assert singularize("data") == "data"

    def test_double_s_is_singular(self):
        assert singularize("address") == "address"

    def test_pascal_case(self):
        assert singularize("PhotoUrls") == "PhotoUrl"

    @pytest.mark.parametrize("word", ["categories", "tags", "data", "statuses", "series", "bus", "Entries"])
    def test_idempotent(self, word):
        once = singularize(word)
        assert singularize(once) == once


class TestPathNormalization:
    """Test path template -> class name fragment."""

    def test_default_drops_params(self):
        assert normalize_path("/users/{id}/posts") == "users/posts"

    def test_more_specificity_keeps_names(self):
        assert normalize_path("/users/{id}/posts", more_specificity=True) == "users/id/posts"

    def test_identifier_default(self):
        assert path_to_identifier(normalize_path("/users/{id}/posts")) == "UsersPosts"

    def test_identifier_more_specificity(self):
        assert path_to_identifier(normalize_path("/users/{id}/posts", True)) == "UsersIdPosts"

    def test_hyphens_split_segments(self):
        assert path_to_identifier("store/order-items") == "StoreOrderItems"

    def test_camel_segments_kept(self):
        assert path_to_identifier("pet/findByStatus") == "PetFindByStatus"

    def test_root_path(self):
        assert path_to_identifier(normalize_path("/")) == ""

    def test_invalid_characters_dropped(self):
        assert path_to_identifier("v1.0/items") == "V10Items"
        assert path_to_identifier("v1.0/items").isidentifier()


class TestCaseConversion:

    def test_drop_trailing_char(self):
        assert drop_trailing_char("/v2/", "/") == "/v2"
        assert drop_trailing_char("/v2", "/") == "/v2"
        assert drop_trailing_char("", "/") == ""

    def test_snake_to_camel(self):
        assert snake_to_camel("photo_urls") == "photoUrls"
        assert snake_to_camel("photoUrls") == "photoUrls"

    def test_camel_to_snake(self):
        assert camel_to_snake("GetUsersIdPosts") == "get_users_id_posts"
        assert camel_to_snake("HTTPStatus") == "http_status"

    def test_accessor_name(self):
        assert accessor_name("photo_urls") == "PhotoUrls"
        assert accessor_name("name") == "Name"

    def test_to_identifier(self):
        assert to_identifier("petId") == "pet_id"
        assert to_identifier("page-size") == "page_size"
        assert to_identifier("from") == "from_"
        assert to_identifier("self") == "self_"
        assert to_identifier("2fa") == "_2fa"

    @pytest.mark.parametrize("name", ["to_dict", "fromDict", "pre_output", "required_fields", "send_with", "get_uri"])
    def test_base_class_members_suffixed(self, name):
        assert to_identifier(name).endswith("_")

    def test_to_class_name(self):
        assert to_class_name("Pet") == "Pet"
        assert to_class_name("Pet.Category") == "Pet_Category"
