import hashlib

from dialectorm.utils.naming import (
    build_key_name,
    camel_to_snake,
    sanitize_key_name,
    shorten_identifier,
)


def test_camel_to_snake():
    assert camel_to_snake("CreatedAt") == "created_at"
    assert camel_to_snake("ExternalID") == "external_id"
    assert camel_to_snake("name") == "name"


def test_short_identifiers_are_unchanged():
    assert shorten_identifier("users") == "users"
    assert shorten_identifier("x" * 30) == "x" * 30


def test_long_identifiers_become_truncated_digest():
    name = "order_line_items_by_customer_region"
    expected = hashlib.sha1(name.encode("utf-8")).hexdigest()[:29]
    assert shorten_identifier(name) == expected
    assert shorten_identifier(name) == shorten_identifier(name)


def test_digest_is_kept_whole_when_it_fits():
    name = "y" * 80
    assert shorten_identifier(name, limit=64) == hashlib.sha1(name.encode("utf-8")).hexdigest()


def test_key_names_are_sanitized():
    assert sanitize_key_name("public.users-email") == "public_users_email"
    assert build_key_name("idx", "users", "first name", "last name") == "idx_users_first_name_last_name"
