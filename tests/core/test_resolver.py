import dataclasses
from dataclasses import dataclass
from typing import Any, Optional

import pytest

from dialectorm.core import (
    FieldMetadata,
    Kind,
    PrimaryKey,
    Scanner,
    SQLTypeProvider,
    parse_field_for_dialect,
)
from dialectorm.dialects import CommonDialect, MySQLDialect, OracleDialect, PostgresDialect


class Point(SQLTypeProvider):
    def sql_type(self, dialect):
        if dialect.name == "postgres":
            return "point"
        return "VARCHAR(64)"


@dataclass
class Wrapper(Scanner):
    inner: PrimaryKey = dataclasses.field(default_factory=PrimaryKey)

    def scan(self, src: Any) -> None:
        self.inner.scan(src)

    def value(self) -> Any:
        return self.inner.value()


@dataclass
class PlainStruct:
    value: int = 0


@pytest.mark.parametrize("dialect", [CommonDialect(), OracleDialect(), PostgresDialect()])
def test_string_without_size_defaults_to_255(dialect):
    resolved = parse_field_for_dialect(FieldMetadata(name="Name", value_type=str), dialect)
    assert resolved.size == 255
    assert resolved.sql_type == ""
    assert resolved.kind is Kind.STRING


def test_dialect_specific_tag_wins():
    field = FieldMetadata(
        name="Name", value_type=str, tag_settings={"POSTGRES SIZE": "64", "SIZE": "128"}
    )
    assert parse_field_for_dialect(field, PostgresDialect()).size == 64
    assert parse_field_for_dialect(field, MySQLDialect()).size == 128


def test_unparseable_size_falls_back_to_default():
    field = FieldMetadata(name="Name", value_type=str, tag_settings={"SIZE": "wide"})
    assert parse_field_for_dialect(field, CommonDialect()).size == 255


def test_type_tag_is_used_as_sql_type():
    field = FieldMetadata(name="Bio", value_type=str, tag_settings={"TYPE": "CLOB"})
    assert parse_field_for_dialect(field, OracleDialect()).sql_type == "CLOB"


def test_sql_type_provider_overrides_type_tag():
    field = FieldMetadata(name="Location", value_type=Point, tag_settings={"TYPE": "TEXT"})
    assert parse_field_for_dialect(field, PostgresDialect()).sql_type == "point"
    assert parse_field_for_dialect(field, CommonDialect()).sql_type == "VARCHAR(64)"


def test_optional_is_unwrapped():
    resolved = parse_field_for_dialect(
        FieldMetadata(name="Age", value_type=Optional[int]), CommonDialect()
    )
    assert resolved.example == 0
    assert resolved.kind is Kind.INT


def test_scanner_struct_is_descended():
    resolved = parse_field_for_dialect(
        FieldMetadata(name="ID", value_type=PrimaryKey), CommonDialect()
    )
    assert resolved.example == 0
    assert resolved.kind is Kind.INT


def test_nested_scanner_structs_are_descended_recursively():
    resolved = parse_field_for_dialect(
        FieldMetadata(name="ID", value_type=Wrapper), CommonDialect()
    )
    assert resolved.example == 0
    assert resolved.kind is Kind.INT


def test_scanner_is_not_descended_when_type_is_given():
    field = FieldMetadata(name="ID", value_type=PrimaryKey, tag_settings={"TYPE": "NUMBER(19)"})
    resolved = parse_field_for_dialect(field, OracleDialect())
    assert isinstance(resolved.example, PrimaryKey)
    assert resolved.sql_type == "NUMBER(19)"


def test_plain_structs_are_not_descended():
    resolved = parse_field_for_dialect(
        FieldMetadata(name="Data", value_type=PlainStruct), CommonDialect()
    )
    assert isinstance(resolved.example, PlainStruct)
    assert resolved.kind is Kind.STRUCT


def test_additional_type_is_joined_and_trimmed():
    field = FieldMetadata(
        name="Email",
        value_type=str,
        tag_settings={
            "NOT NULL": "NOT NULL",
            "DEFAULT": "'n/a'",
            "COMMENT": "'contact address'",
        },
    )
    resolved = parse_field_for_dialect(field, CommonDialect())
    assert resolved.additional_type == "NOT NULL DEFAULT 'n/a' COMMENT 'contact address'"


def test_additional_type_empty_without_tags():
    resolved = parse_field_for_dialect(FieldMetadata(name="Name", value_type=str), CommonDialect())
    assert resolved.additional_type == ""


def test_unique_only():
    field = FieldMetadata(name="Code", value_type=str, tag_settings={"UNIQUE": "UNIQUE"})
    assert parse_field_for_dialect(field, CommonDialect()).additional_type == "UNIQUE"


def test_explicit_kind_overrides_inferred_kind():
    field = FieldMetadata(name="Counter", value_type=int, kind=Kind.INT64)
    assert parse_field_for_dialect(field, CommonDialect()).kind is Kind.INT64


def test_resolving_does_not_mutate_tags():
    settings = {"PG SIZE": "64", "SIZE": "255"}
    field = FieldMetadata(name="Name", value_type=str, tag_settings=settings)
    parse_field_for_dialect(field, PostgresDialect())
    assert settings == {"PG SIZE": "64", "SIZE": "255"}


class PgDialect(CommonDialect):
    name = "pg"


def test_scoped_tag_only_applies_to_matching_dialect():
    field = FieldMetadata(name="Name", value_type=str, tag_settings={"PG SIZE": "64", "SIZE": "255"})
    assert PgDialect().get_tag_setting(field, "SIZE") == ("64", True)
    assert MySQLDialect().get_tag_setting(field, "SIZE") == ("255", True)
    assert parse_field_for_dialect(field, PgDialect()).size == 64
    assert parse_field_for_dialect(field, MySQLDialect()).size == 255
    assert field.tag_settings == {"PG SIZE": "64", "SIZE": "255"}
