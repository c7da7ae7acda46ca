import pytest

from dialectorm.adapters import ConnectionConfig, SQLiteAdapter
from dialectorm.core import BigInt, FieldMetadata
from dialectorm.dialects import SQLiteDialect


@pytest.fixture
def adapter():
    adapter = SQLiteAdapter()
    adapter.connect(ConnectionConfig(url="sqlite:///:memory:", autocommit=True))
    adapter.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, email TEXT NOT NULL)")
    adapter.execute("CREATE INDEX idx_users_email ON users (email)")
    yield adapter
    adapter.close()


def test_sqlite_identifier_quoting():
    dialect = SQLiteDialect()
    assert dialect.quote("table") == '"table"'
    assert dialect.quote('bad"name') == '"bad""name"'


def test_sqlite_limit_clause():
    dialect = SQLiteDialect()
    assert dialect.limit_and_offset_sql(10, None) == " LIMIT 10"
    assert dialect.limit_and_offset_sql(10, 5) == " LIMIT 10 OFFSET 5"
    assert dialect.limit_and_offset_sql(None, 5) == " LIMIT -1 OFFSET 5"
    assert dialect.limit_and_offset_sql(None, None) == ""


@pytest.mark.parametrize(
    "field, expected",
    [
        (FieldMetadata(name="Active", value_type=bool), "bool"),
        (FieldMetadata(name="Age", value_type=int), "integer"),
        (FieldMetadata(name="Views", value_type=BigInt), "bigint"),
        (FieldMetadata(name="Score", value_type=float), "real"),
        (FieldMetadata(name="Name", value_type=str, tag_settings={"SIZE": "80"}), "varchar(80)"),
        (FieldMetadata(name="Body", value_type=str, tag_settings={"SIZE": "0"}), "text"),
        (FieldMetadata(name="Avatar", value_type=bytes), "blob"),
    ],
)
def test_sqlite_column_types(field, expected):
    assert SQLiteDialect().column_type(field) == expected


def test_sqlite_auto_increment_primary_key():
    field = FieldMetadata(name="ID", value_type=int, is_primary_key=True)
    assert SQLiteDialect().column_type(field) == "integer primary key autoincrement"
    assert field.tag_settings["AUTO_INCREMENT"] == "AUTO_INCREMENT"


def test_adapter_binds_its_dialect(adapter):
    assert isinstance(adapter.dialect, SQLiteDialect)
    assert adapter.dialect.db is adapter


def test_sqlite_introspection(adapter):
    dialect = adapter.dialect
    assert dialect.has_table("users") is True
    assert dialect.has_table("orders") is False
    assert dialect.has_column("users", "email") is True
    assert dialect.has_column("users", "phone") is False
    assert dialect.has_index("users", "idx_users_email") is True
    assert dialect.has_index("users", "idx_users_phone") is False
    assert dialect.has_foreign_key("users", "fk_users_team") is False


def test_sqlite_current_database(adapter):
    assert adapter.dialect.current_database() == "main"


def test_sqlite_remove_index(adapter):
    adapter.dialect.remove_index("users", "idx_users_email")
    assert adapter.dialect.has_index("users", "idx_users_email") is False
