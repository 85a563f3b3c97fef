import pytest

from tabdiff import data
from tabdiff.adapter.datasource import shared


@pytest.mark.parametrize(
    "type_name,expected",
    [
        ("varchar(255)", data.ColumnType.String),
        ("character varying", data.ColumnType.String),
        ("INTEGER", data.ColumnType.Int),
        ("bigint", data.ColumnType.Int),
        ("tinyint(1)", data.ColumnType.Bool),
        ("tinyint(4)", data.ColumnType.Int),
        ("boolean", data.ColumnType.Bool),
        ("numeric(18, 2)", data.ColumnType.Float),
        ("double precision", data.ColumnType.Float),
        ("date", data.ColumnType.Date),
        ("datetime", data.ColumnType.Datetime),
        ("timestamp with time zone", data.ColumnType.Datetime),
        ("bytea", data.ColumnType.Bytes),
        ("longblob", data.ColumnType.Bytes),
        ("uuid", data.ColumnType.String),
    ],
)
def test_lookup_column_type(type_name: str, expected: data.ColumnType):
    assert shared.lookup_column_type(type_name) == expected, f"{type_name} should map to {expected!s}"


@pytest.mark.parametrize("type_name", ["ARRAY", "interval", "geometry", "something_else"])
def test_unsupported_column_types(type_name: str):
    with pytest.raises(data.UnsupportedColumnTypeError) as exc_info:
        shared.lookup_column_type(type_name)

    assert exc_info.value.type_name == type_name


def test_lookup_odbc_column_type():
    assert shared.lookup_odbc_column_type(4) == data.ColumnType.Int
    assert shared.lookup_odbc_column_type(93) == data.ColumnType.Datetime

    with pytest.raises(data.UnsupportedColumnTypeError):
        shared.lookup_odbc_column_type(-154)


def test_generate_select_sql_orders_by_key(customer_schema_fixture: data.Schema):
    assert shared.generate_select_sql(schema=customer_schema_fixture) == (
        'SELECT "id", "name", "balance", "joined" FROM "customer" ORDER BY "id"'
    )


def test_generate_select_sql_with_brackets():
    schema = data.Schema(name="t", columns=(data.Column(name="x", type=data.ColumnType.Int),))

    assert shared.generate_select_sql(schema=schema, quote="`") == "SELECT `x` FROM `t`"


def test_wrap_name_escapes_quotes():
    assert shared.wrap_name('we"ird') == '"we""ird"'
