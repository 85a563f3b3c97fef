import typing

from tabdiff import data

__all__ = (
    "generate_select_sql",
    "lookup_column_type",
    "lookup_odbc_column_type",
    "wrap_name",
)

_UNSUPPORTED_PREFIXES: typing.Final[tuple[str, ...]] = (
    "array",
    "cidr",
    "daterange",
    "geometry",
    "inet",
    "int4range",
    "int8range",
    "interval",
    "numrange",
    "point",
    "polygon",
    "set(",
    "tsrange",
    "tstzrange",
    "user-defined",
    "xml",
)

# checked in order, so "datetime" has to come before "date" and "tinyint(1)" before "tinyint"
_TYPE_PREFIXES: typing.Final[tuple[tuple[str, data.ColumnType], ...]] = (
    ("tinyint(1)", data.ColumnType.Bool),
    ("boolean", data.ColumnType.Bool),
    ("bool", data.ColumnType.Bool),
    ("bit", data.ColumnType.Bool),
    ("int", data.ColumnType.Int),
    ("tinyint", data.ColumnType.Int),
    ("smallint", data.ColumnType.Int),
    ("mediumint", data.ColumnType.Int),
    ("bigint", data.ColumnType.Int),
    ("smallserial", data.ColumnType.Int),
    ("serial", data.ColumnType.Int),
    ("bigserial", data.ColumnType.Int),
    ("oid", data.ColumnType.Int),
    ("float", data.ColumnType.Float),
    ("double", data.ColumnType.Float),
    ("real", data.ColumnType.Float),
    ("decimal", data.ColumnType.Float),
    ("numeric", data.ColumnType.Float),
    ("money", data.ColumnType.Float),
    ("char", data.ColumnType.String),
    ("varchar", data.ColumnType.String),
    ("character", data.ColumnType.String),
    ("nchar", data.ColumnType.String),
    ("nvarchar", data.ColumnType.String),
    ("text", data.ColumnType.String),
    ("tinytext", data.ColumnType.String),
    ("mediumtext", data.ColumnType.String),
    ("longtext", data.ColumnType.String),
    ("ntext", data.ColumnType.String),
    ("enum", data.ColumnType.String),
    ("json", data.ColumnType.String),
    ("uuid", data.ColumnType.String),
    ("uniqueidentifier", data.ColumnType.String),
    ("datetime", data.ColumnType.Datetime),
    ("smalldatetime", data.ColumnType.Datetime),
    ("timestamp", data.ColumnType.Datetime),
    ("date", data.ColumnType.Date),
    ("blob", data.ColumnType.Bytes),
    ("tinyblob", data.ColumnType.Bytes),
    ("mediumblob", data.ColumnType.Bytes),
    ("longblob", data.ColumnType.Bytes),
    ("binary", data.ColumnType.Bytes),
    ("varbinary", data.ColumnType.Bytes),
    ("bytea", data.ColumnType.Bytes),
)

_ODBC_TYPES: typing.Final[dict[int, data.ColumnType]] = {
    -11: data.ColumnType.String,  # SQL_GUID
    -10: data.ColumnType.String,  # SQL_WLONGVARCHAR
    -9: data.ColumnType.String,  # SQL_WVARCHAR
    -8: data.ColumnType.String,  # SQL_WCHAR
    -7: data.ColumnType.Bool,  # SQL_BIT
    -6: data.ColumnType.Int,  # SQL_TINYINT
    -5: data.ColumnType.Int,  # SQL_BIGINT
    -4: data.ColumnType.Bytes,  # SQL_LONGVARBINARY
    -3: data.ColumnType.Bytes,  # SQL_VARBINARY
    -2: data.ColumnType.Bytes,  # SQL_BINARY
    -1: data.ColumnType.String,  # SQL_LONGVARCHAR
    1: data.ColumnType.String,  # SQL_CHAR
    2: data.ColumnType.Float,  # SQL_NUMERIC
    3: data.ColumnType.Float,  # SQL_DECIMAL
    4: data.ColumnType.Int,  # SQL_INTEGER
    5: data.ColumnType.Int,  # SQL_SMALLINT
    6: data.ColumnType.Float,  # SQL_FLOAT
    7: data.ColumnType.Float,  # SQL_REAL
    8: data.ColumnType.Float,  # SQL_DOUBLE
    9: data.ColumnType.Date,  # SQL_DATE
    11: data.ColumnType.Datetime,  # SQL_TIMESTAMP
    12: data.ColumnType.String,  # SQL_VARCHAR
    91: data.ColumnType.Date,  # SQL_TYPE_DATE
    93: data.ColumnType.Datetime,  # SQL_TYPE_TIMESTAMP
}


def lookup_column_type(type_name: str, /) -> data.ColumnType:
    """Map a database's column type name, e.g. `varchar(255)` or `timestamp with time zone`."""
    normalized_type_name = type_name.strip().lower()
    if normalized_type_name.startswith(_UNSUPPORTED_PREFIXES):
        raise data.UnsupportedColumnTypeError(type_name=type_name)

    for prefix, column_type in _TYPE_PREFIXES:
        if normalized_type_name.startswith(prefix):
            return column_type

    raise data.UnsupportedColumnTypeError(type_name=type_name)


def lookup_odbc_column_type(sql_type: int, /) -> data.ColumnType:
    if column_type := _ODBC_TYPES.get(sql_type):
        return column_type

    raise data.UnsupportedColumnTypeError(type_name=f"ODBC SQL type {sql_type}")


def generate_select_sql(*, schema: data.Schema, quote: str = '"') -> str:
    sql = "SELECT "
    sql += ", ".join(wrap_name(col.name, quote=quote) for col in schema.columns)
    sql += f" FROM {wrap_name(schema.name, quote=quote)}"
    if schema.key_column_names:
        sql += " ORDER BY " + ", ".join(wrap_name(col_name, quote=quote) for col_name in schema.key_column_names)
    return sql


def wrap_name(name: str, /, *, quote: str = '"') -> str:
    escaped_name = name.replace(quote, quote * 2)
    return f"{quote}{escaped_name}{quote}"
