from __future__ import annotations

import textwrap
import typing

import keyring
import psycopg
from loguru import logger
from psycopg.rows import dict_row

from tabdiff import data
from tabdiff.adapter.datasource import shared

__all__ = ("PgDatasource",)

KEYRING_SERVICE: typing.Final[str] = "tabdiff"


class PgDatasource(data.Datasource):
    """Tables in the current schema of a PostgreSQL database.  Read-only."""

    def __init__(self, *, db_config: data.DatasourceConfig):
        self._db_config: typing.Final[data.DatasourceConfig] = db_config
        self._con: psycopg.Connection | None = None

    def open(self) -> None:
        if self._con is not None:
            return

        if self._db_config.connection_string is not None:
            con = psycopg.connect(self._db_config.connection_string.get_secret_value())
        else:
            username = keyring.get_password(KEYRING_SERVICE, self._db_config.keyring_username_entry or "")
            password = keyring.get_password(KEYRING_SERVICE, self._db_config.keyring_password_entry or "")

            con = psycopg.connect(
                host=self._db_config.host,
                dbname=self._db_config.db_name,
                user=username,
                password=password,
            )

        con.read_only = True
        with con.cursor() as cur:
            cur.execute("SET SESSION TIME ZONE 'UTC'")

        self._con = con
        logger.debug(f"Connected to {self._db_config.name}.")

    def close(self) -> None:
        if self._con is not None:
            try:
                self._con.rollback()
            finally:
                self._con.close()
                self._con = None

    def get_all_schemas(self) -> tuple[data.Schema, ...]:
        return self._inspect_tables(table_name=None)

    def _inspect_tables(self, *, table_name: str | None) -> tuple[data.Schema, ...]:
        params = {"table_name": table_name}
        with self._cursor() as cur:
            cur.execute(_COLUMNS_SQL, params)
            column_rows = typing.cast(list[dict[str, typing.Any]], cur.fetchall())

            cur.execute(_PRIMARY_KEYS_SQL, params)
            pk_rows = typing.cast(list[dict[str, typing.Any]], cur.fetchall())

        columns_by_table: dict[str, list[data.Column]] = {}
        for row in column_rows:
            columns_by_table.setdefault(row["table_name"], []).append(
                data.Column(
                    name=row["column_name"],
                    type=shared.lookup_column_type(row["data_type"]),
                    ordinal_position=row["ordinal_position"] - 1,
                    not_null=row["is_nullable"] != "YES",
                    auto_increment=_is_auto_increment(
                        is_identity=row["is_identity"],
                        column_default=row["column_default"],
                    ),
                )
            )

        pk_by_table: dict[str, list[str]] = {}
        for row in pk_rows:
            pk_by_table.setdefault(row["table_name"], []).append(row["column_name"])

        return tuple(
            data.Schema(
                name=table_name,
                columns=tuple(cols),
                primary_key=data.PrimaryKey(tuple(pk_by_table[table_name])) if table_name in pk_by_table else None,
            )
            for table_name, cols in columns_by_table.items()
        )

    def get_schema(self, /, name: str) -> data.Schema:
        schema = next(iter(self._inspect_tables(table_name=name)), None)
        if schema is None:
            raise data.SchemaNotFound(schema_name=name, datasource=self._db_config.name)
        return schema

    def set_schema(self, /, schema: data.Schema) -> None:
        raise data.NotSupportedError(operation="set_schema", datasource="PgDatasource")

    def get_rows(self, /, schema: data.Schema) -> list[data.Row]:
        with self._connection().cursor() as cur:
            cur.execute(typing.cast(typing.LiteralString, shared.generate_select_sql(schema=schema, quote='"')))
            return [
                {col.name: data.GenericValue(column=col, raw=raw) for col, raw in zip(schema.columns, record)}
                for record in cur.fetchall()
            ]

    def set_rows(self, *, schema: data.Schema, rows: typing.Iterable[data.Row]) -> None:
        raise data.NotSupportedError(operation="set_rows", datasource="PgDatasource")

    def _connection(self) -> psycopg.Connection:
        if self._con is None:
            raise data.TabdiffError(f"{self._db_config.name} has not been opened.")
        return self._con

    def _cursor(self) -> psycopg.Cursor[dict[str, typing.Any]]:
        return self._connection().cursor(row_factory=dict_row)

    def __repr__(self) -> str:
        return f"PgDatasource(name={self._db_config.name!r})"


def _is_auto_increment(*, is_identity: str | None, column_default: str | None) -> bool:
    if is_identity == "YES":
        return True
    return column_default is not None and column_default.startswith("nextval(")


_COLUMNS_SQL: typing.Final = textwrap.dedent("""
    SELECT
        c.table_name
    ,   c.column_name
    ,   c.ordinal_position
    ,   c.data_type
    ,   c.is_nullable
    ,   c.is_identity
    ,   c.column_default
    FROM information_schema.columns AS c
    JOIN information_schema.tables AS t
        ON c.table_schema = t.table_schema
        AND c.table_name = t.table_name
    WHERE
        c.table_schema = current_schema()
        AND t.table_type = 'BASE TABLE'
        AND (%(table_name)s::text IS NULL OR c.table_name = %(table_name)s)
    ORDER BY
        c.table_name
    ,   c.ordinal_position
""").strip()

_PRIMARY_KEYS_SQL: typing.Final = textwrap.dedent("""
    SELECT
        tc.table_name
    ,   kcu.column_name
    FROM information_schema.table_constraints AS tc
    JOIN information_schema.key_column_usage AS kcu
        ON tc.constraint_schema = kcu.constraint_schema
        AND tc.constraint_name = kcu.constraint_name
    WHERE
        tc.constraint_type = 'PRIMARY KEY'
        AND tc.table_schema = current_schema()
        AND (%(table_name)s::text IS NULL OR tc.table_name = %(table_name)s)
    ORDER BY
        tc.table_name
    ,   kcu.ordinal_position
""").strip()
