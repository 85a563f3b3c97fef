from __future__ import annotations

import typing

import pyodbc
from loguru import logger

from tabdiff import data
from tabdiff.adapter.datasource import shared

__all__ = ("OdbcDatasource",)


class OdbcDatasource(data.Datasource):
    """Tables reachable through an ODBC connection string.  Read-only."""

    def __init__(self, *, db_config: data.DatasourceConfig):
        self._db_config: typing.Final[data.DatasourceConfig] = db_config
        self._con: pyodbc.Connection | None = None
        self._quote = '"'

    def open(self) -> None:
        if self._con is not None:
            return

        if self._db_config.connection_string is None:
            raise data.TabdiffError(f"A connection-string is required for {self._db_config.name}.")

        con = pyodbc.connect(self._db_config.connection_string.get_secret_value(), autocommit=True)

        quote = con.getinfo(pyodbc.SQL_IDENTIFIER_QUOTE_CHAR)
        if quote and quote.strip():
            self._quote = quote.strip()

        self._con = con
        logger.debug(f"Connected to {self._db_config.name}.")

    def close(self) -> None:
        if self._con is not None:
            try:
                self._con.close()
            finally:
                self._con = None

    def get_all_schemas(self) -> tuple[data.Schema, ...]:
        with self._connection().cursor() as cur:
            table_names = [row.table_name for row in cur.tables(tableType="TABLE").fetchall()]

        return tuple(self._inspect_table(table_name) for table_name in table_names)

    def get_schema(self, /, name: str) -> data.Schema:
        with self._connection().cursor() as cur:
            table_exists = cur.tables(table=name, tableType="TABLE").fetchone() is not None

        if not table_exists:
            raise data.SchemaNotFound(schema_name=name, datasource=self._db_config.name)

        return self._inspect_table(name)

    def set_schema(self, /, schema: data.Schema) -> None:
        raise data.NotSupportedError(operation="set_schema", datasource="OdbcDatasource")

    def get_rows(self, /, schema: data.Schema) -> list[data.Row]:
        sql = shared.generate_select_sql(schema=schema, quote=self._quote)
        with self._connection().cursor() as cur:
            return [
                {col.name: data.GenericValue(column=col, raw=raw) for col, raw in zip(schema.columns, record)}
                for record in cur.execute(sql).fetchall()
            ]

    def set_rows(self, *, schema: data.Schema, rows: typing.Iterable[data.Row]) -> None:
        raise data.NotSupportedError(operation="set_rows", datasource="OdbcDatasource")

    def _inspect_table(self, table_name: str, /) -> data.Schema:
        with self._connection().cursor() as cur:
            columns = tuple(
                data.Column(
                    name=row.column_name,
                    type=_get_column_type(row),
                    ordinal_position=row.ordinal_position - 1,
                    not_null=row.nullable == pyodbc.SQL_NO_NULLS,
                    auto_increment=_get_auto_increment(row),
                )
                for row in cur.columns(table=table_name).fetchall()
            )

            pk_rows = sorted(cur.primaryKeys(table=table_name).fetchall(), key=lambda r: r.key_seq)

        if pk_rows:
            primary_key: data.PrimaryKey | None = data.PrimaryKey(tuple(r.column_name for r in pk_rows))
        else:
            primary_key = None

        return data.Schema(name=table_name, columns=columns, primary_key=primary_key)

    def _connection(self) -> pyodbc.Connection:
        if self._con is None:
            raise data.TabdiffError(f"{self._db_config.name} has not been opened.")
        return self._con

    def __repr__(self) -> str:
        return f"OdbcDatasource(name={self._db_config.name!r})"


def _get_column_type(row: pyodbc.Row, /) -> data.ColumnType:
    try:
        return shared.lookup_odbc_column_type(row.data_type)
    except data.UnsupportedColumnTypeError:
        return shared.lookup_column_type(row.type_name)


def _get_auto_increment(row: pyodbc.Row, /) -> bool:
    type_name = typing.cast(str, row.type_name).lower()
    return "identity" in type_name or "serial" in type_name
