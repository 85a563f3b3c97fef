from __future__ import annotations

import csv
import pathlib
import typing

from loguru import logger

from tabdiff import data

__all__ = ("CsvDatasource",)


class CsvDatasource(data.Datasource):
    """A CSV file whose first record holds the column names.

    Every cell is handed to the differ as text; typing comes from the schema set
    with `set_schema`.  Without one, the file is read as an all-String schema
    named after the file.
    """

    def __init__(self, *, path: pathlib.Path, encoding: str = "utf-8"):
        self._path: typing.Final[pathlib.Path] = path
        self._encoding: typing.Final[str] = encoding

        self._schema: data.Schema | None = None
        self._is_open = False

    def open(self) -> None:
        self._is_open = True

    def close(self) -> None:
        self._is_open = False

    def get_all_schemas(self) -> tuple[data.Schema, ...]:
        return (self._current_schema(),)

    def get_schema(self, /, name: str) -> data.Schema:
        schema = self._current_schema()
        if name != schema.name:
            raise data.SchemaNotFound(schema_name=name, datasource=str(self._path))
        return schema

    def set_schema(self, /, schema: data.Schema) -> None:
        self._schema = schema

    def get_rows(self, /, schema: data.Schema) -> list[data.Row]:
        self._check_open()

        with self._path.open("r", encoding=self._encoding, newline="") as fh:
            reader = csv.reader(fh)
            header = next(reader, None)
            if header is None:
                raise data.SchemaNotFound(schema_name=schema.name, datasource=str(self._path))

            positions = {col_name: i for i, col_name in enumerate(header)}
            for col in schema.columns:
                if col.name not in positions:
                    raise data.SchemaMismatchError(column_name=col.name, side=self._path.name)

            rows: list[data.Row] = []
            for record in reader:
                if not record:
                    continue

                rows.append({
                    col.name: data.GenericValue(column=col, raw=_cell(record, positions[col.name]))
                    for col in schema.columns
                })

        logger.debug(f"Read {len(rows)} rows from {self._path!s}.")

        return rows

    def set_rows(self, *, schema: data.Schema, rows: typing.Iterable[data.Row]) -> None:
        self._check_open()

        with self._path.open("w", encoding=self._encoding, newline="") as fh:
            writer = csv.writer(fh)
            writer.writerow(schema.column_names)
            for row in rows:
                writer.writerow(_render(row.get(col.name)) for col in schema.columns)

    def _current_schema(self) -> data.Schema:
        if self._schema is not None:
            return self._schema

        with self._path.open("r", encoding=self._encoding, newline="") as fh:
            header = next(csv.reader(fh), None)

        if header is None:
            raise data.SchemaNotFound(schema_name=self._path.stem, datasource=str(self._path))

        return data.Schema(
            name=self._path.stem,
            columns=tuple(
                data.Column(name=col_name, type=data.ColumnType.String, ordinal_position=i)
                for i, col_name in enumerate(header)
            ),
        )

    def _check_open(self) -> None:
        if not self._is_open:
            raise data.TabdiffError(f"{self._path!s} has not been opened.")

    def __repr__(self) -> str:
        return f"CsvDatasource(path={self._path!s})"


def _cell(record: list[str], position: int, /) -> str:
    if position < len(record):
        return record[position]
    return ""


def _render(value: data.GenericValue | None, /) -> str:
    if value is None:
        return ""
    return data.render(value) or ""
