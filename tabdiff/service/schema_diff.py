from __future__ import annotations

from tabdiff import data
from tabdiff.service.fetch import get_schema

__all__ = ("schema_diff",)


def schema_diff(
    *,
    left: data.DatasourceConfig | data.Schema,
    right: data.DatasourceConfig | data.Schema,
    table: str | None = None,
) -> data.SchemaDelta | data.Error:
    left_schema = _schema(left, table=table)
    if isinstance(left_schema, data.Error):
        return left_schema

    right_schema = _schema(right, table=table)
    if isinstance(right_schema, data.Error):
        return right_schema

    return data.diff_schemas(left=left_schema, right=right_schema)


def _schema(source: data.DatasourceConfig | data.Schema, /, *, table: str | None) -> data.Schema | data.Error:
    if isinstance(source, data.Schema):
        return source

    return get_schema(config=source, table=table)
