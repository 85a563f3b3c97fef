from __future__ import annotations

import pathlib

from loguru import logger

from tabdiff import adapter, data
from tabdiff.service.fetch import get_schema

__all__ = ("generate_schema",)


def generate_schema(
    *,
    config: data.DatasourceConfig,
    table: str | None = None,
    output: pathlib.Path | None = None,
) -> data.Schema | data.Error:
    schema = get_schema(config=config, table=table)
    if isinstance(schema, data.Error):
        return schema

    if output is not None:
        write_result = adapter.schema_file.dump(schema=schema, path=output)
        if isinstance(write_result, data.Error):
            return write_result

        logger.info(f"Wrote the {schema.name} schema to {output!s}.")

    return schema
