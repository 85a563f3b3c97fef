from __future__ import annotations

import pathlib

from loguru import logger

from tabdiff import adapter, data
from tabdiff.service.fetch import fetch

__all__ = ("dump",)


def dump(
    *,
    config: data.DatasourceConfig,
    schema: data.Schema | None = None,
    table: str | None = None,
    output: pathlib.Path | None = None,
) -> tuple[data.Schema, list[data.Row]] | data.Error:
    """Read a table's rows, and copy them to a CSV file when `output` is given."""
    result = fetch(config=config, schema=schema, table=table)
    if isinstance(result, data.Error):
        return result

    if output is not None:
        source_schema, rows = result
        try:
            with adapter.datasource.CsvDatasource(path=output) as csv_datasource:
                csv_datasource.set_schema(source_schema)
                csv_datasource.set_rows(schema=source_schema, rows=rows)
        except (OSError, data.TabdiffError) as e:
            return data.Error.new(str(e), config=config, output=output)

        logger.info(f"Wrote {len(rows)} rows to {output!s}.")

    return result
