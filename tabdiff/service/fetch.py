from __future__ import annotations

from loguru import logger

from tabdiff import adapter, data

__all__ = ("fetch", "get_schema")


def fetch(
    *,
    config: data.DatasourceConfig,
    schema: data.Schema | None = None,
    table: str | None = None,
) -> tuple[data.Schema, list[data.Row]] | data.Error:
    """Read the rows of one table from a datasource.

    When a schema is given it is pushed to the datasource first, so textual
    sources type their cells by it.  Otherwise the datasource's own schema for
    the table is used.
    """
    try:
        datasource = adapter.datasource.create(config=config)
        if isinstance(datasource, data.Error):
            return datasource

        with datasource:
            if schema is None:
                source_schema = _resolve_schema(datasource=datasource, config=config, table=table)
            else:
                source_schema = schema.with_name(table or config.table or schema.name)
                try:
                    datasource.set_schema(source_schema)
                except data.NotSupportedError:
                    logger.debug(f"{config.name} does not accept a schema; reading {source_schema.name} as-is.")

            rows = datasource.get_rows(source_schema)

        logger.info(f"Fetched {len(rows)} rows from {config.name}.")

        return source_schema, rows
    except Exception as e:
        return data.Error.new(str(e), config=config, table=table)


def get_schema(*, config: data.DatasourceConfig, table: str | None = None) -> data.Schema | data.Error:
    try:
        datasource = adapter.datasource.create(config=config)
        if isinstance(datasource, data.Error):
            return datasource

        with datasource:
            return _resolve_schema(datasource=datasource, config=config, table=table)
    except Exception as e:
        return data.Error.new(str(e), config=config, table=table)


def _resolve_schema(
    *,
    datasource: data.Datasource,
    config: data.DatasourceConfig,
    table: str | None,
) -> data.Schema:
    if table_name := table or config.table:
        return datasource.get_schema(table_name)

    schemas = datasource.get_all_schemas()
    if len(schemas) == 1:
        return schemas[0]

    raise data.TabdiffError(
        f"{config.name} holds {len(schemas)} tables, so a table must be specified with --table or with the "
        f"table entry in the config file."
    )
