from __future__ import annotations

from tabdiff import data
from tabdiff.adapter.datasource.csv_file import CsvDatasource
from tabdiff.adapter.datasource.mock import MockDatasource

__all__ = ("create",)


def create(*, config: data.DatasourceConfig) -> data.Datasource | data.Error:
    try:
        match config.type:
            case data.DatasourceType.CSV:
                if config.path is None:
                    return data.Error.new(f"{config.name} is a csv datasource, but it has no path.", config=config)

                return CsvDatasource(path=config.path)
            case data.DatasourceType.MOCK:
                if config.row_count is None:
                    return MockDatasource()

                return MockDatasource(row_count=config.row_count)
            case data.DatasourceType.POSTGRES:
                # database drivers are imported on demand so file-based diffs work without them
                from tabdiff.adapter.datasource.pg import PgDatasource

                if config.connection_string is None and (
                    config.host is None
                    or config.db_name is None
                    or config.keyring_username_entry is None
                    or config.keyring_password_entry is None
                ):
                    return data.Error.new(
                        "If connection-string is null, then host, db-name, keyring-username-entry, and "
                        "keyring-password-entry must be provided.",
                        config=config,
                    )

                return PgDatasource(db_config=config)
            case data.DatasourceType.ODBC:
                from tabdiff.adapter.datasource.odbc import OdbcDatasource

                if config.connection_string is None:
                    return data.Error.new(
                        f"{config.name} is an odbc datasource, but it has no connection-string.",
                        config=config,
                    )

                return OdbcDatasource(db_config=config)
            case _:
                return data.Error.new(
                    f"The datasource type specified, {config.type!s}, does not have a Datasource implementation.",
                    config=config,
                )
    except Exception as e:
        return data.Error.new(str(e), config=config)
