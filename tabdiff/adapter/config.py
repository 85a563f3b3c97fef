import functools
import json
import pathlib
import typing

import pydantic

from tabdiff import data

__all__ = ("load",)

DEFAULT_MAX_WORKERS: typing.Final[int] = 2


@functools.lru_cache(maxsize=1)
def load(*, config_file: pathlib.Path) -> data.Config | data.Error:
    try:
        if not config_file.exists():
            return data.Error.new(
                f"The config file specified, {config_file.resolve()!s}, does not exist.",
                config_file=config_file,
            )

        with config_file.open("r") as fh:
            d = typing.cast(dict[str, typing.Any], json.load(fh))

        max_workers: typing.Final[int] = int(d.get("max-workers", DEFAULT_MAX_WORKERS))
        if max_workers < 1:
            return data.Error.new(f"max-workers must be at least 1, but got {max_workers}.")

        if "datasources" not in d.keys():
            return data.Error.new("config file is missing an entry for 'datasources'.")

        datasources: list[data.DatasourceConfig] = []
        for datasource_dict in d["datasources"]:
            datasource = _parse_datasource_dict(datasource_dict, config_dir=config_file.parent)
            if isinstance(datasource, data.Error):
                return datasource

            datasources.append(datasource)

        if len({ds.name for ds in datasources}) != len(datasources):
            return data.Error.new("datasource names in the config file must be unique.", config_file=config_file)

        return data.Config(max_workers=max_workers, datasources=tuple(datasources))
    except Exception as e:
        return data.Error.new(
            f"An error occurred while loading the config file: {e!s}",
            config_file=config_file,
        )


def _parse_datasource_dict(
    datasource_dict: dict[str, typing.Any],
    /,
    *,
    config_dir: pathlib.Path,
) -> data.DatasourceConfig | data.Error:
    try:
        if "name" not in datasource_dict.keys():
            return data.Error.new("datasource entry in config file is missing an entry for 'name'.")

        name: typing.Final[str] = datasource_dict["name"]

        if "type" not in datasource_dict.keys():
            return data.Error.new(f"datasource entry, {name}, is missing an entry for 'type'.")

        try:
            ds_type: typing.Final[data.DatasourceType] = data.DatasourceType(datasource_dict["type"])
        except ValueError:
            return data.Error.new(
                f"could not convert type entry, {datasource_dict['type']!r}, to a data.DatasourceType instance."
            )

        path: pathlib.Path | None = None
        if raw_path := datasource_dict.get("path"):
            path = pathlib.Path(raw_path)
            if not path.is_absolute():
                path = config_dir / path

        connection_string: pydantic.SecretStr | None = None
        if raw_connection_string := datasource_dict.get("connection-string"):
            connection_string = pydantic.SecretStr(raw_connection_string)

        row_count: int | None = None
        if (raw_row_count := datasource_dict.get("row-count")) is not None:
            row_count = int(raw_row_count)

        host: typing.Final[str | None] = datasource_dict.get("host")
        db_name: typing.Final[str | None] = datasource_dict.get("db-name")
        keyring_username_entry: typing.Final[str | None] = datasource_dict.get("keyring-username-entry")
        keyring_password_entry: typing.Final[str | None] = datasource_dict.get("keyring-password-entry")

        match ds_type:
            case data.DatasourceType.CSV:
                if path is None:
                    return data.Error.new(f"csv datasource, {name}, is missing an entry for 'path'.")
            case data.DatasourceType.ODBC:
                if connection_string is None:
                    return data.Error.new(f"odbc datasource, {name}, is missing an entry for 'connection-string'.")
            case data.DatasourceType.POSTGRES:
                if connection_string is None and (
                    host is None
                    or db_name is None
                    or keyring_username_entry is None
                    or keyring_password_entry is None
                ):
                    return data.Error.new(
                        "If connection-string is null, then host, db-name, keyring-username-entry, and "
                        "keyring-password-entry must be provided."
                    )

        return data.DatasourceConfig(
            name=name,
            type=ds_type,
            path=path,
            host=host,
            db_name=db_name,
            keyring_username_entry=keyring_username_entry,
            keyring_password_entry=keyring_password_entry,
            connection_string=connection_string,
            table=datasource_dict.get("table"),
            row_count=row_count,
        )
    except Exception as e:
        return data.Error.new(f"An error occurred while parsing datasource from json: {e!s}")
