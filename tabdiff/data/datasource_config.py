import pathlib

import pydantic

from tabdiff.data.datasource_type import DatasourceType

__all__ = ("DatasourceConfig",)


@pydantic.dataclasses.dataclass(frozen=True, kw_only=True, config=pydantic.ConfigDict(strict=True))
class DatasourceConfig:
    name: str
    type: DatasourceType
    path: pathlib.Path | None = None
    host: str | None = None
    db_name: str | None = None
    keyring_username_entry: str | None = None
    keyring_password_entry: str | None = None
    connection_string: pydantic.SecretStr | None = None
    table: str | None = None
    row_count: pydantic.PositiveInt | None = None

    def __repr__(self) -> str:
        return f"DatasourceConfig(name={self.name!r}, type={self.type!r})"
