from __future__ import annotations

import pydantic

from tabdiff.data.column import Column
from tabdiff.data.column_type import ColumnType
from tabdiff.data.error import InvalidSchemaError

__all__ = ("PrimaryKey", "Schema")


@pydantic.dataclasses.dataclass(frozen=True, config=pydantic.ConfigDict(strict=True))
class PrimaryKey:
    column_names: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.column_names:
            raise InvalidSchemaError(schema_name="<primary key>", reason="a primary key needs at least one column.")


@pydantic.dataclasses.dataclass(frozen=True, kw_only=True, config=pydantic.ConfigDict(strict=True))
class Schema:
    name: str
    columns: tuple[Column, ...]
    primary_key: PrimaryKey | None = None

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for col in self.columns:
            if col.name in seen:
                raise InvalidSchemaError(schema_name=self.name, reason=f"the column, {col.name}, is declared twice.")
            if col.type == ColumnType.Null:
                raise InvalidSchemaError(
                    schema_name=self.name,
                    reason=f"the column, {col.name}, has no usable type.",
                )
            seen.add(col.name)

        if self.primary_key is not None:
            if missing := [col_name for col_name in self.primary_key.column_names if col_name not in seen]:
                raise InvalidSchemaError(
                    schema_name=self.name,
                    reason=f"the primary key references unknown columns: {', '.join(missing)}.",
                )

    @property
    def column_names(self) -> tuple[str, ...]:
        return tuple(col.name for col in self.columns)

    @property
    def has_primary_key(self) -> bool:
        return self.primary_key is not None

    @property
    def key_column_names(self) -> tuple[str, ...]:
        if self.primary_key is None:
            return ()
        return self.primary_key.column_names

    def column(self, /, name: str) -> Column | None:
        return next((col for col in self.columns if col.name == name), None)

    def with_name(self, /, name: str) -> Schema:
        return Schema(name=name, columns=self.columns, primary_key=self.primary_key)
