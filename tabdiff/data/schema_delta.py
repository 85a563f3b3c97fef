from __future__ import annotations

import typing

import pydantic

from tabdiff.data.column import Column
from tabdiff.data.column_type import ColumnType

__all__ = ("ColumnDelta", "SchemaDelta")


@pydantic.dataclasses.dataclass(frozen=True, kw_only=True, config=pydantic.ConfigDict(strict=True))
class ColumnDelta:
    name: str
    old_type: ColumnType
    new_type: ColumnType
    old_not_null: bool
    new_not_null: bool
    old_auto_increment: bool
    new_auto_increment: bool

    @staticmethod
    def between(*, old: Column, new: Column) -> ColumnDelta:
        return ColumnDelta(
            name=old.name,
            old_type=old.type,
            new_type=new.type,
            old_not_null=old.not_null,
            new_not_null=new.not_null,
            old_auto_increment=old.auto_increment,
            new_auto_increment=new.auto_increment,
        )

    @property
    def changed_attributes(self) -> tuple[str, ...]:
        attrs: list[str] = []
        if self.old_type != self.new_type:
            attrs.append("type")
        if self.old_not_null != self.new_not_null:
            attrs.append("not_null")
        if self.old_auto_increment != self.new_auto_increment:
            attrs.append("auto_increment")
        return tuple(attrs)

    def to_record(self) -> dict[str, typing.Any]:
        record: dict[str, typing.Any] = {"name": self.name}
        for attr in self.changed_attributes:
            old = getattr(self, f"old_{attr}")
            new = getattr(self, f"new_{attr}")
            record[attr] = {
                "before": str(old) if isinstance(old, ColumnType) else old,
                "after": str(new) if isinstance(new, ColumnType) else new,
            }
        return record


@pydantic.dataclasses.dataclass(frozen=True, kw_only=True, config=pydantic.ConfigDict(strict=True))
class SchemaDelta:
    added_columns: tuple[Column, ...]
    removed_columns: tuple[Column, ...]
    changed_columns: tuple[ColumnDelta, ...]
    key_changed: bool
    old_key: tuple[str, ...]
    new_key: tuple[str, ...]

    @property
    def is_empty(self) -> bool:
        return not (self.added_columns or self.removed_columns or self.changed_columns or self.key_changed)

    def to_record(self) -> dict[str, typing.Any]:
        return {
            "added_columns": [_column_record(col) for col in self.added_columns],
            "removed_columns": [_column_record(col) for col in self.removed_columns],
            "changed_columns": [delta.to_record() for delta in self.changed_columns],
            "key_changed": self.key_changed,
            "old_key": list(self.old_key),
            "new_key": list(self.new_key),
        }


def _column_record(col: Column, /) -> dict[str, typing.Any]:
    return {
        "name": col.name,
        "type": str(col.type),
        "ordinal_position": col.ordinal_position,
        "not_null": col.not_null,
        "auto_increment": col.auto_increment,
    }
