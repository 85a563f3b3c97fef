import dataclasses

from tabdiff.data.column_type import ColumnType

__all__ = ("Column",)


@dataclasses.dataclass(frozen=True, kw_only=True)
class Column:
    name: str
    type: ColumnType
    ordinal_position: int = 0
    not_null: bool = False
    auto_increment: bool = False
