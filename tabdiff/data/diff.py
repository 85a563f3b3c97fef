from __future__ import annotations

import dataclasses
import types
import typing

from tabdiff.data.generic_value import GenericValue
from tabdiff.data.normalize import render
from tabdiff.data.row import Row

__all__ = ("Change", "Diff", "RowDelta")


@dataclasses.dataclass(frozen=True, kw_only=True)
class Change:
    before: GenericValue
    after: GenericValue


@dataclasses.dataclass(frozen=True, kw_only=True)
class RowDelta:
    key: str
    changes: typing.Mapping[str, Change]

    def __post_init__(self) -> None:
        object.__setattr__(self, "changes", types.MappingProxyType(dict(self.changes)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RowDelta):
            return NotImplemented
        return self.key == other.key and dict(self.changes) == dict(other.changes)

    def __hash__(self) -> int:
        return hash((self.key, tuple(self.changes)))

    def to_record(self) -> dict[str, typing.Any]:
        return {
            "key": self.key,
            "changes": {
                col_name: {"before": render(change.before), "after": render(change.after)}
                for col_name, change in self.changes.items()
            },
        }


@dataclasses.dataclass(frozen=True, kw_only=True)
class Diff:
    added: tuple[Row, ...]
    deleted: tuple[Row, ...]
    modified: tuple[RowDelta, ...]

    @staticmethod
    def empty() -> Diff:
        return Diff(added=(), deleted=(), modified=())

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.deleted or self.modified)

    def to_record(self) -> dict[str, typing.Any]:
        return {
            "added": [_row_record(row) for row in self.added],
            "deleted": [_row_record(row) for row in self.deleted],
            "modified": [delta.to_record() for delta in self.modified],
        }


def _row_record(row: Row, /) -> dict[str, str | None]:
    return {col_name: render(value) for col_name, value in row.items()}
