from __future__ import annotations

import dataclasses
import datetime
import struct
import typing

from tabdiff.data.column_type import ColumnType

__all__ = ("CanonicalValue", "DATE_FORMAT", "DATETIME_FORMAT", "equal")

DATE_FORMAT: typing.Final[str] = "%Y-%m-%d"
DATETIME_FORMAT: typing.Final[str] = "%Y-%m-%d %H:%M:%S"

Payload: typing.TypeAlias = int | float | bool | str | datetime.date | datetime.datetime | bytes | None


@dataclasses.dataclass(frozen=True, eq=False)
class CanonicalValue:
    """A cell value reduced to one of the eight comparable forms named by ColumnType.

    Equality and hashing follow `equal`, so canonical values can be used directly
    as dict keys or inside row identities.
    """

    kind: ColumnType
    value: Payload

    @staticmethod
    def null() -> CanonicalValue:
        return _NULL

    @property
    def is_null(self) -> bool:
        return self.kind == ColumnType.Null

    def to_text(self) -> str:
        match self.kind:
            case ColumnType.Null:
                return ""
            case ColumnType.Bool:
                return "true" if self.value else "false"
            case ColumnType.Float:
                return repr(self.value)
            case ColumnType.Date:
                return typing.cast(datetime.date, self.value).isoformat()
            case ColumnType.Datetime:
                return typing.cast(datetime.datetime, self.value).isoformat(sep=" ")
            case ColumnType.Bytes:
                return typing.cast(bytes, self.value).hex()
            case _:
                return str(self.value)

    def to_json(self) -> str | None:
        if self.is_null:
            return None
        return self.to_text()

    def _fingerprint(self) -> tuple[ColumnType, typing.Hashable]:
        if self.kind == ColumnType.Float:
            # bit pattern, so -0.0 != 0.0 and nan == nan
            return self.kind, struct.pack("<d", self.value)
        return self.kind, self.value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CanonicalValue):
            return NotImplemented
        return equal(self, other)

    def __hash__(self) -> int:
        return hash(self._fingerprint())

    def __repr__(self) -> str:
        return f"CanonicalValue({self.kind!r}, {self.value!r})"


_NULL: typing.Final[CanonicalValue] = CanonicalValue(kind=ColumnType.Null, value=None)


def equal(a: CanonicalValue, b: CanonicalValue, /) -> bool:
    if a.is_null and b.is_null:
        return True

    if a.is_null or b.is_null:
        return False

    if a.kind != b.kind:
        return False

    return a._fingerprint() == b._fingerprint()
