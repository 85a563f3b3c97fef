import typing

from tabdiff.data.generic_value import GenericValue

__all__ = ("Row", "RowSet")


Row: typing.TypeAlias = dict[str, GenericValue]

RowSet: typing.TypeAlias = typing.Sequence[Row]
