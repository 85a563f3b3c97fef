import dataclasses
import typing

from tabdiff.data.column import Column

__all__ = ("GenericValue",)


@dataclasses.dataclass(frozen=True)
class GenericValue:
    """A single cell as produced by a datasource, before normalization."""

    column: Column
    raw: typing.Any
