from __future__ import annotations

import abc
import types
import typing

from tabdiff.data.row import Row
from tabdiff.data.schema import Schema

__all__ = ("Datasource",)


class Datasource(abc.ABC):
    """A store that rows and schemas can be read from, and optionally written back to.

    Datasources own whatever handle they open; using one as a context manager
    guarantees `close` runs on every exit path.
    """

    def __enter__(self) -> Datasource:
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> None:
        self.close()

    @abc.abstractmethod
    def open(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def close(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def get_all_schemas(self) -> tuple[Schema, ...]:
        raise NotImplementedError

    @abc.abstractmethod
    def get_schema(self, /, name: str) -> Schema:
        raise NotImplementedError

    @abc.abstractmethod
    def set_schema(self, /, schema: Schema) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def get_rows(self, /, schema: Schema) -> list[Row]:
        raise NotImplementedError

    @abc.abstractmethod
    def set_rows(self, *, schema: Schema, rows: typing.Iterable[Row]) -> None:
        raise NotImplementedError
