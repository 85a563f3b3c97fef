from __future__ import annotations

import inspect
import pathlib
import typing

import pydantic

from tabdiff.data.column_type import ColumnType

__all__ = (
    "DuplicateKeyError",
    "Error",
    "InvalidSchemaError",
    "NotSupportedError",
    "SchemaMismatchError",
    "SchemaNotFound",
    "TabdiffError",
    "UnsupportedColumnTypeError",
    "UnsupportedConversionError",
    "ValueConversionError",
)


class TabdiffError(Exception):
    """Base class for errors occurring in the tabdiff codebase"""


class InvalidSchemaError(TabdiffError):
    def __init__(self, *, schema_name: str, reason: str):
        self.schema_name = schema_name
        self.reason = reason

        super().__init__(f"The schema, {schema_name}, is invalid: {reason}")


class ValueConversionError(TabdiffError):
    """A raw value could not be converted to its column's declared type."""

    def __init__(self, *, column_name: str, column_type: ColumnType, raw: typing.Any):
        self.column_name = column_name
        self.column_type = column_type
        self.raw = raw

        super().__init__(
            f"The value, {raw!r}, of the column, {column_name}, could not be converted to {column_type!s}."
        )


class UnsupportedConversionError(TabdiffError):
    """There is no way to normalize a raw value of this kind for the column's declared type."""

    def __init__(self, *, column_name: str, column_type: ColumnType, raw_type: str):
        self.column_name = column_name
        self.column_type = column_type
        self.raw_type = raw_type

        super().__init__(
            f"The column, {column_name}, is declared as {column_type!s}, but there is no conversion "
            f"from a {raw_type} value to {column_type!s}."
        )


class DuplicateKeyError(TabdiffError):
    def __init__(self, *, key: str, side: str):
        self.key = key
        self.side = side

        super().__init__(f"The key, {key!r}, appears more than once in the {side} rows.")


class SchemaMismatchError(TabdiffError):
    def __init__(self, *, column_name: str, side: str):
        self.column_name = column_name
        self.side = side

        super().__init__(f"The column, {column_name}, was not found in the {side} rows.")


class SchemaNotFound(TabdiffError):
    def __init__(self, *, schema_name: str, datasource: str):
        self.schema_name = schema_name
        self.datasource = datasource

        super().__init__(f"The schema, {schema_name}, was not found in {datasource}.")


class NotSupportedError(TabdiffError):
    def __init__(self, *, operation: str, datasource: str):
        self.operation = operation
        self.datasource = datasource

        super().__init__(f"{datasource} does not support {operation}.")


class UnsupportedColumnTypeError(TabdiffError):
    def __init__(self, *, type_name: str):
        self.type_name = type_name

        super().__init__(f"The column type, {type_name}, is not supported.")


@pydantic.dataclasses.dataclass(frozen=True, kw_only=True)
class Error:
    file: str
    fn: str
    fn_args: tuple[tuple[str, str], ...]
    error_message: str

    @staticmethod
    def new(error_message: str, /, **fn_args: typing.Any) -> Error:
        frame = inspect.currentframe()
        caller = frame.f_back if frame is not None else None
        if caller is None:
            file, fn = "<unknown>", "<unknown>"
        else:
            file, fn = pathlib.Path(caller.f_code.co_filename).name, caller.f_code.co_name

        return Error(
            file=file,
            fn=fn,
            fn_args=tuple((arg_name, repr(arg)) for arg_name, arg in fn_args.items()),
            error_message=error_message,
        )

    def __str__(self) -> str:
        if self.fn_args:
            args = ", ".join(f"{arg_name}={arg}" for arg_name, arg in self.fn_args)
            return f"{self.file}.{self.fn}({args}): {self.error_message}"
        return f"{self.file}.{self.fn}: {self.error_message}"
