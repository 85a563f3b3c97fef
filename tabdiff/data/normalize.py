"""Normalization of raw cell values into canonical values.

Textual sources (CSV files, spreadsheet exports) hand over every cell as a
string, while database drivers hand over typed Python scalars.  Both end up as
a `CanonicalValue` whose kind is the column's declared `ColumnType`, so values
from different sources can be compared with `equal`.
"""
import datetime
import decimal
import re
import typing

from tabdiff.data.canonical_value import CanonicalValue, DATE_FORMAT, DATETIME_FORMAT
from tabdiff.data.column import Column
from tabdiff.data.column_type import ColumnType
from tabdiff.data.error import UnsupportedConversionError, ValueConversionError
from tabdiff.data.generic_value import GenericValue

__all__ = ("normalize", "render")

INT64_MIN: typing.Final[int] = -(2**63)
INT64_MAX: typing.Final[int] = 2**63 - 1

_INT_PATTERN: typing.Final = re.compile(r"[+-]?[0-9]+")
_FLOAT_PATTERN: typing.Final = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)
_DATE_PATTERN: typing.Final = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_DATETIME_PATTERN: typing.Final = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}")

_TRUE_TEXT: typing.Final = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_TEXT: typing.Final = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_BYTES_TYPES: typing.Final = (bytes, bytearray, memoryview)


def normalize(value: GenericValue, /) -> CanonicalValue:
    """Convert a cell to its canonical form according to its column's declared type.

    `None` is the null marker for every type; declared nullability is not enforced.

    Raises:
        ValueConversionError: the raw value is malformed or incompatible with the declared type.
        UnsupportedConversionError: there is no conversion path at all, e.g. a Bytes column
            read from a textual source.
    """
    column = value.column
    raw = value.raw

    if raw is None:
        return CanonicalValue.null()

    match column.type:
        case ColumnType.Int:
            return _to_int(column, raw)
        case ColumnType.Float:
            return _to_float(column, raw)
        case ColumnType.Bool:
            return _to_bool(column, raw)
        case ColumnType.String:
            return _to_string(column, raw)
        case ColumnType.Date:
            return _to_date(column, raw)
        case ColumnType.Datetime:
            return _to_datetime(column, raw)
        case ColumnType.Bytes:
            return _to_bytes(column, raw)
        case _:
            raise UnsupportedConversionError(
                column_name=column.name,
                column_type=column.type,
                raw_type=type(raw).__name__,
            )


def render(value: GenericValue, /) -> str | None:
    """Canonical text of a cell for printing or persisting, `None` for null.

    Cells that cannot be normalized are rendered from their raw value.
    """
    try:
        return normalize(value).to_json()
    except (ValueConversionError, UnsupportedConversionError):
        if isinstance(value.raw, _BYTES_TYPES):
            return bytes(value.raw).hex()
        return str(value.raw)


def _to_int(column: Column, raw: typing.Any, /) -> CanonicalValue:
    if isinstance(raw, bool):
        raise _conversion_error(column, raw)

    if isinstance(raw, int):
        n = int(raw)
    elif isinstance(raw, str):
        if raw == "":
            return CanonicalValue.null()
        if not _INT_PATTERN.fullmatch(raw):
            raise _conversion_error(column, raw)
        try:
            n = int(raw)
        except ValueError:
            # longer than the interpreter's digit limit
            raise _conversion_error(column, raw)
    elif isinstance(raw, float):
        if not raw.is_integer():
            raise _conversion_error(column, raw)
        n = int(raw)
    elif isinstance(raw, decimal.Decimal):
        if not raw.is_finite() or raw != raw.to_integral_value():
            raise _conversion_error(column, raw)
        n = int(raw)
    else:
        raise _conversion_error(column, raw)

    if n < INT64_MIN or n > INT64_MAX:
        raise _conversion_error(column, raw)

    return CanonicalValue(kind=ColumnType.Int, value=n)


def _to_float(column: Column, raw: typing.Any, /) -> CanonicalValue:
    if isinstance(raw, bool):
        raise _conversion_error(column, raw)

    if isinstance(raw, str):
        if raw == "":
            return CanonicalValue.null()
        if not _FLOAT_PATTERN.fullmatch(raw):
            raise _conversion_error(column, raw)
        return CanonicalValue(kind=ColumnType.Float, value=float(raw))

    if isinstance(raw, (int, float, decimal.Decimal)):
        try:
            return CanonicalValue(kind=ColumnType.Float, value=float(raw))
        except (OverflowError, ValueError):
            raise _conversion_error(column, raw)

    raise _conversion_error(column, raw)


def _to_bool(column: Column, raw: typing.Any, /) -> CanonicalValue:
    if isinstance(raw, bool):
        return CanonicalValue(kind=ColumnType.Bool, value=raw)

    if isinstance(raw, int) and raw in (0, 1):
        return CanonicalValue(kind=ColumnType.Bool, value=raw == 1)

    if isinstance(raw, str):
        if raw == "":
            return CanonicalValue.null()
        if raw in _TRUE_TEXT:
            return CanonicalValue(kind=ColumnType.Bool, value=True)
        if raw in _FALSE_TEXT:
            return CanonicalValue(kind=ColumnType.Bool, value=False)

    raise _conversion_error(column, raw)


def _to_string(column: Column, raw: typing.Any, /) -> CanonicalValue:
    if isinstance(raw, str):
        return CanonicalValue(kind=ColumnType.String, value=raw)

    if isinstance(raw, _BYTES_TYPES):
        try:
            return CanonicalValue(kind=ColumnType.String, value=bytes(raw).decode("utf-8"))
        except UnicodeDecodeError:
            raise _conversion_error(column, raw)

    return CanonicalValue(kind=ColumnType.String, value=str(raw))


def _to_date(column: Column, raw: typing.Any, /) -> CanonicalValue:
    if isinstance(raw, datetime.datetime):
        if raw.tzinfo is not None:
            raw = raw.astimezone(datetime.timezone.utc)
        return CanonicalValue(kind=ColumnType.Date, value=raw.date())

    if isinstance(raw, datetime.date):
        return CanonicalValue(kind=ColumnType.Date, value=raw)

    if isinstance(raw, str):
        if raw == "":
            return CanonicalValue.null()
        if _DATE_PATTERN.fullmatch(raw):
            try:
                return CanonicalValue(
                    kind=ColumnType.Date,
                    value=datetime.datetime.strptime(raw, DATE_FORMAT).date(),
                )
            except ValueError:
                pass

    raise _conversion_error(column, raw)


def _to_datetime(column: Column, raw: typing.Any, /) -> CanonicalValue:
    if isinstance(raw, datetime.datetime):
        if raw.tzinfo is not None:
            raw = raw.astimezone(datetime.timezone.utc).replace(tzinfo=None)
        return CanonicalValue(kind=ColumnType.Datetime, value=raw.replace(microsecond=0))

    if isinstance(raw, datetime.date):
        return CanonicalValue(
            kind=ColumnType.Datetime,
            value=datetime.datetime(raw.year, raw.month, raw.day),
        )

    if isinstance(raw, str):
        if raw == "":
            return CanonicalValue.null()
        if _DATETIME_PATTERN.fullmatch(raw):
            try:
                return CanonicalValue(
                    kind=ColumnType.Datetime,
                    value=datetime.datetime.strptime(raw, DATETIME_FORMAT),
                )
            except ValueError:
                pass

    raise _conversion_error(column, raw)


def _to_bytes(column: Column, raw: typing.Any, /) -> CanonicalValue:
    if isinstance(raw, _BYTES_TYPES):
        return CanonicalValue(kind=ColumnType.Bytes, value=bytes(raw))

    if isinstance(raw, str):
        raise UnsupportedConversionError(
            column_name=column.name,
            column_type=column.type,
            raw_type="text",
        )

    raise _conversion_error(column, raw)


def _conversion_error(column: Column, raw: typing.Any, /) -> ValueConversionError:
    return ValueConversionError(column_name=column.name, column_type=column.type, raw=raw)
