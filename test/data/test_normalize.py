import datetime
import decimal

import pytest

from tabdiff import data


def _value(column_type: data.ColumnType, raw: object) -> data.GenericValue:
    return data.GenericValue(data.Column(name="c", type=column_type), raw)


def test_text_and_native_ints_normalize_to_the_same_value():
    from_text = data.normalize(_value(data.ColumnType.Int, "42"))
    from_int = data.normalize(_value(data.ColumnType.Int, 42))
    from_decimal = data.normalize(_value(data.ColumnType.Int, decimal.Decimal("42")))

    assert from_text == from_int == from_decimal
    assert from_text.kind == data.ColumnType.Int
    assert from_text.to_text() == "42"


@pytest.mark.parametrize("raw", ["4.2", "abc", " 42", "0x2a", 4.5, 2**63, "9" * 5000, True])
def test_malformed_int_raises_value_conversion_error(raw: object):
    with pytest.raises(data.ValueConversionError) as exc_info:
        data.normalize(_value(data.ColumnType.Int, raw))

    assert exc_info.value.column_name == "c"
    assert exc_info.value.column_type == data.ColumnType.Int
    assert exc_info.value.raw == raw


def test_float_text_normalizes_without_trailing_zeros():
    a = data.normalize(_value(data.ColumnType.Float, "1.50"))
    b = data.normalize(_value(data.ColumnType.Float, "1.5"))

    assert a == b, f"{a!r} should equal {b!r}"
    assert data.equal(a, b)
    assert a.to_text() == "1.5"


def test_float_equality_is_bitwise():
    assert data.normalize(_value(data.ColumnType.Float, 0.0)) != data.normalize(_value(data.ColumnType.Float, -0.0))
    assert data.normalize(_value(data.ColumnType.Float, "nan")) == data.normalize(_value(data.ColumnType.Float, "NaN"))
    assert data.normalize(_value(data.ColumnType.Float, 0.1 + 0.2)) != data.normalize(_value(data.ColumnType.Float, 0.3))


@pytest.mark.parametrize("raw,expected", [("1", True), ("t", True), ("TRUE", True), ("0", False), ("False", False)])
def test_bool_text(raw: str, expected: bool):
    assert data.normalize(_value(data.ColumnType.Bool, raw)).value is expected


def test_bool_rejects_unknown_text():
    with pytest.raises(data.ValueConversionError):
        data.normalize(_value(data.ColumnType.Bool, "yes"))


def test_date_accepts_iso_text_and_native_values():
    expected = datetime.date(2022, 9, 1)

    assert data.normalize(_value(data.ColumnType.Date, "2022-09-01")).value == expected
    assert data.normalize(_value(data.ColumnType.Date, expected)).value == expected
    assert data.normalize(_value(data.ColumnType.Date, datetime.datetime(2022, 9, 1, 13, 0))).value == expected


def test_aware_datetime_is_converted_to_utc_before_taking_the_date():
    eastern = datetime.timezone(datetime.timedelta(hours=-4))
    late_evening = datetime.datetime(2022, 9, 1, 22, 0, tzinfo=eastern)

    assert data.normalize(_value(data.ColumnType.Date, late_evening)).value == datetime.date(2022, 9, 2)


def test_signaling_nan_float_raises_value_conversion_error():
    with pytest.raises(data.ValueConversionError) as exc_info:
        data.normalize(_value(data.ColumnType.Float, decimal.Decimal("sNaN")))

    assert exc_info.value.column_type == data.ColumnType.Float


@pytest.mark.parametrize("raw", ["09/01/2022", "2022-9-1", "2022-02-30"])
def test_date_rejects_other_formats(raw: str):
    with pytest.raises(data.ValueConversionError):
        data.normalize(_value(data.ColumnType.Date, raw))


def test_datetime_is_compared_at_second_precision():
    from_text = data.normalize(_value(data.ColumnType.Datetime, "2022-09-01 13:14:15"))
    from_native = data.normalize(_value(data.ColumnType.Datetime, datetime.datetime(2022, 9, 1, 13, 14, 15, 999)))

    assert from_text == from_native
    assert from_text.to_text() == "2022-09-01 13:14:15"


def test_aware_datetimes_are_converted_to_utc():
    eastern = datetime.timezone(datetime.timedelta(hours=-4))
    aware = data.normalize(_value(data.ColumnType.Datetime, datetime.datetime(2022, 9, 1, 9, 0, tzinfo=eastern)))

    assert aware.value == datetime.datetime(2022, 9, 1, 13, 0)


def test_datetime_rejects_iso_t_separator():
    with pytest.raises(data.ValueConversionError):
        data.normalize(_value(data.ColumnType.Datetime, "2022-09-01T13:14:15"))


def test_none_is_null_for_every_type():
    for column_type in (t for t in data.ColumnType if t != data.ColumnType.Null):
        assert data.normalize(_value(column_type, None)).is_null, f"None should be null for {column_type!s}"


def test_empty_text_is_null_except_for_strings():
    assert data.normalize(_value(data.ColumnType.Int, "")).is_null
    assert data.normalize(_value(data.ColumnType.Date, "")).is_null

    empty_string = data.normalize(_value(data.ColumnType.String, ""))
    assert not empty_string.is_null
    assert empty_string.value == ""


def test_bytes_pass_through():
    assert data.normalize(_value(data.ColumnType.Bytes, bytearray(b"\x00\xff"))).value == b"\x00\xff"


def test_bytes_from_text_is_unsupported():
    with pytest.raises(data.UnsupportedConversionError) as exc_info:
        data.normalize(_value(data.ColumnType.Bytes, "00ff"))

    assert exc_info.value.column_name == "c"


def test_mismatched_kinds_are_never_equal():
    as_int = data.normalize(_value(data.ColumnType.Int, 1))
    as_string = data.normalize(_value(data.ColumnType.String, "1"))

    assert not data.equal(as_int, as_string)


def test_null_equality():
    null = data.CanonicalValue.null()
    one = data.normalize(_value(data.ColumnType.Int, 1))

    assert data.equal(null, data.CanonicalValue.null())
    assert not data.equal(null, one)
    assert not data.equal(one, null)


def test_render_falls_back_to_raw_text():
    assert data.render(_value(data.ColumnType.Int, "n/a")) == "n/a"
    assert data.render(_value(data.ColumnType.Int, None)) is None
    assert data.render(_value(data.ColumnType.Bool, "T")) == "true"
