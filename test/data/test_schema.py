import pytest

from tabdiff import data


def test_key_column_names(customer_schema_fixture: data.Schema):
    assert customer_schema_fixture.has_primary_key
    assert customer_schema_fixture.key_column_names == ("id",)
    assert customer_schema_fixture.column_names == ("id", "name", "balance", "joined")


def test_schema_without_key():
    schema = data.Schema(name="t", columns=(data.Column(name="x", type=data.ColumnType.Int),))

    assert not schema.has_primary_key
    assert schema.key_column_names == ()


def test_key_referencing_unknown_column_is_rejected():
    with pytest.raises(data.InvalidSchemaError) as exc_info:
        data.Schema(
            name="t",
            columns=(data.Column(name="x", type=data.ColumnType.Int),),
            primary_key=data.PrimaryKey(("id",)),
        )

    assert exc_info.value.schema_name == "t"
    assert "id" in exc_info.value.reason


def test_duplicate_column_names_are_rejected():
    with pytest.raises(data.InvalidSchemaError):
        data.Schema(
            name="t",
            columns=(
                data.Column(name="x", type=data.ColumnType.Int),
                data.Column(name="x", type=data.ColumnType.String),
            ),
        )


def test_null_typed_columns_are_rejected():
    with pytest.raises(data.InvalidSchemaError):
        data.Schema(name="t", columns=(data.Column(name="x", type=data.ColumnType.Null),))


def test_empty_primary_key_is_rejected():
    with pytest.raises(data.InvalidSchemaError):
        data.PrimaryKey(())


def test_with_name_keeps_columns_and_key(customer_schema_fixture: data.Schema):
    renamed = customer_schema_fixture.with_name("customer_v2")

    assert renamed.name == "customer_v2"
    assert renamed.columns == customer_schema_fixture.columns
    assert renamed.primary_key == customer_schema_fixture.primary_key


def test_column_lookup(customer_schema_fixture: data.Schema):
    column = customer_schema_fixture.column("balance")

    assert column is not None
    assert column.type == data.ColumnType.Float
    assert customer_schema_fixture.column("missing") is None
