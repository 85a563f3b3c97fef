import pathlib

from tabdiff import adapter, data, service


def test_schema_file_against_csv(left_csv_fixture: pathlib.Path, customer_schema_fixture: data.Schema):
    csv_config = data.DatasourceConfig(name="left", type=data.DatasourceType.CSV, path=left_csv_fixture)

    delta = service.schema_diff(left=customer_schema_fixture, right=csv_config)

    assert isinstance(delta, data.SchemaDelta), str(delta)
    assert delta.added_columns == ()
    assert delta.removed_columns == ()
    assert [col.name for col in delta.changed_columns] == ["id", "balance", "joined"]
    assert delta.key_changed


def test_mock_against_itself():
    mock_config = data.DatasourceConfig(name="mock", type=data.DatasourceType.MOCK)

    delta = service.schema_diff(left=mock_config, right=mock_config)

    assert isinstance(delta, data.SchemaDelta), str(delta)
    assert delta.is_empty


def test_unknown_table_is_an_error():
    mock_config = data.DatasourceConfig(name="mock", type=data.DatasourceType.MOCK)

    result = service.schema_diff(left=mock_config, right=mock_config, table="customer")

    assert isinstance(result, data.Error)


def test_generate_schema_writes_a_schema_file(tmp_path: pathlib.Path):
    mock_config = data.DatasourceConfig(name="mock", type=data.DatasourceType.MOCK)
    output = tmp_path / "mock.json"

    schema = service.generate_schema(config=mock_config, output=output)

    assert isinstance(schema, data.Schema), str(schema)
    assert adapter.schema_file.load(path=output) == schema
