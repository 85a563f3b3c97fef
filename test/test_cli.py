import json
import pathlib

import pytest

from tabdiff import adapter, data
from tabdiff.cli import main


@pytest.fixture(scope="function")
def config_file_fixture(
    tmp_path: pathlib.Path,
    left_csv_fixture: pathlib.Path,
    right_csv_fixture: pathlib.Path,
) -> pathlib.Path:
    path = tmp_path / "tabdiff.json"
    path.write_text(
        json.dumps({
            "max-workers": 2,
            "datasources": [
                {"name": "left", "type": "csv", "path": left_csv_fixture.name},
                {"name": "right", "type": "csv", "path": right_csv_fixture.name},
            ],
        }),
        encoding="utf-8",
    )
    return path


@pytest.fixture(scope="function")
def schema_file_fixture(tmp_path: pathlib.Path, customer_schema_fixture: data.Schema) -> pathlib.Path:
    path = tmp_path / "customer.json"
    adapter.schema_file.dump(schema=customer_schema_fixture, path=path)
    return path


def test_diff_command(
    config_file_fixture: pathlib.Path,
    schema_file_fixture: pathlib.Path,
    log_folder_fixture: pathlib.Path,
    capsys: pytest.CaptureFixture[str],
):
    main(["--config", str(config_file_fixture), "diff", "left", "right", "--schema", str(schema_file_fixture)])

    lines = capsys.readouterr().out.splitlines()

    assert lines[0] == "[Add]"
    assert lines[2].startswith("4")
    assert "[Delete]" in lines
    assert "[Modify]" in lines
    assert lines[-1].split() == ["2", "name", "Mandie", "Mandy"]


def test_diff_command_as_json(
    config_file_fixture: pathlib.Path,
    schema_file_fixture: pathlib.Path,
    log_folder_fixture: pathlib.Path,
    capsys: pytest.CaptureFixture[str],
):
    main(["--config", str(config_file_fixture), "diff", "left", "right", "--schema", str(schema_file_fixture), "--json"])

    record = json.loads(capsys.readouterr().out)

    assert record["added"] == [{"id": "4", "name": "Jill", "balance": "40.25", "joined": "2022-09-04"}]
    assert record["modified"] == [{"key": "2", "changes": {"name": {"before": "Mandie", "after": "Mandy"}}}]


def test_csv_paths_work_without_a_config_entry(
    left_csv_fixture: pathlib.Path,
    schema_file_fixture: pathlib.Path,
    log_folder_fixture: pathlib.Path,
    capsys: pytest.CaptureFixture[str],
):
    main(["--config", str(_empty_config(log_folder_fixture.parent)), "schema-diff", str(schema_file_fixture), str(left_csv_fixture)])

    out = capsys.readouterr().out

    assert "[Changed Columns]" in out
    assert "[Primary Key]" in out


def test_unknown_datasource_exits_with_an_error(
    config_file_fixture: pathlib.Path,
    log_folder_fixture: pathlib.Path,
):
    with pytest.raises(SystemExit) as exc_info:
        main(["--config", str(config_file_fixture), "dump", "nowhere"])

    assert exc_info.value.code == 1


def test_generate_config(log_folder_fixture: pathlib.Path, capsys: pytest.CaptureFixture[str]):
    main(["generate-config", "--type", "postgres"])

    template = json.loads(capsys.readouterr().out)

    assert template["type"] == "postgres"
    assert "keyring-password-entry" in template


def test_dump_and_generate_schema_for_the_mock(
    tmp_path: pathlib.Path,
    log_folder_fixture: pathlib.Path,
    capsys: pytest.CaptureFixture[str],
):
    config_file = _empty_config(tmp_path)

    main(["--config", str(config_file), "dump", "mock"])
    rows = capsys.readouterr().out.splitlines()

    assert rows[0].split() == ["id", "name", "age", "birthday"]
    assert len(rows) == 101

    main(["--config", str(config_file), "generate-schema", "mock"])
    schema = json.loads(capsys.readouterr().out)

    assert schema["primary_key"] == ["id"]


def _empty_config(folder: pathlib.Path) -> pathlib.Path:
    path = folder / "empty.json"
    path.write_text(json.dumps({"datasources": []}), encoding="utf-8")
    return path
