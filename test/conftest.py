import pathlib
import typing

import pytest
from loguru import logger

from tabdiff import adapter, data


@pytest.fixture(scope="function")
def customer_schema_fixture() -> data.Schema:
    return data.Schema(
        name="customer",
        columns=(
            data.Column(name="id", type=data.ColumnType.Int, ordinal_position=0, not_null=True),
            data.Column(name="name", type=data.ColumnType.String, ordinal_position=1),
            data.Column(name="balance", type=data.ColumnType.Float, ordinal_position=2),
            data.Column(name="joined", type=data.ColumnType.Date, ordinal_position=3),
        ),
        primary_key=data.PrimaryKey(("id",)),
    )


@pytest.fixture(scope="function")
def left_csv_fixture(tmp_path: pathlib.Path) -> pathlib.Path:
    path = tmp_path / "left.csv"
    path.write_text(
        "id,name,balance,joined\n"
        "1,Steve,10.50,2022-09-01\n"
        "2,Mandie,20.00,2022-09-02\n"
        "3,Bill,30,2022-09-03\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture(scope="function")
def right_csv_fixture(tmp_path: pathlib.Path) -> pathlib.Path:
    path = tmp_path / "right.csv"
    path.write_text(
        "id,name,balance,joined\n"
        "1,Steve,10.5,2022-09-01\n"
        "2,Mandy,20.00,2022-09-02\n"
        "4,Jill,40.25,2022-09-04\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture(scope="function")
def log_folder_fixture(
    tmp_path: pathlib.Path,
    monkeypatch: pytest.MonkeyPatch,
) -> typing.Generator[pathlib.Path, None, None]:
    folder = tmp_path / "logs"
    monkeypatch.setenv("TABDIFF_LOG_FOLDER", str(folder))
    adapter.fs.get_log_folder.cache_clear()
    yield folder
    logger.remove()
    adapter.fs.get_log_folder.cache_clear()
