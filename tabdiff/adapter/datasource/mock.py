import typing

from tabdiff import data

__all__ = ("MockDatasource",)

MOCK_SCHEMA_NAME: typing.Final[str] = "mock"


class MockDatasource(data.Datasource):
    """Deterministic in-memory rows, handy for trying out the CLI without a database."""

    def __init__(self, *, row_count: int = 100):
        self._row_count: typing.Final[int] = row_count

    def open(self) -> None:
        return None

    def close(self) -> None:
        return None

    def get_all_schemas(self) -> tuple[data.Schema, ...]:
        return (self.get_schema(MOCK_SCHEMA_NAME),)

    def get_schema(self, /, name: str) -> data.Schema:
        if name != MOCK_SCHEMA_NAME:
            raise data.SchemaNotFound(schema_name=name, datasource="MockDatasource")

        return data.Schema(
            name=MOCK_SCHEMA_NAME,
            columns=(
                data.Column(name="id", type=data.ColumnType.Int, ordinal_position=0, not_null=True),
                data.Column(name="name", type=data.ColumnType.String, ordinal_position=1),
                data.Column(name="age", type=data.ColumnType.Int, ordinal_position=2),
                data.Column(name="birthday", type=data.ColumnType.String, ordinal_position=3),
            ),
            primary_key=data.PrimaryKey(("id",)),
        )

    def set_schema(self, /, schema: data.Schema) -> None:
        raise data.NotSupportedError(operation="set_schema", datasource="MockDatasource")

    def get_rows(self, /, schema: data.Schema) -> list[data.Row]:
        return [
            {col.name: data.GenericValue(column=col, raw=_mock_value(col_name=col.name, i=i)) for col in schema.columns}
            for i in range(self._row_count)
        ]

    def set_rows(self, *, schema: data.Schema, rows: typing.Iterable[data.Row]) -> None:
        raise data.NotSupportedError(operation="set_rows", datasource="MockDatasource")

    def __repr__(self) -> str:
        return f"MockDatasource(row_count={self._row_count})"


def _mock_value(*, col_name: str, i: int) -> typing.Any:
    match col_name:
        case "id" | "age":
            return i
        case "name":
            return f"name{i}"
        case "birthday":
            return "2018-05-28 14:31:00"
        case _:
            return None
