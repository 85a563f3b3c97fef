import enum

__all__ = ("DatasourceType",)


class DatasourceType(enum.Enum):
    CSV = "csv"
    MOCK = "mock"
    ODBC = "odbc"
    POSTGRES = "postgres"

    def __repr__(self) -> str:
        return f"DatasourceType.{self.name}"

    def __str__(self) -> str:
        return self.value
