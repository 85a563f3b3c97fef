import enum

__all__ = ("ColumnType",)


# noinspection PyArgumentList
class ColumnType(enum.Enum):
    Bool = "bool"
    Bytes = "bytes"
    Date = "date"
    Datetime = "datetime"
    Float = "float"
    Int = "int"
    Null = "null"
    String = "string"

    def __repr__(self) -> str:
        return f"ColumnType.{self.name}"

    def __str__(self) -> str:
        return self.value
