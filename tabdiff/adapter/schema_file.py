"""Schema files: the JSON form of a `data.Schema`.

    {
        "name": "customer",
        "columns": [
            {"name": "id", "type": "int", "ordinal_position": 0, "not_null": true, "auto_increment": true},
            {"name": "name", "type": "string", "ordinal_position": 1, "not_null": false, "auto_increment": false}
        ],
        "primary_key": ["id"]
    }

`ordinal_position`, `not_null` and `auto_increment` are optional when loading.
"""
import json
import pathlib
import typing

from tabdiff import data

__all__ = ("dump", "from_dict", "load", "to_dict")


def load(*, path: pathlib.Path) -> data.Schema | data.Error:
    try:
        if not path.exists():
            return data.Error.new(f"The schema file specified, {path.resolve()!s}, does not exist.", path=path)

        with path.open("r", encoding="utf-8") as fh:
            d = typing.cast(dict[str, typing.Any], json.load(fh))

        return from_dict(d)
    except Exception as e:
        return data.Error.new(f"An error occurred while loading the schema file: {e!s}", path=path)


def dump(*, schema: data.Schema, path: pathlib.Path) -> None | data.Error:
    try:
        with path.open("w", encoding="utf-8") as fh:
            json.dump(to_dict(schema), fh, indent=2)
            fh.write("\n")

        return None
    except Exception as e:
        return data.Error.new(f"An error occurred while writing the schema file: {e!s}", path=path)


def from_dict(d: dict[str, typing.Any], /) -> data.Schema | data.Error:
    if "name" not in d.keys():
        return data.Error.new("schema file is missing an entry for 'name'.")

    if "columns" not in d.keys():
        return data.Error.new("schema file is missing an entry for 'columns'.")

    columns: list[data.Column] = []
    for i, col_dict in enumerate(d["columns"]):
        if "name" not in col_dict.keys():
            return data.Error.new(f"column {i} in the schema file is missing an entry for 'name'.")

        if "type" not in col_dict.keys():
            return data.Error.new(f"the column, {col_dict['name']}, is missing an entry for 'type'.")

        try:
            column_type = data.ColumnType(col_dict["type"])
        except ValueError:
            return data.Error.new(
                f"could not convert type entry, {col_dict['type']!r}, of the column, {col_dict['name']}, "
                f"to a data.ColumnType instance."
            )

        columns.append(
            data.Column(
                name=col_dict["name"],
                type=column_type,
                ordinal_position=int(col_dict.get("ordinal_position", i)),
                not_null=bool(col_dict.get("not_null", False)),
                auto_increment=bool(col_dict.get("auto_increment", False)),
            )
        )

    if key_column_names := d.get("primary_key"):
        primary_key: data.PrimaryKey | None = data.PrimaryKey(tuple(key_column_names))
    else:
        primary_key = None

    try:
        return data.Schema(name=d["name"], columns=tuple(columns), primary_key=primary_key)
    except data.InvalidSchemaError as e:
        return data.Error.new(str(e))


def to_dict(schema: data.Schema, /) -> dict[str, typing.Any]:
    return {
        "name": schema.name,
        "columns": [
            {
                "name": col.name,
                "type": col.type.value,
                "ordinal_position": col.ordinal_position,
                "not_null": col.not_null,
                "auto_increment": col.auto_increment,
            }
            for col in schema.columns
        ],
        "primary_key": list(schema.key_column_names) or None,
    }
