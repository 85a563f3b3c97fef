import json
import typing

from tabdiff import data

__all__ = (
    "render_diff",
    "render_json",
    "render_rows",
    "render_schema_delta",
)

COLUMN_GAP: typing.Final[str] = "  "


def render_rows(*, column_names: typing.Sequence[str], rows: typing.Iterable[data.Row]) -> str:
    """Render rows as a column-aligned table with a header line."""
    table = [list(column_names)]
    for row in rows:
        table.append([_cell_text(row.get(col_name)) for col_name in column_names])

    return _align(table)


def render_diff(*, diff: data.Diff, column_names: typing.Sequence[str] | None = None) -> str:
    if column_names is None:
        column_names = _column_names(diff)

    sections = [
        "[Add]",
        render_rows(column_names=column_names, rows=diff.added),
        "[Delete]",
        render_rows(column_names=column_names, rows=diff.deleted),
        "[Modify]",
        _align(
            [["key", "column", "before", "after"]]
            + [
                [delta.key, col_name, _cell_text(change.before), _cell_text(change.after)]
                for delta in diff.modified
                for col_name, change in delta.changes.items()
            ]
        ),
    ]
    return "\n".join(sections)


def render_schema_delta(*, delta: data.SchemaDelta) -> str:
    if delta.is_empty:
        return "The schemas match."

    lines: list[str] = []
    if delta.added_columns:
        lines.append("[Added Columns]")
        lines.append(
            _align(
                [["name", "type"]]
                + [[col.name, str(col.type)] for col in delta.added_columns]
            )
        )

    if delta.removed_columns:
        lines.append("[Removed Columns]")
        lines.append(
            _align(
                [["name", "type"]]
                + [[col.name, str(col.type)] for col in delta.removed_columns]
            )
        )

    if delta.changed_columns:
        lines.append("[Changed Columns]")
        lines.append(
            _align(
                [["name", "attribute", "before", "after"]]
                + [
                    [
                        col_delta.name,
                        attr,
                        str(getattr(col_delta, f"old_{attr}")),
                        str(getattr(col_delta, f"new_{attr}")),
                    ]
                    for col_delta in delta.changed_columns
                    for attr in col_delta.changed_attributes
                ]
            )
        )

    if delta.key_changed:
        lines.append("[Primary Key]")
        lines.append(f"before: {', '.join(delta.old_key) or '(none)'}")
        lines.append(f"after: {', '.join(delta.new_key) or '(none)'}")

    return "\n".join(lines)


def render_json(record: dict[str, typing.Any], /) -> str:
    return json.dumps(record, indent=2, sort_keys=False)


def _align(table: list[list[str]], /) -> str:
    widths = [max(len(line[i]) for line in table) for i in range(len(table[0]))]
    return "\n".join(
        COLUMN_GAP.join(cell.ljust(width) for cell, width in zip(line, widths)).rstrip()
        for line in table
    )


def _cell_text(value: data.GenericValue | None, /) -> str:
    if value is None:
        return ""
    return data.render(value) or ""


def _column_names(diff: data.Diff, /) -> list[str]:
    column_names: list[str] = []
    for row in (*diff.added, *diff.deleted):
        for col_name in row.keys():
            if col_name not in column_names:
                column_names.append(col_name)
    return column_names
