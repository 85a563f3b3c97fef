from tabdiff.data.schema import Schema
from tabdiff.data.schema_delta import ColumnDelta, SchemaDelta

__all__ = ("diff_schemas",)


def diff_schemas(*, left: Schema, right: Schema) -> SchemaDelta:
    left_cols = {col.name: col for col in left.columns}
    right_cols = {col.name: col for col in right.columns}

    added = tuple(col for col in right.columns if col.name not in left_cols)
    removed = tuple(col for col in left.columns if col.name not in right_cols)

    changed: list[ColumnDelta] = []
    for left_col in left.columns:
        right_col = right_cols.get(left_col.name)
        if right_col is None:
            continue

        delta = ColumnDelta.between(old=left_col, new=right_col)
        if delta.changed_attributes:
            changed.append(delta)

    return SchemaDelta(
        added_columns=added,
        removed_columns=removed,
        changed_columns=tuple(changed),
        key_changed=left.key_column_names != right.key_column_names,
        old_key=left.key_column_names,
        new_key=right.key_column_names,
    )
