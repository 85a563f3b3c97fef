import collections
import typing

from loguru import logger

from tabdiff.data.canonical_value import CanonicalValue, equal
from tabdiff.data.column import Column
from tabdiff.data.diff import Change, Diff, RowDelta
from tabdiff.data.error import DuplicateKeyError, SchemaMismatchError, ValueConversionError
from tabdiff.data.generic_value import GenericValue
from tabdiff.data.normalize import normalize
from tabdiff.data.row import Row
from tabdiff.data.schema import Schema

__all__ = ("KEY_SEPARATOR", "diff_rows")

KEY_SEPARATOR: typing.Final[str] = "|"

Side: typing.TypeAlias = typing.Literal["left", "right"]

# one entry per cell; an unnormalizable cell carries a fresh object so the row never matches
Identity: typing.TypeAlias = tuple[tuple[str, CanonicalValue | object], ...]

# (cell texts for ordering, input position, row)
_Entry: typing.TypeAlias = tuple[tuple[tuple[str, str], ...], int, Row]

# (key cell texts, input position, row)
_KeyedEntry: typing.TypeAlias = tuple[tuple[str, ...], int, Row]


def diff_rows(
    *,
    left: typing.Iterable[Row],
    right: typing.Iterable[Row],
    schema: Schema | None = None,
) -> Diff:
    """Compare two row sets.

    With a schema that declares a primary key, rows are matched by key and
    classified as added, deleted or modified.  Otherwise rows are compared as
    multisets of their full content, so a changed row shows up as one deletion
    plus one addition and `modified` is always empty.

    Raises:
        DuplicateKeyError: two rows on the same side share a primary key.
        SchemaMismatchError: a key or compared column is missing from a row.
        UnsupportedConversionError: a cell has no normalization path.
    """
    left_rows = list(left)
    right_rows = list(right)

    if schema is not None and schema.primary_key is not None:
        result = _diff_keyed(left_rows=left_rows, right_rows=right_rows, schema=schema)
    else:
        result = _diff_unkeyed(left_rows=left_rows, right_rows=right_rows, schema=schema)

    logger.debug(
        f"Compared {len(left_rows)} left rows to {len(right_rows)} right rows: "
        f"{len(result.added)} added, {len(result.deleted)} deleted, {len(result.modified)} modified."
    )

    return result


def _diff_keyed(*, left_rows: list[Row], right_rows: list[Row], schema: Schema) -> Diff:
    key_cols = tuple(typing.cast(Column, schema.column(col_name)) for col_name in schema.key_column_names)

    indexed_left_rows, unmatched_left_rows = _index_rows(rows=left_rows, key_cols=key_cols, side="left")
    indexed_right_rows, unmatched_right_rows = _index_rows(rows=right_rows, key_cols=key_cols, side="right")

    # a row whose key cannot be normalized has no counterpart on the other side
    added = unmatched_right_rows + [
        entry for key, entry in indexed_right_rows.items() if key not in indexed_left_rows
    ]
    deleted = unmatched_left_rows + [
        entry for key, entry in indexed_left_rows.items() if key not in indexed_right_rows
    ]

    compare_cols = tuple(col for col in schema.columns if col.name not in schema.key_column_names)

    modified: list[RowDelta] = []
    for key in sorted(indexed_left_rows.keys() & indexed_right_rows.keys()):
        changes = _compare_rows(
            left_row=indexed_left_rows[key][2],
            right_row=indexed_right_rows[key][2],
            compare_cols=compare_cols,
        )
        if changes:
            modified.append(RowDelta(key=KEY_SEPARATOR.join(key), changes=changes))

    return Diff(
        added=tuple(row for _, _, row in sorted(added, key=lambda entry: entry[:2])),
        deleted=tuple(row for _, _, row in sorted(deleted, key=lambda entry: entry[:2])),
        modified=tuple(modified),
    )


def _index_rows(
    *,
    rows: list[Row],
    key_cols: tuple[Column, ...],
    side: Side,
) -> tuple[dict[tuple[str, ...], _KeyedEntry], list[_KeyedEntry]]:
    indexed_rows: dict[tuple[str, ...], _KeyedEntry] = {}
    unmatched_rows: list[_KeyedEntry] = []
    for position, row in enumerate(rows):
        key, known = _row_key(row=row, key_cols=key_cols, side=side)
        if not known:
            unmatched_rows.append((key, position, row))
        elif key in indexed_rows:
            raise DuplicateKeyError(key=KEY_SEPARATOR.join(key), side=side)
        else:
            indexed_rows[key] = (key, position, row)
    return indexed_rows, unmatched_rows


def _row_key(*, row: Row, key_cols: tuple[Column, ...], side: Side) -> tuple[tuple[str, ...], bool]:
    """Return the key's cell texts and whether every key cell could be normalized."""
    parts: list[str] = []
    known = True
    for col in key_cols:
        value = _cell(row=row, column=col, side=side)
        canonical = _canonical(value)
        if canonical is None:
            parts.append(str(value.raw))
            known = False
        else:
            parts.append(canonical.to_text())
    return tuple(parts), known


def _compare_rows(*, left_row: Row, right_row: Row, compare_cols: tuple[Column, ...]) -> dict[str, Change]:
    changes: dict[str, Change] = {}
    for col in compare_cols:
        before = _cell(row=left_row, column=col, side="left")
        after = _cell(row=right_row, column=col, side="right")
        if not _values_equal(_canonical(before), _canonical(after)):
            changes[col.name] = Change(before=before, after=after)
    return changes


def _diff_unkeyed(*, left_rows: list[Row], right_rows: list[Row], schema: Schema | None) -> Diff:
    left_groups = _group_rows(rows=left_rows, schema=schema, side="left")
    right_groups = _group_rows(rows=right_rows, schema=schema, side="right")

    added: list[_Entry] = []
    deleted: list[_Entry] = []
    for identity in left_groups.keys() | right_groups.keys():
        left_copies = left_groups.get(identity, [])
        right_copies = right_groups.get(identity, [])
        if len(right_copies) > len(left_copies):
            added.extend(right_copies[len(left_copies):])
        elif len(left_copies) > len(right_copies):
            deleted.extend(left_copies[len(right_copies):])

    return Diff(
        added=tuple(row for _, _, row in sorted(added, key=lambda entry: entry[:2])),
        deleted=tuple(row for _, _, row in sorted(deleted, key=lambda entry: entry[:2])),
        modified=(),
    )


def _group_rows(
    *,
    rows: list[Row],
    schema: Schema | None,
    side: Side,
) -> dict[Identity, list[_Entry]]:
    groups: dict[Identity, list[_Entry]] = collections.defaultdict(list)
    for position, row in enumerate(rows):
        if schema is None:
            cells = [(col_name, row[col_name]) for col_name in sorted(row.keys())]
        else:
            cells = [
                (col.name, _cell(row=row, column=col, side=side))
                for col in sorted(schema.columns, key=lambda c: c.name)
            ]

        identity: list[tuple[str, CanonicalValue | object]] = []
        sort_text: list[tuple[str, str]] = []
        for col_name, value in cells:
            canonical = _canonical(value)
            if canonical is None:
                identity.append((col_name, object()))
                sort_text.append((col_name, str(value.raw)))
            else:
                identity.append((col_name, canonical))
                sort_text.append((col_name, canonical.to_text()))

        groups[tuple(identity)].append((tuple(sort_text), position, row))
    return groups


def _cell(*, row: Row, column: Column, side: Side) -> GenericValue:
    """Look up a cell and reinterpret it under the governing schema's column."""
    value = row.get(column.name)
    if value is None:
        raise SchemaMismatchError(column_name=column.name, side=side)

    if value.column == column:
        return value

    return GenericValue(column=column, raw=value.raw)


def _canonical(value: GenericValue, /) -> CanonicalValue | None:
    """Normalize a cell, or return None when its value is malformed (unknown)."""
    try:
        return normalize(value)
    except ValueConversionError as e:
        logger.warning(f"{e!s}  The cell will be treated as different.")
        return None


def _values_equal(a: CanonicalValue | None, b: CanonicalValue | None, /) -> bool:
    if a is None or b is None:
        return False
    return equal(a, b)
