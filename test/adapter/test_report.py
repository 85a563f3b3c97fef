import json

from tabdiff import adapter, data

ID_COL = data.Column(name="id", type=data.ColumnType.Int)
NAME_COL = data.Column(name="name", type=data.ColumnType.String)


def _row(id_: int, name: str | None) -> data.Row:
    return {"id": data.GenericValue(ID_COL, id_), "name": data.GenericValue(NAME_COL, name)}


def test_render_rows_aligns_columns():
    text = adapter.report.render_rows(column_names=("id", "name"), rows=[_row(1, "Steve"), _row(10, None)])

    assert text.splitlines() == [
        "id  name",
        "1   Steve",
        "10",
    ]


def test_render_diff_sections():
    diff = data.Diff(
        added=(_row(2, "b"),),
        deleted=(),
        modified=(
            data.RowDelta(
                key="1",
                changes={"name": data.Change(before=data.GenericValue(NAME_COL, "a"), after=data.GenericValue(NAME_COL, "z"))},
            ),
        ),
    )

    lines = adapter.report.render_diff(diff=diff).splitlines()

    assert lines == [
        "[Add]",
        "id  name",
        "2   b",
        "[Delete]",
        "id  name",
        "[Modify]",
        "key  column  before  after",
        "1    name    a       z",
    ]


def test_render_schema_delta(customer_schema_fixture: data.Schema):
    unkeyed = data.Schema(name="customer", columns=customer_schema_fixture.columns[:3])
    delta = data.diff_schemas(left=customer_schema_fixture, right=unkeyed)

    text = adapter.report.render_schema_delta(delta=delta)

    assert "[Removed Columns]" in text
    assert "joined" in text
    assert "[Primary Key]" in text
    assert "before: id" in text
    assert "after: (none)" in text


def test_render_matching_schemas(customer_schema_fixture: data.Schema):
    delta = data.diff_schemas(left=customer_schema_fixture, right=customer_schema_fixture)

    assert adapter.report.render_schema_delta(delta=delta) == "The schemas match."


def test_render_json():
    diff = data.Diff(added=(_row(1, None),), deleted=(), modified=())

    assert json.loads(adapter.report.render_json(diff.to_record())) == {
        "added": [{"id": "1", "name": None}],
        "deleted": [],
        "modified": [],
    }
