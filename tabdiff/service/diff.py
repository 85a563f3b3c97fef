from __future__ import annotations

import concurrent.futures

from loguru import logger

from tabdiff import data
from tabdiff.service.fetch import fetch

__all__ = ("diff",)


def diff(
    *,
    left: data.DatasourceConfig,
    right: data.DatasourceConfig,
    schema: data.Schema | None = None,
    table: str | None = None,
    max_workers: int = 2,
) -> data.Diff | data.Error:
    """Fetch both sides concurrently and compare their rows.

    The schema file, when given, governs the comparison.  Otherwise the left
    datasource's schema does, and the right rows are read under it.
    """
    try:
        with concurrent.futures.ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="tabdiff-fetch",
        ) as executor:
            left_future = executor.submit(fetch, config=left, schema=schema, table=table)
            right_future = executor.submit(fetch, config=right, schema=schema, table=table)

            left_result = left_future.result()
            right_result = right_future.result()

        if isinstance(left_result, data.Error):
            return left_result

        if isinstance(right_result, data.Error):
            return right_result

        left_schema, left_rows = left_result
        _, right_rows = right_result

        logger.info(f"Comparing {left.name} to {right.name} using the {left_schema.name} schema...")

        return data.diff_rows(left=left_rows, right=right_rows, schema=left_schema)
    except data.TabdiffError as e:
        return data.Error.new(str(e), left=left, right=right, schema=schema, table=table)
