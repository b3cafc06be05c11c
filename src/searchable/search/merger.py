"""Merge an assembled relevance query back into the caller's statement."""

from sqlalchemy import Select, Table
from sqlalchemy.sql.util import ClauseAdapter

from searchable.search.assembler import AssembledSearch
from searchable.search.scoring import RELEVANCE_LABEL


def merge_search(original: Select, assembled: AssembledSearch, table: Table) -> Select:
    """Select from the relevance query instead of the entity table.

    The assembled statement becomes a subquery named after the table, and
    every reference to the table in ``original`` (columns, WHERE criteria)
    is adapted onto it, so the caller's LIMIT, OFFSET and extra filters keep
    working. The relevance score is selected once; ordering
    by relevance moves to the outer statement, after any ordering the caller
    already had.
    """
    subquery = assembled.statement.order_by(None).subquery(table.name)
    relevance = subquery.c[RELEVANCE_LABEL]
    merged = ClauseAdapter(subquery).traverse(original)
    # Whole-table selects already pick up the score from the subquery
    if RELEVANCE_LABEL not in merged.selected_columns:
        merged = merged.add_columns(relevance)
    return merged.order_by(relevance.desc())
