"""Assemble the relevance query: score column, joins, HAVING filter, ordering, grouping."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import ColumnElement, Select, Table, literal_column, table as sa_table

from searchable.core.exceptions import JoinConfigurationError
from searchable.db.dialects import DialectCapabilities
from searchable.search.config import SearchConfig
from searchable.search.resolver import resolve_joins
from searchable.search.scoring import (
    RELEVANCE_LABEL,
    ScoreExpression,
    build_score_expression,
    numeric_literal,
)


@dataclass
class SearchBindings:
    """Word bindings of one search call, per clause slot."""

    select: list[str] = field(default_factory=list)
    having: list[str] = field(default_factory=list)

    @property
    def all(self) -> list[str]:
        """Every binding in placeholder order (select clause first)."""
        return [*self.select, *self.having]

    def __len__(self) -> int:
        return len(self.select) + len(self.having)


@dataclass
class AssembledSearch:
    """The relevance query before it is merged into the caller's statement."""

    statement: Select
    score: ScoreExpression
    threshold: float
    bindings: SearchBindings
    group_by: list[str]
    capabilities: DialectCapabilities


def apply_joins(
    query: Select,
    joins: Mapping[str, Any],
    table_name: str | None = None,
) -> Select:
    """LEFT JOIN every configured table on its (local key, foreign key) pair.

    Raises:
        JoinConfigurationError: If an entry is not a two-item key pair
    """
    for join_table, keys in joins.items():
        if isinstance(keys, str) or not isinstance(keys, Iterable):
            raise JoinConfigurationError(join_table, keys, table=table_name)
        keys = list(keys)
        if len(keys) != 2:
            raise JoinConfigurationError(join_table, keys, table=table_name)
        local_key, foreign_key = keys
        query = query.outerjoin(
            sa_table(join_table),
            literal_column(str(local_key)) == literal_column(str(foreign_key)),
        )
    return query


def relevance_filter(
    score: ScoreExpression,
    threshold: float,
    capabilities: DialectCapabilities,
) -> ColumnElement:
    """HAVING condition keeping rows scoring above the threshold."""
    if capabilities.supports_alias_in_having:
        return literal_column(RELEVANCE_LABEL) > numeric_literal(threshold)
    return score.expression > numeric_literal(threshold)


def group_by_columns(
    table: Table,
    columns: Iterable[str],
    joins: Iterable[str],
    capabilities: DialectCapabilities,
    table_columns: list[str] | None = None,
) -> list[str]:
    """Columns to group by so joins do not repeat rows.

    A searched column is grouped on as well when its name contains the name
    of a joined table (plain substring match).
    """
    join_tables = list(joins)
    joined = [column for column in columns for join_table in join_tables if join_table in column]
    all_columns = [f"{table.name}.{column.name}" for column in table.columns]

    if capabilities.requires_full_column_group_by:
        return [*(table_columns or all_columns), *joined]

    primary_key = [f"{table.name}.{column.name}" for column in table.primary_key.columns]
    return [*joined, *(primary_key or all_columns)]


def register_bindings(score: ScoreExpression, capabilities: DialectCapabilities) -> SearchBindings:
    """Record the word bindings once per clause that mentions the score expression."""
    bindings = SearchBindings()
    bindings.select.extend(score.bindings)
    if capabilities.having_applications > 1:
        bindings.having.extend(score.bindings)
    return bindings


def assemble_search_query(
    query: Select,
    table: Table,
    config: SearchConfig,
    columns: dict[str, float],
    words: list[str],
    threshold: float,
    capabilities: DialectCapabilities,
) -> AssembledSearch:
    """Turn the caller's statement into the scored, filtered, grouped relevance query."""
    joins = resolve_joins(config)
    score = build_score_expression(columns, words, capabilities)
    relevance = score.labeled()

    statement = query.with_only_columns(*table.columns, relevance)
    statement = apply_joins(statement, joins, table.name)
    statement = statement.having(relevance_filter(score, threshold, capabilities))
    statement = statement.order_by(relevance.desc())

    group_by = group_by_columns(table, columns, joins, capabilities, config.table_columns)
    statement = statement.group_by(*(literal_column(column) for column in group_by))

    return AssembledSearch(
        statement=statement,
        score=score,
        threshold=threshold,
        bindings=register_bindings(score, capabilities),
        group_by=group_by,
        capabilities=capabilities,
    )
