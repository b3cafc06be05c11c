"""Resolve searchable columns and joins for an entity."""

from sqlalchemy import Table

from searchable.core.logging import get_logger
from searchable.db.introspection import SchemaIntrospector
from searchable.search.config import SearchConfig

logger = get_logger(__name__)

DEFAULT_SCHEMA_WEIGHT = 1.0


def resolve_columns(
    table: Table,
    config: SearchConfig,
    introspector: SchemaIntrospector | None = None,
) -> dict[str, float]:
    """Get the column -> weight mapping to score against.

    Falls back to every column of the table (weight 1, schema order) when
    no columns are configured.

    Raises:
        SchemaIntrospectionError: If the fallback cannot read the schema
    """
    if config.columns is not None:
        return dict(config.columns)

    introspector = introspector or SchemaIntrospector()
    names = introspector.list_columns(table)
    logger.info("search_columns_from_schema", table=table.name, column_count=len(names))
    return {name: DEFAULT_SCHEMA_WEIGHT for name in names}


def resolve_joins(config: SearchConfig) -> dict[str, list]:
    """Get the configured joins, joined table -> key pair."""
    return dict(config.joins)
