"""Dialect capabilities for relevance query synthesis.

Backends differ in three ways that matter when building a relevance query:

- whether a computed select alias may be referenced in HAVING
  (MySQL/MariaDB) or the full expression has to be repeated,
- whether a case-insensitive LIKE operator exists (PostgreSQL ``ILIKE``),
- whether rows can be grouped by primary key alone or the full column
  list is required (SQL Server).

The capabilities are resolved once per search call and passed through the
pipeline as a single :class:`DialectCapabilities` value.
"""

from dataclasses import dataclass

from sqlalchemy.engine import Connection, Dialect, Engine

from searchable.config.settings import Settings, get_settings
from searchable.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class DialectCapabilities:
    """What a SQL backend allows when filtering, comparing and grouping."""

    name: str
    supports_alias_in_having: bool = False
    requires_full_column_group_by: bool = False
    like_operator: str = "LIKE"

    @property
    def having_applications(self) -> int:
        """How many times the word bindings are registered (select, then having)."""
        return 1 if self.supports_alias_in_having else 2


GENERIC = DialectCapabilities(name="generic")

DIALECT_CAPABILITIES: dict[str, DialectCapabilities] = {
    "mysql": DialectCapabilities(name="mysql", supports_alias_in_having=True),
    "mariadb": DialectCapabilities(name="mariadb", supports_alias_in_having=True),
    "postgresql": DialectCapabilities(name="postgresql", like_operator="ILIKE"),
    "mssql": DialectCapabilities(name="mssql", requires_full_column_group_by=True),
    "sqlite": DialectCapabilities(name="sqlite"),
    "oracle": DialectCapabilities(name="oracle"),
}

# Driver names used by other database layers
DIALECT_ALIASES: dict[str, str] = {
    "pgsql": "postgresql",
    "postgres": "postgresql",
    "sqlsrv": "mssql",
}


def normalize_dialect_name(name: str) -> str:
    """Map a dialect or driver name to the SQLAlchemy dialect name."""
    # "postgresql+asyncpg" style names carry the driver after the plus
    base = name.strip().lower().split("+", 1)[0]
    return DIALECT_ALIASES.get(base, base)


def resolve_dialect_name(
    dialect: str | Dialect | None = None,
    bind: Engine | Connection | None = None,
    settings: Settings | None = None,
) -> str:
    """Work out which dialect a search is being built for.

    Resolution order: explicit dialect, the bind's dialect, the
    SEARCH_DIALECT setting, the DATABASE_URL backend.
    """
    if isinstance(dialect, Dialect):
        return normalize_dialect_name(dialect.name)
    if dialect:
        return normalize_dialect_name(dialect)
    if bind is not None:
        return normalize_dialect_name(bind.dialect.name)
    settings = settings or get_settings()
    return normalize_dialect_name(settings.get_dialect_name())


def get_capabilities(
    dialect: str | Dialect | None = None,
    bind: Engine | Connection | None = None,
    settings: Settings | None = None,
) -> DialectCapabilities:
    """Get the capability descriptor for a dialect.

    Unknown dialects fall back to the generic strategy (plain LIKE,
    repeated expression in HAVING, primary key grouping) and log a warning
    so mis-detection is visible.
    """
    name = resolve_dialect_name(dialect, bind=bind, settings=settings)
    capabilities = DIALECT_CAPABILITIES.get(name)
    if capabilities is None:
        logger.warning("unknown_search_dialect", dialect=name, fallback=GENERIC.name)
        return GENERIC
    return capabilities
