"""Relevance search over a table.

Builds a statement that scores rows by how well the configured columns
match the words of a search text, drops rows scoring at or below a
threshold and orders the rest by descending relevance.

Usage:
    from sqlalchemy import select
    from searchable.search import RelevanceSearch, SearchConfig

    posts_search = RelevanceSearch(
        posts,
        SearchConfig(columns={"posts.title": 10, "posts.body": 2}),
        dialect="postgresql",
    )
    stmt = posts_search.search(select(posts).limit(20), "hello world")
    rows = session.execute(stmt).all()

Every call builds its own bindings and dialect capabilities; nothing is
stored on the ``RelevanceSearch`` instance, so one instance can be shared.
"""

import math
from collections.abc import Mapping
from numbers import Real
from typing import Any

from sqlalchemy import Select, Table
from sqlalchemy.engine import Connection, Dialect, Engine

from searchable.config.settings import Settings, get_settings
from searchable.core.logging import LogContext, get_logger
from searchable.db.dialects import DialectCapabilities, get_capabilities
from searchable.db.introspection import SchemaIntrospector
from searchable.search.assembler import AssembledSearch, apply_joins, assemble_search_query
from searchable.search.config import SearchConfig
from searchable.search.merger import merge_search
from searchable.search.resolver import resolve_columns, resolve_joins
from searchable.search.tokenizer import tokenize
from searchable.utils.exceptions import SearchError

logger = get_logger(__name__)


def default_threshold(columns: Mapping[str, float], settings: Settings | None = None) -> float:
    """Sum of the column weights divided by SEARCH_THRESHOLD_DIVISOR (4 by default)."""
    settings = settings or get_settings()
    return sum(columns.values()) / settings.SEARCH_THRESHOLD_DIVISOR


class RelevanceSearch:
    """Relevance search for one table.

    Attributes:
        table: The entity table being searched
        config: Searchable columns, joins and grouping columns
        dialect: Dialect override (name or SQLAlchemy Dialect)
        bind: Synchronous engine or connection used for dialect detection
            and schema introspection
    """

    def __init__(
        self,
        table: Table,
        config: SearchConfig | Mapping[str, Any] | None = None,
        *,
        dialect: str | Dialect | None = None,
        bind: Engine | Connection | None = None,
        introspector: SchemaIntrospector | None = None,
        settings: Settings | None = None,
    ):
        self.table = table
        self.config = SearchConfig.coerce(config)
        self.dialect = dialect
        self.bind = bind
        self.introspector = introspector or SchemaIntrospector(bind)
        self.settings = settings

    def capabilities(self) -> DialectCapabilities:
        """Resolve the dialect capabilities for a search call."""
        return get_capabilities(self.dialect, bind=self.bind, settings=self.settings)

    def base_query(self, query: Select) -> Select:
        """The caller's statement selecting the table's columns, with joins applied."""
        statement = query.with_only_columns(*self.table.columns)
        return apply_joins(statement, resolve_joins(self.config), self.table.name)

    def assemble(
        self,
        query: Select,
        text: str | None,
        threshold: float | None = None,
    ) -> AssembledSearch | None:
        """Build the relevance query without merging it into ``query``.

        Returns None for empty search text.
        """
        if not text:
            return None

        threshold = self._check_threshold(threshold)
        capabilities = self.capabilities()
        columns = resolve_columns(self.table, self.config, self.introspector)
        words = tokenize(text)
        if threshold is None:
            threshold = default_threshold(columns, self.settings)

        # Pagination and ordering apply once, on the merged statement
        working = query.limit(None).offset(None).order_by(None)
        return assemble_search_query(
            working,
            self.table,
            self.config,
            columns,
            words,
            threshold,
            capabilities,
        )

    def search(
        self,
        query: Select,
        text: str | None,
        threshold: float | None = None,
    ) -> Select:
        """Filter and order ``query`` by relevance to ``text``.

        Args:
            query: Statement selecting from the table (may carry WHERE,
                LIMIT, OFFSET and ORDER BY clauses, which are kept)
            text: Search text; empty text returns the unscored base query
            threshold: Minimum relevance a row must exceed (default: sum of
                weights / 4)

        Returns:
            New statement; ``query`` itself is left untouched
        """
        with LogContext(search_table=self.table.name):
            assembled = self.assemble(query, text, threshold)
            if assembled is None:
                logger.debug("relevance_search_skipped", reason="empty_text")
                return self.base_query(query)

            logger.debug(
                "relevance_query_built",
                dialect=assembled.capabilities.name,
                term_count=len(assembled.score.terms),
                binding_count=len(assembled.bindings),
                threshold=assembled.threshold,
            )
            return merge_search(query, assembled, self.table)

    @staticmethod
    def _check_threshold(threshold: Any) -> float | None:
        if threshold is None:
            return None
        if isinstance(threshold, bool) or not isinstance(threshold, Real):
            raise SearchError(f"Threshold must be a number, got {threshold!r}")
        if not math.isfinite(threshold):
            raise SearchError(f"Threshold must be finite, got {threshold!r}")
        return float(threshold)


def search(
    table: Table,
    query: Select,
    text: str | None,
    threshold: float | None = None,
    **kwargs: Any,
) -> Select:
    """Run a one-off relevance search; ``kwargs`` go to :class:`RelevanceSearch`."""
    return RelevanceSearch(table, **kwargs).search(query, text, threshold)
