"""Core exceptions for relevance search configuration."""

from collections.abc import Sequence
from typing import Any

from searchable.utils.exceptions import ConfigurationError


class SearchConfigurationError(ConfigurationError):
    """Raised when a searchable entity is configured in a way the search cannot use.

    Attributes:
        table: Name of the entity table the configuration belongs to (if known)
    """

    def __init__(self, message: str, table: str | None = None):
        super().__init__(message)
        self.table = table

    def __str__(self) -> str:
        if self.table:
            return f"SearchConfigurationError({self.table}): {self.args[0]}"
        return f"SearchConfigurationError: {self.args[0]}"


class JoinConfigurationError(SearchConfigurationError):
    """Raised when a configured join is not a (local key, foreign key) pair.

    Attributes:
        join_table: The joined table whose entry is malformed
        keys: The value found in the join configuration
    """

    def __init__(self, join_table: str, keys: Any, table: str | None = None):
        super().__init__(
            f"Join on {join_table!r} needs exactly two keys, got {keys!r}",
            table=table,
        )
        self.join_table = join_table
        self.keys = keys


class SchemaIntrospectionError(SearchConfigurationError):
    """Raised when the column list of a table cannot be read from the schema.

    Attributes:
        columns: Columns returned by the introspector (empty on failure)
    """

    def __init__(self, table: str, columns: Sequence[str] = ()):
        super().__init__(f"Could not list searchable columns for table {table!r}", table=table)
        self.columns = list(columns)
