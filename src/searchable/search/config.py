"""Declarative search configuration attached to a searchable entity."""

from collections.abc import Mapping
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from searchable.core.exceptions import SearchConfigurationError

RelevanceWeight = Annotated[float, Field(gt=0, allow_inf_nan=False)]


class SearchConfig(BaseModel):
    """Searchable columns, joins and grouping columns for one entity.

    Example:
        SearchConfig(
            columns={"posts.title": 10, "posts.body": 2, "comments.body": 1},
            joins={"comments": ("posts.id", "comments.post_id")},
        )
    """

    model_config = ConfigDict(frozen=True)

    columns: dict[str, RelevanceWeight] | None = None
    """Column identifier -> relevance weight, in search order. None means every table column."""

    joins: dict[str, list[Any]] = Field(default_factory=dict)
    """Joined table -> (local key, foreign key), applied as LEFT JOINs."""

    table_columns: list[str] | None = None
    """Full column list for dialects that cannot group by primary key alone."""

    @field_validator("columns")
    @classmethod
    def columns_not_empty(cls, value: dict[str, float] | None) -> dict[str, float] | None:
        if value is not None and not value:
            raise ValueError("columns must not be empty when given")
        return value

    @property
    def total_weight(self) -> float:
        """Sum of all configured column weights (0 when columns are not configured)."""
        return sum((self.columns or {}).values())

    @classmethod
    def coerce(cls, value: "SearchConfig | Mapping[str, Any] | None") -> "SearchConfig":
        """Build a config from a mapping (the ``__searchable__`` form), a config or None.

        Raises:
            SearchConfigurationError: If the mapping is not a valid configuration
        """
        if isinstance(value, SearchConfig):
            return value
        if value is None:
            return cls()
        try:
            return cls.model_validate(dict(value))
        except (ValidationError, TypeError, ValueError) as exc:
            raise SearchConfigurationError(f"Invalid search configuration: {exc}") from exc
