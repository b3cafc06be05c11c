"""Declarative model mixin exposing relevance search."""

from collections.abc import Mapping, Sequence
from typing import Any, ClassVar

from sqlalchemy import Select, select
from sqlalchemy.engine import Connection, Dialect, Engine
from sqlalchemy.sql.base import ExecutableOption
from sqlalchemy.sql.selectable import ExecutableReturnsRows

from searchable.search.config import SearchConfig
from searchable.search.relevance import RelevanceSearch


class SearchableMixin:
    """Adds ``search`` to a declarative model.

    Configure the searchable columns with ``__searchable__``:

        class Post(Base, SearchableMixin):
            __tablename__ = "posts"
            __searchable__ = {
                "columns": {"posts.title": 10, "posts.body": 2},
                "joins": {"comments": ("posts.id", "comments.post_id")},
            }

        stmt = Post.search(select(Post.__table__).limit(10), "hello world")
        posts = session.scalars(Post.search_entities(None, "hello")).all()

    Without ``__searchable__`` every column of the table is searched with
    weight 1.
    """

    __searchable__: ClassVar[SearchConfig | Mapping[str, Any] | None] = None

    @classmethod
    def searchable_config(cls) -> SearchConfig:
        """The model's search configuration."""
        return SearchConfig.coerce(cls.__searchable__)

    @classmethod
    def relevance_search(
        cls,
        *,
        dialect: str | Dialect | None = None,
        bind: Engine | Connection | None = None,
    ) -> RelevanceSearch:
        """A RelevanceSearch over the model's table."""
        return RelevanceSearch(
            cls.__table__,  # type: ignore[attr-defined]
            cls.searchable_config(),
            dialect=dialect,
            bind=bind,
        )

    @classmethod
    def search(
        cls,
        query: Select | None,
        text: str | None,
        threshold: float | None = None,
        *,
        dialect: str | Dialect | None = None,
        bind: Engine | Connection | None = None,
    ) -> Select:
        """Relevance-filtered statement over the model's table.

        Args:
            query: Core statement against the table; None selects the whole table
            text: Search text
            threshold: Minimum relevance (default: sum of weights / 4)
            dialect: Dialect override
            bind: Engine or connection for dialect detection and introspection
        """
        if query is None:
            query = select(cls.__table__)  # type: ignore[attr-defined]
        return cls.relevance_search(dialect=dialect, bind=bind).search(query, text, threshold)

    @classmethod
    def search_entities(
        cls,
        query: Select | None,
        text: str | None,
        threshold: float | None = None,
        *,
        options: Sequence[ExecutableOption] = (),
        **kwargs: Any,
    ) -> ExecutableReturnsRows:
        """Like :meth:`search`, but loads model instances.

        Args:
            options: ORM loader options (e.g. ``selectinload(Post.comments)``)
            **kwargs: ``dialect`` / ``bind``, as for :meth:`search`
        """
        statement = cls.search(query, text, threshold, **kwargs)
        return select(cls).options(*options).from_statement(statement)
