"""Searchable: weighted relevance search synthesized into SQLAlchemy statements."""

from searchable.db.mixins import SearchableMixin
from searchable.search import RelevanceSearch, SearchConfig, search, tokenize

__version__ = "0.1.0"

__all__ = [
    "RelevanceSearch",
    "SearchConfig",
    "SearchableMixin",
    "search",
    "tokenize",
]
