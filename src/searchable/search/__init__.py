"""Relevance search: weighted substring matching synthesized into SQL.

Key Components:
    - SearchConfig: Searchable columns, weights, joins and grouping columns
    - RelevanceSearch: Builds and merges the relevance query for a table
    - tokenize: Lower-cases and splits search text into words
    - build_score_expression: Weighted CASE terms added into one score
    - assemble_search_query: Score column, HAVING filter, ordering, grouping
    - merge_search: Splices the relevance query into the caller's statement
"""

from searchable.search.assembler import (
    AssembledSearch,
    SearchBindings,
    apply_joins,
    assemble_search_query,
    group_by_columns,
)
from searchable.search.config import SearchConfig
from searchable.search.merger import merge_search
from searchable.search.relevance import RelevanceSearch, default_threshold, search
from searchable.search.resolver import resolve_columns, resolve_joins
from searchable.search.scoring import (
    MATCH_STRENGTHS,
    RELEVANCE_LABEL,
    MatchStrength,
    ScoreExpression,
    ScoreTerm,
    build_score_expression,
)
from searchable.search.tokenizer import tokenize

__all__ = [
    "AssembledSearch",
    "MATCH_STRENGTHS",
    "MatchStrength",
    "RELEVANCE_LABEL",
    "RelevanceSearch",
    "ScoreExpression",
    "ScoreTerm",
    "SearchBindings",
    "SearchConfig",
    "apply_joins",
    "assemble_search_query",
    "build_score_expression",
    "default_threshold",
    "group_by_columns",
    "merge_search",
    "resolve_columns",
    "resolve_joins",
    "search",
    "tokenize",
]
