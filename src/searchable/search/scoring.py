"""Relevance score expression builder.

Every (column, word) pair is compared three times against the lower-cased
column value, each comparison carrying a multiple of the column weight:

    exact       LOWER(column) LIKE 'word'      weight * 15
    prefix      LOWER(column) LIKE 'word%'     weight * 5
    substring   LOWER(column) LIKE '%word%'    weight * 1

Each comparison becomes ``CASE WHEN ... THEN <weight> ELSE 0 END`` and all of
them are added together into a single ``relevance`` expression. The word
values are bound parameters, emitted column by column, word by word,
strength by strength, which is also the order their placeholders appear in
the rendered SQL.
"""

import functools
import operator
from dataclasses import dataclass, field

from sqlalchemy import ColumnElement, Float, bindparam, case, func, literal_column
from sqlalchemy.sql.elements import Label

from searchable.db.dialects import DialectCapabilities

RELEVANCE_LABEL = "relevance"


@dataclass(frozen=True)
class MatchStrength:
    """A wildcard shape applied to a word and the multiplier it earns."""

    name: str
    multiplier: int
    prefix: str = ""
    suffix: str = ""

    def decorate(self, word: str) -> str:
        return f"{self.prefix}{word}{self.suffix}"


EXACT = MatchStrength("exact", 15)
PREFIX = MatchStrength("prefix", 5, suffix="%")
SUBSTRING = MatchStrength("substring", 1, prefix="%", suffix="%")

MATCH_STRENGTHS: tuple[MatchStrength, ...] = (EXACT, PREFIX, SUBSTRING)


def format_number(value: float) -> str:
    """Render a weight or threshold as an SQL numeric literal."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def numeric_literal(value: float) -> ColumnElement:
    """Inline numeric literal (never a bound parameter)."""
    return literal_column(format_number(value), Float())


@dataclass
class ScoreTerm:
    """One weighted comparison for a (column, word, strength) triple."""

    column: str
    word: str
    strength: MatchStrength
    weight: float
    binding: str
    expression: ColumnElement


@dataclass
class ScoreExpression:
    """All score terms of a search, in emission order."""

    terms: list[ScoreTerm] = field(default_factory=list)

    @property
    def bindings(self) -> list[str]:
        """Bound word values in placeholder order."""
        return [term.binding for term in self.terms]

    @property
    def expression(self) -> ColumnElement:
        """The terms added together."""
        if not self.terms:
            return numeric_literal(0)
        return functools.reduce(operator.add, (term.expression for term in self.terms))

    def labeled(self) -> Label:
        """The score as the ``relevance`` select item."""
        return self.expression.label(RELEVANCE_LABEL)


def case_compare(column: str, like_operator: str, weight: float, binding: str) -> ColumnElement:
    """Build ``CASE WHEN LOWER(column) <op> :binding THEN weight ELSE 0 END``."""
    comparison = func.lower(literal_column(column)).op(like_operator, is_comparison=True)(
        bindparam(None, binding, unique=True)
    )
    return case((comparison, numeric_literal(weight)), else_=numeric_literal(0))


def build_score_terms(
    column: str,
    relevance: float,
    words: list[str],
    capabilities: DialectCapabilities,
) -> list[ScoreTerm]:
    """Build the score terms of one column, word by word."""
    terms = []
    for word in words:
        for strength in MATCH_STRENGTHS:
            weight = relevance * strength.multiplier
            binding = strength.decorate(word)
            terms.append(
                ScoreTerm(
                    column=column,
                    word=word,
                    strength=strength,
                    weight=weight,
                    binding=binding,
                    expression=case_compare(column, capabilities.like_operator, weight, binding),
                )
            )
    return terms


def build_score_expression(
    columns: dict[str, float],
    words: list[str],
    capabilities: DialectCapabilities,
) -> ScoreExpression:
    """Build the additive relevance expression for all columns and words."""
    score = ScoreExpression()
    for column, relevance in columns.items():
        score.terms.extend(build_score_terms(column, relevance, words, capabilities))
    return score
