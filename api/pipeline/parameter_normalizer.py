"""Parameter normalization for dynamic content queries.

Turns the loosely-typed order and filter strings callers send into
structured OrderSpec / Predicate value objects. Parsing never raises:
anything unrecognised is dropped and reported as a diagnostic.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from value_objects import OrderSpec, Predicate, SortDirection

logger = logging.getLogger(__name__)

_QUOTE_CHARS = ('"', "'")
_CONTAINS_PATTERN = re.compile(r'\s*\bContains\b\s*', re.IGNORECASE)


def parse_order(expression: Optional[str]) -> Optional[OrderSpec]:
    """Parse "Field [DESC]" into an OrderSpec.

    Any second token other than DESC (case-insensitive) means ascending.
    Returns None for an empty expression.
    """
    if not expression or not expression.strip():
        return None

    tokens = expression.split()
    direction = SortDirection.ASCENDING
    if len(tokens) > 1 and tokens[1].upper() == "DESC":
        direction = SortDirection.DESCENDING
    return OrderSpec(field=tokens[0], direction=direction)


@dataclass(frozen=True)
class FilterParseResult:
    """Outcome of parsing a filter expression"""
    predicates: tuple = ()
    diagnostic: Optional[str] = None

    @property
    def ignored(self) -> bool:
        return not self.predicates


class FilterParser:
    """Parses a single-clause filter such as Title="Intro" or Body Contains 'x'.

    Operators are tested in fixed precedence: =, >, <, Contains.
    > and < are accepted but emit an Equals predicate on the literal.
    """

    def parse(self, expression: Optional[str]) -> FilterParseResult:
        if not expression or not expression.strip():
            return FilterParseResult()

        try:
            return self._parse(expression)
        except Exception as e:
            logger.error(f"Error applying where condition: {expression}: {e}")
            return self._ignore(expression, f"unparseable filter: {e}")

    def _parse(self, expression: str) -> FilterParseResult:
        if "=" in expression:
            return self._parse_binary(expression, expression.split("="), Predicate.equals)
        if ">" in expression:
            return self._parse_comparison(expression, expression.split(">"))
        if "<" in expression:
            return self._parse_comparison(expression, expression.split("<"))
        if _CONTAINS_PATTERN.search(expression):
            return self._parse_binary(expression, _CONTAINS_PATTERN.split(expression), Predicate.contains)
        return self._ignore(expression, "no recognised operator")

    def _parse_binary(self, expression: str, parts: List[str], make) -> FilterParseResult:
        operands = self._operands(parts)
        if operands is None:
            return self._ignore(expression, f"expected 2 operands, got {len(parts)}")
        field, literal = operands
        return FilterParseResult(predicates=(make(field, literal),))

    def _parse_comparison(self, expression: str, parts: List[str]) -> FilterParseResult:
        """Range operators degrade to equality against the literal"""
        operands = self._operands(parts)
        if operands is None:
            return self._ignore(expression, f"expected 2 operands, got {len(parts)}")
        field, literal = operands
        return FilterParseResult(predicates=(Predicate.equals(field, self._comparison_literal(literal)),))

    def _operands(self, parts: List[str]):
        if len(parts) != 2:
            return None
        field = parts[0].strip()
        if not field:
            return None
        return field, _strip_quotes(parts[1].strip())

    @staticmethod
    def _comparison_literal(literal: str) -> str:
        if _parses_as_date(literal):
            return literal
        try:
            return str(int(literal))
        except ValueError:
            return literal

    @staticmethod
    def _ignore(expression: str, reason: str) -> FilterParseResult:
        diagnostic = f"Filter ignored ({reason}): {expression}"
        logger.warning(diagnostic)
        return FilterParseResult(diagnostic=diagnostic)


def parse_filter(expression: Optional[str]) -> FilterParseResult:
    """Module-level convenience over FilterParser"""
    return FilterParser().parse(expression)


def _strip_quotes(value: str) -> str:
    """Remove one layer of matching surrounding quotes"""
    if len(value) >= 2 and value[0] in _QUOTE_CHARS and value[-1] == value[0]:
        return value[1:-1]
    return value


def _parses_as_date(value: str) -> bool:
    try:
        datetime.fromisoformat(value)
    except ValueError:
        return False
    return True
