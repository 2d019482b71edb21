"""Immutable filter descriptors over a collection."""

from __future__ import annotations

import json
import operator
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Tuple

from dummydb.models import FILTER_OPS, WhereClause
from dummydb.store.reference import CollectionReference

Constraint = Callable[["Query"], "Query"]

_MISSING = object()

_ORDERING = {
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


def _strict_equals(left: Any, right: Any) -> bool:
    # bool is an int subclass; keep True and 1 apart
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    return left == right


def _evaluate(clause: WhereClause, data: Dict[str, Any]) -> bool:
    field_value = data.get(clause.field, _MISSING)
    if clause.op == "==":
        return field_value is not _MISSING and _strict_equals(field_value, clause.value)
    if clause.op == "!=":
        return field_value is _MISSING or not _strict_equals(field_value, clause.value)

    compare = _ORDERING.get(clause.op)
    if compare is None or field_value is _MISSING or field_value is None:
        return False
    try:
        return bool(compare(field_value, clause.value))
    except TypeError:
        return False


def _check_op(op: str) -> None:
    if op not in FILTER_OPS:
        raise ValueError(f"Unsupported filter operator {op!r}; expected one of {FILTER_OPS}")


@dataclass(frozen=True)
class Query:
    """Collection plus an ordered tuple of clauses, all of which must hold."""

    collection: CollectionReference
    filters: Tuple[WhereClause, ...] = ()

    def where(self, field: str, op: str, value: Any) -> Query:
        _check_op(op)
        return Query(self.collection, self.filters + (WhereClause(field, op, value),))

    def matches(self, data: Dict[str, Any] | None) -> bool:
        if data is None:
            return False
        return all(_evaluate(clause, data) for clause in self.filters)


def where(field: str, op: str, value: Any) -> Constraint:
    """Constraint appending ``field op value`` to a query."""
    _check_op(op)

    def apply(query: Query) -> Query:
        return query.where(field, op, value)

    return apply


def query(collection: CollectionReference, *constraints: Constraint) -> Query:
    q = Query(collection)
    for constraint in constraints:
        q = constraint(q)
    return q


_CLAUSE_PATTERN = re.compile(
    r"^\s*(?P<field>[^\s=!<>]+)\s*(?P<op>==|!=|<=|>=|<|>)\s*(?P<value>.*?)\s*$"
)


def parse_clause(expression: str) -> WhereClause:
    """Parse ``"field op value"``; the value is read as JSON, else kept as text."""
    match = _CLAUSE_PATTERN.match(expression)
    if match is None:
        raise ValueError(f"Invalid filter expression: {expression!r}")
    raw_value = match.group("value")
    try:
        value = json.loads(raw_value)
    except ValueError:
        value = raw_value
    return WhereClause(match.group("field"), match.group("op"), value)
