"""Composable filter predicates over the tenant entity.

Predicates are plain immutable values. Building one never touches the
database; the repository compiles them into SQL when a query runs::

    from tenant_api.predicates import TenantWhere, and_, has_children

    pred = and_(TenantWhere.name.contains("acme"), has_children())

Combinators return new values and never modify their arguments. The
``&``, ``|`` and ``~`` operators are shorthands for ``and_``, ``or_`` and
``not_``.

An empty ``and_()`` matches every tenant; an empty ``or_()`` matches none.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple

from tenant_api.core.enums import TenantEdge


class Op(str, Enum):
    """Field comparison operators."""
    EQ = "eq"
    NEQ = "neq"
    IN = "in"
    NOT_IN = "not_in"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    CONTAINS = "contains"
    HAS_PREFIX = "has_prefix"
    HAS_SUFFIX = "has_suffix"
    EQUAL_FOLD = "equal_fold"
    CONTAINS_FOLD = "contains_fold"
    IS_NULL = "is_null"
    NOT_NULL = "not_null"


class Predicate:
    """Base class of every predicate variant."""

    __slots__ = ()

    def __and__(self, other: "Predicate") -> "And":
        return and_(self, other)

    def __or__(self, other: "Predicate") -> "Or":
        return or_(self, other)

    def __invert__(self) -> "Not":
        return not_(self)


@dataclass(frozen=True)
class FieldPredicate(Predicate):
    field: str
    op: Op
    value: Any = None


@dataclass(frozen=True)
class And(Predicate):
    predicates: Tuple[Predicate, ...] = ()


@dataclass(frozen=True)
class Or(Predicate):
    predicates: Tuple[Predicate, ...] = ()


@dataclass(frozen=True)
class Not(Predicate):
    predicate: Predicate


@dataclass(frozen=True)
class HasEdge(Predicate):
    """Matches tenants with at least one neighbour on `edge`.

    When `predicates` is non-empty the neighbour must satisfy all of them.
    """
    edge: TenantEdge
    predicates: Tuple[Predicate, ...] = ()


def _check_predicates(predicates) -> Tuple[Predicate, ...]:
    for p in predicates:
        if not isinstance(p, Predicate):
            raise TypeError(f"expected a Predicate, got {type(p).__name__}")
    return tuple(predicates)


class Field:
    """Comparison operators shared by every scalar field."""

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

    def _pred(self, op: Op, value: Any = None) -> FieldPredicate:
        return FieldPredicate(self.name, op, value)

    def eq(self, value) -> FieldPredicate:
        return self._pred(Op.EQ, value)

    def neq(self, value) -> FieldPredicate:
        return self._pred(Op.NEQ, value)

    def in_(self, *values) -> FieldPredicate:
        return self._pred(Op.IN, tuple(values))

    def not_in(self, *values) -> FieldPredicate:
        return self._pred(Op.NOT_IN, tuple(values))

    def gt(self, value) -> FieldPredicate:
        return self._pred(Op.GT, value)

    def gte(self, value) -> FieldPredicate:
        return self._pred(Op.GTE, value)

    def lt(self, value) -> FieldPredicate:
        return self._pred(Op.LT, value)

    def lte(self, value) -> FieldPredicate:
        return self._pred(Op.LTE, value)


class NullableMixin:

    def is_null(self) -> FieldPredicate:
        return self._pred(Op.IS_NULL)

    def not_null(self) -> FieldPredicate:
        return self._pred(Op.NOT_NULL)


class StringField(Field):
    """String fields also support substring and case-folded matching."""

    def contains(self, value: str) -> FieldPredicate:
        return self._pred(Op.CONTAINS, str(value))

    def has_prefix(self, value: str) -> FieldPredicate:
        return self._pred(Op.HAS_PREFIX, str(value))

    def has_suffix(self, value: str) -> FieldPredicate:
        return self._pred(Op.HAS_SUFFIX, str(value))

    def equal_fold(self, value: str) -> FieldPredicate:
        return self._pred(Op.EQUAL_FOLD, str(value))

    def contains_fold(self, value: str) -> FieldPredicate:
        return self._pred(Op.CONTAINS_FOLD, str(value))


class NullableStringField(NullableMixin, StringField):
    pass


class NullableField(NullableMixin, Field):
    pass


class TenantWhere:
    """Field handles for building tenant predicates."""
    id = Field("id")
    created_at = Field("created_at")
    updated_at = Field("updated_at")
    name = StringField("name")
    description = NullableStringField("description")
    parent_tenant_id = NullableStringField("parent_tenant_id")
    deleted_at = NullableField("deleted_at")


FIELD_NAMES = frozenset(
    f.name for f in vars(TenantWhere).values() if isinstance(f, Field)
)


def has_parent() -> HasEdge:
    return HasEdge(TenantEdge.PARENT)


def has_parent_with(*predicates: Predicate) -> HasEdge:
    return HasEdge(TenantEdge.PARENT, _check_predicates(predicates))


def has_children() -> HasEdge:
    return HasEdge(TenantEdge.CHILDREN)


def has_children_with(*predicates: Predicate) -> HasEdge:
    return HasEdge(TenantEdge.CHILDREN, _check_predicates(predicates))


def and_(*predicates: Predicate) -> And:
    return And(_check_predicates(predicates))


def or_(*predicates: Predicate) -> Or:
    return Or(_check_predicates(predicates))


def not_(predicate: Predicate) -> Not:
    _check_predicates((predicate,))
    return Not(predicate)
