"""Compile tenant predicates into SQLAlchemy clauses."""
from sqlalchemy import and_, false, func, not_, or_, select, true
from sqlalchemy.orm import aliased
from sqlalchemy.sql.elements import ColumnElement

from tenant_api.core.enums import TenantEdge
from tenant_api.models.tenant import Tenant
from tenant_api.predicates.tenant import (
    FIELD_NAMES, And, FieldPredicate, HasEdge, Not, Op, Or, Predicate,
)


_OPERATORS = {
    Op.EQ: lambda col, v: col == v,
    Op.NEQ: lambda col, v: col != v,
    Op.IN: lambda col, v: col.in_(v),
    Op.NOT_IN: lambda col, v: col.not_in(v),
    Op.GT: lambda col, v: col > v,
    Op.GTE: lambda col, v: col >= v,
    Op.LT: lambda col, v: col < v,
    Op.LTE: lambda col, v: col <= v,
    Op.CONTAINS: lambda col, v: col.contains(v, autoescape=True),
    Op.HAS_PREFIX: lambda col, v: col.startswith(v, autoescape=True),
    Op.HAS_SUFFIX: lambda col, v: col.endswith(v, autoescape=True),
    Op.EQUAL_FOLD: lambda col, v: func.lower(col) == v.lower(),
    Op.CONTAINS_FOLD: lambda col, v: func.lower(col).contains(v.lower(), autoescape=True),
    Op.IS_NULL: lambda col, v: col.is_(None),
    Op.NOT_NULL: lambda col, v: col.is_not(None),
}


def compile_predicate(predicate: Predicate, entity=Tenant) -> ColumnElement[bool]:
    """Translate `predicate` into a WHERE clause against `entity`.

    `entity` is the Tenant class or an alias of it; edge predicates compile
    to correlated EXISTS subqueries over a fresh alias so that nested edges
    never collide.
    """
    if isinstance(predicate, FieldPredicate):
        if predicate.field not in FIELD_NAMES:
            raise ValueError(f"unknown tenant field {predicate.field!r}")
        column = getattr(entity, predicate.field)
        return _OPERATORS[predicate.op](column, predicate.value)

    if isinstance(predicate, And):
        if not predicate.predicates:
            return true()
        return and_(*(compile_predicate(p, entity) for p in predicate.predicates))

    if isinstance(predicate, Or):
        if not predicate.predicates:
            return false()
        return or_(*(compile_predicate(p, entity) for p in predicate.predicates))

    if isinstance(predicate, Not):
        return not_(compile_predicate(predicate.predicate, entity))

    if isinstance(predicate, HasEdge):
        return _compile_edge(predicate, entity)

    raise TypeError(f"unsupported predicate {predicate!r}")


def _compile_edge(predicate: HasEdge, entity) -> ColumnElement[bool]:
    neighbour = aliased(Tenant)

    if predicate.edge == TenantEdge.PARENT:
        join = neighbour.id == entity.parent_tenant_id
    elif predicate.edge == TenantEdge.CHILDREN:
        join = neighbour.parent_tenant_id == entity.id
    else:
        raise ValueError(f"unknown tenant edge {predicate.edge!r}")

    criteria = [join] + [compile_predicate(p, neighbour) for p in predicate.predicates]
    return select(neighbour.id).where(*criteria).exists()
