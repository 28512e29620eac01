"""Tenant filter predicates."""
from tenant_api.predicates.tenant import (
    And, FieldPredicate, HasEdge, Not, Op, Or, Predicate, TenantWhere,
    and_, has_children, has_children_with, has_parent, has_parent_with,
    not_, or_,
)

__all__ = [
    "And", "FieldPredicate", "HasEdge", "Not", "Op", "Or", "Predicate", "TenantWhere",
    "and_", "or_", "not_",
    "has_parent", "has_parent_with", "has_children", "has_children_with",
]
