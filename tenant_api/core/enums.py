"""Enum definitions for the application."""
from enum import Enum


class EventAction(str, Enum):
    """Kinds of tenant change events."""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class TenantEdge(str, Enum):
    """Relationship edges that predicates can traverse."""
    PARENT = "parent"
    CHILDREN = "children"
