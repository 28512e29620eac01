"""Tenant change events."""
from tenant_api.events.messages import ChangeMessage
from tenant_api.events.publisher import (
    EventPublisher, HTTPEventPublisher, LoggingEventPublisher, build_event_publisher,
)

__all__ = [
    "ChangeMessage",
    "EventPublisher", "HTTPEventPublisher", "LoggingEventPublisher",
    "build_event_publisher",
]
