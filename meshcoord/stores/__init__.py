"""In-memory stores backing the coordination server."""
from .event_log import EventLog
from .node_registry import NodeRegistry

__all__ = [
    "EventLog",
    "NodeRegistry",
]
