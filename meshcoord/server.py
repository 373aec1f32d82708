"""Coordination facade composing the event log and node registry."""
from datetime import datetime
from typing import List

from .models import Event, Node
from .stores import EventLog, NodeRegistry


class MasterServer:
    """
    Single entry point used by request handlers.

    Each method forwards to exactly one store and returns its result
    unchanged. The server holds no state beyond the two stores, which never
    call each other.
    """

    def __init__(
        self,
        event_log: EventLog | None = None,
        node_registry: NodeRegistry | None = None,
    ):
        """
        Initialize the server with optional stores.

        Args:
            event_log: Event log to use (defaults to a fresh log with the placeholder verifier)
            node_registry: Node registry to use (defaults to an empty registry)
        """
        self._event_log = event_log if event_log is not None else EventLog()
        self._node_registry = node_registry if node_registry is not None else NodeRegistry()

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def node_registry(self) -> NodeRegistry:
        return self._node_registry

    def log_event(self, event: Event) -> None:
        """Append an event; raises InvalidSignatureError on rejection."""
        return self._event_log.add_event(event)

    def get_events_since(self, timestamp: datetime) -> List[Event]:
        return self._event_log.get_events_since(timestamp)

    def register_node(self, node: Node) -> None:
        return self._node_registry.register_node(node)

    def get_active_nodes(self) -> List[Node]:
        return self._node_registry.get_active_nodes()

    def mark_node_inactive(self, node_id: str) -> None:
        return self._node_registry.mark_node_inactive(node_id)
