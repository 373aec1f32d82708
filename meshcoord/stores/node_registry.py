"""Last-writer-wins registry of node liveness."""
from threading import Lock
from typing import Dict, List

import structlog

from ..models import Node, NodeStatus

log = structlog.get_logger()


class NodeRegistry:
    """
    In-memory registry keyed by node id.

    Registering a known id replaces the stored node outright; there is no
    merge and no check that ``last_active`` moves forward.
    """

    def __init__(self):
        self._nodes: Dict[str, Node] = {}
        self._lock = Lock()

    def register_node(self, node: Node) -> None:
        """Insert or overwrite the node stored under ``node.node_id``."""
        stored = node.model_copy(deep=True)
        with self._lock:
            replaced = stored.node_id in self._nodes
            self._nodes[stored.node_id] = stored

        log.info(
            "node.registered",
            node_id=stored.node_id,
            status=stored.status.value,
            replaced=replaced,
        )

    def get_active_nodes(self) -> List[Node]:
        """Return copies of every node whose status is Active, in no particular order."""
        with self._lock:
            active = [n for n in self._nodes.values() if n.is_active]
        return [n.model_copy(deep=True) for n in active]

    def mark_node_inactive(self, node_id: str) -> None:
        """
        Flip a registered node to Inactive.

        Unknown ids are ignored and no entry is created for them.
        """
        with self._lock:
            node = self._nodes.get(node_id)
            if node is None:
                found = False
            else:
                self._nodes[node_id] = node.model_copy(update={"status": NodeStatus.INACTIVE})
                found = True

        if found:
            log.info("node.marked_inactive", node_id=node_id)
        else:
            log.debug("node.mark_inactive_ignored", node_id=node_id, reason="unknown_node")

    def count(self) -> int:
        """Get total number of registered nodes."""
        with self._lock:
            return len(self._nodes)

    def count_active(self) -> int:
        """Get number of nodes currently marked Active."""
        with self._lock:
            return sum(1 for n in self._nodes.values() if n.is_active)
