"""Shared fixtures for coordination service tests."""
from datetime import datetime, timezone
import itertools

import pytest
from fastapi.testclient import TestClient

from meshcoord.config import Settings
from meshcoord.main import create_app
from meshcoord.models import Event, Node, NodeStatus
from meshcoord.server import MasterServer

_ids = itertools.count(1)


def at(seconds: float) -> datetime:
    """UTC instant ``seconds`` after the epoch."""
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


@pytest.fixture
def make_event():
    def _make(ts: float = 100, **overrides) -> Event:
        fields = {
            "event_id": f"evt-{next(_ids)}",
            "timestamp": at(ts),
            "origin_id": "node-1",
            "event_type": "data-update",
            "payload": {"reading": 42},
            "signature": "sig",
        }
        fields.update(overrides)
        return Event(**fields)

    return _make


@pytest.fixture
def make_node():
    def _make(node_id: str = "n1", status: NodeStatus = NodeStatus.ACTIVE, ts: float = 100) -> Node:
        return Node(node_id=node_id, last_active=at(ts), status=status)

    return _make


@pytest.fixture
def server():
    return MasterServer()


@pytest.fixture
def settings():
    return Settings(MAX_EVENT_SIZE=4096, LOG_JSON=False)


@pytest.fixture
def app(server, settings):
    return create_app(server=server, settings=settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
