from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic_core import to_json

from .schemas import EventAck, NodeAck
from ..errors import InvalidSignatureError
from ..metrics import Metrics
from ..models import Event, Node
from ..server import MasterServer

router = APIRouter()


def get_server(request: Request) -> MasterServer:
    """Return the coordination server created at startup."""
    return request.app.state.server


def get_metrics(request: Request) -> Metrics:
    return request.app.state.metrics


# Handlers are sync so the stores' locks are taken on worker threads,
# never on the event loop.
@router.post("/event", response_model=EventAck, status_code=201)
def post_event(
    event: Event,
    server: MasterServer = Depends(get_server),
    metrics: Metrics = Depends(get_metrics),
):
    try:
        server.log_event(event)
    except InvalidSignatureError as exc:
        metrics.record_event_rejected("invalid_signature")
        raise HTTPException(400, detail=str(exc))

    metrics.record_event_logged(event.event_type, size_bytes=len(to_json(event.payload)))
    return EventAck(event_id=event.event_id)


@router.get("/events", response_model=List[Event])
def get_events(
    since: datetime = Query(..., description="Exclusive lower bound (RFC 3339)"),
    server: MasterServer = Depends(get_server),
):
    return server.get_events_since(since)


@router.post("/node", response_model=NodeAck, status_code=201)
def register_node(
    node: Node,
    server: MasterServer = Depends(get_server),
    metrics: Metrics = Depends(get_metrics),
):
    server.register_node(node)
    metrics.record_node_registered(node.status.value)
    return NodeAck(node_id=node.node_id)


@router.get("/nodes", response_model=List[Node])
def get_nodes(server: MasterServer = Depends(get_server)):
    return server.get_active_nodes()
