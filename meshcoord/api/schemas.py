from pydantic import BaseModel


class EventAck(BaseModel):
    event_id: str
    status: str = "accepted"


class NodeAck(BaseModel):
    node_id: str
    status: str = "registered"
