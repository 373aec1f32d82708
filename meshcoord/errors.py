"""Exceptions raised by the coordination core."""


class CoordinationError(Exception):
    """Base exception for coordination core failures"""
    pass


class InvalidSignatureError(CoordinationError):
    """Raised when an event fails signature verification and is not logged"""

    def __init__(self, event_id: str, message: str = "Invalid event signature"):
        super().__init__(message)
        self.event_id = event_id
