"""Pluggable signature verification for inbound events."""
from abc import ABC, abstractmethod
from typing import Callable

from .models import Event


class SignatureVerifier(ABC):
    """
    Interface deciding whether an event's signature is acceptable.

    The event log consults its verifier before every append. Replacing the
    verifier changes the acceptance policy without touching the log's locking.
    """

    @abstractmethod
    def verify(self, event: Event) -> bool:
        """
        Check the event's signature.

        Args:
            event: The event submitted for logging

        Returns:
            True if the event may be appended, False to reject it
        """
        pass


class AcceptAllVerifier(SignatureVerifier):
    """Placeholder verifier that treats every signature as valid."""

    def verify(self, event: Event) -> bool:
        return True


class PredicateVerifier(SignatureVerifier):
    """Adapts a plain callable into a verifier."""

    def __init__(self, predicate: Callable[[Event], bool]):
        self._predicate = predicate

    def verify(self, event: Event) -> bool:
        return bool(self._predicate(event))
