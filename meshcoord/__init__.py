"""In-memory event log and node registry for ad-hoc network coordination."""

__version__ = "0.1.0"
