"""Event distribution between the engine and its consumers."""
from .event_bus import EventBus

__all__ = ["EventBus"]
