"""Domain entities for Hooter."""

from hooter.domain.entities.event import Event, RegisteredEvent

__all__ = ["Event", "RegisteredEvent"]
