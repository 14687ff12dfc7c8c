"""Multicast broadcast for the bus."""

from hooter.infrastructure.broadcast.subject import Observer, Subject, Subscription, to_observer

__all__ = ["Observer", "Subject", "Subscription", "to_observer"]
