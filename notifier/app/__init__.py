"""Façades pour le code hôte (`notifier.app`)."""

from .event_bus import Notifier
from .subscriptions import SubscriptionGroup

__all__ = [
    "Notifier",
    "SubscriptionGroup",
]
