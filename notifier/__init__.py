"""Publication/abonnement où chaque abonné contrôle sa propre désinscription."""

from notifier.app import Notifier, SubscriptionGroup
from notifier.engine import (
    DEFAULT_CHANNEL,
    CleanupAware,
    InvalidListenerError,
    ListenerFailure,
    ListenerInvocationError,
    NotifierError,
    ReleaseCapability,
    SelfReleasingListener,
    SubscriptionRegistry,
    SubscriptionState,
)

__all__ = [
    "DEFAULT_CHANNEL",
    "Notifier",
    "SubscriptionGroup",
    "SubscriptionRegistry",
    "ReleaseCapability",
    "SubscriptionState",
    "CleanupAware",
    "SelfReleasingListener",
    "NotifierError",
    "InvalidListenerError",
    "ListenerFailure",
    "ListenerInvocationError",
]
