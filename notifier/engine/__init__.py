"""Cœur du registre d'abonnements (capacités, listeners, erreurs)."""

from .constants import DEFAULT_CHANNEL, ERROR_POLICIES, ErrorPolicy
from .errors import (
    InvalidListenerError,
    ListenerFailure,
    ListenerInvocationError,
    NotifierError,
)
from .listeners import CleanupAware, SelfReleasingListener
from .registry import SubscriptionRegistry
from .release import ReleaseCapability, SubscriptionState

__all__ = [
    "DEFAULT_CHANNEL",
    "ERROR_POLICIES",
    "ErrorPolicy",
    "NotifierError",
    "InvalidListenerError",
    "ListenerFailure",
    "ListenerInvocationError",
    "CleanupAware",
    "SelfReleasingListener",
    "SubscriptionRegistry",
    "ReleaseCapability",
    "SubscriptionState",
]
