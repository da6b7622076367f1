"""Capacité de désinscription et enregistrement interne d'un abonnement.

Une `ReleaseCapability` est liée à un unique `Subscription` au moment où elle
est émise. Elle ne désigne donc pas la paire (canal, listener) en général :
une capacité périmée ne peut pas retirer une ré-inscription ultérieure du
même listener.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Hashable

if TYPE_CHECKING:  # pragma: no cover - import circulaire évité à l'exécution
    from notifier.engine.registry import SubscriptionRegistry


class SubscriptionState(Enum):
    """Cycle de vie d'un abonnement."""

    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    RELEASED = "RELEASED"


@dataclass(eq=False)
class Subscription:
    """Entrée du registre pour un listener sur un canal.

    `PENDING` ne dure que pendant l'appel du hook de nettoyage dans
    `register()` ; un abonnement en attente n'est jamais notifié.
    """

    subscription_id: int
    channel: Hashable
    listener: Callable[..., Any]
    once: bool = False
    state: SubscriptionState = field(default=SubscriptionState.PENDING)
    capability: "ReleaseCapability | None" = field(default=None, repr=False)

    @property
    def is_active(self) -> bool:
        return self.state is SubscriptionState.ACTIVE

    @property
    def is_released(self) -> bool:
        return self.state is SubscriptionState.RELEASED


class ReleaseCapability:
    """Jeton à usage unique qui termine un abonnement.

    L'appel (ou `release()`) retire l'abonnement du registre s'il y figure
    encore ; les appels suivants sont sans effet. L'appel est sûr depuis
    n'importe où, y compris depuis le listener lui-même pendant une diffusion.
    """

    __slots__ = ("_registry", "_subscription")

    def __init__(self, registry: "SubscriptionRegistry", subscription: Subscription) -> None:
        self._registry = registry
        self._subscription = subscription

    def __call__(self) -> None:
        self._registry._release_subscription(self._subscription)

    def release(self) -> None:
        """Alias explicite de l'appel direct."""

        self()

    @property
    def channel(self) -> Hashable:
        return self._subscription.channel

    @property
    def listener(self) -> Callable[..., Any]:
        return self._subscription.listener

    @property
    def released(self) -> bool:
        """Vrai dès que l'abonnement visé est terminé (quel que soit le moyen)."""

        return self._subscription.is_released

    def __repr__(self) -> str:
        state = self._subscription.state.value.lower()
        return (
            f"<ReleaseCapability #{self._subscription.subscription_id} "
            f"channel={self._subscription.channel!r} {state}>"
        )


__all__ = ["SubscriptionState", "Subscription", "ReleaseCapability"]
