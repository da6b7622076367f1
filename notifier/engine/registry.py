"""Registre d'abonnements multi-canal.

Le registre possède, pour chaque canal, l'ensemble ordonné des abonnements
actifs. Il émet une `ReleaseCapability` par inscription et garantit :

- unicité par (canal, identité du listener) : `id()`, jamais `==`
- ordre d'insertion lors des notifications
- sémantique d'instantané : une diffusion ne voit que les abonnements actifs
  au moment où elle commence, et saute ceux retirés avant leur tour
- désinscription idempotente, sûre pendant une diffusion

Les mutations se font sous un `RLock` ; les listeners sont appelés hors du
verrou, ce qui autorise un listener à rappeler le registre.
"""

from __future__ import annotations

import itertools
import logging
import threading
from typing import Any, Dict, Hashable, List, Optional, Tuple

from notifier.engine.constants import DEFAULT_ERROR_POLICY, ERROR_POLICIES, ErrorPolicy
from notifier.engine.errors import (
    InvalidListenerError,
    ListenerFailure,
    ListenerInvocationError,
)
from notifier.engine.listeners import CleanupHook, Listener, resolve_cleanup_hook
from notifier.engine.release import ReleaseCapability, Subscription, SubscriptionState

logger = logging.getLogger(__name__)

_ALL_CHANNELS = object()


class SubscriptionRegistry:
    """Publie des notifications aux listeners enregistrés par canal.

    Politique d'erreur (`error_policy`) :
    - "propagate" (défaut) : la première exception d'un listener remonte telle
      quelle et les listeners suivants de cette diffusion sont ignorés.
    - "isolate" : tous les listeners de l'instantané sont appelés ; les échecs
      sont agrégés dans une `ListenerInvocationError` levée en fin de diffusion.
    Dans les deux cas le registre reste cohérent.
    """

    __slots__ = ("_channels", "_lock", "_ids", "_error_policy")

    def __init__(self, *, error_policy: ErrorPolicy = DEFAULT_ERROR_POLICY) -> None:
        if error_policy not in ERROR_POLICIES:
            raise ValueError(
                f"error_policy doit valoir {' ou '.join(map(repr, ERROR_POLICIES))} "
                f"(reçu: {error_policy!r})"
            )
        self._channels: Dict[Hashable, Dict[int, Subscription]] = {}
        self._lock = threading.RLock()
        self._ids = itertools.count(1)
        self._error_policy: ErrorPolicy = error_policy

    @property
    def error_policy(self) -> ErrorPolicy:
        return self._error_policy

    # ------------------------------------------------------------------ inscription
    def register(
        self,
        channel: Hashable,
        listener: Listener,
        *,
        once: bool = False,
        on_cleanup: Optional[CleanupHook] = None,
    ) -> ReleaseCapability:
        """Enregistre `listener` sur `channel` et retourne sa capacité de désinscription.

        Si le listener est déjà actif sur ce canal, la capacité existante est
        retournée et rien n'est dupliqué. Le hook de nettoyage (`on_cleanup`
        explicite, sinon celui d'un listener `CleanupAware`) est appelé une
        seule fois, avant le retour et avant toute notification possible.
        """

        if not callable(listener):
            raise InvalidListenerError(listener)
        if on_cleanup is not None and not callable(on_cleanup):
            raise InvalidListenerError(on_cleanup, role="hook de nettoyage")

        hook = on_cleanup if on_cleanup is not None else resolve_cleanup_hook(listener)
        key = id(listener)

        with self._lock:
            existing = self._channels.get(channel, {}).get(key)
            if existing is not None and existing.capability is not None:
                return existing.capability

            subscription = Subscription(
                subscription_id=next(self._ids),
                channel=channel,
                listener=listener,
                once=once,
            )
            capability = ReleaseCapability(self, subscription)
            subscription.capability = capability
            self._channels.setdefault(channel, {})[key] = subscription

        if hook is not None:
            try:
                hook(capability)
            except Exception:
                # Hook en échec : l'inscription n'a jamais eu lieu.
                self._release_subscription(subscription)
                raise

        with self._lock:
            if subscription.state is SubscriptionState.PENDING:
                subscription.state = SubscriptionState.ACTIVE

        logger.debug(
            "Abonnement #%d enregistré sur %r (%s)",
            subscription.subscription_id,
            channel,
            subscription.state.value,
        )
        return capability

    # ------------------------------------------------------------------ désinscription
    def remove_listener(self, channel: Hashable, listener: Listener) -> None:
        """Retire `listener` de `channel` ; sans effet s'il n'y est pas."""

        with self._lock:
            subscription = self._channels.get(channel, {}).get(id(listener))
            if subscription is not None:
                self._release_subscription(subscription)

    def clear(self, channel: Hashable = _ALL_CHANNELS) -> None:
        """Termine tous les abonnements d'un canal, ou de tous les canaux."""

        with self._lock:
            if channel is _ALL_CHANNELS:
                targets = [
                    subscription
                    for subscriptions in self._channels.values()
                    for subscription in subscriptions.values()
                ]
            else:
                targets = list(self._channels.get(channel, {}).values())
            for subscription in targets:
                self._release_subscription(subscription)

        logger.debug("%d abonnement(s) retiré(s) par clear()", len(targets))

    def _release_subscription(self, subscription: Subscription) -> None:
        """Transition terminale vers RELEASED (idempotente)."""

        with self._lock:
            if subscription.is_released:
                return
            subscription.state = SubscriptionState.RELEASED
            subscriptions = self._channels.get(subscription.channel)
            key = id(subscription.listener)
            if subscriptions is not None and subscriptions.get(key) is subscription:
                del subscriptions[key]
                if not subscriptions:
                    del self._channels[subscription.channel]

        logger.debug(
            "Abonnement #%d retiré de %r",
            subscription.subscription_id,
            subscription.channel,
        )

    # ------------------------------------------------------------------ diffusion
    def notify(self, channel: Hashable, *args: Any, **kwargs: Any) -> None:
        """Appelle chaque listener actif au début de la diffusion, dans l'ordre."""

        with self._lock:
            snapshot = tuple(
                subscription
                for subscription in self._channels.get(channel, {}).values()
                if subscription.is_active
            )

        failures: List[ListenerFailure] = []
        for subscription in snapshot:
            if not self._claim(subscription):
                continue
            try:
                subscription.listener(*args, **kwargs)
            except Exception as exc:
                if self._error_policy == "propagate":
                    raise
                logger.warning(
                    "Listener %r en échec sur %r: %s", subscription.listener, channel, exc
                )
                failures.append(
                    ListenerFailure(channel=channel, listener=subscription.listener, error=exc)
                )

        if failures:
            raise ListenerInvocationError(channel, tuple(failures)) from failures[0].error

    def _claim(self, subscription: Subscription) -> bool:
        """Vérifie qu'un abonnement de l'instantané doit encore être appelé."""

        with self._lock:
            if not subscription.is_active:
                return False
            if subscription.once:
                self._release_subscription(subscription)
            return True

    # ------------------------------------------------------------------ inspection
    def listeners(self, channel: Hashable) -> Tuple[Listener, ...]:
        """Listeners actifs de `channel`, dans l'ordre d'insertion."""

        with self._lock:
            return tuple(
                subscription.listener
                for subscription in self._channels.get(channel, {}).values()
                if subscription.is_active
            )

    def listener_count(self, channel: Hashable) -> int:
        return len(self.listeners(channel))

    def has_listeners(self, channel: Hashable) -> bool:
        return self.listener_count(channel) > 0

    def channels(self) -> Tuple[Hashable, ...]:
        """Canaux ayant au moins un listener actif."""

        with self._lock:
            return tuple(
                channel
                for channel, subscriptions in self._channels.items()
                if any(subscription.is_active for subscription in subscriptions.values())
            )


__all__ = ["SubscriptionRegistry"]
