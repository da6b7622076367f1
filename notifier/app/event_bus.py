"""Notifier mono-canal pour le code hôte."""

from __future__ import annotations

from typing import Any, Hashable, Optional, Tuple

from notifier.engine.constants import DEFAULT_CHANNEL, DEFAULT_ERROR_POLICY, ErrorPolicy
from notifier.engine.listeners import CleanupHook, Listener
from notifier.engine.registry import SubscriptionRegistry
from notifier.engine.release import ReleaseCapability


class Notifier:
    """Cas dégénéré du registre : un seul canal implicite.

    Chaque `notify` appelle immédiatement les listeners dans l'ordre
    d'enregistrement. Avec la politique par défaut, une exception interrompt
    la diffusion (c'est souhaité pour détecter les erreurs tôt).
    """

    __slots__ = ("_registry", "_channel")

    def __init__(
        self,
        *,
        registry: SubscriptionRegistry | None = None,
        error_policy: Optional[ErrorPolicy] = None,
        channel: Hashable = DEFAULT_CHANNEL,
    ) -> None:
        if registry is None:
            if error_policy is None:
                error_policy = DEFAULT_ERROR_POLICY
            registry = SubscriptionRegistry(error_policy=error_policy)
        elif error_policy is not None and error_policy != registry.error_policy:
            raise ValueError(
                f"error_policy={error_policy!r} contredit celle du registre fourni "
                f"({registry.error_policy!r})"
            )
        self._registry = registry
        self._channel = channel

    @property
    def registry(self) -> SubscriptionRegistry:
        """Registre sous-jacent (partageable avec d'autres notifiers)."""

        return self._registry

    @property
    def channel(self) -> Hashable:
        return self._channel

    def add_listener(
        self,
        listener: Listener,
        *,
        once: bool = False,
        on_cleanup: Optional[CleanupHook] = None,
    ) -> ReleaseCapability:
        """Enregistre un listener et retourne sa capacité de désinscription."""

        return self._registry.register(
            self._channel, listener, once=once, on_cleanup=on_cleanup
        )

    def notify(self, *args: Any, **kwargs: Any) -> None:
        self._registry.notify(self._channel, *args, **kwargs)

    def remove_listener(self, listener: Listener) -> None:
        self._registry.remove_listener(self._channel, listener)

    def listeners(self) -> Tuple[Listener, ...]:
        return self._registry.listeners(self._channel)

    def listener_count(self) -> int:
        return self._registry.listener_count(self._channel)

    def clear(self) -> None:
        self._registry.clear(self._channel)
