"""Regroupement de capacités de désinscription."""

from __future__ import annotations

from types import TracebackType
from typing import List, Optional, Type

from notifier.engine.release import ReleaseCapability


class SubscriptionGroup:
    """Conserve des capacités et les relâche ensemble (ordre inverse d'ajout).

    Utilisable comme context manager : tout est relâché à la sortie du bloc.
    """

    def __init__(self) -> None:
        self._capabilities: List[ReleaseCapability] = []

    def add(self, capability: ReleaseCapability) -> ReleaseCapability:
        """Ajoute une capacité au groupe et la retourne (chaînage)."""

        self._capabilities.append(capability)
        return capability

    def __len__(self) -> int:
        return len(self._capabilities)

    def release_all(self) -> None:
        while self._capabilities:
            self._capabilities.pop()()

    def __enter__(self) -> "SubscriptionGroup":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.release_all()
