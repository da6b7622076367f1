"""Contrat côté listener.

Un listener est un simple appelable. Il PEUT en plus implémenter
`CleanupAware` pour recevoir sa propre capacité de désinscription au moment
de l'enregistrement, et décider lui-même quand se retirer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, Protocol, Tuple, runtime_checkable

from notifier.engine.release import ReleaseCapability

Listener = Callable[..., Any]
CleanupHook = Callable[[ReleaseCapability], None]


@runtime_checkable
class CleanupAware(Protocol):
    """Listener qui souhaite recevoir sa capacité de désinscription."""

    def on_cleanup(self, release: ReleaseCapability) -> None:
        ...


def resolve_cleanup_hook(listener: Listener) -> Optional[CleanupHook]:
    """Retourne le hook de nettoyage exposé par le listener, s'il y en a un.

    Une classe passée comme listener n'a qu'un `on_cleanup` non lié : elle
    n'est pas considérée comme `CleanupAware`.
    """

    if isinstance(listener, type):
        return None
    if isinstance(listener, CleanupAware) and callable(listener.on_cleanup):
        return listener.on_cleanup
    return None


class SelfReleasingListener(ABC):
    """Base pour les listeners qui gèrent eux-mêmes leur désinscription.

    Chaque capacité reçue à l'enregistrement est conservée (un listener peut
    être inscrit sur plusieurs canaux) ; la sous-classe implémente `handle()`
    et appelle `release()` quand elle le décide, ce qui termine toutes ses
    inscriptions.
    """

    def __init__(self) -> None:
        self._releases: List[ReleaseCapability] = []

    def on_cleanup(self, release: ReleaseCapability) -> None:
        self._releases.append(release)

    @property
    def release_capabilities(self) -> Tuple[ReleaseCapability, ...]:
        return tuple(self._releases)

    @property
    def released(self) -> bool:
        """Vrai si le listener a été inscrit et que toutes ses inscriptions sont terminées."""

        return bool(self._releases) and all(release.released for release in self._releases)

    def release(self) -> None:
        """Se retire de tous les canaux (sans effet si jamais enregistré ou déjà retiré)."""

        for release in tuple(self._releases):
            release()

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        self.handle(*args, **kwargs)

    @abstractmethod
    def handle(self, *args: Any, **kwargs: Any) -> None:
        """Traite une notification."""


__all__ = [
    "Listener",
    "CleanupHook",
    "CleanupAware",
    "SelfReleasingListener",
    "resolve_cleanup_hook",
]
