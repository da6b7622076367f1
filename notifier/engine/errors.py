"""Taxonomie des erreurs du registre.

Deux situations ne sont volontairement PAS des erreurs :
- relâcher plusieurs fois la même capacité (no-op garanti)
- notifier un canal sans listener (no-op)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Hashable, Tuple


class NotifierError(Exception):
    """Classe de base de toutes les erreurs du paquet."""


class InvalidListenerError(NotifierError, TypeError):
    """Levée à l'enregistrement d'un listener (ou d'un hook) non appelable."""

    def __init__(self, value: object, *, role: str = "listener") -> None:
        super().__init__(f"Le {role} doit être appelable (reçu: {value!r})")
        self.value = value
        self.role = role


@dataclass(frozen=True)
class ListenerFailure:
    """Échec d'un listener pendant une diffusion en mode `isolate`."""

    channel: Hashable
    listener: Callable[..., Any]
    error: BaseException


class ListenerInvocationError(NotifierError):
    """Agrège les échecs d'une diffusion menée en mode `isolate`."""

    def __init__(self, channel: Hashable, failures: Tuple[ListenerFailure, ...]) -> None:
        noun = "listener" if len(failures) == 1 else "listeners"
        super().__init__(
            f"{len(failures)} {noun} en échec lors de la notification du canal {channel!r}"
        )
        self.channel = channel
        self.failures = failures

    @property
    def errors(self) -> Tuple[BaseException, ...]:
        return tuple(failure.error for failure in self.failures)


__all__ = [
    "NotifierError",
    "InvalidListenerError",
    "ListenerFailure",
    "ListenerInvocationError",
]
