"""Constantes du registre d'abonnements.

Ce module expose le contrat minimal partagé par le moteur et la couche app :
- canal implicite de la variante mono-canal (`DEFAULT_CHANNEL`)
- politiques d'erreur acceptées par `SubscriptionRegistry`
"""

from __future__ import annotations

from typing import Literal

# Canal utilisé quand l'appelant ne nomme pas de canal (Notifier)
DEFAULT_CHANNEL: str = "default"

ErrorPolicy = Literal["propagate", "isolate"]

# "propagate" : la première exception interrompt la diffusion.
# "isolate"   : tous les listeners sont appelés, les erreurs sont agrégées.
ERROR_POLICIES: tuple[str, ...] = ("propagate", "isolate")
DEFAULT_ERROR_POLICY: ErrorPolicy = "propagate"

__all__ = [
    "DEFAULT_CHANNEL",
    "ErrorPolicy",
    "ERROR_POLICIES",
    "DEFAULT_ERROR_POLICY",
]
