#!/usr/bin/env python3
"""Démo du registre d'abonnements.

Trois listeners sur le canal "change" :
- un listener simple, retiré par le code hôte (nettoyage externe)
- un listener qui se retire lui-même après N notifications
- un listener retiré en différé par un `threading.Timer`

Usage:
    python3 demo_notifier.py
"""

from __future__ import annotations

import logging
import sys
import threading
from typing import Any, List

from notifier import SelfReleasingListener, SubscriptionRegistry


class CountdownListener(SelfReleasingListener):
    """Se retire du registre après `remaining` notifications."""

    def __init__(self, name: str, remaining: int, journal: List[str]) -> None:
        super().__init__()
        self.name = name
        self.remaining = remaining
        self.journal = journal

    def handle(self, value: Any) -> None:
        self.journal.append(f"{self.name}:{value}")
        self.remaining -= 1
        if self.remaining <= 0:
            self.release()


def run_demo(*, delay: float = 0.05, rounds: int = 4) -> List[str]:
    """Exécute le scénario et retourne le journal des livraisons."""

    registry = SubscriptionRegistry()
    journal: List[str] = []

    release_plain = registry.register("change", lambda value: journal.append(f"plain:{value}"))
    registry.register("change", CountdownListener("countdown", 2, journal))

    deferred_fired = threading.Event()

    def deferred(value: Any) -> None:
        journal.append(f"deferred:{value}")

    release_deferred = registry.register("change", deferred)

    def _release_later() -> None:
        release_deferred()
        deferred_fired.set()

    registry.notify("change", 1)

    timer = threading.Timer(delay, _release_later)
    timer.start()
    release_plain()
    registry.notify("change", 2)

    # Le notify n'attend jamais les retraits différés : c'est la démo qui patiente.
    deferred_fired.wait(timeout=max(delay * 20, 1.0))
    timer.join()

    for value in range(3, 3 + rounds):
        registry.notify("change", value)

    return journal


def main() -> int:
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    journal = run_demo()
    print("Livraisons :")
    for entry in journal:
        print(f"  {entry}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
