"""Tests de la façade mono-canal et du regroupement de capacités."""

from __future__ import annotations

from typing import Any

import pytest

from notifier import DEFAULT_CHANNEL, Notifier, SubscriptionGroup, SubscriptionRegistry


def test_notifier_publish_and_release() -> None:
    notifier = Notifier()
    received: list[tuple[str, object]] = []

    release_a = notifier.add_listener(lambda event: received.append(("a", event)))
    release_b = notifier.add_listener(lambda event: received.append(("b", event)))

    notifier.notify("hello")
    assert received == [("a", "hello"), ("b", "hello")]

    received.clear()
    release_a()
    notifier.notify("world")
    assert received == [("b", "world")]

    received.clear()
    release_b()
    notifier.notify("ignored")
    assert received == []


def test_notifier_uses_default_channel_of_registry() -> None:
    registry = SubscriptionRegistry()
    notifier = Notifier(registry=registry)
    received: list[Any] = []

    notifier.add_listener(received.append)
    registry.notify(DEFAULT_CHANNEL, 7)

    assert notifier.registry is registry
    assert notifier.channel == DEFAULT_CHANNEL
    assert received == [7]


def test_notifiers_sharing_a_registry_stay_isolated() -> None:
    registry = SubscriptionRegistry()
    change = Notifier(registry=registry, channel="change")
    reset = Notifier(registry=registry, channel="reset")
    received: list[tuple[str, Any]] = []

    change.add_listener(lambda value: received.append(("change", value)))
    reset.add_listener(lambda value: received.append(("reset", value)))

    change.notify(1)
    assert received == [("change", 1)]
    assert set(registry.channels()) == {"change", "reset"}


def test_notifier_remove_listener_and_queries() -> None:
    notifier = Notifier()
    received: list[Any] = []
    listener = received.append

    notifier.add_listener(listener)
    notifier.add_listener(listener)
    assert notifier.listeners() == (listener,)
    assert notifier.listener_count() == 1

    notifier.remove_listener(listener)
    notifier.notify(1)
    assert received == []
    assert notifier.listener_count() == 0


def test_notifier_once_and_clear() -> None:
    notifier = Notifier()
    received: list[Any] = []

    notifier.add_listener(lambda value: received.append(("once", value)), once=True)
    persistent = notifier.add_listener(lambda value: received.append(("always", value)))

    notifier.notify(1)
    notifier.notify(2)
    assert received == [("once", 1), ("always", 1), ("always", 2)]

    notifier.clear()
    assert persistent.released
    notifier.notify(3)
    assert len(received) == 3


def test_notifier_isolate_policy_is_forwarded() -> None:
    notifier = Notifier(error_policy="isolate")
    assert notifier.registry.error_policy == "isolate"


def test_notifier_rejects_policy_conflicting_with_registry() -> None:
    registry = SubscriptionRegistry()

    with pytest.raises(ValueError):
        Notifier(registry=registry, error_policy="isolate")


def test_notifier_accepts_policy_matching_registry() -> None:
    registry = SubscriptionRegistry(error_policy="isolate")
    notifier = Notifier(registry=registry, error_policy="isolate")

    assert notifier.registry is registry
    assert Notifier(registry=registry).registry.error_policy == "isolate"


def test_notifier_accepts_any_hashable_channel() -> None:
    registry = SubscriptionRegistry()
    notifier = Notifier(registry=registry, channel=("state", 3))
    received: list[Any] = []

    notifier.add_listener(received.append)
    registry.notify(("state", 3), "ok")

    assert notifier.channel == ("state", 3)
    assert received == ["ok"]


def test_subscription_group_releases_everything() -> None:
    registry = SubscriptionRegistry()
    received: list[tuple[str, Any]] = []
    group = SubscriptionGroup()

    group.add(registry.register("a", lambda value: received.append(("a", value))))
    capability = group.add(registry.register("b", lambda value: received.append(("b", value))))
    assert len(group) == 2

    group.release_all()
    assert len(group) == 0
    assert capability.released

    registry.notify("a", 1)
    registry.notify("b", 2)
    assert received == []

    group.release_all()


def test_subscription_group_as_context_manager() -> None:
    notifier = Notifier()
    received: list[Any] = []

    with SubscriptionGroup() as group:
        group.add(notifier.add_listener(received.append))
        notifier.notify("inside")

    notifier.notify("outside")
    assert received == ["inside"]


def test_subscription_group_tolerates_already_released_capabilities() -> None:
    notifier = Notifier()
    group = SubscriptionGroup()
    capability = group.add(notifier.add_listener(lambda _v: None))

    capability()
    group.release_all()
    assert capability.released
