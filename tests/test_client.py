"""
Tests for client construction and lifecycle handlers.
"""

import asyncio

import pytest

from nucleus.events import RESERVED_EVENTS
from nucleus.modules.dispatch import RegistryError


def test_build_client_registers_commands(nucleus_client):
    assert set(nucleus_client.registry.commands()) == {"ping", "summary"}


def test_build_client_registers_events(nucleus_client):
    registry = nucleus_client.registry

    assert [h.once for h in registry.subscribers("ready")] == [True]
    assert [h.once for h in registry.subscribers("member_count")] == [False]
    assert [h.once for h in registry.subscribers("shutdown")] == [True]


def test_reserved_events_are_application_lifecycle_events():
    assert RESERVED_EVENTS == {"ready", "shutdown"}


def test_build_client_seals_registry(nucleus_client):
    with pytest.raises(RegistryError):
        nucleus_client.registry.register_command("late", lambda i: None)


@pytest.mark.asyncio
async def test_member_count_event_records_sample(nucleus_client, redis_mock):
    outcomes = await asyncio.gather(*nucleus_client.dispatcher.emit("member_count", "guild-1", 42))

    assert outcomes[0].ok is True
    redis_mock.zadd.assert_awaited_once()
    key, mapping = redis_mock.zadd.await_args.args
    assert key == "member_count:guild-1"
    assert list(mapping)[0].endswith(":42")


@pytest.mark.asyncio
async def test_member_count_event_with_bad_args_is_contained(nucleus_client, redis_mock):
    outcomes = await asyncio.gather(*nucleus_client.dispatcher.emit("member_count", "guild-1", "many"))

    assert outcomes[0].ok is False
    redis_mock.zadd.assert_not_awaited()


@pytest.mark.asyncio
async def test_ready_fires_once(nucleus_client):
    first = await asyncio.gather(*nucleus_client.dispatcher.emit("ready"))
    second = nucleus_client.dispatcher.emit("ready")

    assert [o.ok for o in first] == [True]
    assert second == []


@pytest.mark.asyncio
async def test_teardown_closes_storage(nucleus_client, redis_mock):
    await nucleus_client.teardown()

    redis_mock.aclose.assert_awaited_once()
    assert nucleus_client.registry.subscribers("shutdown") == []
    assert nucleus_client.dispatcher.pending == 0
