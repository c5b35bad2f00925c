"""
Notifier: listener registration and delivery.
"""

import pytest

from pagezilla.pagination.events import (
    ErrorEvent,
    EventKind,
    ExpireEvent,
    FinishEvent,
    Notifier,
    ReactEvent,
    StartEvent,
)


@pytest.fixture
def notifier():
    return Notifier()


@pytest.mark.asyncio
async def test_sync_and_async_listeners(notifier):
    seen = []

    def on_react(user, emoji):
        seen.append(("sync", user, emoji))

    async def on_react_async(user, emoji):
        seen.append(("async", user, emoji))

    notifier.on("react", on_react)
    notifier.on(EventKind.REACT, on_react_async)

    assert await notifier.emit(ReactEvent("nekokatt", "▶")) == 2
    assert seen == [("sync", "nekokatt", "▶"), ("async", "nekokatt", "▶")]


@pytest.mark.asyncio
async def test_decorator(notifier):
    seen = []

    @notifier.on("start")
    def on_start():
        seen.append("started")

    await notifier.emit(StartEvent())
    assert seen == ["started"]
    assert notifier.listener_count("start") == 1


@pytest.mark.asyncio
async def test_once(notifier):
    seen = []
    notifier.once("error", seen.append)

    error = RuntimeError("boom")
    await notifier.emit(ErrorEvent(error))
    await notifier.emit(ErrorEvent(error))

    assert seen == [error]
    assert notifier.listener_count("error") == 0


@pytest.mark.asyncio
async def test_off(notifier):
    seen = []
    notifier.on("finish", seen.append)
    notifier.off("finish", seen.append)

    await notifier.emit(FinishEvent("someone"))
    assert seen == []


@pytest.mark.asyncio
async def test_raising_listener_does_not_stop_others(notifier, caplog):
    seen = []

    def broken():
        raise ValueError("listener bug")

    notifier.on("expire", broken)
    notifier.on("expire", lambda: seen.append("expired"))

    await notifier.emit(ExpireEvent())

    assert seen == ["expired"]
    assert "listener bug" in caplog.text


@pytest.mark.asyncio
async def test_terminal_events_are_delivered_once(notifier):
    seen = []
    notifier.on("finish", seen.append)
    notifier.on("expire", lambda: seen.append("expire"))

    await notifier.emit(FinishEvent("a"))
    await notifier.emit(FinishEvent("b"))
    await notifier.emit(ExpireEvent())
    await notifier.emit(ExpireEvent())

    assert seen == ["a", "expire"]


def test_unknown_event_kind(notifier):
    with pytest.raises(ValueError):
        notifier.on("explode", print)
