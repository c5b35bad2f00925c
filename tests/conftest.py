"""
In-memory ports so the navigator can be driven without Discord.
"""

import asyncio
from typing import List, Optional

import async_timeout
import pytest

from pagezilla.errors import ConfigurationError
from pagezilla.pagination.abc import InputSource, Interaction, RenderedPayload, RenderPort, Subscription
from pagezilla.pagination.events import EventKind
from pagezilla.pagination.navigator import Navigator


class FakeMessage:
    def __init__(self, id=1000):
        self.id = id


class FakeRenderPort(RenderPort):
    """Records every page shown. ``payload.embed`` carries the page number."""

    def __init__(self, page_size: int = 1):
        self._page_size = page_size
        self.published: List[RenderedPayload] = []
        self.shown: List[int] = []
        self.removed: List[FakeMessage] = []
        self.verify_error: Optional[Exception] = None
        self.update_error: Optional[Exception] = None

    @property
    def page_size(self) -> int:
        return self._page_size

    def render(self, elements, page, config) -> RenderedPayload:
        start = (page - 1) * self._page_size
        chunk = list(elements[start : start + self._page_size])
        return RenderedPayload(content=f"{chunk}", embed=page)

    async def verify(self, channel) -> None:
        if channel is None:
            raise ConfigurationError("no channel")
        if self.verify_error is not None:
            raise self.verify_error

    async def publish(self, channel, payload, *, message=None):
        self.published.append(payload)
        return message if message is not None else FakeMessage()

    async def update(self, handle, payload) -> None:
        if self.update_error is not None:
            raise self.update_error
        self.shown.append(payload.embed)

    async def remove(self, handle) -> None:
        self.removed.append(handle)


class FakeSubscription(Subscription):
    def __init__(self, keys, inputs, replies):
        self.keys = list(keys)
        self.queue: asyncio.Queue = asyncio.Queue()
        self.replies: asyncio.Queue = asyncio.Queue()
        self.prompts: List[str] = []
        self.acknowledged: List[Interaction] = []
        self.disposed_with: Optional[bool] = None
        for interaction in inputs:
            self.queue.put_nowait(interaction)
        for reply in replies:
            self.replies.put_nowait(reply)

    async def wait_next(self, timeout):
        try:
            async with async_timeout.timeout(timeout):
                return await self.queue.get()
        except asyncio.TimeoutError:
            return None

    async def wait_text(self, actor_id, prompt, timeout):
        self.prompts.append(prompt)
        try:
            async with async_timeout.timeout(timeout):
                return await self.replies.get()
        except asyncio.TimeoutError:
            return None

    async def acknowledge(self, interaction):
        self.acknowledged.append(interaction)

    async def dispose(self, *, clear_reactions=True):
        self.disposed_with = clear_reactions


class FakeInputSource(InputSource):
    """Inputs and jump replies given up front are queued as soon as we attach."""

    def __init__(self, inputs=(), replies=()):
        self.inputs = list(inputs)
        self.replies = list(replies)
        self.subscription: Optional[FakeSubscription] = None
        self.handle = None

    async def attach(self, handle, keys):
        self.handle = handle
        self.subscription = FakeSubscription(keys, self.inputs, self.replies)
        return self.subscription


class EventRecorder:
    def __init__(self, navigator):
        self.events = []
        for kind in EventKind:
            navigator.events.on(kind, self._recorder(kind))

    def _recorder(self, kind):
        def record(*args):
            self.events.append((kind.value, *args))

        return record

    def kinds(self):
        return [event[0] for event in self.events]

    def count(self, kind):
        return self.kinds().count(kind)


def press(key, actor_id=1):
    return Interaction(actor_id=actor_id, key=key, actor=f"user{actor_id}", mention=f"<@{actor_id}>")


@pytest.fixture
def make_navigator():
    def factory(elements=range(5), inputs=(), replies=(), page_size=1, timeout=0.05):
        render_port = FakeRenderPort(page_size)
        input_source = FakeInputSource(inputs, replies)
        navigator = (
            Navigator(render_port, input_source)
            .set_elements(elements)
            .set_channel(object())
            .set_timeout(timeout)
        )
        return navigator, render_port, input_source

    return factory
