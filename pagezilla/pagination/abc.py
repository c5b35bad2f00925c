#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# Pagezilla is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# Pagezilla is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with Pagezilla.  If not, see <https://www.gnu.org/licenses/>.


"""
Abstract base classes for the pagination module.

The navigator only ever talks to the chat platform through a ``RenderPort``
(turning pages into messages) and an ``InputSource`` (turning reactions and
replies into ``Interaction`` objects). Anything implementing these can drive
a navigator, which is how the tests run without Discord.
"""

__all__ = ("PagABC", "RenderedPayload", "Interaction", "RenderPort", "InputSource", "Subscription")

import weakref
from abc import ABC
from abc import abstractmethod
from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import Optional
from typing import Sequence


class PagABC(ABC):
    """
    Keeps track of the references. Useful for memory usage debugging:
    a serious downside to the pagination system in Neko2.

    The weak references are dealt with automatically internally, so you
    never even have to acknowledge it's existence.
    """

    _instances = weakref.WeakSet()

    def __init__(self):
        self._instances.add(self)

    @classmethod
    def live_count(cls) -> int:
        """Counts the instances of this class that are still referenced."""
        return sum(1 for instance in list(cls._instances) if isinstance(instance, cls))


@dataclass
class RenderedPayload:
    """Something that can be sent as a message. The navigator never looks inside."""

    content: Optional[str] = None
    embed: Any = None

    def as_kwargs(self) -> dict:
        return {"content": self.content, "embed": self.embed}


@dataclass(frozen=True)
class Interaction:
    """
    A single reaction by someone on the paginated message.

    ``actor`` is whatever object the platform uses for the user, and is what
    callbacks and event listeners receive. ``mention`` replaces ``{{user}}``
    in the jump prompt.
    """

    actor_id: int
    key: str
    actor: Any = None
    mention: str = field(default="")

    def __post_init__(self):
        if self.actor is None:
            object.__setattr__(self, "actor", self.actor_id)
        if not self.mention:
            object.__setattr__(self, "mention", str(self.actor_id))


class RenderPort(ABC):
    """Turns pages into messages, and owns the message transport."""

    @property
    @abstractmethod
    def page_size(self) -> int:
        """How many elements fit on one page."""
        ...

    @abstractmethod
    def render(self, elements: Sequence[Any], page: int, config) -> RenderedPayload:
        """Renders the given 1-indexed page of the elements."""
        ...

    @abstractmethod
    async def verify(self, channel) -> None:
        """
        Checks the channel can be used. Raises ``ConfigurationError`` if there
        is no channel, or ``PlatformError`` if we cannot post in it.
        """
        ...

    @abstractmethod
    async def publish(self, channel, payload: RenderedPayload, *, message=None):
        """
        Sends the payload, or edits ``message`` with it if one is given.
        Returns the handle to the message.
        """
        ...

    @abstractmethod
    async def update(self, handle, payload: RenderedPayload) -> None:
        ...

    @abstractmethod
    async def remove(self, handle) -> None:
        ...


class Subscription(ABC):
    """Input attached to one message. Inputs are queued until asked for."""

    @abstractmethod
    async def wait_next(self, timeout: float) -> Optional[Interaction]:
        """The next interaction, or ``None`` if ``timeout`` seconds pass first."""
        ...

    @abstractmethod
    async def wait_text(self, actor_id: int, prompt: str, timeout: float) -> Optional[str]:
        """
        Shows the prompt, and waits for a text reply from the given actor.
        Returns ``None`` on timeout.
        """
        ...

    async def acknowledge(self, interaction: Interaction) -> None:
        """Called once an interaction is accepted. Does nothing by default."""

    @abstractmethod
    async def dispose(self, *, clear_reactions: bool = True) -> None:
        """Stops listening. Nothing is queued after this returns."""
        ...


class InputSource(ABC):
    @abstractmethod
    async def attach(self, handle, keys: Sequence[str]) -> Subscription:
        """
        Starts listening to the message behind ``handle`` and offers each of the
        keys as a reaction.
        """
        ...
