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
Lifecycle events a navigator emits, and the dispatcher that delivers them.

========== ====================== =============================================
Event      Listener arguments     When
========== ====================== =============================================
``start``  none                   the first page is showing and buttons are up
``react``  ``(actor, emoji)``     an authorised user pressed a known button
``finish`` ``(actor)``            a user pressed the delete button
``expire`` none                   nobody pressed anything before the timeout
``error``  ``(exception)``        something went wrong
========== ====================== =============================================

``finish`` and ``expire`` are emitted at most once per navigator.
"""

__all__ = (
    "EventKind",
    "StartEvent",
    "ReactEvent",
    "FinishEvent",
    "ExpireEvent",
    "ErrorEvent",
    "Event",
    "Notifier",
)

import collections
import enum
import typing
from dataclasses import dataclass

from pagezilla import functional
from pagezilla import logging_utils


class EventKind(str, enum.Enum):
    START = "start"
    REACT = "react"
    FINISH = "finish"
    EXPIRE = "expire"
    ERROR = "error"


TERMINAL_EVENTS = frozenset({EventKind.FINISH, EventKind.EXPIRE})


@dataclass(frozen=True)
class StartEvent:
    kind: typing.ClassVar[EventKind] = EventKind.START

    @property
    def args(self) -> tuple:
        return ()


@dataclass(frozen=True)
class ReactEvent:
    actor: typing.Any
    emoji: str
    kind: typing.ClassVar[EventKind] = EventKind.REACT

    @property
    def args(self) -> tuple:
        return self.actor, self.emoji


@dataclass(frozen=True)
class FinishEvent:
    actor: typing.Any
    kind: typing.ClassVar[EventKind] = EventKind.FINISH

    @property
    def args(self) -> tuple:
        return (self.actor,)


@dataclass(frozen=True)
class ExpireEvent:
    kind: typing.ClassVar[EventKind] = EventKind.EXPIRE

    @property
    def args(self) -> tuple:
        return ()


@dataclass(frozen=True)
class ErrorEvent:
    error: BaseException
    kind: typing.ClassVar[EventKind] = EventKind.ERROR

    @property
    def args(self) -> tuple:
        return (self.error,)


Event = typing.Union[StartEvent, ReactEvent, FinishEvent, ExpireEvent, ErrorEvent]


@dataclass
class _Listener:
    callback: typing.Callable
    coroutine_fn: functional.CoroutineFunction
    once: bool


class Notifier(logging_utils.Loggable):
    """
    Delivers events to listeners in the order they were added. Listeners can be
    plain functions or coroutine functions. A listener that raises is logged,
    and never stops the other listeners or the navigator.
    """

    def __init__(self):
        self._listeners: typing.DefaultDict[EventKind, typing.List[_Listener]] = collections.defaultdict(list)
        self._delivered_terminal: typing.Set[EventKind] = set()

    def on(self, kind, listener=None, *, once=False):
        """
        Adds a listener for the event. If no listener is given, this returns
        a decorator instead::

            @navigator.events.on("finish")
            async def on_finish(user):
                ...
        """
        kind = EventKind(kind)

        if listener is None:

            def decorator(fn):
                self.on(kind, fn, once=once)
                return fn

            return decorator

        self._listeners[kind].append(_Listener(listener, functional.ensure_coroutine_function(listener), once))
        return listener

    def once(self, kind, listener=None):
        return self.on(kind, listener, once=True)

    def off(self, kind, listener) -> None:
        """Removes every registration of the listener for the event."""
        kind = EventKind(kind)
        self._listeners[kind] = [entry for entry in self._listeners[kind] if entry.callback != listener]

    def listener_count(self, kind) -> int:
        return len(self._listeners[EventKind(kind)])

    async def emit(self, event: Event) -> int:
        """Delivers the event. Returns how many listeners were called."""
        if event.kind in TERMINAL_EVENTS:
            if event.kind in self._delivered_terminal:
                self.logger.warning("Not emitting %s twice", event.kind.value)
                return 0
            self._delivered_terminal.add(event.kind)

        entries = list(self._listeners[event.kind])
        self._listeners[event.kind] = [entry for entry in entries if not entry.once]

        for entry in entries:
            try:
                await entry.coroutine_fn(*event.args)
            except Exception:
                self.logger.exception("Listener %r for %s raised", entry.callback, event.kind.value)

        return len(entries)
