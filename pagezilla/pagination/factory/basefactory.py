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
Shared plumbing for the navigator factories.
"""

__all__ = ("BaseNavigatorFactory", "Invocation")

import typing
from abc import ABC
from abc import abstractmethod

from discord.ext import commands

from ..discord_io import DiscordReactionInput
from ..discord_io import DiscordRenderPort
from ..layouts import Layout
from ..navigator import Navigator

#: Either a command context, or a ``(bot, channel)`` or ``(bot, channel, author)`` tuple.
Invocation = typing.Union[commands.Context, tuple]


def _unpack(ctx: Invocation):
    if isinstance(ctx, tuple):
        bot, channel, *rest = ctx
        author = rest[0] if rest else None
        return bot, channel, author
    return ctx.bot, ctx.channel, ctx.author


class BaseNavigatorFactory(ABC):
    """
    Collects elements, then builds a discord-backed navigator over them. By
    default only the invoking user can press the buttons.
    """

    def __init__(self):
        self.elements: typing.List = []

    @abstractmethod
    def make_layout(self) -> Layout:
        ...

    def build(
        self,
        ctx: Invocation,
        *,
        timeout: float = 300,
        initial_page: int = 1,
        only_author: bool = True,
        **kwargs,
    ) -> Navigator:
        """
        Args:
            ctx: invocation context, or a ``(bot, channel[, author])`` tuple.
            timeout: optional response timeout in seconds (defaults to 300).
            initial_page: the 1-indexed page to start on (defaults to 1).
            only_author: if true, only the author of ``ctx`` can navigate.

        Kwargs:
             settings passed to :meth:`Navigator.configure`.
        """
        bot, channel, author = _unpack(ctx)

        navigator = (
            Navigator(DiscordRenderPort(self.make_layout()), DiscordReactionInput(bot), self.elements)
            .set_channel(channel)
            .set_timeout(timeout)
            .set_page(initial_page)
        )

        if only_author and author is not None:
            navigator.set_authorized_users([author.id])
        if kwargs:
            navigator.configure(kwargs)
        return navigator

    async def start(self, ctx: Invocation, *, timeout: float = 300, initial_page: int = 1, **kwargs) -> Navigator:
        """
        Same as performing ``await .build(...).build()``
        """
        return await self.build(ctx, timeout=timeout, initial_page=initial_page, **kwargs).build()
