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
Discord.py implementations of the render and input ports.
"""

__all__ = ("REQUIRED_PERMISSIONS", "DiscordRenderPort", "DiscordReactionInput", "DiscordSubscription")

import asyncio
import typing

import async_timeout
import discord

from pagezilla import logging_utils
from pagezilla.errors import ConfigurationError
from pagezilla.errors import PlatformError
from .abc import InputSource
from .abc import Interaction
from .abc import RenderedPayload
from .abc import RenderPort
from .abc import Subscription
from .layouts import Layout

REQUIRED_PERMISSIONS = ("send_messages", "embed_links", "add_reactions", "manage_messages", "read_message_history")


def _in_guild(message) -> bool:
    return getattr(message, "guild", None) is not None


class DiscordRenderPort(RenderPort, logging_utils.Loggable):
    """Sends, edits and deletes the paginated message. Pages come from the layout."""

    def __init__(self, layout: Layout):
        self.layout = layout

    @property
    def page_size(self) -> int:
        return self.layout.page_size

    def render(self, elements, page, config) -> RenderedPayload:
        return self.layout.render(elements, page, config)

    async def verify(self, channel) -> None:
        if channel is None:
            raise ConfigurationError("No channel was set to send the pages to")

        self.layout.validate()

        guild = getattr(channel, "guild", None)
        if guild is None:
            # DMs: nothing to check.
            return

        permissions = channel.permissions_for(guild.me)
        missing = [name for name in REQUIRED_PERMISSIONS if not getattr(permissions, name)]
        if missing:
            raise PlatformError(f"Missing permissions in #{channel}: {', '.join(missing)}")

    async def publish(self, channel, payload: RenderedPayload, *, message=None):
        try:
            if message is not None:
                await message.edit(**payload.as_kwargs())
                return message
            return await channel.send(**payload.as_kwargs())
        except discord.HTTPException as ex:
            raise PlatformError(f"Could not send the message: {ex}") from ex

    async def update(self, handle, payload: RenderedPayload) -> None:
        try:
            await handle.edit(**payload.as_kwargs())
        except discord.HTTPException as ex:
            raise PlatformError(f"Could not edit message {handle.id}: {ex}") from ex

    async def remove(self, handle) -> None:
        try:
            await handle.delete()
        except discord.HTTPException as ex:
            raise PlatformError(f"Could not delete message {handle.id}: {ex}") from ex


class DiscordSubscription(Subscription, logging_utils.Loggable):
    """
    Queues reactions added to one message by anyone who is not a bot.
    """

    def __init__(self, bot, message):
        self.bot = bot
        self.message = message
        self._queue: "asyncio.Queue[Interaction]" = asyncio.Queue()
        self._listening = False

    def start(self) -> None:
        self.bot.add_listener(self.on_raw_reaction_add, "on_raw_reaction_add")
        self._listening = True

    async def on_raw_reaction_add(self, payload: discord.RawReactionActionEvent) -> None:
        if not self._listening or payload.message_id != self.message.id:
            return
        if self.bot.user is not None and payload.user_id == self.bot.user.id:
            return

        actor = payload.member or self.bot.get_user(payload.user_id)
        if getattr(actor, "bot", False):
            return

        self._queue.put_nowait(
            Interaction(
                actor_id=payload.user_id,
                key=str(payload.emoji),
                actor=actor if actor is not None else discord.Object(id=payload.user_id),
                mention=f"<@{payload.user_id}>",
            )
        )

    async def wait_next(self, timeout: float) -> typing.Optional[Interaction]:
        try:
            async with async_timeout.timeout(timeout):
                return await self._queue.get()
        except asyncio.TimeoutError:
            return None

    async def wait_text(self, actor_id: int, prompt: str, timeout: float) -> typing.Optional[str]:
        channel = self.message.channel

        try:
            prompt_message = await channel.send(prompt)
        except discord.HTTPException as ex:
            raise PlatformError(f"Could not send the jump prompt: {ex}") from ex

        def predicate(m):
            return m.channel.id == channel.id and m.author.id == actor_id

        try:
            response = await self.bot.wait_for("message", check=predicate, timeout=timeout)
        except asyncio.TimeoutError:
            response = None
        finally:
            await self._quietly_delete(prompt_message)

        if response is None:
            return None

        if _in_guild(self.message):
            await self._quietly_delete(response)
        return response.content

    async def acknowledge(self, interaction: Interaction) -> None:
        # Users can only have their reactions removed by us in guilds.
        if not _in_guild(self.message):
            return
        try:
            await self.message.remove_reaction(interaction.key, discord.Object(id=interaction.actor_id))
        except discord.HTTPException as ex:
            self.logger.debug("Could not remove reaction %s: %s", interaction.key, ex)

    async def dispose(self, *, clear_reactions: bool = True) -> None:
        if self._listening:
            self._listening = False
            self.bot.remove_listener(self.on_raw_reaction_add, "on_raw_reaction_add")

        if clear_reactions and _in_guild(self.message):
            try:
                await self.message.clear_reactions()
            except discord.HTTPException as ex:
                self.logger.warning("Could not clear reactions on %s: %s", self.message.id, ex)

    async def _quietly_delete(self, message) -> None:
        try:
            await message.delete()
        except discord.HTTPException as ex:
            self.logger.debug("Could not delete message %s: %s", message.id, ex)


class DiscordReactionInput(InputSource, logging_utils.Loggable):
    """Reads button presses from reactions, using the bot's event dispatch."""

    def __init__(self, bot):
        self.bot = bot

    async def attach(self, handle, keys) -> DiscordSubscription:
        subscription = DiscordSubscription(self.bot, handle)
        subscription.start()

        for key in keys:
            try:
                await handle.add_reaction(key)
            except discord.HTTPException as ex:
                self.logger.warning("Could not add reaction %s to %s: %s", key, handle.id, ex)

        return subscription
