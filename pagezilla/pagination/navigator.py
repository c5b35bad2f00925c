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
The navigator: a state machine that shows one page of its elements in a
message, and reacts to button presses on that message until it is deleted,
times out, or the message goes away.

Example usage::

    nav = (
        Navigator(DiscordRenderPort(EmbedsLayout()), DiscordReactionInput(bot))
        .set_elements(embeds)
        .set_channel(ctx.channel)
        .set_authorized_users([ctx.author.id])
        .set_timeout(120)
        .add_function_emoji("\N{BLACK SQUARE FOR STOP}", stop_callback)
    )

    nav.events.on("finish", lambda user: print(user, "closed it"))

    await nav.build()
"""

__all__ = ("NavigatorState", "RenderContext", "Navigator", "CANCEL_WORDS")

import asyncio
import enum
import typing
from dataclasses import dataclass

from pagezilla import logging_utils
from pagezilla.errors import ConfigurationError
from pagezilla.errors import DispatchError
from pagezilla.errors import OutOfRangeError
from pagezilla.errors import PlatformError
from . import config as config_
from .abc import InputSource
from .abc import Interaction
from .abc import PagABC
from .abc import RenderedPayload
from .abc import RenderPort
from .abc import Subscription
from .authorization import AuthorizationFilter
from .events import ErrorEvent
from .events import ExpireEvent
from .events import FinishEvent
from .events import Notifier
from .events import ReactEvent
from .events import StartEvent
from .pages import PageState
from .reactionbuttons import ActionTrigger
from .reactionbuttons import EmojiRegistry
from .reactionbuttons import NavigationEmoji

T = typing.TypeVar("T")

CANCEL_WORDS = frozenset({"cancel", "0"})

# Returned instead of an interaction when the elements were replaced mid-wait.
_INVALIDATED = object()


class NavigatorState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    AWAITING = "awaiting"
    DISPATCHING = "dispatching"
    EXPIRED = "expired"
    TERMINATED = "terminated"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (NavigatorState.EXPIRED, NavigatorState.TERMINATED, NavigatorState.FAILED)


@dataclass(frozen=True)
class RenderContext(typing.Generic[T]):
    """What function emoji callbacks are given alongside the user."""

    elements: typing.Sequence[T]
    page: int
    pages: int
    navigator: "Navigator[T]"


class Navigator(PagABC, logging_utils.Loggable, typing.Generic[T]):
    """
    Paginates ``elements`` in a single message.

    Every ``set_*`` method returns the navigator, so they can be chained. They
    should be called before :meth:`build`; most of them still work afterwards,
    and are picked up on the next page change.

    Attributes:
        events: the :class:`Notifier` to subscribe to lifecycle events on.
        emojis: the :class:`EmojiRegistry` of buttons.
        state: the current :class:`NavigatorState`.
    """

    def __init__(self, render_port: RenderPort, input_source: InputSource, elements: typing.Iterable[T] = ()):
        super().__init__()
        self.render_port = render_port
        self.input_source = input_source
        self.elements: typing.List[T] = list(elements)
        self.channel = None
        self.config = config_.SessionConfig()
        self.assets = config_.ClientAssets()
        self.authorization = AuthorizationFilter()
        self.emojis = EmojiRegistry()
        self.events = Notifier()
        self.state = NavigatorState.UNINITIALIZED
        self.message = None

        self._page_state: typing.Optional[PageState] = None
        self._subscription: typing.Optional[Subscription] = None
        self._task: typing.Optional[asyncio.Task] = None
        self._invalidated = asyncio.Event()
        self._closing = False

    def __repr__(self):
        return f"<Navigator state={self.state.value} page={self.page} pages={self.pages}>"

    ###########################################################################
    # Read-only views.
    ###########################################################################

    @property
    def page(self) -> int:
        """The current page, or the page we will start on if not built yet."""
        return self._page_state.page if self._page_state else self.config.start_page

    @property
    def pages(self) -> typing.Optional[int]:
        return self._page_state.pages if self._page_state else None

    @property
    def render_context(self) -> RenderContext[T]:
        return RenderContext(tuple(self.elements), self.page, self.pages or 0, self)

    ###########################################################################
    # Configuration.
    ###########################################################################

    def set_elements(self, elements: typing.Iterable[T]) -> "Navigator[T]":
        """
        Sets the elements to paginate. After :meth:`build`, this goes back to
        the first page and restarts the timeout.
        """
        elements = list(elements)

        if self._page_state is not None and not self.state.is_terminal:
            self._page_state = PageState.initialize(len(elements), self.render_port.page_size, 1)
            self.elements = elements
            if self.state is NavigatorState.AWAITING:
                self._invalidated.set()
        else:
            self.elements = elements

        return self

    def set_authorized_users(self, users: typing.Iterable[int]) -> "Navigator[T]":
        """Restricts who can press buttons. An empty collection lets everyone."""
        self.authorization = AuthorizationFilter(users)
        return self

    def set_channel(self, channel) -> "Navigator[T]":
        self.channel = channel
        return self

    def set_client_assets(self, message=None, prepare: str = None, prompt: str = None) -> "Navigator[T]":
        if message is not None:
            self.assets.message = message
        if prepare is not None:
            self.assets.prepare = prepare
        if prompt is not None:
            self.assets.prompt = prompt
        return self

    def set_disabled_navigation_emojis(self, emojis: typing.Iterable) -> "Navigator[T]":
        """
        Disables navigation emojis, e.g. ``["delete", "jump"]``, or ``["all"]``.
        """
        self.emojis.set_disabled(emojis)
        return self

    def set_function_emojis(self, emojis: typing.Mapping[str, typing.Callable]) -> "Navigator[T]":
        """Replaces every function emoji with the given ones."""
        previous = self.emojis.function_emojis
        self.emojis.clear_actions()
        try:
            self.emojis.register_actions(emojis)
        except Exception:
            self.emojis.register_actions({key: action.callback for key, action in previous.items()})
            raise
        return self

    def add_function_emoji(self, emoji: str, callback: typing.Callable) -> "Navigator[T]":
        """
        Adds a function emoji. The callback is given the user that pressed it and
        a :class:`RenderContext`, and may be a coroutine function::

            def toggle_title(user, context):
                embed = context.elements[context.page - 1]
                embed.title = embed.title.swapcase()

            nav.add_function_emoji("\N{NEGATIVE SQUARED LATIN CAPITAL LETTER B}", toggle_title)
        """
        self.emojis.register_action(emoji, callback)
        return self

    def delete_function_emoji(self, emoji: str) -> "Navigator[T]":
        self.emojis.deregister_action(emoji)
        return self

    def reset_emojis(self) -> "Navigator[T]":
        """Deletes all function emojis, and then re-enables all navigation emojis."""
        self.emojis.reset_all()
        return self

    def set_navigation_emojis(self, emojis: typing.Mapping) -> "Navigator[T]":
        """Rebinds navigation emojis, e.g. ``{"back": "⏪", "forward": "⏩"}``."""
        self.emojis.rebind_navigation(emojis)
        return self

    def set_page(self, page: typing.Union[int, str]) -> "Navigator[T]":
        """
        Sets the page. Before :meth:`build` this is the page to start on, and is
        clamped into range when building. Afterwards it moves the current page.

        ``"back"`` and ``"forward"`` move one page relative to the current one,
        wrapping around at either end just like the buttons do. Before
        :meth:`build` this needs the elements to be set already, so that the
        number of pages is known.
        """
        if isinstance(page, str):
            direction = NavigationEmoji.parse(page)
            if direction not in (NavigationEmoji.BACK, NavigationEmoji.FORWARD):
                raise ConfigurationError(f"Cannot set the page to {page!r}")

            if self._page_state is not None:
                self._page_state.advance(direction)
            else:
                pages = PageState.initialize(len(self.elements), self.render_port.page_size, self.config.start_page)
                self.config = self.config.replace(start_page=pages.advance(direction))
        elif isinstance(page, bool) or not isinstance(page, int):
            raise ConfigurationError(f"Page must be a number, 'back' or 'forward', not {page!r}")
        elif self._page_state is not None:
            self._page_state.jump_to(page)
        else:
            self.config = self.config.replace(start_page=page)

        return self

    def set_timeout(self, timeout: float) -> "Navigator[T]":
        """Seconds to wait for a button press before giving up."""
        self.config = self.config.replace(timeout=timeout)
        return self

    def set_page_indicator(self, indicator: bool) -> "Navigator[T]":
        self.config = self.config.replace(show_page_indicator=bool(indicator))
        return self

    def set_delete_on_timeout(self, delete_on_timeout: bool) -> "Navigator[T]":
        self.config = self.config.replace(delete_on_timeout=bool(delete_on_timeout))
        return self

    def configure(self, settings: typing.Mapping) -> "Navigator[T]":
        """
        Applies a mapping of settings, usually read from a config file with
        :func:`pagezilla.pagination.config.load_settings`.
        """
        unknown = set(settings) - config_.SETTING_KEYS
        if unknown:
            raise ConfigurationError(f"Unknown pagination settings: {', '.join(sorted(unknown))}")

        if "timeout" in settings:
            self.set_timeout(settings["timeout"])
        if "page_indicator" in settings:
            self.set_page_indicator(settings["page_indicator"])
        if "delete_on_timeout" in settings:
            self.set_delete_on_timeout(settings["delete_on_timeout"])
        if "page" in settings:
            self.set_page(settings["page"])
        if "navigation_emojis" in settings:
            self.set_navigation_emojis(settings["navigation_emojis"])
        if "disabled_navigation_emojis" in settings:
            self.set_disabled_navigation_emojis(settings["disabled_navigation_emojis"])
        self.set_client_assets(prepare=settings.get("prepare"), prompt=settings.get("prompt"))
        return self

    ###########################################################################
    # Lifecycle.
    ###########################################################################

    def _verify(self) -> None:
        if self.state is not NavigatorState.UNINITIALIZED:
            raise ConfigurationError("This navigator has already been built")
        if not self.elements:
            raise ConfigurationError("There is nothing to paginate, call set_elements() first")
        if self.channel is None:
            raise ConfigurationError("No channel was set, call set_channel() first")

        timeout = self.config.timeout
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ConfigurationError(f"Timeout must be a positive number of seconds, not {timeout!r}")

    async def build(self) -> "Navigator[T]":
        """
        Checks the configuration and starts the navigator in the background.

        Raises:
            ConfigurationError: if the navigator cannot start as configured.
            PlatformError: if we cannot post in the channel.
        """
        try:
            self._verify()
            await self.render_port.verify(self.channel)
            self._page_state = PageState.initialize(
                len(self.elements), self.render_port.page_size, self.config.start_page
            )
        except (ConfigurationError, PlatformError) as ex:
            self.logger.error("Could not build navigator: %s", ex)
            await self.events.emit(ErrorEvent(ex))
            raise

        self.state = NavigatorState.READY
        self._task = asyncio.get_running_loop().create_task(self._run())
        return self

    async def wait_closed(self) -> NavigatorState:
        """Waits until the navigator stops, and returns the state it ended in."""
        if self._task is not None and not self._task.done():
            await asyncio.shield(self._task)
        return self.state

    async def close(self) -> None:
        """
        Stops the navigator without emitting ``finish``. This can be called
        from a function emoji callback or an event listener, in which case the
        navigator stops once that callback returns.
        """
        if self._task is None or self._task.done():
            return

        if asyncio.current_task() is self._task:
            self._closing = True
            return

        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass

    async def _run(self) -> None:
        try:
            await self._open()
            await self._listen()
        except asyncio.CancelledError:
            await self._terminate()
            raise
        except Exception as ex:
            await self._fail(ex)

    async def _open(self) -> None:
        prepare = RenderedPayload(content=self.assets.prepare)
        self.message = await self.render_port.publish(self.channel, prepare, message=self.assets.message)
        self._subscription = await self.input_source.attach(self.message, self.emojis.enabled_keys())
        await self._render()

        self.state = NavigatorState.AWAITING
        self.logger.info("Navigator started with %s page(s)", self.pages)
        await self.events.emit(StartEvent())

    async def _render(self) -> None:
        payload = self.render_port.render(self.elements, self._page_state.page, self.config)
        await self.render_port.update(self.message, payload)

    def _deadline(self) -> float:
        return asyncio.get_running_loop().time() + self.config.timeout

    async def _listen(self) -> None:
        loop = asyncio.get_running_loop()
        deadline = self._deadline()

        while True:
            if self._closing:
                await self._terminate()
                return

            self.state = NavigatorState.AWAITING
            remaining = deadline - loop.time()
            interaction = await self._next_input(remaining) if remaining > 0 else None

            if interaction is None:
                await self._expire()
                return

            if interaction is _INVALIDATED:
                self.logger.debug("Elements were replaced, going back to page 1")
                await self._render()
                deadline = self._deadline()
                continue

            if not self.authorization.is_authorized(interaction.actor_id):
                self.logger.debug("Ignoring %s from unauthorised user %s", interaction.key, interaction.actor_id)
                continue

            trigger = self.emojis.resolve(interaction.key)
            if trigger is None:
                self.logger.debug("Ignoring unknown emoji %s", interaction.key)
                continue

            self.state = NavigatorState.DISPATCHING
            await self.events.emit(ReactEvent(interaction.actor, interaction.key))
            if self._closing:
                await self._terminate()
                return

            await self._subscription.acknowledge(interaction)

            if trigger is NavigationEmoji.DELETE:
                await self._finish(interaction)
                return

            if not await self._dispatch(trigger, interaction):
                await self._expire()
                return

            deadline = self._deadline()

    async def _next_input(self, timeout: float):
        waiter = asyncio.ensure_future(self._subscription.wait_next(timeout))
        invalidated = asyncio.ensure_future(self._invalidated.wait())
        try:
            done, _ = await asyncio.wait((waiter, invalidated), return_when=asyncio.FIRST_COMPLETED)
        finally:
            for future in (waiter, invalidated):
                if not future.done():
                    future.cancel()

        # An input that was already taken off the queue must not be lost.
        if waiter in done:
            return waiter.result()

        self._invalidated.clear()
        return _INVALIDATED

    async def _dispatch(self, trigger, interaction: Interaction) -> bool:
        """Runs a button. Returns False if the navigator should expire instead."""
        if trigger in (NavigationEmoji.BACK, NavigationEmoji.FORWARD):
            self._page_state.advance(trigger)
            await self._render()
            return True

        if trigger is NavigationEmoji.JUMP:
            return await self._jump(interaction)

        return await self._call_action(trigger, interaction)

    async def _jump(self, interaction: Interaction) -> bool:
        prompt = self.assets.prompt_for(interaction.mention)
        reply = await self._subscription.wait_text(interaction.actor_id, prompt, self.config.timeout)

        if reply is None:
            self.logger.debug("Nobody answered the jump prompt")
            return False

        reply = reply.strip().lower()
        if reply in CANCEL_WORDS:
            return True

        try:
            self._page_state.jump_to(int(reply))
        except ValueError:
            self.logger.debug("Jump cancelled, %r is not a page number", reply)
            return True
        except OutOfRangeError as ex:
            self.logger.debug("Jump rejected: %s", ex)
            return True

        await self._render()
        return True

    async def _call_action(self, action: ActionTrigger, interaction: Interaction) -> bool:
        try:
            await action(interaction.actor, self.render_context)
        except Exception as ex:
            self.logger.exception("Function emoji %s raised", action.key)
            await self.events.emit(ErrorEvent(DispatchError(action.key, ex)))
            return True

        if not self._closing:
            await self._render()
        return True

    async def _dispose(self, *, clear_reactions: bool) -> None:
        subscription, self._subscription = self._subscription, None
        if subscription is None:
            return
        try:
            await subscription.dispose(clear_reactions=clear_reactions)
        except PlatformError as ex:
            self.logger.warning("Could not clean up reactions: %s", ex)

    async def _remove_message(self) -> None:
        try:
            await self.render_port.remove(self.message)
        except PlatformError as ex:
            self.logger.warning("Could not delete the message: %s", ex)

    async def _expire(self) -> None:
        self.state = NavigatorState.EXPIRED
        delete = self.config.delete_on_timeout
        await self._dispose(clear_reactions=not delete)
        if delete:
            await self._remove_message()

        self.logger.info("Navigator expired after %ss", self.config.timeout)
        await self.events.emit(ExpireEvent())

    async def _finish(self, interaction: Interaction) -> None:
        self.state = NavigatorState.TERMINATED
        await self._dispose(clear_reactions=False)
        await self._remove_message()

        self.logger.info("Navigator closed by %s", interaction.actor_id)
        await self.events.emit(FinishEvent(interaction.actor))

    async def _terminate(self) -> None:
        self.state = NavigatorState.TERMINATED
        await self._dispose(clear_reactions=True)
        self.logger.info("Navigator closed")

    async def _fail(self, ex: Exception) -> None:
        self.state = NavigatorState.FAILED
        await self._dispose(clear_reactions=False)

        if isinstance(ex, PlatformError):
            self.logger.error("Navigator failed: %s", ex)
        else:
            self.logger.exception("Navigator failed unexpectedly", exc_info=ex)
        await self.events.emit(ErrorEvent(ex))
