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
Reaction buttons. There are two kinds:

- navigation emojis: the fixed set of back, jump, forward and delete. Each
  can be rebound to a different emoji, or disabled.
- function emojis: any other emoji, bound to a callback of your choosing.

A function emoji may never share an emoji with an enabled navigation emoji.
"""

__all__ = ("NavigationEmoji", "ALL", "DEFAULT_NAVIGATION_EMOJIS", "ActionTrigger", "EmojiRegistry")

import enum
import typing
from dataclasses import dataclass

from pagezilla import functional
from pagezilla import logging_utils
from pagezilla.errors import ConfigurationError
from pagezilla.errors import DuplicateKeyError
from pagezilla.errors import ReservedKeyError


class NavigationEmoji(enum.Enum):
    BACK = "back"
    JUMP = "jump"
    FORWARD = "forward"
    DELETE = "delete"
    TERMINATE = "delete"

    @classmethod
    def parse(cls, identifier) -> "NavigationEmoji":
        if isinstance(identifier, cls):
            return identifier
        try:
            return cls[str(identifier).upper()]
        except KeyError:
            raise ConfigurationError(f"{identifier!r} is not a navigation emoji") from None


#: Identifier that stands for every navigation emoji when disabling.
ALL = "ALL"

DEFAULT_NAVIGATION_EMOJIS: typing.Dict[NavigationEmoji, str] = {
    NavigationEmoji.BACK: "\N{BLACK LEFT-POINTING TRIANGLE}",
    NavigationEmoji.JUMP: "\N{NORTH EAST ARROW}",
    NavigationEmoji.FORWARD: "\N{BLACK RIGHT-POINTING TRIANGLE}",
    NavigationEmoji.DELETE: "\N{WASTEBASKET}",
}


@dataclass(frozen=True)
class ActionTrigger:
    """A function emoji. Calling it awaits the callback, sync or not."""

    key: str
    callback: typing.Callable

    async def __call__(self, actor, context):
        return await functional.ensure_coroutine_function(self.callback)(actor, context)


class EmojiRegistry(logging_utils.Loggable):
    """
    Keeps track of which emojis mean what, and which navigation emojis are
    turned on.
    """

    def __init__(self):
        self._navigation: typing.Dict[NavigationEmoji, str] = dict(DEFAULT_NAVIGATION_EMOJIS)
        self._disabled: typing.Set[NavigationEmoji] = set()
        self._actions: typing.Dict[str, ActionTrigger] = {}

    @property
    def navigation_emojis(self) -> typing.Dict[NavigationEmoji, str]:
        return dict(self._navigation)

    @property
    def function_emojis(self) -> typing.Dict[str, ActionTrigger]:
        return dict(self._actions)

    @property
    def disabled(self) -> typing.FrozenSet[NavigationEmoji]:
        return frozenset(self._disabled)

    def _enabled_navigation(self) -> typing.Dict[str, NavigationEmoji]:
        return {key: trigger for trigger, key in self._navigation.items() if trigger not in self._disabled}

    def is_enabled(self, trigger) -> bool:
        if isinstance(trigger, str) and trigger.upper() == ALL:
            return not self._disabled
        return NavigationEmoji.parse(trigger) not in self._disabled

    def register_action(self, key: str, callback) -> ActionTrigger:
        """Adds a function emoji, replacing any function emoji on the same key."""
        if not callable(callback):
            raise TypeError(f"Callback for {key!r} is not callable")

        reserved_by = self._enabled_navigation().get(key)
        if reserved_by is not None:
            raise ReservedKeyError(key, reserved_by)

        action = ActionTrigger(key, callback)
        self._actions[key] = action
        self.logger.debug("Registered function emoji %s", key)
        return action

    def register_actions(self, actions: typing.Mapping[str, typing.Callable]) -> None:
        """Adds several function emojis. Either all of them are added, or none."""
        enabled = self._enabled_navigation()
        for key, callback in actions.items():
            if key in enabled:
                raise ReservedKeyError(key, enabled[key])
            if not callable(callback):
                raise TypeError(f"Callback for {key!r} is not callable")

        for key, callback in actions.items():
            self.register_action(key, callback)

    def deregister_action(self, key: str) -> None:
        self._actions.pop(key, None)

    def clear_actions(self) -> None:
        self._actions.clear()

    def reset_all(self) -> None:
        """Deletes all function emojis, then restores every navigation emoji."""
        self._actions.clear()
        self._navigation = dict(DEFAULT_NAVIGATION_EMOJIS)
        self._disabled.clear()

    def set_disabled(self, identifiers: typing.Iterable) -> None:
        """
        Disables navigation emojis. Passing ``"ALL"`` disables every one of them.

        This never re-enables anything that is already disabled.
        """
        to_disable = set()
        for identifier in identifiers:
            if isinstance(identifier, str) and identifier.upper() == ALL:
                to_disable.update(DEFAULT_NAVIGATION_EMOJIS)
            else:
                to_disable.add(NavigationEmoji.parse(identifier))

        self._disabled |= to_disable

    def rebind_navigation(self, keys: typing.Mapping) -> None:
        """
        Changes the emoji used for one or more navigation emojis. A rebound
        navigation emoji is enabled again.
        """
        new_keys = {NavigationEmoji.parse(trigger): key for trigger, key in keys.items()}

        seen = set()
        for trigger, key in new_keys.items():
            if key in seen or key in self._actions:
                raise DuplicateKeyError(key)
            seen.add(key)

            for other_key, other in self._enabled_navigation().items():
                if other_key == key and other not in new_keys:
                    raise DuplicateKeyError(key)

        self._navigation.update(new_keys)
        self._disabled.difference_update(new_keys)

    def resolve(self, key: str) -> typing.Union[NavigationEmoji, ActionTrigger, None]:
        """What an emoji does right now, or ``None`` if it does nothing."""
        trigger = self._enabled_navigation().get(key)
        if trigger is not None:
            return trigger
        return self._actions.get(key)

    def enabled_keys(self) -> typing.List[str]:
        """The emojis to react with, in the order they should appear."""
        keys = [key for key, _ in sorted(self._enabled_navigation().items(), key=_navigation_order)]
        keys.extend(self._actions)
        return keys


_ORDER = list(DEFAULT_NAVIGATION_EMOJIS)


def _navigation_order(pair):
    return _ORDER.index(pair[1])
