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
Session settings for a navigator, and loading them from config files.

A config file may hold the settings at the top level, or under a
``pagination`` key::

    pagination:
      timeout: 120
      page_indicator: true
      delete_on_timeout: false
      navigation_emojis:
        back: "⏪"
      prompt: "{{user}}, which page?"
"""

__all__ = (
    "DEFAULT_TIMEOUT",
    "DEFAULT_PREPARE",
    "DEFAULT_PROMPT",
    "SETTING_KEYS",
    "SessionConfig",
    "ClientAssets",
    "load_settings",
    "async_load_settings",
)

import dataclasses
import typing

from pagezilla import configuration_files
from pagezilla.errors import ConfigurationError

DEFAULT_TIMEOUT = 30.0

DEFAULT_PREPARE = "Preparing..."

DEFAULT_PROMPT = "{{user}}, To what page would you like to jump? Say 'cancel' or '0' to cancel the prompt."

#: Keys understood by ``Navigator.configure``.
SETTING_KEYS = frozenset(
    {
        "timeout",
        "page_indicator",
        "delete_on_timeout",
        "page",
        "navigation_emojis",
        "disabled_navigation_emojis",
        "prepare",
        "prompt",
    }
)

_SESSION_KEYS = {
    "timeout": "timeout",
    "page_indicator": "show_page_indicator",
    "delete_on_timeout": "delete_on_timeout",
    "page": "start_page",
}


@dataclasses.dataclass(frozen=True)
class SessionConfig:
    """
    Settings read by the navigator at the start of every wait. Setters replace
    the whole object, so a wait already underway is never affected.

    ``timeout`` is in seconds.
    """

    timeout: float = DEFAULT_TIMEOUT
    show_page_indicator: bool = True
    delete_on_timeout: bool = False
    start_page: int = 1

    def replace(self, **changes) -> "SessionConfig":
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_mapping(cls, data: typing.Mapping) -> "SessionConfig":
        """Builds a config from the session keys in ``data``. Other setting keys are ignored."""
        unknown = set(data) - SETTING_KEYS
        if unknown:
            raise ConfigurationError(f"Unknown pagination settings: {', '.join(sorted(unknown))}")

        kwargs = {_SESSION_KEYS[key]: value for key, value in data.items() if key in _SESSION_KEYS}
        return cls(**kwargs)


@dataclasses.dataclass
class ClientAssets:
    """
    Things the navigator shows besides the pages.

    ``message`` is an existing message to take over instead of sending a new
    one. ``prepare`` is shown while the reactions are being added. ``prompt``
    is shown when someone presses jump; ``{{user}}`` becomes a mention of them.
    """

    message: typing.Any = None
    prepare: str = DEFAULT_PREPARE
    prompt: str = DEFAULT_PROMPT

    def prompt_for(self, mention: str) -> str:
        return self.prompt.replace("{{user}}", mention)


def _settings_section(data) -> typing.Mapping:
    if not isinstance(data, typing.Mapping):
        raise ConfigurationError("Pagination config must be a mapping")
    section = data.get("pagination", data)
    if not isinstance(section, typing.Mapping):
        raise ConfigurationError("The pagination section must be a mapping")
    return section


def load_settings(file_name, *, directory=None) -> typing.Mapping:
    """Reads pagination settings from a file in the config directory."""
    return _settings_section(configuration_files.get_config_data(file_name, directory=directory))


async def async_load_settings(file_name, *, directory=None) -> typing.Mapping:
    config_file = configuration_files.get_from_config_dir(file_name, load_now=False, directory=directory)
    return _settings_section(await config_file.async_get())
