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
Implementations of errors.
"""

__all__ = (
    "PaginationError",
    "ConfigurationError",
    "OutOfRangeError",
    "ReservedKeyError",
    "DuplicateKeyError",
    "DispatchError",
    "PlatformError",
)


class PaginationError(RuntimeError):
    """Base for anything the pagination system raises on purpose."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class ConfigurationError(PaginationError):
    """
    Raised when a navigator is configured in a way that cannot work, such as
    having nothing to paginate or nowhere to send it.
    """


class OutOfRangeError(PaginationError):
    def __init__(self, target: int, pages: int):
        self.target = target
        self.pages = pages
        super().__init__(f"Page {target} is not between 1 and {pages}")


class ReservedKeyError(PaginationError):
    """
    Raised when a function emoji would shadow an enabled navigation emoji.
    """

    def __init__(self, key: str, trigger):
        self.key = key
        self.trigger = trigger
        super().__init__(f"{key!r} is reserved by the {trigger.name} navigation emoji")


class DuplicateKeyError(PaginationError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"{key!r} is already bound to another emoji")


class DispatchError(PaginationError):
    """
    Wraps an exception raised by a function emoji callback. The original is
    available as ``original`` and as ``__cause__``.
    """

    def __init__(self, key: str, original: BaseException):
        self.key = key
        self.original = original
        super().__init__(f"Callback for {key!r} failed: {type(original).__name__}: {original}")
        self.__cause__ = original


class PlatformError(PaginationError):
    """
    Raised when the chat platform refuses to cooperate: the message or channel
    has gone, or we lack permissions. This is fatal to a running navigator.
    """
