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
Page cursor.
"""

__all__ = ("PageState",)

import math

from pagezilla.errors import ConfigurationError
from pagezilla.errors import OutOfRangeError
from .reactionbuttons import NavigationEmoji


class PageState:
    """
    The current page and the page count. Pages are 1-indexed, and the current
    page is always between 1 and ``pages`` inclusive.
    """

    __slots__ = ("_page", "_pages")

    def __init__(self, page: int, pages: int):
        if pages < 1:
            raise ConfigurationError("There must be at least one page")
        if not 1 <= page <= pages:
            raise OutOfRangeError(page, pages)
        self._page = page
        self._pages = pages

    @classmethod
    def initialize(cls, element_count: int, page_size: int, start_page: int = 1) -> "PageState":
        """
        Works out the page count, and clamps the start page into range.
        """
        if element_count <= 0:
            raise ConfigurationError("There is nothing to paginate")
        if page_size < 1:
            raise ConfigurationError(f"Page size must be at least 1, not {page_size}")

        pages = math.ceil(element_count / page_size)
        return cls(min(max(start_page, 1), pages), pages)

    @property
    def page(self) -> int:
        return self._page

    @property
    def pages(self) -> int:
        return self._pages

    def advance(self, direction: NavigationEmoji) -> int:
        """Moves one page back or forward, wrapping around at either end."""
        if direction is NavigationEmoji.BACK:
            self._page = self._page - 1 if self._page > 1 else self._pages
        elif direction is NavigationEmoji.FORWARD:
            self._page = self._page + 1 if self._page < self._pages else 1
        else:
            raise ValueError(f"Cannot advance in direction {direction!r}")
        return self._page

    def jump_to(self, target: int) -> int:
        if isinstance(target, bool) or not 1 <= target <= self._pages:
            raise OutOfRangeError(target, self._pages)
        self._page = target
        return self._page

    def __repr__(self):
        return f"<PageState page={self._page} pages={self._pages}>"
