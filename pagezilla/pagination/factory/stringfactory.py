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
Builds a navigator over lines of text.
"""

__all__ = ("StringNavigatorFactory",)

import typing

from .basefactory import BaseNavigatorFactory
from ..layouts import StringLayout


class StringNavigatorFactory(BaseNavigatorFactory):
    """
    Collects lines of text and builds a navigator showing ``max_lines`` of
    them per page.

    Example usage::

       snf = StringNavigatorFactory(prefix="```", suffix="```", max_lines=10)

       for i in range(500):
           snf.add_line(f'{i}')

       await snf.start(ctx)

    """

    def __init__(self, *, prefix: str = "", suffix: str = "", max_lines: int = 20):
        super().__init__()
        self.prefix = prefix
        self.suffix = suffix
        self.max_lines = max_lines

    def add_line(self, line: str = "") -> "StringNavigatorFactory":
        self.elements.append(line)
        return self

    def add_lines(self, lines: typing.Iterable[str]) -> "StringNavigatorFactory":
        self.elements.extend(lines)
        return self

    def add_block(self, block: str) -> "StringNavigatorFactory":
        """Adds each line of a multi-line string."""
        return self.add_lines(block.splitlines())

    def make_layout(self) -> StringLayout:
        return StringLayout(self.max_lines, prefix=self.prefix, suffix=self.suffix)
