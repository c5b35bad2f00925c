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
Layouts decide what a page looks like. The navigator never cares which one
is in use; it only asks for the page size and for a rendered page.
"""

__all__ = ("Layout", "EmbedsLayout", "FieldsEmbedLayout", "StringLayout", "page_indicator", "trunc")

import math
import typing
from abc import ABC
from abc import abstractmethod

import discord

from pagezilla.errors import ConfigurationError
from .abc import RenderedPayload

#: Discord limits.
MAX_CONTENT = 2000
MAX_FIELD_VALUE = 1024
MAX_FOOTER = 2048


def trunc(text: str, max_length: int = MAX_CONTENT) -> str:
    """Truncates output if it is too long."""
    if len(text) <= max_length:
        return text
    return text[0 : max_length - 3] + "..."


def page_indicator(page: int, pages: int) -> str:
    return f"Page {page} of {pages}"


class Layout(ABC):
    page_size: int = 1

    def pages(self, element_count: int) -> int:
        return max(1, math.ceil(element_count / self.page_size))

    def chunk(self, elements: typing.Sequence, page: int) -> typing.Sequence:
        """The elements on the given 1-indexed page."""
        start = (page - 1) * self.page_size
        return elements[start : start + self.page_size]

    def validate(self) -> None:
        """Raises ``ConfigurationError`` if this layout cannot render anything."""

    @abstractmethod
    def render(self, elements: typing.Sequence, page: int, config) -> RenderedPayload:
        ...


class EmbedsLayout(Layout):
    """One ``discord.Embed`` per page. The page indicator goes in the footer."""

    page_size = 1

    def render(self, elements, page, config) -> RenderedPayload:
        embed = elements[page - 1].copy()

        if config.show_page_indicator:
            indicator = page_indicator(page, self.pages(len(elements)))
            footer = embed.footer
            text = f"{indicator} \N{BULLET} {footer.text}" if footer.text else indicator
            embed.set_footer(text=trunc(text, MAX_FOOTER), icon_url=footer.icon_url)

        return RenderedPayload(embed=embed)


class FieldsEmbedLayout(Layout):
    """
    Groups several elements onto each page, shown as embed fields. Each field
    formats every element on the page, one line per element::

        layout = FieldsEmbedLayout(10, embed=discord.Embed(title="Members"))
        layout.format_field("Name", lambda m: m.display_name)
        layout.format_field("Joined", lambda m: m.joined_at.date())
    """

    def __init__(self, elements_per_page: int = 10, *, embed: typing.Optional[discord.Embed] = None):
        if elements_per_page < 1:
            raise ConfigurationError(f"Elements per page must be at least 1, not {elements_per_page}")
        self.page_size = elements_per_page
        self.embed = embed if embed is not None else discord.Embed()
        self.fields: typing.List[typing.Tuple[str, typing.Callable, bool]] = []

    def format_field(self, name: str, formatter: typing.Callable, inline: bool = True) -> "FieldsEmbedLayout":
        self.fields.append((name, formatter, inline))
        return self

    def validate(self) -> None:
        if not self.fields:
            raise ConfigurationError("A fields embed needs at least one field, see format_field()")

    def render(self, elements, page, config) -> RenderedPayload:
        self.validate()
        embed = self.embed.copy()
        chunk = self.chunk(elements, page)

        for name, formatter, inline in self.fields:
            value = "\n".join(str(formatter(element)) for element in chunk)
            embed.add_field(name=name, value=trunc(value or "\N{ZERO WIDTH SPACE}", MAX_FIELD_VALUE), inline=inline)

        if config.show_page_indicator:
            embed.set_footer(text=page_indicator(page, self.pages(len(elements))))

        return RenderedPayload(embed=embed)


class StringLayout(Layout):
    """
    Plain text pages, a fixed number of lines each. Use ``prefix="```"`` and
    ``suffix="```"`` for code blocks.
    """

    def __init__(self, lines_per_page: int = 20, *, prefix: str = "", suffix: str = ""):
        if lines_per_page < 1:
            raise ConfigurationError(f"Lines per page must be at least 1, not {lines_per_page}")
        self.page_size = lines_per_page
        self.prefix = prefix
        self.suffix = suffix

    def render(self, elements, page, config) -> RenderedPayload:
        footer = ""
        if config.show_page_indicator:
            footer = f"\n*{page_indicator(page, self.pages(len(elements)))}*"

        # Truncate the body only, so the code block and footer stay intact.
        budget = MAX_CONTENT - len(footer)
        if self.prefix:
            budget -= len(self.prefix) + 1
        if self.suffix:
            budget -= len(self.suffix) + 1
        content = trunc("\n".join(str(line) for line in self.chunk(elements, page)), max(budget, 3))

        if self.prefix:
            content = f"{self.prefix}\n{content}"
        if self.suffix:
            content = f"{content}\n{self.suffix}"

        return RenderedPayload(content=content + footer)
