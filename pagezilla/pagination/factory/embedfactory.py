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
Builds navigators over embeds: either one embed per page, or any elements
grouped into embed fields.
"""

__all__ = ("EmbedNavigatorFactory", "FieldsNavigatorFactory")

import typing

import discord

from .basefactory import BaseNavigatorFactory
from ..layouts import EmbedsLayout
from ..layouts import FieldsEmbedLayout


class EmbedNavigatorFactory(BaseNavigatorFactory):
    """
    One embed per page::

        nav = EmbedNavigatorFactory()
        for definition in definitions:
            nav.add_embed(discord.Embed(title=definition.word, description=definition.text))
        await nav.start(ctx)
    """

    def add_embed(self, embed: discord.Embed) -> "EmbedNavigatorFactory":
        self.elements.append(embed)
        return self

    def add_embeds(self, embeds: typing.Iterable[discord.Embed]) -> "EmbedNavigatorFactory":
        self.elements.extend(embeds)
        return self

    def make_layout(self) -> EmbedsLayout:
        return EmbedsLayout()


class FieldsNavigatorFactory(BaseNavigatorFactory):
    """
    Several elements per page, shown as fields of a template embed::

        nav = FieldsNavigatorFactory(per_page=10, embed=discord.Embed(title="Roles"))
        nav.format_field("Role", lambda r: r.mention)
        nav.format_field("Members", lambda r: len(r.members))
        nav.add_elements(ctx.guild.roles)
        await nav.start(ctx)
    """

    def __init__(self, *, per_page: int = 10, embed: typing.Optional[discord.Embed] = None):
        super().__init__()
        self.per_page = per_page
        self.embed = embed
        self.fields: typing.List[typing.Tuple[str, typing.Callable, bool]] = []

    def add_element(self, element) -> "FieldsNavigatorFactory":
        self.elements.append(element)
        return self

    def add_elements(self, elements: typing.Iterable) -> "FieldsNavigatorFactory":
        self.elements.extend(elements)
        return self

    def format_field(self, name: str, formatter: typing.Callable, inline: bool = True) -> "FieldsNavigatorFactory":
        self.fields.append((name, formatter, inline))
        return self

    def make_layout(self) -> FieldsEmbedLayout:
        layout = FieldsEmbedLayout(self.per_page, embed=self.embed)
        for name, formatter, inline in self.fields:
            layout.format_field(name, formatter, inline)
        return layout
