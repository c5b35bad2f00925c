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
Who is allowed to press the buttons.
"""

__all__ = ("AuthorizationFilter",)

import typing


class AuthorizationFilter:
    """
    Set of user IDs allowed to interact. An empty filter lets everyone through.
    """

    __slots__ = ("_users",)

    def __init__(self, users: typing.Iterable[int] = ()):
        self._users = frozenset(int(getattr(user, "id", user)) for user in users)

    @property
    def users(self) -> typing.FrozenSet[int]:
        return self._users

    def is_authorized(self, actor_id: int) -> bool:
        return not self._users or actor_id in self._users

    __call__ = is_authorized

    def __repr__(self):
        return f"<AuthorizationFilter users={sorted(self._users) or 'everyone'}>"
