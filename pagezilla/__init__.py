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
Reaction-driven pagination for Discord messages.

A single message shows one page of a collection at a time. Reactions on
that message ("buttons") move between pages, jump to a page, close the
message, or run custom callbacks.
"""

__author__ = "Nekokatt"
__license__ = "GPLv3"
__version__ = "1.0.0"
