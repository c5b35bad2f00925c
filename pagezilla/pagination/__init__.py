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
Utilities for paginating arbitrary content such as strings and embeds, in
order to fit inside a message in Discord.

The core of this is the navigator: a state machine that contains a certain
page of its elements, and provides Discord reactions (known as "buttons") that
have actions associated with them. When an authorised user (fully
customisable) interacts with said reaction, the bot will remove the reaction
and perform the given task. This enables navigation through many pages while
only displaying one message at a time. Function emojis can be added to run
any callback you desire, and lifecycle events can be listened to.

The navigator only talks to Discord through the ports in ``abc``, so the
state machine runs without a client at all given other implementations.
"""

from .abc import *
from .authorization import *
from .config import *
from .discord_io import *
from .events import *
from .factory.basefactory import *
from .factory.embedfactory import *
from .factory.stringfactory import *
from .layouts import *
from .navigator import *
from .pages import *
from .reactionbuttons import *
