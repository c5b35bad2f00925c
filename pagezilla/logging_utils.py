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
Loggable class, and the logging setup shared by anything embedding us.
"""
import logging  # Logging (duh!)
import os
import typing

__all__ = ("Loggable", "configure_logging")

LOGGERS_TO_SUPPRESS = ["discord.http"]

SUPPRESS_TO_LEVEL = "FATAL"

LOG_FORMAT = "%(asctime)s.%(msecs)03d L:%(levelname)s M:%(module)s F:%(funcName)s: %(message)s"

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class Loggable:
    """Adds functionality to a class to allow it to log information."""

    logger: logging.Logger

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.logger: logging.Logger = logging.getLogger(cls.__name__)


def configure_logging(level: typing.Union[str, int, None] = None):
    """
    Sets up the root logger. The level defaults to the ``LOGGER_LEVEL``
    environment variable, or ``INFO`` if that is unset.
    """
    if level is None:
        level = os.getenv("LOGGER_LEVEL", "INFO")

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=DATE_FORMAT)

    for other_logger in LOGGERS_TO_SUPPRESS:
        other_logger = logging.getLogger(other_logger)
        other_logger.setLevel(SUPPRESS_TO_LEVEL)

    return logging.getLogger("pagezilla")
