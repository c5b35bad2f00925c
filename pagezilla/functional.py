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
Helpers for treating plain functions and coroutine functions alike, so
callers can register either as a callback.
"""
import functools
import inspect
import typing

__all__ = ("is_coroutine_function", "ensure_coroutine_function", "CoroutineFunction")

CoroutineFunction = typing.Callable[..., typing.Awaitable[typing.Any]]


def is_coroutine_function(what) -> bool:
    """
    Returns true for any ``async def`` function, including bound methods and
    ``functools.partial`` objects wrapping one.
    """
    while isinstance(what, functools.partial):
        what = what.func
    return inspect.iscoroutinefunction(what)


def ensure_coroutine_function(func) -> CoroutineFunction:
    """
    Ensures the given argument is awaitable. If it is not, then we wrap it in a
    coroutine function and return that.

    A plain function that happens to return an awaitable has that awaitable
    awaited too.

    Example usage::

        >>> async def foo():
        ...    ...

        >>> def bar():
        ...    ...

        >>> fns = (foo, bar)

        >>> for f in fns:
        ...    await ensure_coroutine_function(f)()
    """
    if not callable(func):
        raise TypeError(f"Expected a callable, got {type(func).__name__}")

    if is_coroutine_function(func):
        return func

    @functools.wraps(func)
    async def coroutine_fn(*args, **kwargs):
        """Wraps the function in a coroutine."""
        result = func(*args, **kwargs)
        if inspect.isawaitable(result):
            result = await result
        return result

    return coroutine_fn
