# Copyright (C) 2025  The quri authors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Final, Optional, TypeVar

from _quri.exceptions import InvalidArgument


if TYPE_CHECKING:
    from collections.abc import Iterator


_E = TypeVar("_E", bound=BaseException)

_contains_whitespace: Final = re.compile(r"\s").search


# argument checks


def expect_non_empty(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise InvalidArgument(f"Expected {name} to be a string. Got: {value!r}")
    if not value:
        raise InvalidArgument(f"Expected non-empty {name}.")
    return value


def expect_no_whitespaces(value: Any, name: str) -> str:
    expect_non_empty(value, name)
    if _contains_whitespace(value):
        raise InvalidArgument(f"Expected {name} without whitespaces. Got: {value!r}")
    return value


# strings


def empty_to_none(value: Optional[str]) -> Optional[str]:
    return value or None


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value or value.isspace()


# exceptions


def iterate_causes(exception: BaseException) -> Iterator[BaseException]:
    """
    Yields the given exception and those that it was caused by, from the outermost
    to the innermost one. Explicit causes take precedence over the implicit context.
    """
    visited: set[int] = set()
    current: Optional[BaseException] = exception
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def get_root_cause_of_type(
    exception: BaseException, type_: type[_E]
) -> Optional[_E]:
    """
    Returns the innermost exception of the given type in an exception's chain of
    causes.

    >>> try:
    ...     try:
    ...         raise KeyError("inner")
    ...     except KeyError as e:
    ...         raise RuntimeError("outer") from e
    ... except RuntimeError as e:
    ...     get_root_cause_of_type(e, KeyError)
    KeyError('inner')
    """
    result = None
    for cause in iterate_causes(exception):
        if isinstance(cause, type_):
            result = cause
    return result


__all__ = (
    empty_to_none.__name__,
    expect_no_whitespaces.__name__,
    expect_non_empty.__name__,
    get_root_cause_of_type.__name__,
    is_blank.__name__,
    iterate_causes.__name__,
)
