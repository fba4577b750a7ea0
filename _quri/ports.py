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

from typing import Any, Final

from _quri.exceptions import InvalidArgument


SCHEME_DEFAULT_PORT: Final = -1
"""Denotes that no explicit port is given and the scheme's default applies."""
MIN_PORT: Final = 0
MAX_PORT: Final = 65535


def is_scheme_default(port: int) -> bool:
    return port == SCHEME_DEFAULT_PORT


def is_valid_port_number(port: Any) -> bool:
    return _is_int(port) and MIN_PORT <= port <= MAX_PORT


def is_valid_port_number_or_scheme_default(port: Any) -> bool:
    return _is_int(port) and SCHEME_DEFAULT_PORT <= port <= MAX_PORT


def validate_port_number(port: Any):
    if not is_valid_port_number(port):
        raise InvalidArgument(
            f"Expected port number in range [{MIN_PORT}, {MAX_PORT}]. Got: {port!r}"
        )


def validate_port_number_or_scheme_default(port: Any):
    if not is_valid_port_number_or_scheme_default(port):
        raise InvalidArgument(
            f"Expected port number in range [{SCHEME_DEFAULT_PORT}, {MAX_PORT}]. "
            f"Got: {port!r}"
        )


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


__all__ = (
    "MAX_PORT",
    "MIN_PORT",
    "SCHEME_DEFAULT_PORT",
    is_scheme_default.__name__,
    is_valid_port_number.__name__,
    is_valid_port_number_or_scheme_default.__name__,
    validate_port_number.__name__,
    validate_port_number_or_scheme_default.__name__,
)
