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

"""
Validators for IP addresses and port numbers as well as helpers to examine chains
of exceptions.
"""

from __future__ import annotations

from _quri.inet import (
    is_valid_inet_address,
    is_valid_inet_v4_address,
    is_valid_inet_v6_address,
    validate_inet_address,
    validate_inet_v4_address,
    validate_inet_v6_address,
)
from _quri.ports import (
    MAX_PORT,
    MIN_PORT,
    SCHEME_DEFAULT_PORT,
    is_scheme_default,
    is_valid_port_number,
    is_valid_port_number_or_scheme_default,
    validate_port_number,
    validate_port_number_or_scheme_default,
)
from _quri.utils import get_root_cause_of_type, iterate_causes


__all__ = (
    "MAX_PORT",
    "MIN_PORT",
    "SCHEME_DEFAULT_PORT",
    get_root_cause_of_type.__name__,
    is_scheme_default.__name__,
    is_valid_inet_address.__name__,
    is_valid_inet_v4_address.__name__,
    is_valid_inet_v6_address.__name__,
    is_valid_port_number.__name__,
    is_valid_port_number_or_scheme_default.__name__,
    iterate_causes.__name__,
    validate_inet_address.__name__,
    validate_inet_v4_address.__name__,
    validate_inet_v6_address.__name__,
    validate_port_number.__name__,
    validate_port_number_or_scheme_default.__name__,
)
