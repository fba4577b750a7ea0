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
Validation of IPv4 and IPv6 address literals.
"""

from __future__ import annotations

import re
from typing import Final, Optional

from _quri.exceptions import InvalidArgument


IPV4_MAX_OCTET_VALUE: Final = 255
IPV6_MAX_CIDR_PREFIX_LENGTH: Final = 128
IPV6_MAX_HEX_GROUPS: Final = 8

_match_ipv4: Final = re.compile(
    r"([0-9]{1,3})\.([0-9]{1,3})\.([0-9]{1,3})\.([0-9]{1,3})"
).fullmatch
_is_cidr_prefix_length: Final = re.compile(r"[0-9]{1,3}").fullmatch
_is_hex_group: Final = re.compile(r"[0-9A-Fa-f]{1,4}").fullmatch
_is_zone_id: Final = re.compile(r"[^\s/%]+").fullmatch


def is_valid_inet_address(address: Optional[str]) -> bool:
    return is_valid_inet_v4_address(address) or is_valid_inet_v6_address(address)


def is_valid_inet_v4_address(address: Optional[str]) -> bool:
    """
    Tests whether a string is an IPv4 address in dotted-decimal notation. Octets with
    leading zeros are rejected as these are interpreted as octal numbers by some
    implementations.

    >>> is_valid_inet_v4_address("192.168.0.1")
    True
    >>> is_valid_inet_v4_address("192.168.00.1")
    False
    """
    if not address or address.isspace():
        return False

    match = _match_ipv4(address)
    if match is None:
        return False

    for octet in match.groups():
        if len(octet) > 1 and octet.startswith("0"):
            return False
        if int(octet) > IPV4_MAX_OCTET_VALUE:
            return False

    return True


def is_valid_inet_v6_address(address: Optional[str]) -> bool:
    """
    Tests whether a string is an IPv6 address as described in RFC 4291. It may
    contain a zone index (``fe80::1%eth0``) as described in RFC 4007, a CIDR prefix
    length (``2001:db8::/32``) and an embedded IPv4 address (``::ffff:10.0.0.1``).
    """
    if not address or address.isspace():
        return False

    parts = address.split("/")
    if len(parts) > 2:
        return False
    if len(parts) == 2:
        if _is_cidr_prefix_length(parts[1]) is None:
            return False
        if int(parts[1]) > IPV6_MAX_CIDR_PREFIX_LENGTH:
            return False

    parts = parts[0].split("%")
    if len(parts) > 2:
        return False
    if len(parts) == 2 and _is_zone_id(parts[1]) is None:
        return False

    address = parts[0]
    compressed = "::" in address
    if compressed and address.find("::") != address.rfind("::"):
        return False
    if (address.startswith(":") and not address.startswith("::")) or (
        address.endswith(":") and not address.endswith("::")
    ):
        return False

    groups = address.split(":")
    while groups and not groups[-1]:
        groups.pop()
    if compressed:
        if address.endswith("::"):
            groups.append("")
        elif address.startswith("::") and groups:
            del groups[0]

    if len(groups) > IPV6_MAX_HEX_GROUPS:
        return False

    valid_groups = 0
    empty_groups = 0
    last_index = len(groups) - 1
    for index, group in enumerate(groups):
        if not group:
            empty_groups += 1
            if empty_groups > 1:
                return False
        else:
            empty_groups = 0
            if index == last_index and "." in group:
                if not is_valid_inet_v4_address(group):
                    return False
                valid_groups += 2
                continue
            if _is_hex_group(group) is None:
                return False
        valid_groups += 1

    return valid_groups <= IPV6_MAX_HEX_GROUPS and (
        valid_groups == IPV6_MAX_HEX_GROUPS or compressed
    )


def validate_inet_address(address: Optional[str]):
    if not is_valid_inet_address(address):
        raise InvalidArgument(f"Expected valid ip address. Got: {address!r}")


def validate_inet_v4_address(address: Optional[str]):
    if not is_valid_inet_v4_address(address):
        raise InvalidArgument(f"Expected valid ip v4 address. Got: {address!r}")


def validate_inet_v6_address(address: Optional[str]):
    if not is_valid_inet_v6_address(address):
        raise InvalidArgument(f"Expected valid ip v6 address. Got: {address!r}")


__all__ = (
    is_valid_inet_address.__name__,
    is_valid_inet_v4_address.__name__,
    is_valid_inet_v6_address.__name__,
    validate_inet_address.__name__,
    validate_inet_v4_address.__name__,
    validate_inet_v6_address.__name__,
)
