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
Character classes and syntax patterns of `RFC 3986 "Uniform Resource Identifier
(URI): Generic Syntax" <https://datatracker.ietf.org/doc/html/rfc3986>`_.
"""

from __future__ import annotations

import re
from typing import Final


# character classes

ALPHABETIC: Final = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
NUMERIC: Final = "0123456789"
ALPHANUMERIC: Final = ALPHABETIC + NUMERIC
HEXADECIMAL_DIGITS: Final = "0123456789ABCDEFabcdef"

# https://datatracker.ietf.org/doc/html/rfc3986#section-2.2
URI_DELIMITERS: Final = ":/?#[]@"
URI_SUB_DELIMITERS: Final = "!$&'()*+,;="
URI_RESERVED: Final = URI_DELIMITERS + URI_SUB_DELIMITERS
# https://datatracker.ietf.org/doc/html/rfc3986#section-2.3
URI_UNRESERVED: Final = ALPHANUMERIC + "-._~"
# https://datatracker.ietf.org/doc/html/rfc3986#section-3.3
URI_PCHAR: Final = ":@" + URI_UNRESERVED + URI_SUB_DELIMITERS


def _without(characters: str, *excluded: str) -> str:
    return "".join(c for c in characters if c not in excluded)


SCHEME_ALLOWED: Final = ALPHANUMERIC + "+-."
SCHEME_SPECIFIC_PART_ALLOWED: Final = SCHEME_ALLOWED + URI_PCHAR + URI_RESERVED
USER_INFO_ALLOWED: Final = URI_UNRESERVED + URI_SUB_DELIMITERS + ":"
HOST_ALLOWED: Final = URI_UNRESERVED + URI_SUB_DELIMITERS + "[]:"
PORT_ALLOWED: Final = NUMERIC
PATH_SEGMENT_ALLOWED: Final = URI_PCHAR
QUERY_ALLOWED: Final = URI_PCHAR + "/?"
# "=" and "&" separate query parameters and their values
QUERY_PARAM_ALLOWED: Final = _without(QUERY_ALLOWED, "=", "&")
# "?", "/" and ":" are legal within a query, yet commonly mishandled by consumers
QUERY_PARAM_NARROW_ALLOWED: Final = _without(QUERY_PARAM_ALLOWED, "?", "/", ":")
FRAGMENT_ALLOWED: Final = URI_PCHAR + "/?"


# patterns

_patterns: dict[str, str] = {}
for name, pattern in reversed(
    (
        # https://datatracker.ietf.org/doc/html/rfc3986#appendix-B
        (
            "URI",
            r"(?:{scheme}:)?"
            r"(?://(?:{userinfo}@)?{host}(?::{port})?)?"
            r"{path}(?:\?{query})?(?:\#{fragment})?",
        ),
        ("scheme", r"(?P<scheme>[^:/?#]+)"),
        ("userinfo", r"(?P<userinfo>[^@\[/?#]*)"),
        ("host", r"(?P<host>{IP_literal}|{plain_host})"),
        ("IP_literal", r"(?P<ip_literal>\[[0-9A-Fa-f:.]*[%0-9A-Za-z]*\])"),
        ("plain_host", r"(?P<plain_host>[^\[/?#:]*)"),
        ("port", r"(?P<port>[^/?#]*)"),
        ("path", r"(?P<path>[^?#]*)"),
        ("query", r"(?P<query>[^#]*)"),
        ("fragment", r"(?P<fragment>.*)"),
        # QUERY PARAMETERS
        (
            "query_parameter",
            r"(?:^|(?<=&))(?P<name>[^&=]*)(?:=(?P<value>[^&]*))?(?=&|\Z)",
        ),
        # SYNTAX CHECKS
        ("scheme_syntax", r"[A-Za-z][A-Za-z0-9+.-]*"),
        ("host_name", r"{label}(?:\.{label})*"),
        ("label", r"(?!-)[A-Za-z0-9-]{{1,63}}(?<!-)"),
    )
):
    _patterns[name] = pattern.format(**_patterns)


uri_pattern: Final = re.compile(_patterns["URI"])
query_parameter_pattern: Final = re.compile(_patterns["query_parameter"])

_is_host_name: Final = re.compile(_patterns["host_name"]).fullmatch
_is_scheme: Final = re.compile(_patterns["scheme_syntax"]).fullmatch
del _patterns


MAX_HOST_NAME_LENGTH: Final = 253


def is_host_name(string: str) -> bool:
    """Tests whether a string is a DNS host name as described in RFC 1123."""
    return len(string) <= MAX_HOST_NAME_LENGTH and _is_host_name(string) is not None


def is_scheme(string: str) -> bool:
    return _is_scheme(string) is not None


__all__ = (
    "ALPHABETIC",
    "ALPHANUMERIC",
    "FRAGMENT_ALLOWED",
    "HEXADECIMAL_DIGITS",
    "HOST_ALLOWED",
    "NUMERIC",
    "PATH_SEGMENT_ALLOWED",
    "PORT_ALLOWED",
    "QUERY_ALLOWED",
    "QUERY_PARAM_ALLOWED",
    "QUERY_PARAM_NARROW_ALLOWED",
    "SCHEME_ALLOWED",
    "SCHEME_SPECIFIC_PART_ALLOWED",
    "URI_DELIMITERS",
    "URI_PCHAR",
    "URI_RESERVED",
    "URI_SUB_DELIMITERS",
    "URI_UNRESERVED",
    "USER_INFO_ALLOWED",
    is_host_name.__name__,
    is_scheme.__name__,
    "query_parameter_pattern",
    "uri_pattern",
)
