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
Parsing of URI strings and query strings into :class:`UriBuilder` instances.
"""

from __future__ import annotations

from typing import Optional

from _quri.builder import UriBuilder
from _quri.exceptions import (
    InvalidArgument,
    InvalidUri,
    MalformedHttpUrl,
    MalformedUri,
    QuriBaseException,
)
from _quri.grammar import query_parameter_pattern, uri_pattern
from _quri.profiles import ComponentProfile
from _quri.utils import get_root_cause_of_type


def parse_query(query: str) -> dict[str, list[str]]:
    """
    Splits an encoded query string into decoded parameters. A leading ``?`` is
    ignored, so are parameters with an empty name. Names without a value map to an
    empty list:

    >>> parse_query("a=1&a=2&b=&c")
    {'a': ['1', '2'], 'b': [''], 'c': []}

    :raises InvalidUri: If the query isn't validly encoded.
    """
    if not isinstance(query, str):
        raise InvalidArgument("A query string must be a string.")
    if query.startswith("?"):
        query = query[1:]
    ComponentProfile.QUERY.check_valid_encoded(query)

    decode = ComponentProfile.QUERY_PARAM.validate_and_decode
    result: dict[str, list[str]] = {}
    for match in query_parameter_pattern.finditer(query):
        if not (name := match.group("name")):
            continue
        values = result.setdefault(decode(name), [])
        if (value := match.group("value")) is not None:
            values.append(decode(value))
    return result


def parse_uri(uri: str) -> UriBuilder:
    """
    Parses an encoded URI into a builder with decoded components.

    :raises MalformedUri: If the string isn't a valid URI. The deepest validation
                          error is given as ``reason``.
    """
    if not isinstance(uri, str):
        raise InvalidArgument("A URI must be a string.")
    if (match := uri_pattern.fullmatch(uri)) is None:
        raise MalformedUri(uri)

    try:
        builder = _builder_from_match(uri, match)
        builder.build()
    except QuriBaseException as e:
        root_cause = get_root_cause_of_type(e, QuriBaseException)
        raise MalformedUri(uri, str(root_cause)) from e

    return builder


def parse_uri_or_none(uri: Optional[str]) -> Optional[UriBuilder]:
    if uri is None:
        return None
    try:
        return parse_uri(uri)
    except QuriBaseException:
        return None


def parse_url(url: str) -> UriBuilder:
    """
    Parses an encoded hierarchical URI with the ``http`` or ``https`` scheme.

    :raises MalformedHttpUrl: If the string isn't a valid URI or a URI of another
                              kind.
    """
    try:
        builder = parse_uri(url)
    except MalformedUri as e:
        raise MalformedHttpUrl(url, e.reason) from e

    if not builder.build().is_http_url:
        raise MalformedHttpUrl(url, "Expected a hierarchical URI with http(s) scheme")
    return builder


def parse_url_or_none(url: Optional[str]) -> Optional[UriBuilder]:
    if url is None:
        return None
    try:
        return parse_url(url)
    except QuriBaseException:
        return None


def _builder_from_match(uri: str, match) -> UriBuilder:
    builder = UriBuilder()
    scheme = match.group("scheme")
    fragment = match.group("fragment")

    opaque = False
    if scheme:
        opaque = not uri[len(scheme) :].startswith(":/")
        builder.set_scheme(ComponentProfile.SCHEME.validate_and_decode(scheme))
    elif uri.startswith("//"):
        builder.set_protocol_relative(True)

    if opaque:
        scheme_specific_part = uri[len(scheme) + 1 :]
        if fragment is not None:
            scheme_specific_part = scheme_specific_part[: -len(fragment) - 1]
        builder.set_scheme_specific_part(
            ComponentProfile.SCHEME_SPECIFIC_PART.validate_and_decode(
                scheme_specific_part
            )
        )
    else:
        if (user_info := match.group("userinfo")) is not None:
            builder.set_user_info(
                ComponentProfile.USER_INFO.validate_and_decode(user_info)
            )
        if (host := match.group("host")) is not None:
            builder.set_host(ComponentProfile.HOST.validate_and_decode(host))
        # an empty port denotes the scheme's default
        if port := match.group("port"):
            port = ComponentProfile.PORT.validate_and_decode(port)
            if not (port.isascii() and port.isdigit()):
                raise InvalidUri(f"Invalid port: {port!r}")
            builder.set_port(int(port))
        builder.set_path(match.group("path"))
        if (query := match.group("query")) is not None:
            builder.set_query_multi_params(parse_query(query))

    if fragment is not None:
        builder.set_fragment(ComponentProfile.FRAGMENT.validate_and_decode(fragment))
    return builder


__all__ = (
    parse_query.__name__,
    parse_uri.__name__,
    parse_uri_or_none.__name__,
    parse_url.__name__,
    parse_url_or_none.__name__,
)
