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
The immutable representation of a URI's components and its serialization.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from io import StringIO
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final, NamedTuple, Optional
from urllib.parse import SplitResult, urlsplit

from _quri.exceptions import InvalidArgument, InvalidUri, QuriBaseException
from _quri.grammar import is_host_name, is_scheme
from _quri.inet import is_valid_inet_v4_address, is_valid_inet_v6_address
from _quri.ports import (
    SCHEME_DEFAULT_PORT,
    is_valid_port_number,
    validate_port_number_or_scheme_default,
)
from _quri.profiles import ComponentProfile
from _quri.utils import expect_no_whitespaces, expect_non_empty

if TYPE_CHECKING:
    from _quri.builder import UriBuilder
    from _quri.typing import QueryMultiParams


HTTP_SCHEMES: Final = frozenset(("http", "https"))

_contains_whitespace: Final = re.compile(r"\s").search
_is_dotted_decimal: Final = re.compile(r"[0-9.]+").fullmatch


# authority


class UriAuthority(NamedTuple):
    """
    The authority part of a hierarchical URI. Use :meth:`UriAuthority.of` to create
    validated instances.
    """

    user_info: Optional[str] = None
    host: Optional[str] = None
    port: int = SCHEME_DEFAULT_PORT

    @classmethod
    def empty(cls) -> UriAuthority:
        return EMPTY_AUTHORITY

    @classmethod
    def of(
        cls,
        user_info: Optional[str] = None,
        host: Optional[str] = None,
        port: int = SCHEME_DEFAULT_PORT,
    ) -> UriAuthority:
        if host is not None:
            expect_no_whitespaces(host, "host")
        if user_info is not None:
            expect_non_empty(user_info, "user_info")
        validate_port_number_or_scheme_default(port)
        if user_info is None and host is None and port == SCHEME_DEFAULT_PORT:
            return EMPTY_AUTHORITY
        return cls(user_info, None if host is None else host.lower(), port)

    @property
    def is_empty(self) -> bool:
        return self == EMPTY_AUTHORITY

    @property
    def uses_scheme_default_port(self) -> bool:
        return self.port == SCHEME_DEFAULT_PORT


EMPTY_AUTHORITY: Final = UriAuthority()


# validation


def check_host(host: str):
    if host.startswith("["):
        if not host.endswith("]") or not is_valid_inet_v6_address(host[1:-1]):
            raise InvalidUri(f"Invalid IPv6 host: {host!r}")
    elif _contains_whitespace(host) or any(c in host for c in "[]:"):
        raise InvalidUri(f"Invalid host: {host!r}")


def check_port(port: Any):
    if not is_valid_port_number(port):
        raise InvalidUri(f"Invalid port: {port!r}")


def check_scheme(scheme: str):
    if not is_scheme(scheme):
        raise InvalidUri(f"Invalid scheme: {scheme!r}")


def is_valid_http_host(host: str) -> bool:
    if host.startswith("[") and host.endswith("]"):
        return is_valid_inet_v6_address(host[1:-1])
    if _is_dotted_decimal(host):
        return is_valid_inet_v4_address(host)
    return is_host_name(host)


# construction


def build_opaque(
    scheme: Optional[str], scheme_specific_part: str, fragment: Optional[str] = None
) -> UriComponents:
    """
    Creates the components of an opaque URI like ``mailto:info@example.org``.

    :raises InvalidUri: If the scheme is invalid or the scheme specific part is empty.
    """
    if not isinstance(scheme_specific_part, str) or not scheme_specific_part:
        raise InvalidUri("An opaque URI must have a scheme specific part.")
    if scheme is not None:
        check_scheme(scheme)
        scheme = scheme.lower()
    return UriComponents(
        scheme=scheme,
        scheme_specific_part=scheme_specific_part,
        fragment=fragment or None,
    )


def build_hierarchical(
    scheme: Optional[str] = None,
    user_info: Optional[str] = None,
    host: Optional[str] = None,
    port: int = SCHEME_DEFAULT_PORT,
    protocol_relative: bool = False,
    root_path: bool = False,
    path_segments: Sequence[str] = (),
    query_params: Optional[QueryMultiParams] = None,
    fragment: Optional[str] = None,
) -> UriComponents:
    """
    Creates the components of a hierarchical URI from decoded values.

    :raises InvalidUri: If the components don't form a valid URI.
    """
    user_info = user_info or None
    host = host or None

    if host is None:
        if user_info is not None:
            raise InvalidUri("URI with user info must include host")
        if port != SCHEME_DEFAULT_PORT:
            raise InvalidUri("URI with port must include host")
    if scheme is not None and protocol_relative:
        raise InvalidUri("URI cannot be protocol relative and have a scheme")

    if scheme is not None:
        check_scheme(scheme)
        scheme = scheme.lower()
    if host is not None:
        check_host(host)
        host = host.lower()
    if port != SCHEME_DEFAULT_PORT:
        check_port(port)

    for segment in path_segments:
        if not isinstance(segment, str) or not segment:
            raise InvalidUri(f"Invalid path segment: {segment!r}")

    if query_params is None:
        query_params = {}
    for name, values in query_params.items():
        if not isinstance(name, str) or not name:
            raise InvalidUri(f"Invalid query parameter name: {name!r}")
        if any(not isinstance(v, str) for v in values):
            raise InvalidUri(f"Invalid value for query parameter {name!r}: {values!r}")

    return UriComponents(
        scheme=scheme,
        user_info=user_info,
        host=host,
        port=port,
        protocol_relative=protocol_relative,
        root_path=root_path
        or host is not None
        or (bool(path_segments) and (scheme is not None or protocol_relative)),
        path_segments=path_segments,
        query_params=query_params,
        fragment=fragment or None,
    )


def empty() -> UriComponents:
    return EMPTY_COMPONENTS


# components


class UriComponents:
    """
    The decoded components of either an *opaque* or a *hierarchical* URI. Instances
    are immutable, they are obtained from the ``from_*`` class methods, from
    :meth:`UriBuilder.build` or with the functions :func:`build_opaque` and
    :func:`build_hierarchical`. Don't initialize this class directly.

    >>> components = UriComponents.from_uri("https://example.org/a%20b?q=1#top")
    >>> components.path_segments
    ('a b',)
    >>> components.query_param("q")
    '1'
    >>> str(components)
    'https://example.org/a%20b?q=1#top'

    Instances compare equal when all their components are equal, including the order
    of query parameters.
    """

    __slots__ = (
        "_fragment",
        "_host",
        "_path_segments",
        "_port",
        "_protocol_relative",
        "_query_params",
        "_root_path",
        "_scheme",
        "_scheme_specific_part",
        "_user_info",
    )

    def __init__(
        self,
        *,
        scheme: Optional[str] = None,
        scheme_specific_part: Optional[str] = None,
        user_info: Optional[str] = None,
        host: Optional[str] = None,
        port: int = SCHEME_DEFAULT_PORT,
        protocol_relative: bool = False,
        root_path: bool = False,
        path_segments: Sequence[str] = (),
        query_params: Optional[QueryMultiParams] = None,
        fragment: Optional[str] = None,
    ):
        self._scheme: Final = scheme
        self._scheme_specific_part: Final = scheme_specific_part
        self._user_info: Final = user_info
        self._host: Final = host
        self._port: Final = port
        self._protocol_relative: Final = protocol_relative
        self._root_path: Final = root_path
        self._path_segments: Final = tuple(path_segments)
        self._query_params: Final[Mapping[str, tuple[str, ...]]] = MappingProxyType(
            {k: tuple(v) for k, v in (query_params or {}).items()}
        )
        self._fragment: Final = fragment

    # factories

    @classmethod
    def builder(cls) -> UriBuilder:
        from _quri.builder import UriBuilder

        return UriBuilder()

    @classmethod
    def empty(cls) -> UriComponents:
        return EMPTY_COMPONENTS

    @classmethod
    def from_http_url(cls, url: Optional[str]) -> UriComponents:
        """
        Parses a URL with the ``http`` or ``https`` scheme.

        :raises MalformedHttpUrl: If the URL can't be parsed or has another scheme.
        """
        from _quri.builder import UriBuilder

        if url is not None and not isinstance(url, str):
            raise InvalidArgument("A URL must be a string.")
        if url is None or not url.strip():
            return EMPTY_COMPONENTS
        return UriBuilder.from_url(url).build()

    @classmethod
    def from_http_url_or_none(cls, url: Optional[str]) -> Optional[UriComponents]:
        if url is None:
            return None
        try:
            return cls.from_http_url(url)
        except QuriBaseException:
            return None

    @classmethod
    def from_query_string(cls, query: Optional[str]) -> UriComponents:
        """
        Creates components that only contain the query parameters of the given
        query string, which may start with a ``?``.
        """
        from _quri.builder import UriBuilder

        if query is None:
            return EMPTY_COMPONENTS
        return UriBuilder.from_query_string(query).build()

    @classmethod
    def from_query_string_or_none(cls, query: Optional[str]) -> Optional[UriComponents]:
        if query is None:
            return None
        try:
            return cls.from_query_string(query)
        except QuriBaseException:
            return None

    @classmethod
    def from_split_result(cls, split_result: Optional[SplitResult]) -> UriComponents:
        """
        Creates components from a result of :func:`urllib.parse.urlsplit`.
        """
        from _quri.builder import UriBuilder

        if split_result is None:
            return EMPTY_COMPONENTS
        return UriBuilder.from_split_result(split_result).build()

    @classmethod
    def from_uri(cls, uri: Optional[str]) -> UriComponents:
        """
        Parses a URI.

        :raises MalformedUri: If the URI can't be parsed.
        """
        from _quri.builder import UriBuilder

        if uri is not None and not isinstance(uri, str):
            raise InvalidArgument("A URI must be a string.")
        if uri is None or not uri.strip():
            return EMPTY_COMPONENTS
        return UriBuilder.from_uri(uri).build()

    @classmethod
    def from_uri_or_none(cls, uri: Optional[str]) -> Optional[UriComponents]:
        if uri is None:
            return None
        try:
            return cls.from_uri(uri)
        except QuriBaseException:
            return None

    # dunder methods

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, UriComponents):
            return NotImplemented
        return self._comparison_key() == other._comparison_key()

    def __hash__(self) -> int:
        return hash(self._comparison_key())

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.to_uri_string()!r})"

    def __str__(self) -> str:
        return self.to_uri_string()

    def _comparison_key(self) -> tuple:
        return (
            self._scheme,
            self._scheme_specific_part,
            self._user_info,
            self._host,
            self._port,
            self._protocol_relative,
            self._root_path,
            self._path_segments,
            tuple(self._query_params.items()),
            self._fragment,
        )

    # properties

    @property
    def authority(self) -> Optional[UriAuthority]:
        """The authority of a hierarchical URI, :obj:`None` if it has none."""
        if self.is_opaque:
            return None
        authority = UriAuthority.of(self._user_info, self._host, self._port)
        return None if authority.is_empty else authority

    @property
    def fragment(self) -> Optional[str]:
        return self._fragment

    @property
    def host(self) -> Optional[str]:
        return self._host

    @property
    def is_http_url(self) -> bool:
        return not self.is_opaque and self._scheme in HTTP_SCHEMES

    @property
    def is_opaque(self) -> bool:
        return self._scheme_specific_part is not None

    @property
    def is_valid_http_url(self) -> bool:
        """
        Whether this is an ``http`` or ``https`` URL with a host that is an IP
        address or a DNS host name.
        """
        return (
            self.is_http_url
            and self._host is not None
            and is_valid_http_host(self._host)
        )

    @property
    def path(self) -> Optional[str]:
        """The encoded path or :obj:`None` if there are no path segments."""
        if not self._path_segments:
            return None
        encode = ComponentProfile.PATH_SEGMENT.encode
        segments = [encode(s) for s in self._path_segments]
        if self._root_path:
            return "/" + "/".join(segments)
        # no unescaped colon in the first segment of a relative path
        segments[0] = segments[0].replace(":", "%3a")
        return "/".join(segments)

    @property
    def path_segments(self) -> tuple[str, ...]:
        return self._path_segments

    @property
    def port(self) -> int:
        """The port number or ``-1`` to denote the scheme's default."""
        return self._port

    @property
    def protocol_relative(self) -> bool:
        return self._protocol_relative

    @property
    def query_multi_params(self) -> Mapping[str, tuple[str, ...]]:
        """A read-only mapping of parameter names to all their values."""
        return self._query_params

    @property
    def query_params(self) -> dict[str, Optional[str]]:
        """
        A mapping of parameter names to their first value or :obj:`None` for names
        without a value.
        """
        return {k: v[0] if v else None for k, v in self._query_params.items()}

    @property
    def query_string(self) -> Optional[str]:
        """The encoded query or :obj:`None` if there are no query parameters."""
        if not self._query_params:
            return None

        encode = ComponentProfile.QUERY_PARAM_NARROW.encode
        pairs: list[str] = []
        for name, values in self._query_params.items():
            if values:
                encoded_name = encode(name)
                pairs.extend(f"{encoded_name}={encode(v)}" for v in values)
            else:
                pairs.append(encode(name))
        return "&".join(pairs)

    @property
    def root_path(self) -> bool:
        return self._root_path

    @property
    def scheme(self) -> Optional[str]:
        return self._scheme

    @property
    def scheme_specific_part(self) -> Optional[str]:
        return self._scheme_specific_part

    @property
    def user_info(self) -> Optional[str]:
        return self._user_info

    # methods

    def query_multi_param(self, name: str) -> Optional[tuple[str, ...]]:
        return self._query_params.get(name)

    def query_param(self, name: str) -> Optional[str]:
        values = self._query_params.get(name)
        return values[0] if values else None

    def to_builder(self) -> UriBuilder:
        from _quri.builder import UriBuilder

        return UriBuilder.from_components(self)

    def to_split_result(self) -> SplitResult:
        return urlsplit(self.to_uri_string())

    def to_uri_string(self) -> str:
        """Serializes the components to a URI with all components encoded."""
        if self.is_opaque:
            return self._to_opaque_uri_string()
        else:
            return self._to_hierarchical_uri_string()

    def _to_opaque_uri_string(self) -> str:
        assert self._scheme_specific_part is not None
        result = StringIO()
        if self._scheme is not None:
            ComponentProfile.SCHEME.encode_to(self._scheme, result)
            result.write(":")
        ComponentProfile.SCHEME_SPECIFIC_PART.encode_to(
            self._scheme_specific_part, result
        )
        if self._fragment is not None:
            result.write("#")
            ComponentProfile.FRAGMENT.encode_to(self._fragment, result)
        return result.getvalue()

    def _to_hierarchical_uri_string(self) -> str:
        result = StringIO()

        if self._scheme is not None:
            ComponentProfile.SCHEME.encode_to(self._scheme, result)
            result.write("://")
        elif self._protocol_relative or self._host is not None:
            result.write("//")

        if self._user_info is not None:
            ComponentProfile.USER_INFO.encode_to(self._user_info, result)
            result.write("@")
        if self._host is not None:
            ComponentProfile.HOST.encode_to(self._host, result)
        if self._port != SCHEME_DEFAULT_PORT:
            result.write(f":{self._port}")

        if (path := self.path) is not None:
            result.write(path)
        elif self._root_path and self._host is None:
            result.write("/")

        if (query := self.query_string) is not None:
            result.write("?")
            result.write(query)

        if self._fragment is not None:
            result.write("#")
            ComponentProfile.FRAGMENT.encode_to(self._fragment, result)

        return result.getvalue()


EMPTY_COMPONENTS: Final = UriComponents()


__all__ = (
    "EMPTY_AUTHORITY",
    "EMPTY_COMPONENTS",
    UriAuthority.__name__,
    UriComponents.__name__,
    build_hierarchical.__name__,
    build_opaque.__name__,
    empty.__name__,
    is_valid_http_host.__name__,
)
