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
The mutable counterpart of :class:`UriComponents` that stages modifications.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Optional
from urllib.parse import SplitResult, urlunsplit

from _quri.components import UriComponents, build_hierarchical, build_opaque
from _quri.exceptions import QuriBaseException
from _quri.ports import SCHEME_DEFAULT_PORT, validate_port_number_or_scheme_default
from _quri.profiles import ComponentProfile
from _quri.utils import empty_to_none, is_blank

if TYPE_CHECKING:
    from _quri.typing import QueryMultiParams, QueryParams, Self


class UriBuilder:
    """
    Collects the components of a URI and produces validated :class:`UriComponents`
    with :meth:`build`. All methods that modify a builder return it, so calls can be
    chained:

    >>> (
    ...     UriBuilder.from_uri("https://example.org?w=W&a=A")
    ...     .add_path_segment("about")
    ...     .add_query_param("a", "X")
    ...     .build_uri_string()
    ... )
    'https://example.org/about?w=W&a=A&a=X'

    A builder either describes an *opaque* URI, then it has a scheme specific part,
    or a *hierarchical* one. Setting the scheme specific part resets all
    hierarchical components and setting any of these resets the scheme specific
    part. The scheme and the fragment are shared by both kinds.

    Values that are passed to the setters are expected to be decoded, except for
    :meth:`set_path`, :meth:`add_sub_path` and :meth:`set_query_string`, these parse
    encoded input.

    Builders are not thread-safe.
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

    def __init__(self):
        self._scheme: Optional[str] = None
        self._scheme_specific_part: Optional[str] = None
        self._user_info: Optional[str] = None
        self._host: Optional[str] = None
        self._port: int = SCHEME_DEFAULT_PORT
        self._protocol_relative = False
        self._root_path = False
        self._path_segments: list[str] = []
        self._query_params: dict[str, list[str]] = {}
        self._fragment: Optional[str] = None

    def __repr__(self) -> str:
        return f"<{self.__class__.__qualname__} [{hex(id(self))}]>"

    def __str__(self) -> str:
        return self.build_uri_string()

    # factories

    @classmethod
    def empty(cls) -> UriBuilder:
        return cls()

    @classmethod
    def from_components(cls, components: Optional[UriComponents]) -> UriBuilder:
        builder = cls()
        if components is None:
            return builder

        builder._scheme = components.scheme
        builder._scheme_specific_part = components.scheme_specific_part
        builder._fragment = components.fragment
        if not components.is_opaque:
            builder._user_info = components.user_info
            builder._host = components.host
            builder._port = components.port
            builder._protocol_relative = components.protocol_relative
            builder._root_path = components.root_path
            builder._path_segments = list(components.path_segments)
            builder._query_params = {
                k: list(v) for k, v in components.query_multi_params.items()
            }
        return builder

    @classmethod
    def from_query_string(cls, query: Optional[str]) -> UriBuilder:
        from _quri.parser import parse_query

        if query is None:
            return cls()
        return cls().set_query_multi_params(parse_query(query))

    @classmethod
    def from_query_string_or_none(cls, query: Optional[str]) -> Optional[UriBuilder]:
        if query is None:
            return None
        try:
            return cls.from_query_string(query)
        except QuriBaseException:
            return None

    @classmethod
    def from_split_result(cls, split_result: Optional[SplitResult]) -> UriBuilder:
        if split_result is None:
            return cls()
        return cls().set_split_result(split_result)

    @classmethod
    def from_uri(cls, uri: Optional[str]) -> UriBuilder:
        """
        :raises MalformedUri: If the URI can't be parsed.
        """
        from _quri.parser import parse_uri

        if uri is None:
            return cls()
        return parse_uri(uri)

    @classmethod
    def from_uri_or_none(cls, uri: Optional[str]) -> Optional[UriBuilder]:
        if uri is None:
            return None
        try:
            return cls.from_uri(uri)
        except QuriBaseException:
            return None

    @classmethod
    def from_url(cls, url: Optional[str]) -> UriBuilder:
        """
        :raises MalformedHttpUrl: If the URL can't be parsed or has another scheme than
                                  ``http`` or ``https``.
        """
        from _quri.parser import parse_url

        if url is None:
            return cls()
        return parse_url(url)

    @classmethod
    def from_url_or_none(cls, url: Optional[str]) -> Optional[UriBuilder]:
        if url is None:
            return None
        try:
            return cls.from_url(url)
        except QuriBaseException:
            return None

    # terminal operations

    def build(self) -> UriComponents:
        """
        Creates the validated components.

        :raises InvalidUri: If the components don't form a valid URI.
        """
        if self._scheme_specific_part is not None:
            return build_opaque(
                self._scheme, self._scheme_specific_part, self._fragment
            )
        return build_hierarchical(
            scheme=self._scheme,
            user_info=self._user_info,
            host=self._host,
            port=self._port,
            protocol_relative=self._protocol_relative,
            root_path=self._root_path,
            path_segments=self._path_segments,
            query_params=self._query_params,
            fragment=self._fragment,
        )

    def build_uri_string(self) -> str:
        return self.build().to_uri_string()

    def copy(self) -> UriBuilder:
        return self.from_components(self.build())

    # scheme and scheme specific part

    def remove_scheme(self) -> Self:
        self._scheme = None
        return self

    def remove_scheme_specific_part(self) -> Self:
        self._scheme_specific_part = None
        self._reset_hierarchical_components()
        return self

    def set_protocol_relative(self, protocol_relative: bool) -> Self:
        """
        Makes the URI relative to the scheme of its context, e.g. ``//example.org``.
        This removes the scheme.
        """
        self._scheme = None
        self._protocol_relative = protocol_relative
        if protocol_relative:
            self._reset_scheme_specific_part()
        return self

    def set_scheme(self, scheme: Optional[str]) -> Self:
        """
        Sets the scheme, it is stored in lower case. A blank value removes it and the
        value ``//`` makes the URI protocol relative.
        """
        if is_blank(scheme):
            self._scheme = None
        elif scheme == "//":
            self.set_protocol_relative(True)
        else:
            assert scheme is not None
            self._scheme = scheme.lower()
            self._protocol_relative = False
        return self

    def set_scheme_specific_part(self, scheme_specific_part: Optional[str]) -> Self:
        """
        Sets the decoded scheme specific part of an opaque URI. This removes all
        hierarchical components.
        """
        if is_blank(scheme_specific_part):
            self._scheme_specific_part = None
        else:
            self._scheme_specific_part = scheme_specific_part
        self._reset_hierarchical_components()
        return self

    def set_split_result(self, split_result: SplitResult) -> Self:
        """
        Adopts the scheme and all other components that are present in a result of
        :func:`urllib.parse.urlsplit`, absent ones are left unchanged.
        """
        from _quri.parser import parse_uri

        source = parse_uri(urlunsplit(split_result))

        self._scheme = source._scheme
        if source._scheme_specific_part is not None:
            self.set_scheme_specific_part(source._scheme_specific_part)
        else:
            if source._user_info is not None:
                self._user_info = source._user_info
            if source._host is not None:
                self._host = source._host
                self._root_path = True
            if source._port != SCHEME_DEFAULT_PORT:
                self._port = source._port
            if source._path_segments:
                self._path_segments = source._path_segments
                self._root_path = source._root_path
            if source._query_params:
                self._query_params = source._query_params
            self._reset_scheme_specific_part()
        if source._fragment is not None:
            self._fragment = source._fragment
        return self

    # authority

    def remove_host(self) -> Self:
        self._host = None
        self._reset_scheme_specific_part()
        return self

    def remove_user_info(self) -> Self:
        self._user_info = None
        self._reset_scheme_specific_part()
        return self

    def set_default_port(self) -> Self:
        self._port = SCHEME_DEFAULT_PORT
        return self

    def set_host(self, host: Optional[str]) -> Self:
        """
        Sets the decoded host, it is stored in lower case. IPv6 addresses must be
        enclosed in brackets. A host implies an absolute path.
        """
        if is_blank(host):
            self._host = None
        else:
            assert host is not None
            self._host = host.lower()
            self._root_path = True
        self._reset_scheme_specific_part()
        return self

    def set_port(self, port: int) -> Self:
        """
        :param port: A port number or ``-1`` to use the scheme's default.
        :raises InvalidArgument: If the port is out of range.
        """
        validate_port_number_or_scheme_default(port)
        self._port = port
        if port != SCHEME_DEFAULT_PORT:
            self._reset_scheme_specific_part()
        return self

    def set_user_info(self, user_info: Optional[str]) -> Self:
        if is_blank(user_info):
            self._user_info = None
        else:
            self._user_info = user_info
        self._reset_scheme_specific_part()
        return self

    # path

    def add_path_segment(self, segment: Optional[str]) -> Self:
        """Appends a decoded path segment, empty values are ignored."""
        if segment:
            self.add_path_segments((segment,))
        return self

    def add_path_segments(self, segments: Optional[Iterable[Optional[str]]]) -> Self:
        if segments is None:
            return self
        filtered = [s for s in segments if s]
        if filtered:
            self._path_segments.extend(filtered)
            self._reset_scheme_specific_part()
        return self

    def add_sub_path(self, sub_path: Optional[str]) -> Self:
        """
        Appends the segments of an encoded path. Whether the path is absolute is
        derived from a leading slash if no segments were set before.

        :raises InvalidUri: If a segment isn't validly encoded.
        """
        if is_blank(sub_path):
            return self
        assert sub_path is not None

        if not self._path_segments:
            self._root_path = sub_path.startswith("/") or self._host is not None

        decode = ComponentProfile.PATH_SEGMENT.validate_and_decode
        segments = [decode(s) for s in sub_path.split("/") if s]
        if segments:
            self._path_segments.extend(segments)
            self._reset_scheme_specific_part()
        return self

    def set_path(self, path: Optional[str]) -> Self:
        """
        Replaces the path with the segments of an encoded path.

        :raises InvalidUri: If a segment isn't validly encoded.
        """
        self._path_segments.clear()
        self._root_path = self._host is not None
        return self.add_sub_path(path)

    def set_path_segments(self, segments: Optional[Iterable[Optional[str]]]) -> Self:
        self._path_segments.clear()
        return self.add_path_segments(segments)

    def set_root_path(self, root_path: bool) -> Self:
        self._root_path = root_path
        self._reset_scheme_specific_part()
        return self

    # query

    def add_query_multi_param(
        self, name: Optional[str], values: Optional[Iterable[Optional[str]]]
    ) -> Self:
        """
        Appends values to a parameter, :obj:`None` values are ignored. A parameter
        is created if it isn't present yet.
        """
        if is_blank(name) or values is None:
            return self
        assert name is not None
        filtered = [v for v in values if v is not None]
        if filtered:
            self._query_params.setdefault(name, []).extend(filtered)
            self._reset_scheme_specific_part()
        return self

    def add_query_multi_params(self, params: Optional[QueryMultiParams]) -> Self:
        if params:
            for name, values in params.items():
                self.add_query_multi_param(name, values)
        return self

    def add_query_param(self, name: Optional[str], value: Optional[str]) -> Self:
        if value is not None:
            self.add_query_multi_param(name, (value,))
        return self

    def add_query_params(self, params: Optional[QueryParams]) -> Self:
        if params:
            for name, value in params.items():
                self.add_query_param(name, value)
        return self

    def put_query_multi_param(
        self, name: Optional[str], values: Optional[Iterable[Optional[str]]]
    ) -> Self:
        """
        Replaces all values of a parameter, :obj:`None` values are ignored. The
        parameter is removed if no values remain.
        """
        if is_blank(name):
            return self
        assert name is not None
        filtered = [] if values is None else [v for v in values if v is not None]
        if filtered:
            self._query_params[name] = filtered
        else:
            self._query_params.pop(name, None)
        self._reset_scheme_specific_part()
        return self

    def put_query_multi_params(self, params: Optional[QueryMultiParams]) -> Self:
        if params:
            for name, values in params.items():
                self.put_query_multi_param(name, values)
        return self

    def put_query_param(self, name: Optional[str], value: Optional[str]) -> Self:
        if value is not None:
            self.put_query_multi_param(name, (value,))
        return self

    def put_query_params(self, params: Optional[QueryParams]) -> Self:
        if params:
            for name, value in params.items():
                self.put_query_param(name, value)
        return self

    def remove_query_param(
        self, name: Optional[str], value: Optional[str] = None
    ) -> Self:
        """
        Removes a parameter or, if a value is given, the first occurrence of that
        value. A parameter is removed along with its last value.
        """
        if is_blank(name) or name not in self._query_params:
            return self
        assert name is not None
        if value is None:
            del self._query_params[name]
        else:
            values = self._query_params[name]
            if value in values:
                values.remove(value)
                if not values:
                    del self._query_params[name]
        return self

    def remove_query_params(self) -> Self:
        self._query_params.clear()
        return self

    def set_query_multi_params(self, params: Optional[QueryMultiParams]) -> Self:
        """
        Replaces all query parameters. Parameters with an empty sequence of values are
        kept as names without value, e.g. ``?flag``.
        """
        self._query_params.clear()
        if params:
            for name, values in params.items():
                if is_blank(name):
                    continue
                self._query_params[name] = (
                    [] if values is None else [v for v in values if v is not None]
                )
            self._reset_scheme_specific_part()
        return self

    def set_query_params(self, params: Optional[QueryParams]) -> Self:
        self._query_params.clear()
        return self.put_query_params(params)

    def set_query_string(self, query: Optional[str]) -> Self:
        """
        Replaces all query parameters with those parsed from an encoded query string.

        :raises InvalidUri: If the query isn't validly encoded.
        """
        from _quri.parser import parse_query

        if is_blank(query):
            self._query_params.clear()
            return self
        assert query is not None
        return self.set_query_multi_params(parse_query(query))

    def sort_query_param_values(self) -> Self:
        for values in self._query_params.values():
            values.sort()
        return self

    def sort_query_params(self) -> Self:
        self._query_params = dict(sorted(self._query_params.items()))
        return self

    def sort_query_params_and_values(self) -> Self:
        return self.sort_query_param_values().sort_query_params()

    # fragment

    def remove_fragment(self) -> Self:
        self._fragment = None
        return self

    def set_fragment(self, fragment: Optional[str]) -> Self:
        """Sets the decoded fragment, an empty value removes it."""
        self._fragment = empty_to_none(fragment)
        return self

    # internals

    def _reset_hierarchical_components(self):
        self._user_info = None
        self._host = None
        self._port = SCHEME_DEFAULT_PORT
        self._protocol_relative = False
        self._root_path = False
        self._path_segments.clear()
        self._query_params.clear()

    def _reset_scheme_specific_part(self):
        self._scheme_specific_part = None


__all__ = (UriBuilder.__name__,)
