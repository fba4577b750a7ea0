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
quri builds, parses and percent-encodes URIs as described in RFC 3986.

>>> from quri import UriBuilder
>>> (
...     UriBuilder.empty()
...     .set_scheme("https")
...     .set_host("example.org")
...     .add_path_segment("a/b")
...     .add_query_param("q", "x y")
...     .build_uri_string()
... )
'https://example.org/a%2fb?q=x%20y'
"""

from __future__ import annotations

from _quri.builder import UriBuilder
from _quri.codepoints import CodePointSet
from _quri.components import (
    UriAuthority,
    UriComponents,
    build_hierarchical,
    build_opaque,
)
from _quri.parser import parse_query
from _quri.percent import (
    CodecOptions,
    PercentCodec,
    decode_uri_component,
    decode_uri_component_with_plus_as_space,
    encode_uri_component,
    encode_uri_component_with_plus_as_space,
)
from _quri.profiles import ComponentProfile


__all__ = (
    CodecOptions.__name__,
    CodePointSet.__name__,
    ComponentProfile.__name__,
    PercentCodec.__name__,
    UriAuthority.__name__,
    UriBuilder.__name__,
    UriComponents.__name__,
    build_hierarchical.__name__,
    build_opaque.__name__,
    decode_uri_component.__name__,
    decode_uri_component_with_plus_as_space.__name__,
    encode_uri_component.__name__,
    encode_uri_component_with_plus_as_space.__name__,
    parse_query.__name__,
)
