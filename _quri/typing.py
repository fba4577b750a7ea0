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

import sys
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Optional, Protocol, TypeAlias

if TYPE_CHECKING:
    from _quri.codepoints import CodePointSet


if sys.version_info < (3, 11):  # DROPWITH Python 3.10
    from typing_extensions import Self
else:
    from typing import Self


class TextWriter(Protocol):
    """Any object that accepts text chunks, e.g. :class:`io.StringIO`."""

    def write(self, text: str, /) -> int | None: ...


Charset: TypeAlias = str
QueryParams: TypeAlias = Mapping[str, Optional[str]]
QueryMultiParams: TypeAlias = Mapping[str, Sequence[str]]
SafeCharacters: TypeAlias = "str | CodePointSet"


__all__ = (
    "Charset",
    "QueryMultiParams",
    "QueryParams",
    "SafeCharacters",
    "Self",
    TextWriter.__name__,
)
