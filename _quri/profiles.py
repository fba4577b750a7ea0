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
A registry of the URI components with the characters that each one allows to appear
unescaped and a dedicated percent codec.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Optional

from _quri.codepoints import CodePointSet
from _quri.exceptions import InvalidCharacter, InvalidEncodedSequence
from _quri.grammar import (
    FRAGMENT_ALLOWED,
    HEXADECIMAL_DIGITS,
    HOST_ALLOWED,
    PATH_SEGMENT_ALLOWED,
    PORT_ALLOWED,
    QUERY_ALLOWED,
    QUERY_PARAM_ALLOWED,
    QUERY_PARAM_NARROW_ALLOWED,
    SCHEME_ALLOWED,
    SCHEME_SPECIFIC_PART_ALLOWED,
    USER_INFO_ALLOWED,
)
from _quri.percent import CodecOptions, PercentCodec

if TYPE_CHECKING:
    from _quri.typing import TextWriter


class ComponentProfile(Enum):
    """
    Each member describes one URI component. Its ``allowed`` characters may appear
    literally in the component's encoded form, additionally any ``%`` followed by two
    hexadecimal digits is legal.

    For the query related components a ``+`` is allowed in encoded input, but decoded
    as space, hence it's never emitted literally by their encoders.
    """

    SCHEME = ("scheme", SCHEME_ALLOWED)
    SCHEME_SPECIFIC_PART = ("scheme specific part", SCHEME_SPECIFIC_PART_ALLOWED)
    USER_INFO = ("user info", USER_INFO_ALLOWED)
    HOST = ("host", HOST_ALLOWED)
    PORT = ("port", PORT_ALLOWED)
    PATH_SEGMENT = ("path segment", PATH_SEGMENT_ALLOWED)
    QUERY = ("query", QUERY_ALLOWED, True)
    QUERY_PARAM = ("query param", QUERY_PARAM_ALLOWED, True)
    # only used to encode query parameters
    QUERY_PARAM_NARROW = ("narrow query param", QUERY_PARAM_NARROW_ALLOWED, True)
    FRAGMENT = ("fragment", FRAGMENT_ALLOWED)

    def __init__(self, label: str, allowed: str, plus_as_space: bool = False):
        self.label = label
        self.allowed = CodePointSet(allowed)
        self.plus_as_space = plus_as_space
        self.codec = PercentCodec(
            CodecOptions(
                safe_characters=self.allowed.set("#", False),
                decode_space_as_plus=plus_as_space,
            )
        )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}.{self.name}>"

    def check_valid_encoded(self, source: str):
        """
        Raises an :exc:`InvalidUri` subclass if the encoded text contains characters
        that aren't allowed or an incomplete escape sequence.
        """
        if (error := self._find_error(source)) is not None:
            raise error

    def decode(self, source: str) -> str:
        """Decodes the text without validating it."""
        return self.codec.decode(source)

    def decode_to(self, source: str, writer: TextWriter) -> bool:
        return self.codec.decode_to(source, writer)

    def encode(self, source: str) -> str:
        return self.codec.encode(source)

    def encode_to(self, source: str, writer: TextWriter) -> bool:
        return self.codec.encode_to(source, writer)

    def is_valid_encoded(self, source: str) -> bool:
        return self._find_error(source) is None

    def validate_and_decode(self, source: str) -> str:
        self.check_valid_encoded(source)
        return self.decode(source)

    def _find_error(
        self, source: str
    ) -> Optional[InvalidCharacter | InvalidEncodedSequence]:
        allowed = self.allowed
        length = len(source)
        index = 0
        while index < length:
            character = source[index]
            if character == "%":
                if (
                    index + 2 >= length
                    or source[index + 1] not in HEXADECIMAL_DIGITS
                    or source[index + 2] not in HEXADECIMAL_DIGITS
                ):
                    return InvalidEncodedSequence(source[index:], self.label, source)
                index += 3
            elif character not in allowed:
                return InvalidCharacter(character, self.label, source)
            else:
                index += 1
        return None


__all__ = (ComponentProfile.__name__,)
