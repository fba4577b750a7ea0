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
Percent-encoding as described in `section 2.1 of RFC 3986
<https://datatracker.ietf.org/doc/html/rfc3986#section-2.1>`_.

Characters that aren't *safe* are encoded to bytes with the configured charset, each
byte is then represented as ``%`` followed by two lowercase hexadecimal digits.
Decoding accepts hexadecimal digits of either case.

Decoding is permissive with regard to a literal ``+``: it is passed through unless
the codec is configured to decode it as space, while a ``%`` that isn't followed by
two hexadecimal digits always fails with :exc:`MalformedEscape`.
"""

from __future__ import annotations

import codecs
import warnings
from io import StringIO
from typing import TYPE_CHECKING, Final, NamedTuple, Optional

from _quri.codepoints import CodePointSet
from _quri.exceptions import InvalidArgument, MalformedEscape
from _quri.grammar import HEXADECIMAL_DIGITS, URI_UNRESERVED

if TYPE_CHECKING:
    from _quri.typing import Charset, SafeCharacters, TextWriter


DEFAULT_CHARSET: Final = "utf-8"


def _lookup_charset(charset: Charset) -> str:
    if not isinstance(charset, str):
        raise InvalidArgument(f"Expected a charset name. Got: {charset!r}")
    try:
        return codecs.lookup(charset).name
    except LookupError as e:
        raise InvalidArgument(f"Unknown charset: {charset!r}") from e


def _as_code_point_set(characters: SafeCharacters) -> CodePointSet:
    if isinstance(characters, CodePointSet):
        return characters
    if isinstance(characters, str):
        return CodePointSet(characters)
    raise InvalidArgument(
        f"Expected safe characters as string or CodePointSet. Got: {characters!r}"
    )


def _has_surrogates(text: str) -> bool:
    return any("\ud800" <= c <= "\udfff" for c in text)


def _join_surrogates(text: str) -> str:
    # pairs of surrogates, e.g. from JSON escapes, become one code point
    return text.encode("utf-16-le", "surrogatepass").decode(
        "utf-16-le", "surrogatepass"
    )


class CodecOptions(NamedTuple):
    """
    The configuration options that define a :class:`PercentCodec`'s behaviour.

    If any of the ``*_space_as_plus`` options is enabled, ``+`` is never considered
    as safe character, so that a literal ``+`` can't be mistaken as encoded space.
    """

    safe_characters: SafeCharacters = URI_UNRESERVED
    """
    The characters that are emitted unescaped. Either a string with all characters or
    a :class:`CodePointSet`. Default: the *unreserved* characters of RFC 3986.
    """
    charset: Charset = DEFAULT_CHARSET
    """
    The name of the charset that is used to encode characters to bytes and bytes to
    characters. Default: ``utf-8``.
    """
    decode_space_as_plus: bool = False
    """Decode ``+`` as space.  Default: :obj:`False`."""
    encode_space_as_plus: bool = False
    """Encode a space as ``+``.  Default: :obj:`False`."""

    def with_added_safe_characters(self, characters: SafeCharacters) -> CodecOptions:
        return self._replace(
            safe_characters=_as_code_point_set(self.safe_characters)
            | _as_code_point_set(characters)
        )

    def with_space_as_plus(self, value: bool) -> CodecOptions:
        return self._replace(decode_space_as_plus=value, encode_space_as_plus=value)


class PercentEncoder:
    __slots__ = ("charset", "safe_characters", "space_as_plus")

    def __init__(
        self, safe_characters: CodePointSet, space_as_plus: bool, charset: str
    ):
        if space_as_plus:
            safe_characters = safe_characters.set("+", False)
        self.safe_characters: Final = safe_characters
        self.space_as_plus: Final = space_as_plus
        self.charset: Final = charset

    def encode(self, text: str, charset: Optional[Charset] = None) -> str:
        buffer = StringIO()
        self.encode_to(text, buffer, charset)
        return buffer.getvalue()

    def encode_to(
        self, text: str, writer: TextWriter, charset: Optional[Charset] = None
    ) -> bool:
        charset = self.charset if charset is None else _lookup_charset(charset)
        safe_characters = self.safe_characters
        space_as_plus = self.space_as_plus
        changed = False
        length = len(text)
        result: list[str] = []
        index = 0

        while index < length:
            character = text[index]

            if space_as_plus and character == " ":
                result.append("+")
                changed = True
                index += 1

            elif character in safe_characters:
                result.append(character)
                index += 1

            else:
                start = index
                index += 1
                while (
                    index < length
                    and text[index] not in safe_characters
                    and not (space_as_plus and text[index] == " ")
                ):
                    index += 1
                result.append(self._escape(text[start:index], charset))
                changed = True

        writer.write("".join(result))
        return changed

    @staticmethod
    def _escape(text: str, charset: str) -> str:
        if _has_surrogates(text):
            text = _join_surrogates(text)
        try:
            data = text.encode(charset)
        except UnicodeEncodeError:
            warnings.warn(
                f"The text {text!r} can't be fully represented in the charset "
                f"{charset}, the offending characters are replaced.",
                category=UserWarning,
            )
            data = text.encode(charset, "replace")
        return "".join(f"%{byte:02x}" for byte in data)


class PercentDecoder:
    __slots__ = ("charset", "space_as_plus")

    def __init__(self, space_as_plus: bool, charset: str):
        self.space_as_plus: Final = space_as_plus
        self.charset: Final = charset

    def decode(self, text: str, charset: Optional[Charset] = None) -> str:
        buffer = StringIO()
        self.decode_to(text, buffer, charset)
        return buffer.getvalue()

    def decode_to(
        self, text: str, writer: TextWriter, charset: Optional[Charset] = None
    ) -> bool:
        charset = self.charset if charset is None else _lookup_charset(charset)
        changed = False
        length = len(text)
        result: list[str] = []
        index = 0

        while index < length:
            character = text[index]

            if character == "+":
                if self.space_as_plus:
                    result.append(" ")
                    changed = True
                else:
                    result.append("+")
                index += 1

            elif character == "%":
                data = bytearray()
                while index < length and text[index] == "%":
                    if index + 2 >= length:
                        raise MalformedEscape(
                            text, index, "Incomplete trailing escape (%) pattern"
                        )
                    digits = text[index + 1 : index + 3]
                    if not (
                        digits[0] in HEXADECIMAL_DIGITS
                        and digits[1] in HEXADECIMAL_DIGITS
                    ):
                        raise MalformedEscape(
                            text,
                            index,
                            f"Illegal hex characters in escape pattern: {digits!r}",
                        )
                    data.append(int(digits, 16))
                    index += 3
                result.append(self._unescape(bytes(data), charset, text))
                changed = True

            else:
                start = index
                index += 1
                while index < length and text[index] not in "+%":
                    index += 1
                result.append(text[start:index])

        writer.write("".join(result))
        return changed

    @staticmethod
    def _unescape(data: bytes, charset: str, text: str) -> str:
        try:
            return data.decode(charset)
        except UnicodeDecodeError:
            warnings.warn(
                f"The percent-encoded bytes in {text!r} aren't valid {charset}, "
                "undecodable bytes are replaced.",
                category=UserWarning,
            )
            return data.decode(charset, "replace")


class PercentCodec:
    """
    Encodes and decodes text with percent-encoding as configured with a
    :class:`CodecOptions` instance:

    >>> codec = PercentCodec(CodecOptions(encode_space_as_plus=True))
    >>> codec.encode("a b/c")
    'a+b%2fc'
    >>> codec.decode("a%20b%2Fc")
    'a b/c'
    """

    __slots__ = ("decoder", "encoder", "options")

    def __init__(self, options: Optional[CodecOptions] = None):
        if options is None:
            options = CodecOptions()
        charset = _lookup_charset(options.charset)
        safe_characters = _as_code_point_set(options.safe_characters)
        if options.decode_space_as_plus or options.encode_space_as_plus:
            safe_characters = safe_characters.set("+", False)

        self.options: Final = options
        self.encoder: Final = PercentEncoder(
            safe_characters, options.encode_space_as_plus, charset
        )
        self.decoder: Final = PercentDecoder(options.decode_space_as_plus, charset)

    def __repr__(self) -> str:
        return f"<{self.__class__.__qualname__}({self.options}) [{hex(id(self))}]>"

    @property
    def safe_characters(self) -> CodePointSet:
        return self.encoder.safe_characters

    def decode(self, text: str, charset: Optional[Charset] = None) -> str:
        """
        Decodes percent-encoded text.

        :param text: The encoded text.
        :param charset: Overrides the configured charset for this call.
        :return: The decoded text.
        """
        return self.decoder.decode(text, charset)

    def decode_to(
        self, text: str, writer: TextWriter, charset: Optional[Charset] = None
    ) -> bool:
        """
        Decodes percent-encoded text and writes the result to an object with a
        ``write`` method.

        :return: Whether the written text differs from the input.
        """
        return self.decoder.decode_to(text, writer, charset)

    def encode(self, text: str, charset: Optional[Charset] = None) -> str:
        """
        Percent-encodes all characters of the text that aren't safe.

        :param text: The text to encode.
        :param charset: Overrides the configured charset for this call.
        :return: The encoded text.
        """
        return self.encoder.encode(text, charset)

    def encode_to(
        self, text: str, writer: TextWriter, charset: Optional[Charset] = None
    ) -> bool:
        """
        Percent-encodes all characters of the text that aren't safe and writes the
        result to an object with a ``write`` method.

        :return: Whether the written text differs from the input.
        """
        return self.encoder.encode_to(text, writer, charset)


PERCENT_CODEC: Final = PercentCodec(CodecOptions(decode_space_as_plus=False))
PERCENT_PLUS_CODEC: Final = PercentCodec(CodecOptions(decode_space_as_plus=True))


def decode_uri_component(component: str) -> str:
    return PERCENT_CODEC.decode(component)


def decode_uri_component_with_plus_as_space(component: str) -> str:
    return PERCENT_PLUS_CODEC.decode(component)


def encode_uri_component(component: str) -> str:
    return PERCENT_CODEC.encode(component)


def encode_uri_component_with_plus_as_space(component: str) -> str:
    return PERCENT_PLUS_CODEC.encode(component)


__all__ = (
    "DEFAULT_CHARSET",
    "PERCENT_CODEC",
    "PERCENT_PLUS_CODEC",
    CodecOptions.__name__,
    PercentCodec.__name__,
    decode_uri_component.__name__,
    decode_uri_component_with_plus_as_space.__name__,
    encode_uri_component.__name__,
    encode_uri_component_with_plus_as_space.__name__,
)
