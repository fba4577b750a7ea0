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
An immutable set of Unicode code points that is used to declare which characters are
*safe*, i.e. may appear unescaped in some context.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Set
from typing import Any, Final

from _quri.exceptions import InvalidArgument, InvalidOperation


MAX_CODE_POINT: Final = 0x10FFFF


def _as_code_point(value: int | str) -> int:
    if isinstance(value, str):
        if len(value) != 1:
            raise InvalidArgument(f"Expected a single character. Got: {value!r}")
        return ord(value)
    if isinstance(value, int) and 0 <= value <= MAX_CODE_POINT:
        return value
    raise InvalidArgument(f"Expected a code point or a character. Got: {value!r}")


class CodePointSet(Set):
    """
    A compact, immutable set of code points. Its members are stored as bits of a
    single integer, the bit at index *n* represents the code point *n*.

    Instances can be shared freely, any attempt to alter one raises an
    :exc:`InvalidOperation`. Operations that would alter a set return a new one:

    >>> digits = CodePointSet("0123456789")
    >>> "7" in digits
    True
    >>> "a" in (digits | CodePointSet("abcdef"))
    True
    >>> digits.set("7", False).as_string()
    '012345689'

    Members can be tested as characters or as integers.
    """

    __slots__ = ("_bits",)

    def __init__(self, characters: str | Iterable[int | str] = ""):
        bits = 0
        for item in characters:
            bits |= 1 << _as_code_point(item)
        object.__setattr__(self, "_bits", bits)

    @classmethod
    def _from_bits(cls, bits: int) -> CodePointSet:
        result = cls.__new__(cls)
        object.__setattr__(result, "_bits", bits)
        return result

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            if len(item) != 1:
                return False
            item = ord(item)
        elif not isinstance(item, int) or item < 0:
            return False
        return bool(self._bits >> item & 1)

    def __delattr__(self, name: str):
        raise InvalidOperation(f"{self.__class__.__name__} instances are immutable.")

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, CodePointSet):
            return self._bits == other._bits
        return super().__eq__(other)

    def __hash__(self) -> int:
        return hash(self._bits)

    def __iter__(self) -> Iterator[int]:
        bits = self._bits
        index = 0
        while bits:
            if bits & 1:
                yield index
            bits >>= 1
            index += 1

    def __len__(self) -> int:
        return self._bits.bit_count()

    def __or__(self, other: Any) -> CodePointSet:
        if isinstance(other, CodePointSet):
            return self._from_bits(self._bits | other._bits)
        if isinstance(other, (Set, str)):
            return self._from_bits(self._bits | CodePointSet(other)._bits)
        return NotImplemented

    __ror__ = __or__

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.as_string()!r})"

    def __setattr__(self, name: str, value: Any):
        raise InvalidOperation(f"{self.__class__.__name__} instances are immutable.")

    def as_string(self) -> str:
        """Returns all members as string, ordered by their code points."""
        return "".join(chr(x) for x in self)

    def get(self, code_point: int | str) -> bool:
        """Tests whether a code point is a member of the set."""
        return bool(self._bits >> _as_code_point(code_point) & 1)

    def set(self, code_point: int | str, value: bool = True) -> CodePointSet:
        """
        Returns a copy of the set that includes the given code point if ``value`` is
        true or lacks it otherwise.
        """
        mask = 1 << _as_code_point(code_point)
        if value:
            return self._from_bits(self._bits | mask)
        else:
            return self._from_bits(self._bits & ~mask)

    def union(self, *others: CodePointSet | str) -> CodePointSet:
        result = self
        for other in others:
            result = result | other
        return result


EMPTY_CODE_POINT_SET: Final = CodePointSet()


__all__ = (
    "EMPTY_CODE_POINT_SET",
    "MAX_CODE_POINT",
    CodePointSet.__name__,
)
