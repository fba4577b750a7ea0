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

"""These are the specific quri exceptions."""

from __future__ import annotations

from typing import Optional


class QuriBaseException(Exception):
    pass


class InvalidArgument(QuriBaseException, ValueError):
    """Raised when a function or method is called with an unacceptable argument."""

    pass


class InvalidOperation(QuriBaseException, TypeError):
    """Raised when an invalid operation is attempted by the client code."""

    pass


class MalformedEscape(QuriBaseException, ValueError):
    """
    Raised by the percent decoder when a ``%`` isn't followed by two hexadecimal
    digits.
    """

    def __init__(self, text: str, position: int, message: str):
        self.text = text
        self.position = position
        self.message = message
        super().__init__(text, position, message)

    def __str__(self):
        return f"{self.message} at position {self.position} of {self.text!r}"


class InvalidUri(QuriBaseException, ValueError):
    """
    Raised when URI components are combined in a way that violates the structural
    rules of a URI, e.g. a port without a host.
    """

    def __init__(self, message: str):
        super().__init__(message)


class InvalidCharacter(InvalidUri):
    """Raised when an encoded URI component contains an illegal character."""

    def __init__(self, character: str, component: str, source: str):
        self.character = character
        self.component = component
        self.source = source
        super().__init__(
            f"Invalid character {character!r} for {component} in {source!r}"
        )


class InvalidEncodedSequence(InvalidUri):
    """Raised when an encoded URI component contains an incomplete escape sequence."""

    def __init__(self, sequence: str, component: str, source: str):
        self.sequence = sequence
        self.component = component
        self.source = source
        super().__init__(
            f"Invalid encoded sequence {sequence!r} for {component} in {source!r}"
        )


class MalformedUri(InvalidUri):
    """
    Raised when a string can't be parsed as URI. The ``reason`` attribute holds the
    message of the deepest validation error that led to the failure, if any.
    """

    subject = "uri"

    def __init__(self, uri: str, reason: Optional[str] = None):
        self.uri = uri
        self.reason = reason
        message = f"Could not parse {self.subject}: {uri!r}"
        if reason is not None:
            message += f". Cause: {reason}"
        super().__init__(message)


class MalformedHttpUrl(MalformedUri):
    """
    Raised when a string can't be parsed as URI or when it is no hierarchical URI with
    the ``http`` or ``https`` scheme.
    """

    subject = "http url"


__all__ = (
    InvalidArgument.__name__,
    InvalidCharacter.__name__,
    InvalidEncodedSequence.__name__,
    InvalidOperation.__name__,
    InvalidUri.__name__,
    MalformedEscape.__name__,
    MalformedHttpUrl.__name__,
    MalformedUri.__name__,
    QuriBaseException.__name__,
)
