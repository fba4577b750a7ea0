import pytest

from _quri.utils import (
    empty_to_none,
    expect_no_whitespaces,
    expect_non_empty,
    is_blank,
)
from quri import exceptions
from quri.exceptions import InvalidArgument, InvalidUri, MalformedUri
from quri.utils import (
    MAX_PORT,
    SCHEME_DEFAULT_PORT,
    get_root_cause_of_type,
    is_scheme_default,
    is_valid_port_number,
    is_valid_port_number_or_scheme_default,
    iterate_causes,
    validate_port_number,
    validate_port_number_or_scheme_default,
)


@pytest.mark.parametrize("port", (0, 1, 80, 8080, MAX_PORT))
def test_valid_port_number(port):
    assert is_valid_port_number(port)
    assert is_valid_port_number_or_scheme_default(port)
    validate_port_number(port)
    validate_port_number_or_scheme_default(port)


@pytest.mark.parametrize("port", (-2, MAX_PORT + 1, "80", 80.0, True, None))
def test_invalid_port_number(port):
    assert not is_valid_port_number(port)
    assert not is_valid_port_number_or_scheme_default(port)
    with pytest.raises(InvalidArgument):
        validate_port_number(port)
    with pytest.raises(InvalidArgument):
        validate_port_number_or_scheme_default(port)


def test_scheme_default_port():
    assert is_scheme_default(SCHEME_DEFAULT_PORT)
    assert not is_scheme_default(0)
    assert not is_valid_port_number(SCHEME_DEFAULT_PORT)
    assert is_valid_port_number_or_scheme_default(SCHEME_DEFAULT_PORT)
    validate_port_number_or_scheme_default(SCHEME_DEFAULT_PORT)
    with pytest.raises(InvalidArgument, match=r"\[0, 65535\]"):
        validate_port_number(SCHEME_DEFAULT_PORT)


def test_argument_expectations():
    assert expect_non_empty(" ", "name") == " "
    assert expect_no_whitespaces("a", "name") == "a"

    with pytest.raises(InvalidArgument, match="to be a string"):
        expect_non_empty(None, "name")
    with pytest.raises(InvalidArgument, match="non-empty name"):
        expect_non_empty("", "name")
    with pytest.raises(InvalidArgument, match="without whitespaces"):
        expect_no_whitespaces("a\tb", "name")


def test_string_helpers():
    assert is_blank(None)
    assert is_blank("")
    assert is_blank(" \n")
    assert not is_blank(" a ")

    assert empty_to_none("") is None
    assert empty_to_none(None) is None
    assert empty_to_none(" ") == " "


def test_exception_causes():
    try:
        try:
            try:
                raise InvalidUri("inner")
            except InvalidUri as e:
                raise KeyError("middle") from e
        except KeyError:
            raise MalformedUri("x:y")
    except MalformedUri as e:
        exception = e

    causes = list(iterate_causes(exception))
    assert [type(x) for x in causes] == [MalformedUri, KeyError, InvalidUri]

    root_cause = get_root_cause_of_type(exception, InvalidUri)
    assert str(root_cause) == "inner"
    assert get_root_cause_of_type(exception, KeyError) is causes[1]
    assert get_root_cause_of_type(exception, AttributeError) is None


def test_iterate_causes_with_cycle():
    a = ValueError("a")
    b = ValueError("b")
    a.__cause__ = b
    b.__cause__ = a
    assert list(iterate_causes(a)) == [a, b]


def test_exported_exceptions_are_domain_errors():
    exported = [getattr(exceptions, name) for name in exceptions.__all__]
    assert all(issubclass(e, exceptions.QuriBaseException) for e in exported)
    assert not any(issubclass(e, RuntimeError) for e in exported)
    assert not hasattr(exceptions, "InvalidCodePath")
