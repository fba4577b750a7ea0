import pytest

from _quri.codepoints import EMPTY_CODE_POINT_SET, CodePointSet
from quri.exceptions import InvalidArgument, InvalidOperation


def test_code_point_set_is_immutable():
    digits = CodePointSet("0123456789")

    with pytest.raises(InvalidOperation):
        digits._bits = 0
    with pytest.raises(InvalidOperation):
        digits.foo = "bar"
    with pytest.raises(InvalidOperation):
        del digits._bits

    assert "0" in digits


def test_code_point_set_members():
    letters = CodePointSet("cab")

    assert "a" in letters
    assert ord("b") in letters
    assert "d" not in letters
    assert "ab" not in letters
    assert -1 not in letters
    assert None not in letters

    assert list(letters) == [ord("a"), ord("b"), ord("c")]
    assert len(letters) == 3
    assert letters.as_string() == "abc"
    assert letters.get("c")
    assert not letters.get(ord("z"))


def test_code_point_set_from_code_points():
    assert CodePointSet((0x41, "b", 0x1F600)).as_string() == "Ab😀"

    with pytest.raises(InvalidArgument):
        CodePointSet(("ab",))
    with pytest.raises(InvalidArgument):
        CodePointSet((0x110000,))


def test_code_point_set_operations():
    digits = CodePointSet("0123456789")

    without_seven = digits.set("7", False)
    assert "7" not in without_seven
    assert "7" in digits
    assert without_seven.set("7") == digits

    assert (digits | "ab").as_string() == "0123456789ab"
    assert ("ab" | digits).as_string() == "0123456789ab"
    assert digits.union("a", CodePointSet("b")) == digits | "ab"
    assert digits | EMPTY_CODE_POINT_SET == digits


def test_code_point_set_equality():
    assert CodePointSet("abc") == CodePointSet("cba")
    assert hash(CodePointSet("abc")) == hash(CodePointSet("cba"))
    assert CodePointSet("ab") != CodePointSet("abc")
    assert CodePointSet("ab") == {ord("a"), ord("b")}
    assert len({CodePointSet("ab"), CodePointSet("ba")}) == 1
    assert not EMPTY_CODE_POINT_SET
