import pytest

from quri.exceptions import InvalidArgument
from quri.utils import (
    is_valid_inet_address,
    is_valid_inet_v4_address,
    is_valid_inet_v6_address,
    validate_inet_address,
    validate_inet_v4_address,
    validate_inet_v6_address,
)


@pytest.mark.parametrize(
    "address",
    ("0.0.0.0", "255.255.255.255", "127.0.0.1", "192.168.1.10", "10.0.0.0"),
)
def test_valid_inet_v4_address(address):
    assert is_valid_inet_v4_address(address)
    assert is_valid_inet_address(address)
    assert not is_valid_inet_v6_address(address)
    validate_inet_v4_address(address)


@pytest.mark.parametrize(
    "address",
    (
        None,
        "",
        " ",
        "256.1.1.1",
        "01.1.1.1",
        "1.1.1",
        "1.1.1.1.1",
        "1.1.1.-1",
        "a.b.c.d",
        " 1.1.1.1",
        "1.1.1.1 ",
        "1111.1.1.1",
    ),
)
def test_invalid_inet_v4_address(address):
    assert not is_valid_inet_v4_address(address)
    with pytest.raises(InvalidArgument):
        validate_inet_v4_address(address)


@pytest.mark.parametrize(
    "address",
    (
        "::",
        "::1",
        "2001:db8::1",
        "2001:DB8::1",
        "::ffff:192.168.1.1",
        "fe80::1%eth0",
        "fe80::1%25",
        "2001:db8::/32",
        "2001:db8::1/128",
        "1:2:3:4:5:6:7:8",
        "1:2:3:4:5:6:7::",
        "1::8",
        "1:2:3:4:5:6:1.2.3.4",
        "2001:0db8:0000:0000:0000:ff00:0042:8329",
    ),
)
def test_valid_inet_v6_address(address):
    assert is_valid_inet_v6_address(address)
    assert is_valid_inet_address(address)
    assert not is_valid_inet_v4_address(address)
    validate_inet_v6_address(address)


@pytest.mark.parametrize(
    "address",
    (
        None,
        "",
        " ",
        "::1::2",
        ":1:2:3:4:5:6:7",
        "1:2:3:4:5:6:7:",
        "1:2:3:4:5:6:7:8:9",
        "1:2:3:4:5:6:7",
        "12345::",
        "g::1",
        "::1/129",
        "::1/a",
        "::1/64/64",
        "fe80::1%",
        "fe80::1%eth 0",
        "fe80::1%a%b",
        "::256.1.1.1",
        "::1.2.3.4:1",
        "1:2:3:4:5:6:7:1.2.3.4",
    ),
)
def test_invalid_inet_v6_address(address):
    assert not is_valid_inet_v6_address(address)
    with pytest.raises(InvalidArgument):
        validate_inet_v6_address(address)


def test_validate_inet_address():
    validate_inet_address("127.0.0.1")
    validate_inet_address("::1")
    with pytest.raises(InvalidArgument, match="'example.org'"):
        validate_inet_address("example.org")
