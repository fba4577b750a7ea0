from io import StringIO

import pytest

from quri import (
    CodecOptions,
    CodePointSet,
    PercentCodec,
    decode_uri_component,
    decode_uri_component_with_plus_as_space,
    encode_uri_component,
    encode_uri_component_with_plus_as_space,
)
from quri.exceptions import InvalidArgument, MalformedEscape


@pytest.mark.parametrize(
    ("text", "expected"),
    (
        ("", ""),
        ("abc-._~", "abc-._~"),
        ("a b", "a%20b"),
        ("a/b?c", "a%2fb%3fc"),
        ("ü", "%c3%bc"),
        ("a€b", "a%e2%82%acb"),
        ("😀", "%f0%9f%98%80"),
        ("x😀y€z", "x%f0%9f%98%80y%e2%82%acz"),
        ("1+1", "1%2b1"),
    ),
)
def test_encode_uri_component(text, expected):
    assert encode_uri_component(text) == expected


def test_encode_emits_lowercase_hex_digits():
    assert encode_uri_component("\x1f:") == "%1f%3a"


def test_encode_joins_surrogate_pairs():
    assert encode_uri_component("😀") == "%f0%9f%98%80"
    assert encode_uri_component("a😀b") == "a%f0%9f%98%80b"


@pytest.mark.parametrize(
    ("text", "expected"),
    (
        ("", ""),
        ("abc", "abc"),
        ("a%20b", "a b"),
        ("%C3%BC", "ü"),
        ("%c3%bc", "ü"),
        ("x%F0%9F%98%80y", "x😀y"),
        ("a+b", "a+b"),
        ("+", "+"),
        ("%2B", "+"),
    ),
)
def test_decode_uri_component(text, expected):
    assert decode_uri_component(text) == expected


def test_space_as_plus():
    assert decode_uri_component_with_plus_as_space("a+b%20c") == "a b c"
    assert decode_uri_component_with_plus_as_space("+") == " "
    assert decode_uri_component_with_plus_as_space("%2b") == "+"
    # the shared codec only decodes a plus as space
    assert encode_uri_component_with_plus_as_space("a b+c") == "a%20b%2bc"

    codec = PercentCodec(CodecOptions().with_space_as_plus(True))
    assert codec.encode("a b+c") == "a+b%2bc"
    assert codec.encode("a  €") == "a++%e2%82%ac"
    assert codec.decode("a+b%2bc") == "a b+c"


@pytest.mark.parametrize("text", ("100%", "100%2", "100%2g", "%g0", "%%20"))
def test_malformed_escape(text):
    with pytest.raises(MalformedEscape) as exception_info:
        decode_uri_component(text)

    exception = exception_info.value
    assert exception.text == text
    assert exception.position == text.index("%")
    assert isinstance(exception, ValueError)


def test_safe_characters():
    codec = PercentCodec(CodecOptions(safe_characters="abc"))
    assert codec.encode("abcd") == "abc%64"
    assert codec.safe_characters == CodePointSet("abc")

    codec = PercentCodec(CodecOptions(safe_characters=CodePointSet("/")))
    assert codec.encode("/a") == "/%61"

    options = CodecOptions().with_added_safe_characters("/")
    assert PercentCodec(options).encode("a/b c") == "a/b%20c"

    with pytest.raises(InvalidArgument):
        PercentCodec(CodecOptions(safe_characters=None))


def test_plus_is_never_safe_when_space_is_encoded_as_plus():
    codec = PercentCodec(CodecOptions(safe_characters="+a", encode_space_as_plus=True))
    assert "+" not in codec.safe_characters
    assert codec.encode("a+a") == "a%2ba"


def test_charsets():
    codec = PercentCodec(CodecOptions(charset="iso-8859-1"))
    assert codec.encode("ü") == "%fc"
    assert codec.decode("%FC") == "ü"

    assert encode_uri_component("ü") == "%c3%bc"
    assert PercentCodec().encode("ü", charset="latin-1") == "%fc"
    assert PercentCodec().decode("%fc", charset="latin-1") == "ü"

    with pytest.raises(InvalidArgument):
        PercentCodec(CodecOptions(charset="no-such-charset"))
    with pytest.raises(InvalidArgument):
        PercentCodec().encode("a", charset="no-such-charset")


def test_unencodable_characters_are_replaced():
    codec = PercentCodec(CodecOptions(charset="ascii"))
    with pytest.warns(UserWarning, match="can't be fully represented"):
        assert codec.encode("a€") == "a%3f"


def test_undecodable_bytes_are_replaced():
    with pytest.warns(UserWarning, match="aren't valid"):
        assert decode_uri_component("a%ffb") == "a�b"


def test_encode_to_and_decode_to():
    codec = PercentCodec()

    buffer = StringIO()
    assert not codec.encode_to("abc", buffer)
    assert codec.encode_to(" d", buffer)
    assert buffer.getvalue() == "abc%20d"

    buffer = StringIO()
    assert not codec.decode_to("a+b", buffer)
    assert codec.decode_to("%20", buffer)
    assert buffer.getvalue() == "a+b "

    chunks = []

    class Writer:
        def write(self, text):
            chunks.append(text)

    assert codec.encode_to("x/y", Writer())
    assert "".join(chunks) == "x%2fy"


def test_options_are_kept():
    options = CodecOptions(safe_characters="xyz", decode_space_as_plus=True)
    codec = PercentCodec(options)
    assert codec.options is options
    assert codec.decoder.space_as_plus
    assert not codec.encoder.space_as_plus


@pytest.mark.parametrize("charset", ("utf-8", "utf-16-le", "iso-8859-15"))
def test_decoding_reverts_encoding(charset):
    codec = PercentCodec(CodecOptions(safe_characters="", charset=charset))
    for text in ("a", " ", "+", "%", "ü", "€", "\x00", "a b%c+d"):
        assert codec.decode(codec.encode(text)) == text


def test_safe_text_is_not_changed():
    buffer = StringIO()
    assert not PercentCodec().encode_to("Az09-._~", buffer)
    assert buffer.getvalue() == "Az09-._~"
