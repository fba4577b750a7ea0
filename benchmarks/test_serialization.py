import pytest

from quri import (
    CodecOptions,
    PercentCodec,
    UriComponents,
    decode_uri_component,
    encode_uri_component,
)


def serialize(components):
    str(components)


def test_serialization(benchmark, uri):
    benchmark(serialize, UriComponents.from_uri(uri))


def test_encoding(benchmark, text):
    benchmark(encode_uri_component, text)


def test_decoding(benchmark, text):
    benchmark(decode_uri_component, encode_uri_component(text))


@pytest.mark.parametrize("space_as_plus", (True, False))
def test_encoding_form_values(benchmark, space_as_plus):
    codec = PercentCodec(CodecOptions().with_space_as_plus(space_as_plus))
    benchmark(codec.encode, "some text with spaces & reserved / characters ?" * 16)
