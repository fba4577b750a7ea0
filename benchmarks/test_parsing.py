from _quri.parser import parse_query
from quri import UriBuilder, UriComponents


def parse(uri):
    UriBuilder.from_uri(uri).build()


def test_parsing_uris(benchmark, uri):
    benchmark(parse, uri)


def test_parsing_query_string(benchmark):
    query = "&".join(f"key{i}=value%20{i}&flag{i}" for i in range(32))
    benchmark(parse_query, query)


def test_parsing_and_modifying(benchmark):
    def modify():
        (
            UriComponents.from_uri("https://user@example.org:8443/a/b?x=1&y=2&y=3")
            .to_builder()
            .add_path_segment("d")
            .put_query_param("x", "4")
            .sort_query_params_and_values()
            .build_uri_string()
        )

    benchmark(modify)
