"""Tests for navkit.location.query — search param parsing and formatting."""

from navkit.location.query import format_query, parse_query


class TestParseQuery:
    def test_single_values(self) -> None:
        assert parse_query("q=hello&page=2") == {"q": "hello", "page": "2"}

    def test_repeated_key_becomes_list(self) -> None:
        assert parse_query("tag=a&tag=b&q=x") == {"tag": ["a", "b"], "q": "x"}

    def test_blank_values_kept(self) -> None:
        assert parse_query("flag=&other") == {"flag": "", "other": ""}

    def test_decodes(self) -> None:
        assert parse_query("q=red%20fox&r=a+b") == {"q": "red fox", "r": "a b"}

    def test_empty(self) -> None:
        assert parse_query("") == {}


class TestFormatQuery:
    def test_single_values(self) -> None:
        assert format_query({"q": "hello", "page": "2"}) == "q=hello&page=2"

    def test_list_repeats_key(self) -> None:
        assert format_query({"tag": ["a", "b"]}) == "tag=a&tag=b"

    def test_encodes_space_as_percent(self) -> None:
        assert format_query({"q": "red fox"}) == "q=red%20fox"

    def test_empty(self) -> None:
        assert format_query({}) == ""
