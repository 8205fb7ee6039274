"""Tests for navkit.templating.expression — path expression parser and evaluator."""

from dataclasses import dataclass

import pytest

from navkit.errors import MalformedTemplateError
from navkit.templating.expression import (
    MISSING,
    Attr,
    Item,
    Literal,
    Name,
    lookup,
    parse,
    resolve,
    tokenize,
)


@dataclass
class User:
    id: int
    name: str
    _secret: str = "hidden"


class TestTokenize:
    def test_skips_whitespace(self) -> None:
        kinds = [t.kind for t in tokenize(" a . b ")]
        assert kinds == ["ident", "punct", "ident"]

    def test_string_and_int(self) -> None:
        tokens = tokenize("a['b'][0]")
        assert [t.value for t in tokens] == ["a", "[", "'b'", "]", "[", "0", "]"]

    def test_rejects_operators(self) -> None:
        with pytest.raises(MalformedTemplateError):
            tokenize("a + b")


class TestParse:
    def test_name(self) -> None:
        assert parse("user") == Name("user")

    def test_dotted(self) -> None:
        assert parse("user.id") == Attr(Name("user"), "id")

    def test_bracket_string(self) -> None:
        assert parse("user['display name']") == Item(Name("user"), Literal("display name"))

    def test_bracket_double_quoted_with_escape(self) -> None:
        assert parse('a["say \\"hi\\""]') == Item(Name("a"), Literal('say "hi"'))

    def test_bracket_int(self) -> None:
        assert parse("items[0].slug") == Attr(Item(Name("items"), Literal(0)), "slug")

    def test_bracket_nested_path(self) -> None:
        assert parse("lookup[current.key]") == Item(Name("lookup"), Attr(Name("current"), "key"))

    @pytest.mark.parametrize(
        "source",
        ["", "   ", "a.", "a[", "a[0", "a]", ".a", "0", "a b", "a()", "'a'", "$a", "a.$b"],
    )
    def test_malformed(self, source: str) -> None:
        with pytest.raises(MalformedTemplateError):
            parse(source)


class TestLookup:
    def test_mapping(self) -> None:
        assert lookup({"a": 1}, "a") == 1
        assert lookup({"a": 1}, "b") is MISSING

    def test_sequence_index(self) -> None:
        assert lookup(["x", "y"], 1) == "y"
        assert lookup(["x", "y"], -1) == "y"
        assert lookup(["x"], 5) is MISSING

    def test_string_is_not_indexed(self) -> None:
        assert lookup("abc", 0) is MISSING

    def test_attribute(self) -> None:
        assert lookup(User(1, "ann"), "name") == "ann"
        assert lookup(User(1, "ann"), "email") is MISSING

    def test_private_attribute_never_resolves(self) -> None:
        assert lookup(User(1, "ann"), "_secret") is MISSING
        assert lookup(User(1, "ann"), "__class__") is MISSING

    def test_none_container(self) -> None:
        assert lookup(None, "a") is MISSING


class TestResolve:
    def test_nested_mapping(self) -> None:
        assert resolve("a.b.c", {"a": {"b": {"c": 3}}}) == 3

    def test_bracket_key(self) -> None:
        assert resolve("a['b']", {"a": {"b": "x"}}) == "x"

    def test_dynamic_key(self) -> None:
        ctx = {"lookup": {"red": "#f00"}, "current": {"key": "red"}}
        assert resolve("lookup[current.key]", ctx) == "#f00"

    def test_object_context(self) -> None:
        assert resolve("id", User(7, "ann")) == 7

    def test_missing_intermediate(self) -> None:
        assert resolve("a.b.c", {"a": {}}) is MISSING

    def test_none_value_is_present(self) -> None:
        assert resolve("a", {"a": None}) is None

    def test_falsy_values_are_present(self) -> None:
        assert resolve("a", {"a": 0}) == 0
        assert resolve("a", {"a": ""}) == ""
        assert resolve("a", {"a": False}) is False

    def test_non_scalar_dynamic_key_is_missing(self) -> None:
        assert resolve("a[b]", {"a": {"x": 1}, "b": ["x"]}) is MISSING
