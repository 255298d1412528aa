"""Tests for gomin.serialization — syntax tree JSON round-trip."""

import json
from pathlib import Path

import pytest

from gomin import parse, parse_expr, render
from gomin.location import SourceLocation
from gomin.nodes import ChanDir, ChanType, Ident, UnaryExpr
from gomin.serialization import from_dict, from_json, to_dict, to_json
from gomin.tokens import TokenType

FIXTURES = Path(__file__).parent / "fixtures"

SOURCE = """package p

import "fmt"

type Stack[T any] struct{ items []T }

func f(ch <-chan int, out chan<- int) {
	for v := range ch {
		out <- -v
	}
	fmt.Println(x < -1)
}
"""


class TestRoundTrip:
    def test_file(self) -> None:
        tree = parse(SOURCE)
        assert from_dict(to_dict(tree)) == tree

    def test_json(self) -> None:
        tree = parse(SOURCE)
        restored = from_json(to_json(tree))
        assert restored == tree
        assert render(restored) == render(tree)

    @pytest.mark.parametrize("path", sorted(FIXTURES.glob("*.go")), ids=lambda p: p.name)
    def test_fixture_files(self, path: Path) -> None:
        tree = parse(path.read_text(encoding="utf-8"))
        assert from_json(to_json(tree)) == tree

    def test_locations_preserved(self) -> None:
        tree = parse(SOURCE, source_file="p.go")
        restored = from_json(to_json(tree))
        assert restored.decls[1].location == tree.decls[1].location
        assert str(restored.decls[1].location) == "p.go:5:1"

    def test_locations_omitted(self) -> None:
        tree = parse(SOURCE)
        data = to_dict(tree, locations=False)
        assert "location" not in data
        restored = from_dict(data)
        assert restored == tree
        assert not restored.location.is_known


class TestValues:
    def test_token_type(self) -> None:
        node = UnaryExpr(TokenType.ARROW, Ident("ch"))
        data = to_dict(node, locations=False)
        assert data["op"] == {"_type": "TokenType", "name": "ARROW"}
        assert from_dict(data) == node

    @pytest.mark.parametrize("direction", [ChanDir.SEND, ChanDir.RECV, ChanDir.BOTH])
    def test_chan_dir(self, direction: ChanDir) -> None:
        node = ChanType(direction, Ident("int"))
        restored = from_dict(to_dict(node))
        assert restored == node
        assert restored.dir is direction

    def test_source_location(self) -> None:
        loc = SourceLocation(2, 3, offset=10, end_offset=12, source_file="a.go")
        data = to_dict(Ident("x", location=loc))
        assert data["location"]["_type"] == "SourceLocation"
        assert from_dict(data).location == loc


class TestDeterminism:
    def test_sorted_keys(self) -> None:
        text = to_json(parse_expr("a < -b"), locations=False)
        assert text == json.dumps(json.loads(text), sort_keys=True)

    def test_same_tree_same_json(self) -> None:
        assert to_json(parse(SOURCE)) == to_json(parse(SOURCE))

    def test_position_independent(self) -> None:
        a = to_json(parse_expr("x+1"), locations=False)
        b = to_json(parse_expr("x  +  1"), locations=False)
        assert a == b
        assert to_json(parse_expr("x+1")) != to_json(parse_expr("x  +  1"))

    def test_indent(self) -> None:
        assert "\n" in to_json(Ident("x"), indent=2)


class TestErrors:
    def test_missing_type(self) -> None:
        with pytest.raises(ValueError, match="Missing '_type'"):
            from_dict({"name": "x"})

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown node type: 'Bogus'"):
            from_dict({"_type": "Bogus"})
