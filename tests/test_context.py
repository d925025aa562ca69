"""Тесты цепочки кадров контекста."""

from stache.context import ContextFrame, lookup_member
from stache.nodes import PathExpression


class TestContextFrame:

    def test_child_does_not_mutate_parent(self):
        root = ContextFrame(data={"a": 1})
        child = root.child({"b": 2})

        assert child.parent is root
        assert root.data == {"a": 1}

    def test_ancestor(self):
        root = ContextFrame(data="root")
        child = root.child("child")

        assert child.ancestor(0) is child
        assert child.ancestor(1) is root
        assert child.ancestor(2) is None
        assert child.ancestor(5) is None

    def test_resolve(self):
        root = ContextFrame(data={"title": "T"})
        child = root.child({"name": {"first": "Ada"}})

        assert child.resolve(PathExpression(parts=("name", "first"))) == "Ada"
        assert child.resolve(PathExpression(parts=("title",), depth=1)) == "T"
        assert child.resolve(PathExpression(parts=(), depth=0)) == {"name": {"first": "Ada"}}
        assert child.resolve(PathExpression(parts=("missing", "x"))) is None


class TestLookupMember:

    def test_private_attributes_are_hidden(self):
        class Obj:
            _secret = "s"
            public = "p"

        assert lookup_member(Obj(), "public") == "p"
        assert lookup_member(Obj(), "_secret") is None

    def test_sequence_index(self):
        assert lookup_member(["a"], "0") == "a"
        assert lookup_member(["a"], "3") is None
        assert lookup_member(["a"], "name") is None

    def test_none(self):
        assert lookup_member(None, "x") is None
