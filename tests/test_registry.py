"""Тесты реестра хелперов и партиалов."""

import pytest

from stache.helpers import BUILTIN_HELPERS
from stache.registry import Helper, TemplateRegistry, as_helper


class TestTemplateRegistry:

    def test_builtins_registered(self, registry):
        assert set(BUILTIN_HELPERS) <= set(registry.helpers)
        assert registry.helpers["blockHelperMissing"].inverse_fn is not None

    def test_without_builtins(self):
        assert TemplateRegistry(builtins=False).helpers == {}

    def test_register_overwrites(self, registry):
        registry.register_helper("x", lambda this: 1)
        registry.register_helper("x", lambda this: 2)

        assert registry.get_helper("x")({}) == 2

    def test_register_with_inverse(self, registry):
        def inverse_fn(this, context, fn):
            return "inv"

        registry.register_helper("x", lambda this: 1, inverse_fn)

        assert registry.get_helper("x").inverse_fn is inverse_fn

    def test_two_level_lookup(self, registry):
        registry.register_helper("x", lambda this: "registry")
        registry.register_partial("p", "registry")

        assert registry.get_helper("x", {"x": lambda this: "explicit"})({}) == "explicit"
        assert registry.get_helper("x")({}) == "registry"
        assert registry.get_partial("p", {"p": "explicit"}) == "explicit"
        assert registry.get_partial("p") == "registry"
        assert registry.get_partial("missing") is None

    def test_views_do_not_mutate_registry(self, registry):
        view = registry.partials_view({"p": "explicit"})
        view["q"] = "written"

        assert "q" not in registry.partials

    def test_copy_is_independent(self, registry):
        clone = registry.copy()
        clone.register_partial("only-in-clone", "x")

        assert "only-in-clone" not in registry.partials
        assert clone.helpers["each"] == registry.helpers["each"]


class TestAsHelper:

    def test_wraps_callable(self):
        helper = as_helper(len)

        assert isinstance(helper, Helper)
        assert helper("abc") == 3

    def test_keeps_helper(self):
        helper = Helper(fn=len)

        assert as_helper(helper) is helper

    def test_rejects_non_callable(self):
        with pytest.raises(TypeError):
            as_helper("not callable")
