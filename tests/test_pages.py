"""Tests for PageStack navigation."""

from palettekit.engine.pages import PageStack
from palettekit.models import Command

THEME = Command(id="a", label="Theme", children=(Command(id="a1", label="Dark"),))
ROOT = [THEME, Command(id="b", label="Quit")]


class TestPageStack:
    def test_root_state(self):
        pages = PageStack(ROOT)
        assert pages.current_items == ROOT
        assert pages.current_page is None
        assert pages.breadcrumb == []
        assert pages.can_go_back is False

    def test_push_and_pop(self):
        pages = PageStack(ROOT)
        assert pages.push_page(THEME) is True
        assert pages.current_page.id == "a"
        assert pages.can_go_back is True
        assert [c.id for c in pages.current_items] == ["a1"]

        assert pages.pop_page() is True
        assert pages.current_items == ROOT
        assert pages.can_go_back is False

    def test_push_leaf_is_noop(self):
        pages = PageStack(ROOT)
        assert pages.push_page(ROOT[1]) is False
        assert pages.depth == 0

    def test_pop_at_root_is_noop(self):
        pages = PageStack(ROOT)
        assert pages.pop_page() is False
        assert pages.current_items == ROOT

    def test_breadcrumb_is_root_to_current(self):
        inner = Command(id="deep", label="Deep", children=(Command(id="leaf", label="Leaf"),))
        outer = Command(id="outer", label="Outer", children=(inner,))
        pages = PageStack([outer])
        pages.push_page(outer)
        pages.push_page(inner)
        assert [c.id for c in pages.breadcrumb] == ["outer", "deep"]
        assert [c.id for c in pages.current_items] == ["leaf"]

    def test_reset_returns_to_root(self):
        pages = PageStack(ROOT)
        pages.push_page(THEME)
        pages.reset()
        assert pages.current_page is None
        assert pages.current_items == ROOT
