"""
Tests for leadview.tabs

Covers:
- Initial state and default tab
- Exactly one visible tab after any sequence of selections
- Unknown ids leave the state unchanged
- Wrap-around stepping and change observers
- Tab markup (controls, panes, single-tab shortcut)
"""

import pytest

from leadview.layouts import TabSpec
from leadview.tabs import Tab, TabComposer


def _composer(default=None):
    return TabComposer(
        [("analysis", "Analysis"), ("personality", "Personality"), ("posts", "Posts")],
        default=default,
    )


class TestTabState:

    def test_initial_state_is_first_tab(self):
        assert _composer().active_tab_id == "analysis"

    def test_default_tab(self):
        assert _composer(default="posts").active_tab_id == "posts"

    def test_unknown_default_falls_back_to_first(self):
        assert _composer(default="missing").active_tab_id == "analysis"

    def test_requires_tabs(self):
        with pytest.raises(ValueError):
            TabComposer([])

    def test_select_known_tab(self):
        composer = _composer()
        assert composer.select("personality") is True
        assert composer.active_tab_id == "personality"

    def test_select_unknown_tab_is_noop(self, caplog):
        composer = _composer()
        composer.select("personality")
        with caplog.at_level("WARNING", logger="leadview.tabs"):
            assert composer.select("nonexistent") is False
        assert composer.active_tab_id == "personality"
        assert "nonexistent" in caplog.text

    def test_exactly_one_visible(self):
        composer = _composer()
        for tab_id in ("posts", "bogus", "analysis", "personality", "", "posts"):
            composer.select(tab_id)
            visibility = composer.visibility()
            assert sum(visibility.values()) == 1
            assert visibility[composer.active_tab_id]

    def test_step_wraps_around(self):
        composer = _composer()
        assert composer.previous() == "posts"
        assert composer.next() == "analysis"
        assert composer.step(4) == "personality"

    def test_on_change_observer(self):
        composer = _composer()
        changes = []
        composer.on_change(lambda to_id, from_id: changes.append((to_id, from_id)))
        composer.select("posts")
        composer.select("posts")
        composer.select("bogus")
        composer.next()
        assert changes == [("posts", "analysis"), ("analysis", "posts")]

    def test_accepts_tab_specs(self):
        composer = TabComposer([TabSpec(id="a", label="A", icon="*"), Tab("b", "B")])
        assert composer.tab_ids() == ["a", "b"]
        assert composer.tabs[0].icon == "*"


class TestTabMarkup:

    def test_controls_reflect_active_tab(self):
        composer = _composer()
        html = composer.render({"analysis": "<p>A</p>", "personality": "<p>P</p>"})
        assert 'role="tablist"' in html
        assert html.count('role="tab"') == 3
        assert html.count('role="tabpanel"') == 3
        assert 'data-tab="analysis"' in html
        assert 'aria-selected="true"' in html
        assert html.count('aria-selected="true"') == 1
        assert 'id="tab-content-analysis"' in html
        assert 'aria-labelledby="tab-personality"' in html

    def test_all_panes_prerendered(self):
        composer = _composer()
        html = composer.render({"analysis": "<p>A</p>", "personality": "<p>P</p>"})
        assert "<p>A</p>" in html
        assert "<p>P</p>" in html
        assert html.count("display: block") == 1
        assert html.count("display: none") == 2

    def test_switch_keeps_panes(self):
        composer = _composer()
        composer.render({"analysis": "<p>A</p>", "personality": "<p>P</p>"})
        composer.select("personality")
        html = composer.render()
        assert "<p>A</p>" in html
        assert 'data-active-tab="personality"' in html

    def test_single_tab_renders_directly(self):
        composer = TabComposer([("only", "Only")])
        html = composer.render({"only": "<p>solo</p>"})
        assert html == "<p>solo</p>"
        assert "tablist" not in html

    def test_labels_are_escaped(self):
        composer = TabComposer([("a", "<b>A</b>"), ("b", "B")])
        html = composer.render({})
        assert "&lt;b&gt;A&lt;/b&gt;" in html
