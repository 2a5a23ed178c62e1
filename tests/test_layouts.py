"""
Tests for leadview.layouts

Covers:
- Shipped layouts.yaml loads and matches the default layouts
- Schema validation (tabbed / untabbed structure, duplicates)
- Store lookup errors and registration
"""

import json

import pytest

from leadview import FragmentRegistry, LayoutInvalidError, LayoutNotFoundError, library
from leadview.layouts import LayoutConfig, LayoutStore


class TestDefaultLayouts:

    @pytest.fixture(scope="class")
    def store(self):
        return LayoutStore.from_yaml()

    def test_analysis_types(self, store):
        assert store.analysis_types() == ["deep", "light", "xray"]

    def test_light_is_untabbed(self, store):
        layout = store.get("light")
        assert not layout.has_tabs
        assert layout.components == ["heroHeader", "aiSummary", "lightAnalysisNotice"]

    def test_deep_tabs(self, store):
        layout = store.get("deep")
        assert layout.has_tabs
        assert layout.header == "heroHeader"
        assert [tab.id for tab in layout.tabs] == ["analysis", "personality"]
        assert layout.tabs[0].components[0] == "deepSummary"
        assert layout.tabs[1].components == [
            "personalityOverview", "behaviorPatterns", "communicationStyle", "motivationDrivers",
        ]

    def test_xray_analysis_tab(self, store):
        assert store.get("xray").tabs[0].components == [
            "copywriterProfile", "commercialIntelligence", "persuasionStrategy", "aiSummary",
        ]

    def test_every_fragment_is_registered(self, store):
        registry = FragmentRegistry(installers=[library.install])
        for analysis_type in store.analysis_types():
            assert store.missing_fragments(analysis_type, registry) == []


class TestLayoutValidation:

    def test_tabbed_requires_tabs(self):
        with pytest.raises(ValueError):
            LayoutConfig(has_tabs=True)

    def test_untabbed_requires_components(self):
        with pytest.raises(ValueError):
            LayoutConfig(has_tabs=False)

    def test_duplicate_tab_ids(self):
        with pytest.raises(ValueError):
            LayoutConfig(has_tabs=True, tabs=[
                {"id": "a", "label": "A"},
                {"id": "a", "label": "Again"},
            ])

    def test_default_tab_must_exist(self):
        with pytest.raises(ValueError):
            LayoutConfig(has_tabs=True, tabs=[{"id": "a", "label": "A"}], default_tab="b")

    def test_unknown_keys_rejected(self):
        with pytest.raises(ValueError):
            LayoutConfig(components=["x"], colour="red")

    def test_fragment_names_include_header(self):
        layout = LayoutConfig(
            has_tabs=True,
            header="heroHeader",
            tabs=[{"id": "a", "label": "A", "components": ["x", "y"]}],
        )
        assert layout.fragment_names() == ["heroHeader", "x", "y"]

    def test_invalid_document_raises_layout_invalid(self):
        with pytest.raises(LayoutInvalidError) as exc_info:
            LayoutStore.from_dict({"broken": {"has_tabs": True}})
        assert exc_info.value.code == "LV_LAYOUT_INVALID"
        assert exc_info.value.details["analysis_type"] == "broken"

    def test_non_mapping_document(self):
        with pytest.raises(LayoutInvalidError):
            LayoutStore.from_dict(["light"])

    def test_missing_file(self, tmp_path):
        with pytest.raises(LayoutInvalidError):
            LayoutStore.from_yaml(tmp_path / "absent.yaml")

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "layouts.yaml"
        path.write_text("custom:\n  components: [heroHeader]\n", encoding="utf-8")
        store = LayoutStore.from_yaml(path)
        assert store.get("custom").components == ["heroHeader"]


class TestLayoutStore:

    def test_missing_layout_raises(self):
        store = LayoutStore()
        with pytest.raises(LayoutNotFoundError) as exc_info:
            store.get("deep")
        assert exc_info.value.code == "LV_LAYOUT_NOT_FOUND"
        assert "[LV_LAYOUT_NOT_FOUND]" in str(exc_info.value)
        assert json.loads(exc_info.value.to_json())["code"] == "LV_LAYOUT_NOT_FOUND"

    def test_register_dict(self):
        store = LayoutStore()
        store.register("quick", {"components": ["aiSummary"]})
        assert "quick" in store
        assert store.get("quick").components == ["aiSummary"]

    def test_register_invalid(self):
        with pytest.raises(LayoutInvalidError):
            LayoutStore().register("bad", {"has_tabs": True})

    def test_missing_fragments(self):
        store = LayoutStore()
        store.register("quick", {"components": ["aiSummary", "ghost"]})
        registry = FragmentRegistry(installers=[library.install_core])
        assert store.missing_fragments("quick", registry) == ["ghost"]
