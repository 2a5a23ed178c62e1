"""
Modal layouts.

A layout tells the modal builder, per analysis type, which fragments to
render and whether they are grouped into tabs. Layouts are declared in
YAML (``layouts.yaml`` ships the defaults) and validated with pydantic
schemas on load.

    light:
      has_tabs: false
      components: [heroHeader, aiSummary, lightAnalysisNotice]
    deep:
      has_tabs: true
      header: heroHeader
      tabs:
        - id: analysis
          label: Analysis
          components: [deepSummary, sellingPoints]
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from .exceptions import LayoutInvalidError, LayoutNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_LAYOUTS_PATH = Path(__file__).parent / "layouts.yaml"


# =============================================================================
# Schemas
# =============================================================================

class TabSpec(BaseModel):
    """One tab of a tabbed layout."""
    id: str = Field(..., min_length=1, description="Tab identifier (e.g., 'analysis')")
    label: str = Field(..., description="Tab control text")
    icon: Optional[str] = Field(None, description="Optional icon glyph")
    components: list[str] = Field(default_factory=list, description="Fragment names in render order")

    model_config = {"extra": "forbid"}


class LayoutConfig(BaseModel):
    """Layout for one analysis type."""
    has_tabs: bool = False
    components: list[str] = Field(default_factory=list, description="Fragment names (untabbed)")
    tabs: list[TabSpec] = Field(default_factory=list, description="Tabs (tabbed)")
    header: Optional[str] = Field(None, description="Fragment rendered above the tabs")
    default_tab: Optional[str] = Field(None, description="Initially active tab id")

    model_config = {"extra": "forbid"}

    @model_validator(mode="after")
    def validate_structure(self) -> "LayoutConfig":
        if self.has_tabs:
            if not self.tabs:
                raise ValueError("Tabbed layout requires at least one tab")
            ids = [tab.id for tab in self.tabs]
            duplicates = sorted({tab_id for tab_id in ids if ids.count(tab_id) > 1})
            if duplicates:
                raise ValueError(f"Duplicate tab ids: {', '.join(duplicates)}")
            if self.default_tab is not None and self.default_tab not in ids:
                raise ValueError(f"default_tab '{self.default_tab}' is not a declared tab")
        elif not self.components:
            raise ValueError("Untabbed layout requires 'components'")
        return self

    def fragment_names(self) -> list[str]:
        """Every fragment name the layout references, in render order."""
        if not self.has_tabs:
            return list(self.components)
        names = [self.header] if self.header else []
        for tab in self.tabs:
            names.extend(tab.components)
        return names


# =============================================================================
# Store
# =============================================================================

class LayoutStore:
    """
    Analysis type -> LayoutConfig.

    Usage:
        store = LayoutStore.from_yaml()
        layout = store.get("deep")
    """

    def __init__(self, layouts: Optional[dict[str, LayoutConfig]] = None):
        self._layouts: dict[str, LayoutConfig] = dict(layouts or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: str = "<dict>") -> "LayoutStore":
        if not isinstance(data, dict):
            raise LayoutInvalidError(
                message="Layouts document must be a mapping of analysis type to layout",
                details={"source": source},
            )
        layouts = {}
        for analysis_type, raw in data.items():
            try:
                layouts[str(analysis_type)] = LayoutConfig.model_validate(raw or {})
            except ValidationError as e:
                raise LayoutInvalidError(
                    message=f"Layout '{analysis_type}' failed validation: {e.error_count()} errors",
                    details={"analysis_type": analysis_type, "errors": e.errors(include_url=False, include_context=False, include_input=False), "source": source},
                )
        return cls(layouts)

    @classmethod
    def from_yaml(cls, path: Union[str, Path, None] = None) -> "LayoutStore":
        path = Path(path) if path else DEFAULT_LAYOUTS_PATH
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise LayoutInvalidError(
                message=f"Failed to load layouts: {e}",
                details={"path": str(path), "error": str(e)},
            )
        store = cls.from_dict(data, source=str(path))
        logger.info("Loaded %d layout(s) from %s", len(store), path)
        return store

    def get(self, analysis_type: str) -> LayoutConfig:
        layout = self._layouts.get(analysis_type)
        if layout is None:
            raise LayoutNotFoundError(
                message=f"No layout configured for analysis type '{analysis_type}'",
                details={"analysis_type": analysis_type, "available": self.analysis_types()},
            )
        return layout

    def register(self, analysis_type: str, layout: Union[LayoutConfig, dict[str, Any]]) -> LayoutConfig:
        if not isinstance(layout, LayoutConfig):
            try:
                layout = LayoutConfig.model_validate(layout)
            except ValidationError as e:
                raise LayoutInvalidError(
                    message=f"Layout '{analysis_type}' failed validation: {e.error_count()} errors",
                    details={"analysis_type": analysis_type, "errors": e.errors(include_url=False, include_context=False, include_input=False)},
                )
        self._layouts[analysis_type] = layout
        logger.debug("Registered layout: %s", analysis_type)
        return layout

    def analysis_types(self) -> list[str]:
        return sorted(self._layouts)

    def missing_fragments(self, analysis_type: str, registry) -> list[str]:
        """Fragment names the layout references that ``registry`` lacks."""
        return [name for name in self.get(analysis_type).fragment_names() if name not in registry]

    def __contains__(self, analysis_type: object) -> bool:
        return analysis_type in self._layouts

    def __len__(self) -> int:
        return len(self._layouts)
