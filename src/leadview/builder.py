"""
Modal builder.

Composes the analysis-detail modal for one lead:

    resolve payload -> pick layout -> for each configured fragment:
    lookup -> predicate -> render -> group into tabs (or concatenate)
    -> wrap in containers -> notify observers

Failure policy:
- No layout for the lead's analysis type: LayoutNotFoundError propagates.
- Fragment not registered: warning, fragment skipped.
- Predicate false: fragment excluded. A raising predicate counts as false.
- Render raises or returns something other than markup: error logged,
  fragment dropped, the build continues with the remaining fragments.

USAGE:
    registry = FragmentRegistry(installers=[library.install_core],
                                extensions=extension_queue)
    builder = ModalBuilder(registry, LayoutStore.from_yaml())
    html = builder.build(lead, record)
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Union

from . import markup
from .events import EventBus, ModalBuiltEvent, Observer
from .fragments import FragmentRegistry
from .layouts import LayoutConfig, LayoutStore
from .payload import (
    HIGH_TIER_THRESHOLD,
    NormalizedPayload,
    is_high_tier_score,
    main_score,
    resolve_payload,
)
from .records import Lead
from .tabs import TabComposer
from .tiers import TierDescriptor, classify_score, clamp_score

logger = logging.getLogger(__name__)


@dataclass
class ModalView:
    """Result of one modal build."""
    markup: str
    analysis_type: str
    payload: NormalizedPayload
    layout: LayoutConfig
    tier: TierDescriptor
    score: float
    event: ModalBuiltEvent
    tabs: Optional[TabComposer] = None
    rendered: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    generated_at: str = ""

    @property
    def is_high_tier_score(self) -> bool:
        return self.event.is_high_tier_score

    def to_dict(self) -> Dict[str, Any]:
        return {
            "analysis_type": self.analysis_type,
            "payload_source": self.payload.source.value,
            "score": self.score,
            "tier": self.tier.to_dict(),
            "rendered": list(self.rendered),
            "skipped": list(self.skipped),
            "tabs": self.tabs.tab_ids() if self.tabs else [],
            "active_tab": self.tabs.active_tab_id if self.tabs else None,
            "is_high_tier_score": self.is_high_tier_score,
            "generated_at": self.generated_at,
            "markup": self.markup,
        }


class ModalBuilder:
    """Builds analysis modals from a fragment registry and layout store."""

    def __init__(
        self,
        registry: FragmentRegistry,
        layouts: LayoutStore,
        observers: Union[EventBus, List[Observer], None] = None,
        high_tier_threshold: float = HIGH_TIER_THRESHOLD,
    ):
        self.registry = registry
        self.layouts = layouts
        self.events = observers if isinstance(observers, EventBus) else EventBus(observers)
        self.high_tier_threshold = high_tier_threshold

    # =========================================================================
    # Build
    # =========================================================================

    def build(self, lead: Lead, record: Optional[Mapping[str, Any]] = None) -> str:
        """Build the modal and return its markup."""
        return self.compose(lead, record).markup

    def compose(self, lead: Lead, record: Optional[Mapping[str, Any]] = None) -> ModalView:
        payload = resolve_payload(lead, record)
        layout = self.layouts.get(lead.analysis_type)

        score = main_score(lead, payload)
        high_tier = is_high_tier_score(score, self.high_tier_threshold)

        rendered: List[str] = []
        skipped: List[str] = []

        def render_group(names: List[str]) -> str:
            parts = []
            for name in names:
                html = self.render_fragment(name, lead, payload)
                if html is None:
                    skipped.append(name)
                    continue
                rendered.append(name)
                if html:
                    parts.append(html)
            return "\n".join(parts)

        tabs: Optional[TabComposer] = None
        if layout.has_tabs:
            header = render_group([layout.header]) if layout.header else ""
            panes = {tab.id: render_group(tab.components) for tab in layout.tabs}
            tabs = TabComposer(layout.tabs, default=layout.default_tab)
            body = "\n".join(part for part in (header, tabs.render(panes)) if part)
        else:
            body = render_group(layout.components)

        content = markup.content_container(body, lead.analysis_type, high_tier)
        html = markup.modal_shell(content, lead.handle)

        event = ModalBuiltEvent(
            analysis_type=lead.analysis_type,
            lead_handle=lead.handle,
            is_high_tier_score=high_tier,
            rendered=list(rendered),
            skipped=list(skipped),
        )

        logger.info(
            "Built %s modal for @%s (%d rendered, %d skipped)",
            lead.analysis_type, lead.handle, len(rendered), len(skipped),
            extra={"analysis_type": lead.analysis_type, "lead_id": lead.id},
        )
        self.events.emit(event)

        return ModalView(
            markup=html,
            analysis_type=lead.analysis_type,
            payload=payload,
            layout=layout,
            tier=classify_score(clamp_score(score)),
            score=score,
            event=event,
            tabs=tabs,
            rendered=rendered,
            skipped=skipped,
            generated_at=datetime.now(timezone.utc).isoformat(),
        )

    def render_fragment(self, name: str, lead: Lead, payload: NormalizedPayload) -> Optional[str]:
        """Render one fragment, or return None when it is left out."""
        fragment = self.registry.get(name)
        if fragment is None:
            logger.warning("Fragment not registered: %s", name)
            return None

        try:
            eligible = fragment.is_eligible(lead, payload)
        except Exception:
            logger.warning("Predicate for fragment %s failed", name, exc_info=True)
            return None
        if not eligible:
            return None

        try:
            output = fragment.render(lead, payload)
        except Exception:
            logger.exception("Fragment %s failed to render", name)
            return None

        if output is None:
            return ""
        if not isinstance(output, str):
            logger.error("Fragment %s returned %s instead of markup", name, type(output).__name__)
            return None
        return output

    # =========================================================================
    # Introspection
    # =========================================================================

    def validate_layout(self, analysis_type: str) -> List[str]:
        """Fragment names the layout references but the registry lacks."""
        missing = self.layouts.missing_fragments(analysis_type, self.registry)
        if missing:
            logger.warning("Layout %s references unregistered fragments: %s", analysis_type, ", ".join(missing))
        return missing

    def describe(self, lead: Lead, record: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Debug snapshot of what a build for ``lead`` would use."""
        payload = resolve_payload(lead, record)
        layout = self.layouts.get(lead.analysis_type)
        return {
            "analysis_type": lead.analysis_type,
            "lead_handle": lead.handle,
            "layout": layout.model_dump(),
            "payload_source": payload.source.value,
            "payload_keys": sorted(payload),
            "fragments_available": self.registry.names(),
            "fragments_configured": layout.fragment_names(),
            "fragments_missing": self.layouts.missing_fragments(lead.analysis_type, self.registry),
        }
