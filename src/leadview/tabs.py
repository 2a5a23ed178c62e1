"""Tab composer.

Groups rendered fragment markup into tabs and owns the active-tab state
for one modal instance. The states are the declared tab ids; the initial
state is the configured default or the first tab. Exactly one tab is
visible at any time.

Panes are rendered once at build time. Switching tabs only flips
visibility; fragments are never re-rendered.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from . import markup

logger = logging.getLogger(__name__)

ChangeObserver = Callable[[str, str], None]


@dataclass(frozen=True)
class Tab:
    id: str
    label: str
    icon: Optional[str] = None


_TAB_NAV = """\
<div class="tab-navigation" role="tablist">
{% for tab in tabs %}
<button type="button" id="tab-{{ tab.id }}" class="tab-button{% if tab.id == active %} active{% endif %}" data-tab="{{ tab.id }}" role="tab" aria-selected="{{ 'true' if tab.id == active else 'false' }}" aria-controls="tab-content-{{ tab.id }}" tabindex="{{ '0' if tab.id == active else '-1' }}">
{% if tab.icon %}<span class="tab-icon">{{ tab.icon }}</span>{% endif %}<span class="tab-label">{{ tab.label }}</span>
</button>
{% endfor %}
</div>"""

_TAB_PANES = """\
<div class="tabbed-container" data-active-tab="{{ active }}">
{{ nav|safe }}
<div class="tab-content-wrapper">
{% for tab in tabs %}
<div id="tab-content-{{ tab.id }}" class="tab-content" role="tabpanel" aria-labelledby="tab-{{ tab.id }}" style="display: {{ 'block' if visibility[tab.id] else 'none' }};">
{{ panes.get(tab.id, '')|safe }}
</div>
{% endfor %}
</div>
</div>"""


class TabComposer:
    """Active-tab state machine plus tab markup."""

    def __init__(self, tabs: Iterable, default: Optional[str] = None):
        self.tabs: List[Tab] = [self._coerce(tab) for tab in tabs]
        if not self.tabs:
            raise ValueError("TabComposer requires at least one tab")

        ids = self.tab_ids()
        self.active_tab_id: str = default if default in ids else ids[0]
        self.panes: Dict[str, str] = {}
        self._observers: List[ChangeObserver] = []

    @staticmethod
    def _coerce(tab) -> Tab:
        if isinstance(tab, Tab):
            return tab
        if isinstance(tab, (tuple, list)):
            return Tab(*tab)
        # TabSpec or any object with id/label
        return Tab(id=tab.id, label=tab.label, icon=getattr(tab, "icon", None))

    def tab_ids(self) -> List[str]:
        return [tab.id for tab in self.tabs]

    # ── State ────────────────────────────────────────────────────────────────

    def select(self, tab_id: str) -> bool:
        """Make ``tab_id`` active. Unknown ids leave the state unchanged."""
        if tab_id not in self.tab_ids():
            logger.warning("Ignoring unknown tab id: %s", tab_id)
            return False
        if tab_id == self.active_tab_id:
            return True

        previous = self.active_tab_id
        self.active_tab_id = tab_id
        for observer in list(self._observers):
            observer(tab_id, previous)
        return True

    def step(self, offset: int) -> str:
        """Move ``offset`` tabs forward (negative: back), wrapping around."""
        ids = self.tab_ids()
        index = (ids.index(self.active_tab_id) + offset) % len(ids)
        self.select(ids[index])
        return self.active_tab_id

    def next(self) -> str:
        return self.step(1)

    def previous(self) -> str:
        return self.step(-1)

    def visibility(self) -> Dict[str, bool]:
        return {tab_id: tab_id == self.active_tab_id for tab_id in self.tab_ids()}

    def on_change(self, observer: ChangeObserver) -> ChangeObserver:
        """Call ``observer(to_id, from_id)`` after every transition."""
        self._observers.append(observer)
        return observer

    # ── Markup ───────────────────────────────────────────────────────────────

    def render_navigation(self) -> str:
        return markup.render(_TAB_NAV, tabs=self.tabs, active=self.active_tab_id)

    def render(self, panes: Optional[Dict[str, str]] = None) -> str:
        """Render tab controls and all panes.

        ``panes`` (tab id -> markup) replaces the stored panes when given.
        With a single tab, no controls are emitted and panes are
        concatenated directly.
        """
        if panes is not None:
            self.panes = dict(panes)

        if len(self.tabs) <= 1:
            return "\n".join(self.panes.get(tab_id, "") for tab_id in self.tab_ids())

        return markup.render(
            _TAB_PANES,
            tabs=self.tabs,
            active=self.active_tab_id,
            nav=self.render_navigation(),
            panes=self.panes,
            visibility=self.visibility(),
        )

    def __repr__(self) -> str:
        return f"TabComposer(tabs={self.tab_ids()!r}, active={self.active_tab_id!r})"
