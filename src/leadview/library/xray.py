"""X-ray analysis fragments: copywriter profile, commercial intelligence,
persuasion strategy."""

from ..fragments import Fragment
from ..markup import render
from .core import card


def _xray_section(key):
    def predicate(lead, payload):
        return lead.analysis_type == "xray" and bool(payload.get(key))
    return predicate


_LIST_MACRO = """\
{% macro bullet_list(title, items) %}
{% if items %}
<h4>{{ title }}</h4>
<ul>
{% for item in items %}
<li>{{ item }}</li>
{% endfor %}
</ul>
{% endif %}
{% endmacro %}
"""

_COPYWRITER = _LIST_MACRO + card("Copywriter Profile", """\
<dl class="profile-facts">
<div><dt>Demographics</dt><dd>{{ profile.demographics or 'N/A' }}</dd></div>
<div><dt>Psychographics</dt><dd>{{ profile.psychographics or 'N/A' }}</dd></div>
</dl>
{{ bullet_list('Pain Points', profile.pain_points) }}
{{ bullet_list('Dreams & Desires', profile.dreams_desires) }}""")

_COMMERCIAL = _LIST_MACRO + card("Commercial Intelligence", """\
<dl class="profile-facts">
<div><dt>Budget Tier</dt><dd>{{ intel.budget_tier|humanize or 'N/A' }}</dd></div>
<div><dt>Buying Stage</dt><dd>{{ intel.buying_stage|humanize or 'N/A' }}</dd></div>
<div><dt>Decision Role</dt><dd>{{ intel.decision_role|humanize or 'N/A' }}</dd></div>
</dl>
{{ bullet_list('Objections', intel.objections) }}""")

_PERSUASION = _LIST_MACRO + card("Persuasion Strategy", """\
<dl class="profile-facts">
<div><dt>Primary Angle</dt><dd>{{ strategy.primary_angle|humanize or 'N/A' }}</dd></div>
<div><dt>Hook Style</dt><dd>{{ strategy.hook_style|humanize or 'N/A' }}</dd></div>
<div><dt>Communication Style</dt><dd>{{ strategy.communication_style or 'N/A' }}</dd></div>
</dl>
{{ bullet_list('Proof Elements', strategy.proof_elements) }}""")


def render_copywriter_profile(lead, payload) -> str:
    return render(_COPYWRITER, profile=payload.get("copywriter_profile"))


def render_commercial_intelligence(lead, payload) -> str:
    return render(_COMMERCIAL, intel=payload.get("commercial_intelligence"))


def render_persuasion_strategy(lead, payload) -> str:
    return render(_PERSUASION, strategy=payload.get("persuasion_strategy"))


FRAGMENTS = (
    Fragment("copywriterProfile", render_copywriter_profile, _xray_section("copywriter_profile")),
    Fragment("commercialIntelligence", render_commercial_intelligence, _xray_section("commercial_intelligence")),
    Fragment("persuasionStrategy", render_persuasion_strategy, _xray_section("persuasion_strategy")),
)


def install(registry) -> None:
    for fragment in FRAGMENTS:
        registry.register(fragment.name, fragment)
