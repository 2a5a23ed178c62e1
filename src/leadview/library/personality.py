"""
Personality fragments (deep and xray leads).

All four read ``payload["personality_profile"]``:

    disc_profile          "D", "DI", "SC", ...
    data_confidence       high | medium | low
    content_authenticity  ai_generated | ai_assisted | human_authentic | insufficient_data
    behavior_patterns     [str]
    communication_style   str
    motivation_drivers    [str]
"""

from ..fragments import Fragment
from ..markup import render
from .core import card, is_analyzed


DISC_COLORS = {
    "D": "red",
    "I": "yellow",
    "S": "green",
    "C": "blue",
}

DISC_DESCRIPTIONS = {
    "D": "Dominance - Direct, results-oriented, and confident. Prefers challenges and making quick decisions.",
    "I": "Influence - Enthusiastic, optimistic, and people-oriented. Values relationships and social recognition.",
    "S": "Steadiness - Patient, supportive, and team-oriented. Values stability and harmonious relationships.",
    "C": "Conscientiousness - Accurate, analytical, and detail-oriented. Values quality and systematic approaches.",
    "DI": "Dominance-Influence - Assertive and outgoing. Combines directness with social confidence.",
    "ID": "Influence-Dominance - Outgoing and assertive. Enthusiastic leader who values results and relationships.",
    "DS": "Dominance-Steadiness - Direct yet supportive. Balances decisiveness with team consideration.",
    "SD": "Steadiness-Dominance - Supportive yet decisive. Patient leader who takes action when needed.",
    "DC": "Dominance-Conscientiousness - Direct and analytical. Results-focused with attention to detail.",
    "CD": "Conscientiousness-Dominance - Analytical and decisive. Detail-oriented with strong decision-making.",
    "IS": "Influence-Steadiness - Friendly and supportive. People-person who values team harmony.",
    "SI": "Steadiness-Influence - Supportive and friendly. Team player with good social skills.",
    "IC": "Influence-Conscientiousness - Enthusiastic and precise. Social yet detail-conscious.",
    "CI": "Conscientiousness-Influence - Precise and friendly. Analytical with good people skills.",
    "SC": "Steadiness-Conscientiousness - Patient and accurate. Reliable team member who values quality.",
    "CS": "Conscientiousness-Steadiness - Accurate and patient. Detail-oriented with strong teamwork.",
}
DEFAULT_DISC_DESCRIPTION = "Personality profile analysis based on observable behavior patterns."

CONFIDENCE_LABELS = {
    "high": "High Confidence",
    "medium": "Medium Confidence",
    "low": "Low Confidence",
}

AUTHENTICITY_LABELS = {
    "ai_generated": "🤖 AI-Generated Content",
    "ai_assisted": "🤝 AI-Assisted Content",
    "human_authentic": "✍️ Human Authentic",
    "insufficient_data": "❓ Insufficient Data",
}


def disc_description(disc_profile) -> str:
    return DISC_DESCRIPTIONS.get(disc_profile or "", DEFAULT_DISC_DESCRIPTION)


def disc_color(disc_profile) -> str:
    primary = (disc_profile or "")[:1].upper()
    return DISC_COLORS.get(primary, DISC_COLORS["I"])


def _profile(payload) -> dict:
    return payload.get("personality_profile") or {}


def _has_trait(key):
    def predicate(lead, payload):
        return is_analyzed(lead) and bool(_profile(payload).get(key))
    return predicate


_OVERVIEW = """\
<section class="modal-card personality-overview disc-{{ color }}">
<header>
<h3 class="modal-card-title">Personality Profile</h3>
<p>DISC Assessment</p>
{% if confidence %}<span class="confidence-badge confidence-{{ profile.data_confidence }}">{{ confidence }}</span>{% endif %}
</header>
<dl class="disc-summary">
<div><dt>DISC Type</dt><dd class="disc-type">{{ profile.disc_profile }}</dd></div>
<div><dt>Content Style</dt><dd>{{ authenticity }}</dd></div>
</dl>
<p class="disc-description">{{ description }}</p>
</section>"""

_BEHAVIOR = card("Behavior Patterns", """\
<ol class="behavior-patterns">
{% for pattern in patterns %}
<li>{{ pattern }}</li>
{% endfor %}
</ol>""")

_COMMUNICATION = card("Communication Style", '<p class="communication-style">{{ style }}</p>')

_MOTIVATION = card("Motivation Drivers", """\
<ul class="motivation-drivers">
{% for driver in drivers %}
<li>{{ driver }}</li>
{% endfor %}
</ul>""")


def render_overview(lead, payload) -> str:
    profile = _profile(payload)
    disc = profile.get("disc_profile")
    return render(
        _OVERVIEW,
        profile=profile,
        color=disc_color(disc),
        confidence=CONFIDENCE_LABELS.get(profile.get("data_confidence")),
        authenticity=AUTHENTICITY_LABELS.get(profile.get("content_authenticity"), "Unknown"),
        description=disc_description(disc),
    )


def render_behavior_patterns(lead, payload) -> str:
    return render(_BEHAVIOR, patterns=_profile(payload).get("behavior_patterns"))


def render_communication_style(lead, payload) -> str:
    return render(_COMMUNICATION, style=_profile(payload).get("communication_style"))


def render_motivation_drivers(lead, payload) -> str:
    return render(_MOTIVATION, drivers=_profile(payload).get("motivation_drivers"))


FRAGMENTS = (
    Fragment("personalityOverview", render_overview, _has_trait("disc_profile")),
    Fragment("behaviorPatterns", render_behavior_patterns, _has_trait("behavior_patterns")),
    Fragment("communicationStyle", render_communication_style, _has_trait("communication_style")),
    Fragment("motivationDrivers", render_motivation_drivers, _has_trait("motivation_drivers")),
)


def install(registry) -> None:
    for fragment in FRAGMENTS:
        registry.register(fragment.name, fragment)
