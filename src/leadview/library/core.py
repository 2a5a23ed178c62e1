"""Core fragments shared by every analysis type.

These are installed directly into a registry (``install``). Predicates
read the resolved payload and the originating record; they fail closed
when either is missing.
"""

from urllib.parse import quote

from ..fragments import Fragment
from ..markup import render
from ..payload import main_score
from ..tiers import classify_score, clamp_score

DEFAULT_AVATAR = "/assets/images/default-avatar.jpg"
AVATAR_PROXY = "https://images.weserv.nl/?url={url}&w=160&h=160&fit=cover&mask=circle"


def is_analyzed(lead) -> bool:
    """Deep and xray leads carry the full analysis payload."""
    return lead.analysis_type in ("deep", "xray")


def avatar_url(lead) -> str:
    if not lead.profile_pic_url:
        return DEFAULT_AVATAR
    return AVATAR_PROXY.format(url=quote(lead.profile_pic_url, safe=""))


def follower_category(count) -> str:
    count = count or 0
    if count >= 10000:
        return "Macro"
    if count >= 1000:
        return "Micro"
    return "Nano"


def card(title: str, body_source: str) -> str:
    """Template source for a titled card around ``body_source``."""
    return (
        '<section class="modal-card">\n'
        f'<h3 class="modal-card-title">{title}</h3>\n'
        f'{body_source}\n'
        '</section>'
    )


# ── heroHeader ───────────────────────────────────────────────────────────────

_HERO = """\
<header class="hero-header bg-gradient-to-br {{ tier.css_class }}" data-tier="{{ tier.band.value }}">
<div class="hero-profile">
<img src="{{ avatar }}" alt="Profile" class="hero-avatar" onerror="this.src='{{ default_avatar }}'">
{% if lead.is_verified %}<span class="verified-badge" title="Verified">✓</span>{% endif %}
<h1 class="hero-name">{{ lead.name }}</h1>
<p class="hero-handle">@{{ lead.username }}</p>
{% if lead.profile_url %}<a class="hero-link" href="{{ lead.profile_url }}" target="_blank" rel="noopener noreferrer">View Profile</a>{% endif %}
<div class="hero-badges">
{% if lead.is_business_account %}<span class="badge">Business</span>{% endif %}
{% if lead.is_private %}<span class="badge">Private</span>{% endif %}
</div>
</div>
<div class="score-ring" data-score="{{ score }}">
<div class="score-value">{{ score }}</div>
<div class="score-label">{{ tier.label }}</div>
</div>
<dl class="hero-stats">
<div><dt>Followers</dt><dd>{{ lead.followers_count|compact }}</dd></div>
<div><dt>Following</dt><dd>{{ lead.following_count|compact }}</dd></div>
<div><dt>Posts</dt><dd>{{ lead.posts_count|compact }}</dd></div>
</dl>
</header>"""


def render_hero_header(lead, payload) -> str:
    """Profile header with score ring and counts."""
    score = main_score(lead, payload)
    return render(
        _HERO,
        lead=lead,
        score=round(score),
        tier=classify_score(clamp_score(score)),
        avatar=avatar_url(lead),
        default_avatar=DEFAULT_AVATAR,
    )


# ── aiSummary ────────────────────────────────────────────────────────────────

NO_SUMMARY = "No summary available for this lead."

_SUMMARY = card("AI Analysis Summary", '<p class="summary-text">{{ text }}</p>')


def summary_text(lead, payload) -> str:
    record = payload.record
    if is_analyzed(lead):
        deep_text = record.get("deep_summary") or record.get("summary_text")
        if deep_text:
            return deep_text
    return lead.quick_summary or record.get("summary_text") or NO_SUMMARY


def render_ai_summary(lead, payload) -> str:
    return render(_SUMMARY, text=summary_text(lead, payload))


# ── lightAnalysisNotice / personalityLockedLight ─────────────────────────────

_LIGHT_NOTICE = """\
<section class="light-analysis-notice">
<h3>Light Analysis Complete</h3>
<p>For detailed engagement metrics, audience insights, and personalized outreach messages, run a deep analysis.</p>
<button type="button" data-action="start-deep-analysis" data-lead-id="{{ lead.id or '' }}">Run Deep Analysis</button>
</section>"""

_PERSONALITY_LOCKED = """\
<section class="personality-locked">
<h3>Personality Insights Locked</h3>
<p>Unlock advanced personality analysis with Deep or X-Ray analysis to see:</p>
<ul>
{% for feature, hint in features %}
<li><strong>{{ feature }}</strong> <span>{{ hint }}</span></li>
{% endfor %}
</ul>
<button type="button" data-action="start-deep-analysis" data-lead-id="{{ lead.id or '' }}">Run Deep Analysis</button>
</section>"""

_LOCKED_FEATURES = (
    ("DISC Assessment", "Personality breakdown"),
    ("Communication Style", "Preferred approach"),
    ("Behavior Patterns", "Activity insights"),
    ("Motivation Drivers", "What drives them"),
)


def render_light_notice(lead, payload) -> str:
    return render(_LIGHT_NOTICE, lead=lead)


def render_personality_locked(lead, payload) -> str:
    return render(_PERSONALITY_LOCKED, lead=lead, features=_LOCKED_FEATURES)


# ── contentEngagementIntel ───────────────────────────────────────────────────

_ENGAGEMENT_INTEL = card("Content &amp; Engagement Intelligence", """\
{% if engagement.engagementRate %}
<dl class="metric-grid">
<div><dt>Engagement Rate</dt><dd>{{ engagement.engagementRate }}%</dd></div>
<div><dt>Avg Likes</dt><dd>{{ engagement.avgLikes or 0 }}</dd></div>
<div><dt>Avg Comments</dt><dd>{{ engagement.avgComments or 0 }}</dd></div>
<div><dt>Posts Analyzed</dt><dd>{{ engagement.postsAnalyzed or 0 }}</dd></div>
</dl>
{% endif %}
{% if content %}
<dl class="metric-grid">
{% for key, value in content.items() %}
<div><dt>{{ key|humanize }}</dt><dd>{{ value }}</dd></div>
{% endfor %}
</dl>
{% endif %}
{% if posting %}
<dl class="metric-grid">
{% for key, value in posting.items() %}
<div><dt>{{ key|humanize }}</dt><dd>{{ value }}</dd></div>
{% endfor %}
</dl>
{% endif %}""")


def has_engagement_metrics(lead, payload) -> bool:
    return is_analyzed(lead) and bool(payload.get("pre_processed_metrics"))


def render_engagement_intel(lead, payload) -> str:
    metrics = payload.get("pre_processed_metrics") or {}
    return render(
        _ENGAGEMENT_INTEL,
        engagement=metrics.get("engagement") or {},
        content=metrics.get("content") or {},
        posting=metrics.get("posting") or {},
    )


# ── metricsGrid ──────────────────────────────────────────────────────────────

_METRICS = """\
<dl class="metrics-grid">
<div><dt>Engagement</dt><dd>{{ engagement }}</dd></div>
<div><dt>Avg Likes</dt><dd>{{ avg_likes|compact }}</dd></div>
<div><dt>Niche Fit</dt><dd>{{ niche_fit }}</dd></div>
<div><dt>Audience Quality</dt><dd>{{ audience_quality }}</dd></div>
<div><dt>Follower Category</dt><dd>{{ category }}</dd></div>
</dl>"""


def render_metrics_grid(lead, payload) -> str:
    record = payload.record
    breakdown = payload.get("engagement_breakdown") or {}
    return render(
        _METRICS,
        engagement=record.get("engagement_score") or payload.get("engagement_score") or 0,
        avg_likes=breakdown.get("avg_likes") or 0,
        niche_fit=record.get("score_niche_fit") or payload.get("niche_fit_score") or 0,
        audience_quality=record.get("audience_quality") or payload.get("audience_quality") or "Medium",
        category=follower_category(lead.followers_count),
    )


# ── sellingPoints / outreachMessage / reasons / audienceInsights ─────────────

_SELLING_POINTS = card("Key Selling Points", """\
<ul class="selling-points">
{% for point in points %}
<li>{{ point }}</li>
{% endfor %}
</ul>""")

_OUTREACH = card("Outreach Message", """\
<blockquote class="outreach-message">{{ message }}</blockquote>
<button type="button" data-action="copy-outreach">Copy Message</button>""")

_REASONS = card("Why This Lead", """\
<ol class="reasons">
{% for reason in reasons %}
<li>{{ reason }}</li>
{% endfor %}
</ol>""")

_AUDIENCE = card("Audience Insights", '<p class="audience-insights">{{ insights }}</p>')


def has_selling_points(lead, payload) -> bool:
    return bool(payload.lookup("selling_points"))


def render_selling_points(lead, payload) -> str:
    return render(_SELLING_POINTS, points=payload.lookup("selling_points", []))


def has_outreach_message(lead, payload) -> bool:
    return bool(payload.lookup("outreach_message"))


def render_outreach_message(lead, payload) -> str:
    return render(_OUTREACH, message=payload.lookup("outreach_message"))


def has_reasons(lead, payload) -> bool:
    return bool(payload.record.get("reasons"))


def render_reasons(lead, payload) -> str:
    return render(_REASONS, reasons=payload.record.get("reasons"))


def has_audience_insights(lead, payload) -> bool:
    return bool(payload.record.get("audience_insights"))


def render_audience_insights(lead, payload) -> str:
    return render(_AUDIENCE, insights=payload.record.get("audience_insights"))


# ── quickSummary ─────────────────────────────────────────────────────────────

_QUICK_SUMMARY = card("Quick Summary", '<p class="quick-summary">{{ text }}</p>')


def has_quick_summary(lead, payload) -> bool:
    record = payload.record
    return bool(record) and bool(record.get("quick_summary") or lead.quick_summary)


def render_quick_summary(lead, payload) -> str:
    return render(_QUICK_SUMMARY, text=payload.record.get("quick_summary") or lead.quick_summary)


FRAGMENTS = (
    Fragment("heroHeader", render_hero_header, description="Profile header with score ring"),
    Fragment("aiSummary", render_ai_summary, description="AI analysis summary"),
    Fragment("lightAnalysisNotice", render_light_notice, description="Deep analysis upsell"),
    Fragment("personalityLockedLight", render_personality_locked, description="Locked personality teaser"),
    Fragment("contentEngagementIntel", render_engagement_intel, has_engagement_metrics),
    Fragment("metricsGrid", render_metrics_grid, lambda lead, payload: is_analyzed(lead)),
    Fragment("sellingPoints", render_selling_points, has_selling_points),
    Fragment("outreachMessage", render_outreach_message, has_outreach_message),
    Fragment("reasons", render_reasons, has_reasons),
    Fragment("audienceInsights", render_audience_insights, has_audience_insights),
    Fragment("quickSummary", render_quick_summary, has_quick_summary),
)


def install(registry) -> None:
    for fragment in FRAGMENTS:
        registry.register(fragment.name, fragment)
