"""Deep-analysis fragments."""

from ..fragments import Fragment
from ..markup import render
from .core import card


def _is_deep(lead) -> bool:
    return lead.analysis_type == "deep"


_DEEP_SUMMARY = card("Deep Analysis", '<p class="deep-summary">{{ text }}</p>')

_ENGAGEMENT_BREAKDOWN = card("Engagement Breakdown", """\
<dl class="metric-grid">
<div><dt>Avg Likes</dt><dd>{{ breakdown.avg_likes or 0 }}</dd></div>
<div><dt>Avg Comments</dt><dd>{{ breakdown.avg_comments or 0 }}</dd></div>
<div><dt>Engagement Rate</dt><dd>{{ breakdown.engagement_rate or 0 }}%</dd></div>
</dl>""")

_AUDIENCE = card("Audience Insights", '<p class="audience-insights">{{ insights }}</p>')

_LATEST_POSTS = card("Latest Posts", """\
<ul class="latest-posts">
{% for post in posts %}
<li class="latest-post">
{% if post is mapping %}
<p class="post-caption">{{ post.get('caption') or '' }}</p>
<span class="post-stats">{{ post.get('likes', 0)|compact }} likes · {{ post.get('comments', 0)|compact }} comments</span>
{% else %}
<p class="post-caption">{{ post }}</p>
{% endif %}
</li>
{% endfor %}
</ul>""")


def render_deep_summary(lead, payload) -> str:
    return render(_DEEP_SUMMARY, text=payload.get("deep_summary"))


def render_engagement_breakdown(lead, payload) -> str:
    return render(_ENGAGEMENT_BREAKDOWN, breakdown=payload.get("engagement_breakdown"))


def render_payload_audience(lead, payload) -> str:
    return render(_AUDIENCE, insights=payload.get("audience_insights"))


def render_latest_posts(lead, payload) -> str:
    return render(_LATEST_POSTS, posts=payload.get("latest_posts"))


FRAGMENTS = (
    Fragment(
        "deepSummary", render_deep_summary,
        lambda lead, payload: _is_deep(lead) and bool(payload.get("deep_summary")),
    ),
    Fragment(
        "engagementBreakdown", render_engagement_breakdown,
        lambda lead, payload: _is_deep(lead) and bool(payload.get("engagement_breakdown")),
    ),
    Fragment(
        "payloadAudienceInsights", render_payload_audience,
        lambda lead, payload: _is_deep(lead) and bool(payload.get("audience_insights")),
    ),
    Fragment(
        "latestPosts", render_latest_posts,
        lambda lead, payload: _is_deep(lead) and bool(payload.get("latest_posts")),
    ),
)


def install(registry) -> None:
    for fragment in FRAGMENTS:
        registry.register(fragment.name, fragment)
