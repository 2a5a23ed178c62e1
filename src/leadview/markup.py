"""Shared Jinja2 environment for fragment and container markup.

Fragment templates are short inline sources compiled once and cached.
Autoescaping is on, so lead data is always escaped; already-rendered
fragment markup is passed through with ``|safe``.
"""

from functools import lru_cache
from typing import Any

from jinja2 import ChainableUndefined, Environment, Template, select_autoescape


_env = Environment(
    autoescape=select_autoescape(default_for_string=True, default=True),
    undefined=ChainableUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
)
_env.filters["humanize"] = lambda value: str(value or "").replace("_", " ")


def _compact_number(value: Any) -> str:
    try:
        number = float(value or 0)
    except (TypeError, ValueError):
        return "0"
    if number >= 1_000_000:
        return f"{number / 1_000_000:.1f}M"
    if number >= 1_000:
        return f"{number / 1_000:.1f}K"
    return str(int(number))


_env.filters["compact"] = _compact_number


@lru_cache(maxsize=256)
def template(source: str) -> Template:
    return _env.from_string(source)


def render(source: str, **context: Any) -> str:
    return template(source).render(**context)


# ── Containers ───────────────────────────────────────────────────────────────

_CONTENT_CONTAINER = """\
<div class="modal-content-container{% if high_tier %} high-tier-glow{% endif %}" data-analysis-type="{{ analysis_type }}">
{% if high_tier %}
<div class="celebration-particles" aria-hidden="true"></div>
{% endif %}
{{ body|safe }}
</div>"""

_MODAL_SHELL = """\
<div class="analysis-modal" role="dialog" aria-modal="true" aria-label="Analysis for @{{ handle }}">
{{ content|safe }}
<div class="modal-footer">
<button type="button" class="modal-close" data-action="close-modal">Close</button>
</div>
</div>"""


def content_container(body: str, analysis_type: str, high_tier: bool = False) -> str:
    return render(_CONTENT_CONTAINER, body=body, analysis_type=analysis_type, high_tier=high_tier)


def modal_shell(content: str, handle: str) -> str:
    """Outer modal element with the footer close control."""
    return render(_MODAL_SHELL, content=content, handle=handle)
