"""
Lead and analysis-run records.

Stored lead rows come from the research store with their runs attached.
Column names in the store differ from the names the dashboard displays
(``follower_count`` vs ``followers_count``), so ``Lead.from_row`` accepts
both spellings.

When a lead has several runs, the most recently created run is
authoritative: it supplies the lead's analysis type, top-line score and
quick summary, and becomes the analysis record handed to the modal.
"""

from dataclasses import dataclass, field, asdict
from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from .tiers import clamp_score


ANALYSIS_TYPES = ("light", "deep", "xray")
DEFAULT_ANALYSIS_TYPE = "light"

# display name -> store column name
_ROW_ALIASES = {
    "id": "lead_id",
    "full_name": "display_name",
    "profile_pic_url": "profile_picture_url",
    "bio": "bio_text",
    "external_url": "external_website_url",
    "followers_count": "follower_count",
    "posts_count": "post_count",
    "is_verified": "is_verified_account",
    "is_private": "is_private_account",
    "platform": "platform_type",
}

# Payload keys copied onto the analysis record for record-level lookups
_RECORD_PAYLOAD_KEYS = (
    "reasons",
    "selling_points",
    "outreach_message",
    "audience_insights",
    "deep_summary",
    "quick_summary",
)


def _pick(row: Dict[str, Any], name: str, default: Any = None) -> Any:
    if row.get(name) is not None:
        return row[name]
    alias = _ROW_ALIASES.get(name)
    if alias and row.get(alias) is not None:
        return row[alias]
    return default


def select_latest_run(runs: Optional[List[Dict[str, Any]]]) -> Optional[Dict[str, Any]]:
    """Return the most recently created run, or None when there are none.

    ``created_at`` values are ISO-8601 strings, so lexical order is
    chronological. Runs without a timestamp sort last.
    """
    if not runs:
        return None
    return max(runs, key=lambda run: run.get("created_at") or "")


def analysis_record_from_run(run: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Build the analysis record for the modal from a single run."""
    if run is None:
        return None

    record: Dict[str, Any] = {
        "run_id": run.get("run_id"),
        "analysis_type": run.get("analysis_type"),
        "engagement_score": run.get("engagement_score"),
        "score_niche_fit": run.get("niche_fit_score"),
        "score_total": run.get("overall_score"),
        "summary_text": run.get("summary_text"),
        "confidence_level": run.get("confidence_level"),
        "created_at": run.get("created_at"),
        "payloads": list(run.get("payloads") or []),
    }

    for key in ("deep_payload", "xray_payload"):
        if run.get(key):
            record[key] = run[key]

    payloads = record["payloads"]
    first = payloads[0].get("analysis_data") if payloads and isinstance(payloads[0], Mapping) else None
    if isinstance(first, Mapping):
        for key in _RECORD_PAYLOAD_KEYS:
            if key in first:
                record[key] = first[key]

    return record


@dataclass
class Lead:
    """Identity and profile facts for one researched profile."""
    username: str
    id: Optional[str] = None
    full_name: Optional[str] = None
    display_name: Optional[str] = None
    profile_pic_url: Optional[str] = None
    bio: Optional[str] = None
    external_url: Optional[str] = None
    profile_url: Optional[str] = None
    platform: str = "instagram"
    followers_count: int = 0
    following_count: int = 0
    posts_count: int = 0
    is_verified: bool = False
    is_private: bool = False
    is_business_account: bool = False

    # Denormalized from the latest run
    analysis_type: str = DEFAULT_ANALYSIS_TYPE
    score: float = 0
    quick_summary: Optional[str] = None

    runs: List[Dict[str, Any]] = field(default_factory=list, repr=False)

    @property
    def handle(self) -> str:
        return self.username

    @property
    def name(self) -> str:
        return self.display_name or self.full_name or self.username

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Lead":
        """Build a Lead from a stored row (store or display column names)."""
        runs = list(row.get("runs") or [])
        latest = select_latest_run(runs)

        if latest is not None:
            analysis_type = latest.get("analysis_type") or DEFAULT_ANALYSIS_TYPE
            score = clamp_score(latest.get("overall_score"))
            quick_summary = latest.get("summary_text")
        else:
            analysis_type = row.get("analysis_type") or DEFAULT_ANALYSIS_TYPE
            score = clamp_score(row.get("score"))
            quick_summary = row.get("quick_summary")

        return cls(
            id=_pick(row, "id"),
            username=row.get("username") or "",
            full_name=_pick(row, "full_name"),
            display_name=row.get("display_name"),
            profile_pic_url=_pick(row, "profile_pic_url"),
            bio=_pick(row, "bio"),
            external_url=_pick(row, "external_url"),
            profile_url=row.get("profile_url"),
            platform=_pick(row, "platform", "instagram"),
            followers_count=int(_pick(row, "followers_count", 0)),
            following_count=int(_pick(row, "following_count", 0)),
            posts_count=int(_pick(row, "posts_count", 0)),
            is_verified=bool(_pick(row, "is_verified", False)),
            is_private=bool(_pick(row, "is_private", False)),
            is_business_account=bool(row.get("is_business_account", False)),
            analysis_type=analysis_type,
            score=score,
            quick_summary=quick_summary,
            runs=runs,
        )

    def latest_record(self) -> Optional[Dict[str, Any]]:
        """Analysis record assembled from the authoritative run."""
        return analysis_record_from_run(select_latest_run(self.runs))

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data.pop("runs")
        return data
