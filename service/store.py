"""LeadStore: in-memory lead rows with their analysis runs.

Stands in for the research database. Rows use the store column names
(``lead_id``, ``follower_count``, ``runs[].overall_score``...). In
production, swap the implementation for the real backend; the interface
stays the same.
"""

import logging
import os
from typing import Any, Dict, List, Optional, Tuple

from leadview import Lead, LeadNotFoundError

logger = logging.getLogger(__name__)

# ── Configuration ─────────────────────────────────────────────────────────────
_MAX_LEADS = int(os.getenv("LV_LEAD_STORE_MAX", "500"))


class LeadStore:
    """Lead id -> stored row."""

    def __init__(self, max_leads: int = _MAX_LEADS):
        self.max_leads = max_leads
        self._rows: Dict[str, Dict[str, Any]] = {}

    def put(self, row: Dict[str, Any]) -> str:
        """Insert or replace a row; returns its lead id."""
        lead_id = row.get("lead_id") or row.get("id")
        if not lead_id:
            raise ValueError("Lead row requires 'lead_id'")
        self._rows.pop(lead_id, None)
        self._rows[lead_id] = dict(row, lead_id=lead_id)
        if len(self._rows) > self.max_leads:
            oldest_key = next(iter(self._rows))
            del self._rows[oldest_key]
            logger.debug("Evicted lead %s", oldest_key)
        return lead_id

    def get(self, lead_id: str) -> Optional[Dict[str, Any]]:
        return self._rows.get(lead_id)

    def fetch_lead_with_latest_runs(self, lead_id: str) -> Tuple[Lead, Optional[Dict[str, Any]]]:
        """Lead plus the analysis record of its most recent run."""
        row = self._rows.get(lead_id)
        if row is None:
            raise LeadNotFoundError(
                message=f"Lead '{lead_id}' not found",
                details={"lead_id": lead_id},
            )
        lead = Lead.from_row(row)
        return lead, lead.latest_record()

    def list_leads(self) -> List[Dict[str, Any]]:
        summaries = []
        for lead_id, row in self._rows.items():
            lead = Lead.from_row(row)
            summaries.append({
                "lead_id": lead_id,
                "username": lead.username,
                "analysis_type": lead.analysis_type,
                "score": lead.score,
                "runs": len(lead.runs),
            })
        return summaries

    def clear(self) -> None:
        self._rows.clear()

    def __contains__(self, lead_id: object) -> bool:
        return lead_id in self._rows

    def __len__(self) -> int:
        return len(self._rows)
