"""
Payload resolution.

Analysis records have been stored in several shapes over time. Before any
fragment sees the data, the record is resolved to one flat mapping and
tagged with the shape it came from.

Resolution order (first match wins, shapes are never merged):
    1. payloads[0].analysis_data   (current run payload)
    2. deep_payload                (legacy deep analysis)
    3. xray_payload                (legacy xray analysis)
    4. the record itself
    5. empty

Missing or malformed data never raises. It resolves to an empty payload
and fragment predicates fail closed against it.
"""

from enum import Enum
from collections.abc import Mapping
from typing import Any, Dict, Iterator, Optional

from .records import Lead
from .tiers import clamp_score


HIGH_TIER_THRESHOLD = 90


class PayloadSource(str, Enum):
    """Shape the normalized payload was resolved from."""
    RUN_PAYLOAD = "run_payload"
    DEEP_PAYLOAD = "deep_payload"
    XRAY_PAYLOAD = "xray_payload"
    RECORD = "record"
    EMPTY = "empty"


_EMPTY_RECORD: Mapping[str, Any] = {}


class NormalizedPayload(Mapping):
    """
    Read-only mapping over the resolved payload.

    ``record`` keeps a reference to the originating analysis record so
    fragments can fall back to record-level fields (``lookup``).
    """

    __slots__ = ("_data", "source", "record")

    def __init__(
        self,
        data: Optional[Mapping[str, Any]],
        source: PayloadSource,
        record: Optional[Mapping[str, Any]] = None,
    ):
        self._data = dict(data or {})
        self.source = source
        self.record = record if record is not None else _EMPTY_RECORD

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"NormalizedPayload(source={self.source.value!r}, keys={sorted(self._data)!r})"

    @property
    def is_empty(self) -> bool:
        return self.source is PayloadSource.EMPTY

    def lookup(self, key: str, default: Any = None) -> Any:
        """Payload value first, then record value, else ``default``."""
        value = self._data.get(key)
        if value:
            return value
        value = self.record.get(key)
        if value:
            return value
        return default

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._data)


def _non_empty_mapping(value: Any) -> bool:
    return isinstance(value, Mapping) and len(value) > 0


def resolve_payload(lead: Optional[Lead], record: Optional[Mapping[str, Any]]) -> NormalizedPayload:
    """Resolve an analysis record to a NormalizedPayload."""
    if not _non_empty_mapping(record):
        return NormalizedPayload({}, PayloadSource.EMPTY)

    payloads = record.get("payloads")
    if isinstance(payloads, (list, tuple)) and payloads:
        first = payloads[0]
        if isinstance(first, Mapping) and _non_empty_mapping(first.get("analysis_data")):
            return NormalizedPayload(first["analysis_data"], PayloadSource.RUN_PAYLOAD, record)

    if _non_empty_mapping(record.get("deep_payload")):
        return NormalizedPayload(record["deep_payload"], PayloadSource.DEEP_PAYLOAD, record)

    if _non_empty_mapping(record.get("xray_payload")):
        return NormalizedPayload(record["xray_payload"], PayloadSource.XRAY_PAYLOAD, record)

    return NormalizedPayload(record, PayloadSource.RECORD, record)


def main_score(lead: Lead, payload: NormalizedPayload) -> float:
    """Score shown in the header ring and used for the high-tier check."""
    if lead.analysis_type in ("deep", "xray"):
        record = payload.record
        return clamp_score(record.get("score_total") or record.get("overall_score") or lead.score)
    return clamp_score(lead.score)


def is_high_tier_score(score: float, threshold: float = HIGH_TIER_THRESHOLD) -> bool:
    return clamp_score(score) >= threshold
