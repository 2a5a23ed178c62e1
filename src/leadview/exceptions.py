"""
LeadView Exception Hierarchy

Every failure that reaches a caller carries a deterministic error code.

Error Codes:
- LV_LAYOUT_NOT_FOUND: No layout configured for an analysis type
- LV_LAYOUT_INVALID: A layouts file failed schema validation
- LV_EXTENSION_QUEUE_CLOSED: Extension pushed after the queue was drained
- LV_LEAD_NOT_FOUND: Lead id unknown to the lead store
- LV_INTERNAL_ERROR: Unexpected internal error (catch-all)

Fragment-level problems (missing fragment, failing predicate, render error)
are not exceptions. The builder logs them and leaves the fragment out.
"""

from typing import Any, Dict, Optional
import json

__all__ = [
    'LeadViewError',
    'LayoutNotFoundError',
    'LayoutInvalidError',
    'ExtensionQueueClosedError',
    'LeadNotFoundError',
]


class LeadViewError(Exception):
    """
    Base exception for all LeadView errors.

    Provides a consistent interface for error handling with:
    - code: A deterministic error code (LV_*)
    - message: Human-readable error description
    - details: Additional context as a dictionary
    - request_id: Optional request identifier for tracing
    """

    code: str = "LV_INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        request_id: Optional[str] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details if details is not None else {}
        self.request_id = request_id

    def to_dict(self) -> Dict[str, Any]:
        """Serialize error to a dictionary."""
        result: Dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }
        if self.request_id is not None:
            result["request_id"] = self.request_id
        return result

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize error to a JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class LayoutNotFoundError(LeadViewError):
    """
    No layout is configured for the requested analysis type.

    This is a configuration error. The modal build for that lead is
    abandoned and the error propagates to the caller.
    """

    code = "LV_LAYOUT_NOT_FOUND"


class LayoutInvalidError(LeadViewError):
    """
    A layouts document failed validation.

    Raised at load time, for example:
    - Tabbed layout without tabs
    - Duplicate tab ids
    - Untabbed layout without a component list
    """

    code = "LV_LAYOUT_INVALID"


class ExtensionQueueClosedError(LeadViewError):
    """An extension was pushed after the queue had already been drained."""

    code = "LV_EXTENSION_QUEUE_CLOSED"


class LeadNotFoundError(LeadViewError):
    """The lead store has no lead with the requested id."""

    code = "LV_LEAD_NOT_FOUND"
