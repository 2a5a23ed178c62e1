"""
LeadView - analysis modal composition for lead research

Builds the analysis-detail modal for a researched profile from named,
conditionally rendered fragments, a per-analysis-type layout, an optional
tab grouping and a score-to-tier classifier.

USAGE:
    from leadview import FragmentRegistry, LayoutStore, ModalBuilder, library

    registry = FragmentRegistry(installers=[library.install])
    builder = ModalBuilder(registry, LayoutStore.from_yaml())
    html = builder.build(lead, lead.latest_record())
"""

__version__ = "1.0.0"

from .exceptions import (
    LeadViewError,
    LayoutNotFoundError,
    LayoutInvalidError,
    ExtensionQueueClosedError,
    LeadNotFoundError,
)
from .records import (
    ANALYSIS_TYPES,
    Lead,
    select_latest_run,
    analysis_record_from_run,
)
from .payload import (
    PayloadSource,
    NormalizedPayload,
    resolve_payload,
    main_score,
    is_high_tier_score,
)
from .fragments import Fragment, FragmentRegistry
from .extensions import ExtensionQueue, extension, extension_queue
from .tiers import TierBand, TierDescriptor, classify_score, clamp_score
from .layouts import TabSpec, LayoutConfig, LayoutStore
from .tabs import Tab, TabComposer
from .events import EventBus, ModalBuiltEvent
from .builder import ModalBuilder, ModalView
from . import library


def build_registry(extensions: ExtensionQueue = None) -> FragmentRegistry:
    """Registry with the core fragments installed and the built-in
    extensions queued on ``extensions`` (a private queue when omitted)."""
    queue = extensions if extensions is not None else ExtensionQueue("builtin")
    library.queue_extensions(queue)
    return FragmentRegistry(installers=[library.install_core], extensions=queue)


__all__ = [
    "__version__",
    # Errors
    "LeadViewError",
    "LayoutNotFoundError",
    "LayoutInvalidError",
    "ExtensionQueueClosedError",
    "LeadNotFoundError",
    # Records
    "ANALYSIS_TYPES",
    "Lead",
    "select_latest_run",
    "analysis_record_from_run",
    # Payload
    "PayloadSource",
    "NormalizedPayload",
    "resolve_payload",
    "main_score",
    "is_high_tier_score",
    # Registry
    "Fragment",
    "FragmentRegistry",
    "ExtensionQueue",
    "extension",
    "extension_queue",
    "build_registry",
    # Tiers
    "TierBand",
    "TierDescriptor",
    "classify_score",
    "clamp_score",
    # Layouts and tabs
    "TabSpec",
    "LayoutConfig",
    "LayoutStore",
    "Tab",
    "TabComposer",
    # Builder
    "EventBus",
    "ModalBuiltEvent",
    "ModalBuilder",
    "ModalView",
    "library",
]
