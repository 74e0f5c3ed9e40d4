# =============================================================================
# core/media/ - Conditional Media Upload
# =============================================================================
# Media fields are edited locally and uploaded only when a form is saved:
# - references.py: Empty / Ephemeral / Persisted classification
# - filenames.py: content type -> extension, label -> storage key
# - store.py: per-session handle -> bytes map
# - gateway.py: HTTP client for the upload gateway
# - orchestrator.py: ConditionalUploader (upload only what changed)
# - errors.py: InvalidReference, TransportError, UploadFailed
# =============================================================================

from core.media.errors import (
    DraftLimitExceeded,
    InvalidReference,
    MediaError,
    TransportError,
    UploadFailed,
)
from core.media.filenames import derive_extension, generate_key, slugify_label
from core.media.gateway import UploadGatewayClient
from core.media.orchestrator import ConditionalUploader
from core.media.references import (
    EPHEMERAL_SCHEME,
    MediaKind,
    MediaReference,
    is_ephemeral,
    is_persisted,
)
from core.media.store import EphemeralBlob, EphemeralStore, MediaSessionRegistry

__all__ = [
    # References
    "EPHEMERAL_SCHEME",
    "MediaKind",
    "MediaReference",
    "is_ephemeral",
    "is_persisted",
    # Filenames
    "derive_extension",
    "generate_key",
    "slugify_label",
    # Store
    "EphemeralBlob",
    "EphemeralStore",
    "MediaSessionRegistry",
    # Upload
    "UploadGatewayClient",
    "ConditionalUploader",
    # Errors
    "MediaError",
    "InvalidReference",
    "DraftLimitExceeded",
    "TransportError",
    "UploadFailed",
]
