"""
Hashing utilities for configuration fingerprints and auditability.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any


def sha256_hash(content: str | bytes) -> str:
    """Return the SHA-256 hex digest of the given content."""
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.sha256(content).hexdigest()


def document_fingerprint(document: dict[str, Any]) -> str:
    """Stable hash of a JSON-safe document, independent of key order."""
    canonical = json.dumps(document, sort_keys=True, separators=(",", ":"))
    return sha256_hash(canonical)
