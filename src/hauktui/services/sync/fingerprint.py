"""Content fingerprints for drift detection."""

from __future__ import annotations

import hashlib

FINGERPRINT_LENGTH = 16


def fingerprint(content: str) -> str:
    """Return a short, stable fingerprint of ``content``.

    SHA-256 of the UTF-8 text, truncated to 16 hex characters. Content is
    hashed exactly as given: no line-ending or whitespace normalization.
    Surrogate escapes from undecodable files hash as their original bytes.
    The truncation trades collision resistance for readable lock files;
    fingerprints are for change detection, not integrity.
    """
    data = content.encode("utf-8", errors="surrogateescape")
    return hashlib.sha256(data).hexdigest()[:FINGERPRINT_LENGTH]
