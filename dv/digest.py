# SPDX-License-Identifier: BUSL-1.1
"""Content digests for embedded assets."""

import hashlib


def digest(data: bytes) -> str:
    """Return the hex-encoded SHA-256 of data."""
    return hashlib.sha256(data).hexdigest()


def digest_matches(recorded, expected: str) -> bool:
    """Compare a persisted digest with an expected one, ignoring surrounding whitespace."""
    if isinstance(recorded, bytes):
        recorded = recorded.decode("ascii", errors="replace")
    return (recorded or "").strip() == expected
