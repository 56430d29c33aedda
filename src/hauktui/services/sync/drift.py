"""Three-way drift classification for vendored component files.

Each file is compared on three fingerprints: the local copy, the baseline
recorded in the ledger at the last install/upgrade, and the current
upstream content. Comparing against the baseline is what separates
"upstream moved and the user didn't touch it" from "the user edited it".
"""

from __future__ import annotations

from enum import StrEnum


class DriftState(StrEnum):
    """Drift state of one component file. Always derived, never stored."""

    UNCHANGED = "unchanged"
    """Local copy matches upstream."""

    UPSTREAM_UPDATED = "upstream-updated"
    """Upstream changed and the local copy is untouched; safe to overwrite."""

    LOCALLY_MODIFIED = "locally-modified"
    """Local copy was edited and upstream did not change."""

    CONFLICT = "conflict"
    """Both the local copy and upstream diverged from the baseline."""

    MISSING_LOCALLY = "missing-locally"
    """Upstream file has no local copy."""

    LOCAL_ONLY = "local-only"
    """Local file that upstream does not ship; never touched."""


def classify(local: str | None, baseline: str | None, upstream: str) -> DriftState:
    """Classify one file from its local, baseline and upstream fingerprints.

    Rules are evaluated in order, first match wins:

    1. no local copy -> MISSING_LOCALLY
    2. local == baseline == upstream -> UNCHANGED
    3. local == baseline != upstream -> UPSTREAM_UPDATED
    4. local != baseline == upstream -> LOCALLY_MODIFIED
    5. local, baseline and upstream all differ -> CONFLICT
    6. local == upstream != baseline -> UNCHANGED (edit converged on upstream)

    A file with no baseline was added upstream after the last install. It
    has no recorded edits to protect, so it reads as UNCHANGED when it
    already matches upstream and UPSTREAM_UPDATED otherwise.

    Args:
        local: Fingerprint of the local file, None if it does not exist.
        baseline: Fingerprint recorded in the ledger, None if not recorded.
        upstream: Fingerprint of the current upstream content.

    Returns:
        The file's DriftState.
    """
    if local is None:
        return DriftState.MISSING_LOCALLY

    if baseline is None:
        return DriftState.UNCHANGED if local == upstream else DriftState.UPSTREAM_UPDATED

    if local == baseline:
        if upstream == baseline:
            return DriftState.UNCHANGED
        return DriftState.UPSTREAM_UPDATED

    if upstream == baseline:
        return DriftState.LOCALLY_MODIFIED

    if local != upstream:
        return DriftState.CONFLICT

    return DriftState.UNCHANGED


def has_local_changes(state: DriftState) -> bool:
    """Whether overwriting a file in this state would destroy user edits."""
    return state in (DriftState.LOCALLY_MODIFIED, DriftState.CONFLICT)
