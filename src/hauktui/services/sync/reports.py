"""Report models returned by the sync operations.

Batch operations never fail fast: every requested item gets an
``ItemOutcome`` and the reports carry enough detail for the CLI to render
per-component and per-file results.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from hauktui.services.sync.drift import DriftState


class ItemStatus(StrEnum):
    """Outcome of one component in a batch operation."""

    INSTALLED = "installed"
    UPDATED = "updated"
    SKIPPED = "skipped"
    ERROR = "error"


class OutcomeReason(StrEnum):
    """Why a component was skipped or failed."""

    ALREADY_INSTALLED = "already-installed"
    DECLINED = "declined"
    UNKNOWN_COMPONENT = "unknown-component"
    FETCH_FAILED = "fetch-failed"
    LOCAL_CHANGES = "local-changes"
    NOT_INSTALLED = "not-installed"


class ItemOutcome(BaseModel):
    """Result for a single component in install or upgrade."""

    name: str = Field(description="Component name")
    status: ItemStatus = Field(description="What happened to the component")
    reason: OutcomeReason | None = Field(default=None, description="Skip/error reason")
    message: str | None = Field(default=None, description="Human-readable detail")
    version: str | None = Field(default=None, description="Version now installed")
    previous_version: str | None = Field(default=None, description="Version before upgrade")
    files: list[str] = Field(default_factory=list, description="Files written")
    notes: str | None = Field(default=None, description="Post-install notes")

    @property
    def succeeded(self) -> bool:
        """Whether files were written for this component."""
        return self.status in (ItemStatus.INSTALLED, ItemStatus.UPDATED)


class InstallReport(BaseModel):
    """Result of an install batch."""

    outcomes: list[ItemOutcome] = Field(default_factory=list)

    @property
    def installed(self) -> list[ItemOutcome]:
        return [o for o in self.outcomes if o.status == ItemStatus.INSTALLED]

    @property
    def skipped(self) -> list[ItemOutcome]:
        return [o for o in self.outcomes if o.status == ItemStatus.SKIPPED]

    @property
    def errors(self) -> list[ItemOutcome]:
        return [o for o in self.outcomes if o.status == ItemStatus.ERROR]

    def get(self, name: str) -> ItemOutcome | None:
        """Outcome for a component name, if it was part of the batch."""
        for outcome in self.outcomes:
            if outcome.name == name:
                return outcome
        return None


class FileDiff(BaseModel):
    """Drift state of one file, with the fingerprints it was derived from."""

    file: str
    state: DriftState
    local: str | None = None
    baseline: str | None = None
    upstream: str | None = None


class CompareReport(BaseModel):
    """Per-file drift report for one installed component."""

    name: str
    installed_version: str
    upstream_version: str
    files: list[FileDiff] = Field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        """Whether any file is in a state other than unchanged."""
        return any(f.state != DriftState.UNCHANGED for f in self.files)

    @property
    def has_local_changes(self) -> bool:
        """Whether any file carries edits that an overwrite would destroy."""
        return any(
            f.state in (DriftState.LOCALLY_MODIFIED, DriftState.CONFLICT) for f in self.files
        )

    def by_state(self, state: DriftState) -> list[FileDiff]:
        """Files currently in ``state``."""
        return [f for f in self.files if f.state == state]

    def state_of(self, filename: str) -> DriftState | None:
        """Drift state of a file, or None if it is not in the report."""
        for diff in self.files:
            if diff.file == filename:
                return diff.state
        return None

    def counts(self) -> dict[str, int]:
        """Number of files per drift state, omitting empty states."""
        result: dict[str, int] = {}
        for diff in self.files:
            result[diff.state.value] = result.get(diff.state.value, 0) + 1
        return result


class UpdateCandidate(BaseModel):
    """An installed component whose upstream version has moved."""

    name: str
    installed_version: str
    latest_version: str
    has_local_changes: bool = False


class UpgradeReport(BaseModel):
    """Result of an upgrade (or an upgrade check)."""

    check_only: bool = False
    candidates: list[UpdateCandidate] = Field(default_factory=list)
    up_to_date: list[str] = Field(default_factory=list)
    outcomes: list[ItemOutcome] = Field(default_factory=list)
    errors: list[ItemOutcome] = Field(
        default_factory=list,
        description="Installed components that could not be checked",
    )
    skipped_unsafe: int = Field(default=0, description="Candidates held back by local changes")

    @property
    def updated(self) -> list[ItemOutcome]:
        return [o for o in self.outcomes if o.status == ItemStatus.UPDATED]

    @property
    def failed(self) -> list[ItemOutcome]:
        return [o for o in self.outcomes if o.status == ItemStatus.ERROR] + self.errors

    @property
    def safe(self) -> list[UpdateCandidate]:
        return [c for c in self.candidates if not c.has_local_changes]

    @property
    def unsafe(self) -> list[UpdateCandidate]:
        return [c for c in self.candidates if c.has_local_changes]
