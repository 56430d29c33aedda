"""Component synchronization and drift detection."""

from hauktui.services.sync.drift import DriftState, classify, has_local_changes
from hauktui.services.sync.file_store import (
    LocalFileStore,
    MemoryFileStore,
    ProjectFileStore,
    has_content,
)
from hauktui.services.sync.fingerprint import fingerprint
from hauktui.services.sync.ledger import (
    LEDGER_FORMAT_VERSION,
    LOCK_FILE,
    InstalledEntry,
    Ledger,
    LedgerStore,
)
from hauktui.services.sync.reports import (
    CompareReport,
    FileDiff,
    InstallReport,
    ItemOutcome,
    ItemStatus,
    OutcomeReason,
    UpdateCandidate,
    UpgradeReport,
)
from hauktui.services.sync.sync_manager import SyncManager

__all__ = [
    "LEDGER_FORMAT_VERSION",
    "LOCK_FILE",
    "CompareReport",
    "DriftState",
    "FileDiff",
    "InstallReport",
    "InstalledEntry",
    "ItemOutcome",
    "ItemStatus",
    "Ledger",
    "LedgerStore",
    "LocalFileStore",
    "MemoryFileStore",
    "OutcomeReason",
    "ProjectFileStore",
    "SyncManager",
    "UpdateCandidate",
    "UpgradeReport",
    "classify",
    "fingerprint",
    "has_content",
    "has_local_changes",
]
