"""Installation ledger (``hauk.lock.json``).

The ledger records, per installed component, the version and the per-file
fingerprints written at the last install or upgrade. It is the only
durable source of baselines for drift detection; modification times and
other file system metadata are never consulted.

Lifecycle per command: ``LedgerStore.load()`` once at the start, mutate
the returned Ledger in memory, ``LedgerStore.save()`` once at the end.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from hauktui.core.exceptions import LedgerError
from hauktui.services.sync.file_store import ProjectFileStore

logger = structlog.get_logger()

LOCK_FILE = "hauk.lock.json"
LEDGER_FORMAT_VERSION = "1.0.0"


class InstalledEntry(BaseModel):
    """Ledger record for one installed component.

    Attributes:
        name: Component name.
        version: Descriptor version at install/upgrade time.
        files: File name to fingerprint, as written.
        installed_at: When the files were written.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(description="Component name")
    version: str = Field(description="Installed component version")
    files: dict[str, str] = Field(default_factory=dict, description="File fingerprints")
    installed_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        alias="installedAt",
        description="Install timestamp",
    )

    def baseline(self, filename: str) -> str | None:
        """Recorded fingerprint of a file, or None if it was never written."""
        return self.files.get(filename)


class Ledger(BaseModel):
    """All installed components of a project, keyed by name."""

    version: str = Field(default=LEDGER_FORMAT_VERSION, description="Ledger format tag")
    components: dict[str, InstalledEntry] = Field(default_factory=dict)

    def get(self, name: str) -> InstalledEntry | None:
        """Get the entry for a component, if installed."""
        return self.components.get(name)

    def is_installed(self, name: str) -> bool:
        """Check whether a component has a ledger entry."""
        return name in self.components

    def record(self, entry: InstalledEntry) -> None:
        """Store an entry, replacing (never merging) any previous one."""
        self.components[entry.name] = entry

    def names(self) -> list[str]:
        """Installed component names, sorted."""
        return sorted(self.components)

    def to_json(self) -> str:
        """Serialize in the on-disk format."""
        data = self.model_dump(mode="json", by_alias=True)
        return json.dumps(data, indent=2) + "\n"


class LedgerStore:
    """Loads and saves the ledger through a project file store.

    Attributes:
        path: Lock file path, relative to the project root.
    """

    def __init__(self, store: ProjectFileStore, path: str = LOCK_FILE) -> None:
        self.store = store
        self.path = path
        self._log = logger.bind(service="ledger_store", path=path)

    def load(self) -> Ledger:
        """Load the ledger.

        A missing or empty lock file yields an empty ledger.

        Raises:
            LedgerError: If the lock file is not a valid ledger.
        """
        content = self.store.read_text(self.path)
        if content is None or not content.strip():
            self._log.debug("ledger_not_found_returning_empty")
            return Ledger()

        try:
            ledger = Ledger.model_validate_json(content)
        except ValidationError as e:
            raise LedgerError(f"Invalid lock file {self.path}: {e}") from e

        self._log.debug("ledger_loaded", count=len(ledger.components))
        return ledger

    def save(self, ledger: Ledger) -> None:
        """Overwrite the lock file with the full ledger."""
        self.store.write_text(self.path, ledger.to_json())
        self._log.info("ledger_saved", count=len(ledger.components))
