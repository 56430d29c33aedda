"""Sync manager: install, compare and upgrade vendored components.

The manager orchestrates a component source provider, a project file
store and the drift classifier. It holds no ledger state of its own: each
operation takes the current Ledger, mutates it in memory where the
operation writes, and leaves persistence to the caller, which saves the
ledger once per command.

Example:
    >>> store = LocalFileStore(project_root)
    >>> ledger_store = LedgerStore(store)
    >>> manager = SyncManager(LocalRegistryProvider(), store, "src/tui/components")
    >>> ledger = ledger_store.load()
    >>> report = manager.install(ledger, ["badge", "card"])
    >>> ledger_store.save(ledger)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import UTC, datetime

import structlog

from hauktui.core.exceptions import (
    ComponentFetchError,
    ComponentNotFoundError,
    ComponentNotInstalledError,
)
from hauktui.registry.models import ComponentDescriptor
from hauktui.registry.provider import ComponentSourceProvider
from hauktui.services.sync.drift import DriftState, classify
from hauktui.services.sync.file_store import ProjectFileStore, has_content
from hauktui.services.sync.fingerprint import fingerprint
from hauktui.services.sync.ledger import InstalledEntry, Ledger
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

logger = structlog.get_logger()

ConfirmCallback = Callable[[str], bool]
Clock = Callable[[], datetime]


def _dedupe(names: Iterable[str]) -> list[str]:
    """Drop repeated names, keeping first occurrence order."""
    return list(dict.fromkeys(names))


class SyncManager:
    """Install, compare and upgrade components in one project.

    Components are processed one at a time; each component's fetch and
    write finish before the next one starts.

    Attributes:
        provider: Source of upstream descriptors and files.
        store: File store rooted at the consumer project.
        component_dir: Directory (relative to the project root) holding one
            sub-directory per component.
    """

    def __init__(
        self,
        provider: ComponentSourceProvider,
        store: ProjectFileStore,
        component_dir: str,
        clock: Clock | None = None,
    ) -> None:
        self.provider = provider
        self.store = store
        self.component_dir = component_dir.rstrip("/")
        self._clock: Clock = clock or (lambda: datetime.now(UTC))
        self._log = logger.bind(service="sync_manager")

    # =========================================================================
    # Helpers
    # =========================================================================

    def component_path(self, name: str) -> str:
        """Directory of a component, relative to the project root."""
        return f"{self.component_dir}/{name}"

    def file_path(self, name: str, filename: str) -> str:
        """Path of one component file, relative to the project root."""
        return f"{self.component_path(name)}/{filename}"

    def local_fingerprint(self, name: str, filename: str) -> str | None:
        """Fingerprint of the local copy of a file, or None if it is missing."""
        content = self.store.read_text(self.file_path(name, filename))
        if content is None:
            return None
        return fingerprint(content)

    def _write_component(self, descriptor: ComponentDescriptor) -> InstalledEntry:
        """Fetch a component, write all its files and build a fresh entry.

        Raises:
            ComponentFetchError: If the provider cannot return the files.
            ComponentNotFoundError: If the component vanished from the catalog.
            OSError: If the project file store cannot write.
        """
        files = self.provider.fetch_files(descriptor.name)

        hashes: dict[str, str] = {}
        for filename, content in files.items():
            self.store.write_text(self.file_path(descriptor.name, filename), content)
            hashes[filename] = fingerprint(content)

        return InstalledEntry(
            name=descriptor.name,
            version=descriptor.version,
            files=hashes,
            installed_at=self._clock(),
        )

    def _fetch_failed(
        self,
        name: str,
        error: ComponentFetchError | ComponentNotFoundError,
        previous_version: str | None = None,
    ) -> ItemOutcome:
        self._log.warning("component_fetch_failed", component=name, error=str(error))
        return ItemOutcome(
            name=name,
            status=ItemStatus.ERROR,
            reason=OutcomeReason.FETCH_FAILED,
            message=str(error),
            previous_version=previous_version,
        )

    # =========================================================================
    # Install
    # =========================================================================

    def install(
        self,
        ledger: Ledger,
        names: Iterable[str],
        *,
        overwrite: bool = False,
        assume_yes: bool = False,
        confirm: ConfirmCallback | None = None,
    ) -> InstallReport:
        """Install components into the project.

        Every requested name gets an outcome; unknown names and fetch
        failures are reported and the batch carries on.

        Args:
            ledger: Current ledger, updated in place for each installed
                component.
            names: Component names, processed in order.
            overwrite: Replace components that are already installed.
            assume_yes: Overwrite untracked existing directories without
                asking.
            confirm: Asked whether to overwrite an existing directory that
                has no ledger entry. Without it such components are skipped
                unless ``assume_yes`` is set.

        Returns:
            InstallReport with one outcome per distinct name.

        Raises:
            OSError: If the project file store fails mid-write.
        """
        report = InstallReport()

        for name in _dedupe(names):
            outcome = self._install_one(
                ledger,
                name,
                overwrite=overwrite,
                assume_yes=assume_yes,
                confirm=confirm,
            )
            report.outcomes.append(outcome)

        self._log.info(
            "install_complete",
            installed=len(report.installed),
            skipped=len(report.skipped),
            errors=len(report.errors),
        )
        return report

    def _install_one(
        self,
        ledger: Ledger,
        name: str,
        *,
        overwrite: bool,
        assume_yes: bool,
        confirm: ConfirmCallback | None,
    ) -> ItemOutcome:
        log = self._log.bind(component=name)

        descriptor = self.provider.get_component(name)
        if descriptor is None:
            log.warning("unknown_component")
            return ItemOutcome(
                name=name,
                status=ItemStatus.ERROR,
                reason=OutcomeReason.UNKNOWN_COMPONENT,
                message=f"Component not found in registry: {name}",
            )

        existing = ledger.get(name)
        if not overwrite and has_content(self.store, self.component_path(name)):
            if existing is not None:
                log.info("component_already_installed", version=existing.version)
                return ItemOutcome(
                    name=name,
                    status=ItemStatus.SKIPPED,
                    reason=OutcomeReason.ALREADY_INSTALLED,
                    message=f"{name} already installed (v{existing.version})",
                    version=existing.version,
                )
            if not assume_yes and not (confirm is not None and confirm(name)):
                log.info("component_overwrite_declined")
                return ItemOutcome(
                    name=name,
                    status=ItemStatus.SKIPPED,
                    reason=OutcomeReason.DECLINED,
                    message=f"{name} already exists and was not overwritten",
                )

        try:
            entry = self._write_component(descriptor)
        except (ComponentFetchError, ComponentNotFoundError) as e:
            return self._fetch_failed(name, e)

        ledger.record(entry)
        log.info("component_installed", version=entry.version, files=len(entry.files))
        return ItemOutcome(
            name=name,
            status=ItemStatus.INSTALLED,
            version=entry.version,
            previous_version=existing.version if existing else None,
            files=list(entry.files),
            notes=descriptor.notes,
        )

    # =========================================================================
    # Compare
    # =========================================================================

    def compare(self, ledger: Ledger, name: str) -> CompareReport:
        """Classify every file of an installed component. Read-only.

        Args:
            ledger: Current ledger; not modified.
            name: Installed component name.

        Returns:
            CompareReport with one FileDiff per upstream file plus one per
            local file that upstream does not ship.

        Raises:
            ComponentNotInstalledError: If the component has no ledger entry.
            ComponentNotFoundError: If the component is not in the catalog.
            ComponentFetchError: If upstream files cannot be retrieved.
        """
        entry = ledger.get(name)
        if entry is None:
            raise ComponentNotInstalledError(name)

        descriptor = self.provider.get_component(name)
        if descriptor is None:
            raise ComponentNotFoundError(name)

        upstream_files = self.provider.fetch_files(name)

        report = CompareReport(
            name=name,
            installed_version=entry.version,
            upstream_version=descriptor.version,
        )

        for filename, content in upstream_files.items():
            local = self.local_fingerprint(name, filename)
            baseline = entry.baseline(filename)
            upstream = fingerprint(content)
            report.files.append(
                FileDiff(
                    file=filename,
                    state=classify(local, baseline, upstream),
                    local=local,
                    baseline=baseline,
                    upstream=upstream,
                )
            )

        for filename in self.store.list_files(self.component_path(name)):
            if filename in upstream_files:
                continue
            report.files.append(
                FileDiff(
                    file=filename,
                    state=DriftState.LOCAL_ONLY,
                    local=self.local_fingerprint(name, filename),
                    baseline=entry.baseline(filename),
                )
            )

        self._log.debug("component_compared", component=name, counts=report.counts())
        return report

    # =========================================================================
    # Upgrade
    # =========================================================================

    def has_local_changes(self, entry: InstalledEntry) -> bool:
        """Whether any recorded file was edited since it was written.

        Files that no longer exist locally do not count as edits.
        """
        for filename, baseline in entry.files.items():
            local = self.local_fingerprint(entry.name, filename)
            if local is not None and local != baseline:
                return True
        return False

    def upgrade(
        self,
        ledger: Ledger,
        names: Iterable[str] | None = None,
        *,
        force: bool = False,
        check_only: bool = False,
    ) -> UpgradeReport:
        """Bring installed components up to their upstream versions.

        Candidates are installed components whose recorded version differs
        from the upstream descriptor version. Without ``force`` only
        candidates with no local edits are written; the rest are skipped and
        counted. Written candidates get a fresh ledger entry, exactly as a
        forced install would produce.

        Args:
            ledger: Current ledger, updated in place for upgraded components.
            names: Components to consider. Defaults to everything installed.
            force: Also overwrite candidates that have local edits.
            check_only: Only report candidates; write nothing.

        Returns:
            UpgradeReport describing candidates and per-component outcomes.

        Raises:
            OSError: If the project file store fails mid-write.
        """
        requested = ledger.names() if names is None else _dedupe(names)
        report = UpgradeReport(check_only=check_only)

        for name in requested:
            entry = ledger.get(name)
            if entry is None:
                self._log.warning("component_not_installed", component=name)
                report.errors.append(
                    ItemOutcome(
                        name=name,
                        status=ItemStatus.ERROR,
                        reason=OutcomeReason.NOT_INSTALLED,
                        message=f"Component is not installed: {name}",
                    )
                )
                continue

            descriptor = self.provider.get_component(name)
            if descriptor is None:
                self._log.warning("unknown_component", component=name)
                report.errors.append(
                    ItemOutcome(
                        name=name,
                        status=ItemStatus.ERROR,
                        reason=OutcomeReason.UNKNOWN_COMPONENT,
                        message=f"Component not found in registry: {name}",
                        previous_version=entry.version,
                    )
                )
                continue

            if descriptor.version == entry.version:
                report.up_to_date.append(name)
                continue

            report.candidates.append(
                UpdateCandidate(
                    name=name,
                    installed_version=entry.version,
                    latest_version=descriptor.version,
                    has_local_changes=self.has_local_changes(entry),
                )
            )

        if check_only:
            self._log.info(
                "upgrade_checked",
                candidates=len(report.candidates),
                up_to_date=len(report.up_to_date),
            )
            return report

        for candidate in report.candidates:
            if candidate.has_local_changes and not force:
                report.skipped_unsafe += 1
                report.outcomes.append(
                    ItemOutcome(
                        name=candidate.name,
                        status=ItemStatus.SKIPPED,
                        reason=OutcomeReason.LOCAL_CHANGES,
                        message=f"{candidate.name} has local modifications",
                        version=candidate.installed_version,
                        previous_version=candidate.installed_version,
                    )
                )
                continue
            report.outcomes.append(self._upgrade_one(ledger, candidate))

        self._log.info(
            "upgrade_complete",
            updated=len(report.updated),
            skipped_unsafe=report.skipped_unsafe,
            errors=len(report.failed),
        )
        return report

    def _upgrade_one(self, ledger: Ledger, candidate: UpdateCandidate) -> ItemOutcome:
        descriptor = self.provider.get_component(candidate.name)
        if descriptor is None:
            return self._fetch_failed(
                candidate.name,
                ComponentNotFoundError(candidate.name),
                previous_version=candidate.installed_version,
            )

        try:
            entry = self._write_component(descriptor)
        except (ComponentFetchError, ComponentNotFoundError) as e:
            return self._fetch_failed(
                candidate.name, e, previous_version=candidate.installed_version
            )

        ledger.record(entry)
        self._log.info(
            "component_upgraded",
            component=candidate.name,
            from_version=candidate.installed_version,
            to_version=entry.version,
        )
        return ItemOutcome(
            name=candidate.name,
            status=ItemStatus.UPDATED,
            version=entry.version,
            previous_version=candidate.installed_version,
            files=list(entry.files),
            notes=descriptor.notes,
        )
