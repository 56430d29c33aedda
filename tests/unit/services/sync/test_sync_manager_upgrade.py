"""Unit tests for SyncManager.upgrade()."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from hauktui.services.sync import (
    DriftState,
    ItemStatus,
    Ledger,
    MemoryFileStore,
    OutcomeReason,
    SyncManager,
    fingerprint,
)
from tests.conftest import COMPONENT_DIR, FakeProvider

INSTALLED_AT = datetime(2026, 1, 1, tzinfo=UTC)
UPGRADED_AT = datetime(2026, 6, 1, tzinfo=UTC)

CARD_V2 = {"card.py": "def Card(v2): ...\n", "card_footer.py": "def CardFooter(): ...\n"}
BADGE_V2 = {"badge.py": "def Badge(v2): ...\n"}


@pytest.fixture
def ledger(provider: FakeProvider, file_store: MemoryFileStore) -> Ledger:
    """Ledger with badge and card installed at 1.0.0."""
    ledger = Ledger()
    SyncManager(provider, file_store, COMPONENT_DIR, clock=lambda: INSTALLED_AT).install(
        ledger, ["badge", "card"]
    )
    return ledger


@pytest.fixture
def manager(provider: FakeProvider, file_store: MemoryFileStore) -> SyncManager:
    return SyncManager(provider, file_store, COMPONENT_DIR, clock=lambda: UPGRADED_AT)


@pytest.mark.unit
class TestUpgradeCandidates:
    """Tests for candidate detection."""

    def test_everything_up_to_date(self, manager: SyncManager, ledger: Ledger) -> None:
        report = manager.upgrade(ledger)

        assert report.candidates == []
        assert report.up_to_date == ["badge", "card"]
        assert report.outcomes == []

    def test_version_change_is_candidate(
        self, manager: SyncManager, ledger: Ledger, provider: FakeProvider
    ) -> None:
        provider.publish("badge", BADGE_V2, version="1.1.0")

        report = manager.upgrade(ledger, check_only=True)

        assert [c.name for c in report.candidates] == ["badge"]
        candidate = report.candidates[0]
        assert candidate.installed_version == "1.0.0"
        assert candidate.latest_version == "1.1.0"
        assert not candidate.has_local_changes

    def test_local_edit_marks_candidate_unsafe(
        self,
        manager: SyncManager,
        ledger: Ledger,
        provider: FakeProvider,
        file_store: MemoryFileStore,
    ) -> None:
        provider.publish("card", CARD_V2, version="2.0.0")
        file_store.write_text(f"{COMPONENT_DIR}/card/card_footer.py", "# edited\n")

        report = manager.upgrade(ledger, check_only=True)

        assert [c.name for c in report.unsafe] == ["card"]
        assert report.safe == []

    def test_deleted_file_is_not_a_local_change(
        self,
        manager: SyncManager,
        ledger: Ledger,
        provider: FakeProvider,
        file_store: MemoryFileStore,
    ) -> None:
        provider.publish("card", CARD_V2, version="2.0.0")
        file_store.delete(f"{COMPONENT_DIR}/card/card_footer.py")

        report = manager.upgrade(ledger, check_only=True)

        assert [c.name for c in report.safe] == ["card"]

    def test_check_only_writes_nothing(
        self,
        manager: SyncManager,
        ledger: Ledger,
        provider: FakeProvider,
        file_store: MemoryFileStore,
    ) -> None:
        provider.publish("badge", BADGE_V2, version="1.1.0")
        provider.publish("card", CARD_V2, version="2.0.0")
        ledger_before = ledger.model_copy(deep=True)
        files_before = dict(file_store.files)

        report = manager.upgrade(ledger, check_only=True, force=True)

        assert report.check_only
        assert len(report.candidates) == 2
        assert report.outcomes == []
        assert ledger == ledger_before
        assert file_store.files == files_before


@pytest.mark.unit
class TestUpgradeApply:
    """Tests for applying upgrades."""

    def test_safe_candidate_upgraded(
        self,
        manager: SyncManager,
        ledger: Ledger,
        provider: FakeProvider,
        file_store: MemoryFileStore,
    ) -> None:
        provider.publish("badge", BADGE_V2, version="1.1.0")

        report = manager.upgrade(ledger)

        outcome = report.updated[0]
        assert outcome.name == "badge"
        assert outcome.previous_version == "1.0.0"
        assert outcome.version == "1.1.0"
        assert file_store.files[f"{COMPONENT_DIR}/badge/badge.py"] == BADGE_V2["badge.py"]

        entry = ledger.get("badge")
        assert entry is not None
        assert entry.version == "1.1.0"
        assert entry.installed_at == UPGRADED_AT
        assert entry.files == {"badge.py": fingerprint(BADGE_V2["badge.py"])}

    def test_upgraded_component_compares_unchanged(
        self, manager: SyncManager, ledger: Ledger, provider: FakeProvider
    ) -> None:
        provider.publish("card", CARD_V2, version="2.0.0")

        manager.upgrade(ledger, ["card"])

        report = manager.compare(ledger, "card")
        assert not report.has_changes

    def test_unsafe_candidate_left_alone(
        self,
        manager: SyncManager,
        ledger: Ledger,
        provider: FakeProvider,
        file_store: MemoryFileStore,
    ) -> None:
        provider.publish("badge", BADGE_V2, version="1.1.0")
        provider.publish("card", CARD_V2, version="2.0.0")
        file_store.write_text(f"{COMPONENT_DIR}/card/card.py", "# mine\n")

        report = manager.upgrade(ledger)

        assert [o.name for o in report.updated] == ["badge"]
        assert report.skipped_unsafe == 1
        skipped = next(o for o in report.outcomes if o.name == "card")
        assert skipped.status == ItemStatus.SKIPPED
        assert skipped.reason == OutcomeReason.LOCAL_CHANGES

        assert file_store.files[f"{COMPONENT_DIR}/card/card.py"] == "# mine\n"
        card = ledger.get("card")
        assert card is not None
        assert card.version == "1.0.0"
        assert manager.compare(ledger, "card").state_of("card.py") == DriftState.CONFLICT

    def test_force_overwrites_local_edits(
        self,
        manager: SyncManager,
        ledger: Ledger,
        provider: FakeProvider,
        file_store: MemoryFileStore,
    ) -> None:
        provider.publish("card", CARD_V2, version="2.0.0")
        file_store.write_text(f"{COMPONENT_DIR}/card/card.py", "# mine\n")

        report = manager.upgrade(ledger, force=True)

        assert [o.name for o in report.updated] == ["card"]
        assert report.skipped_unsafe == 0
        assert file_store.files[f"{COMPONENT_DIR}/card/card.py"] == CARD_V2["card.py"]

    def test_named_subset(
        self, manager: SyncManager, ledger: Ledger, provider: FakeProvider
    ) -> None:
        provider.publish("badge", BADGE_V2, version="1.1.0")
        provider.publish("card", CARD_V2, version="2.0.0")

        report = manager.upgrade(ledger, ["card"])

        assert [o.name for o in report.updated] == ["card"]
        badge = ledger.get("badge")
        assert badge is not None
        assert badge.version == "1.0.0"


@pytest.mark.unit
class TestUpgradeErrors:
    """Tests for per-item upgrade failures."""

    def test_not_installed_reported(self, manager: SyncManager, ledger: Ledger) -> None:
        report = manager.upgrade(ledger, ["spinner"])

        assert len(report.errors) == 1
        assert report.errors[0].reason == OutcomeReason.NOT_INSTALLED
        assert report.failed == report.errors

    def test_removed_upstream_reported(
        self, manager: SyncManager, ledger: Ledger, provider: FakeProvider
    ) -> None:
        del provider.components["badge"]

        report = manager.upgrade(ledger)

        assert report.errors[0].name == "badge"
        assert report.errors[0].reason == OutcomeReason.UNKNOWN_COMPONENT
        assert report.up_to_date == ["card"]

    def test_fetch_failure_does_not_stop_batch(
        self,
        manager: SyncManager,
        ledger: Ledger,
        provider: FakeProvider,
        file_store: MemoryFileStore,
    ) -> None:
        provider.publish("badge", BADGE_V2, version="1.1.0")
        provider.publish("card", CARD_V2, version="2.0.0")
        provider.failing.add("badge")

        report = manager.upgrade(ledger)

        failed = report.failed
        assert [o.name for o in failed] == ["badge"]
        assert failed[0].reason == OutcomeReason.FETCH_FAILED
        assert [o.name for o in report.updated] == ["card"]

        badge = ledger.get("badge")
        assert badge is not None
        assert badge.version == "1.0.0"
        assert file_store.files[f"{COMPONENT_DIR}/badge/badge.py"] == "def Badge(): ...\n"
