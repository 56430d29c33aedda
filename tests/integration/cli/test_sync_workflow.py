"""End-to-end tests: init, add, diff, update and status against a local registry."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import typer
import yaml
from typer.testing import CliRunner

from hauktui.services.sync import LOCK_FILE, fingerprint

COMPONENTS = Path("src/tui/components")


def _publish(registry_dir: Path, name: str, version: str, files: dict[str, str]) -> None:
    """Release a new upstream version of a component."""
    manifest_path = registry_dir / "registry.yaml"
    manifest = yaml.safe_load(manifest_path.read_text())
    for component in manifest["components"]:
        if component["name"] == name:
            component["version"] = version
            component["files"] = list(files)
    manifest_path.write_text(yaml.safe_dump(manifest, sort_keys=False))
    for filename, content in files.items():
        (registry_dir / "components" / name / filename).write_text(content)


def _lock(project_dir: Path) -> dict[str, Any]:
    data: dict[str, Any] = json.loads((project_dir / LOCK_FILE).read_text())
    return data


@pytest.fixture
def run(cli_runner: CliRunner, cli_app: typer.Typer, project_dir: Path) -> Any:
    """Invoke the CLI against ``project_dir``."""

    def _run(*args: str, input: str | None = None) -> Any:
        return cli_runner.invoke(cli_app, [*args, "--cwd", str(project_dir)], input=input)

    return _run


@pytest.mark.integration
class TestAddCommand:
    """hauktui add."""

    def test_add_installs_dependencies_first(self, run: Any, project_dir: Path) -> None:
        result = run("add", "card")

        assert result.exit_code == 0, result.output
        assert "Added 2 component(s)" in result.output
        assert "Import Card from card.py" in result.output
        assert (project_dir / COMPONENTS / "kbd" / "kbd.py").read_text() == "KBD = 1\n"
        assert (project_dir / COMPONENTS / "card" / "card_footer.py").exists()

        lock = _lock(project_dir)
        assert sorted(lock["components"]) == ["card", "kbd"]
        card = lock["components"]["card"]
        assert card["version"] == "1.0.0"
        assert card["files"]["card.py"] == fingerprint("CARD = 1\n")
        assert "installedAt" in card

    def test_add_no_deps(self, run: Any, project_dir: Path) -> None:
        result = run("add", "card", "--no-deps")

        assert result.exit_code == 0, result.output
        assert sorted(_lock(project_dir)["components"]) == ["card"]

    def test_add_reports_required_packages(self, run: Any) -> None:
        result = run("add", "badge")

        assert result.exit_code == 0, result.output
        assert "rich>=13.0" in result.output

    def test_add_twice_skips(self, run: Any, project_dir: Path) -> None:
        run("add", "badge")
        (project_dir / COMPONENTS / "badge" / "badge.py").write_text("# mine\n")

        result = run("add", "badge", "--yes")

        assert result.exit_code == 0, result.output
        assert "No components were added" in result.output
        assert (project_dir / COMPONENTS / "badge" / "badge.py").read_text() == "# mine\n"

    def test_add_overwrite(self, run: Any, project_dir: Path) -> None:
        run("add", "badge")
        (project_dir / COMPONENTS / "badge" / "badge.py").write_text("# mine\n")

        result = run("add", "badge", "--overwrite")

        assert result.exit_code == 0, result.output
        assert (project_dir / COMPONENTS / "badge" / "badge.py").read_text() == "BADGE = 1\n"

    def test_add_untracked_directory_asks(self, run: Any, project_dir: Path) -> None:
        target = project_dir / COMPONENTS / "badge"
        target.mkdir(parents=True)
        (target / "badge.py").write_text("# hand written\n")

        declined = run("add", "badge", input="n\n")
        assert declined.exit_code == 0, declined.output
        assert (target / "badge.py").read_text() == "# hand written\n"

        accepted = run("add", "badge", input="y\n")
        assert accepted.exit_code == 0, accepted.output
        assert (target / "badge.py").read_text() == "BADGE = 1\n"

    def test_unknown_component_does_not_stop_batch(self, run: Any, project_dir: Path) -> None:
        result = run("add", "nope", "badge")

        assert result.exit_code == 1
        assert "nope" in result.output
        assert (project_dir / COMPONENTS / "badge" / "badge.py").exists()
        assert sorted(_lock(project_dir)["components"]) == ["badge"]

    def test_add_all(self, run: Any, project_dir: Path) -> None:
        result = run("add", "--all")

        assert result.exit_code == 0, result.output
        assert sorted(_lock(project_dir)["components"]) == ["badge", "card", "kbd"]

    def test_add_nothing(self, run: Any) -> None:
        result = run("add")

        assert result.exit_code == 1
        assert "No components specified" in result.output


@pytest.mark.integration
class TestDriftWorkflow:
    """diff, update and status across an upstream release."""

    def test_full_cycle(self, run: Any, project_dir: Path, registry_dir: Path) -> None:
        card_py = project_dir / COMPONENTS / "card" / "card.py"
        assert run("add", "card").exit_code == 0

        result = run("diff", "card", "--output", "json")
        assert result.exit_code == 0, result.output
        report = json.loads(result.stdout)
        assert report["has_changes"] is False
        assert {f["state"] for f in report["files"]} == {"unchanged"}

        card_py.write_text("CARD = 'mine'\n")
        _publish(
            registry_dir,
            "card",
            "1.1.0",
            {"card.py": "CARD = 2\n", "card_footer.py": "FOOTER = 1\n"},
        )

        result = run("diff", "card", "-o", "json")
        states = {f["file"]: f["state"] for f in json.loads(result.stdout)["files"]}
        assert states == {"card.py": "conflict", "card_footer.py": "unchanged"}

        result = run("update", "--check", "-o", "json")
        assert result.exit_code == 0, result.output
        check = json.loads(result.stdout)
        assert check["check_only"] is True
        assert check["candidates"] == [
            {
                "name": "card",
                "installed_version": "1.0.0",
                "latest_version": "1.1.0",
                "has_local_changes": True,
            }
        ]
        assert card_py.read_text() == "CARD = 'mine'\n"

        result = run("update", "--yes")
        assert result.exit_code == 0, result.output
        assert "local modifications" in result.output
        assert card_py.read_text() == "CARD = 'mine'\n"
        assert _lock(project_dir)["components"]["card"]["version"] == "1.0.0"

        result = run("update", "--yes", "--force")
        assert result.exit_code == 0, result.output
        assert "Updated 1 component(s)" in result.output
        assert card_py.read_text() == "CARD = 2\n"
        assert _lock(project_dir)["components"]["card"]["version"] == "1.1.0"

        result = run("status", "-o", "json")
        assert result.exit_code == 0, result.output
        rows = {row["name"]: row for row in json.loads(result.stdout)["components"]}
        assert rows["card"]["installed_version"] == "1.1.0"
        assert rows["card"]["files"] == {"unchanged": 2}
        assert rows["kbd"]["upstream_version"] == "1.0.0"

    def test_safe_update_after_confirm(
        self, run: Any, project_dir: Path, registry_dir: Path
    ) -> None:
        run("add", "badge")
        _publish(registry_dir, "badge", "2.0.0", {"badge.py": "BADGE = 2\n"})

        result = run("update", "badge", input="y\n")

        assert result.exit_code == 0, result.output
        assert (project_dir / COMPONENTS / "badge" / "badge.py").read_text() == "BADGE = 2\n"

    def test_update_cancelled(self, run: Any, project_dir: Path, registry_dir: Path) -> None:
        run("add", "badge")
        _publish(registry_dir, "badge", "2.0.0", {"badge.py": "BADGE = 2\n"})

        result = run("update", input="n\n")

        assert result.exit_code == 0
        assert "Update cancelled" in result.output
        assert _lock(project_dir)["components"]["badge"]["version"] == "1.0.0"

    def test_up_to_date(self, run: Any) -> None:
        run("add", "badge")

        result = run("update")

        assert result.exit_code == 0
        assert "All components are up to date" in result.output

    def test_update_with_nothing_installed(self, run: Any) -> None:
        result = run("update")

        assert result.exit_code == 0
        assert "No components installed" in result.output

    def test_diff_not_installed(self, run: Any) -> None:
        result = run("diff", "badge")

        assert result.exit_code == 1
        assert "not installed" in result.output

    def test_diff_table_output(self, run: Any, project_dir: Path) -> None:
        run("add", "badge")

        result = run("diff", "badge")

        assert result.exit_code == 0, result.output
        assert "badge.py" in result.output
        assert "No differences found" in result.output

    def test_status_table(self, run: Any) -> None:
        run("add", "badge")

        result = run("status")

        assert result.exit_code == 0, result.output
        assert "badge" in result.output
        assert "unchanged" in result.output

    def test_invalid_lock_file(self, run: Any, project_dir: Path) -> None:
        (project_dir / LOCK_FILE).write_text('{"components": {"x": {"version": 1}}}')

        result = run("status")

        assert result.exit_code == 1
        assert "Invalid lock file" in result.output


@pytest.mark.integration
class TestCatalogCommands:
    """list and view."""

    def test_list(self, run: Any) -> None:
        result = run("list")

        assert result.exit_code == 0, result.output
        assert "LAYOUT" in result.output
        for name in ("badge", "kbd", "card"):
            assert name in result.output

    def test_list_search(self, run: Any) -> None:
        result = run("list", "--search", "keyboard")

        assert result.exit_code == 0, result.output
        assert "kbd" in result.output
        assert "card" not in result.output

    def test_list_no_match(self, run: Any) -> None:
        result = run("list", "--search", "zzz")

        assert result.exit_code == 0
        assert "No components found" in result.output

    def test_view(self, run: Any) -> None:
        result = run("view", "card")

        assert result.exit_code == 0, result.output
        assert "Titled panel" in result.output
        assert "kbd" in result.output

    def test_view_unknown(self, run: Any) -> None:
        result = run("view", "nope")

        assert result.exit_code == 1
        assert "hauktui list" in result.output
