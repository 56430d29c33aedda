"""Shared pytest fixtures for hauktui tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Generator
from pathlib import Path
from textwrap import dedent

import pytest
import typer
from typer.testing import CliRunner

from hauktui.cli.main import app
from hauktui.registry import ComponentDescriptor
from hauktui.services.sync import MemoryFileStore

COMPONENT_DIR = "src/tui/components"


class FakeProvider:
    """In-memory component source provider.

    ``components`` holds descriptors, ``sources`` the upstream file
    contents. Names in ``failing`` raise ComponentFetchError on fetch.
    """

    def __init__(self) -> None:
        self.components: dict[str, ComponentDescriptor] = {}
        self.sources: dict[str, dict[str, str]] = {}
        self.failing: set[str] = set()
        self.fetch_calls: list[str] = []

    def publish(
        self,
        name: str,
        files: dict[str, str],
        version: str = "1.0.0",
        **fields: object,
    ) -> ComponentDescriptor:
        """Add or replace a component upstream."""
        descriptor = ComponentDescriptor.model_validate(
            {"name": name, "version": version, "files": list(files), **fields}
        )
        self.components[name] = descriptor
        self.sources[name] = dict(files)
        return descriptor

    def get_component(self, name: str) -> ComponentDescriptor | None:
        return self.components.get(name)

    def list_components(self) -> list[ComponentDescriptor]:
        return list(self.components.values())

    def fetch_files(self, name: str) -> dict[str, str]:
        from hauktui.core.exceptions import ComponentFetchError, ComponentNotFoundError

        self.fetch_calls.append(name)
        if name not in self.components:
            raise ComponentNotFoundError(name)
        if name in self.failing:
            raise ComponentFetchError(name, "simulated failure")
        return dict(self.sources[name])


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def cli_app() -> typer.Typer:
    """Return the CLI app for testing."""
    return app


@pytest.fixture
def provider() -> FakeProvider:
    """Provider with two published components."""
    fake = FakeProvider()
    fake.publish("badge", {"badge.py": "def Badge(): ...\n"})
    fake.publish(
        "card",
        {"card.py": "def Card(): ...\n", "card_footer.py": "def CardFooter(): ...\n"},
        notes="Import Card from card.py",
    )
    return fake


@pytest.fixture
def file_store() -> MemoryFileStore:
    """Empty in-memory project file store."""
    return MemoryFileStore()


@pytest.fixture
def registry_dir(tmp_path: Path) -> Path:
    """A small registry directory on disk."""
    root = tmp_path / "registry"
    (root / "components" / "badge").mkdir(parents=True)
    (root / "components" / "kbd").mkdir(parents=True)
    (root / "components" / "card").mkdir(parents=True)
    (root / "components" / "badge" / "badge.py").write_text("BADGE = 1\n")
    (root / "components" / "kbd" / "kbd.py").write_text("KBD = 1\n")
    (root / "components" / "card" / "card.py").write_text("CARD = 1\n")
    (root / "components" / "card" / "card_footer.py").write_text("FOOTER = 1\n")
    (root / "registry.yaml").write_text(
        dedent(
            """\
            version: "1.0.0"
            components:
              - name: badge
                description: Small status label
                version: "1.0.0"
                files: [badge.py]
                dependencies:
                  rich: ">=13.0"
                category: display
                tags: [label, status]
              - name: kbd
                description: Keyboard key hint
                version: "1.0.0"
                files: [kbd.py]
                category: display
                tags: [keyboard]
              - name: card
                description: Titled panel
                version: "1.0.0"
                files: [card.py, card_footer.py]
                registryDependencies: [kbd]
                category: layout
                tags: [panel]
                notes: Import Card from card.py
            """
        )
    )
    return root


@pytest.fixture
def project_dir(tmp_path: Path, registry_dir: Path) -> Path:
    """An initialized project that installs from ``registry_dir``."""
    root = tmp_path / "project"
    root.mkdir()
    (root / "hauk.config.json").write_text(
        '{\n  "componentDir": "src/tui/components",\n'
        f'  "registryPath": "{registry_dir.as_posix()}"\n}}\n'
    )
    return root


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset environment variables for each test."""
    for key in list(os.environ.keys()):
        if key.startswith("HAUKTUI_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def isolate_logging(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Keep file logs in tmp_path and drop handlers added during a test."""
    monkeypatch.setattr("hauktui.logging.config.LOG_DIR", tmp_path / "logs")
    monkeypatch.setattr("hauktui.logging.config.LOG_FILE", tmp_path / "logs" / "hauktui.log")
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    yield
    for handler in root.handlers:
        if handler not in original_handlers:
            handler.close()
    root.handlers = original_handlers
