"""Root pytest configuration for all tests."""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep the developer's own config files and log settings out of tests."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("APPDATA", str(home / "AppData"))
    monkeypatch.delenv("CMDWATCH_LOG", raising=False)
    monkeypatch.setattr(
        "cmdwatch.config.loader.get_config_paths",
        lambda project_root=None: [],
    )
    return home


class RecordingScreen:
    """Screen double that records every call."""

    def __init__(self) -> None:
        self.name = ""
        self.status = ""
        self.frames: list[tuple[str, bytes]] = []
        self.setup_calls = 0
        self.teardown_calls = 0

    def set_name(self, name: str) -> None:
        self.name = name

    def set_status(self, status: str) -> None:
        self.status = status

    def write(self, data: bytes) -> None:
        self.frames.append((self.status, data))

    def setup(self) -> None:
        self.setup_calls += 1

    def teardown(self) -> None:
        self.teardown_calls += 1


@pytest.fixture
def screen() -> RecordingScreen:
    return RecordingScreen()
