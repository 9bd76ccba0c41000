"""Shared pytest fixtures for palettekit tests."""

import pytest

from palettekit.models import Command
from palettekit.storage import MemoryStore


class _ManualTimer:
    def __init__(self, when: float, callback):
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose clock only moves when a test calls ``advance``."""

    def __init__(self):
        self.now = 0.0
        self.timers: list[_ManualTimer] = []

    def call_later(self, delay, callback):
        timer = _ManualTimer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> list[_ManualTimer]:
        return [t for t in self.timers if not t.cancelled]

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = sorted((t for t in self.pending if t.when <= target), key=lambda t: t.when)
            if not due:
                break
            timer = due[0]
            self.timers.remove(timer)
            self.now = timer.when
            timer.callback()
        self.now = target


@pytest.fixture
def scheduler():
    """A manually driven timer scheduler."""
    return ManualScheduler()


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path, monkeypatch):
    """Keep every test away from the real ~/.config/palettekit."""
    config_dir = tmp_path / "config"
    monkeypatch.setenv("PALETTEKIT_CONFIG_DIR", str(config_dir))
    return config_dir


@pytest.fixture
def file_commands():
    """The classic two-command scenario."""
    return [
        Command(id="1", label="Open File", keywords=("open",)),
        Command(id="2", label="Save File"),
    ]


@pytest.fixture
def nested_commands():
    """A small tree with groups, a disabled leaf and a two-level branch."""
    return [
        Command(id="new", label="New Project", group="Project"),
        Command(id="open", label="Open File", keywords=("load",), group="File"),
        Command(id="save", label="Save File", group="File"),
        Command(id="locked", label="Delete Everything", disabled=True),
        Command(
            id="theme",
            label="Theme",
            group="Appearance",
            children=(
                Command(id="dark", label="Dark"),
                Command(id="light", label="Light"),
                Command(
                    id="custom",
                    label="Custom",
                    children=(Command(id="solarized", label="Solarized"),),
                ),
            ),
        ),
    ]
