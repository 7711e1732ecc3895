"""Pytest fixtures for cmdapp tests."""

import io
from pathlib import Path

import pytest

import cmdapp
from cmdapp import config as config_module
from cmdapp.app import App

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"


class ExitRecorder:
    """Stand-in for sys.exit that records the codes instead of exiting."""

    def __init__(self):
        self.codes = []

    def __call__(self, code):
        self.codes.append(code)

    @property
    def code(self):
        return self.codes[-1] if self.codes else None


@pytest.fixture
def exit_recorder():
    """Recording exit hook."""
    return ExitRecorder()


@pytest.fixture
def out():
    """Buffer used as the app's error writer."""
    return io.StringIO()


@pytest.fixture
def app(out, exit_recorder):
    """Empty app named 'prog' writing to ``out`` and recording exits."""
    return App(name="prog", error_writer=out, exit=exit_recorder)


@pytest.fixture
def fresh_default_app(monkeypatch):
    """Reset the process-wide default app and its command table."""
    monkeypatch.setattr(cmdapp, "_default_app", None)
    monkeypatch.setattr(cmdapp, "COMMANDS", {})
    monkeypatch.setattr("sys.argv", ["/usr/local/bin/prog"])
    return cmdapp


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Run in an empty project directory with no user config."""
    monkeypatch.setattr(config_module, "USER_CONFIG_PATH", tmp_path / "user" / "config.toml")
    project = tmp_path / "project"
    project.mkdir()
    (project / ".git").mkdir()
    monkeypatch.chdir(project)
    return project


@pytest.fixture
def counter_example():
    """Directory of the counter example program."""
    return EXAMPLES_DIR / "01-counter"
