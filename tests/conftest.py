"""Pytest fixtures for quickenv tests."""

import json
from io import StringIO

import pytest
from rich.console import Console

from quickenv import display
from quickenv.selector import Cancelled, NonInteractiveError, Picked, plain_text


@pytest.fixture
def quickenv_home(tmp_path, monkeypatch):
    """Point QUICKENV_HOME at a temporary directory."""
    home = tmp_path / "quick-env"
    monkeypatch.setenv("QUICKENV_HOME", str(home))
    monkeypatch.delenv("QUICKENV_DEBUG", raising=False)
    return home


@pytest.fixture
def write_config(quickenv_home):
    """Write a config.json into the temporary home and return its path."""

    def _write(data):
        quickenv_home.mkdir(parents=True, exist_ok=True)
        path = quickenv_home / "config.json"
        path.write_text(json.dumps(data, indent=2))
        return path

    return _write


@pytest.fixture
def read_config(quickenv_home):
    def _read():
        return json.loads((quickenv_home / "config.json").read_text())

    return _read


@pytest.fixture
def sample_config(write_config):
    return write_config(
        {
            "current": "staging",
            "envs": {
                "dev": {"API_URL": "http://localhost:8000", "DEBUG": "1"},
                "staging": {"API_URL": "https://staging.example.com"},
                "prod": {"API_URL": "https://example.com", "TOKEN": "it's secret"},
            },
        }
    )


@pytest.fixture
def term_console(monkeypatch):
    """A terminal-like Rich console writing into a StringIO."""
    monkeypatch.setenv("TERM", "xterm-256color")
    buffer = StringIO()
    console = Console(
        file=buffer, force_terminal=True, width=80, color_system="standard", highlight=False
    )
    return console, buffer


@pytest.fixture
def captured_consoles():
    """Capture display output as plain text (stdout, stderr)."""
    out, err = StringIO(), StringIO()
    display.set_console(Console(file=out, width=120, highlight=False))
    display.set_err_console(Console(file=err, width=120, highlight=False))
    yield out, err
    display.set_console(None)
    display.set_err_console(None)


class FakeTerminal:
    """Key source standing in for TerminalSession.

    Records raw-mode transitions so tests can check the terminal was
    handed back. Raises EOFError once the scripted keys run out.
    """

    def __init__(self, keys):
        self.keys = list(keys)
        self.raw = False
        self.entered = 0
        self.restored = 0

    def __enter__(self):
        self.raw = True
        self.entered += 1
        return self

    def __exit__(self, *exc_info):
        self.raw = False
        self.restored += 1

    def read_key(self):
        if not self.keys:
            raise EOFError("no more keys")
        key = self.keys.pop(0)
        if isinstance(key, BaseException) or (
            isinstance(key, type) and issubclass(key, BaseException)
        ):
            raise key
        return key


class ScriptedMenu:
    """Stands in for selector.select(): answers each menu from a script.

    Script entries:
        str: pick the item whose plain label equals it (or starts with it
             followed by a space)
        None: cancel
        NonInteractiveError: raise it
    """

    def __init__(self, *choices):
        self.choices = list(choices)
        self.calls = []

    def __call__(self, items, title="Select:", initial_index=0, **kwargs):
        plain = [plain_text(item) for item in items]
        self.calls.append({"title": plain_text(title), "items": plain, "initial": initial_index})
        if not self.choices:
            raise AssertionError(f"Unexpected menu: {title}")
        choice = self.choices.pop(0)
        if choice is None:
            return Cancelled()
        if choice is NonInteractiveError:
            raise NonInteractiveError("no tty")
        for index, label in enumerate(plain):
            if label == choice or label.startswith(choice + " "):
                return Picked(items[index], index)
        raise AssertionError(f"{choice!r} not in menu {plain}")


class ScriptedAnswers:
    """Callable returning scripted answers in order, recording prompts."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.prompts = []

    def __call__(self, message, *args, **kwargs):
        self.prompts.append(message)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {message}")
        return self.answers.pop(0)


@pytest.fixture
def fake_terminal():
    return FakeTerminal


@pytest.fixture
def scripted_menu(monkeypatch):
    """Install a ScriptedMenu in place of the interactive selector."""
    from quickenv.interactive import core

    def _install(*choices):
        menu = ScriptedMenu(*choices)
        monkeypatch.setattr(core, "select", menu)
        return menu

    return _install


@pytest.fixture
def scripted_answers():
    return ScriptedAnswers
