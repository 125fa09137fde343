"""Tests for the arrow-key list selector."""

import re
from io import StringIO

import pytest
import readchar
from rich.console import Console

from quickenv.selector import (
    Cancelled,
    ListSelector,
    MenuState,
    Picked,
    Theme,
    plain_text,
    select,
)

UP = readchar.key.UP
DOWN = readchar.key.DOWN
ENTER = readchar.key.ENTER
ESC = readchar.key.ESC
CTRL_C = readchar.key.CTRL_C

ERASE = "\x1b[1A\x1b[2K"


def _redraw_passes(output: str) -> list[tuple[int, int]]:
    """Split output into (lines written, lines erased next) pairs."""
    parts = re.split(f"((?:{re.escape(ERASE)})+)", output)
    passes = []
    for i in range(1, len(parts), 2):
        written = parts[i - 1].count("\n")
        erased = len(parts[i]) // len(ERASE)
        passes.append((written, erased))
    return passes


def _run(items, keys, fake_terminal, term_console, initial_index=0, title="Select:"):
    console, buffer = term_console
    terminal = fake_terminal(keys)
    result = select(items, title=title, initial_index=initial_index, console=console, terminal=terminal)
    return result, terminal, buffer.getvalue()


class TestMenuState:
    def test_down_wraps_to_top(self):
        state = MenuState(items=("a", "b", "c"), selected_index=2)
        state.move(+1)
        assert state.selected_index == 0

    def test_up_wraps_to_bottom(self):
        state = MenuState(items=("a", "b", "c"), selected_index=0)
        state.move(-1)
        assert state.selected_index == 2

    @pytest.mark.parametrize("count", [1, 2, 5])
    def test_down_len_times_returns_to_start(self, count):
        items = tuple(f"item{i}" for i in range(count))
        for start in range(count):
            state = MenuState(items=items, selected_index=start)
            for _ in range(count):
                state.move(+1)
            assert state.selected_index == start


class TestSelection:
    def test_scenario_down_down_enter_wraps_to_first(self, fake_terminal, term_console):
        result, _, _ = _run(
            ["dev", "staging", "prod"], [DOWN, DOWN, ENTER], fake_terminal, term_console, initial_index=1
        )
        assert result == Picked("dev", 0)
        assert result.item == "dev"

    def test_enter_picks_initial_item(self, fake_terminal, term_console):
        result, _, _ = _run(["a", "b", "c"], [ENTER], fake_terminal, term_console, initial_index=2)
        assert result == Picked("c", 2)

    def test_carriage_return_also_picks(self, fake_terminal, term_console):
        result, _, _ = _run(["a", "b"], ["\r"], fake_terminal, term_console)
        assert isinstance(result, Picked)

    def test_up_from_top_wraps(self, fake_terminal, term_console):
        result, _, _ = _run(["a", "b", "c"], [UP, ENTER], fake_terminal, term_console)
        assert result.item == "c"

    def test_escape_cancels(self, fake_terminal, term_console):
        result, terminal, _ = _run(["a", "b"], [DOWN, ESC], fake_terminal, term_console)
        assert result == Cancelled()
        assert terminal.raw is False
        assert terminal.restored == 1

    def test_ctrl_c_key_cancels(self, fake_terminal, term_console):
        result, terminal, _ = _run(["a"], [CTRL_C], fake_terminal, term_console)
        assert isinstance(result, Cancelled)
        assert terminal.raw is False

    def test_keyboard_interrupt_cancels(self, fake_terminal, term_console):
        result, terminal, _ = _run(["a", "b"], [KeyboardInterrupt], fake_terminal, term_console)
        assert isinstance(result, Cancelled)
        assert terminal.restored == 1

    def test_single_item_up_down_are_noops(self, fake_terminal, term_console):
        result, _, _ = _run(["only"], [UP, DOWN, DOWN, UP, ENTER], fake_terminal, term_console)
        assert result == Picked("only", 0)

    def test_initial_index_is_clamped(self, fake_terminal, term_console):
        result, _, _ = _run(["a", "b"], [ENTER], fake_terminal, term_console, initial_index=9)
        assert result.item == "b"

    def test_empty_items_rejected(self, fake_terminal, term_console):
        console, _ = term_console
        terminal = fake_terminal([ENTER])
        with pytest.raises(ValueError):
            select([], console=console, terminal=terminal)
        assert terminal.entered == 0

    def test_picked_plain_strips_markup(self, fake_terminal, term_console):
        result, _, _ = _run(
            ["dev", "[green]Create new preset…[/green]"], [DOWN, ENTER], fake_terminal, term_console
        )
        assert result.plain == "Create new preset…"


class TestRedraw:
    def test_erased_lines_match_previous_render(self, fake_terminal, term_console):
        keys = [DOWN, DOWN, UP, "x", DOWN, ENTER]
        _, _, output = _run(["a", "b", "c", "d"], keys, fake_terminal, term_console)

        passes = _redraw_passes(output)
        # title + 4 items + hint
        assert passes
        for written, erased in passes:
            assert written == 6
            assert erased == written

    def test_enter_does_not_render_again(self, fake_terminal, term_console):
        _, _, output = _run(["a", "b"], [DOWN, ENTER], fake_terminal, term_console)
        passes = _redraw_passes(output)
        # initial render + one redraw, then the final erase
        assert len(passes) == 2

    def test_ignored_keys_do_not_render(self, fake_terminal, term_console):
        _, _, output = _run(["a", "b"], ["x", "q", " ", ENTER], fake_terminal, term_console)
        assert len(_redraw_passes(output)) == 1

    def test_block_is_erased_on_exit(self, fake_terminal, term_console):
        _, _, output = _run(["a", "b"], [ESC], fake_terminal, term_console)
        assert output.endswith(ERASE)

    def test_error_path_erases_and_restores(self, fake_terminal, term_console):
        console, buffer = term_console
        terminal = fake_terminal([DOWN])  # runs out -> EOFError
        with pytest.raises(EOFError):
            select(["a", "b"], console=console, terminal=terminal)
        assert terminal.raw is False
        passes = _redraw_passes(buffer.getvalue())
        assert [erased for _, erased in passes] == [4, 4]

    def test_dumb_terminal_still_erases(self, fake_terminal, monkeypatch):
        monkeypatch.setenv("TERM", "dumb")
        buffer = StringIO()
        console = Console(file=buffer, force_terminal=True, width=80, highlight=False)
        terminal = fake_terminal([DOWN, ENTER])

        result = select(["a", "b"], console=console, terminal=terminal)

        assert result == Picked("b", 1)
        output = buffer.getvalue()
        assert output.count(ERASE) == 8
        passes = _redraw_passes(output)
        assert len(passes) == 2
        for written, erased in passes:
            assert written == erased == 4

    def test_long_labels_stay_on_one_line(self, fake_terminal, term_console):
        long_label = "X" * 200
        _, _, output = _run([long_label, "short"], [DOWN, ENTER], fake_terminal, term_console)
        for written, erased in _redraw_passes(output):
            assert written == erased == 4

    def test_newlines_in_labels_do_not_add_lines(self, fake_terminal, term_console):
        _, _, output = _run(["one\ntwo", "three"], [DOWN, ENTER], fake_terminal, term_console)
        for written, erased in _redraw_passes(output):
            assert written == erased == 4


class TestRenderContent:
    def test_lines_have_title_items_and_hint(self, term_console):
        console, _ = term_console
        selector = ListSelector(["dev", "prod"], title="Select a preset:", initial_index=1, console=console)
        lines = [plain_text(line) for line in selector.build_lines()]
        assert lines[0] == "Select a preset:"
        assert lines[1] == "   dev"
        assert lines[2] == " › prod"
        assert lines[-1] == "↑/↓ to move, Enter to confirm, Esc to cancel"

    def test_custom_theme_pointer(self, term_console):
        console, _ = term_console
        selector = ListSelector(["a"], console=console, theme=Theme(cursor_icon=">"))
        assert plain_text(selector.build_lines()[1]) == " > a"

    def test_output_goes_to_given_console_only(self, fake_terminal, term_console, capsys):
        _run(["a"], [ENTER], fake_terminal, term_console)
        captured = capsys.readouterr()
        assert captured.out == ""


class TestPlainText:
    def test_strips_markup(self):
        assert plain_text("[bold red]Delete[/bold red]") == "Delete"

    def test_strips_ansi(self):
        assert plain_text("\x1b[32mdev\x1b[39m") == "dev"
