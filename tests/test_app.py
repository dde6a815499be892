"""Smoke tests for the RexLiveApp TUI using Textual's async pilot."""
from __future__ import annotations

import pytest
from textual.widgets import Input

from rexlive.app import RexLiveApp
from rexlive.session.persist import InvalidSessionName
from rexlive.ui.widgets import HeaderBar, MatchDiagram, PatternInput, StatusBar


@pytest.fixture
def sessions_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    return tmp_path / ".local" / "share" / "rexlive" / "sessions"


@pytest.fixture
def app(sessions_dir) -> RexLiveApp:
    return RexLiveApp()


async def _set_fields(app: RexLiveApp, pilot, pattern: str, haystack: str) -> None:
    app.query_one("#pattern-input", Input).value = pattern
    app.query_one("#haystack-input", Input).value = haystack
    await pilot.pause()


@pytest.mark.asyncio
async def test_app_composes_all_widgets(app: RexLiveApp) -> None:
    async with app.run_test():
        assert app.query_one(HeaderBar)
        assert app.query_one(PatternInput)
        assert app.query_one("#haystack-input", Input)
        assert app.query_one(MatchDiagram)
        assert app.query_one(StatusBar)


@pytest.mark.asyncio
async def test_header_shows_scratch_session(app: RexLiveApp) -> None:
    async with app.run_test():
        assert "--- <scratch> ---" in app.query_one(HeaderBar).display_text


@pytest.mark.asyncio
async def test_pattern_field_has_focus_on_start(app: RexLiveApp) -> None:
    async with app.run_test():
        assert app.query_one(PatternInput).has_focus


@pytest.mark.asyncio
async def test_tab_switches_fields(app: RexLiveApp) -> None:
    async with app.run_test() as pilot:
        await pilot.press("tab")
        assert app.query_one("#haystack-input", Input).has_focus
        await pilot.press("tab")
        assert app.query_one(PatternInput).has_focus


@pytest.mark.asyncio
async def test_typing_updates_diagram(app: RexLiveApp) -> None:
    async with app.run_test() as pilot:
        await _set_fields(app, pilot, "(a(b)c)", "abc")
        diagram = app.query_one(MatchDiagram)
        assert diagram.plain.split("\n") == ["abc", "|~|", "||", "01"]
        assert "Matches: 1 | Groups: 1" in app.query_one(StatusBar).display_text


@pytest.mark.asyncio
async def test_typed_keys_reach_pattern_field(app: RexLiveApp) -> None:
    async with app.run_test() as pilot:
        await pilot.press("a", "b")
        assert app.query_one(PatternInput).value == "ab"
        assert app.plan is not None
        assert [i.text for i in app.plan.pattern] == ["a", "b"]


@pytest.mark.asyncio
async def test_first_keystroke_keeps_cursor_in_place(app: RexLiveApp) -> None:
    async with app.run_test() as pilot:
        await pilot.press("a")
        assert app.query_one(PatternInput).cursor_position == 1
        await pilot.press("b", "c")
        await pilot.pause()
        assert app.query_one(PatternInput).value == "abc"


@pytest.mark.asyncio
async def test_invalid_pattern_shows_error(app: RexLiveApp) -> None:
    async with app.run_test() as pilot:
        await _set_fields(app, pilot, "(a", "abc")
        lines = app.query_one(MatchDiagram).plain.split("\n")
        assert lines[0] == "ERROR"
        assert lines[1] == "regex parse error:"
        assert "Invalid pattern" in app.query_one(StatusBar).display_text


@pytest.mark.asyncio
async def test_redraw_uses_cache(app: RexLiveApp) -> None:
    async with app.run_test() as pilot:
        await _set_fields(app, pilot, "a", "aa")
        misses = app.match_cache.misses
        await _set_fields(app, pilot, "b", "aa")
        await _set_fields(app, pilot, "a", "aa")
        assert app.match_cache.misses == misses + 1


@pytest.mark.asyncio
async def test_redraw_looks_up_each_pair_once(app: RexLiveApp) -> None:
    async with app.run_test() as pilot:
        await _set_fields(app, pilot, "a", "aa")
        hits = app.match_cache.hits
        app._redraw()
        assert app.match_cache.hits == hits + 1
        assert app.plan is not None
        assert app.plan.matches == app.match_cache.lookup("a", "aa")


@pytest.mark.asyncio
async def test_named_session_saved_on_quit(sessions_dir) -> None:
    app = RexLiveApp(session_name="demo")
    async with app.run_test() as pilot:
        await _set_fields(app, pilot, r"\d+", "abc 123")
        assert app.query_one(HeaderBar).display_text.endswith("*")
        await pilot.press("escape")

    saved = (sessions_dir / "demo").read_text()
    pattern_line, haystack_line = saved.split("\n")
    assert pattern_line.split(":", 1)[1] == r"\d+"
    assert haystack_line.split(":", 1)[1] == "abc 123"


@pytest.mark.asyncio
async def test_named_session_is_restored(sessions_dir) -> None:
    sessions_dir.mkdir(parents=True)
    (sessions_dir / "restore").write_text("1:x+\n0:xxy")
    app = RexLiveApp(session_name="restore")
    async with app.run_test() as pilot:
        await pilot.pause()
        pattern_input = app.query_one(PatternInput)
        assert pattern_input.value == "x+"
        assert pattern_input.cursor_position == 1
        assert app.query_one(MatchDiagram).plain.split("\n")[0] == "xxy"


@pytest.mark.asyncio
async def test_ctrl_s_saves_named_session(sessions_dir) -> None:
    app = RexLiveApp(session_name="manual")
    async with app.run_test() as pilot:
        await _set_fields(app, pilot, "q", "")
        await pilot.press("ctrl+s")
        await pilot.pause()
        assert (sessions_dir / "manual").exists()
        assert not app.query_one(HeaderBar).display_text.endswith("*")


def test_invalid_session_name_is_rejected(sessions_dir) -> None:
    with pytest.raises(InvalidSessionName):
        RexLiveApp(session_name="no/slashes")


def test_config_file_drives_app_settings(sessions_dir, tmp_path) -> None:
    elsewhere = tmp_path / "elsewhere"
    config_file = tmp_path / "config" / "rexlive" / "config.toml"
    config_file.parent.mkdir(parents=True)
    config_file.write_text(
        f'[sessions]\ndirectory = "{elsewhere}"\nsave_on_exit = false\n'
        "[display]\nsyntax_highlighting = false\n"
    )
    app = RexLiveApp(session_name="moved")
    assert app.session.directory == elsewhere
    assert app._save_on_exit is False
    assert all(
        i.color is None for i in app._plan_builder.pattern_instructions(r"^\d+$")
    )


def test_reserved_session_name_is_rejected(sessions_dir) -> None:
    with pytest.raises(InvalidSessionName):
        RexLiveApp(session_name="..")
