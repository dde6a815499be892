from __future__ import annotations

import logging
from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Input, Label

from rexlive.config.manager import ConfigManager
from rexlive.engine.lexer import highlight_events
from rexlive.engine.match_cache import MatchCache
from rexlive.engine.palette import Palette
from rexlive.engine.render_plan import RenderPlan, RenderPlanBuilder
from rexlive.session.persist import Session
from rexlive.ui.widgets import HeaderBar, MatchDiagram, PatternInput, StatusBar
from rexlive.utils.logger import setup_logging

log = logging.getLogger("rexlive.app")

RE_TITLE = "REGULAR EXPRESSION: "
HAY_TITLE = "TEST STRING       : "
TITLE_WIDTH = max(len(RE_TITLE), len(HAY_TITLE))


class RexLiveApp(App):
    CSS = f"""
    #fields {{
        height: 1fr;
        padding: 1 0;
    }}

    .field-row {{
        height: 1;
    }}

    .field-title {{
        width: {TITLE_WIDTH};
    }}

    #haystack-row {{
        margin-top: 2;
    }}

    #haystack-input {{
        border: none;
        height: 1;
        padding: 0;
        width: 1fr;
    }}

    #match-diagram {{
        margin-left: {TITLE_WIDTH};
    }}
    """

    BINDINGS = [
        Binding("tab", "switch_field", "Switch Field", show=True, priority=True),
        Binding("up", "switch_field", "Switch Field", show=False),
        Binding("down", "switch_field", "Switch Field", show=False),
        Binding("ctrl+s", "save_session", "Save Session", show=True),
        Binding("escape", "quit", "Quit", show=True, priority=True),
    ]

    def __init__(
        self,
        session_name: str | None = None,
        config_path: str | None = None,
        verbose: bool = False,
    ) -> None:
        super().__init__()
        self._config_manager = config = ConfigManager(config_path)

        log_level = "DEBUG" if verbose else str(config.get("general.log_level", "INFO"))
        setup_logging(log_file=str(config.get("general.log_file", "")), log_level=log_level)
        log.debug("Using config %s", config.path)

        self._save_on_exit = bool(config.get("sessions.save_on_exit", True))
        sessions_dir = config.get_path("sessions.directory") or Path.cwd()
        if session_name:
            self._regex_session = Session.fetch(session_name, sessions_dir)
        else:
            self._regex_session = Session.scratch()

        highlighting = bool(config.get("display.syntax_highlighting", True))

        # Lives as long as the app; entries are never evicted.
        self._match_cache = MatchCache()
        self._plan_builder = RenderPlanBuilder(
            self._match_cache,
            palette=Palette.from_config(config.get("colors")),
            tokenizer=highlight_events if highlighting else None,
        )
        self._render_plan: RenderPlan | None = None

    @property
    def session(self) -> Session:
        return self._regex_session

    @property
    def match_cache(self) -> MatchCache:
        return self._match_cache

    @property
    def plan(self) -> RenderPlan | None:
        return self._render_plan

    def compose(self) -> ComposeResult:
        yield HeaderBar(self._regex_session.title)
        with Vertical(id="fields"):
            with Horizontal(id="pattern-row", classes="field-row"):
                yield Label(RE_TITLE, classes="field-title")
                yield PatternInput(
                    self._plan_builder,
                    value=self._regex_session.pattern.text,
                    id="pattern-input",
                )
            with Horizontal(id="haystack-row", classes="field-row"):
                yield Label(HAY_TITLE, classes="field-title")
                yield Input(
                    value=self._regex_session.haystack.text,
                    select_on_focus=False,
                    id="haystack-input",
                )
            yield MatchDiagram()
        yield StatusBar()

    def on_mount(self) -> None:
        self._pattern_input().focus()
        self._redraw()
        self._restore_cursors()
        # Input jumps to the end on its first value update, after this handler.
        self.call_after_refresh(self._restore_cursors)

    def _restore_cursors(self) -> None:
        fields = (
            (self._pattern_input(), self._regex_session.pattern),
            (self._haystack_input(), self._regex_session.haystack),
        )
        for field_input, state in fields:
            # Keys may already have arrived; never move the cursor of an edited field.
            if field_input.value == state.text:
                field_input.cursor_position = state.cursor

    def _pattern_input(self) -> PatternInput:
        return self.query_one("#pattern-input", PatternInput)

    def _haystack_input(self) -> Input:
        return self.query_one("#haystack-input", Input)

    # ------------------------------------------------------------------
    # Redraw
    # ------------------------------------------------------------------

    def on_input_changed(self, event: Input.Changed) -> None:
        self._redraw()
        if self._regex_session.name is not None:
            changed = (
                self._pattern_input().value != self._regex_session.pattern.text
                or self._haystack_input().value != self._regex_session.haystack.text
            )
            self.query_one(HeaderBar).set_dirty(changed)

    def _redraw(self) -> None:
        plan = self._plan_builder.build(
            self._pattern_input().value, self._haystack_input().value
        )
        self._render_plan = plan
        self.query_one(MatchDiagram).show(plan.haystack)

        status = self.query_one(StatusBar)
        if plan.error is not None:
            status.update_result(None)
        else:
            groups = sum(max(len(captures) - 1, 0) for captures in plan.matches)
            status.update_result(len(plan.matches), groups)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def action_switch_field(self) -> None:
        if self._pattern_input().has_focus:
            self._haystack_input().focus()
        else:
            self._pattern_input().focus()

    def action_save_session(self) -> None:
        if self._regex_session.name is None:
            self.notify("Scratch session is not saved", severity="warning")
            return
        if self._save_session():
            self.notify(f"Saved session {self._regex_session.name}")

    async def action_quit(self) -> None:
        if self._save_on_exit:
            self._save_session()
        self.exit()

    def _sync_session(self) -> None:
        pattern_input = self._pattern_input()
        haystack_input = self._haystack_input()
        self._regex_session.pattern.text = pattern_input.value
        self._regex_session.pattern.cursor = pattern_input.cursor_position
        self._regex_session.haystack.text = haystack_input.value
        self._regex_session.haystack.cursor = haystack_input.cursor_position

    def _save_session(self) -> bool:
        self._sync_session()
        try:
            self._regex_session.save()
        except OSError as exc:
            log.error("Failed to save session %r: %s", self._regex_session.name, exc)
            self.notify(f"Could not save session: {exc}", severity="error")
            return False
        self.query_one(HeaderBar).set_dirty(False)
        return True
