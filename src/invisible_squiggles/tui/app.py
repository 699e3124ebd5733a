"""Terminal host for the squiggle toggle.

// [LAW:locality-or-seam] Thin coordinator: the toggler owns the logic, the
//   app only wires keys, the status bar and notifications to it.

Plays the editor's part: a right-aligned status indicator bound to the
toggle command, a key binding for it and transient notifications.
"""

import logging

from textual.app import App, ComposeResult
from textual.containers import Horizontal
from textual.widgets import Static

from invisible_squiggles.app.toggle_engine import SquiggleToggler
from invisible_squiggles.core.status import StatusIndicator
from invisible_squiggles.io.config_store import ConfigStore
from invisible_squiggles.tui.status_indicator import SquiggleIndicator

logger = logging.getLogger(__name__)

COMMAND_TOGGLE = "invisible-squiggles.toggle"

# [LAW:one-source-of-truth] Key→action mapping. on_key is the sole dispatcher.
KEYMAP: dict[str, str] = {
    "t": "toggle_squiggles",
    "r": "resync",
    "q": "quit",
}


class SquigglesApp(App):
    """Status-bar host for the toggle command."""

    TITLE = "invisible-squiggles"

    CSS = """
    #summary {
        padding: 1 2;
    }

    #status-bar {
        dock: bottom;
        height: 1;
        background: $panel;
    }

    #status-spacer {
        width: 1fr;
        color: $text-muted;
    }
    """

    def __init__(self, store: ConfigStore, preference_overrides: dict | None = None, **kwargs):
        super().__init__(**kwargs)
        self._store = store
        self._indicator = StatusIndicator()
        self._toggler = SquiggleToggler(
            store,
            self._indicator,
            notify=self.notify,
            preference_overrides=preference_overrides,
        )

    @property
    def indicator(self) -> StatusIndicator:
        return self._indicator

    @property
    def toggler(self) -> SquiggleToggler:
        return self._toggler

    def compose(self) -> ComposeResult:
        yield Static(id="summary")
        with Horizontal(id="status-bar"):
            yield Static(" t toggle  r resync  q quit", id="status-spacer")
            yield SquiggleIndicator(self._indicator, action="app.toggle_squiggles", id="indicator")

    def on_mount(self) -> None:
        self._sync()

    def _sync(self) -> None:
        try:
            self._toggler.sync_indicator()
        except Exception:
            logger.exception("Could not read settings at startup")
            self.notify("Could not read editor settings. Check logs for details.", severity="error")
        self._refresh_summary()

    def on_unmount(self) -> None:
        self._indicator.dispose()

    def _refresh_summary(self) -> None:
        path = getattr(self._store, "path", None)
        lines = [f"Settings: {path}" if path else "Settings: (in memory)"]
        try:
            prefs = self._toggler.preferences()
        except Exception:
            lines.append("Preferences: unavailable")
        else:
            names = ", ".join(s.value for s in prefs.hidden_severities) or "none"
            lines.append(f"Hiding: {names}")
            lines.append(f"Status messages: {'on' if prefs.show_status_message else 'off'}")
        lines.append(f"Command: {COMMAND_TOGGLE}")
        self.query_one("#summary", Static).update("\n".join(lines))

    async def on_key(self, event) -> None:
        action = KEYMAP.get(event.key)
        if action is None:
            return
        event.prevent_default()
        event.stop()
        await self.run_action(action)

    def action_toggle_squiggles(self) -> None:
        self._toggler.toggle()
        self._refresh_summary()

    def action_resync(self) -> None:
        self._sync()

