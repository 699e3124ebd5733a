"""Toggle command orchestration.

// [LAW:single-enforcer] SquiggleToggler.toggle() is the only writer of the override map.
// [LAW:locality-or-seam] Store, indicator and notifier are injected; nothing global.

Each invocation re-reads settings, computes the next override map with
core.squiggles, persists it in one write and only then updates the
indicator and notifies.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

import invisible_squiggles.app.preferences
import invisible_squiggles.core.squiggles
from invisible_squiggles.core.squiggles import DisplayState, Transition
from invisible_squiggles.core.status import StatusIndicator
from invisible_squiggles.io.config_store import ConfigStore

logger = logging.getLogger(__name__)

MESSAGE_TIMEOUT = 2.5
MSG_RESTORED = "Squiggles restored to previous visibility."
MSG_HIDDEN = "Selected squiggles are now transparent."
MSG_NOTHING_SELECTED = "No squiggle types are selected to hide."
MSG_FAILED = "An error occurred while toggling squiggle settings. Check logs for details."


class Notifier(Protocol):
    """Same shape as textual.app.App.notify, so an app's notify can be passed as-is."""

    def __call__(self, message: str, *, severity: str = ..., timeout: float | None = ...) -> None:
        ...


class Outcome(enum.Enum):
    TOGGLED = "toggled"
    NOTHING_SELECTED = "nothing_selected"
    FAILED = "failed"
    BUSY = "busy"


@dataclass(frozen=True)
class ToggleResult:
    outcome: Outcome
    transition: Optional[Transition] = None
    error: Optional[BaseException] = None

    @property
    def state(self) -> Optional[DisplayState]:
        return self.transition.after if self.transition is not None else None


def _silent(message: str, *, severity: str = "information", timeout: float | None = None) -> None:
    logger.info("%s: %s", severity, message)


class SquiggleToggler:
    """Runs the toggle command against a ConfigStore."""

    def __init__(
        self,
        store: ConfigStore,
        indicator: StatusIndicator,
        notify: Notifier | None = None,
        preference_overrides: dict | None = None,
    ):
        self._store = store
        self._indicator = indicator
        self._notify = notify or _silent
        self._preference_overrides = dict(preference_overrides or {})
        self._running = False

    @property
    def indicator(self) -> StatusIndicator:
        return self._indicator

    def preferences(self) -> invisible_squiggles.app.preferences.Preferences:
        return invisible_squiggles.app.preferences.load_preferences(
            self._store.read_settings(), self._preference_overrides
        )

    def current_state(self) -> DisplayState:
        """Display state for the currently targeted classes, read fresh."""
        keys = invisible_squiggles.core.squiggles.target_keys(self.preferences().hidden_severities)
        return invisible_squiggles.core.squiggles.display_state(self._store.read(), keys)

    def sync_indicator(self) -> DisplayState:
        """Set the indicator from a fresh read, using startup detection."""
        state = invisible_squiggles.core.squiggles.startup_state(self._store.read())
        self._indicator.set_state(state)
        return state

    def toggle(self) -> ToggleResult:
        if self._running:
            logger.debug("toggle already in progress, ignoring")
            return ToggleResult(Outcome.BUSY)
        self._running = True
        try:
            return self._toggle()
        finally:
            self._running = False

    def _toggle(self) -> ToggleResult:
        try:
            prefs = self.preferences()
            severities = prefs.hidden_severities
            if not severities:
                self._notify(MSG_NOTHING_SELECTED, severity="warning", timeout=MESSAGE_TIMEOUT)
                return ToggleResult(Outcome.NOTHING_SELECTED)

            transition = invisible_squiggles.core.squiggles.compute_toggle(
                self._store.read(), severities
            )
            self._store.write(transition.overrides)
        except Exception as e:
            logger.exception("Error toggling squiggle visibility")
            self._notify(MSG_FAILED, severity="error", timeout=None)
            return ToggleResult(Outcome.FAILED, error=e)

        logger.info(
            "squiggles %s -> %s (%s)",
            transition.before.value,
            transition.after.value,
            ", ".join(s.value for s in severities),
        )
        self._indicator.set_state(transition.after)
        if prefs.show_status_message:
            message = MSG_RESTORED if transition.after is DisplayState.VISIBLE else MSG_HIDDEN
            self._notify(message, severity="information", timeout=MESSAGE_TIMEOUT)
        return ToggleResult(Outcome.TOGGLED, transition=transition)
