"""Status indicator model.

Two-state label/tooltip pair mirroring DisplayState. Hosts render it (the
Textual widget, the CLI printer) and subscribe to changes.
"""

from typing import Callable

from invisible_squiggles.core.squiggles import DisplayState

ICON_VISIBLE = "\U0001f441"  # 👁
ICON_HIDDEN = "\u25e1"  # ◡

_LABELS = {
    DisplayState.VISIBLE: (f"Squiggles: {ICON_VISIBLE}", "Hide squiggles"),
    DisplayState.HIDDEN: (f"Squiggles: {ICON_HIDDEN}", "Show squiggles"),
}


class StatusIndicator:
    """Label and tooltip reflecting whether squiggles are shown."""

    __slots__ = ("state", "_listeners", "_disposed")

    def __init__(self, state: DisplayState = DisplayState.VISIBLE):
        self.state = state
        self._listeners: list[Callable[["StatusIndicator"], None]] = []
        self._disposed = False

    @property
    def label(self) -> str:
        return _LABELS[self.state][0]

    @property
    def tooltip(self) -> str:
        return _LABELS[self.state][1]

    @property
    def disposed(self) -> bool:
        return self._disposed

    def subscribe(self, listener: Callable[["StatusIndicator"], None]) -> None:
        self._listeners.append(listener)

    def set_state(self, state: DisplayState) -> None:
        if self._disposed:
            return
        self.state = state
        for listener in list(self._listeners):
            listener(self)

    def set_visible(self) -> None:
        self.set_state(DisplayState.VISIBLE)

    def set_hidden(self) -> None:
        self.set_state(DisplayState.HIDDEN)

    def dispose(self) -> None:
        self._listeners.clear()
        self._disposed = True
