"""Status bar widget for the squiggle indicator.

Renders a core.status.StatusIndicator and dispatches the toggle action on
click, like a Chip with state-driven styling.
"""

from textual.widgets import Static

from invisible_squiggles.core.squiggles import DisplayState
from invisible_squiggles.core.status import StatusIndicator


class SquiggleIndicator(Static):
    """Clickable label mirroring a StatusIndicator."""

    ALLOW_SELECT = False
    DEFAULT_CSS = """
    SquiggleIndicator {
        width: auto;
        height: 1;
        padding: 0 1;
        text-style: bold;
        background: $accent;
        color: $text;
    }

    SquiggleIndicator:hover {
        background: $primary;
    }

    SquiggleIndicator.-hidden {
        background: $surface-lighten-1;
        color: $text-muted;
    }

    SquiggleIndicator.-hidden:hover {
        background: $surface-lighten-2;
        color: $text;
    }
    """

    def __init__(self, model: StatusIndicator, *, action: str | None = None, **kwargs):
        super().__init__(model.label, **kwargs)
        self._model = model
        self._action = action
        model.subscribe(self._on_model_change)
        self._apply(model)

    @property
    def model(self) -> StatusIndicator:
        return self._model

    def _apply(self, model: StatusIndicator) -> None:
        self.update(model.label)
        self.tooltip = model.tooltip
        self.set_class(model.state is DisplayState.HIDDEN, "-hidden")

    def _on_model_change(self, model: StatusIndicator) -> None:
        self._apply(model)

    async def on_click(self, event) -> None:
        if self._action:
            await self.run_action(self._action)
