"""Tests for the status indicator model."""

from invisible_squiggles.core.squiggles import DisplayState
from invisible_squiggles.core.status import StatusIndicator


def test_defaults_to_visible():
    indicator = StatusIndicator()
    assert indicator.state is DisplayState.VISIBLE
    assert indicator.label.startswith("Squiggles: ")
    assert indicator.tooltip == "Hide squiggles"


def test_set_hidden_and_visible_swap_label_and_tooltip():
    indicator = StatusIndicator()
    visible_label = indicator.label

    indicator.set_hidden()
    assert indicator.state is DisplayState.HIDDEN
    assert indicator.tooltip == "Show squiggles"
    assert indicator.label != visible_label

    indicator.set_visible()
    assert indicator.label == visible_label
    assert indicator.tooltip == "Hide squiggles"


def test_listeners_notified():
    indicator = StatusIndicator()
    seen = []
    indicator.subscribe(lambda ind: seen.append(ind.state))
    indicator.set_hidden()
    indicator.set_visible()
    assert seen == [DisplayState.HIDDEN, DisplayState.VISIBLE]


def test_dispose_stops_updates():
    indicator = StatusIndicator()
    seen = []
    indicator.subscribe(lambda ind: seen.append(ind.state))
    indicator.dispose()
    indicator.set_hidden()
    assert indicator.disposed
    assert indicator.state is DisplayState.VISIBLE
    assert seen == []
