"""Squiggle override transitions. Pure data in, pure data out.

// [LAW:one-source-of-truth] Attribute keys, sentinel and backup key live here.
// [LAW:dataflow-not-control-flow] compute_toggle() always returns a full new map;
//   callers decide whether to persist it.

Only the nine editor{Error,Warning,Info}.{border,background,foreground}
keys and BACKUP_KEY are ever touched; every other key in the override map
is copied through unchanged.
"""

from __future__ import annotations

import enum
import json
import logging
from dataclasses import dataclass, field
from typing import Iterable, Mapping

logger = logging.getLogger(__name__)

TRANSPARENT_COLOR = "#00000000"
BACKUP_KEY = "invisibleSquiggles.originalColors"
ATTRIBUTES = ("border", "background", "foreground")


class Severity(enum.Enum):
    ERROR = "Error"
    WARNING = "Warning"
    INFO = "Info"


class DisplayState(enum.Enum):
    VISIBLE = "visible"
    HIDDEN = "hidden"


def keys_for(severity: Severity) -> tuple[str, ...]:
    """Theme attribute keys of one severity class."""
    return tuple(f"editor{severity.value}.{attr}" for attr in ATTRIBUTES)


ALL_KEYS: tuple[str, ...] = tuple(k for s in Severity for k in keys_for(s))


def target_keys(severities: Iterable[Severity]) -> tuple[str, ...]:
    """Keys for the given classes, in Severity declaration order."""
    wanted = set(severities)
    return tuple(k for s in Severity if s in wanted for k in keys_for(s))


def _is_transparent(value) -> bool:
    return isinstance(value, str) and value.lower() == TRANSPARENT_COLOR


def is_hidden(overrides: Mapping[str, object], keys: Iterable[str]) -> bool:
    """True iff every key is present and set to the transparent sentinel.

    An empty key set is not hidden: nothing is being suppressed.
    """
    checked = False
    for key in keys:
        if not _is_transparent(overrides.get(key)):
            return False
        checked = True
    return checked


def display_state(overrides: Mapping[str, object], keys: Iterable[str]) -> DisplayState:
    return DisplayState.HIDDEN if is_hidden(overrides, keys) else DisplayState.VISIBLE


def parse_backup(raw) -> dict[str, str]:
    """Decode the saved-colors blob. Anything unreadable is an empty backup."""
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        logger.debug("ignoring unreadable saved colors %r", raw)
        return {}
    if not isinstance(data, dict):
        logger.debug("ignoring non-object saved colors %r", raw)
        return {}
    return {k: v for k, v in data.items() if isinstance(k, str) and isinstance(v, str)}


def serialize_backup(saved: Mapping[str, str]) -> str:
    return json.dumps(dict(saved), separators=(",", ":"))


def hide(overrides: Mapping[str, str], keys: Iterable[str]) -> dict[str, str]:
    """Back up current values of `keys`, then set them all transparent."""
    keys = tuple(keys)
    result = dict(overrides)
    saved = {k: overrides[k] for k in keys if k in overrides}
    result[BACKUP_KEY] = serialize_backup(saved)
    for key in keys:
        result[key] = TRANSPARENT_COLOR
    return result


def restore(overrides: Mapping[str, str], keys: Iterable[str]) -> dict[str, str]:
    """Put back backed-up values of `keys`; keys with no backup are removed."""
    result = dict(overrides)
    saved = parse_backup(overrides.get(BACKUP_KEY))
    for key in keys:
        if key in saved:
            result[key] = saved[key]
        else:
            result.pop(key, None)
    result.pop(BACKUP_KEY, None)
    return result


@dataclass(frozen=True)
class Transition:
    """Outcome of one toggle computation."""

    before: DisplayState
    after: DisplayState
    overrides: dict[str, str] = field(default_factory=dict)
    keys: tuple[str, ...] = ()


def compute_toggle(overrides: Mapping[str, str], severities: Iterable[Severity]) -> Transition:
    """Next override map for a toggle of the given severity classes."""
    keys = target_keys(severities)
    if is_hidden(overrides, keys):
        return Transition(DisplayState.HIDDEN, DisplayState.VISIBLE, restore(overrides, keys), keys)
    return Transition(DisplayState.VISIBLE, DisplayState.HIDDEN, hide(overrides, keys), keys)


def startup_state(overrides: Mapping[str, object]) -> DisplayState:
    """Initial indicator state: checks all three classes regardless of preferences."""
    return display_state(overrides, ALL_KEYS)
