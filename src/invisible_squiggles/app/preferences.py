"""User preferences schema and loading.

// [LAW:one-source-of-truth] All known preference keys and their defaults live in SCHEMA.
"""

import logging
from dataclasses import dataclass

from invisible_squiggles.core.squiggles import Severity

logger = logging.getLogger(__name__)

NAMESPACE = "invisibleSquiggles"

SCHEMA: dict[str, bool] = {
    f"{NAMESPACE}.hideErrors": True,
    f"{NAMESPACE}.hideWarnings": True,
    f"{NAMESPACE}.hideInfo": True,
    f"{NAMESPACE}.showStatusBarMessage": True,
}

_SEVERITY_KEYS = {
    Severity.ERROR: f"{NAMESPACE}.hideErrors",
    Severity.WARNING: f"{NAMESPACE}.hideWarnings",
    Severity.INFO: f"{NAMESPACE}.hideInfo",
}


@dataclass(frozen=True)
class Preferences:
    hide_errors: bool = True
    hide_warnings: bool = True
    hide_info: bool = True
    show_status_message: bool = True

    @property
    def hidden_severities(self) -> tuple[Severity, ...]:
        """Classes marked for hiding, in Severity declaration order."""
        flags = {
            Severity.ERROR: self.hide_errors,
            Severity.WARNING: self.hide_warnings,
            Severity.INFO: self.hide_info,
        }
        return tuple(s for s in Severity if flags[s])


def _as_bool(key: str, value, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    logger.warning("ignoring non-boolean %s=%r, using %s", key, value, default)
    return default


def load_preferences(settings: dict, overrides: dict | None = None) -> Preferences:
    """Build Preferences from a settings snapshot.

    Schema defaults, then settings-file values, then `overrides` (same keys).
    """
    merged: dict[str, bool] = {}
    for key, default in SCHEMA.items():
        merged[key] = _as_bool(key, settings[key], default) if key in settings else default
    if overrides:
        merged.update({k: bool(v) for k, v in overrides.items() if k in SCHEMA})
    return Preferences(
        hide_errors=merged[_SEVERITY_KEYS[Severity.ERROR]],
        hide_warnings=merged[_SEVERITY_KEYS[Severity.WARNING]],
        hide_info=merged[_SEVERITY_KEYS[Severity.INFO]],
        show_status_message=merged[f"{NAMESPACE}.showStatusBarMessage"],
    )


def severity_key(severity: Severity) -> str:
    """Preference key that controls hiding of `severity`."""
    return _SEVERITY_KEYS[severity]


def overrides_from_flags(
    keep_errors: bool = False,
    keep_warnings: bool = False,
    keep_info: bool = False,
    quiet: bool = False,
) -> dict[str, bool]:
    """Translate CLI flags into preference overrides (only the ones set)."""
    flags = {
        _SEVERITY_KEYS[Severity.ERROR]: keep_errors,
        _SEVERITY_KEYS[Severity.WARNING]: keep_warnings,
        _SEVERITY_KEYS[Severity.INFO]: keep_info,
        f"{NAMESPACE}.showStatusBarMessage": quiet,
    }
    return {key: False for key, set_ in flags.items() if set_}
