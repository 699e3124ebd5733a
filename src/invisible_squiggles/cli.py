"""CLI entry point for invisible-squiggles."""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console

import invisible_squiggles.app.preferences
import invisible_squiggles.core.squiggles
import invisible_squiggles.io.logging_setup
from invisible_squiggles.app.toggle_engine import Outcome, SquiggleToggler
from invisible_squiggles.core.status import StatusIndicator
from invisible_squiggles.io.config_store import JsonSettingsStore
from invisible_squiggles.tui.app import SquigglesApp

logger = logging.getLogger(__name__)

_SEVERITY_STYLES = {
    "information": "green",
    "warning": "yellow",
    "error": "bold red",
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="invisible-squiggles",
        description="Toggle editor diagnostic squiggles by rewriting color overrides",
    )
    parser.add_argument(
        "command",
        nargs="?",
        choices=("toggle", "status", "tui"),
        default="tui",
        help="toggle once, print status, or run the status-bar TUI (default: tui)",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="Path to the editor's settings.json (env: INVISIBLE_SQUIGGLES_SETTINGS)",
    )
    parser.add_argument("--keep-errors", action="store_true", help="Never hide error squiggles")
    parser.add_argument("--keep-warnings", action="store_true", help="Never hide warning squiggles")
    parser.add_argument("--keep-info", action="store_true", help="Never hide info squiggles")
    parser.add_argument("--quiet", action="store_true", help="Suppress the transient status message")
    return parser


def _console_notifier(console: Console):
    def notify(message: str, *, severity: str = "information", timeout: float | None = None) -> None:
        console.print(message, style=_SEVERITY_STYLES.get(severity, ""))

    return notify


def _print_status(console: Console, toggler: SquiggleToggler, store: JsonSettingsStore) -> None:
    overrides = store.read()
    console.print(f"Settings: {store.path}")
    startup = invisible_squiggles.core.squiggles.startup_state(overrides)
    console.print(f"All squiggles: {startup.value}")
    console.print(f"Selected squiggles: {toggler.current_state().value}")
    toggler.indicator.set_state(startup)
    console.print(f"{toggler.indicator.label}  ({toggler.indicator.tooltip})")


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    log_runtime = invisible_squiggles.io.logging_setup.configure()
    logger.info("logging configured level=%s file=%s", log_runtime.level_name, log_runtime.file_path)

    store = JsonSettingsStore(args.settings)
    overrides = invisible_squiggles.app.preferences.overrides_from_flags(
        keep_errors=args.keep_errors,
        keep_warnings=args.keep_warnings,
        keep_info=args.keep_info,
        quiet=args.quiet,
    )

    if args.command == "tui":
        invisible_squiggles.io.logging_setup.silence_stderr()
        SquigglesApp(store, preference_overrides=overrides).run()
        return 0

    console = Console()
    indicator = StatusIndicator()
    toggler = SquiggleToggler(
        store,
        indicator,
        notify=_console_notifier(console),
        preference_overrides=overrides,
    )
    try:
        if args.command == "status":
            try:
                _print_status(console, toggler, store)
            except Exception as e:
                logger.debug("status failed", exc_info=True)
                console.print(f"Could not read settings: {e}", style="bold red")
                return 1
            return 0

        result = toggler.toggle()
        if result.outcome is Outcome.TOGGLED:
            console.print(indicator.label)
        return 1 if result.outcome is Outcome.FAILED else 0
    finally:
        indicator.dispose()


if __name__ == "__main__":
    sys.exit(main())
