"""Executable Textual app that hosts the line input engine."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, replace
from typing import Any, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use line_input.adapters.textual.app"
    ) from exc

from line_input.adapters.system_clipboard import SystemClipboard
from line_input.buffer import ClipboardPort, EditMode, InMemoryClipboard, InputMirror
from line_input.dispatch.dispatcher import CommandDispatcher, create_dispatcher
from line_input.runtime import telemetry
from line_input.runtime.config import EngineConfig

from .controller import TextualInputAdapter, TextualUIHooks

APP_LOGGER = "line_input.textual"


def render_mirror(mirror: InputMirror) -> Text:
    """Draw the line with the selection reversed and the cursor underlined."""

    # Trailing space gives the cursor a cell to sit on at end of line.
    line = Text(mirror.text.replace("\t", " ") + " ")
    if mirror.selection is not None:
        start, end = mirror.selection
        line.stylize("reverse", start, end)
    if mirror.focused:
        style = "underline" if mirror.mode is EditMode.INSERT else "bold reverse"
        line.stylize(style, mirror.cursor, mirror.cursor + 1)
    return line


@dataclass
class UIState:
    input_text: str = ""
    status_text: str = ""


class LineInputApp(App[None]):
    """Minimal Textual UI embedding a single line input."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#input-view {
		height: 3;
		border: round $accent;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        *,
        text: str = "",
        clipboard: ClipboardPort | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        super().__init__()
        self._state = UIState()
        self._initial_text = text
        self._clipboard = clipboard
        self._config = config
        self.dispatcher: CommandDispatcher | None = None
        self.adapter: TextualInputAdapter | None = None
        self._input_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._input_widget = Static("", id="input-view")
        yield self._input_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    async def on_mount(self) -> None:
        self.dispatcher = create_dispatcher(
            self._initial_text,
            clipboard=self._clipboard,
            config=self._config,
            name="demo",
        )
        hooks = TextualUIHooks(
            update_input=self._update_input,
            update_status=self._update_status,
            handle_event=self._handle_event,
            log=self._log_line,
        )
        self.adapter = TextualInputAdapter(self.dispatcher, hooks)
        self.adapter.focus()

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        result = self.adapter.handle_textual_key(
            event.key, character=event.character, printable=event.is_printable
        )
        if result.consumed:
            event.stop()
            event.prevent_default()

    async def on_paste(self, event: events.Paste) -> None:
        if not self.adapter:
            return
        self.adapter.handle_textual_paste(event.text)
        event.stop()

    async def on_app_focus(self, _event: events.AppFocus) -> None:
        if self.adapter:
            self.adapter.focus()

    async def on_app_blur(self, _event: events.AppBlur) -> None:
        if self.adapter:
            self.adapter.blur()

    def _update_input(self, mirror: InputMirror) -> None:
        self._state.input_text = mirror.text
        if self._input_widget:
            self._input_widget.update(render_mirror(mirror))

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(self._status_line(status))

    def _status_line(self, status: str) -> str:
        if not self.dispatcher:
            return status
        buffer = self.dispatcher.buffer
        mode = buffer.mode().value.upper()
        return f"{mode}  col {buffer.cursor_offset()}  {status}".rstrip()

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name == "clipboard.error":
            self.notify(f"Clipboard unavailable: {payload}", severity="warning")
        elif name == "input.mode":
            self._update_status(name)

    def _log_line(self, line: str) -> None:
        telemetry.record_event(
            "textual.trace", level="debug", data={"line": line}, logger_name=APP_LOGGER
        )


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the line input Textual demo.")
    parser.add_argument(
        "--text",
        default=telemetry.env("DEMO_TEXT", "") or "",
        help="Initial contents of the input line",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Start in overwrite mode instead of insert mode",
    )
    parser.add_argument(
        "--no-system-clipboard",
        action="store_true",
        help="Use an in-process clipboard instead of the desktop one",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "quiet"),
        default=telemetry.env("LOG_PRESET", "production"),
        help="telelog preset; console output would draw over the UI "
        "(default: production)",
    )
    return parser.parse_args(argv)


def _build_clipboard(use_system: bool) -> ClipboardPort:
    if not use_system:
        return InMemoryClipboard()
    return SystemClipboard()


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    config = EngineConfig.from_env()
    if args.overwrite:
        config = replace(config, start_mode=EditMode.OVERWRITE)
    app = LineInputApp(
        text=args.text,
        clipboard=_build_clipboard(not args.no_system_clipboard),
        config=config,
    )
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
