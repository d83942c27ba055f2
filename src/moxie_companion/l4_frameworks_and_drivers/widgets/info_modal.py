"""Read-only Markdown overlays: help and the base shared with the usage dashboard."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Markdown, Static


class InfoModal(ModalScreen[None]):
    """Titled, scrollable Markdown page. Subclasses set TITLE_TEXT and may add close keys."""

    DEFAULT_CSS = """
    InfoModal {
        align: center middle;
    }

    InfoModal > VerticalScroll {
        width: 70%;
        max-width: 110;
        height: auto;
        max-height: 85%;
        background: $surface;
        border: thick $primary;
        padding: 1 2;
    }

    InfoModal .info-title {
        text-style: bold;
        margin-bottom: 1;
    }

    InfoModal .info-body {
        height: auto;
    }

    InfoModal .info-hint {
        text-align: center;
        color: $text-muted;
        margin-top: 1;
    }
    """

    BINDINGS = [('escape', 'dismiss', 'Close')]

    TITLE_TEXT = 'Info'
    CLOSE_HINT = 'Press Escape to close'

    def __init__(self, body_md: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self.body_md = body_md

    def compose(self) -> ComposeResult:
        with VerticalScroll():
            yield Static(self.TITLE_TEXT, classes='info-title')
            yield Markdown(self.body_md, classes='info-body')
            yield Static(self.CLOSE_HINT, classes='info-hint')


class HelpModal(InfoModal):
    """Provider summary and keybinding reference; F1 toggles it closed."""

    BINDINGS = [('f1', 'dismiss', 'Close')]

    TITLE_TEXT = 'Help'
    CLOSE_HINT = 'Press Escape or F1 to close'
