"""Chat panel — scrolling RichLog of conversation turns."""

from __future__ import annotations

import pyperclip
from rich.markup import escape
from textual.binding import Binding
from textual.widgets import RichLog

from moxie_companion.l1_entities.conversation import ConversationTurn

_SPEAKERS = {
    'user': '[bold cyan]You[/bold cyan]',
    'assistant': '[bold magenta]Moxie[/bold magenta]',
    'system': '[dim]System[/dim]',
}


class ChatPanel(RichLog):
    """Auto-scrolling conversation display using RichLog."""

    DEFAULT_CSS = """
    ChatPanel {
        height: 1fr;
        border: solid $primary;
        scrollbar-size: 1 1;
    }
    ChatPanel:focus {
        border: solid $accent;
    }
    """

    BINDINGS = [Binding('c', 'copy_last_reply', 'Copy', show=False)]

    def __init__(self, title: str = 'Chat', **kwargs) -> None:
        super().__init__(highlight=False, markup=True, wrap=True, auto_scroll=True, **kwargs)
        self.border_title = title
        self._last_reply: str = ''

    def append_turn(self, turn: ConversationTurn) -> None:
        stamp = turn.timestamp.strftime('%H:%M:%S')
        speaker = _SPEAKERS.get(turn.role, turn.role)
        self.write(f'[dim]\\[{stamp}][/dim] {speaker}: {escape(turn.content)}')
        if turn.role == 'assistant':
            self._last_reply = turn.content

    def show_turns(self, turns: list[ConversationTurn]) -> None:
        """Replace the log with *turns*."""
        self.clear()
        self._last_reply = ''
        for turn in turns:
            self.append_turn(turn)

    def append_notice(self, text: str) -> None:
        self.write(f'[red]{escape(text)}[/red]')

    def action_copy_last_reply(self) -> None:
        """Copy the most recent assistant reply to the system clipboard."""
        if not self._last_reply:
            self.app.notify('No reply to copy', severity='warning', timeout=2)
            return
        pyperclip.copy(self._last_reply)
        self.app.notify('Reply copied', timeout=2)
