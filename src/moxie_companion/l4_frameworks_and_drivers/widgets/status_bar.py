"""Status bar — bottom bar showing provider, model, request state and token spend."""

from __future__ import annotations

from rich.cells import cell_len
from textual.reactive import reactive
from textual.widgets import Static


def format_cost(cost: float) -> str:
    return f'${cost:.4f}' if cost < 1 else f'${cost:.2f}'


class StatusBar(Static):
    """Bottom status bar with provider/model, processing indicator, and keybinding hints."""

    DEFAULT_CSS = """
    StatusBar {
        dock: bottom;
        height: auto;
        background: $surface;
        color: $text;
        padding: 0 1;
        overflow: hidden hidden;
    }
    """

    provider: reactive[str] = reactive('')
    model: reactive[str] = reactive('')
    processing: reactive[bool] = reactive(False)
    input_tokens: reactive[int] = reactive(-1)
    output_tokens: reactive[int] = reactive(-1)
    last_cost: reactive[float] = reactive(0.0)
    session_cost: reactive[float] = reactive(0.0)
    keybinding_hints: reactive[str] = reactive('')

    def render(self) -> str:
        status_icon = '⟳ Thinking…' if self.processing else '○ Ready'
        left_parts = [status_icon]
        if self.provider:
            left_parts.append(f'{self.provider}:{self.model}' if self.model else self.provider)
        if self.input_tokens >= 0 and self.output_tokens >= 0:
            left_parts.append(f'tok {self.input_tokens}→{self.output_tokens} ~{format_cost(self.last_cost)}')
        if self.session_cost > 0:
            left_parts.append(f'session {format_cost(self.session_cost)}')
        left = ' │ '.join(left_parts)

        hints = self.keybinding_hints
        if hints:
            content_width = (self.size.width or 80) - 2
            gap = content_width - cell_len(left) - cell_len(hints.replace(r'\[', '['))
            if gap >= 2:
                left = left + ' ' * gap + hints
        return left
