"""Provider modal — pick provider, model and API key for the chat gateway."""

from __future__ import annotations

from dataclasses import dataclass

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, OptionList, Static
from textual.widgets.option_list import Option

from moxie_companion.l2_use_cases import provider_registry


@dataclass(frozen=True)
class ProviderChoice:
    provider: str
    model: str = ''
    api_key: str = ''


class ProviderModal(ModalScreen[ProviderChoice | None]):
    """Modal listing every provider. Enter in an input → ProviderChoice, Escape → None.

    A blank model means "use the provider default"; a blank key keeps the current one.
    """

    DEFAULT_CSS = """
    ProviderModal {
        align: center middle;
    }

    ProviderModal > Vertical {
        width: 72;
        height: auto;
        background: $surface;
        border: thick $primary;
        padding: 1 2;
    }

    ProviderModal > Vertical > #provider-title {
        text-style: bold;
        margin-bottom: 1;
    }

    ProviderModal > Vertical > #provider-list {
        height: auto;
        max-height: 8;
    }

    ProviderModal > Vertical > #provider-info {
        color: $text-muted;
        margin: 1 0;
    }

    ProviderModal > Vertical > #provider-hint {
        color: $text-muted;
        margin-top: 1;
        text-align: center;
    }
    """

    BINDINGS = [('escape', 'cancel', 'Cancel')]

    def __init__(self, current_provider: str, current_model: str = '', **kwargs) -> None:
        super().__init__(**kwargs)
        self._current_provider = current_provider
        self._current_model = current_model
        self._selected = current_provider

    def compose(self) -> ComposeResult:
        options = [
            Option(f'{p.display_name}{"" if p.requires_api_key else "  (free, local)"}', id=p.id)
            for p in provider_registry.PROVIDERS
        ]
        with Vertical():
            yield Static('AI provider', id='provider-title')
            yield OptionList(*options, id='provider-list')
            yield Static('', id='provider-info')
            yield Input(value=self._current_model, id='model-input')
            yield Input(placeholder='API key (leave blank to keep current)', password=True, id='key-input')
            yield Static('↑/↓ choose · Enter to confirm · Escape to cancel', id='provider-hint')

    def on_mount(self) -> None:
        option_list = self.query_one('#provider-list', OptionList)
        ids = provider_registry.list_providers()
        if self._current_provider in ids:
            option_list.highlighted = ids.index(self._current_provider)
        self._show_provider(self._current_provider)

    def _show_provider(self, provider_id: str) -> None:
        self._selected = provider_id
        models = ', '.join(provider_registry.models(provider_id))
        self.query_one('#provider-info', Static).update(f'{provider_registry.info(provider_id)}\nModels: {models}')
        self.query_one('#model-input', Input).placeholder = (
            f'Model (default: {provider_registry.default_model(provider_id)})'
        )
        self.query_one('#key-input', Input).disabled = not provider_registry.requires_api_key(provider_id)

    def on_option_list_option_highlighted(self, event: OptionList.OptionHighlighted) -> None:
        if event.option.id is not None:
            self._show_provider(event.option.id)

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if event.option.id is not None:
            self._show_provider(event.option.id)
        self.query_one('#model-input', Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        model = self.query_one('#model-input', Input).value.strip()
        if model and model not in provider_registry.models(self._selected):
            self.notify(f'{model} is not offered by {self._selected}', severity='warning', timeout=3)
            return
        self.dismiss(
            ProviderChoice(
                provider=self._selected,
                model=model,
                api_key=self.query_one('#key-input', Input).value.strip(),
            )
        )

    def action_cancel(self) -> None:
        self.dismiss(None)
