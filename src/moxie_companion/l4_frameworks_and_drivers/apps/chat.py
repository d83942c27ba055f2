"""ChatApp — Textual shell around the chat controller and provider gateway."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from textual.app import App as TextualApp
from textual.app import ComposeResult
from textual.binding import Binding
from textual.widgets import Input, Static

from moxie_companion.l1_entities.gateway_events import (
    ErrorOccurred,
    GatewayEvent,
    ProcessingChanged,
    ProviderChanged,
    ResponseReceived,
    TokensUsed,
)
from moxie_companion.l1_entities.pricing import estimate_cost
from moxie_companion.l2_use_cases import provider_registry
from moxie_companion.l2_use_cases.usage_use_case import UsageLog
from moxie_companion.l3_interface_adapters.controllers.chat_controller import ChatController
from moxie_companion.l4_frameworks_and_drivers.logging_setup import setup_file_logging
from moxie_companion.l4_frameworks_and_drivers.messages import (
    AssistantReply,
    ChatError,
    ProcessingState,
    ProviderSwitched,
    TokenUsage,
)
from moxie_companion.l4_frameworks_and_drivers.widgets.chat_panel import ChatPanel
from moxie_companion.l4_frameworks_and_drivers.widgets.info_modal import HelpModal
from moxie_companion.l4_frameworks_and_drivers.widgets.provider_modal import ProviderChoice, ProviderModal
from moxie_companion.l4_frameworks_and_drivers.widgets.status_bar import StatusBar
from moxie_companion.l4_frameworks_and_drivers.widgets.usage_modal import UsageModal

log = logging.getLogger('moxie.app')

HINTS = r'\[^P] provider  \[^U] usage  \[^R] retry  \[F1] help  \[^Q] quit'


class ChatApp(TextualApp):
    """Chat with Moxie through whichever provider is selected."""

    ENABLE_COMMAND_PALETTE = False

    CSS = """
    #header {
        dock: top;
        height: 1;
        background: $primary;
        color: $text;
        text-style: bold;
    }

    #chat-input {
        dock: bottom;
        margin-bottom: 1;
    }
    """

    BINDINGS = [
        Binding('ctrl+q', 'quit_app', 'Quit', priority=True),
        Binding('ctrl+p', 'choose_provider', 'Provider', priority=True),
        Binding('ctrl+u', 'show_usage', 'Usage', priority=True),
        Binding('ctrl+r', 'regenerate', 'Retry', priority=True),
        Binding('ctrl+l', 'clear_chat', 'Clear', priority=True),
        Binding('ctrl+e', 'export_chat', 'Export', priority=True),
        Binding('f1', 'show_help', 'Help', priority=True),
    ]

    def __init__(
        self,
        chat: ChatController,
        data_dir: Path,
        usage_log: UsageLog | None = None,
        api_key_lookup: Callable[[str], str] | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._chat = chat
        self._gateway = chat.gateway
        self._data_dir = data_dir
        self._usage_log = usage_log
        self._api_key_lookup = api_key_lookup

        setup_file_logging(data_dir)

        # Registered after the controller, so turns are already updated when these arrive.
        self._gateway.subscribe(self._on_gateway_event)

    def compose(self) -> ComposeResult:
        yield Static('  Moxie Companion | chat', id='header')
        yield ChatPanel(id='chat-panel')
        yield Input(placeholder='Say something to Moxie…', id='chat-input')
        yield StatusBar(id='status-bar')

    def on_mount(self) -> None:
        bar = self.query_one('#status-bar', StatusBar)
        bar.keybinding_hints = HINTS
        self._refresh_provider()
        self.query_one('#chat-panel', ChatPanel).show_turns(self._chat.turns)
        self.query_one('#chat-input', Input).focus()

    def _refresh_provider(self) -> None:
        bar = self.query_one('#status-bar', StatusBar)
        bar.provider = self._gateway.current_provider
        bar.model = self._chat.effective_model

    # --- Gateway bridge ---

    def _on_gateway_event(self, event: GatewayEvent) -> None:
        if isinstance(event, ResponseReceived):
            self.post_message(AssistantReply(event.text))
        elif isinstance(event, ErrorOccurred):
            self.post_message(ChatError(event.message))
        elif isinstance(event, ProcessingChanged):
            self.post_message(ProcessingState(event.is_processing))
        elif isinstance(event, ProviderChanged):
            self.post_message(ProviderSwitched(event.provider))
        elif isinstance(event, TokensUsed):
            cost = estimate_cost(event.input_tokens + event.output_tokens, event.model)
            self.post_message(TokenUsage(event.input_tokens, event.output_tokens, cost))

    # --- Message Handlers ---

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != 'chat-input':
            return
        if not event.value.strip():
            return
        if self._gateway.is_processing:
            self.notify('Moxie is still thinking — please wait', severity='warning', timeout=3)
            return
        event.input.value = ''
        self._chat.send_message(event.value)
        panel = self.query_one('#chat-panel', ChatPanel)
        panel.append_turn(self._chat.turns[-1])

    def on_assistant_reply(self, message: AssistantReply) -> None:
        panel = self.query_one('#chat-panel', ChatPanel)
        panel.append_turn(self._chat.turns[-1])

    def on_chat_error(self, message: ChatError) -> None:
        self.query_one('#chat-panel', ChatPanel).append_notice(message.error)
        self.notify(message.error, severity='error', timeout=8)

    def on_processing_state(self, message: ProcessingState) -> None:
        self.query_one('#status-bar', StatusBar).processing = message.active

    def on_provider_switched(self, message: ProviderSwitched) -> None:
        self._refresh_provider()

    def on_token_usage(self, message: TokenUsage) -> None:
        bar = self.query_one('#status-bar', StatusBar)
        bar.input_tokens = message.input_tokens
        bar.output_tokens = message.output_tokens
        bar.last_cost = message.cost
        bar.session_cost = self._chat.session_cost

    # --- Actions ---

    def action_choose_provider(self) -> None:
        self.push_screen(
            ProviderModal(current_provider=self._gateway.current_provider, current_model=self._chat.model),
            callback=self._on_provider_choice,
        )

    def _on_provider_choice(self, choice: ProviderChoice | None) -> None:
        if choice is None:
            return
        previous = self._gateway.current_provider
        if choice.api_key:
            self._gateway.set_api_key(choice.api_key)
        elif choice.provider != previous and self._api_key_lookup is not None:
            self._gateway.set_api_key(self._api_key_lookup(choice.provider))
        self._gateway.set_provider(choice.provider)
        self._chat.select_model(choice.model)
        self._refresh_provider()
        if provider_registry.requires_api_key(choice.provider) and not self._gateway.api_key:
            self.notify(f'No API key for {choice.provider} yet', severity='warning', timeout=5)

    def action_show_usage(self) -> None:
        if self._usage_log is None:
            self.notify('Usage tracking is off', timeout=3)
            return
        self.push_screen(UsageModal(self._usage_log.summary(), self._usage_log.records()))

    def action_regenerate(self) -> None:
        if self._gateway.is_processing:
            self.notify('Moxie is still thinking — please wait', severity='warning', timeout=3)
            return
        if not self._chat.regenerate_last_response():
            self.notify('Nothing to retry yet', timeout=3)
            return
        self.query_one('#chat-panel', ChatPanel).show_turns(self._chat.turns)

    def action_clear_chat(self) -> None:
        if self._gateway.is_processing:
            self.notify('Moxie is still thinking — please wait', severity='warning', timeout=3)
            return
        self._chat.clear()
        self.query_one('#chat-panel', ChatPanel).show_turns([])

    def action_export_chat(self) -> None:
        if not self._chat.turns:
            self.notify('Nothing to export yet', timeout=3)
            return
        stamp = datetime.now().strftime('%Y-%m-%d_%H%M%S')
        path = self._chat.export_json(self._data_dir / 'chats' / f'chat_{stamp}.json')
        self.notify(f'Saved {path}', timeout=5)

    def action_show_help(self) -> None:
        if isinstance(self.screen, HelpModal):
            self.screen.dismiss()
            return

        provider = self._gateway.current_provider
        lines = [
            f'**Provider:** {provider} ({self._chat.effective_model})\n',
            f'{self._gateway.provider_info(provider)}\n',
            '',
            '### Status Bar',
            '| Indicator | Meaning |',
            '|-----------|---------|',
            '| `○ Ready` `⟳ Thinking…` | Whether a request is in flight |',
            '| `tok IN→OUT ~$X` | Tokens and estimated cost of the last reply |',
            '| `session $X` | Estimated spend this session |',
            '',
            '### Keybindings',
            '| Key | Action |',
            '|-----|--------|',
            '| `Enter` | Send message |',
            '| `Ctrl+P` | Choose provider, model and API key |',
            '| `Ctrl+U` | Usage and cost |',
            '| `Ctrl+R` | Regenerate last reply |',
            '| `Ctrl+L` | Clear conversation |',
            '| `Ctrl+E` | Export conversation as JSON |',
            '| `c` | Copy last reply (chat panel focused) |',
            '| `F1` | Toggle this help |',
            '| `Ctrl+Q` | Quit |',
        ]
        self.push_screen(HelpModal(body_md='\n'.join(lines)))

    async def action_quit_app(self) -> None:
        await self._gateway.aclose()
        self.exit()
