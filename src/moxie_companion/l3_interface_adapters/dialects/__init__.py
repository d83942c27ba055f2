"""Provider wire dialects and the provider-id → dialect table."""

from __future__ import annotations

from moxie_companion.l1_entities.errors import UnsupportedProviderError
from moxie_companion.l1_entities.provider import ANTHROPIC, DEEPSEEK, GEMINI, GROQ, OLLAMA, OPENAI
from moxie_companion.l3_interface_adapters.dialects.anthropic import AnthropicDialect
from moxie_companion.l3_interface_adapters.dialects.base import Dialect
from moxie_companion.l3_interface_adapters.dialects.gemini import GeminiDialect
from moxie_companion.l3_interface_adapters.dialects.ollama import DEFAULT_HOST, OllamaDialect
from moxie_companion.l3_interface_adapters.dialects.openai_compat import OpenAICompatDialect


def build_dialect_table(ollama_host: str = DEFAULT_HOST) -> dict[str, Dialect]:
    openai_compat = OpenAICompatDialect()
    return {
        OPENAI: openai_compat,
        DEEPSEEK: openai_compat,
        GROQ: openai_compat,
        ANTHROPIC: AnthropicDialect(),
        GEMINI: GeminiDialect(),
        OLLAMA: OllamaDialect(ollama_host),
    }


def dialect_for(provider_id: str, table: dict[str, Dialect] | None = None) -> Dialect:
    dialect = (table if table is not None else build_dialect_table()).get(provider_id)
    if dialect is None:
        raise UnsupportedProviderError(provider_id)
    return dialect


__all__ = [
    'AnthropicDialect',
    'Dialect',
    'GeminiDialect',
    'OllamaDialect',
    'OpenAICompatDialect',
    'build_dialect_table',
    'dialect_for',
]
