"""Static catalog of supported LLM providers — free options first, then paid."""

from __future__ import annotations

from moxie_companion.l1_entities.provider import ANTHROPIC, DEEPSEEK, GEMINI, GROQ, OLLAMA, OPENAI, Provider

PROVIDERS: tuple[Provider, ...] = (
    Provider(
        id=OLLAMA,
        display_name='Ollama',
        requires_api_key=False,
        default_model='llama3.2',
        models=('llama3.2', 'llama3.1', 'mistral', 'phi3', 'gemma2', 'qwen2.5'),
        info='100% FREE - Runs locally on your computer. Install from https://ollama.ai',
    ),
    Provider(
        id=GROQ,
        display_name='GroqCloud',
        requires_api_key=True,
        default_model='llama-3.3-70b-versatile',
        models=('llama-3.3-70b-versatile', 'llama-3.1-8b-instant', 'mixtral-8x7b-32768', 'gemma2-9b-it'),
        info='FREE tier: 14,400 requests/day. Ultra-fast inference. Get key at https://console.groq.com',
    ),
    Provider(
        id=GEMINI,
        display_name='Gemini',
        requires_api_key=True,
        default_model='gemini-1.5-flash',
        models=('gemini-2.0-flash-exp', 'gemini-1.5-pro', 'gemini-1.5-flash'),
        info='FREE tier: 15 requests/minute. Get key at https://aistudio.google.com/apikey',
    ),
    Provider(
        id=DEEPSEEK,
        display_name='DeepSeek',
        requires_api_key=True,
        default_model='deepseek-chat',
        models=('deepseek-chat', 'deepseek-coder', 'deepseek-reasoner'),
        info='Very affordable pricing. Get key at https://platform.deepseek.com',
    ),
    Provider(
        id=OPENAI,
        display_name='OpenAI',
        requires_api_key=True,
        default_model='gpt-4o',
        models=('gpt-4o', 'gpt-4-turbo', 'gpt-4', 'gpt-3.5-turbo'),
        info='Industry standard. Pay-as-you-go. Get key at https://platform.openai.com/api-keys',
    ),
    Provider(
        id=ANTHROPIC,
        display_name='Anthropic',
        requires_api_key=True,
        default_model='claude-3-5-sonnet-20241022',
        models=(
            'claude-3-5-sonnet-20241022',
            'claude-3-opus-20240229',
            'claude-3-sonnet-20240229',
            'claude-3-haiku-20240307',
        ),
        info='Claude models. Pay-as-you-go. Get key at https://console.anthropic.com',
    ),
)

_BY_ID: dict[str, Provider] = {p.id: p for p in PROVIDERS}


def list_providers() -> list[str]:
    return [p.id for p in PROVIDERS]


def get(provider_id: str) -> Provider | None:
    return _BY_ID.get(provider_id)


def is_supported(provider_id: str) -> bool:
    return provider_id in _BY_ID


def requires_api_key(provider_id: str) -> bool:
    """Only the local Ollama runtime works without a key; unknown ids are assumed to need one."""
    return provider_id != OLLAMA


def default_model(provider_id: str) -> str:
    provider = _BY_ID.get(provider_id)
    return provider.default_model if provider else ''


def info(provider_id: str) -> str:
    provider = _BY_ID.get(provider_id)
    return provider.info if provider else ''


def models(provider_id: str) -> tuple[str, ...]:
    provider = _BY_ID.get(provider_id)
    return provider.models if provider else ()
