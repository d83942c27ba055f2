"""L1 entity: a catalog entry describing one LLM provider."""

from __future__ import annotations

from dataclasses import dataclass

OLLAMA = 'ollama'
GROQ = 'groq'
GEMINI = 'gemini'
DEEPSEEK = 'deepseek'
OPENAI = 'openai'
ANTHROPIC = 'anthropic'


@dataclass(frozen=True)
class Provider:
    id: str
    display_name: str
    requires_api_key: bool
    default_model: str
    models: tuple[str, ...]
    info: str

    def __post_init__(self) -> None:
        if not self.default_model or self.default_model not in self.models:
            raise ValueError(f'Default model {self.default_model!r} not in model list for {self.id}')
