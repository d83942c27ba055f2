"""Configuration Pydantic models — pure schema, no infrastructure defaults."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ChatConfig(BaseModel):
    provider: str
    model: str = ''  # empty → provider default
    temperature: float
    system_prompt: str = ''
    child_id: str = ''


class StorageConfig(BaseModel):
    directory: str | None = None  # None → platform user data dir


class AppConfig(BaseModel):
    chat: ChatConfig
    storage: StorageConfig = Field(default_factory=StorageConfig)
