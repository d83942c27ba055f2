"""Games menu entities."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class GameResult(BaseModel):
    game_type: str
    score: int = 0
    points: int = 0
    correct: int = 0
    total: int = 0
    played_at: datetime = Field(default_factory=datetime.now)


class GameStats(BaseModel):
    total_games_played: int = 0
    total_points: int = 0
    best_score: int = 0
    average_accuracy: float = 0.0
