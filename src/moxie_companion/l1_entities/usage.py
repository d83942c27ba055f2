"""Usage accounting entities — one record per AI call, plus dashboard aggregates."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from moxie_companion.l1_entities.pricing import estimate_cost


class UsageRecord(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    child_id: str = ''
    feature: str = 'chat'  # chat | game | story | learning
    model: str = ''
    tokens: int = 0
    cost: float = 0.0
    timestamp: datetime = Field(default_factory=datetime.now)
    duration_seconds: int = 0
    session_id: str = ''
    successful: bool = True
    error_message: str = ''

    @classmethod
    def create(
        cls,
        child_id: str,
        feature: str,
        model: str,
        tokens: int,
        **kwargs,
    ) -> UsageRecord:
        """Build a record whose cost comes from the cost estimator."""
        return cls(
            child_id=child_id,
            feature=feature,
            model=model,
            tokens=tokens,
            cost=estimate_cost(tokens, model),
            **kwargs,
        )


class UsageSummary(BaseModel):
    today_cost: float = 0.0
    week_cost: float = 0.0
    month_cost: float = 0.0
    total_tokens: int = 0
    total_sessions: int = 0
    most_used_model: str = ''
    most_active_child: str = ''
