"""Cost estimator — the single home of per-model pricing constants."""

from __future__ import annotations

# First matching row wins; order matters (e.g. 'claude-3-opus' before generic claude rows).
_PRICE_PER_1K: tuple[tuple[tuple[str, ...], float], ...] = (
    (('gpt-4',), 0.030),
    (('gpt-3.5',), 0.002),
    (('claude-3-opus',), 0.015),
    (('claude-3-sonnet', 'claude-3-5'), 0.003),
    (('deepseek',), 0.0002),
    (('llama', 'ollama', 'groq'), 0.0),
    (('gemini',), 0.0),
)


def price_per_1k(model: str) -> float:
    """USD per 1000 tokens for *model* (0.0 when unknown)."""
    key = model.lower()
    for needles, price in _PRICE_PER_1K:
        if any(n in key for n in needles):
            return price
    return 0.0


def estimate_cost(tokens: int, model: str) -> float:
    """Estimated USD cost of *tokens* on *model*. Total and never negative."""
    return max(tokens, 0) / 1000.0 * price_per_1k(model)
