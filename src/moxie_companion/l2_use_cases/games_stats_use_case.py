"""Use case: aggregate statistics for the games menu."""

from __future__ import annotations

from moxie_companion.l1_entities.games import GameResult, GameStats
from moxie_companion.l2_use_cases.ports.game_result_repository import GameResultRepository


def compute_game_stats(results: list[GameResult]) -> GameStats:
    """Totals over all results. Accuracy averages only games that had questions."""
    if not results:
        return GameStats()
    accuracies = [r.correct / r.total for r in results if r.total > 0]
    return GameStats(
        total_games_played=len(results),
        total_points=sum(r.points for r in results),
        best_score=max(r.score for r in results),
        average_accuracy=sum(accuracies) / len(accuracies) if accuracies else 0.0,
    )


class GamesStatsUseCase:
    def __init__(self, repository: GameResultRepository) -> None:
        self._repo = repository

    def record(self, result: GameResult) -> GameStats:
        self._repo.append(result)
        return self.stats()

    def stats(self) -> GameStats:
        return compute_game_stats(self._repo.load_all())
