"""Win/loss run tracking over a chronological result sequence."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

HOT_STREAK_MIN_WINS = 3


@dataclass(frozen=True)
class PlayerStreak:
    current_win_streak: int = 0
    current_loss_streak: int = 0
    longest_win_streak: int = 0
    longest_loss_streak: int = 0

    @property
    def is_hot_streak(self) -> bool:
        return self.current_win_streak >= HOT_STREAK_MIN_WINS


def calculate_streak(results: Sequence[bool]) -> PlayerStreak:
    """Summarise runs in a sequence of decided results (``True`` = win)."""
    win_run = 0
    loss_run = 0
    longest_win = 0
    longest_loss = 0

    for won in results:
        if won:
            win_run += 1
            loss_run = 0
            longest_win = max(longest_win, win_run)
        else:
            loss_run += 1
            win_run = 0
            longest_loss = max(longest_loss, loss_run)

    return PlayerStreak(
        current_win_streak=win_run,
        current_loss_streak=loss_run,
        longest_win_streak=longest_win,
        longest_loss_streak=longest_loss,
    )


def longest_win_run(results: Sequence[bool]) -> range:
    """Index range of the earliest longest run of wins (empty when there are no wins)."""
    best_start = 0
    best_length = 0
    run_start = 0
    run_length = 0

    for index, won in enumerate(results):
        if won:
            if run_length == 0:
                run_start = index
            run_length += 1
            if run_length > best_length:
                best_start = run_start
                best_length = run_length
        else:
            run_length = 0

    return range(best_start, best_start + best_length)


__all__ = ["HOT_STREAK_MIN_WINS", "PlayerStreak", "calculate_streak", "longest_win_run"]
