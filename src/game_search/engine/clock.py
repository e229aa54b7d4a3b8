"""Soft, cooperative wall-clock deadline for search loops."""

from __future__ import annotations

import time
from collections.abc import Callable


class DeadlineClock:
    """A start instant plus a duration, polled by search loops.

    探索ループが定期的に問い合わせる「締め切り時計」。

    - is_running は開始から duration が経過するまで True
    - 一時停止・再開はない（経過時間は実時間）
    - 一度期限切れになったら二度と True に戻らない
    - 1回の select_move() ごとに新しく作られ、手を返したら捨てられる
    """

    def __init__(
        self,
        duration_ms: float,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._timer = timer
        self.duration_ms = max(0.0, float(duration_ms))
        self.started = timer()
        self.deadline = self.started + self.duration_ms / 1000.0
        self._expired = False

    @property
    def is_running(self) -> bool:
        if self._expired:
            return False
        if self._timer() >= self.deadline:
            self._expired = True
            return False
        return True

    @property
    def elapsed_ms(self) -> float:
        return (self._timer() - self.started) * 1000.0

    @property
    def remaining_ms(self) -> float:
        return max(0.0, (self.deadline - self._timer()) * 1000.0)
