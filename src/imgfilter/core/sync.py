"""计数等待组，对应 Go 的 sync.WaitGroup。"""

from __future__ import annotations

import threading
from typing import Optional


class WaitGroup:
    """计数器归零时唤醒所有等待者。"""

    def __init__(self) -> None:
        self._count = 0
        self._cond = threading.Condition()

    @property
    def count(self) -> int:
        with self._cond:
            return self._count

    def add(self, delta: int = 1) -> None:
        with self._cond:
            if self._count + delta < 0:
                raise ValueError("negative WaitGroup counter")
            self._count += delta
            if self._count == 0:
                self._cond.notify_all()

    def done(self) -> None:
        self.add(-1)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """阻塞直到计数归零；超时返回 False。"""

        with self._cond:
            return self._cond.wait_for(lambda: self._count == 0, timeout)
