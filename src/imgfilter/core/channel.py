"""线程间传递完成事件的通道。

语义与 Go channel 保持一致：

* ``capacity == 0`` 为无缓冲通道，``send`` 阻塞直到接收方取走该元素；
* ``capacity > 0`` 为缓冲通道，缓冲未满时 ``send`` 立即返回；
* 关闭后不可再发送，重复关闭抛出 ChannelClosedError；
* 迭代在通道关闭且缓冲区取空后结束。
"""

from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Generic, Iterator, TypeVar

from imgfilter.core.exceptions import ChannelClosedError

T = TypeVar("T")


class CompletionChannel(Generic[T]):
    """多生产者、单消费者、单一关闭者的通道。"""

    def __init__(self, capacity: int = 0) -> None:
        if capacity < 0:
            raise ValueError("capacity must be >= 0")
        self.capacity = capacity
        self._buffer: Deque[T] = deque()
        self._cond = threading.Condition()
        self._closed = False
        self._sent = 0
        self._received = 0

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    def __len__(self) -> int:
        with self._cond:
            return len(self._buffer)

    def send(self, item: T) -> None:
        """发送一个元素；无缓冲通道会等待接收方取走它。"""

        limit = max(self.capacity, 1)
        with self._cond:
            while True:
                if self._closed:
                    raise ChannelClosedError("send on closed channel")
                if len(self._buffer) < limit:
                    break
                self._cond.wait()

            self._buffer.append(item)
            self._sent += 1
            ticket = self._sent
            self._cond.notify_all()

            if self.capacity == 0:
                while self._received < ticket:
                    self._cond.wait()

    def receive(self) -> T:
        """取出一个元素；通道已关闭且为空时抛出 ChannelClosedError。"""

        with self._cond:
            while not self._buffer:
                if self._closed:
                    raise ChannelClosedError("receive on closed and drained channel")
                self._cond.wait()
            item = self._buffer.popleft()
            self._received += 1
            self._cond.notify_all()
            return item

    def close(self) -> None:
        with self._cond:
            if self._closed:
                raise ChannelClosedError("close of closed channel")
            self._closed = True
            self._cond.notify_all()

    def __iter__(self) -> Iterator[T]:
        while True:
            try:
                yield self.receive()
            except ChannelClosedError:
                return
