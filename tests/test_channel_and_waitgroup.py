"""测试通道与等待组的同步语义。"""

from __future__ import annotations

import threading

import pytest

from imgfilter.core.channel import CompletionChannel
from imgfilter.core.exceptions import ChannelClosedError
from imgfilter.core.sync import WaitGroup


def test_unbuffered_send_blocks_until_received() -> None:
    channel: CompletionChannel[str] = CompletionChannel()
    delivered = threading.Event()

    def sender() -> None:
        channel.send("a.png")
        delivered.set()

    thread = threading.Thread(target=sender)
    thread.start()

    # 没有接收方时发送方必须停在 send 上。
    assert not delivered.wait(0.2)

    assert channel.receive() == "a.png"
    assert delivered.wait(2)
    thread.join(2)


def test_buffered_send_never_blocks_within_capacity() -> None:
    channel: CompletionChannel[int] = CompletionChannel(capacity=3)
    for value in range(3):
        channel.send(value)

    assert len(channel) == 3
    channel.close()
    assert list(channel) == [0, 1, 2]


def test_iteration_stops_after_close_and_drain() -> None:
    channel: CompletionChannel[str] = CompletionChannel(capacity=2)
    channel.send("x")
    channel.close()

    assert channel.closed
    assert list(channel) == ["x"]
    with pytest.raises(ChannelClosedError):
        channel.receive()


def test_close_twice_and_send_after_close_raise() -> None:
    channel: CompletionChannel[str] = CompletionChannel()
    channel.close()

    with pytest.raises(ChannelClosedError):
        channel.close()
    with pytest.raises(ChannelClosedError):
        channel.send("late")


def test_negative_capacity_is_rejected() -> None:
    with pytest.raises(ValueError):
        CompletionChannel(capacity=-1)


def test_many_producers_single_consumer() -> None:
    channel: CompletionChannel[int] = CompletionChannel()
    wg = WaitGroup()

    for value in range(20):
        wg.add(1)

        def produce(v: int = value) -> None:
            try:
                channel.send(v)
            finally:
                wg.done()

        threading.Thread(target=produce).start()

    def close_when_done() -> None:
        wg.wait()
        channel.close()

    threading.Thread(target=close_when_done).start()

    assert sorted(channel) == list(range(20))


def test_waitgroup_wait_returns_when_counter_reaches_zero() -> None:
    wg = WaitGroup()
    wg.add(2)
    assert not wg.wait(timeout=0.05)

    wg.done()
    assert wg.count == 1
    wg.done()
    assert wg.wait(timeout=1)


def test_waitgroup_rejects_negative_counter() -> None:
    wg = WaitGroup()
    with pytest.raises(ValueError):
        wg.done()
