"""
Tests for the throttled outbound queue
"""

import threading
import time

from tests.fixtures.fake_io import FakeClock
from twitch_chat.irc.models import OutboundCommand
from twitch_chat.irc.rate_limited_queue import RateLimitedQueue


class TestRateLimitedQueue:
    """Test FIFO order and the minimum dequeue interval"""

    def setup_method(self):
        self.clock = FakeClock()
        self.queue = RateLimitedQueue(1.75, clock=self.clock)

    def test_empty_queue_returns_none(self):
        assert self.queue.pop_ready() is None
        assert len(self.queue) == 0

    def test_first_dequeue_is_not_throttled(self):
        self.queue.enqueue_command("JOIN #chan")

        command = self.queue.pop_ready()

        assert command == OutboundCommand(raw="JOIN #chan")

    def test_second_dequeue_waits_for_interval(self):
        self.queue.enqueue_command("PONG :tmi.twitch.tv")
        self.queue.enqueue_command("JOIN #chan")
        assert self.queue.pop_ready().raw == "PONG :tmi.twitch.tv"

        self.clock.advance(1.5)
        assert self.queue.pop_ready() is None

        self.clock.advance(0.25)
        assert self.queue.pop_ready().raw == "JOIN #chan"

    def test_gap_between_consecutive_dequeues(self):
        for i in range(5):
            self.queue.enqueue_command(f"CMD {i}")
        dequeue_times = []
        while len(dequeue_times) < 5:
            if self.queue.pop_ready() is not None:
                dequeue_times.append(self.clock())
            self.clock.advance(0.25)

        gaps = [b - a for a, b in zip(dequeue_times, dequeue_times[1:])]
        assert all(gap >= 1.75 for gap in gaps)

    def test_fifo_order_is_preserved(self):
        raws = ["PRIVMSG #c :one", "PONG :x", "PRIVMSG #c :two", "JOIN #c"]
        for raw in raws:
            self.queue.enqueue_command(raw)

        popped = []
        for _ in raws:
            popped.append(self.queue.pop_ready().raw)
            self.clock.advance(2)

        assert popped == raws

    def test_enqueue_chat_message_formats_privmsg(self):
        command = self.queue.enqueue_chat_message("chan", "hello there")

        assert command.raw == "PRIVMSG #chan :hello there"
        assert command.is_privmsg is True
        assert command.body == "hello there"

    def test_enqueue_command_detects_privmsg(self):
        command = self.queue.enqueue_command("PRIVMSG #chan :hi")

        assert command.is_privmsg is True
        assert command.body == "hi"

    def test_clear_drops_pending_commands(self):
        self.queue.enqueue_command("A")
        self.queue.enqueue_command("B")

        assert self.queue.clear() == 2
        assert len(self.queue) == 0
        assert self.queue.snapshot() == []


class TestRateLimitedQueueBlocking:
    """Test wait_next with the real clock"""

    def test_wait_next_returns_none_when_stopped(self):
        queue = RateLimitedQueue(0.01)
        stop = threading.Event()
        stop.set()

        assert queue.wait_next(stop) is None

    def test_wake_interrupts_wait(self):
        queue = RateLimitedQueue(0.01)
        stop = threading.Event()
        result = []
        worker = threading.Thread(target=lambda: result.append(queue.wait_next(stop, poll_interval=5)))
        worker.start()

        time.sleep(0.05)
        stop.set()
        queue.wake()
        worker.join(2)

        assert not worker.is_alive()
        assert result == [None]

    def test_wait_next_respects_interval(self):
        queue = RateLimitedQueue(0.1)
        stop = threading.Event()
        queue.enqueue_command("A")
        queue.enqueue_command("B")

        first = queue.wait_next(stop)
        t0 = time.monotonic()
        second = queue.wait_next(stop)
        elapsed = time.monotonic() - t0

        assert (first.raw, second.raw) == ("A", "B")
        assert elapsed >= 0.09

    def test_wait_next_wakes_on_enqueue(self):
        queue = RateLimitedQueue(0.0)
        stop = threading.Event()
        result = []
        worker = threading.Thread(target=lambda: result.append(queue.wait_next(stop, poll_interval=5)))
        worker.start()

        time.sleep(0.05)
        queue.enqueue_command("PING")
        worker.join(2)

        assert result[0].raw == "PING"
