"""
bounded queues between processes, with a close signal.

a channel closes once every sender handle on it has been closed. after that
the receiver drains whatever is left and then gets None from recv(), which
is how consumers know no more items can ever arrive.
"""
import logging

import simpy


logger = logging.getLogger(__name__)


class ChannelClosedError(RuntimeError):
    pass


class Channel(simpy.Store):
    def __init__(self, env, capacity=1, name="channel"):
        super().__init__(env, capacity=capacity)
        self.name = name
        self.senders = 0
        self.closed = False

    def recv(self):
        """event that resolves to the next item, or to None once closed and empty."""
        return self.get()

    def _do_get(self, event):
        if self.items:
            event.succeed(self.items.pop(0))
        elif self.closed:
            event.succeed(None)
        # once closed every pending receiver can be answered
        return self.closed

    def _add_sender(self):
        if self.closed:
            raise ChannelClosedError(f"{self.name} is already closed")
        self.senders += 1

    def _drop_sender(self):
        self.senders -= 1
        if self.senders == 0:
            self.closed = True
            logger.debug("[%s] closed with %d item(s) left", self.name, len(self.items))
            self._trigger_get(None)

    def __repr__(self):
        return (
            f"Channel({self.name!r}, capacity={self.capacity}, "
            f"items={len(self.items)}, senders={self.senders})"
        )


class Sender:
    """
    one handle on a channel. clone() makes another, close() drops this one.
    works as a context manager so a process closes its handle on any exit.
    """
    def __init__(self, channel):
        channel._add_sender()
        self.channel = channel
        self.closed = False

    def send(self, item):
        """put event, waits while the channel is full."""
        self._check(item)
        return self.channel.put(item)

    def try_send(self, item):
        """put without waiting. False if the channel is full."""
        self._check(item)
        put = self.channel.put(item)
        if put.triggered:
            return True
        put.cancel()
        return False

    def clone(self):
        if self.closed:
            raise ChannelClosedError(f"cannot clone a closed sender of {self.channel.name}")
        return Sender(self.channel)

    def close(self):
        if self.closed:
            return
        self.closed = True
        self.channel._drop_sender()

    def _check(self, item):
        if self.closed:
            raise ChannelClosedError(f"sender of {self.channel.name} is closed")
        if item is None:
            # None is what receivers get once the channel is closed
            raise ValueError("cannot send None over a channel")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False


def channel(env, capacity=1, name="channel"):
    """a new channel and its first sender."""
    receiver = Channel(env, capacity=capacity, name=name)
    return Sender(receiver), receiver
