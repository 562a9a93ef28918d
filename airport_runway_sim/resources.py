import logging
from collections import Counter

import simpy


logger = logging.getLogger(__name__)

DENIAL_REASONS = ("runway", "hangar", "backpressure")


class Permit:
    """
    one unit of capacity taken from a Pool.
    a permit from Pool.acquire() may still be waiting: yield permit.granted
    before relying on it. release() is idempotent and the permit releases
    itself when its with-block is left, whichever way that happens.
    """
    def __init__(self, pool, request):
        self.pool = pool
        self.request = request
        self.released = False

    @property
    def granted(self):
        return self.request

    @property
    def held(self):
        return self.request.triggered and not self.released

    def release(self):
        if self.released:
            return
        self.released = True
        if self.request.triggered:
            self.pool.resource.release(self.request)
            logger.debug("[%s] released, in use=%d", self.pool.name, self.pool.in_use)
        else:
            # still queued, just leave the line
            self.request.cancel()
            logger.debug("[%s] abandoned a pending acquire", self.pool.name)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.release()
        return False

    def __repr__(self):
        if self.released:
            state = "released"
        elif self.request.triggered:
            state = "held"
        else:
            state = "waiting"
        return f"Permit({self.pool.name}, {state})"


class Pool:
    """
    a counting semaphore over a simpy Resource.
    try_acquire() never waits, acquire() queues FIFO behind earlier waiters.
    a released unit goes to the head waiter before any later try_acquire()
    can see it.
    """
    def __init__(self, env, name, capacity):
        if capacity < 0:
            raise ValueError(f"capacity of {name} must be >= 0, got {capacity}")
        self.env = env
        self.name = name
        self.capacity = capacity
        # simpy refuses a zero capacity resource, such a pool just never grants
        self.resource = simpy.Resource(env, capacity=capacity) if capacity else None

        self.acquisitions = 0
        self.contentions = 0
        self.peak_in_use = 0

    @property
    def in_use(self):
        if self.resource is None:
            return 0
        return self.resource.count

    @property
    def available(self):
        return self.capacity - self.in_use

    @property
    def waiting(self):
        if self.resource is None:
            return 0
        return len(self.resource.queue)

    def try_acquire(self):
        if self.resource is None:
            return None
        request = self.resource.request()
        if not request.triggered:
            request.cancel()
            logger.debug("[%s] try_acquire failed, in use=%d", self.name, self.in_use)
            return None
        self._granted(request)
        return Permit(self, request)

    def acquire(self):
        if self.resource is None:
            raise ValueError(f"cannot wait on {self.name}, it has no capacity")
        request = self.resource.request()
        if request.triggered:
            self._granted(request)
        else:
            self.contentions += 1
            request.callbacks.append(self._granted)
            logger.debug("[%s] queued, waiting=%d", self.name, self.waiting)
        return Permit(self, request)

    def _granted(self, request):
        self.acquisitions += 1
        if self.in_use > self.peak_in_use:
            self.peak_in_use = self.in_use

    def __repr__(self):
        return f"Pool({self.name!r}, capacity={self.capacity}, in_use={self.in_use})"


class Airport:
    """the runways and hangars shared by every plane, and why planes were turned away."""
    def __init__(self, env, num_runways=1, num_hangars=3):
        self.env = env
        self.runways = Pool(env, "runway", num_runways)
        self.hangars = Pool(env, "hangar", num_hangars)
        self.denials = Counter({reason: 0 for reason in DENIAL_REASONS})

    def deny(self, plane, reason):
        self.denials[reason] += 1
        logger.info("%s denied at %.2f (%s)", plane, self.env.now, reason)
