"""Tests for the runway/hangar pools and their permits."""

import pytest
import simpy

from airport_runway_sim.resources import DENIAL_REASONS, Airport, Pool


class TestTryAcquire:

    def test_grants_up_to_capacity(self):
        env = simpy.Environment()
        pool = Pool(env, "hangar", 2)

        first = pool.try_acquire()
        second = pool.try_acquire()

        assert first is not None and first.held
        assert second is not None and second.held
        assert pool.try_acquire() is None
        assert pool.in_use == 2
        assert pool.available == 0

    def test_failed_attempt_leaves_no_waiter(self):
        env = simpy.Environment()
        pool = Pool(env, "runway", 1)
        pool.try_acquire()

        assert pool.try_acquire() is None
        assert pool.waiting == 0
        assert pool.contentions == 0

    def test_release_returns_capacity(self):
        env = simpy.Environment()
        pool = Pool(env, "runway", 1)
        permit = pool.try_acquire()

        permit.release()

        assert pool.in_use == 0
        assert pool.try_acquire() is not None

    def test_release_is_idempotent(self):
        env = simpy.Environment()
        pool = Pool(env, "hangar", 2)
        permit = pool.try_acquire()
        pool.try_acquire()

        permit.release()
        permit.release()

        assert pool.in_use == 1
        assert permit.released
        assert not permit.held

    def test_zero_capacity_never_grants(self):
        env = simpy.Environment()
        pool = Pool(env, "hangar", 0)

        assert pool.try_acquire() is None
        assert pool.in_use == 0
        assert pool.waiting == 0

    def test_negative_capacity_rejected(self):
        env = simpy.Environment()
        with pytest.raises(ValueError):
            Pool(env, "hangar", -1)


class TestAcquire:

    def test_immediate_when_free(self):
        env = simpy.Environment()
        pool = Pool(env, "runway", 1)

        permit = pool.acquire()

        assert permit.held
        assert pool.contentions == 0

    def test_waiters_are_served_fifo(self):
        env = simpy.Environment()
        pool = Pool(env, "runway", 1)
        held = pool.try_acquire()
        served = []

        def waiter(name):
            with pool.acquire() as permit:
                yield permit.granted
                served.append((name, env.now))
                yield env.timeout(1)

        def releaser():
            yield env.timeout(2)
            held.release()

        env.process(waiter("a"))
        env.process(waiter("b"))
        env.process(releaser())
        env.run()

        assert served == [("a", 2), ("b", 3)]
        assert pool.contentions == 2
        assert pool.in_use == 0

    def test_released_unit_goes_to_waiter_before_try_acquire(self):
        env = simpy.Environment()
        pool = Pool(env, "runway", 1)
        held = pool.try_acquire()
        waiting = pool.acquire()

        held.release()

        assert pool.try_acquire() is None
        env.run()
        assert waiting.held

    def test_releasing_pending_permit_leaves_the_queue(self):
        env = simpy.Environment()
        pool = Pool(env, "runway", 1)
        held = pool.try_acquire()
        pending = pool.acquire()
        assert pool.waiting == 1

        pending.release()
        held.release()
        env.run()

        assert pool.waiting == 0
        assert pool.in_use == 0
        assert not pending.held

    def test_zero_capacity_cannot_be_waited_on(self):
        env = simpy.Environment()
        pool = Pool(env, "hangar", 0)
        with pytest.raises(ValueError):
            pool.acquire()


class TestPermitScope:

    def test_with_block_releases_on_error(self):
        env = simpy.Environment()
        pool = Pool(env, "hangar", 1)

        with pytest.raises(RuntimeError):
            with pool.try_acquire():
                assert pool.in_use == 1
                raise RuntimeError("boom")

        assert pool.in_use == 0

    def test_interrupted_process_releases(self):
        env = simpy.Environment()
        pool = Pool(env, "runway", 1)

        def holder():
            with pool.try_acquire():
                try:
                    yield env.timeout(10)
                except simpy.Interrupt:
                    return

        def interrupter(process):
            yield env.timeout(1)
            process.interrupt()

        process = env.process(holder())
        env.process(interrupter(process))
        env.run(until=2)

        assert not process.is_alive
        assert pool.in_use == 0


class TestStats:

    def test_peak_in_use_tracks_highest_concurrency(self):
        env = simpy.Environment()
        pool = Pool(env, "hangar", 3)

        first = pool.try_acquire()
        second = pool.try_acquire()
        first.release()
        second.release()
        pool.try_acquire()

        assert pool.peak_in_use == 2
        assert pool.acquisitions == 3

    def test_peak_counts_granted_waiters(self):
        env = simpy.Environment()
        pool = Pool(env, "runway", 1)
        held = pool.try_acquire()
        pool.acquire()
        held.release()
        env.run()

        assert pool.acquisitions == 2
        assert pool.peak_in_use == 1


class TestAirport:

    def test_pools_sized_from_arguments(self):
        env = simpy.Environment()
        airport = Airport(env, num_runways=2, num_hangars=5)

        assert airport.runways.capacity == 2
        assert airport.hangars.capacity == 5

    def test_denials_tallied_per_reason(self):
        env = simpy.Environment()
        airport = Airport(env)

        airport.deny("Plane 0", "hangar")
        airport.deny("Plane 1", "hangar")
        airport.deny("Plane 2", "runway")

        assert set(airport.denials) == set(DENIAL_REASONS)
        assert airport.denials["hangar"] == 2
        assert airport.denials["runway"] == 1
        assert airport.denials["backpressure"] == 0
