import logging
import statistics
import sys
from contextlib import ExitStack
from dataclasses import dataclass

import simpy
import simpy.rt

from airport_runway_sim.channels import channel
from airport_runway_sim.config import RunConfig
from airport_runway_sim.logging_config import configure_from_env
from airport_runway_sim.plane import Plane
from airport_runway_sim.resources import Airport


logger = logging.getLogger(__name__)


class ArrivalBackpressureError(RuntimeError):
    pass


class CompletionSendError(RuntimeError):
    pass


@dataclass(frozen=True)
class Report:
    """
    what came out of one run. service times are in milliseconds and in the
    order the planes took off. denials counts turned away planes per reason,
    peak_in_use the most runways and hangars held at once, contentions how
    often a plane had to queue for one.
    """
    total_planes: int
    service_times_ms: tuple
    elapsed_ms: int
    denials: dict
    peak_in_use: dict
    contentions: dict

    @property
    def accepted(self):
        return len(self.service_times_ms)

    @property
    def denied(self):
        return self.total_planes - self.accepted

    @property
    def average_service_time_ms(self):
        if not self.service_times_ms:
            return None
        return statistics.mean(self.service_times_ms)


def plane_generator(env, config, airport, arrivals):
    """
    sends total_planes planes, one per tick. the first tick fires right away,
    every later one plane_interval after the previous. a plane that finds the
    arrival channel full is dropped, unless abort_on_backpressure is set.
    """
    dropped = 0
    with arrivals:
        for i in range(config.total_planes):
            if i:
                yield env.timeout(config.plane_interval)
            plane = Plane.create(env, i, config.time_to_land, config.time_to_rest)
            logger.info("sending %s at %.2f", plane, env.now)
            if arrivals.try_send(plane):
                continue
            if config.abort_on_backpressure:
                raise ArrivalBackpressureError(f"{plane} could not be queued at {env.now:.2f}")
            dropped += 1
            airport.deny(plane, "backpressure")
    return dropped


def dispatcher(env, arrivals, airport, departures):
    # one landing process per arrival, nothing kept around afterwards
    dispatched = 0
    with departures:
        while True:
            plane = yield arrivals.recv()
            if plane is None:
                break
            env.process(land_plane(env, plane, airport, departures.clone()))
            dispatched += 1
    logger.debug("dispatcher done after %d plane(s)", dispatched)
    return dispatched


def land_plane(env, plane, airport, departures):
    """
    admit, land, rest, wait for the runway, take off, report.

    admission only takes what is free right now: no runway or no hangar and
    the plane is sent away. the runway is given back while resting and is
    claimed again before the hangar is released, so a resting plane never
    sits on the runway and a departing one always has it before making room.
    """
    with departures, ExitStack() as permits:
        runway = airport.runways.try_acquire()
        if runway is None:
            airport.deny(plane, "runway")
            return False
        permits.enter_context(runway)

        hangar = airport.hangars.try_acquire()
        if hangar is None:
            airport.deny(plane, "hangar")
            return False
        permits.enter_context(hangar)

        logger.info("%s landing at %.2f", plane, env.now)
        yield env.timeout(plane.time_to_land)
        runway.release()

        logger.info("%s resting at %.2f", plane, env.now)
        yield env.timeout(plane.time_to_rest)

        runway = permits.enter_context(airport.runways.acquire())
        yield runway.granted
        hangar.release()

        logger.info("%s taking off at %.2f", plane, env.now)
        yield env.timeout(plane.time_to_land)
        runway.release()

        if not departures.try_send(plane):
            raise CompletionSendError(
                f"{plane} took off at {env.now:.2f} but the completion channel is full"
            )
    return True


def collector(env, config, airport, departures):
    started_at = env.now
    service_times = []
    while True:
        plane = yield departures.recv()
        if plane is None:
            break
        service_time = round(plane.service_time(env.now) * 1000)
        logger.info("received %s, service time: %d ms", plane, service_time)
        service_times.append(service_time)

    return Report(
        total_planes=config.total_planes,
        service_times_ms=tuple(service_times),
        elapsed_ms=round((env.now - started_at) * 1000),
        denials=dict(airport.denials),
        peak_in_use={
            "runway": airport.runways.peak_in_use,
            "hangar": airport.hangars.peak_in_use,
        },
        contentions={
            "runway": airport.runways.contentions,
            "hangar": airport.hangars.contentions,
        },
    )


def make_environment(config):
    if config.realtime:
        # non-strict: a late step shifts the rest of the schedule instead of failing
        return simpy.rt.RealtimeEnvironment(factor=config.realtime_factor, strict=False)
    return simpy.Environment()


def run_airport(config=None):
    if config is None:
        config = RunConfig()

    env = make_environment(config)
    airport = Airport(env, num_runways=config.num_runways, num_hangars=config.num_hangars)

    arrivals_tx, arrivals_rx = channel(env, config.arrival_capacity, name="arrivals")
    departures_tx, departures_rx = channel(env, config.completion_capacity, name="departures")

    env.process(plane_generator(env, config, airport, arrivals_tx))
    env.process(dispatcher(env, arrivals_rx, airport, departures_tx))
    collecting = env.process(collector(env, config, airport, departures_rx))

    # the collector finishes once the last landing process has closed its sender
    return env.run(until=collecting)


def format_ms(value):
    if value is None:
        return "n/a"
    return f"{value:.0f} ms"


def print_report(report, file=None):
    file = file or sys.stdout
    print(file=file)
    print("--------------------------------", file=file)
    print(f"accepted planes: {report.accepted}", file=file)
    print(f"denied planes: {report.denied}", file=file)
    reasons = ", ".join(f"{reason}={count}" for reason, count in report.denials.items())
    print(f"denied by: {reasons}", file=file)
    print(f"planes that queued for the runway: {report.contentions['runway']}", file=file)
    print(f"service times: {list(report.service_times_ms)}", file=file)
    print(f"avg service time: {format_ms(report.average_service_time_ms)}", file=file)
    print(f"time to service all planes: {format_ms(report.elapsed_ms)}", file=file)
    print("--------------------------------", file=file)


def main():
    configure_from_env(default_level="INFO")
    # 10 planes, one every second, 1 runway and 3 hangars
    report = run_airport(RunConfig())
    print_report(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
