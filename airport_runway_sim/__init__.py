"""Runway and hangar contention between a stream of arriving planes, on simpy."""

import logging

from airport_runway_sim.airport import (
    ArrivalBackpressureError,
    CompletionSendError,
    Report,
    print_report,
    run_airport,
)
from airport_runway_sim.channels import Channel, ChannelClosedError, Sender, channel
from airport_runway_sim.config import RunConfig
from airport_runway_sim.logging_config import configure_from_env, disable_logging, enable_console_logging
from airport_runway_sim.plane import Plane
from airport_runway_sim.resources import Airport, Permit, Pool

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Airport",
    "ArrivalBackpressureError",
    "Channel",
    "ChannelClosedError",
    "CompletionSendError",
    "Permit",
    "Plane",
    "Pool",
    "Report",
    "RunConfig",
    "Sender",
    "channel",
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "print_report",
    "run_airport",
]
