from dataclasses import dataclass
from typing import Optional


TOTAL_PLANES = 10
QTY_RUNWAYS = 1
QTY_HANGARS = 3
PLANE_INTERVAL = 1.0

# a plane lands and takes off in 1 second, rests for 2 seconds in a hangar
TIME_TO_LAND = 1.0
TIME_TO_REST = 2.0


@dataclass(frozen=True)
class RunConfig:
    """
    everything a run needs, fixed at startup.
    times are in seconds of simulated time.
    completion_capacity defaults to total_planes so completions never block.
    """
    total_planes: int = TOTAL_PLANES
    num_runways: int = QTY_RUNWAYS
    num_hangars: int = QTY_HANGARS
    plane_interval: float = PLANE_INTERVAL
    time_to_land: float = TIME_TO_LAND
    time_to_rest: float = TIME_TO_REST
    arrival_capacity: int = 1
    completion_capacity: Optional[int] = None
    abort_on_backpressure: bool = False
    realtime: bool = False
    realtime_factor: float = 1.0

    def __post_init__(self):
        if self.total_planes < 0:
            raise ValueError(f"total_planes must be >= 0, got {self.total_planes}")
        # the blocking runway re-acquire before takeoff needs at least one runway
        if self.num_runways < 1:
            raise ValueError(f"num_runways must be >= 1, got {self.num_runways}")
        if self.num_hangars < 0:
            raise ValueError(f"num_hangars must be >= 0, got {self.num_hangars}")
        for name in ("plane_interval", "time_to_land", "time_to_rest"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be >= 0, got {value}")
        if self.arrival_capacity < 1:
            raise ValueError(f"arrival_capacity must be >= 1, got {self.arrival_capacity}")
        if self.completion_capacity is None:
            object.__setattr__(self, "completion_capacity", max(self.total_planes, 1))
        elif self.completion_capacity < max(self.total_planes, 1):
            raise ValueError(
                f"completion_capacity must be >= total_planes "
                f"({self.completion_capacity} < {self.total_planes})"
            )
        if self.realtime_factor <= 0:
            raise ValueError(f"realtime_factor must be > 0, got {self.realtime_factor}")

    @property
    def min_service_time(self):
        """land, rest and take off with no waiting at all."""
        return 2 * self.time_to_land + self.time_to_rest
