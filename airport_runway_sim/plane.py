from dataclasses import dataclass

from airport_runway_sim.config import TIME_TO_LAND, TIME_TO_REST


@dataclass(frozen=True)
class Plane:
    """
    a plane that wants to land, rest in a hangar and take off again.
    created_at is the environment time the plane showed up at and is the
    basis for its service time.
    """
    number: int
    created_at: float
    time_to_land: float = TIME_TO_LAND
    time_to_rest: float = TIME_TO_REST

    @classmethod
    def create(cls, env, number, time_to_land=TIME_TO_LAND, time_to_rest=TIME_TO_REST):
        return cls(number, env.now, time_to_land, time_to_rest)

    def service_time(self, now):
        return now - self.created_at

    def __str__(self):
        return f"Plane {self.number}"
