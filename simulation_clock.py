# simulation_clock.py
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Optional

from config import config
from physics_utils import as_utc, days_since_j2000, julian_date

@dataclass(frozen=True)
class SimulationClock:
    """Simulated date, time scale and pause flag as an immutable value.

    The scene owns the current clock and replaces it every frame; the orbital
    evaluator only ever sees the concrete `date` it is handed. All transitions
    return a new clock.

    Attributes:
        date (datetime): Current simulated instant (UTC).
        time_scale (float): Simulated days per `FRAMES_PER_SIM_DAY` frames. Negative
            values run time backwards.
        paused (bool): When True, `advance()` leaves the date unchanged.
    """
    date: datetime
    time_scale: float = config.Time.DEFAULT_TIME_SCALE
    paused: bool = False

    def __post_init__(self):
        object.__setattr__(self, 'date', as_utc(self.date))

    @classmethod
    def now(cls) -> 'SimulationClock':
        return cls(datetime.now(timezone.utc))

    @property
    def days_since_j2000(self) -> float:
        return days_since_j2000(self.date)

    @property
    def julian_date(self) -> float:
        return julian_date(self.date)

    def advance(self, frames: int = 1) -> 'SimulationClock':
        """Moves the date on by `time_scale / FRAMES_PER_SIM_DAY` days per frame unless paused."""
        if self.paused or frames == 0:
            return self
        delta_days = self.time_scale * (1.0 / config.Time.FRAMES_PER_SIM_DAY) * frames
        return replace(self, date=self.date + timedelta(days=delta_days))

    def pause(self) -> 'SimulationClock':
        return replace(self, paused=True)

    def play(self) -> 'SimulationClock':
        """Resumes forward in time, keeping the current speed."""
        time_scale = self.time_scale
        if time_scale < 0:
            time_scale *= -1
        if time_scale == 0:
            time_scale = 1.0
        return replace(self, time_scale=time_scale, paused=False)

    def reverse(self) -> 'SimulationClock':
        """Resumes backwards in time, keeping the current speed."""
        time_scale = self.time_scale
        if time_scale > 0:
            time_scale *= -1
        if time_scale == 0:
            time_scale = -1.0
        return replace(self, time_scale=time_scale, paused=False)

    def live(self, now: Optional[datetime] = None) -> 'SimulationClock':
        """Jumps to the wall-clock time at real-time speed."""
        if now is None:
            now = datetime.now(timezone.utc)
        return SimulationClock(now, config.Time.DEFAULT_TIME_SCALE, False)

    def with_speed_setting(self, value: int) -> 'SimulationClock':
        """
        Applies a speed slider setting. 0 pauses with a zero time scale; other
        settings map exponentially, doubling every `SPEED_SLIDER_DIVISOR` units
        around `SPEED_SLIDER_DEFAULT` (time scale 1.0).
        """
        if value == 0:
            return replace(self, time_scale=0.0, paused=True)
        power = (value - config.Time.SPEED_SLIDER_DEFAULT) / config.Time.SPEED_SLIDER_DIVISOR
        return replace(self, time_scale=2.0 ** power, paused=False)

    def describe(self) -> str:
        state = "PAUSED" if self.paused else f"x{self.time_scale:.3g}"
        return f"{self.date:%Y-%m-%d %H:%M:%S} UTC ({state})"
