"""Session settings: nominal time step and buffer bounds."""

from dataclasses import asdict, dataclass
from typing import Any, Dict

from chaoslab.core.history import PROJECTION_LENGTH, TIME_SERIES_LENGTH, TRAJECTORY_LENGTH

DEFAULT_DT = 0.01


@dataclass(frozen=True)
class SessionConfig:
    """Fixed settings of a SimulationSession."""

    dt: float = DEFAULT_DT
    trajectory_length: int = TRAJECTORY_LENGTH
    projection_length: int = PROJECTION_LENGTH
    time_series_length: int = TIME_SERIES_LENGTH

    def __post_init__(self) -> None:
        if not self.dt > 0:
            raise ValueError(f"dt must be > 0, got {self.dt}")
        for field in ("trajectory_length", "projection_length", "time_series_length"):
            if getattr(self, field) <= 0:
                raise ValueError(f"{field} must be positive, got {getattr(self, field)}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
