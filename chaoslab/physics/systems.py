"""Registry of the available systems, keyed by selection key and by display name."""

from enum import Enum
from typing import Any, Optional, Type

from chaoslab.core.errors import InvalidSystem
from chaoslab.physics.library import Lorenz, PointAttractor, PointRepeller, Rossler, VanDerPol
from chaoslab.physics.ode import ODEModel
from chaoslab.physics.pendulum import DoublePendulum


class SystemKind(Enum):
    """Every selectable system; the value is the model class."""

    LORENZ = Lorenz
    ROSSLER = Rossler
    VAN_DER_POL = VanDerPol
    POINT_ATTRACTOR = PointAttractor
    POINT_REPELLER = PointRepeller
    DOUBLE_PENDULUM = DoublePendulum

    @property
    def model_cls(self) -> Type[ODEModel]:
        return self.value

    @property
    def key(self) -> str:
        return self.value.key

    @property
    def display_name(self) -> str:
        return self.value.name

    def create(self, integrator: Optional[Any] = None) -> ODEModel:
        return self.value(integrator=integrator)

    @classmethod
    def from_key(cls, key: str) -> "SystemKind":
        for kind in cls:
            if kind.key == key:
                return kind
        raise InvalidSystem(f"Unknown system {key!r}", {"system": key})

    @classmethod
    def from_name(cls, name: str) -> "SystemKind":
        for kind in cls:
            if kind.display_name == name:
                return kind
        raise InvalidSystem(f"No system named {name!r}", {"system": name})


def system_keys() -> list:
    """Selection keys in menu order."""
    return [kind.key for kind in SystemKind]


def get_system(key: str, integrator: Optional[Any] = None) -> ODEModel:
    """New model for a selection key; raises InvalidSystem for an unknown key."""
    return SystemKind.from_key(key).create(integrator=integrator)
