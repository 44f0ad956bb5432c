"""Named state components (name, unit, description)."""

from dataclasses import dataclass
from typing import Sequence, Tuple


@dataclass(frozen=True)
class SignalSpec:
    """Specification of one scalar state component."""

    name: str
    unit: str = ""
    description: str = ""


def signal_names(specs: Sequence[SignalSpec]) -> Tuple[str, ...]:
    """Names of a sequence of specs, in order."""
    return tuple(s.name for s in specs)
