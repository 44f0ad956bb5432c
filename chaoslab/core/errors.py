"""Error kinds raised by the simulation core."""

from typing import Any, Dict, Optional


class ChaosLabError(Exception):
    """
    Base class for recoverable simulation errors.
    None of them is fatal: reset or re-initialize the session to recover.
    """

    kind = "error"

    def __init__(self, message: str, detail: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = dict(detail or {})

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Payload for a UI collaborator (failure notice)."""
        return {"error": self.kind, "message": self.message, **self.detail}


class InvalidSystem(ChaosLabError, KeyError):
    """Unknown system key passed to initialize/selection."""

    kind = "invalid_system"


class InvalidConfiguration(ChaosLabError, ValueError):
    """Malformed or unrecognized load/share payload."""

    kind = "invalid_configuration"


class NumericalInstability(ChaosLabError, ArithmeticError):
    """Non-finite state or singular denominator during integration."""

    kind = "numerical_instability"
