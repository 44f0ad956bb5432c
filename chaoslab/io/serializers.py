"""Save, load and share session configurations ({system, parameters, state})."""

import base64
import binascii
import json
import logging
import math
from numbers import Real
from pathlib import Path
from typing import Any, Dict, List, Union
from urllib.parse import parse_qs, urlsplit

import numpy as np

from chaoslab.core.errors import InvalidConfiguration, InvalidSystem
from chaoslab.physics.systems import SystemKind

logger = logging.getLogger(__name__)

SHARE_PARAM = "config"


def _convert(d: Any) -> Any:
    """Convert numpy values to plain Python for JSON."""
    if isinstance(d, np.ndarray):
        return d.tolist()
    if isinstance(d, dict):
        return {k: _convert(v) for k, v in d.items()}
    if isinstance(d, (list, tuple)):
        return [_convert(x) for x in d]
    if isinstance(d, (np.floating, np.integer)):
        return float(d) if isinstance(d, np.floating) else int(d)
    return d


def _is_number(v: Any) -> bool:
    if not isinstance(v, Real) or isinstance(v, bool):
        return False
    try:
        return math.isfinite(float(v))
    except OverflowError:
        return False


def config_from_session(session: Any) -> Dict[str, Any]:
    """Configuration of the active system: display name, parameters, state."""
    return {
        "system": session.system.name,
        "parameters": _convert(session.get_parameters()),
        "state": _convert(session.get_state()),
    }


def validate_config(config: Any) -> SystemKind:
    """
    Checks a configuration object and returns the system it names.
    Raises InvalidConfiguration on any problem.
    """
    if not isinstance(config, dict):
        raise InvalidConfiguration("Configuration must be a JSON object")
    missing = [k for k in ("system", "parameters", "state") if k not in config]
    if missing:
        raise InvalidConfiguration(f"Configuration is missing {', '.join(missing)}", {"missing": missing})
    try:
        kind = SystemKind.from_name(config["system"])
    except InvalidSystem as exc:
        raise InvalidConfiguration(f"Invalid system in configuration: {config['system']!r}") from exc

    params = config["parameters"]
    if not isinstance(params, dict) or not all(
        isinstance(k, str) and _is_number(v) for k, v in params.items()
    ):
        raise InvalidConfiguration("Parameters must be a flat mapping of finite numbers")
    state = config["state"]
    if not isinstance(state, list) or not all(_is_number(v) for v in state):
        raise InvalidConfiguration("State must be a list of finite numbers")
    dim = len(kind.model_cls.default_state)
    if len(state) != dim:
        raise InvalidConfiguration(
            f"{kind.display_name} expects a state of dimension {dim}, got {len(state)}",
            {"expected": dim, "got": len(state)},
        )
    return kind


def apply_config(session: Any, config: Any) -> None:
    """
    Loads a configuration into a session: switches system, sets parameters and state,
    clears the buffers. Nothing is changed if the configuration is invalid.
    """
    kind = validate_config(config)
    session.initialize(kind.key)
    session.set_parameters(config["parameters"])
    session.reset()
    session.set_state(config["state"])
    logger.info("Loaded configuration for %s", kind.display_name)


def save_config(config: Dict[str, Any], path: Union[str, Path]) -> None:
    """
    Save a configuration (dict) to JSON.
    Numpy arrays are converted to lists; floats keep full precision.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(_convert(config), f, indent=2, ensure_ascii=False)


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a configuration from JSON. Unreadable or malformed files raise InvalidConfiguration."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, RecursionError) as exc:
        logger.warning("Could not read configuration %s: %s", path, exc)
        raise InvalidConfiguration(f"Error loading configuration file {path.name}") from exc


def default_filename(session: Any) -> str:
    """e.g. 'lorenz attractor_config.json', lower-cased display name."""
    return f"{session.system.name.lower()}_config.json"


def save_session(session: Any, path: Union[str, Path]) -> Path:
    """Writes the session configuration; a directory path gets default_filename()."""
    path = Path(path)
    if path.is_dir():
        path = path / default_filename(session)
    save_config(config_from_session(session), path)
    return path


def load_session(session: Any, path: Union[str, Path]) -> None:
    """Reads a configuration file and applies it to the session."""
    config = load_config(path)
    try:
        apply_config(session, config)
    except InvalidConfiguration as exc:
        logger.warning("Rejected configuration %s: %s", path, exc)
        raise


def encode_share_token(config: Dict[str, Any]) -> str:
    """Configuration as a URL-safe base64 token of its compact JSON."""
    raw = json.dumps(_convert(config), separators=(",", ":"), ensure_ascii=False)
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii")


def decode_share_token(token: str) -> Dict[str, Any]:
    """
    Inverse of encode_share_token. Accepts standard or URL-safe base64, padded or not.
    Any decoding problem raises InvalidConfiguration.
    """
    if not isinstance(token, str) or not token.strip():
        raise InvalidConfiguration("Empty share token")
    text = token.strip().replace("+", "-").replace("/", "_")
    text += "=" * (-len(text) % 4)
    try:
        raw = base64.b64decode(text, altchars=b"-_", validate=True)
        config = json.loads(raw.decode("utf-8"))
    except (binascii.Error, ValueError, RecursionError) as exc:
        logger.debug("Malformed share token %r: %s", token[:32], exc)
        raise InvalidConfiguration("Malformed share token") from exc
    if not isinstance(config, dict):
        raise InvalidConfiguration("Share token does not contain a configuration object")
    return config


def share_url(base_url: str, config: Dict[str, Any]) -> str:
    """<base_url without query>?config=<token>."""
    return f"{base_url.split('?')[0]}?{SHARE_PARAM}={encode_share_token(config)}"


def config_from_url(url: str) -> Dict[str, Any]:
    """Decodes the configuration carried by a shared URL."""
    values: List[str] = parse_qs(urlsplit(url).query).get(SHARE_PARAM, [])
    if not values:
        raise InvalidConfiguration(f"URL has no {SHARE_PARAM!r} parameter")
    return decode_share_token(values[0])


def load_shared(session: Any, token: str) -> None:
    """Applies a share token to the session."""
    apply_config(session, decode_share_token(token))
