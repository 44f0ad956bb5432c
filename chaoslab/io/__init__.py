"""Configuration files and shareable tokens."""

from chaoslab.io.serializers import (
    apply_config,
    config_from_session,
    config_from_url,
    decode_share_token,
    encode_share_token,
    load_config,
    load_session,
    load_shared,
    save_config,
    save_session,
    share_url,
)

__all__ = [
    "config_from_session",
    "apply_config",
    "save_config",
    "load_config",
    "save_session",
    "load_session",
    "encode_share_token",
    "decode_share_token",
    "share_url",
    "config_from_url",
    "load_shared",
]
