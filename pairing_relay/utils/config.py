import logging
import os
from dataclasses import dataclass

DEFAULT_PORT = 8080
DEFAULT_HOST = "0.0.0.0"
DEFAULT_RELAY_URL = "ws://localhost:8080"

PING_INTERVAL = 30.0   # seconds between keepalive pings per connection
SWEEP_INTERVAL = 60.0  # seconds between waiting queue sweeps


def get_port(environ=None) -> int:
    environ = os.environ if environ is None else environ
    raw = environ.get("PORT")
    if raw is None or raw.strip() == "":
        return DEFAULT_PORT
    try:
        port = int(raw)
    except ValueError:
        logging.warning(f"Ignoring non-numeric PORT={raw!r}, using {DEFAULT_PORT}")
        return DEFAULT_PORT
    if not (1 <= port <= 65535):
        logging.warning(f"Ignoring out of range PORT={port}, using {DEFAULT_PORT}")
        return DEFAULT_PORT
    return port


def get_log_level(environ=None) -> int:
    environ = os.environ if environ is None else environ
    name = environ.get("RELAY_LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(name)
    # getLevelName returns a "Level X" string for unknown names
    return level if isinstance(level, int) else logging.INFO


def get_relay_url(environ=None) -> str:
    environ = os.environ if environ is None else environ
    return environ.get("RELAY_URL") or DEFAULT_RELAY_URL


@dataclass
class RelayConfig:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    ping_interval: float = PING_INTERVAL
    sweep_interval: float = SWEEP_INTERVAL

    @classmethod
    def from_env(cls, environ=None) -> "RelayConfig":
        environ = os.environ if environ is None else environ
        return cls(
            host=environ.get("RELAY_HOST") or DEFAULT_HOST,
            port=get_port(environ),
        )
