"""Settings of the HAL simulation server, read from its configuration."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, TypeVar

T = TypeVar("T")

DEFAULT_CONFIG_FILE = "halserver.cfg"


class LogBit(enum.IntFlag):
    """Optional message dumps the server can log."""

    DUMP_MSG_RAW = 1 << 0
    DUMP_MSG_PROTO = 1 << 1
    DUMP_MSG_SOCK = 1 << 2


_LOG_BITS_BY_NAME = {f"LB_{bit.name}": bit for bit in LogBit}


def parse_log_bits(spec: str) -> LogBit:
    """Combine the comma-separated ``LB_*`` names in ``spec``; unknown names are ignored."""
    bits = LogBit(0)
    for name in spec.split(","):
        bit = _LOG_BITS_BY_NAME.get(name.strip(" "))
        if bit is not None:
            bits |= bit
    return bits


def get_config(
    config: Mapping[str, str], name: str, convert: Callable[[str], T]
) -> Optional[T]:
    """Look ``name`` up, letting a ``--name`` entry override it; None when absent."""
    for key in (f"--{name}", name):
        if key in config:
            return convert(config[key])
    return None


def _unsigned(text: str) -> int:
    value = int(text)
    if value < 0:
        raise ValueError(f"expected an unsigned integer, got {text!r}")
    return value


@dataclass(frozen=True)
class ServerSettings:
    """What the server takes from its configuration."""

    config_file: str = DEFAULT_CONFIG_FILE
    log_bits: LogBit = LogBit(0)
    logful: bool = False
    log_level: Optional[int] = None


def settings_from_config(config: Mapping[str, str]) -> ServerSettings:
    """Derive the server settings from configuration entries."""
    config_file = config.get("--config", DEFAULT_CONFIG_FILE)
    log_bits = parse_log_bits(get_config(config, "log.bit", str) or "")
    logful = (get_config(config, "log.ful", _unsigned) or 0) != 0
    log_level = get_config(config, "log.level", _unsigned)
    return ServerSettings(
        config_file=config_file,
        log_bits=log_bits,
        logful=logful,
        log_level=log_level,
    )