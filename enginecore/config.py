"""Parser for the sectioned ``key = value`` application configuration file."""

from __future__ import annotations

import logging
import math
import os
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Union

logger = logging.getLogger(__name__)

PluginValue = Union[int, float, str]

_WHITESPACE = " \t\n\v\f\r"
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_ULONG_MAX = 2**64 - 1

_INT_RE = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)", re.ASCII)
_FLOAT_RE = re.compile(
    r"""
    [ \t\n\v\f\r]*
    (?P<num>[+-]?
      (?:
        0x(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(?:p[+-]?[0-9]+)?
      | (?P<mant>[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?
      | inf(?:inity)?
      | nan(?:\([0-9a-z_]*\))?
      )
    )
    """,
    re.ASCII | re.IGNORECASE | re.VERBOSE,
)


class _RangeError(ValueError):
    """A number was recognised but does not fit the target type."""


def _to_int(text: str) -> int:
    """Read a leading signed 32-bit integer, ignoring anything after it."""
    match = _INT_RE.match(text)
    if match is None:
        raise ValueError(f"invalid integer: {text!r}")
    value = int(match.group(1))
    if not _INT_MIN <= value <= _INT_MAX:
        raise _RangeError(f"integer out of range: {text!r}")
    return value


def _to_unsigned(text: str) -> int:
    """Read a leading unsigned 64-bit integer; a minus sign wraps around."""
    match = _INT_RE.match(text)
    if match is None:
        raise ValueError(f"invalid unsigned integer: {text!r}")
    digits = match.group(1)
    magnitude = int(digits.lstrip("+-"))
    if magnitude > _ULONG_MAX:
        raise _RangeError(f"unsigned integer out of range: {text!r}")
    if digits.startswith("-"):
        return (-magnitude) % (_ULONG_MAX + 1)
    return magnitude


def _to_float(text: str) -> float:
    """Read a leading floating point number, ignoring anything after it."""
    match = _FLOAT_RE.match(text)
    if match is None:
        raise ValueError(f"invalid number: {text!r}")
    num = match.group("num")
    body = num.lstrip("+-").lower()
    negative = num.startswith("-")
    if body.startswith("0x"):
        try:
            return float.fromhex(num)
        except OverflowError as exc:
            raise _RangeError(f"number out of range: {text!r}") from exc
    if body.startswith("nan"):
        return float("nan")
    if body.startswith("inf"):
        return float("-inf") if negative else float("inf")
    value = float(num)
    if math.isinf(value):
        raise _RangeError(f"number out of range: {text!r}")
    if value == 0.0 and any(ch in "123456789" for ch in match.group("mant")):
        raise _RangeError(f"number out of range: {text!r}")
    return value


def _guess_plugin_value(text: str) -> PluginValue:
    """Interpret a plugin value as a float, then an int, then plain text."""
    try:
        return _to_float(text)
    except ValueError:
        pass
    try:
        return _to_int(text)
    except ValueError:
        return text


_CORE_FIELDS = {
    "log_file_path": str,
    "log_level": _to_int,
    "worker_threads": _to_unsigned,
    "memory_pool_size_mb": _to_unsigned,
    "simulation_timestep": _to_float,
}


@dataclass
class AppConfig:
    """Parsed application configuration."""

    is_valid: bool = False
    log_file_path: str = "/var/log/app.log"
    log_level: int = 2  # 0=Debug, 1=Info, 2=Warn, 3=Error
    worker_threads: int = 4
    memory_pool_size_mb: int = 256
    simulation_timestep: float = 0.016
    plugin_settings: dict[str, PluginValue] = field(default_factory=dict)


class ConfigParser:
    """Reads ``key = value`` lines grouped under ``[Core]`` and ``[Plugins]``.

    Lines starting with ``#`` are comments. Lines before any section header
    belong to ``Core``.
    """

    def parse(self, file_path: str | os.PathLike[str]) -> AppConfig:
        """Parse the file at *file_path*; an unreadable file gives an invalid config."""
        try:
            with open(file_path, encoding="utf-8", errors="surrogateescape", newline="") as fh:
                content = fh.read()
        except OSError:
            logger.error("Could not open config file: %s", file_path)
            return AppConfig(is_valid=False)
        return self.parse_lines(content.split("\n"))

    def parse_lines(self, lines: Iterable[str]) -> AppConfig:
        """Parse configuration lines and return a valid config."""
        config = AppConfig()
        section = "Core"
        for line in lines:
            section = self._process_line(line, config, section)
        config.is_valid = True
        return config

    def _process_line(self, line: str, config: AppConfig, section: str) -> str:
        text = line.strip(_WHITESPACE)
        if not text or text.startswith("#"):
            return section

        if len(text) >= 2 and text.startswith("[") and text.endswith("]"):
            return text[1:-1]

        key, sep, value = text.partition("=")
        if not sep:
            logger.warning("Malformed line in config: %s", line)
            return section

        key = key.strip(_WHITESPACE)
        value = value.strip(_WHITESPACE)

        if section == "Core":
            convert = _CORE_FIELDS.get(key)
            if convert is not None:
                setattr(config, key, convert(value))
        elif section == "Plugins":
            config.plugin_settings[key] = _guess_plugin_value(value)
        return section