# pathviz/core/config.py
#!/usr/bin/env python3
"""
Run configuration.

Resolution order (later wins):
- defaults below
- ENV: PATHVIZ_ALGO, PATHVIZ_DIAGONALS, PATHVIZ_TRACE, PATHVIZ_HEURISTIC, PATHVIZ_SPEED
- CLI: --algo=, --diagonals=, --trace=, --heuristic=, --speed=
"""

import os
import sys
from dataclasses import dataclass, replace
from typing import Mapping, Optional, Sequence

from pathviz.core.astar import HEURISTICS
from pathviz.core.types import Algorithm

MIN_SPEED = 1
MAX_SPEED = 60

_ENV_KEYS = {
    "PATHVIZ_ALGO": "algo",
    "PATHVIZ_DIAGONALS": "diagonals",
    "PATHVIZ_TRACE": "trace",
    "PATHVIZ_HEURISTIC": "heuristic",
    "PATHVIZ_SPEED": "speed",
}

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


@dataclass(frozen=True)
class RunConfig:
    algorithm: Algorithm = Algorithm.ASTAR
    use_diagonals: bool = False
    record_trace: bool = True
    heuristic: str = "manhattan"
    steps_per_sec: int = 8

    def __post_init__(self):
        if self.heuristic not in HEURISTICS:
            raise ValueError(f"heuristic: expected one of {sorted(HEURISTICS)}, "
                             f"got {self.heuristic!r}")


def _parse_bool(key: str, value: str) -> bool:
    v = value.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ValueError(f"{key}: expected a boolean, got {value!r}")


def _apply(cfg: RunConfig, key: str, value: str) -> RunConfig:
    if key == "algo":
        return replace(cfg, algorithm=Algorithm.parse(value))
    if key == "diagonals":
        return replace(cfg, use_diagonals=_parse_bool(key, value))
    if key == "trace":
        return replace(cfg, record_trace=_parse_bool(key, value))
    if key == "heuristic":
        return replace(cfg, heuristic=value.strip().lower())
    if key == "speed":
        return replace(cfg, steps_per_sec=clamp_speed(int(value)))
    return cfg


def clamp_speed(steps_per_sec: int) -> int:
    return int(max(MIN_SPEED, min(MAX_SPEED, steps_per_sec)))


def resolve_config(environ: Optional[Mapping[str, str]] = None,
                   argv: Optional[Sequence[str]] = None) -> RunConfig:
    environ = os.environ if environ is None else environ
    argv = sys.argv[1:] if argv is None else argv

    cfg = RunConfig()
    for env_key, key in _ENV_KEYS.items():
        if env_key in environ:
            cfg = _apply(cfg, key, environ[env_key])
    for arg in argv:
        if arg.startswith("--") and "=" in arg:
            key, value = arg[2:].split("=", 1)
            cfg = _apply(cfg, key.lower(), value)
    return cfg
