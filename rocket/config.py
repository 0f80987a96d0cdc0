from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, List

from rocket import __version__


# Defaults
_DEFAULT_MAX_DEPTH = 64


def paths_from_env(var: str, defaults: Iterable[Path] = ()) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    return [Path(p.strip()) for p in raw.split(os.pathsep) if p.strip()]


def get_include_roots() -> List[Path]:
    return paths_from_env('ROCKET_INCLUDE_PATH')


def get_max_depth() -> int:
    raw = os.environ.get('ROCKET_MAX_DEPTH')
    if not raw:
        return _DEFAULT_MAX_DEPTH
    try:
        depth = int(raw)
    except ValueError:
        raise ValueError(f"ROCKET_MAX_DEPTH must be an integer, got {raw!r}") from None
    if depth < 1:
        raise ValueError(f"ROCKET_MAX_DEPTH must be positive, got {depth}")
    return depth


def get_version() -> str:
    # default version provider for (:version)
    return os.environ.get('ROCKET_VERSION') or __version__
