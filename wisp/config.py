from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, List, Optional


def _sep() -> str:
    return ';' if os.name == 'nt' else ':'


# Defaults
_DEFAULT_INCLUDE_DIRS: list[Path] = []
_DEFAULT_PROMPT = '>>> '


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    sep = _sep()
    return [Path(p.strip()) for p in raw.split(sep) if p.strip()]


def get_include_roots() -> List[Path]:
    return paths_from_env('WISP_INCLUDE_PATH', _DEFAULT_INCLUDE_DIRS)


def get_prompt() -> str:
    return os.environ.get('WISP_PROMPT', _DEFAULT_PROMPT)


def get_recursion_limit() -> Optional[int]:
    raw = os.environ.get('WISP_RECURSION_LIMIT', '').strip()
    if not raw:
        return None
    try:
        limit = int(raw)
    except ValueError:
        raise ValueError(f"WISP_RECURSION_LIMIT must be an integer, got {raw!r}")
    return limit if limit > 0 else None


def resolve_include(filename: str) -> Path:
    """Locate a file for `include`: as given first, then under each include root."""
    candidate = Path(filename)
    if candidate.is_absolute() or candidate.is_file():
        return candidate
    for root in get_include_roots():
        p = root / filename
        if p.is_file():
            return p
    return candidate


def get_random_seed() -> Optional[int]:
    raw = os.environ.get('WISP_RANDOM_SEED', '').strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"WISP_RANDOM_SEED must be an integer, got {raw!r}")
