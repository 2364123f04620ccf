"""Environment helpers with optional Docker secret file support."""

from __future__ import annotations

from pathlib import Path
import os


def get_env(name: str, default: str = "") -> str:
    """Resolve environment value with optional *_FILE fallback."""
    value = os.getenv(name)
    if value is not None and value.strip() != "":
        return value.strip()

    file_path = (os.getenv(f"{name}_FILE") or "").strip()
    if file_path:
        try:
            secret = Path(file_path).read_text(encoding="utf-8").strip()
            if secret:
                return secret
        except OSError:
            return default

    return default


def get_first_env(*names: str, default: str = "") -> str:
    """Return the first non-empty value among *names*, in order."""
    for name in names:
        value = get_env(name)
        if value:
            return value
    return default


def env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


def env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)
