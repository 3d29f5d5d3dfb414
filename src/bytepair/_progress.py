"""Global switch for training progress logging."""

import os

ENV_DISABLE_PROGRESS = "BYTEPAIR_DISABLE_PROGRESS"

_enabled: bool = True


def enable_progress() -> None:
    """Enable progress logging for all bytepair operations."""
    global _enabled
    _enabled = True


def disable_progress() -> None:
    """Disable progress logging for all bytepair operations."""
    global _enabled
    _enabled = False


def is_progress_enabled() -> bool:
    """Check if progress is enabled (respects env var override)."""
    if os.environ.get(ENV_DISABLE_PROGRESS, "").strip() == "1":
        return False
    return _enabled
