"""
██╗     ███████╗███████╗████████╗ ██████╗
██║     ██╔════╝██╔════╝╚══██╔══╝██╔═══██╗
██║     █████╗  █████╗     ██║   ██║   ██║
██║     ██╔══╝  ██╔══╝     ██║   ██║   ██║
███████╗███████╗███████╗   ██║   ╚██████╔╝
╚══════╝╚══════╝╚══════╝   ╚═╝    ╚═════╝

███╗   ███╗ █████╗ ████████╗██╗ ██████╗
████╗ ████║██╔══██╗╚══██╔══╝██║██╔════╝
██╔████╔██║███████║   ██║   ██║██║
██║╚██╔╝██║██╔══██║   ██║   ██║██║
██║ ╚═╝ ██║██║  ██║   ██║   ██║╚██████╗
╚═╝     ╚═╝╚═╝  ╚═╝   ╚═╝   ╚═╝ ╚═════╝
src/leetomatic/utils/logger.py
Layered logging helpers for Leetomatic.

Every stage logs through the ``leetomatic`` logger. Console output is
decorated per layer (step, progress, success, debug); an optional log file
receives timestamped records. The console level comes from ``LOG_PROFILE``
(quiet/user/debug) or ``LOG_LEVEL``; ``NO_COLOR`` disables ANSI styling and
``LOG_FILE`` adds the file handler. Call ``configure_logging()`` once the
``.env`` file has been loaded so values defined there take effect.

Adapted from the layered logger of the always-attend project.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

__all__ = [
    "logger",
    "step",
    "progress",
    "success",
    "debug_detail",
    "get_logger",
    "set_log_profile",
    "configure_logging",
]

# ---------------------------------------------------------------------------
# Palette and helpers

_PALETTE: Dict[str, str] = {
    "reset": "\033[0m",
    "dim": "\033[2m",
    "bold": "\033[1m",
    "blue": "\033[34m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "red": "\033[31m",
    "cyan": "\033[36m",
    "magenta": "\033[35m",
}

LOG_PROFILE = (os.getenv("LOG_PROFILE") or "user").lower()
LOG_FILE = os.getenv("LOG_FILE")
NO_COLOR = os.getenv("NO_COLOR") is not None
LOG_LEVEL_OVERRIDE = os.getenv("LOG_LEVEL")

_PROFILE_LEVELS = {
    "quiet": logging.WARNING,
    "debug": logging.DEBUG,
    "verbose": logging.DEBUG,
    "user": logging.INFO,
}


def _apply_color(text: str, *styles: str) -> str:
    if NO_COLOR or not styles:
        return text
    colors = "".join(_PALETTE.get(style, "") for style in styles)
    return f"{colors}{text}{_PALETTE['reset']}"


# ---------------------------------------------------------------------------
# Formatter and adapter


class LayeredFormatter(logging.Formatter):
    """Formatter that decorates output based on the record.layer attribute."""

    LAYER_MAPPINGS: Dict[str, Dict[str, Any]] = {
        "step": {"icon": "▶", "style": ("blue", "bold")},
        "progress": {"icon": "…", "style": ("cyan",)},
        "success": {"icon": "✓", "style": ("green", "bold")},
        "warning": {"icon": "!", "style": ("yellow", "bold")},
        "error": {"icon": "✗", "style": ("red", "bold")},
        "debug": {"icon": "·", "style": ("magenta",)},
        "user": {"icon": "•", "style": ()},
    }

    def format(self, record: logging.LogRecord) -> str:
        layer = getattr(record, "layer", "user")
        mapping = self.LAYER_MAPPINGS.get(layer, self.LAYER_MAPPINGS["user"])
        message = super().format(record)
        if layer == "debug":
            return f"{_apply_color('[debug]', 'dim')} {message}"
        prefix = _apply_color(mapping["icon"], *mapping["style"])
        return f"{prefix} {message}"


class LayeredAdapter(logging.LoggerAdapter):
    """Logger adapter that injects a 'layer' extra value."""

    def __init__(self, logger: logging.Logger, default_layer: str = "user"):
        super().__init__(logger, {"layer": default_layer})

    def log(self, level: int, msg: Any, *args, layer: Optional[str] = None, **kwargs) -> None:
        if not self.isEnabledFor(level):
            return
        extra = kwargs.setdefault("extra", {})
        extra.setdefault("layer", layer or self.extra.get("layer", "user"))
        self.logger.log(level, msg, *args, **kwargs)

    def warning(self, msg: Any, *args, **kwargs) -> None:  # type: ignore[override]
        kwargs.setdefault("layer", "warning")
        super().warning(msg, *args, **kwargs)

    def error(self, msg: Any, *args, **kwargs) -> None:  # type: ignore[override]
        kwargs.setdefault("layer", "error")
        super().error(msg, *args, **kwargs)

    def exception(self, msg: Any, *args, **kwargs) -> None:  # type: ignore[override]
        kwargs.setdefault("layer", "error")
        super().exception(msg, *args, **kwargs)


# ---------------------------------------------------------------------------
# Configuration


def _console_level() -> int:
    level = _PROFILE_LEVELS.get(LOG_PROFILE, logging.INFO)
    if LOG_LEVEL_OVERRIDE:
        override = getattr(logging, LOG_LEVEL_OVERRIDE.upper(), None)
        if isinstance(override, int):
            level = override
    return level


def _attach_file_handler(base_logger: logging.Logger, path: str) -> None:
    target = os.path.abspath(path)
    for handler in base_logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == target:
            return
    try:
        file_handler = logging.FileHandler(path, encoding="utf-8")
    except OSError as exc:
        base_logger.warning("Failed to configure logfile '%s': %s", path, exc)
        return
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    file_handler.setLevel(logging.DEBUG)
    base_logger.addHandler(file_handler)


def _set_console_level(base_logger: logging.Logger, level: int) -> None:
    for handler in base_logger.handlers:
        if type(handler) is logging.StreamHandler:
            handler.setLevel(level)


def _configure_base_logger() -> LayeredAdapter:
    base_logger = logging.getLogger("leetomatic")
    if base_logger.handlers:
        return LayeredAdapter(base_logger)

    base_logger.setLevel(logging.DEBUG)
    base_logger.propagate = False

    console_handler = logging.StreamHandler()
    console_handler.setLevel(_console_level())
    console_handler.setFormatter(LayeredFormatter("%(message)s"))
    base_logger.addHandler(console_handler)

    if LOG_FILE:
        _attach_file_handler(base_logger, LOG_FILE)

    return LayeredAdapter(base_logger)


logger = _configure_base_logger()


# ---------------------------------------------------------------------------
# Public helpers


def step(message: str) -> None:
    """Log a major step in the workflow."""
    logger.log(logging.INFO, message, layer="step")


def progress(message: str) -> None:
    """Log a short-lived progress update."""
    logger.log(logging.INFO, message, layer="progress")


def success(message: str) -> None:
    """Log successful completion of an action."""
    logger.log(logging.INFO, message, layer="success")


def debug_detail(message: str) -> None:
    """Log detailed debug information (hidden unless LOG_PROFILE=debug)."""
    logger.log(logging.DEBUG, message, layer="debug")


def get_logger(name: str, *, layer: str = "user") -> LayeredAdapter:
    """Return a child logger using the layered formatting."""
    child = logging.getLogger(f"leetomatic.{name}")
    return LayeredAdapter(child, default_layer=layer)


def set_log_profile(profile: str) -> None:
    """Adjust console logging verbosity at runtime."""
    global LOG_PROFILE
    profile = (profile or "user").lower()
    level = _PROFILE_LEVELS.get(profile, logging.INFO)

    _set_console_level(logging.getLogger("leetomatic"), level)

    LOG_PROFILE = profile
    os.environ["LOG_PROFILE"] = profile


def configure_logging() -> None:
    """Re-read the logging environment and apply it to the existing handlers.

    The module configures itself on import, which happens before ``.env`` is
    loaded; the CLI calls this afterwards.
    """
    global LOG_PROFILE, LOG_FILE, NO_COLOR, LOG_LEVEL_OVERRIDE
    LOG_PROFILE = (os.getenv("LOG_PROFILE") or "user").lower()
    LOG_FILE = os.getenv("LOG_FILE")
    NO_COLOR = os.getenv("NO_COLOR") is not None
    LOG_LEVEL_OVERRIDE = os.getenv("LOG_LEVEL")

    base_logger = logging.getLogger("leetomatic")
    _set_console_level(base_logger, _console_level())
    if LOG_FILE:
        _attach_file_handler(base_logger, LOG_FILE)
