"""Colored command logger: ANSI-colored console output for command dispatch.

Each dispatch passes through a fixed sequence of stages; giving every stage
its own color makes a single command easy to follow in a busy terminal.

Color scheme:
    🔵 Blue   : Vocabulary lookup
    🟣 Magenta: Model call
    🟡 Yellow : Function execution
    🟢 Green  : Classified result
    🔴 Red    : Errors
    ⚪ Gray   : Details / timing
"""

import logging
import time
from contextlib import contextmanager
from typing import Any


class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    GRAY = "\033[90m"


class CommandStage:
    """Dispatch stages as (label, color, icon) triples."""

    VOCABULARY = ("VOCABULARY", _Colors.BLUE, "📚")
    MODEL = ("MODEL", _Colors.MAGENTA, "🤖")
    FUNCTION = ("FUNCTION", _Colors.YELLOW, "🛠️")
    RESULT = ("RESULT", _Colors.GREEN, "✅")
    ERROR = ("ERROR", _Colors.RED, "❌")


def _format_kwargs(kwargs: dict[str, Any], color: str) -> str:
    if not kwargs:
        return ""
    details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
    return f" {color}({details}){_Colors.RESET}"


class CommandLogger:
    """Color-coded logger for the command dispatcher.

    Usage:
        log = CommandLogger("CommandDispatcher")
        with log.timed_step(CommandStage.VOCABULARY, "Loading teams and skills"):
            ...
        log.detail("teams=4")
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    def step_start(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}"
        )
        self._logger.info(formatted + _format_kwargs(kwargs, _Colors.GRAY))

    def step_complete(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = (
            f"{color}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.GREEN}✓ {message}{_Colors.RESET}"
        )
        self._logger.info(formatted + _format_kwargs(kwargs, _Colors.GRAY))

    def step_error(self, stage: tuple[str, str, str], message: str, error: Exception | None = None) -> None:
        label, _, icon = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    def detail(self, message: str, **kwargs: Any) -> None:
        formatted = f"   {_Colors.GRAY}├─ {message}{_Colors.RESET}"
        self._logger.info(formatted + _format_kwargs(kwargs, _Colors.DIM))

    def separator(self, title: str = "") -> None:
        if title:
            self._logger.info(
                f"{_Colors.GRAY}{'─' * 10} {title} {'─' * max(0, 50 - len(title))}{_Colors.RESET}"
            )
        else:
            self._logger.info(f"{_Colors.GRAY}{'─' * 60}{_Colors.RESET}")

    @contextmanager
    def timed_step(self, stage: tuple[str, str, str], message: str, **kwargs: Any):
        """Log start and end of a stage with its elapsed time; errors are re-raised."""
        self.step_start(stage, message, **kwargs)
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            elapsed = time.perf_counter() - start
            self.step_error(stage, f"{message}, failed after {elapsed:.2f}s", error=e)
            raise
        else:
            elapsed = time.perf_counter() - start
            self.step_complete(stage, f"{message} ({elapsed:.2f}s)")
