"""Console logging for interpreter sessions.

Messages go to stdout through ``print`` with an optional elapsed-time stamp
and, on a TTY, a coloured level tag. Levels below the logger's threshold are
dropped; a threshold of ``"CRITICAL"`` silences the interpreter entirely since
it never logs at that level.
"""

import time
import sys

LEVELS = {"DEBUG": 0, "INFO": 1, "ERROR": 2, "CRITICAL": 3}

_COLORS = {"DEBUG": "\033[36m", "INFO": "\033[32m", "ERROR": "\033[31m"}
_RESET = "\033[0m"


class ConsoleLogger:
    """Leveled console logger."""

    def __init__(
        self,
        name: str = "chip8vm",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
    ):
        self.name = name
        self.log_level = log_level.upper()
        if self.log_level not in LEVELS:
            raise ValueError(f"Unknown log level: {log_level}. Available: {list(LEVELS)}")
        self.use_colors = use_colors and hasattr(sys.stdout, "isatty") and sys.stdout.isatty()
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

    def _format_message(self, level: str, message: str) -> str:
        timestamp = f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        level_str = f"[{level:>8s}]"
        if self.use_colors:
            level_str = f"{_COLORS.get(level, '')}{level_str}{_RESET}"
        return f"{timestamp}{level_str}[{self.name}] {message}"

    def log(self, level: str, message: str):
        """Print ``message`` if ``level`` reaches the logger's threshold."""
        if LEVELS[level] >= LEVELS[self.log_level]:
            print(self._format_message(level, message), flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def error(self, message: str):
        self.log("ERROR", message)


class InterpreterLogger(ConsoleLogger):
    """Logger with helpers for interpreter lifecycle events.

    Silent by default: faults are raised to the host anyway. Pass
    ``log_level="ERROR"`` to also print them, or ``"DEBUG"`` to trace loads
    and key waits.
    """

    def __init__(self, name: str = "chip8vm", log_level: str = "CRITICAL", **kwargs):
        super().__init__(name, log_level=log_level, **kwargs)

    def log_rom_loaded(self, size: int, quirks):
        self.info(f"Loaded ROM ({size} bytes) with quirks {quirks}")

    def log_key_wait(self, register: int, pc: int):
        self.debug(f"Waiting for key into V{register:X} at {pc:#05x}")

    def log_fault(self, error: Exception, pc: int):
        self.error(f"{type(error).__name__} at {pc:#05x}: {error}")
