"""
logging_utils.py
----------------

Colourised console + rotating file logging for pattern runs.
"""

__all__ = ["configure_logging", "ColorFormatter"]

import os
import time
import logging
from typing import Optional, Union
from logging.handlers import RotatingFileHandler
from pathlib import Path

from colorama import Fore, Style, just_fix_windows_console

PathLike = Union[str, os.PathLike]

MONO_FMT = "[%(asctime)s] [%(process)5d] [%(levelname)-5s] [%(name)s] %(message)s"
DATE_FMT = "%H:%M:%S"
MAX_LOG_BYTES = 5_000_000
LOG_BACKUPS = 5


class ColorFormatter(logging.Formatter):
    """Console formatter colouring the level name."""
    COLORS = {
        "DEBUG":    Fore.CYAN,
        "INFO":     Fore.GREEN,
        "WARNING":  Fore.YELLOW,
        "ERROR":    Fore.RED,
        "CRITICAL": Fore.RED + Style.BRIGHT,
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        reset = Style.RESET_ALL
        return (
            f"[{self.formatTime(record, self.datefmt)}] "
            f"[{record.process:5d}] "
            f"[{color}{record.levelname:<5s}{reset}] "
            f"[{record.name}] "
            f"{record.getMessage()}"
        )


def configure_logging(level: int = logging.INFO,
                      log_dir: Optional[PathLike] = "logs",
                      name: str = "lowpoly",
                      run_prefix: str = "run") -> Optional[Path]:
    """
    Configure the `name` logger with a colour console handler and, when
    `log_dir` is given, a rotating per-run log file.

    Existing handlers on the logger are replaced, so calling this again
    (e.g. in a pool worker) does not duplicate output.

    Returns:
        Path of the log file, or None when file logging is disabled.
    """
    just_fix_windows_console()

    logger = logging.getLogger(name)
    logger.setLevel(level)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    ch = logging.StreamHandler()
    ch.setFormatter(ColorFormatter(datefmt=DATE_FMT))
    logger.addHandler(ch)

    log_path = None
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        ts = time.strftime("%Y-%m-%d_%H%M%S")
        log_path = log_dir / f"{run_prefix}_PID{os.getpid()}_{ts}.log"
        fh = RotatingFileHandler(log_path, maxBytes=MAX_LOG_BYTES,
                                 backupCount=LOG_BACKUPS, encoding="utf-8")
        fh.setFormatter(logging.Formatter(MONO_FMT, DATE_FMT))
        logger.addHandler(fh)

    logger.info(f"Logging initialized - PID {os.getpid()}; file {log_path}")
    return log_path
